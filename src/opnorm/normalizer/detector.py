"""Detect operation groups that collapse into a generic base service.

A group is promoted only when *every* signature of the catalog is matched by
some operation in the group.  Promotion removes the matched operations; the
renderer then emits a class that extends the generic base instead of
hand-written methods for them.

Conditions that are *not* errors:

* **Partial match** -- some signatures unmatched.  The group is left as is.
* **Ambiguous match** -- several operations match one signature.  The first
  in group order wins; later ones stay in the group as ordinary operations.
  "First" depends on the upstream ordering, so the ambiguity is logged.
* **Missing entity type** -- the creation operation has no return type.
  A generic base without an entity type is meaningless, so promotion fails
  closed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from opnorm.models import GenericBaseResult, Operation, SignatureCatalog
from opnorm.normalizer.signatures import matches

logger = logging.getLogger(__name__)


def find_signature_matches(
    operations: Sequence[Operation],
    catalog: SignatureCatalog,
) -> dict[str, int]:
    """Map each catalog signature name to the index of its matching operation.

    Unmatched signatures are absent from the result.  An operation is claimed
    by at most one signature.
    """
    found: dict[str, int] = {}
    claimed: set[int] = set()
    for signature in catalog.signatures:
        for index, operation in enumerate(operations):
            if index in claimed or not matches(signature, operation):
                continue
            if signature.name in found:
                logger.debug(
                    "Operation %r also matches signature %r; keeping the first match %r",
                    operation.operation_id,
                    signature.name,
                    operations[found[signature.name]].operation_id,
                )
                continue
            found[signature.name] = index
            claimed.add(index)
    return found


def derive_entity_name(path: str, api_prefix: str = "/Api", creation_suffix: str = "/Add") -> str:
    """Extract the entity segment from a creation path.

    Example::

        >>> derive_entity_name("/Api/widgets/Add")
        'widgets'
    """
    if api_prefix and path.startswith(api_prefix):
        path = path[len(api_prefix):]
    if creation_suffix and path.endswith(creation_suffix):
        path = path[: -len(creation_suffix)]
    return path.strip("/")


def detect_generic_base(
    operations: Sequence[Operation],
    catalog: SignatureCatalog,
    api_prefix: str = "/Api",
    creation_suffix: str = "/Add",
) -> Optional[GenericBaseResult]:
    """Decide whether *operations* can be promoted to a generic base.

    Args:
        operations: The operations of one group, in upstream order.
        catalog: Canonical signatures to match; every one must be found.
        api_prefix: Prefix stripped from the creation path.
        creation_suffix: Suffix stripped from the creation path.

    Returns:
        A :class:`~opnorm.models.GenericBaseResult` with the matched
        operations removed, or ``None`` when the group is not promoted.
    """
    found = find_signature_matches(operations, catalog)

    missing = [s.name for s in catalog.signatures if s.name not in found]
    if missing:
        if found:
            logger.debug(
                "Partial generic-base match (%d/%d); missing %s",
                len(found), len(catalog.signatures), ", ".join(missing),
            )
        return None

    creation = operations[found[catalog.creation]]
    if not creation.return_type:
        logger.info(
            "Creation operation %r at %s has no return type; not promoting",
            creation.operation_id, creation.path,
        )
        return None

    removed_indexes = set(found.values())
    removed = tuple(op for i, op in enumerate(operations) if i in removed_indexes)
    remaining = tuple(op for i, op in enumerate(operations) if i not in removed_indexes)
    entity_name = derive_entity_name(creation.path, api_prefix, creation_suffix)

    logger.debug(
        "Promoted group to generic base of %s (%s); %d operations remain",
        creation.return_type, entity_name, len(remaining),
    )
    return GenericBaseResult(
        entity_type_name=creation.return_type,
        entity_name=entity_name,
        removed_operations=removed,
        remaining_operations=remaining,
    )
