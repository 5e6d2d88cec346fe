"""Resolve and prune the type imports of operation groups and models.

Operation side
    :func:`resolve_operation_imports` enriches the upstream import list with
    the file name and class name the renderer needs.  It never filters.

Generic-base pruning
    After promotion the envelope types (``Datahistory`` and
    ``GridApiResponse``) were only needed by the removed canonical
    operations.  :func:`prune_envelope_imports` drops each of them unless
    the entity type itself is that envelope, or a surviving operation still
    returns it.  Each envelope is decided independently.

Model side
    :func:`resolve_model_imports` lists the types a model references, minus
    itself, paired with their file names.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from opnorm.models import ImportRecord, ModelImport, ModelImports, Operation, SchemaModel
from opnorm.naming import NamingPolicy, split_import_names

logger = logging.getLogger(__name__)

ENVELOPE_TYPES = ("Datahistory", "GridApiResponse")


def resolve_operation_imports(
    imports: Iterable[ImportRecord],
    naming: NamingPolicy,
) -> list[ImportRecord]:
    """Attach ``filename`` and ``classname`` to every import record."""
    resolved = []
    for record in imports:
        filename = record.import_
        resolved.append(
            record.model_copy(
                update={
                    "filename": filename,
                    "classname": naming.model_name_from_filename(filename),
                }
            )
        )
    return resolved


def retained_envelopes(
    surviving: Sequence[Operation],
    entity_type_name: Optional[str],
    envelope_types: Iterable[str] = ENVELOPE_TYPES,
) -> set[str]:
    """Return the envelope types that something in the final output still needs."""
    returned = {op.return_base_type for op in surviving if op.return_base_type}
    return {
        envelope
        for envelope in envelope_types
        if envelope == entity_type_name or envelope in returned
    }


def prune_envelope_imports(
    imports: Sequence[ImportRecord],
    surviving: Sequence[Operation],
    entity_type_name: Optional[str],
    envelope_types: Iterable[str] = ENVELOPE_TYPES,
) -> list[ImportRecord]:
    """Drop envelope imports that no surviving operation requires.

    *imports* must already be resolved (``classname`` set).  Imports that are
    not envelope types are always kept, in their original order.
    """
    envelopes = set(envelope_types)
    keep = retained_envelopes(surviving, entity_type_name, envelopes)
    pruned = []
    for record in imports:
        if record.classname in envelopes and record.classname not in keep:
            logger.debug("Pruning unused envelope import %s", record.classname)
            continue
        pruned.append(record)
    return pruned


def collect_operation_imports(operations: Iterable[Operation]) -> list[str]:
    """Return the sorted type names the given operations reference."""
    names: list[str] = []
    for operation in operations:
        names.extend(operation.imports)
    return split_import_names(names)


def resolve_model_imports(model: SchemaModel, naming: NamingPolicy) -> list[ModelImport]:
    """Return *model*'s cross-references, excluding itself, in name order."""
    return [
        ModelImport(classname=name, filename=naming.to_model_filename(name))
        for name in split_import_names(model.imports)
        if name != model.classname
    ]


def normalize_models(models: Iterable[SchemaModel], naming: NamingPolicy) -> list[ModelImports]:
    """Compute the import list of every model.

    Alias models usually have no imports of their own; those with a
    non-empty import set get the same treatment as regular models.
    """
    return [
        ModelImports(model=model, imports=resolve_model_imports(model, naming))
        for model in models
    ]
