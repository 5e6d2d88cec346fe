"""Operation normaliser -- the orchestrator over one operation group.

Each group moves through a fixed sequence of stages::

    Start -> Detect -> [Promoted | NotPromoted] -> RewritePaths
          -> ResolveImports -> Emit

* **Detect** runs :func:`~opnorm.normalizer.detector.detect_generic_base`
  and, on promotion, removes the canonical operations.
* **RewritePaths** decorates every surviving operation and rewrites its path
  exactly once.  It sees the final, possibly reduced, operation list.
* **ResolveImports** enriches the group's imports and, for promoted groups,
  prunes envelope types no surviving operation returns.
* **Emit** returns a :class:`~opnorm.models.NormalizedGroup`.

Groups share no state and may be normalised in any order.

Typical usage::

    from opnorm.normalizer import OperationNormalizer

    normalizer = OperationNormalizer()
    result = normalizer.normalize_group(group)
    if result.is_generic_base:
        print(result.generic_type_name, result.generic_entity_name)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from opnorm.models import (
    DecoratedOperation,
    ImportRecord,
    InputDocument,
    ModelImports,
    NormalizedDocument,
    NormalizedGroup,
    NormalizerConfig,
    Operation,
    OperationGroup,
    SchemaModel,
    SignatureCatalog,
)
from opnorm.naming import NamingPolicy, to_operation_id, to_var_name
from opnorm.normalizer.detector import detect_generic_base
from opnorm.normalizer.imports import (
    collect_operation_imports,
    normalize_models,
    prune_envelope_imports,
    resolve_operation_imports,
)
from opnorm.normalizer.path_template import rewrite_path
from opnorm.normalizer.signatures import default_catalog

logger = logging.getLogger(__name__)


def decorate_operation(operation: Operation) -> DecoratedOperation:
    """Build the renderer-facing record for *operation*.

    The HTTP method is lower-cased and the path is rewritten into an
    interpolation template.  The input operation is left untouched.
    """
    data = operation.model_dump()
    data["http_method"] = operation.http_method.lower()
    data["path"] = rewrite_path(operation.path, var_name=to_var_name)
    return DecoratedOperation.model_validate(data)


class OperationNormalizer:
    """Normalise operation groups and models for rendering.

    Args:
        catalog: Canonical signatures a group must fully match to be
            promoted.  Defaults to :func:`~opnorm.normalizer.signatures.default_catalog`.
        config: Naming and path conventions.  Defaults to
            :class:`~opnorm.models.NormalizerConfig` defaults.
    """

    def __init__(
        self,
        catalog: Optional[SignatureCatalog] = None,
        config: Optional[NormalizerConfig] = None,
    ) -> None:
        self.config = config or NormalizerConfig()
        self.catalog = catalog or default_catalog(to_operation_id)
        self.naming = NamingPolicy(
            kebab_file_naming=self.config.kebab_file_naming,
            model_package=self.config.model_package,
            api_package=self.config.api_package,
        )

    def normalize_group(self, group: OperationGroup) -> NormalizedGroup:
        """Run detection, path rewriting and import resolution over one group."""
        operations = list(group.operations)

        # --- Detect ----------------------------------------------------------
        generic = detect_generic_base(
            operations,
            self.catalog,
            api_prefix=self.config.api_path_prefix,
            creation_suffix=self.config.creation_path_suffix,
        )
        surviving = list(generic.remaining_operations) if generic else operations

        # --- RewritePaths ----------------------------------------------------
        decorated = [decorate_operation(op) for op in surviving]

        # --- ResolveImports --------------------------------------------------
        imports = resolve_operation_imports(self._group_imports(group), self.naming)
        if generic is not None:
            imports = prune_envelope_imports(
                imports,
                surviving,
                generic.entity_type_name,
                self.config.envelope_types,
            )

        logger.debug(
            "Normalised %s: %d operations, %d imports, generic=%s",
            group.classname, len(decorated), len(imports), generic is not None,
        )
        return NormalizedGroup(
            classname=group.classname,
            api_filename=self.naming.api_filename_from_classname(group.classname),
            operations=decorated,
            imports=imports,
            generic_base=generic,
        )

    def normalize_groups(self, groups: Iterable[OperationGroup]) -> list[NormalizedGroup]:
        """Normalise each group independently, preserving input order."""
        return [self.normalize_group(group) for group in groups]

    def normalize_models(self, models: Iterable[SchemaModel]) -> list[ModelImports]:
        """Compute the cross-reference imports of every model, aliases included."""
        return normalize_models(models, self.naming)

    def normalize_document(self, document: InputDocument) -> NormalizedDocument:
        """Normalise every group and model of an input document."""
        return NormalizedDocument(
            groups=self.normalize_groups(document.groups),
            models=self.normalize_models(document.models),
        )

    def _group_imports(self, group: OperationGroup) -> list[ImportRecord]:
        """Return the upstream import list, or derive one from the operations.

        The derived list covers every operation of the group, including the
        ones promotion removes, so that pruning sees the same imports the
        upstream generator would have produced.
        """
        if group.imports:
            return list(group.imports)
        return [
            ImportRecord.model_validate({"import": self.naming.to_model_import(name)})
            for name in collect_operation_imports(group.operations)
        ]
