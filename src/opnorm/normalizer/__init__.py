"""Operation normalisation engine.

This sub-package turns the operation groups produced by an upstream API
parser into records ready for template rendering:

* :mod:`~opnorm.normalizer.params` -- order-independent parameter-set
  comparison.
* :mod:`~opnorm.normalizer.signatures` -- canonical CRUD signatures, the
  default catalog, and the signature matcher.
* :mod:`~opnorm.normalizer.detector` -- whole-group promotion to a generic
  base.
* :mod:`~opnorm.normalizer.path_template` -- ``{name}`` to interpolation
  expression rewriting.
* :mod:`~opnorm.normalizer.imports` -- import resolution and envelope
  pruning for groups and models.
* :mod:`~opnorm.normalizer.pipeline` -- the per-group orchestrator.
"""

from opnorm.normalizer.detector import detect_generic_base
from opnorm.normalizer.path_template import rewrite_path
from opnorm.normalizer.pipeline import OperationNormalizer, decorate_operation
from opnorm.normalizer.signatures import default_catalog, load_catalog, matches

__all__ = [
    "OperationNormalizer",
    "decorate_operation",
    "default_catalog",
    "detect_generic_base",
    "load_catalog",
    "matches",
    "rewrite_path",
]
