"""Order-independent structural comparison of parameter lists.

Upstream parsers do not guarantee that an operation lists its parameters in
the same order as a canonical signature does, so both sides are sorted into a
single lexical order before they are compared pairwise.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from opnorm.models import Parameter


def _sort_key(param: Parameter) -> tuple[str, str, str, bool]:
    return (
        param.base_name or "",
        param.data_type or "",
        param.data_format or "",
        param.required,
    )


def comparable_params(params: Iterable[Optional[Parameter]]) -> list[Parameter]:
    """Return the named parameters of *params* in comparison order.

    Parameters without a ``base_name`` carry no identity and are dropped
    rather than counted as mismatches.
    """
    named = [p for p in params if p is not None and p.base_name is not None]
    return sorted(named, key=_sort_key)


def param_matches(left: Parameter, right: Parameter) -> bool:
    """Compare the four fields that define a parameter's signature."""
    return (
        left.base_name == right.base_name
        and left.data_type == right.data_type
        and left.required == right.required
        and left.data_format == right.data_format
    )


def params_equal(
    left: Iterable[Optional[Parameter]],
    right: Iterable[Optional[Parameter]],
) -> bool:
    """Return ``True`` if two parameter lists describe the same parameter set.

    Both lists are sorted by ``base_name`` (ties broken by type, format and
    required flag), then compared position by position on ``base_name``,
    ``data_type``, ``required`` and ``data_format``.  The result is symmetric
    and independent of the input order of either list.

    Example::

        >>> a = [Parameter(base_name="b", data_type="number"),
        ...      Parameter(base_name="a", data_type="string")]
        >>> params_equal(a, list(reversed(a)))
        True
    """
    s1 = comparable_params(left)
    s2 = comparable_params(right)
    if len(s1) != len(s2):
        return False
    return all(param_matches(p1, p2) for p1, p2 in zip(s1, s2))
