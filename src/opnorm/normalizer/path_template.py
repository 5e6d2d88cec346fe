"""Rewrite ``{name}`` path templates into interpolation expressions.

``/Api/widgets/{widgetId}/History`` becomes::

    /Api/widgets/${encodeURIComponent(String(widgetId))}/History

The path is scanned once, left to right, by a two-state machine.  Literal
characters are copied through unchanged; the characters between ``{`` and
``}`` are collected, normalised with the variable-name function (so the
expression references the declared parameter's runtime name, not its API
name) and wrapped in the interpolation form.

Nested or empty placeholders, a stray ``}``, and an unterminated ``{`` are
malformed input from the upstream parser and raise
:class:`~opnorm.exceptions.MalformedPathError`.

The rewrite is not idempotent: callers rewrite each operation exactly once.
"""

from __future__ import annotations

import enum
from typing import Callable

from opnorm.exceptions import MalformedPathError
from opnorm.naming import to_var_name

PLACEHOLDER_OPEN = "{"
PLACEHOLDER_CLOSE = "}"
INTERPOLATION = "${{encodeURIComponent(String({name}))}}"


class _State(enum.Enum):
    LITERAL = "literal"
    INSIDE_PLACEHOLDER = "inside_placeholder"


def rewrite_path(path: str, var_name: Callable[[str], str] = to_var_name) -> str:
    """Replace every placeholder in *path* with an interpolation expression.

    Args:
        path: A path template such as ``/items/{id}``.
        var_name: Normaliser applied to each raw placeholder name.

    Returns:
        The rewritten path, e.g. ``/items/${encodeURIComponent(String(id))}``.

    Raises:
        MalformedPathError: If the delimiters are nested or unbalanced,
            or a placeholder is empty.
    """
    state = _State.LITERAL
    output: list[str] = []
    name: list[str] = []
    start = 0

    for position, char in enumerate(path):
        if state is _State.LITERAL:
            if char == PLACEHOLDER_OPEN:
                state = _State.INSIDE_PLACEHOLDER
                start = position
            elif char == PLACEHOLDER_CLOSE:
                raise MalformedPathError(path, position, "'}' without a matching '{'")
            else:
                output.append(char)
        else:
            if char == PLACEHOLDER_CLOSE:
                if not name:
                    raise MalformedPathError(path, start, "empty placeholder")
                output.append(INTERPOLATION.format(name=var_name("".join(name))))
                name.clear()
                state = _State.LITERAL
            elif char == PLACEHOLDER_OPEN:
                raise MalformedPathError(path, position, "nested '{' inside a placeholder")
            else:
                name.append(char)

    if state is _State.INSIDE_PLACEHOLDER:
        raise MalformedPathError(path, start, "'{' is never closed")
    return "".join(output)


def placeholder_names(path: str) -> list[str]:
    """Return the raw placeholder names of a well-formed *path*, in order.

    Raises:
        MalformedPathError: If the delimiters are nested or unbalanced.
    """
    names: list[str] = []

    def _record(raw: str) -> str:
        names.append(raw)
        return raw

    rewrite_path(path, var_name=_record)
    return names
