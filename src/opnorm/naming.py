"""Identifier and file-name conventions for generated TypeScript clients.

The normaliser never invents names of its own: every identifier it compares
or emits goes through the same helpers the upstream generator uses, so that a
catalog entry called ``"Delete"`` and an upstream operation called
``"Delete"`` both normalise to ``callDelete`` and still match.

Pure helpers:

* :func:`dashize` / :func:`underscore` / :func:`camelize` -- case conversion.
* :func:`sanitize_name` -- strip characters that cannot appear in identifiers.
* :func:`to_operation_id`, :func:`to_var_name`, :func:`to_model_name`,
  :func:`sanitize_tag` -- identifier normalisation.
* :func:`generate_operation_id` -- fallback id for operations declared
  without one.
* :func:`split_import_names` -- expand ``A | B`` union imports.

File-name conventions depend on configuration (kebab naming, package names)
and live on :class:`NamingPolicy`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

RESERVED_WORDS = frozenset({
    "abstract", "await", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "debugger", "default", "delete", "do",
    "double", "else", "enum", "export", "extends", "false", "final",
    "finally", "float", "for", "function", "goto", "if", "implements",
    "import", "in", "instanceof", "int", "interface", "let", "long", "native",
    "new", "null", "package", "private", "protected", "public", "return",
    "short", "static", "super", "switch", "synchronized", "this", "throw",
    "transient", "true", "try", "typeof", "var", "void", "volatile", "while",
    "with", "yield",
    # Locals used inside generated service methods.
    "varLocalPath", "queryParameters", "headerParams", "formParams",
    "useFormData", "varLocalDeferred", "requestOptions",
})

LANGUAGE_PRIMITIVES = frozenset({
    "string", "String", "boolean", "Boolean", "Double", "Integer", "Long",
    "Float", "Object", "Error", "Array", "any", "number", "Date", "Blob",
})

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z])")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_SEPARATOR_RE = re.compile(r"[-_\s./]+")
_INVALID_NAME_RE = re.compile(r"[^a-zA-Z0-9_]")
_INVALID_VAR_RE = re.compile(r"[^\w$]")
_PATH_PARAM_SEGMENT_RE = re.compile(r"/\{[^{]*}")


def is_reserved_word(word: str) -> bool:
    return word in RESERVED_WORDS or word.lower() in RESERVED_WORDS


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def underscore(word: str) -> str:
    """Convert ``CamelCase`` or ``kebab-case`` to ``snake_case``.

    Example::

        >>> underscore("GridApiResponse")
        'grid_api_response'
        >>> underscore("XMLParser")
        'xml_parser'
    """
    result = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", word)
    result = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", result)
    return result.replace("-", "_").lower()


def dashize(word: str) -> str:
    """Convert a name to ``kebab-case``.

    Example::

        >>> dashize("WidgetItem")
        'widget-item'
        >>> dashize("widget item")
        'widget-item'
    """
    return re.sub(r"[_ ]", "-", underscore(word))


def camelize(word: str, lower_first: bool = False) -> str:
    """Join separator-delimited words into ``CamelCase``.

    Each word keeps its existing interior casing; only its first letter is
    upper-cased.  With *lower_first* the very first letter is lower-cased
    instead, which turns an already camelCase name such as ``widgetId`` back
    into itself.

    Example::

        >>> camelize("grid-api-response")
        'GridApiResponse'
        >>> camelize("widget_id", lower_first=True)
        'widgetId'
    """
    parts = [p for p in _WORD_SEPARATOR_RE.split(word) if p]
    result = "".join(p[0].upper() + p[1:] for p in parts)
    if lower_first and result:
        result = result[0].lower() + result[1:]
    return result


def sanitize_name(name: str) -> str:
    """Remove characters that cannot appear in an identifier.

    Dashes, spaces and dots become underscores; everything else outside
    ``[a-zA-Z0-9_]`` is dropped.

    Example::

        >>> sanitize_name("widget-item.list")
        'widget_item_list'
        >>> sanitize_name("price($)")
        'price'
    """
    if not name:
        return name
    result = re.sub(r"[-\s.]", "_", name)
    return _INVALID_NAME_RE.sub("", result)


# ---------------------------------------------------------------------------
# Identifier normalisation
# ---------------------------------------------------------------------------


def to_operation_id(operation_id: str) -> str:
    """Normalise an operation id the way the upstream generator does.

    Reserved words are prefixed with ``call_`` before camelizing so that the
    result is always a legal method name.

    Raises:
        ValueError: If *operation_id* is empty.

    Example::

        >>> to_operation_id("Add")
        'add'
        >>> to_operation_id("Delete")
        'callDelete'
    """
    if not operation_id:
        raise ValueError("Empty method/operation name (operationId) not allowed")
    if is_reserved_word(operation_id):
        renamed = camelize("call_" + operation_id, lower_first=True)
        logger.debug("%s (reserved word) cannot be used as method name. Renamed to %s", operation_id, renamed)
        return renamed
    return camelize(sanitize_name(operation_id), lower_first=True)


def to_var_name(name: str) -> str:
    """Normalise a raw parameter name to the runtime variable name.

    Example::

        >>> to_var_name("widgetId")
        'widgetId'
        >>> to_var_name("widget-id")
        'widgetId'
        >>> to_var_name("new")
        '_new'
        >>> to_var_name("ID")
        'ID'
    """
    result = _INVALID_VAR_RE.sub("_", name)
    if result == "_":
        return "_u"
    if re.fullmatch(r"[A-Z_]*", result):
        return result
    result = camelize(result, lower_first=True)
    if is_reserved_word(result) or re.match(r"\d", result):
        result = f"_{result}"
    return result


def to_model_name(name: str) -> str:
    """Return the class name for a model called *name*.

    Example::

        >>> to_model_name("grid_api_response")
        'GridApiResponse'
        >>> to_model_name("2fa")
        'Model2fa'
    """
    result = sanitize_name(dashize(name))
    if is_reserved_word(result) or re.match(r"\d", result):
        result = "model_" + result
    return camelize(result)


def sanitize_tag(tag: str) -> str:
    """Turn an API tag into a class-name stem (``"pet store"`` -> ``PetStore``)."""
    result = camelize(sanitize_name(dashize(tag)))
    if re.match(r"\d", result):
        result = "Class" + result
    return result


def generate_operation_id(operation_id: str | None, path: str, http_method: str) -> str:
    """Return *operation_id*, or derive one from *path* when it is blank.

    The derived id is the last non-parameter segment of the path, e.g.
    ``GET /Api/widgets/{id}/History`` yields ``History``.
    """
    if operation_id and operation_id.strip():
        return operation_id
    stripped = _PATH_PARAM_SEGMENT_RE.sub("", path)
    segments = [s for s in stripped.split("/") if s]
    generated = sanitize_name(segments[-1]) if segments else ""
    if not generated:
        generated = http_method.lower()
    logger.warning(
        "Empty operationId found for path: %s %s. Renamed to auto-generated operationId: %s",
        http_method, path, generated,
    )
    return generated


def split_import_names(imports: Iterable[str]) -> list[str]:
    """Expand union imports and drop language primitives.

    Example::

        >>> split_import_names(["Widget | Gadget", "string", "Widget"])
        ['Gadget', 'Widget']
    """
    names: set[str] = set()
    for entry in imports:
        for name in entry.split("|"):
            name = name.strip()
            if name and name not in LANGUAGE_PRIMITIVES:
                names.add(name)
    return sorted(names)


# ---------------------------------------------------------------------------
# File-name policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamingPolicy:
    """File-name conventions for generated model and service files.

    Args:
        kebab_file_naming: Use ``dashize`` for file names.  When off, names
            are lower-camel-cased unless they are entirely upper case.
        model_package: Directory that model imports are relative to.
        api_package: Directory that service imports are relative to.
    """

    kebab_file_naming: bool = True
    model_package: str = "model"
    api_package: str = "api"

    def to_model_filename(self, name: str) -> str:
        if self.kebab_file_naming:
            return dashize(name)
        model_name = to_model_name(name)
        if model_name == model_name.upper():
            return model_name
        return camelize(model_name, lower_first=True)

    def to_model_import(self, name: str) -> str:
        return f"{self.model_package}/{self.to_model_filename(name)}"

    def model_name_from_filename(self, filename: str) -> str:
        """Recover a class name from an import path such as ``model/grid-api-response``."""
        prefix = self.model_package + "/"
        if filename.startswith(prefix):
            filename = filename[len(prefix):]
        return camelize(filename)

    def to_api_name(self, name: str) -> str:
        if not name:
            return "DefaultService"
        return name + "Service"

    def to_api_filename(self, name: str) -> str:
        if not name:
            return "default.service"
        if self.kebab_file_naming:
            return dashize(name) + ".service"
        if name == name.upper():
            return name + ".service"
        return camelize(name, lower_first=True) + ".service"

    def to_api_import(self, name: str) -> str:
        return f"{self.api_package}/{self.to_api_filename(name)}"

    def api_filename_from_classname(self, classname: str) -> str:
        """``GridItemService`` -> ``grid-item.service`` (kebab) or ``gridItem.service``."""
        if classname.endswith("Service"):
            classname = classname[: -len("Service")]
        return self.to_api_filename(classname)
