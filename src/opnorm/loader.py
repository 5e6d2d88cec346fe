"""Load operation documents from a URL, local file, or stdin.

The upstream parser hands the normaliser a JSON or YAML document holding
operation groups and models (see :class:`~opnorm.models.InputDocument`).
This module handles all I/O for fetching that document and turning it into
validated models.

The public functions are:

* :func:`load_document` -- Load and parse a JSON/YAML object from any
  supported source.
* :func:`parse_document` -- Validate a raw dict into an
  :class:`~opnorm.models.InputDocument`, filling in missing operation ids.
* :func:`load_input` -- Both of the above.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import yaml
from pydantic import ValidationError

from opnorm.exceptions import InputParseError
from opnorm.models import InputDocument
from opnorm.naming import generate_operation_id, to_operation_id


def load_document(source: str) -> dict[str, Any]:
    """Load a document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        InputParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise InputParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise InputParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Raises:
        InputParseError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise InputParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise InputParseError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        InputParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise InputParseError(f"Input file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputParseError(f"Failed to read input file {path}: {exc}") from exc

    if not content.strip():
        raise InputParseError(f"Input file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        InputParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise InputParseError(
                    f"Document must be a JSON/YAML object (got {type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise InputParseError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise InputParseError(
                "Document must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise InputParseError(msg)


def _fill_operation_ids(
    raw: dict[str, Any],
    normalize_id: Callable[[str], str],
) -> dict[str, Any]:
    """Give every operation without an id one derived from its path."""
    for group in raw.get("groups") or []:
        if not isinstance(group, dict):
            continue
        for operation in group.get("operations") or []:
            if not isinstance(operation, dict):
                continue
            key = "operation_id" if "operation_id" in operation else "operationId"
            current = operation.get(key)
            if current and str(current).strip():
                continue
            method = str(operation.get("http_method") or operation.get("httpMethod") or "get")
            path = str(operation.get("path") or "")
            operation[key] = normalize_id(generate_operation_id(None, path, method))
    return raw


def parse_document(
    raw: dict[str, Any],
    normalize_id: Callable[[str], str] = to_operation_id,
) -> InputDocument:
    """Validate a raw document into an :class:`~opnorm.models.InputDocument`.

    Operation ids that are present are taken as already normalised by the
    upstream generator.  Missing or blank ids are generated from the path
    and passed through *normalize_id*.

    Raises:
        InputParseError: If the document does not match the expected shape.
    """
    if "groups" not in raw and "models" not in raw:
        raise InputParseError("Document has neither 'groups' nor 'models'")
    try:
        return InputDocument.model_validate(_fill_operation_ids(raw, normalize_id))
    except ValidationError as exc:
        raise InputParseError(f"Invalid operations document: {exc}") from exc


def load_input(source: str) -> InputDocument:
    """Load and validate an operations document from *source*."""
    return parse_document(load_document(source))
