"""Normalize command -- run the engine over an operations document.

``opnorm normalize SOURCE`` loads a JSON/YAML document of operation groups
and models, promotes generic-base groups, rewrites path templates, resolves
imports, and prints the normalised document for the template renderer.
``opnorm rewrite PATH`` previews the path rewrite for a single template.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from opnorm.exceptions import InvalidUsageError, OpnormError
from opnorm.output import error, get_output, info, print_data


def _stdin_is_tty() -> bool:
    return hasattr(sys.stdin, "isatty") and sys.stdin.isatty()


def normalize_command(
    source: str = typer.Argument(
        ..., help="Operations document: file path, http(s) URL, or '-' for stdin."
    ),
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="JSON/YAML file overriding the canonical catalog."
    ),
    kebab: Optional[bool] = typer.Option(
        None, "--kebab/--no-kebab", help="Derive file names in kebab-case."
    ),
) -> None:
    """Normalise an operations document and print the result.

    Example::

        opnorm --json normalize operations.json > normalized.json
        cat operations.yaml | opnorm normalize - --no-kebab
    """
    from opnorm.config import resolve_config
    from opnorm.loader import load_input
    from opnorm.normalizer import OperationNormalizer, default_catalog, load_catalog

    try:
        if source == "-" and _stdin_is_tty():
            raise InvalidUsageError(
                "No document piped to stdin; pass a file path or URL instead of '-'"
            )
        config = resolve_config(cli_kebab=kebab, cli_catalog=catalog)
        active_catalog = (
            load_catalog(config.catalog_file) if config.catalog_file else default_catalog()
        )
        document = load_input(source)
        normalizer = OperationNormalizer(catalog=active_catalog, config=config)
        result = normalizer.normalize_document(document)
    except OpnormError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    promoted = sum(1 for group in result.groups if group.is_generic_base)
    info(f"Normalised {len(result.groups)} group(s), {promoted} promoted to a generic base.")
    get_output().print_document(result.model_dump(mode="json", by_alias=True))


def rewrite_command(
    path: str = typer.Argument(..., help="Path template, e.g. '/Api/widgets/{widgetId}'."),
) -> None:
    """Print the interpolation template for a single path.

    Example::

        opnorm rewrite '/Api/widgets/{widgetId}/History'
    """
    from opnorm.normalizer import rewrite_path

    try:
        print_data(rewrite_path(path))
    except OpnormError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
