"""Catalog command -- show the canonical signatures a group must match."""

from __future__ import annotations

from typing import Optional

import typer

from opnorm.exceptions import OpnormError
from opnorm.models import Parameter
from opnorm.output import error, get_output


def _describe_params(params: tuple[Parameter, ...]) -> str:
    if not params:
        return "-"
    parts = []
    for param in params:
        kind = param.data_type or "?"
        if param.data_format:
            kind = f"{kind}/{param.data_format}"
        suffix = "" if param.required else "?"
        parts.append(f"{param.base_name}{suffix}: {kind}")
    return ", ".join(parts)


def catalog_command(
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="JSON/YAML file overriding the canonical catalog."
    ),
) -> None:
    """List the canonical signatures of the active catalog.

    Example::

        opnorm catalog
        opnorm --json catalog --catalog my-catalog.yaml
    """
    from opnorm.config import resolve_config
    from opnorm.normalizer import default_catalog, load_catalog

    try:
        config = resolve_config(cli_catalog=catalog)
        active = load_catalog(config.catalog_file) if config.catalog_file else default_catalog()
    except OpnormError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Name", "Method", "Body", "Path params", "Query params", "Creation"]
    rows = [
        [
            signature.name,
            signature.http_method,
            "yes" if signature.has_body else "no",
            _describe_params(signature.path_params),
            _describe_params(signature.query_params),
            "*" if signature.name == active.creation else "",
        ]
        for signature in active.signatures
    ]
    get_output().print_table(headers, rows, title=f"Canonical signatures ({len(rows)})")
