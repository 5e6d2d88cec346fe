"""Typer application and CLI entry point for opnorm.

This module wires together the top-level Typer application and registers the
built-in commands (``normalize``, ``rewrite``, ``catalog``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`opnorm.config`: Configuration resolution.
    :mod:`opnorm.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from opnorm import __version__
from opnorm.commands.catalog import catalog_command
from opnorm.commands.normalize import normalize_command, rewrite_command
from opnorm.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="opnorm",
    help="Normalise parsed API operations for client code generation.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("normalize")(normalize_command)
app.command("rewrite")(rewrite_command)
app.command("catalog")(catalog_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"opnorm {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, console: Optional[Console] = None) -> None:
    """Route the ``opnorm`` logger hierarchy through a Rich handler on stderr.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
        console: Console to write to; defaults to a new stderr console.
    """
    root = logging.getLogger("opnorm")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~opnorm.output.OutputManager` and the
    logging handler. ``--json``/``--plain`` win over the ``output_format``
    of the resolved configuration.
    """
    from opnorm.config import resolve_config
    from opnorm.exceptions import OpnormError
    from opnorm.output import OutputFormat, OutputManager, error, set_output

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        config = resolve_config(cli_format=cli_format)
    except OpnormError as exc:
        set_output(OutputManager(no_color=no_color, quiet=quiet))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = OutputManager(
        format=OutputFormat(config.output_format),
        no_color=no_color,
        quiet=quiet,
        output_file=output_file,
    )
    set_output(output)
    configure_logging(verbose, output.stderr_console)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from opnorm.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``opnorm`` console script.

    Unhandled :class:`~opnorm.exceptions.OpnormError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a crash
    log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from opnorm.exceptions import OpnormError
        from opnorm.output import error

        if isinstance(exc, OpnormError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
