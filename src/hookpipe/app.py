"""Typer application and console-script entry point for hookpipe.

Sub-commands:

* ``hookpipe plugins list`` -- plugins discovered through entry points.
* ``hookpipe hooks ACTION`` -- hook names and call order for an action.
* ``hookpipe config show|set|path`` -- the global configuration.

:func:`main` turns :class:`~hookpipe.exceptions.HookpipeError` into an
error message and the error's exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from hookpipe import __version__
from hookpipe.commands.config import config_app
from hookpipe.commands.hooks import hooks_command
from hookpipe.commands.plugins import plugins_app
from hookpipe.exit_codes import EXIT_GENERIC_FAILURE

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hookpipe",
    help="Inspect hookpipe plugins, hook names, and configuration.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(plugins_app, name="plugins", help="Installed executor plugins.")
app.add_typer(config_app, name="config", help="Configuration management.")
app.command("hooks")(hooks_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hookpipe {__version__}")
        raise typer.Exit()


def configure_logging(level: Optional[str], verbose: bool) -> None:
    """Point the root logger at stderr with the requested level."""
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(resolved)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Install the output manager and logging before any sub-command runs."""
    from hookpipe.config import resolve_config
    from hookpipe.output import OutputFormat, OutputManager, set_output

    config = resolve_config()

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat(config.output.format)

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(config.log_level, verbose)


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always, with the command's exit status.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from hookpipe.exceptions import HookpipeError
        from hookpipe.output import error

        if isinstance(exc, HookpipeError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logger.debug("Unhandled exception", exc_info=True)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
