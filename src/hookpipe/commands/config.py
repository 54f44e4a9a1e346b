"""Config commands -- view and modify the global configuration."""

from __future__ import annotations

import typer

from hookpipe.output import format_response, info, print_data, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration, environment overrides included."""
    from hookpipe.config import get_config_path, resolve_config

    info(f"Config file: {get_config_path()}")
    format_response(resolve_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted config key, e.g. 'log_level' or 'plugins.disabled'."),
    value: str = typer.Argument(help="New value. Lists take comma-separated names."),
) -> None:
    """Set one configuration value.

    Example::

        hookpipe config set log_level DEBUG
        hookpipe config set plugins.disabled logging,audit
    """
    from hookpipe.config import set_config_value

    set_config_value(key, value)
    success(f"Set {key} = {value}")


@config_app.command("path")
def config_path() -> None:
    """Print the path of the config file."""
    from hookpipe.config import get_config_path

    print_data(str(get_config_path()))
