"""Plugin commands -- inspect the plugins discovered through entry points."""

from __future__ import annotations

import json

import typer

from hookpipe.output import info, print_data, print_table

plugins_app = typer.Typer(no_args_is_help=True)


@plugins_app.command("list")
def plugins_list(
    json_output: bool = typer.Option(False, "--json", help="Print plugins as JSON."),
) -> None:
    """List installed plugins and the hooks each one implements.

    Honours the ``plugins.enabled`` / ``plugins.disabled`` config lists and
    the ``HOOKPIPE_DISABLED_PLUGINS`` environment variable.

    Example::

        hookpipe plugins list
        hookpipe plugins list --json
    """
    from hookpipe.config import resolve_config
    from hookpipe.plugins import PluginManager

    manager = PluginManager()
    manager.discover(resolve_config())
    plugins = manager.list_plugins()

    if json_output:
        print_data(json.dumps(plugins, indent=2))
        return
    if not plugins:
        info("No plugins installed.")
        return
    rows = [
        [plugin["name"], plugin["plugin_name"], ", ".join(plugin["hooks"])]
        for plugin in plugins
    ]
    print_table(["Name", "Plugin", "Hooks"], rows, title="Plugins")
