"""Hooks command -- show the hook names and call order for an action."""

from __future__ import annotations

import typer

from hookpipe.config import resolve_config
from hookpipe.models import ExecutorConfig
from hookpipe.names import get_hook_name
from hookpipe.output import print_table, warning


def call_order(action: str, config: ExecutorConfig) -> list[tuple[str, str]]:
    """Return ``(stage, hook name)`` pairs in the order a gateway call runs them.

    The error hook is listed last; it only runs when an earlier stage raises.
    """
    rows = [("before", name) for name in config.before_hooks]
    rows.append(("action before", get_hook_name(action, "before")))
    rows.append(("task", "-"))
    rows.append(("action success", get_hook_name(action, "success")))
    rows.extend(("success", name) for name in config.after_hooks)
    rows.append(("error", config.error_hook))
    return rows


def hooks_command(
    action: str = typer.Argument(help="Action name, e.g. 'login' or 'getUserInfo'."),
) -> None:
    """Show the hooks a gateway call for ACTION runs, in order.

    Example::

        hookpipe hooks login
        hookpipe --json hooks getUserInfo
    """
    if not action:
        warning("An empty action shares its hook names with the general stages.")
    config = resolve_config().executor
    rows = [[stage, name] for stage, name in call_order(action, config)]
    print_table(["Stage", "Hook"], rows, title=f"Hooks for '{action}'")
