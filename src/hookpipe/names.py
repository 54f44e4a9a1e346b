"""Hook-name vocabulary and the action naming rule.

The executor dispatches on plain strings. Four names are fixed --
:data:`ON_BEFORE`, :data:`ON_EXEC`, :data:`ON_SUCCESS` and :data:`ON_ERROR`
-- and any number of extra names are derived from an *action* string with
:func:`get_hook_name`::

    >>> get_hook_name("login", "before")
    'onLoginBefore'
    >>> get_hook_name("getUser", "success")
    'onGetUserSuccess'

An empty action yields ``"onBefore"`` / ``"onSuccess"``, i.e. the general
hook names. That collision is not special-cased.
"""

from __future__ import annotations

import re
from typing import Literal

ON_BEFORE = "onBefore"
ON_EXEC = "onExec"
ON_SUCCESS = "onSuccess"
ON_ERROR = "onError"

DEFAULT_HOOK_NAMES = (ON_BEFORE, ON_EXEC, ON_SUCCESS, ON_ERROR)

ActionStage = Literal["before", "success"]

_SNAKE_HOOK = re.compile(r"^on(_[A-Za-z0-9]+)+$")


def first_uppercase(value: str) -> str:
    """Uppercase the first character of *value* and leave the rest alone."""
    if not value:
        return value
    return value[0].upper() + value[1:]


def get_hook_name(action: str, stage: ActionStage) -> str:
    """Return the action-specific hook name for *stage*.

    Args:
        action: Caller-chosen action identifier (e.g. ``"login"``).
        stage: ``"before"`` or ``"success"``.

    Returns:
        ``"on" + first_uppercase(action) + first_uppercase(stage)``.
    """
    return f"on{first_uppercase(str(action))}{first_uppercase(stage)}"


def to_hook_name(attr_name: str) -> str | None:
    """Map a plugin attribute name to the hook name it implements.

    camelCase names (``onLoginBefore``) are returned verbatim and snake_case
    names (``on_login_before``) are converted. Anything else -- including
    private attributes and plain ``on`` -- is not a hook.

    >>> to_hook_name("on_get_user_success")
    'onGetUserSuccess'
    >>> to_hook_name("cleanup") is None
    True
    """
    if attr_name.startswith("on_"):
        if not _SNAKE_HOOK.match(attr_name):
            return None
        parts = attr_name.split("_")[1:]
        return "on" + "".join(first_uppercase(part) for part in parts)
    if len(attr_name) > 2 and attr_name.startswith("on") and attr_name[2].isupper():
        return attr_name
    return None
