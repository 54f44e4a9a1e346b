"""Configuration files: location, atomic persistence, and env overrides.

* :func:`get_config_dir` -- ``$XDG_CONFIG_HOME/hookpipe/`` on Linux/BSD
  (default ``~/.config/hookpipe/``), ``~/.hookpipe/`` elsewhere.
* :func:`load_global_config` / :func:`save_global_config` -- the
  :class:`~hookpipe.models.GlobalConfig` JSON file. Writes go through
  :func:`atomic_write`.
* :func:`resolve_config` -- the stored config with environment overrides
  applied:

  ``HOOKPIPE_LOG_LEVEL``
      Replaces ``log_level``.
  ``HOOKPIPE_DISABLED_PLUGINS``
      Comma-separated plugin names appended to ``plugins.disabled``.
* :func:`set_config_value` -- update one dotted key, coercing the string
  value to the stored type.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from hookpipe.exceptions import ConfigError, InvalidUsageError
from hookpipe.models import GlobalConfig

_APP_NAME = "hookpipe"
_CONFIG_FILENAME = "config.json"

ENV_LOG_LEVEL = "HOOKPIPE_LOG_LEVEL"
ENV_DISABLED_PLUGINS = "HOOKPIPE_DISABLED_PLUGINS"


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if needed."""
    if _is_xdg_platform():
        xdg_home = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(xdg_home) if xdg_home else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Replace *path* with *data* via a temp file in the same directory.

    Args:
        path: Destination file.
        data: Text to write.
        mode: Optional permission bits applied before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as handle:
            tmp_path = handle.name
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def load_global_config() -> GlobalConfig:
    """Read the config file, or return defaults when it does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = get_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    data = config.model_dump(mode="json")
    atomic_write(get_config_path(), json.dumps(data, indent=2) + "\n")


def resolve_config() -> GlobalConfig:
    """Load the config file and apply environment overrides."""
    config = load_global_config()
    updates: dict[str, Any] = {}

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        updates["log_level"] = log_level.upper()

    disabled = os.environ.get(ENV_DISABLED_PLUGINS)
    if disabled:
        names = [name.strip() for name in disabled.split(",") if name.strip()]
        merged = list(dict.fromkeys([*config.plugins.disabled, *names]))
        updates["plugins"] = config.plugins.model_copy(update={"disabled": merged})

    return config.model_copy(update=updates) if updates else config


def _coerce(key: str, current: Any, value: str) -> Any:
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            raise InvalidUsageError(f"Expected integer for {key}, got: {value}") from None
    if isinstance(current, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def set_config_value(key: str, value: str) -> GlobalConfig:
    """Set the dotted *key* (e.g. ``output.format``) and save the config.

    List fields take a comma-separated value.

    Returns:
        The saved configuration.

    Raises:
        InvalidUsageError: If *key* does not name a config field or the
            resulting config fails validation.
    """
    data = load_global_config().model_dump(mode="json")

    *parents, leaf = key.split(".")
    target = data
    for part in parents:
        if not isinstance(target.get(part), dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
        target = target[part]
    if leaf not in target:
        raise InvalidUsageError(f"Unknown config key: {key}")

    target[leaf] = _coerce(key, target[leaf], value)
    try:
        config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise InvalidUsageError(f"Invalid value for {key}: {exc}") from exc

    save_global_config(config)
    return config
