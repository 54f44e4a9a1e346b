"""Exception hierarchy for hookpipe.

Errors raised by plugins and tasks are never wrapped: the executor re-raises
them unchanged. The classes below cover hookpipe's *own* failure modes --
misconfiguration, bad plugin registration, gateway results that violate a
service contract. All of them inherit from :class:`HookpipeError`, which
carries an ``exit_code`` attribute mapped to a constant from
:mod:`hookpipe.exit_codes` so that :func:`hookpipe.app.main` can exit with
the right status.

Subclass hierarchy::

    HookpipeError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InvalidTaskError    (exit 2, also a TypeError)
    +-- PluginError         (exit 10)
    +-- ConfigError         (exit 1)
    +-- GatewayError        (exit 1)
"""

from __future__ import annotations

from typing import Optional

from hookpipe.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PLUGIN_ERROR,
)


class HookpipeError(Exception):
    """Base exception for all hookpipe errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HookpipeError):
    """Raised for invalid CLI arguments or unknown config keys.

    Also raised when prebuilt gateway options name a different action than
    the one being executed.
    """

    exit_code = EXIT_INVALID_USAGE


class InvalidTaskError(HookpipeError, TypeError):
    """Raised when ``exec`` is handed something that is not callable.

    Also a :class:`TypeError` so callers that guard against bad arguments
    the usual way keep working.
    """

    exit_code = EXIT_INVALID_USAGE


class PluginError(HookpipeError):
    """Raised when a plugin fails to load or is registered twice."""

    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(HookpipeError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class GatewayError(HookpipeError):
    """Raised by the gateway layer when a service call breaks its contract.

    Args:
        error_id: Stable machine-readable identifier such as
            ``"SERVICE_RESULT_NULL"``.
        message: Human-readable description. Defaults to *error_id*.
    """

    def __init__(self, error_id: str, message: Optional[str] = None):
        super().__init__(message or error_id)
        self.id = error_id
