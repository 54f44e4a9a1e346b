"""Plugin that logs every call's lifecycle through :mod:`logging`."""

from __future__ import annotations

import logging
import time
import weakref
from typing import Optional

from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import ExecutorPlugin


def _call_name(context: ExecutionContext) -> str:
    action = getattr(context.parameters, "action_name", None)
    return action if action else "task"


class LoggingPlugin(ExecutorPlugin):
    """Log the start, success, and failure of each call with its duration.

    Starts are logged at DEBUG, successes at INFO and failures at WARNING.

    Args:
        logger: Logger to write to. Defaults to this module's logger.
    """

    plugin_name = "LoggingPlugin"

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._started: "weakref.WeakKeyDictionary[ExecutionContext, float]" = (
            weakref.WeakKeyDictionary()
        )

    def _elapsed_ms(self, context: ExecutionContext) -> float:
        started = self._started.pop(context, None)
        if started is None:
            return 0.0
        return (time.perf_counter() - started) * 1000

    def on_before(self, context: ExecutionContext) -> None:
        self._started[context] = time.perf_counter()
        self.logger.debug("%s: started", _call_name(context))

    def on_success(self, context: ExecutionContext) -> None:
        self.logger.info(
            "%s: succeeded in %.1fms", _call_name(context), self._elapsed_ms(context)
        )

    def on_error(self, context: ExecutionContext) -> None:
        self.logger.warning(
            "%s: failed after %.1fms: %r",
            _call_name(context),
            self._elapsed_ms(context),
            context.error,
        )
