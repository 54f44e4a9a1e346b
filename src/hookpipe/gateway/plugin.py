"""Plugin that mirrors a gateway call's lifecycle into the service store."""

from __future__ import annotations

from typing import Any

from hookpipe.exceptions import GatewayError
from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import ExecutorPlugin
from hookpipe.gateway.service import GatewayAction


class GatewayStorePlugin(ExecutorPlugin):
    """Drive ``context.parameters.store`` from the general hooks.

    * ``onBefore`` starts the store.
    * ``onSuccess`` marks it successful with the result, logging the
      duration through the service logger. A ``None`` result fails the
      store and raises ``GatewayError("SERVICE_RESULT_NULL")``.
    * ``onError`` marks it failed with the error.

    ``logout`` calls are skipped; the logout flow resets the store itself.
    """

    plugin_name = "GatewayStorePlugin"

    def enabled(self, hook_name: str, context: ExecutionContext) -> bool:
        return context.parameters.action_name != GatewayAction.LOGOUT

    def on_before(self, context: ExecutionContext) -> None:
        store = context.parameters.store
        if store is not None:
            store.start()

    def on_success(self, context: ExecutionContext) -> None:
        options = context.parameters
        store = options.store
        result: Any = context.return_value

        if result is None:
            error = GatewayError(
                "SERVICE_RESULT_NULL",
                f"{options.service_name}: {options.action_name} - Result is null",
            )
            if store is not None:
                store.failed(error)
            raise error

        if store is not None:
            store.success(result)
        if options.logger is not None:
            duration = store.get_duration() if store is not None else 0
            options.logger.debug(
                "%s: %s - success(%sms)", options.service_name, options.action_name, duration
            )

    def on_error(self, context: ExecutionContext) -> None:
        store = context.parameters.store
        if store is not None:
            store.failed(context.error)
