"""Gateway layer -- action hooks and store-backed services on top of the executor."""

from hookpipe.gateway.executor import GatewayExecutor, GatewayExecutorOptions
from hookpipe.gateway.plugin import GatewayStorePlugin
from hookpipe.gateway.service import GatewayAction, GatewayService
from hookpipe.gateway.services import (
    LoginService,
    RegisterService,
    UserInfoService,
    UserService,
)

__all__ = [
    "GatewayAction",
    "GatewayExecutor",
    "GatewayExecutorOptions",
    "GatewayService",
    "GatewayStorePlugin",
    "LoginService",
    "RegisterService",
    "UserInfoService",
    "UserService",
]
