"""Tests for hookpipe.gateway.executor -- action before/success stages."""

from __future__ import annotations

from typing import Any

import pytest

from hookpipe.exceptions import InvalidUsageError
from hookpipe.executor import ExecutionContext, ExecutorPlugin
from hookpipe.gateway import GatewayExecutor, GatewayExecutorOptions

from conftest import Recorder


class TracePlugin(ExecutorPlugin):
    def __init__(self, calls: list[str], prefix: str) -> None:
        self.calls = calls
        self.prefix = prefix
        self.plugin_name = prefix

    def on_before(self, context: ExecutionContext) -> None:
        self.calls.append(f"{self.prefix}:onBefore")

    def on_login_before(self, context: ExecutionContext) -> None:
        self.calls.append(f"{self.prefix}:onLoginBefore")

    def on_login_success(self, context: ExecutionContext) -> None:
        self.calls.append(f"{self.prefix}:onLoginSuccess")

    def on_success(self, context: ExecutionContext) -> None:
        self.calls.append(f"{self.prefix}:onSuccess")


class TestGatewayExecutorOptions:
    def test_identity_fields_are_read_only(self) -> None:
        options = GatewayExecutorOptions("login", {"u": 1}, service_name="Svc")
        assert options.action_name == "login"
        assert options.service_name == "Svc"
        with pytest.raises(AttributeError):
            options.action_name = "logout"  # type: ignore[misc]

    def test_params_are_mutable(self) -> None:
        options = GatewayExecutorOptions("login", {"u": 1})
        options.params = {"u": 2}
        assert options.params == {"u": 2}
        assert "login" in repr(options)


class TestHookNames:
    def test_get_hook_name(self) -> None:
        assert GatewayExecutor.get_hook_name("login", "before") == "onLoginBefore"
        assert GatewayExecutor.get_hook_name("getUserInfo", "success") == "onGetUserInfoSuccess"


@pytest.mark.asyncio
class TestGatewayExecutor:
    async def test_full_order_for_login(self) -> None:
        calls: list[str] = []
        executor = GatewayExecutor().use([TracePlugin(calls, "a"), TracePlugin(calls, "b")])

        def task(context: ExecutionContext) -> str:
            calls.append("task")
            return "token"

        result = await executor.exec_action("login", {"user": "ada"}, task)
        assert result == "token"
        assert calls == [
            "a:onBefore",
            "b:onBefore",
            "a:onLoginBefore",
            "b:onLoginBefore",
            "task",
            "a:onLoginSuccess",
            "b:onLoginSuccess",
            "a:onSuccess",
            "b:onSuccess",
        ]

    async def test_general_before_runs_across_all_plugins_first(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use(
            [
                {"onBefore": recorder.hook("A"), "onLoginBefore": recorder.hook("A2")},
                {"onBefore": recorder.hook("B")},
            ]
        )
        await executor.exec_action("login", None, lambda ctx: "ok")
        assert recorder.calls == ["A", "B", "A2"]

    async def test_other_actions_do_not_trigger_login_hooks(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use({"onLoginBefore": recorder.hook("login")})
        await executor.exec_action("register", None, lambda ctx: "ok")
        assert recorder.calls == []

    async def test_task_error_reaches_error_hook_once(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use({"onError": recorder.hook("E")})

        async def task(context: ExecutionContext) -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await executor.exec_action("login", None, task)
        assert recorder.calls == ["E"]

        result = await executor.exec_action_no_error("login", None, task)
        assert isinstance(result, RuntimeError)
        assert str(result) == "boom"
        assert recorder.calls == ["E", "E"]

    async def test_action_before_error_reaches_error_hook(self, recorder: Recorder) -> None:
        def explode(context: ExecutionContext) -> None:
            raise ValueError("rejected")

        executor = GatewayExecutor().use({"onLoginBefore": explode, "onError": recorder.hook("E")})
        with pytest.raises(ValueError, match="rejected"):
            await executor.exec_action("login", None, lambda ctx: recorder.calls.append("task"))
        assert recorder.calls == ["E"]

    async def test_action_success_error_reaches_error_hook(self, recorder: Recorder) -> None:
        def explode(context: ExecutionContext) -> None:
            raise ValueError("bad result")

        executor = GatewayExecutor().use({"onLoginSuccess": explode, "onError": recorder.hook("E")})
        with pytest.raises(ValueError, match="bad result"):
            await executor.exec_action("login", None, lambda ctx: "ok")
        assert recorder.calls == ["E"]

    async def test_general_success_error_skips_error_hook(self, recorder: Recorder) -> None:
        def explode(context: ExecutionContext) -> None:
            raise ValueError("late failure")

        executor = GatewayExecutor().use({"onSuccess": explode, "onError": recorder.hook("E")})
        with pytest.raises(ValueError, match="late failure"):
            await executor.exec_action("login", None, lambda ctx: "ok")
        assert recorder.calls == []

    async def test_exec_hooks_cannot_replace_the_task(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use({"onExec": lambda ctx, task: "intercepted"})
        result = await executor.exec_action("login", None, lambda ctx: "real")
        assert result == "real"

    async def test_action_success_hooks_see_return_value(self) -> None:
        seen: list[Any] = []
        executor = GatewayExecutor().use({"onLoginSuccess": lambda ctx: seen.append(ctx.return_value)})
        await executor.exec_action("login", None, lambda ctx: "token")
        assert seen == ["token"]

    async def test_context_exposes_options(self) -> None:
        seen: list[GatewayExecutorOptions] = []
        executor = GatewayExecutor().use({"onBefore": lambda ctx: seen.append(ctx.parameters)})
        await executor.exec_action("login", {"u": 1}, lambda ctx: "ok", service_name="Auth")
        assert seen[0].action_name == "login"
        assert seen[0].params == {"u": 1}
        assert seen[0].service_name == "Auth"

    async def test_prebuilt_options_are_used_as_is(self) -> None:
        options = GatewayExecutorOptions("register", {"u": 1})
        result = await GatewayExecutor().exec_action("register", options, lambda ctx: ctx.parameters)
        assert result is options

    async def test_prebuilt_options_for_another_action_are_rejected(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use(
            {"onRegisterBefore": recorder.hook("register"), "onLoginBefore": recorder.hook("login")}
        )
        options = GatewayExecutorOptions("register", {"u": 1})
        with pytest.raises(InvalidUsageError, match="does not match"):
            await executor.exec_action("login", options, lambda ctx: "ok")
        assert recorder.calls == []

    async def test_empty_action_runs_general_hooks_twice(self, recorder: Recorder) -> None:
        executor = GatewayExecutor().use({"onBefore": recorder.hook("before")})
        await executor.exec_action("", None, lambda ctx: "ok")
        assert recorder.calls == ["before", "before"]
