"""Tests for hookpipe.names -- hook-name derivation."""

from __future__ import annotations

import pytest

from hookpipe.names import (
    DEFAULT_HOOK_NAMES,
    first_uppercase,
    get_hook_name,
    to_hook_name,
)


class TestFirstUppercase:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("login", "Login"), ("getUser", "GetUser"), ("", ""), ("X", "X"), ("1st", "1st")],
    )
    def test_only_first_character_changes(self, value: str, expected: str) -> None:
        assert first_uppercase(value) == expected


class TestGetHookName:
    def test_examples(self) -> None:
        assert get_hook_name("login", "before") == "onLoginBefore"
        assert get_hook_name("x", "success") == "onXSuccess"
        assert get_hook_name("getUserInfo", "success") == "onGetUserInfoSuccess"

    def test_empty_action_collides_with_general_names(self) -> None:
        assert get_hook_name("", "before") == "onBefore"
        assert get_hook_name("", "success") == "onSuccess"
        assert get_hook_name("", "before") in DEFAULT_HOOK_NAMES


class TestToHookName:
    @pytest.mark.parametrize(
        ("attr", "expected"),
        [
            ("on_before", "onBefore"),
            ("on_login_before", "onLoginBefore"),
            ("on_get_user_info_success", "onGetUserInfoSuccess"),
            ("onLoginBefore", "onLoginBefore"),
            ("onError", "onError"),
        ],
    )
    def test_hook_names(self, attr: str, expected: str) -> None:
        assert to_hook_name(attr) == expected

    @pytest.mark.parametrize("attr", ["on", "on_", "online", "once", "handle", "on__x", "plugin_name"])
    def test_non_hook_names(self, attr: str) -> None:
        assert to_hook_name(attr) is None
