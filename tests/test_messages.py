"""Tests for the notification message catalog."""

import pytest

from ygg_portal.messages import (
    REGISTER_ERROR_MESSAGES,
    login_failed,
    network_error,
    normalize_register_error,
)


class TestNormalizeRegisterError:
    def test_existing_profile_name(self):
        assert normalize_register_error("profileName exist") == "注册失败: 角色名已存在"

    def test_reserved_profile_name(self):
        assert normalize_register_error("profileName duplicate") == "注册失败: 角色名与正版用户冲突"

    def test_unknown_code_passed_through(self):
        assert normalize_register_error("email exist") == "注册失败: email exist"

    @pytest.mark.parametrize("code", [None, ""])
    def test_missing_code_gives_generic_text(self, code):
        assert normalize_register_error(code) == "注册失败"

    def test_every_known_code_is_translated(self):
        for code, text in REGISTER_ERROR_MESSAGES.items():
            assert normalize_register_error(code).endswith(text)
            assert code not in normalize_register_error(code)


class TestOtherMessages:
    def test_login_failed_with_reason(self):
        assert login_failed("bad password") == "登录失败: bad password"

    def test_login_failed_without_reason(self):
        assert login_failed(None) == "登录失败"

    def test_network_error_includes_detail(self):
        assert network_error(ValueError("timeout")) == "网络错误:timeout"
