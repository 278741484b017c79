"""
User-facing message catalog.

Notification texts shown by the login form, plus the table that turns
registration error codes from the identity service into actionable text.
"""

from typing import Dict, Optional

# ── Notifications ────────────────────────────────────────────────────────────
LOGIN_SUCCESS = "登录成功"
LOGIN_SUCCESS_WITH_TOKEN = "登录成功，accessToken:{token}"
LOGIN_FAILED = "登录失败"
REGISTER_SUCCESS = "注册成功，uuid:{id}"
REGISTER_FAILED = "注册失败"
RANDOM_UUID = "使用随机的uuid！"
NETWORK_ERROR = "网络错误:{detail}"

# ── Field helper texts (shown inline when a field is invalid) ────────────────
FIELD_ERRORS: Dict[str, str] = {
    "identifier": "请输入有效的邮箱地址",
    "display_name": "2-16个字符，字母，数字或下划线",
    "secret": "6-128个字符",
    "requested_id": "指定的UUID（标准格式）",
}

# ── Registration error codes ─────────────────────────────────────────────────
REGISTER_ERROR_MESSAGES: Dict[str, str] = {
    "profileName exist": "角色名已存在",
    "profileName duplicate": "角色名与正版用户冲突",
}


def with_reason(prefix: str, reason: Optional[str]) -> str:
    """``"<prefix>: <reason>"``, or just *prefix* when there is no reason."""
    if not reason:
        return prefix
    return f"{prefix}: {reason}"


def login_failed(reason: Optional[str] = None) -> str:
    return with_reason(LOGIN_FAILED, reason)


def normalize_register_error(code: Optional[str]) -> str:
    """
    Map a registration ``errorMessage`` code to display text.

    Known codes are translated; anything else is passed through verbatim
    behind the generic "registration failed" label.
    """
    return with_reason(REGISTER_FAILED, REGISTER_ERROR_MESSAGES.get(code, code) if code else None)


def network_error(detail: object) -> str:
    return NETWORK_ERROR.format(detail=detail)
