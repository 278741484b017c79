"""
ygg-portal Login Page Component

Renders the login / register form.  Which fields are shown depends on the
current mode; the submit button is disabled while a request is in flight.
"""

from typing import Dict

import streamlit as st

from ..config import get_settings
from ..host import get_orchestrator
from ..validation import FormInputs, Mode

FIELD_ERRORS_KEY = "form_field_errors"


# ── Custom CSS for the login page ─────────────────────────────────────────────

_LOGIN_PAGE_CSS = """
<style>
    /* Centre the form block and limit its width */
    div[data-testid="stForm"] {
        max-width: 420px;
        margin: 0 auto;
    }

    .login-title {
        text-align: center;
        font-size: 2.2rem;
        font-weight: 700;
        padding-top: 2rem;
    }
</style>
"""


def _show_field_error(field_errors: Dict[str, str], field: str) -> None:
    message = field_errors.get(field)
    if message:
        st.caption(f":red[{message}]")


def render_login_form() -> None:
    """
    Render the mode-dependent credential form and handle its submission.

    Validation errors are kept in session state and shown under the
    offending field on the rerun that follows a submit; everything else
    reaches the user through the orchestrator's notifications.
    """
    orchestrator = get_orchestrator()
    login_mode = orchestrator.mode is Mode.AUTHENTICATE
    field_errors = st.session_state.get(FIELD_ERRORS_KEY, {})

    with st.form("login_form", clear_on_submit=False):
        identifier = st.text_input("邮箱", key="form_identifier")
        _show_field_error(field_errors, "identifier")

        display_name = ""
        requested_id = ""
        if not login_mode:
            display_name = st.text_input(
                "角色名", key="form_display_name", max_chars=16, help="字母，数字或下划线"
            )
            _show_field_error(field_errors, "display_name")
            requested_id = st.text_input(
                "指定uuid", key="form_requested_id", help="指定的UUID（标准格式）"
            )
            _show_field_error(field_errors, "requested_id")

        secret = st.text_input(
            "密码", type="password", key="form_secret", max_chars=128, help="最少6个字符"
        )
        _show_field_error(field_errors, "secret")

        submitted = st.form_submit_button(
            "登录" if login_mode else "注册",
            disabled=orchestrator.busy,
            use_container_width=True,
        )

    if st.button("切换到注册" if login_mode else "切换到登录", key="btn_toggle_mode"):
        orchestrator.toggle_mode()
        st.session_state[FIELD_ERRORS_KEY] = {}
        st.rerun()

    if submitted:
        inputs = FormInputs(
            identifier=identifier,
            secret=secret,
            display_name=display_name,
            requested_id=requested_id,
        )
        with st.spinner("登录中..." if login_mode else "注册中..."):
            result = orchestrator.submit(inputs)
        st.session_state[FIELD_ERRORS_KEY] = result.field_errors
        st.rerun()


def render_login_page() -> None:
    """Render the page title followed by the login / register form."""
    st.markdown(_LOGIN_PAGE_CSS, unsafe_allow_html=True)
    st.markdown(
        f'<p class="login-title">{get_settings().PAGE_TITLE}</p>',
        unsafe_allow_html=True,
    )
    render_login_form()
