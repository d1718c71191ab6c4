"""Sign-in / registration form with the validation thought bubble."""

from __future__ import annotations

import streamlit as st

from dollerselectro.domains import validation
from dollerselectro.infrastructure.api.shop import ShopClient
from dollerselectro.services.auth_store import AuthStore
from dollerselectro.ui import navigation
from dollerselectro.ui.common import call_api, go_to


def _bubble(result: validation.ValidationResult) -> None:
    if not result.ok:
        st.warning(result.message)


def _glow(mode: str, fields: dict[str, str]) -> None:
    level = validation.completion_level(mode, fields)
    st.progress(validation.glow_intensity(level), text=f"{level:.0f}% complete")


def _live_result(mode: str, fields: dict[str, str]) -> validation.ValidationResult:
    """First failing live check for the fields typed so far."""
    checks = [validation.check_email_live(fields.get("email", ""))]
    if mode == "register":
        checks += [
            validation.check_names_live(fields.get("first_name", ""), fields.get("last_name", "")),
            validation.check_username_live(fields.get("username", "")),
            validation.check_phone_live(fields.get("phone", "")),
            validation.check_password_live(fields.get("password", "")),
            validation.check_password_match_live(fields.get("password", ""), fields.get("confirm_password", "")),
        ]
    for result in checks:
        if not result.ok:
            return result
    return validation.VALID


def render_sign_in(auth: AuthStore, shop: ShopClient) -> None:
    mode = st.radio("Mode", ["login", "register"], horizontal=True, key="auth_mode",
                    format_func=lambda m: "Sign in" if m == "login" else "Create account")
    fields: dict[str, str] = {}

    if mode == "register":
        c1, c2 = st.columns(2)
        fields["first_name"] = c1.text_input("First name", key="reg_first")
        fields["last_name"] = c2.text_input("Last name", key="reg_last")
        fields["username"] = st.text_input("Username", key="reg_username")
        fields["phone"] = st.text_input("Phone (optional)", key="reg_phone")
    fields["email"] = st.text_input("Email", key=f"{mode}_email")
    fields["password"] = st.text_input("Password", type="password", key=f"{mode}_password")
    totp = ""
    if mode == "register":
        fields["confirm_password"] = st.text_input("Confirm password", type="password", key="reg_confirm")
    else:
        totp = st.text_input("2FA code (if enabled)", key="login_totp")

    _glow(mode, fields)

    bubble_key = f"{mode}_bubble"
    submitted = st.button("Sign in" if mode == "login" else "Create account", type="primary")
    if submitted:
        if mode == "login":
            result = validation.validate_login(fields["email"], fields["password"])
        else:
            result = validation.validate_registration(
                fields["first_name"],
                fields["last_name"],
                fields["email"],
                fields["username"],
                fields["password"],
                fields["confirm_password"],
                phone=fields.get("phone", ""),
            )
        if not result.ok:
            st.session_state[bubble_key] = result
        elif mode == "login":
            _submit_login(auth, fields, totp, bubble_key)
        else:
            _submit_register(auth, fields, bubble_key)
    else:
        st.session_state[bubble_key] = _live_result(mode, fields)

    bubble = st.session_state.get(bubble_key)
    if bubble is not None:
        _bubble(bubble)

    if mode == "login":
        with st.expander("Forgot password?"):
            email = st.text_input("Account email", key="forgot_email")
            if st.button("Send reset link") and email:
                if call_api(shop.auth.forgot_password, email, fallback="Failed to send reset email") is not None:
                    st.success("If that account exists, a reset link is on its way.")


def _submit_login(auth: AuthStore, fields: dict[str, str], totp: str, bubble_key: str) -> None:
    payload = auth.login(fields["email"], fields["password"], totp or None)
    if payload is None:
        st.session_state[bubble_key] = validation.classify_submission_error(auth.state.error or "", "login")
        return
    st.session_state[bubble_key] = None
    st.toast("Welcome back!", icon="💡")
    go_to(navigation.ADMIN if auth.is_admin() else navigation.EMPLOYEE if auth.is_employee() else navigation.HOME)


def _submit_register(auth: AuthStore, fields: dict[str, str], bubble_key: str) -> None:
    data = {
        "firstName": fields["first_name"],
        "lastName": fields["last_name"],
        "email": fields["email"],
        "username": fields["username"],
        "password": fields["password"],
    }
    if fields.get("phone"):
        data["phone"] = fields["phone"]
    payload = auth.register(data)
    if payload is None:
        st.session_state[bubble_key] = validation.classify_submission_error(auth.state.error or "", "register")
        return
    st.session_state[bubble_key] = None
    st.toast("Account created!", icon="🎉")
    go_to(navigation.HOME)


def render_password_change(auth: AuthStore) -> None:
    """Shown instead of any page while the signed-in user still has a temporary password."""
    st.header("Set a new password")
    st.info("Your account uses a temporary password. Choose a new one to continue.")
    new_password = st.text_input("New password", type="password", key="tmp_new_password")
    confirm = st.text_input("Confirm new password", type="password", key="tmp_confirm_password")
    if st.button("Update password", type="primary"):
        check = validation.check_password_live(new_password)
        if not new_password:
            check = validation.ValidationResult(False, "weak_password", validation.pick_message("weak_password"))
        if check.ok:
            check = validation.check_password_match_live(new_password, confirm)
        if not check.ok:
            st.warning(check.message)
            return
        if auth.update_password(new_password, is_first_login=True) is None:
            st.error(auth.state.error or "Failed to update password")
            return
        st.toast("Password updated", icon="✅")
        st.rerun()
