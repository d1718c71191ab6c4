"""
Auth session store.

Holds the signed-in user and token pair, persists them to client storage, and
exposes async-style actions (login, register, refresh, ...) that move the state
through pending / fulfilled / rejected. Listeners registered with `subscribe`
are called after every state change so the UI can re-render.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable

from dollerselectro.infrastructure.api.auth import AuthAPI
from dollerselectro.infrastructure.api.client import ApiError, error_message, refreshed_tokens
from dollerselectro.infrastructure.storage.local_storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
)
from dollerselectro.utils.logger import get_logger

logger = get_logger()

NO_ACCESS_TOKEN = "No access token found"
SESSION_EXPIRED = "Session expired. Please login again."
TOKEN_EXPIRED_CODE = "TOKEN_EXPIRED"

STAFF_ROLES = ("admin", "employee")


@dataclass
class AuthTokens:
    access_token: str | None = None
    refresh_token: str | None = None


@dataclass
class AuthState:
    user: dict[str, Any] | None = None
    tokens: AuthTokens = field(default_factory=AuthTokens)
    is_authenticated: bool = False
    is_loading: bool = False
    error: str | None = None


def ensure_user_ids(user: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of `user` with both `id` and `_id` set and defaults filled in."""
    if not user:
        return user
    uid = user.get("id") or user.get("_id") or ""
    normalized = dict(user)
    normalized.update(
        {
            "id": uid,
            "_id": user.get("_id") or uid,
            "firstName": user.get("firstName") or "",
            "lastName": user.get("lastName") or "",
            "email": user.get("email") or "",
            "role": user.get("role") or "customer",
            "isEmailVerified": bool(user.get("isEmailVerified")),
            "isPhoneVerified": bool(user.get("isPhoneVerified")),
            "isTwoFactorEnabled": bool(user.get("isTwoFactorEnabled")),
            "isTemporaryPassword": bool(user.get("isTemporaryPassword")),
            "addresses": user.get("addresses") or [],
            "preferences": user.get("preferences") or {},
            "createdAt": user.get("createdAt") or datetime.now(timezone.utc).isoformat(),
        }
    )
    return normalized


def _payload_data(payload: Any) -> dict[str, Any]:
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return {}


class AuthStore:
    """
    Session state for the signed-in user.

    Args:
        auth_api: Auth endpoints (built with the 401 refresh disabled).
        storage: Key-value store shared with the API client.
    """

    def __init__(self, auth_api: AuthAPI, storage: Any) -> None:
        self._api = auth_api
        self._storage = storage
        self._listeners: list[Callable[[AuthState], None]] = []
        self.last_rejection: str | None = None
        self.state = self._load_initial_state()

    # --- persistence ---

    def _read_stored_user(self) -> dict[str, Any] | None:
        raw = self._storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user is not valid JSON; removing it")
            self._storage.remove_item(USER_KEY)
            return None
        return user if isinstance(user, dict) else None

    def _load_initial_state(self) -> AuthState:
        access = self._storage.get_item(ACCESS_TOKEN_KEY)
        refresh = self._storage.get_item(REFRESH_TOKEN_KEY)
        user = self._read_stored_user()
        return AuthState(
            user=user,
            tokens=AuthTokens(access_token=access, refresh_token=refresh),
            is_authenticated=bool(access and user),
        )

    def _persist_session(self, user: dict[str, Any] | None, tokens: dict[str, Any]) -> None:
        if tokens.get("accessToken"):
            self._storage.set_item(ACCESS_TOKEN_KEY, tokens["accessToken"])
        if tokens.get("refreshToken"):
            self._storage.set_item(REFRESH_TOKEN_KEY, tokens["refreshToken"])
        if user is not None:
            self._storage.set_item(USER_KEY, json.dumps(user))

    def _clear(self) -> None:
        self.state = replace(
            self.state,
            user=None,
            is_authenticated=False,
            tokens=AuthTokens(),
            error=None,
        )
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY):
            self._storage.remove_item(key)

    # --- subscription ---

    def subscribe(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        """Register a state listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes: Any) -> None:
        self.state = replace(self.state, **changes)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("Auth state listener failed")

    def _reject(self, message: str) -> None:
        self.last_rejection = message
        return None

    # --- role helpers ---

    @property
    def role(self) -> str | None:
        user = self.state.user
        return user.get("role") if user else None

    def is_admin(self) -> bool:
        return self.role == "admin"

    def is_employee(self) -> bool:
        return self.role == "employee"

    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def dashboard_prefix(self) -> str:
        if self.is_admin():
            return "/admin"
        if self.is_employee():
            return "/employee"
        return ""

    # --- actions ---

    def _fulfil_session(self, payload: Any) -> dict[str, Any]:
        data = _payload_data(payload)
        user = ensure_user_ids(data.get("user"))
        tokens = data.get("tokens") or {}
        self._persist_session(user, tokens)
        self._set(
            is_loading=False,
            user=user,
            tokens=AuthTokens(tokens.get("accessToken"), tokens.get("refreshToken")),
            is_authenticated=True,
            error=None,
        )
        return payload

    def login(self, email: str, password: str, totp_code: str | None = None) -> dict[str, Any] | None:
        """Sign in. A rejection keeps the current state and sets `error`."""
        self.last_rejection = None
        self._set(is_loading=True, error=None)
        try:
            payload = self._api.login(email, password, totp_code)
        except ApiError as e:
            message = error_message(e, "Login failed")
            self._set(is_loading=False, error=message)
            return self._reject(message)
        logger.info("Signed in as %s", email)
        return self._fulfil_session(payload)

    def register(self, data: dict[str, Any]) -> dict[str, Any] | None:
        """Create an account and sign in. A rejection clears any stored session."""
        self.last_rejection = None
        self._set(is_loading=True, error=None)
        try:
            payload = self._api.register(data)
        except ApiError as e:
            message = error_message(e, "Registration failed")
            self._clear()
            self._set(is_loading=False, error=message)
            return self._reject(message)
        logger.info("Registered %s", data.get("email"))
        return self._fulfil_session(payload)

    def _store_refreshed(self, body: Any) -> tuple[str, str | None]:
        """Persist tokens from a refresh response; keeps the stored refresh token unless rotated."""
        access, refresh = refreshed_tokens(body)
        if not access:
            raise ApiError("Token refresh returned no access token", data=body)
        self._storage.set_item(ACCESS_TOKEN_KEY, access)
        if refresh:
            self._storage.set_item(REFRESH_TOKEN_KEY, refresh)
        return access, self._storage.get_item(REFRESH_TOKEN_KEY)

    def _fetch_current_user(self) -> dict[str, Any]:
        if not self._storage.get_item(ACCESS_TOKEN_KEY):
            raise ApiError(NO_ACCESS_TOKEN)
        try:
            return self._api.get_current_user()
        except ApiError as e:
            if e.is_network_error:
                raise
            if e.status not in (401, 403):
                raise
            refresh = self._storage.get_item(REFRESH_TOKEN_KEY)
            if not (refresh and e.code == TOKEN_EXPIRED_CODE):
                raise ApiError(SESSION_EXPIRED, status=e.status) from e
            try:
                self._store_refreshed(self._api.refresh_token(refresh))
                return self._api.get_current_user()
            except ApiError as refresh_error:
                logger.warning("Session refresh failed: %s", refresh_error)
                raise ApiError(SESSION_EXPIRED, status=e.status) from refresh_error

    def get_current_user(self) -> dict[str, Any] | None:
        """
        Reload the signed-in user from the backend.

        Missing tokens and network failures leave the session untouched. An
        expired session is refreshed once when the backend says the token
        expired; any other 401/403 signs the user out.
        """
        self.last_rejection = None
        self._set(is_loading=True)
        try:
            payload = self._fetch_current_user()
        except ApiError as e:
            if e.message == NO_ACCESS_TOKEN or e.is_network_error:
                self._set(is_loading=False, error=None)
                return self._reject(NO_ACCESS_TOKEN)
            if e.message == SESSION_EXPIRED:
                logger.info("Session expired; clearing auth state")
                self._clear()
                self._set(is_loading=False, error=SESSION_EXPIRED)
                return self._reject(SESSION_EXPIRED)
            message = error_message(e, "Failed to get current user")
            self._set(is_loading=False, error=message)
            return self._reject(message)

        user = ensure_user_ids(_payload_data(payload).get("user"))
        if user is not None:
            self._storage.set_item(USER_KEY, json.dumps(user))
        tokens = AuthTokens(
            self._storage.get_item(ACCESS_TOKEN_KEY),
            self._storage.get_item(REFRESH_TOKEN_KEY),
        )
        self._set(is_loading=False, user=user, tokens=tokens, is_authenticated=True, error=None)
        return payload

    def refresh_token(self) -> dict[str, Any] | None:
        """Exchange the stored refresh token. A rejection signs the user out."""
        self.last_rejection = None
        try:
            tokens = self._api.refresh_token()
            access, refresh = self._store_refreshed(tokens)
        except ApiError as e:
            logger.warning("Token refresh failed: %s", e)
            self._clear()
            self._notify()
            return self._reject(error_message(e, "Token refresh failed"))
        self._set(tokens=AuthTokens(access, refresh))
        logger.info("Session tokens refreshed")
        return tokens

    def logout(self) -> None:
        """Sign out. Local state is cleared even when the server call fails."""
        try:
            self._api.logout()
        except ApiError as e:
            logger.warning("Server logout failed: %s", e.message)
        self._clear()
        self._notify()
        logger.info("Signed out")

    def update_password(
        self,
        new_password: str,
        current_password: str | None = None,
        is_first_login: bool | None = None,
    ) -> dict[str, Any] | None:
        self.last_rejection = None
        self._set(is_loading=True, error=None)
        try:
            payload = self._api.update_password(new_password, current_password, is_first_login)
        except ApiError as e:
            message = error_message(e, "Failed to update password")
            self._set(is_loading=False, error=message)
            return self._reject(message)
        user = self.state.user
        if user is not None:
            user = {**user, "isTemporaryPassword": False}
            self._storage.set_item(USER_KEY, json.dumps(user))
        self._set(is_loading=False, error=None, user=user)
        return payload

    # --- reducers ---

    def clear_error(self) -> None:
        self._set(error=None)

    def clear_auth_state(self) -> None:
        self._clear()
        self._notify()

    def initialize_auth(self) -> None:
        """Re-hydrate from storage when a full session (both tokens and user) is stored."""
        token = self._storage.get_item(ACCESS_TOKEN_KEY)
        refresh = self._storage.get_item(REFRESH_TOKEN_KEY)
        raw = self._storage.get_item(USER_KEY)
        if not (token and refresh and raw):
            return
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user is not valid JSON; clearing session")
            self.clear_auth_state()
            return
        self._set(
            tokens=AuthTokens(token, refresh),
            user=ensure_user_ids(user),
            is_authenticated=True,
        )
