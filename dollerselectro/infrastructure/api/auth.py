"""
Authentication endpoints.

The auth client never refreshes on 401 by itself; session expiry is handled by
the auth store, which knows whether a refresh is worth attempting.
"""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient, ApiError
from dollerselectro.infrastructure.storage.local_storage import REFRESH_TOKEN_KEY
from dollerselectro.utils.logger import get_logger

logger = get_logger()


class AuthAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    @classmethod
    def for_storage(cls, base_url: str | None = None, storage: Any = None, timeout: float | None = None) -> "AuthAPI":
        """Build an AuthAPI on its own client with the 401 refresh disabled."""
        return cls(ApiClient(base_url=base_url, storage=storage, timeout=timeout, refresh_on_401=False))

    def register(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/auth/register", json=data)

    def login(self, email: str, password: str, totp_code: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"email": email, "password": password}
        if totp_code:
            payload["totpCode"] = totp_code
        try:
            return self._client.post("/auth/login", json=payload)
        except ApiError as e:
            logger.info("Login rejected for %s: %s", email, e.message)
            raise

    def logout(self) -> None:
        try:
            self._client.post("/auth/logout")
        except ApiError as e:
            if e.status != 401:
                raise
            # Expired session: the public endpoint still clears server cookies.
            self._client.post("/auth/logout-public")

    def get_current_user(self) -> dict[str, Any]:
        return self._client.get("/auth/me")

    def check_session(self) -> dict[str, Any]:
        return self._client.get("/auth/session")

    def refresh_token(self, token: str | None = None) -> dict[str, Any]:
        token = token or self._client.storage.get_item(REFRESH_TOKEN_KEY)
        return self._client.post("/auth/refresh", json={"refreshToken": token})

    def verify_email(self, token: str) -> dict[str, Any]:
        return self._client.post("/auth/verify-email", json={"token": token})

    def resend_verification(self, email: str) -> dict[str, Any]:
        return self._client.post("/auth/resend-verification", json={"email": email})

    def forgot_password(self, email: str) -> dict[str, Any]:
        return self._client.post("/auth/forgot-password", json={"email": email})

    def reset_password(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/auth/reset-password", json=data)

    def setup_2fa(self) -> dict[str, Any]:
        return self._client.post("/auth/setup-2fa")

    def enable_2fa(self, code: str) -> dict[str, Any]:
        return self._client.post("/auth/enable-2fa", json={"code": code})

    def disable_2fa(self, code: str) -> dict[str, Any]:
        return self._client.post("/auth/disable-2fa", json={"code": code})

    def update_password(
        self,
        new_password: str,
        current_password: str | None = None,
        is_first_login: bool | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"newPassword": new_password}
        if current_password is not None:
            payload["currentPassword"] = current_password
        if is_first_login is not None:
            payload["isFirstLogin"] = is_first_login
        return self._client.put("/auth/update-password", json=payload)
