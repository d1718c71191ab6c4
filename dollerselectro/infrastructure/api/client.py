"""
HTTP client for the DollersElectro backend.

Wraps `requests` with the shop's conventions: JSON bodies, a bearer token read
from client storage on every request, and a single silent token refresh when
the backend answers 401.
"""

from __future__ import annotations

from typing import Any, Callable

import requests

from dollerselectro.infrastructure.storage.local_storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    MemoryStorage,
)
from dollerselectro.utils.config import api_base_url, request_timeout
from dollerselectro.utils.logger import get_logger

logger = get_logger()

LOGIN_ROUTE = "/login"
DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ApiError(RuntimeError):
    """Raised for any failed backend call (HTTP error status or transport failure)."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        data: Any = None,
        server_message: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.data = data
        self.server_message = server_message

    @property
    def is_network_error(self) -> bool:
        return self.status is None

    @classmethod
    def from_response(cls, response: Any) -> "ApiError":
        status = getattr(response, "status_code", None)
        data: Any = None
        try:
            data = response.json()
        except ValueError:
            data = None
        message = None
        code = None
        if isinstance(data, dict):
            message = data.get("message") or None
            code = data.get("code") or None
        if message:
            return cls(str(message), status=status, code=code, data=data, server_message=True)
        reason = getattr(response, "reason", "") or f"Request failed with status code {status}"
        return cls(str(reason), status=status, code=code, data=data)

    @classmethod
    def from_transport(cls, exc: Exception) -> "ApiError":
        return cls(str(exc) or exc.__class__.__name__)


def error_message(exc: BaseException, fallback: str) -> str:
    """Message to show the user: the server's own message when there is one."""
    if isinstance(exc, ApiError) and exc.server_message and exc.message:
        return exc.message
    return fallback


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
    for k, v in cleaned.items():
        if isinstance(v, bool):
            cleaned[k] = "true" if v else "false"
    return cleaned or None


def refreshed_tokens(body: Any) -> tuple[str | None, str | None]:
    """
    Access and refresh token from an `/auth/refresh` body.

    Accepts the tokens at the top level or inside the `data` envelope. The
    refresh token is None when the server did not rotate it.
    """
    if not isinstance(body, dict):
        return None, None
    data = body.get("data") if isinstance(body.get("data"), dict) else {}
    access = body.get("accessToken") or data.get("accessToken")
    refresh = body.get("refreshToken") or data.get("refreshToken")
    return access or None, refresh or None


def _decode(response: Any) -> Any:
    if not getattr(response, "content", b"x"):
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


class ApiClient:
    """
    Session-scoped REST client.

    Args:
        base_url: Backend root, e.g. ``http://localhost:5001/api``.
        storage: Key-value store holding ``accessToken`` / ``refreshToken``.
        timeout: Per-request timeout in seconds.
        refresh_on_401: Attempt one token refresh and retry on 401.
        on_unauthorized: Called with the login route when a refresh fails.
    """

    def __init__(
        self,
        base_url: str | None = None,
        storage: Any = None,
        timeout: float | None = None,
        refresh_on_401: bool = True,
        on_unauthorized: Callable[[str], None] | None = None,
    ) -> None:
        self.base_url = (base_url or api_base_url()).rstrip("/")
        self.storage = storage if storage is not None else MemoryStorage()
        self.timeout = timeout if timeout is not None else request_timeout()
        self.refresh_on_401 = refresh_on_401
        self.on_unauthorized = on_unauthorized

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        token = self.storage.get_item(ACCESS_TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def _send(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            return requests.request(
                method,
                url,
                json=json,
                params=_clean_params(params),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError.from_transport(e) from e

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        _retry: bool = False,
    ) -> Any:
        """Send one request and return the decoded JSON body. Raises ApiError."""
        response = self._send(method, path, json=json, params=params, headers=self._headers(headers))
        status = response.status_code
        if 200 <= status < 300:
            return _decode(response)

        error = ApiError.from_response(response)
        if status == 401 and self.refresh_on_401 and not _retry:
            refresh_token = self.storage.get_item(REFRESH_TOKEN_KEY)
            if not refresh_token:
                raise error
            access_token = self._refresh_access_token(refresh_token)
            retry_headers = dict(headers or {})
            retry_headers["Authorization"] = f"Bearer {access_token}"
            return self.request(method, path, json=json, params=params, headers=retry_headers, _retry=True)

        logger.debug("%s %s -> %s: %s", method, path, status, error.message)
        raise error

    def _refresh_access_token(self, refresh_token: str) -> str:
        """Exchange the refresh token for a new access token without interceptors."""
        url = f"{self.base_url}/auth/refresh"
        try:
            response = requests.post(
                url,
                json={"refreshToken": refresh_token},
                headers=dict(DEFAULT_HEADERS),
                timeout=self.timeout,
            )
            if not 200 <= response.status_code < 300:
                raise ApiError.from_response(response)
            body = _decode(response)
            access_token, new_refresh = refreshed_tokens(body)
            if not access_token:
                raise ApiError("Token refresh returned no access token", status=response.status_code, data=body)
        except requests.RequestException as e:
            self._drop_session(ApiError.from_transport(e))
            raise ApiError.from_transport(e) from e
        except ApiError as e:
            self._drop_session(e)
            raise

        self.storage.set_item(ACCESS_TOKEN_KEY, access_token)
        if new_refresh:
            self.storage.set_item(REFRESH_TOKEN_KEY, new_refresh)
        logger.info("Access token refreshed")
        return access_token

    def _drop_session(self, error: ApiError) -> None:
        logger.warning("Token refresh failed: %s", error.message)
        self.storage.remove_item(ACCESS_TOKEN_KEY)
        self.storage.remove_item(REFRESH_TOKEN_KEY)
        if self.on_unauthorized is not None:
            self.on_unauthorized(LOGIN_ROUTE)

    def get(self, path: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> Any:
        return self.request("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self.request("POST", path, json=json, params=params, headers=headers)

    def put(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self.request("PUT", path, json=json, params=params, headers=headers)

    def patch(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self.request("PATCH", path, json=json, params=params, headers=headers)

    def delete(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return self.request("DELETE", path, json=json, params=params, headers=headers)
