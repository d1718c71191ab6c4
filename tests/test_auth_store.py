"""
Tests for AuthStore: login/register, current-user refresh paths, logout, persistence.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from dollerselectro.infrastructure.api.client import ApiError
from dollerselectro.infrastructure.storage.local_storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
    MemoryStorage,
)
from dollerselectro.services.auth_store import (
    NO_ACCESS_TOKEN,
    SESSION_EXPIRED,
    AuthStore,
    ensure_user_ids,
)

USER = {"_id": "u1", "firstName": "Ada", "lastName": "Lovelace", "email": "ada@shop.lk", "role": "customer"}


def _session_payload(user: dict | None = None, access: str = "acc-1", refresh: str = "ref-1") -> dict:
    return {
        "success": True,
        "data": {"user": user or USER, "tokens": {"accessToken": access, "refreshToken": refresh}},
    }


@pytest.fixture
def api() -> MagicMock:
    return MagicMock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def signed_in_storage() -> MemoryStorage:
    return MemoryStorage(
        {ACCESS_TOKEN_KEY: "acc-1", REFRESH_TOKEN_KEY: "ref-1", USER_KEY: json.dumps(ensure_user_ids(USER))}
    )


def test_ensure_user_ids_fills_both_ids_and_defaults() -> None:
    user = ensure_user_ids({"id": "abc"})
    assert user["id"] == "abc"
    assert user["_id"] == "abc"
    assert user["role"] == "customer"
    assert user["isTemporaryPassword"] is False
    assert user["addresses"] == []
    assert ensure_user_ids(None) is None


def test_initial_state_requires_token_and_user(storage: MemoryStorage, api: MagicMock) -> None:
    storage.set_item(ACCESS_TOKEN_KEY, "acc")
    store = AuthStore(api, storage)
    assert not store.state.is_authenticated
    assert store.state.tokens.access_token == "acc"


def test_initial_state_drops_corrupt_user(storage: MemoryStorage, api: MagicMock) -> None:
    storage.set_item(ACCESS_TOKEN_KEY, "acc")
    storage.set_item(USER_KEY, "{broken")
    store = AuthStore(api, storage)
    assert store.state.user is None
    assert storage.get_item(USER_KEY) is None


def test_login_persists_session(storage: MemoryStorage, api: MagicMock) -> None:
    api.login.return_value = _session_payload()
    store = AuthStore(api, storage)

    payload = store.login("ada@shop.lk", "Secret1")

    assert payload is not None
    api.login.assert_called_once_with("ada@shop.lk", "Secret1", None)
    assert store.state.is_authenticated
    assert store.state.user["id"] == "u1"
    assert store.state.tokens.access_token == "acc-1"
    assert storage.get_item(ACCESS_TOKEN_KEY) == "acc-1"
    assert storage.get_item(REFRESH_TOKEN_KEY) == "ref-1"
    assert json.loads(storage.get_item(USER_KEY))["_id"] == "u1"
    assert not store.state.is_loading


def test_login_failure_keeps_state_and_sets_error(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.login.side_effect = ApiError("Invalid credentials", status=401, server_message=True)
    store = AuthStore(api, signed_in_storage)

    assert store.login("ada@shop.lk", "wrong") is None

    assert store.state.error == "Invalid credentials"
    assert store.last_rejection == "Invalid credentials"
    assert store.state.is_authenticated
    assert signed_in_storage.get_item(ACCESS_TOKEN_KEY) == "acc-1"


def test_login_failure_without_server_message(storage: MemoryStorage, api: MagicMock) -> None:
    api.login.side_effect = ApiError("Network Error")
    store = AuthStore(api, storage)
    store.login("ada@shop.lk", "x")
    assert store.state.error == "Login failed"


def test_register_failure_clears_session(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.register.side_effect = ApiError("Email already exists", status=400, server_message=True)
    store = AuthStore(api, signed_in_storage)

    assert store.register({"email": "ada@shop.lk"}) is None

    assert not store.state.is_authenticated
    assert store.state.user is None
    assert store.state.error == "Email already exists"
    assert signed_in_storage.keys() == []


def test_get_current_user_without_token_is_silent(storage: MemoryStorage, api: MagicMock) -> None:
    store = AuthStore(api, storage)
    assert store.get_current_user() is None
    assert store.last_rejection == NO_ACCESS_TOKEN
    assert store.state.error is None
    api.get_current_user.assert_not_called()


def test_get_current_user_success_updates_user(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.get_current_user.return_value = {"success": True, "data": {"user": {**USER, "firstName": "Augusta"}}}
    store = AuthStore(api, signed_in_storage)

    store.get_current_user()

    assert store.state.user["firstName"] == "Augusta"
    assert store.state.is_authenticated
    assert json.loads(signed_in_storage.get_item(USER_KEY))["firstName"] == "Augusta"


def test_get_current_user_network_error_keeps_session(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.get_current_user.side_effect = ApiError("Network Error")
    store = AuthStore(api, signed_in_storage)

    assert store.get_current_user() is None

    assert store.state.is_authenticated
    assert store.state.error is None
    assert signed_in_storage.get_item(ACCESS_TOKEN_KEY) == "acc-1"


def test_get_current_user_expired_token_refreshes_and_retries(
    signed_in_storage: MemoryStorage, api: MagicMock
) -> None:
    api.get_current_user.side_effect = [
        ApiError("jwt expired", status=401, code="TOKEN_EXPIRED"),
        {"success": True, "data": {"user": USER}},
    ]
    api.refresh_token.return_value = {"accessToken": "acc-2", "refreshToken": "ref-2"}
    store = AuthStore(api, signed_in_storage)

    assert store.get_current_user() is not None

    api.refresh_token.assert_called_once_with("ref-1")
    assert api.get_current_user.call_count == 2
    assert signed_in_storage.get_item(ACCESS_TOKEN_KEY) == "acc-2"
    assert store.state.tokens.refresh_token == "ref-2"
    assert store.state.is_authenticated


def test_get_current_user_401_without_expiry_code_signs_out(
    signed_in_storage: MemoryStorage, api: MagicMock
) -> None:
    api.get_current_user.side_effect = ApiError("Invalid token", status=401)
    store = AuthStore(api, signed_in_storage)

    store.get_current_user()

    api.refresh_token.assert_not_called()
    assert not store.state.is_authenticated
    assert store.state.error == SESSION_EXPIRED
    assert signed_in_storage.keys() == []


def test_get_current_user_failed_refresh_signs_out(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.get_current_user.side_effect = ApiError("jwt expired", status=401, code="TOKEN_EXPIRED")
    api.refresh_token.side_effect = ApiError("Invalid refresh token", status=401)
    store = AuthStore(api, signed_in_storage)

    store.get_current_user()

    assert store.last_rejection == SESSION_EXPIRED
    assert store.state.user is None
    assert signed_in_storage.get_item(REFRESH_TOKEN_KEY) is None


def test_get_current_user_server_error_keeps_session(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.get_current_user.side_effect = ApiError("Internal Server Error", status=500)
    store = AuthStore(api, signed_in_storage)

    store.get_current_user()

    assert store.state.error == "Failed to get current user"
    assert store.state.is_authenticated


def test_refresh_token_success_and_failure(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.refresh_token.return_value = {"accessToken": "acc-9", "refreshToken": "ref-9"}
    store = AuthStore(api, signed_in_storage)
    store.refresh_token()
    assert signed_in_storage.get_item(ACCESS_TOKEN_KEY) == "acc-9"
    assert store.state.tokens.access_token == "acc-9"

    api.refresh_token.side_effect = ApiError("expired", status=401)
    assert store.refresh_token() is None
    assert not store.state.is_authenticated
    assert signed_in_storage.keys() == []


def test_refresh_token_reads_data_envelope(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.refresh_token.return_value = {"success": True, "data": {"accessToken": "acc-new"}}
    store = AuthStore(api, signed_in_storage)
    assert store.refresh_token() is not None
    assert store.state.is_authenticated
    assert signed_in_storage.get_item(ACCESS_TOKEN_KEY) == "acc-new"
    assert signed_in_storage.get_item(REFRESH_TOKEN_KEY) == "ref-1"
    assert store.state.tokens.refresh_token == "ref-1"


def test_expired_token_retry_with_envelope_refresh(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.get_current_user.side_effect = [
        ApiError("jwt expired", status=401, code="TOKEN_EXPIRED"),
        {"success": True, "data": {"user": USER}},
    ]
    api.refresh_token.return_value = {"success": True, "data": {"accessToken": "acc-2"}}
    store = AuthStore(api, signed_in_storage)
    store.get_current_user()
    assert store.state.is_authenticated
    assert store.state.tokens.access_token == "acc-2"
    assert store.state.tokens.refresh_token == "ref-1"


def test_logout_clears_even_when_server_fails(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.logout.side_effect = ApiError("Server down", status=500)
    store = AuthStore(api, signed_in_storage)

    store.logout()

    assert not store.state.is_authenticated
    assert store.state.user is None
    assert signed_in_storage.keys() == []


def test_update_password_clears_temporary_flag(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    signed_in_storage.set_item(USER_KEY, json.dumps({**ensure_user_ids(USER), "isTemporaryPassword": True}))
    api.update_password.return_value = {"success": True}
    store = AuthStore(api, signed_in_storage)

    store.update_password("NewPass1", is_first_login=True)

    api.update_password.assert_called_once_with("NewPass1", None, True)
    assert store.state.user["isTemporaryPassword"] is False
    assert json.loads(signed_in_storage.get_item(USER_KEY))["isTemporaryPassword"] is False


def test_update_password_failure_sets_error(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    api.update_password.side_effect = ApiError("boom", status=500)
    store = AuthStore(api, signed_in_storage)
    assert store.update_password("NewPass1") is None
    assert store.state.error == "Failed to update password"


def test_initialize_auth_needs_full_session(storage: MemoryStorage, api: MagicMock) -> None:
    storage.set_item(ACCESS_TOKEN_KEY, "acc")
    storage.set_item(USER_KEY, json.dumps(USER))
    store = AuthStore(api, storage)
    store.state.is_authenticated = False
    store.initialize_auth()
    assert not store.state.is_authenticated

    storage.set_item(REFRESH_TOKEN_KEY, "ref")
    store.initialize_auth()
    assert store.state.is_authenticated
    assert store.state.user["id"] == "u1"


def test_initialize_auth_with_corrupt_user_clears(signed_in_storage: MemoryStorage, api: MagicMock) -> None:
    store = AuthStore(api, signed_in_storage)
    signed_in_storage.set_item(USER_KEY, "{broken")
    store.initialize_auth()
    assert not store.state.is_authenticated
    assert signed_in_storage.keys() == []


def test_subscribe_and_role_helpers(storage: MemoryStorage, api: MagicMock) -> None:
    api.login.return_value = _session_payload({**USER, "role": "admin"})
    store = AuthStore(api, storage)
    seen: list[bool] = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.is_authenticated))

    store.login("ada@shop.lk", "Secret1")
    assert seen[-1] is True
    assert store.is_admin() and store.is_staff()
    assert store.dashboard_prefix() == "/admin"

    unsubscribe()
    count = len(seen)
    store.clear_error()
    assert len(seen) == count


def test_failing_listener_does_not_break_store(storage: MemoryStorage, api: MagicMock) -> None:
    store = AuthStore(api, storage)

    def broken(_state) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(broken)
    store.clear_error()
    assert store.state.error is None
