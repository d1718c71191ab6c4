"""
Tests for form validation: rule order, live checks, backend error mapping, debouncing.
"""

from __future__ import annotations

import random
import threading

import pytest

from dollerselectro.domains import validation
from dollerselectro.domains.validation import (
    MESSAGE_POOLS,
    VALID,
    Debouncer,
    check_email_live,
    check_names_live,
    check_password_live,
    check_password_match_live,
    check_phone_live,
    check_username_live,
    classify_submission_error,
    completion_level,
    glow_intensity,
    validate_login,
    validate_registration,
)

GOOD = dict(
    first_name="Ada",
    last_name="Lovelace",
    email="ada@shop.lk",
    username="ada_l",
    password="Secret1",
    confirm_password="Secret1",
)


def _register(**overrides: str) -> validation.ValidationResult:
    fields = {**GOOD, **overrides}
    phone = fields.pop("phone", "")
    return validate_registration(phone=phone, **fields)


def test_every_pool_has_messages() -> None:
    assert len(MESSAGE_POOLS) == 14
    assert all(len(pool) >= 5 for pool in MESSAGE_POOLS.values())


def test_pick_message_is_repeatable_with_seeded_rng() -> None:
    a = validation.pick_message("invalid_email", random.Random(7))
    b = validation.pick_message("invalid_email", random.Random(7))
    assert a == b
    assert a in MESSAGE_POOLS["invalid_email"]


@pytest.mark.parametrize(
    "email,password,kind",
    [
        ("", "", "empty_form"),
        ("not-an-email", "x", "invalid_email"),
        ("", "secret", "invalid_email"),
        ("ada@shop.lk", "", "missing_password"),
    ],
)
def test_validate_login_failures(email: str, password: str, kind: str) -> None:
    result = validate_login(email, password)
    assert not result.ok
    assert result.kind == kind
    assert result.message in MESSAGE_POOLS[kind]


def test_validate_login_accepts_any_password() -> None:
    assert validate_login("ada@shop.lk", "x") == VALID


def test_registration_valid() -> None:
    assert _register() == VALID
    assert _register(phone="0771234567") == VALID


@pytest.mark.parametrize(
    "overrides,kind",
    [
        ({"username": ""}, "missing_fields"),
        ({"first_name": "Ada2"}, "invalid_name"),
        ({"username": "ab"}, "invalid_username"),
        ({"username": "ada!"}, "invalid_username"),
        ({"email": "ada@shop"}, "invalid_email"),
        ({"phone": "077-123"}, "invalid_phone"),
        ({"password": "Ab1", "confirm_password": "Ab1"}, "weak_password"),
        ({"password": "secret12", "confirm_password": "secret12"}, "invalid_password_format"),
        ({"confirm_password": "Secret2"}, "password_mismatch"),
    ],
)
def test_registration_failures(overrides: dict, kind: str) -> None:
    assert _register(**overrides).kind == kind


def test_registration_first_failure_wins() -> None:
    # bad name and bad email: the name rule comes first
    assert _register(first_name="R2D2", email="nope").kind == "invalid_name"


def test_live_checks_ignore_empty_and_short_input() -> None:
    assert check_email_live("abc") == VALID
    assert check_email_live("abcd").kind == "invalid_email"
    assert check_names_live("", "") == VALID
    assert check_names_live("Ada", "L0velace").kind == "invalid_name"
    assert check_username_live("") == VALID
    assert check_username_live("a b").kind == "invalid_username"
    assert check_phone_live("") == VALID
    assert check_phone_live("12345").kind == "invalid_phone"
    assert check_password_live("") == VALID
    assert check_password_live("abc").kind == "weak_password"
    assert check_password_live("abcdef").kind == "invalid_password_format"
    assert check_password_live("Abcdef1") == VALID
    assert check_password_match_live("Secret1", "") == VALID
    assert check_password_match_live("Secret1", "Secret2").kind == "password_mismatch"


@pytest.mark.parametrize(
    "message,mode,kind",
    [
        ("User already exists", "register", "email_exists"),
        ("Username is taken", "register", "username_taken"),
        ("First name is required", "register", "missing_fields"),
        ("Password too weak", "register", "weak_password"),
        ("Something odd", "register", "missing_fields"),
        ("User not found", "login", "account_not_found"),
        ("Invalid credentials", "login", "wrong_password"),
    ],
)
def test_classify_submission_error(message: str, mode: str, kind: str) -> None:
    assert classify_submission_error(message, mode).kind == kind


def test_classify_empty_error_is_valid() -> None:
    assert classify_submission_error("", "login") == VALID


def test_completion_level_and_glow() -> None:
    assert completion_level("login", {"email": "a@b.co", "password": ""}) == 50
    assert completion_level("register", {**GOOD, "username": "  "}) == pytest.approx(500 / 6)
    assert glow_intensity(0) == pytest.approx(0.2)
    assert glow_intensity(100) == pytest.approx(1.0)


def test_debouncer_fires_once_with_latest_args() -> None:
    calls: list[str] = []
    done = threading.Event()

    def callback(value: str) -> None:
        calls.append(value)
        done.set()

    debouncer = Debouncer(callback, delay=0.05)
    debouncer.trigger("a")
    debouncer.trigger("ab")
    debouncer.trigger("abc")
    assert debouncer.pending

    assert done.wait(2.0)
    assert calls == ["abc"]
    assert not debouncer.pending


def test_debouncer_cancel() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, delay=0.05)
    debouncer.trigger("x")
    debouncer.cancel()
    assert not debouncer.pending
    threading.Event().wait(0.15)
    assert calls == []
