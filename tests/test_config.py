"""
Tests for config accessors and logger setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dollerselectro.utils import config
from dollerselectro.utils.logger import get_logger, setup_logger


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_config", lambda: None)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("DOLLERS_API_URL", "DOLLERS_REQUEST_TIMEOUT", "NOTIFICATION_POLL_SECONDS", "CHAT_POLL_SECONDS"):
        monkeypatch.delenv(key, raising=False)
    assert config.api_base_url() == "http://localhost:5001/api"
    assert config.request_timeout() == 10.0
    assert config.notification_poll_seconds() == 10
    assert config.chat_poll_seconds() == 3


def test_overrides_and_invalid_numbers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DOLLERS_API_URL", "https://api.dollerselectro.lk/api/")
    monkeypatch.setenv("NOTIFICATION_POLL_SECONDS", "not-a-number")
    monkeypatch.setenv("DOLLERS_STORAGE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.api_base_url() == "https://api.dollerselectro.lk/api"
    assert config.notification_poll_seconds() == 10
    assert config.storage_path() == tmp_path / "s.json"
    assert config.log_level() == "DEBUG"


def test_get_required_raises_when_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DOLLERS_SECRET", raising=False)
    with pytest.raises(ValueError):
        config.get_required("DOLLERS_SECRET")


def test_setup_logger_is_idempotent(tmp_path: Path) -> None:
    log = setup_logger("dollers_electro_test", level="DEBUG", log_file=tmp_path / "app.log")
    again = setup_logger("dollers_electro_test")
    assert log is again
    assert len(log.handlers) == 2
    assert log.level == logging.DEBUG
    assert get_logger("dollers_electro_test") is log
