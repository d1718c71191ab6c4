"""
Tests for LiveChat: refresh, replies, typing indicator timeout.
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from dollerselectro.infrastructure.api.client import ApiError
from dollerselectro.services.live_chat import LiveChat

MESSAGE = {
    "_id": "m1",
    "subject": "Broken switch",
    "message": "My switch sparks",
    "replies": [
        {"message": "We are on it", "isInternal": False},
        {"message": "Customer seems upset", "isInternal": True},
    ],
}


@pytest.fixture
def messages_api() -> MagicMock:
    api = MagicMock()
    api.get_message.return_value = {"success": True, "data": {"message": MESSAGE}}
    api.reply_to_message.return_value = {"success": True}
    return api


@pytest.fixture
def chat_api() -> MagicMock:
    return MagicMock()


@pytest.fixture
def toasts() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def chat(messages_api: MagicMock, chat_api: MagicMock, toasts: list) -> LiveChat:
    live = LiveChat(messages_api, chat_api, "m1", toast=lambda kind, text: toasts.append((kind, text)),
                    typing_timeout=1.0)
    yield live
    live.close()


def test_refresh_loads_message_and_hides_internal_replies(chat: LiveChat, messages_api: MagicMock) -> None:
    chat.refresh()
    messages_api.get_message.assert_called_once_with("m1")
    assert chat.message["subject"] == "Broken switch"
    assert [r["message"] for r in chat.replies] == ["We are on it"]


def test_refresh_error_keeps_message(chat: LiveChat, messages_api: MagicMock) -> None:
    chat.refresh()
    messages_api.get_message.side_effect = ApiError("Network Error")
    chat.refresh()
    assert chat.message is not None


def test_send_reply_posts_and_refreshes(chat: LiveChat, messages_api: MagicMock, toasts: list) -> None:
    chat.refresh()
    chat.on_input("Thanks!")

    assert chat.send_reply()

    messages_api.reply_to_message.assert_called_once_with("m1", {"message": "Thanks!", "isInternal": False})
    assert chat.reply_text == ""
    assert messages_api.get_message.call_count == 2
    assert toasts == [("success", "Reply sent successfully!")]


def test_send_reply_ignores_blank_text(chat: LiveChat, messages_api: MagicMock) -> None:
    chat.refresh()
    assert not chat.send_reply("   ")
    messages_api.reply_to_message.assert_not_called()


def test_send_reply_needs_loaded_message(chat: LiveChat, messages_api: MagicMock) -> None:
    assert not chat.send_reply("hello")
    messages_api.reply_to_message.assert_not_called()


def test_send_reply_failure_toasts(chat: LiveChat, messages_api: MagicMock, toasts: list) -> None:
    chat.refresh()
    messages_api.reply_to_message.side_effect = ApiError("boom", status=500)
    assert not chat.send_reply("hello")
    assert toasts == [("error", "Failed to send reply")]
    assert not chat.is_submitting


def test_typing_pushed_only_on_change(chat: LiveChat, chat_api: MagicMock) -> None:
    chat.on_input("h")
    chat.on_input("he")
    chat.on_input("hel")
    chat_api.update_typing_status.assert_called_once_with("m1", True)
    chat.on_input("")
    chat_api.update_typing_status.assert_called_with("m1", False)
    assert chat_api.update_typing_status.call_count == 2


def test_typing_expires_after_idle(chat: LiveChat, chat_api: MagicMock) -> None:
    stopped = threading.Event()

    def record(_message_id: str, is_typing: bool) -> dict:
        if not is_typing:
            stopped.set()
        return {}

    chat_api.update_typing_status.side_effect = record
    chat.typing_timeout = 0.05
    chat.on_input("hello")
    assert chat.is_typing

    assert stopped.wait(2.0)
    assert not chat.is_typing


def test_superseded_typing_timer_does_not_reset_state(chat: LiveChat, chat_api: MagicMock) -> None:
    chat.set_typing(True)
    stale = chat._typing_generation
    chat.set_typing(False)
    chat.set_typing(True)
    chat._typing_expired(stale)
    assert chat.is_typing
    assert chat_api.update_typing_status.call_count == 3


def test_concurrent_typing_pushes_once(chat: LiveChat, chat_api: MagicMock) -> None:
    threads = [threading.Thread(target=chat.set_typing, args=(True,)) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    chat_api.update_typing_status.assert_called_once_with("m1", True)


def test_typing_push_errors_are_ignored(chat: LiveChat, chat_api: MagicMock) -> None:
    chat_api.update_typing_status.side_effect = ApiError("Network Error")
    chat.set_typing(True)
    assert chat.is_typing
