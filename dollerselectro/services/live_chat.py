"""Live support chat on a single contact message."""

from __future__ import annotations

import threading
from typing import Any

from dollerselectro.domains.notifications import format_typing_text
from dollerselectro.infrastructure.api.chat import ChatAPI
from dollerselectro.infrastructure.api.client import ApiError
from dollerselectro.infrastructure.api.messages import MessagesAPI
from dollerselectro.services.polling import Poller
from dollerselectro.services.toast import Toast, log_toast
from dollerselectro.utils.config import chat_poll_seconds
from dollerselectro.utils.logger import get_logger

logger = get_logger()

TYPING_TIMEOUT_SECONDS = 3.0


class LiveChat:
    """
    Conversation view of one support message.

    The message (with its replies) is re-fetched on a short interval; typing
    state is pushed to the server only when it changes and falls back to
    "not typing" after a few idle seconds.
    """

    def __init__(
        self,
        messages_api: MessagesAPI,
        chat_api: ChatAPI,
        message_id: str,
        toast: Toast = log_toast,
        typing_timeout: float = TYPING_TIMEOUT_SECONDS,
    ) -> None:
        self._messages = messages_api
        self._chat = chat_api
        self.message_id = message_id
        self._toast = toast
        self.typing_timeout = typing_timeout
        self.message: dict[str, Any] | None = None
        self.typing_users: list[dict[str, Any]] = []
        self.reply_text = ""
        self.is_typing = False
        self.is_submitting = False
        self._typing_timer: threading.Timer | None = None
        self._typing_generation = 0
        self._lock = threading.Lock()
        self._poller: Poller | None = None

    @property
    def replies(self) -> list[dict[str, Any]]:
        if not self.message:
            return []
        return [r for r in self.message.get("replies") or [] if not r.get("isInternal")]

    @property
    def typing_text(self) -> str:
        return format_typing_text(self.typing_users)

    def refresh(self) -> None:
        try:
            response = self._messages.get_message(self.message_id)
        except ApiError as e:
            logger.warning("Chat refresh for %s failed: %s", self.message_id, e.message)
            return
        if response.get("success"):
            data = response.get("data") or {}
            self.message = data.get("message")
            self.typing_users = []

    def send_reply(self, text: str | None = None) -> bool:
        """Post a customer-visible reply. Returns True when the server accepted it."""
        body = self.reply_text if text is None else text
        if not body.strip() or not self.message:
            return False
        self.is_submitting = True
        try:
            response = self._messages.reply_to_message(self.message_id, {"message": body, "isInternal": False})
        except ApiError as e:
            logger.warning("Reply to %s failed: %s", self.message_id, e.message)
            self._toast("error", "Failed to send reply")
            return False
        finally:
            self.is_submitting = False
        if not response.get("success"):
            return False
        self.reply_text = ""
        self.refresh()
        self._toast("success", "Reply sent successfully!")
        return True

    def _push_typing(self, is_typing: bool) -> None:
        try:
            self._chat.update_typing_status(self.message_id, is_typing)
        except ApiError as e:
            logger.debug("Typing status update failed: %s", e.message)

    def _typing_expired(self, generation: int) -> None:
        with self._lock:
            # A timer superseded by a later set_typing must not reset the state.
            if generation != self._typing_generation or not self.is_typing:
                return
            self._typing_timer = None
            self.is_typing = False
        self._push_typing(False)

    def set_typing(self, is_typing: bool) -> None:
        with self._lock:
            changed = is_typing != self.is_typing
            self.is_typing = is_typing
            self._typing_generation += 1
            if self._typing_timer is not None:
                self._typing_timer.cancel()
                self._typing_timer = None
            if is_typing:
                self._typing_timer = threading.Timer(
                    self.typing_timeout, self._typing_expired, args=(self._typing_generation,)
                )
                self._typing_timer.daemon = True
                self._typing_timer.start()
        if changed:
            self._push_typing(is_typing)

    def on_input(self, text: str) -> None:
        self.reply_text = text
        self.set_typing(len(text) > 0)

    def start_polling(self, interval: float | None = None) -> None:
        if self._poller is not None and self._poller.running:
            return
        self._poller = Poller(
            self.refresh,
            interval if interval is not None else chat_poll_seconds(),
            name=f"chat-{self.message_id}",
        )
        self._poller.start()

    def close(self) -> None:
        if self._poller is not None:
            self._poller.stop()
            self._poller = None
        with self._lock:
            if self._typing_timer is not None:
                self._typing_timer.cancel()
                self._typing_timer = None
