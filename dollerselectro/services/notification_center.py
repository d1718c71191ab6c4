"""
Bell-menu notifications for the signed-in user.

Keeps the five most recent notifications and the unread count, refreshed on a
fixed interval while someone is signed in.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable

from dollerselectro.domains.notifications import NotificationRoute, badge_text, route_for_notification
from dollerselectro.infrastructure.api.chat import ChatAPI
from dollerselectro.infrastructure.api.client import ApiError
from dollerselectro.services.polling import Poller
from dollerselectro.services.toast import Toast, log_toast
from dollerselectro.utils.config import notification_poll_seconds
from dollerselectro.utils.logger import get_logger

logger = get_logger()

FEED_PAGE = 1
FEED_LIMIT = 5


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class NotificationCenter:
    def __init__(
        self,
        chat_api: ChatAPI,
        current_user: Callable[[], dict[str, Any] | None],
        toast: Toast = log_toast,
    ) -> None:
        self._api = chat_api
        self._current_user = current_user
        self._toast = toast
        self._lock = threading.Lock()
        self._poller: Poller | None = None
        self.notifications: list[dict[str, Any]] = []
        self.unread_count = 0
        self.is_loading = False

    @property
    def badge(self) -> str:
        return badge_text(self.unread_count)

    def refresh(self) -> None:
        """Reload the latest notifications. Skipped when nobody is signed in."""
        if not self._current_user():
            logger.debug("No user signed in; skipping notification refresh")
            return
        self.is_loading = True
        try:
            response = self._api.get_notifications(FEED_PAGE, FEED_LIMIT, False)
        except ApiError as e:
            logger.warning("Notification refresh failed: %s", e.message)
            return
        finally:
            self.is_loading = False
        if not response.get("success"):
            logger.warning("Notification refresh returned success=false")
            return
        data = response.get("data") or {}
        with self._lock:
            self.notifications = list(data.get("notifications") or [])
            self.unread_count = int(data.get("unreadCount") or 0)

    def mark_as_read(self, notification_id: str) -> bool:
        try:
            response = self._api.mark_notification_read(notification_id)
        except ApiError as e:
            logger.warning("Mark notification %s read failed: %s", notification_id, e.message)
            self._toast("error", "Failed to mark notification as read")
            return False
        if not response.get("success"):
            return False
        read_at = _now_iso()
        with self._lock:
            self.notifications = [
                {**n, "isRead": True, "readAt": read_at} if n.get("_id") == notification_id else n
                for n in self.notifications
            ]
            self.unread_count = max(0, self.unread_count - 1)
        return True

    def mark_all_as_read(self) -> bool:
        try:
            response = self._api.mark_all_notifications_read()
        except ApiError as e:
            logger.warning("Mark all notifications read failed: %s", e.message)
            self._toast("error", "Failed to mark all notifications as read")
            return False
        if not response.get("success"):
            return False
        read_at = _now_iso()
        with self._lock:
            self.notifications = [{**n, "isRead": True, "readAt": read_at} for n in self.notifications]
            self.unread_count = 0
        self._toast("success", "All notifications marked as read")
        return True

    def open(self, notification: dict[str, Any]) -> NotificationRoute:
        """Mark an unread notification read and work out where it leads."""
        if not notification.get("isRead") and notification.get("_id"):
            self.mark_as_read(notification["_id"])
        user = self._current_user() or {}
        route = route_for_notification(notification, user.get("role"))
        if route.toast:
            self._toast("success", route.toast)
        return route

    def start_polling(self, interval: float | None = None) -> None:
        if self._poller is not None and self._poller.running:
            return
        self._poller = Poller(
            self.refresh,
            interval if interval is not None else notification_poll_seconds(),
            name="notifications",
        )
        self._poller.start()

    def stop_polling(self) -> None:
        if self._poller is not None:
            self._poller.stop()
            self._poller = None
