"""
Tests for notification routing, time formatting and the NotificationCenter.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from dollerselectro.domains.notifications import (
    badge_text,
    format_notification_time,
    format_typing_text,
    is_user_typing,
    route_for_notification,
)
from dollerselectro.infrastructure.api.client import ApiError
from dollerselectro.services.notification_center import NotificationCenter

NOW = datetime(2024, 5, 20, 12, 0, tzinfo=timezone.utc)


def _feed(*items: dict[str, Any], unread: int = 0) -> dict[str, Any]:
    return {"success": True, "data": {"notifications": list(items), "unreadCount": unread}}


@pytest.mark.parametrize(
    "notification,role,expected",
    [
        ({"type": "message_reply", "title": "New reply"}, "customer", ("/my-messages", "Opening your messages...")),
        ({"type": "system", "title": "New message"}, "admin", ("/admin/messages", "Opening messages...")),
        ({"type": "order", "title": "Order placed"}, "employee", ("/employee/orders", "Opening orders...")),
        ({"type": "system", "title": "Payment slip uploaded"}, "admin",
         ("/admin/orders", "Opening payment verification...")),
        ({"type": "system", "title": "Bill ready"}, "customer", ("/orders", "Opening your orders...")),
        ({"type": "system", "title": "Low stock warning"}, "admin",
         ("/admin/low-stock-alerts", "Opening inventory...")),
        ({"type": "system", "title": "Low stock warning"}, "employee",
         ("/employee/products", "Opening inventory...")),
        ({"type": "system", "title": "Inventory low"}, "customer", (None, "Opening inventory...")),
        ({"type": "system", "title": "New customer"}, "admin", ("/admin/customers", "Opening customers...")),
        ({"type": "system", "title": "New customer"}, "employee", (None, None)),
        ({"type": "system", "title": "Employee added"}, "admin", ("/admin/employees", "Opening employees...")),
        ({"type": "system", "title": "Delivery scheduled"}, "employee",
         ("/employee/delivery", "Opening delivery...")),
        ({"type": "system", "title": "Promo launched"}, "customer", ("/promo-codes", "Opening promo codes...")),
        ({"type": "system", "title": "Welcome"}, "customer", ("/notifications", None)),
        ({"type": "system", "title": "Welcome"}, "admin", ("/admin/notifications", None)),
    ],
)
def test_route_for_notification(notification: dict, role: str, expected: tuple) -> None:
    assert tuple(route_for_notification(notification, role)) == expected


def test_order_rule_beats_later_rules() -> None:
    # "order" and "delivery" both match; the order rule is checked first
    route = route_for_notification({"type": "system", "title": "Order out for delivery"}, "admin")
    assert route.path == "/admin/orders"


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2), "2d ago"),
        (timedelta(days=8), "05/12/2024"),
    ],
)
def test_format_notification_time(delta: timedelta, expected: str) -> None:
    assert format_notification_time((NOW - delta).isoformat(), now=NOW) == expected


def test_format_notification_time_accepts_zulu_suffix() -> None:
    assert format_notification_time("2024-05-20T11:00:00Z", now=NOW) == "1h ago"


def test_badge_text() -> None:
    assert badge_text(0) == ""
    assert badge_text(7) == "7"
    assert badge_text(99) == "99"
    assert badge_text(150) == "99+"


def test_typing_text() -> None:
    ada = {"user": {"_id": "u1", "firstName": "Ada"}}
    bob = {"user": {"_id": "u2", "firstName": "Bob"}}
    assert format_typing_text([]) == ""
    assert format_typing_text([ada]) == "Ada is typing..."
    assert format_typing_text([ada, bob]) == "Ada and Bob are typing..."
    assert format_typing_text([ada, bob, ada]) == "Several people are typing..."
    assert is_user_typing([ada], "u1")
    assert not is_user_typing([ada], "u2")


@pytest.fixture
def chat_api() -> MagicMock:
    return MagicMock()


@pytest.fixture
def toasts() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def center(chat_api: MagicMock, toasts: list) -> NotificationCenter:
    user = {"_id": "u1", "role": "customer"}
    return NotificationCenter(chat_api, lambda: user, toast=lambda kind, text: toasts.append((kind, text)))


def test_refresh_loads_latest_five(center: NotificationCenter, chat_api: MagicMock) -> None:
    chat_api.get_notifications.return_value = _feed({"_id": "n1", "isRead": False}, unread=3)
    center.refresh()
    chat_api.get_notifications.assert_called_once_with(1, 5, False)
    assert [n["_id"] for n in center.notifications] == ["n1"]
    assert center.unread_count == 3
    assert center.badge == "3"
    assert not center.is_loading


def test_refresh_skipped_without_user(chat_api: MagicMock) -> None:
    center = NotificationCenter(chat_api, lambda: None)
    center.refresh()
    chat_api.get_notifications.assert_not_called()


def test_refresh_error_keeps_previous_data(center: NotificationCenter, chat_api: MagicMock) -> None:
    chat_api.get_notifications.return_value = _feed({"_id": "n1"}, unread=1)
    center.refresh()
    chat_api.get_notifications.side_effect = ApiError("Network Error")
    center.refresh()
    assert center.unread_count == 1
    assert not center.is_loading


def test_mark_as_read_updates_locally(center: NotificationCenter, chat_api: MagicMock) -> None:
    chat_api.get_notifications.return_value = _feed({"_id": "n1", "isRead": False}, {"_id": "n2"}, unread=1)
    chat_api.mark_notification_read.return_value = {"success": True}
    center.refresh()

    assert center.mark_as_read("n1")
    assert center.notifications[0]["isRead"] is True
    assert center.notifications[0]["readAt"]
    assert "readAt" not in center.notifications[1]
    assert center.unread_count == 0

    center.mark_as_read("n1")
    assert center.unread_count == 0


def test_mark_as_read_failure_toasts(center: NotificationCenter, chat_api: MagicMock, toasts: list) -> None:
    chat_api.mark_notification_read.side_effect = ApiError("boom", status=500)
    assert not center.mark_as_read("n1")
    assert toasts == [("error", "Failed to mark notification as read")]


def test_mark_all_as_read(center: NotificationCenter, chat_api: MagicMock, toasts: list) -> None:
    chat_api.get_notifications.return_value = _feed({"_id": "n1"}, {"_id": "n2"}, unread=2)
    chat_api.mark_all_notifications_read.return_value = {"success": True}
    center.refresh()

    assert center.mark_all_as_read()
    assert all(n["isRead"] for n in center.notifications)
    assert center.unread_count == 0
    assert toasts == [("success", "All notifications marked as read")]


def test_mark_all_as_read_failure(center: NotificationCenter, chat_api: MagicMock, toasts: list) -> None:
    chat_api.mark_all_notifications_read.side_effect = ApiError("boom", status=500)
    assert not center.mark_all_as_read()
    assert toasts == [("error", "Failed to mark all notifications as read")]


def test_open_marks_read_and_routes(center: NotificationCenter, chat_api: MagicMock, toasts: list) -> None:
    chat_api.mark_notification_read.return_value = {"success": True}
    route = center.open({"_id": "n1", "isRead": False, "type": "order", "title": "Order shipped"})
    chat_api.mark_notification_read.assert_called_once_with("n1")
    assert route.path == "/orders"
    assert toasts == [("success", "Opening your orders...")]


def test_open_read_notification_skips_mark(center: NotificationCenter, chat_api: MagicMock) -> None:
    center.open({"_id": "n1", "isRead": True, "type": "system", "title": "Welcome"})
    chat_api.mark_notification_read.assert_not_called()


def test_start_and_stop_polling(center: NotificationCenter, chat_api: MagicMock) -> None:
    polled = threading.Event()

    def fetch(*_args: Any) -> dict[str, Any]:
        polled.set()
        return _feed()

    chat_api.get_notifications.side_effect = fetch
    center.start_polling(interval=0.01)
    try:
        assert polled.wait(2.0)
    finally:
        center.stop_polling()
    assert center._poller is None
