"""Notification routing and display formatting."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, NamedTuple


class NotificationRoute(NamedTuple):
    path: str | None
    toast: str | None


def dashboard_prefix(role: str | None) -> str:
    if role == "admin":
        return "/admin"
    if role == "employee":
        return "/employee"
    return ""


def route_for_notification(notification: dict[str, Any], role: str | None) -> NotificationRoute:
    """
    Decide where a clicked notification leads.

    The first matching rule wins; matching looks at the notification type and
    at keywords in its title. `path` is None when the role has no page for it.
    """
    is_admin = role == "admin"
    is_staff = role in ("admin", "employee")
    prefix = dashboard_prefix(role)
    ntype = str(notification.get("type") or "")
    title = str(notification.get("title") or "").lower()

    if ntype == "message_reply" or "message" in title:
        if is_staff:
            return NotificationRoute(f"{prefix}/messages", "Opening messages...")
        return NotificationRoute("/my-messages", "Opening your messages...")
    if ntype == "order" or "order" in title:
        if is_staff:
            return NotificationRoute(f"{prefix}/orders", "Opening orders...")
        return NotificationRoute("/orders", "Opening your orders...")
    if ntype == "payment" or "payment" in title or "bill" in title:
        if is_staff:
            return NotificationRoute(f"{prefix}/orders", "Opening payment verification...")
        return NotificationRoute("/orders", "Opening your orders...")
    if "stock" in title or "inventory" in title:
        if is_admin:
            return NotificationRoute("/admin/low-stock-alerts", "Opening inventory...")
        if role == "employee":
            return NotificationRoute("/employee/products", "Opening inventory...")
        return NotificationRoute(None, "Opening inventory...")
    if "customer" in title:
        if is_admin:
            return NotificationRoute("/admin/customers", "Opening customers...")
        return NotificationRoute(None, None)
    if "employee" in title:
        if is_admin:
            return NotificationRoute("/admin/employees", "Opening employees...")
        return NotificationRoute(None, None)
    if "delivery" in title or "shipping" in title:
        return NotificationRoute(f"{prefix}/delivery", "Opening delivery...")
    if "promo" in title or "discount" in title or "code" in title:
        return NotificationRoute(f"{prefix}/promo-codes", "Opening promo codes...")
    return NotificationRoute(f"{prefix}/notifications", None)


def _parse_time(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_notification_time(created_at: str | datetime, now: datetime | None = None) -> str:
    """Relative age for recent notifications; a plain date after a week."""
    created = _parse_time(created_at)
    current = _parse_time(now) if now is not None else datetime.now(timezone.utc)
    diff = (current - created).total_seconds()
    minutes = int(diff // 60)
    hours = int(diff // 3600)
    days = int(diff // 86400)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return created.strftime("%m/%d/%Y")


def format_typing_text(typing_users: list[dict[str, Any]]) -> str:
    if not typing_users:
        return ""
    names = [(t.get("user") or {}).get("firstName", "Someone") for t in typing_users]
    if len(names) == 1:
        return f"{names[0]} is typing..."
    if len(names) == 2:
        return f"{names[0]} and {names[1]} are typing..."
    return "Several people are typing..."


def is_user_typing(typing_users: list[dict[str, Any]], user_id: str) -> bool:
    return any((t.get("user") or {}).get("_id") == user_id for t in typing_users)


def badge_text(count: int) -> str:
    if count <= 0:
        return ""
    return "99+" if count > 99 else str(count)
