"""Support message labels and admin inbox filtering."""

from __future__ import annotations

from typing import Any

STATUS_LABELS = {
    "open": "Open",
    "in_progress": "In Progress",
    "resolved": "Resolved",
    "closed": "Closed",
}

PRIORITY_LABELS = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "urgent": "Urgent",
}


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def format_priority(priority: str) -> str:
    return PRIORITY_LABELS.get(priority, priority)


def filter_messages(
    messages: list[dict[str, Any]],
    status: str = "",
    priority: str = "",
    query: str = "",
) -> list[dict[str, Any]]:
    result = messages
    if status and status != "all":
        result = [m for m in result if m.get("status") == status]
    if priority and priority != "all":
        result = [m for m in result if m.get("priority") == priority]
    term = query.strip().lower()
    if term:
        result = [
            m for m in result
            if any(term in str(m.get(k) or "").lower() for k in ("name", "email", "subject", "message"))
        ]
    return result
