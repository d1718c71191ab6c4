"""Low-stock alert filtering for the admin inventory view."""

from __future__ import annotations

from typing import Any

PRIORITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}


def filter_alerts(
    alerts: list[dict[str, Any]],
    status: str = "",
    priority: str = "",
) -> list[dict[str, Any]]:
    result = alerts
    if status and status != "all":
        result = [a for a in result if a.get("status") == status]
    if priority and priority != "all":
        result = [a for a in result if a.get("priority") == priority]
    return result


def sort_by_urgency(alerts: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Most urgent first: priority, then server urgency score, then age."""
    return sorted(
        alerts,
        key=lambda a: (
            PRIORITY_RANK.get(a.get("priority"), len(PRIORITY_RANK)),
            -(a.get("urgencyScore") or 0),
            -(a.get("ageInDays") or 0),
        ),
    )
