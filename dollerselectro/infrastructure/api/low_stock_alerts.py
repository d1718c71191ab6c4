"""Inventory low-stock alerts."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient

BASE = "/low-stock-alerts"
ALERT_ACTIONS = ("acknowledge", "resolve", "dismiss")


class LowStockAlertsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_alerts(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        """filters: status, priority, page, limit."""
        return self._client.get(BASE, params=filters)

    def get_stats(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/stats")

    def get_dashboard(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/dashboard")

    def _act(self, alert_id: str, action: str, notes: str | None) -> dict[str, Any]:
        if action not in ALERT_ACTIONS:
            raise ValueError(f"Unknown alert action: {action}")
        body = {"notes": notes} if notes is not None else {}
        return self._client.put(f"{BASE}/{alert_id}/{action}", json=body)

    def acknowledge_alert(self, alert_id: str, notes: str | None = None) -> dict[str, Any]:
        return self._act(alert_id, "acknowledge", notes)

    def resolve_alert(self, alert_id: str, notes: str | None = None) -> dict[str, Any]:
        return self._act(alert_id, "resolve", notes)

    def dismiss_alert(self, alert_id: str, notes: str | None = None) -> dict[str, Any]:
        return self._act(alert_id, "dismiss", notes)

    def check_low_stock(self) -> dict[str, Any]:
        return self._client.post(f"{BASE}/check")

    def delete_alert(self, alert_id: str) -> dict[str, Any]:
        return self._client.delete(f"{BASE}/{alert_id}")
