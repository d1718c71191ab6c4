"""Order endpoints for customers, employees and admins."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


class OrdersAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def create_order(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/orders/checkout", json=data)

    def get_customer_orders(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._client.get("/orders", params=filters)

    def get_order(self, order_id: str) -> dict[str, Any]:
        return self._client.get(f"/orders/{order_id}")

    def update_order_status(self, order_id: str, status: str, notes: str | None = None) -> dict[str, Any]:
        return self._client.patch(f"/orders/{order_id}/status", json=_drop_none({"status": status, "notes": notes}))

    def update_payment_status(self, order_id: str, status: str, transaction_id: str | None = None) -> dict[str, Any]:
        return self._client.patch(
            f"/orders/{order_id}/payment",
            json=_drop_none({"status": status, "transactionId": transaction_id}),
        )

    def update_delivery_status(
        self,
        order_id: str,
        status: str,
        tracking_number: str | None = None,
        carrier: str | None = None,
    ) -> dict[str, Any]:
        return self._client.patch(
            f"/orders/{order_id}/delivery",
            json=_drop_none({"status": status, "trackingNumber": tracking_number, "carrier": carrier}),
        )

    def get_admin_orders(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._client.get("/orders/admin/all", params=filters)

    def get_employee_pending_orders(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return self._client.get("/orders/employee/pending", params={"page": page, "limit": limit})

    def get_employee_delivery_orders(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return self._client.get("/orders/employee/delivery", params={"page": page, "limit": limit})

    def cancel_order(self, order_id: str, reason: str | None = None) -> dict[str, Any]:
        return self._client.post(f"/orders/{order_id}/cancel", json=_drop_none({"reason": reason}))

    def track_order(self, order_number: str) -> dict[str, Any]:
        return self._client.get(f"/orders/tracking/{order_number}")
