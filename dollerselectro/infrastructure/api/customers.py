"""Admin customer management."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient

BASE = "/users/admin/customers"


class CustomersAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_customers(self) -> dict[str, Any]:
        return self._client.get(BASE)

    def get_customer(self, customer_id: str) -> dict[str, Any]:
        return self._client.get(f"{BASE}/{customer_id}")

    def create_customer(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post(BASE, json=data)

    def update_customer(self, customer_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.put(f"{BASE}/{customer_id}", json=data)

    def delete_customer(self, customer_id: str) -> dict[str, Any]:
        return self._client.delete(f"{BASE}/{customer_id}")

    def toggle_customer_status(self, customer_id: str, is_active: bool) -> dict[str, Any]:
        return self._client.patch(f"{BASE}/{customer_id}/status", json={"isActive": is_active})
