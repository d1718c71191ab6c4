"""Promo code management and checkout validation."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


class PromoCodesAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_promo_codes(
        self,
        page: int = 1,
        limit: int = 20,
        status: str = "",
        type: str = "",
    ) -> dict[str, Any]:
        return self._client.get("/promo-codes", params={"page": page, "limit": limit, "status": status, "type": type})

    def create_promo_code(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/promo-codes", json=data)

    def get_promo_code(self, promo_id: str) -> dict[str, Any]:
        return self._client.get(f"/promo-codes/{promo_id}")

    def update_promo_code(self, promo_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/promo-codes/{promo_id}", json=data)

    def delete_promo_code(self, promo_id: str) -> dict[str, Any]:
        return self._client.delete(f"/promo-codes/{promo_id}")

    def toggle_promo_code(self, promo_id: str) -> dict[str, Any]:
        return self._client.patch(f"/promo-codes/{promo_id}/toggle")

    def get_analytics(self, start_date: str = "", end_date: str = "") -> dict[str, Any]:
        return self._client.get("/promo-codes/analytics/usage", params={"startDate": start_date, "endDate": end_date})

    def validate_promo_code(self, data: dict[str, Any]) -> dict[str, Any]:
        """data: code, subtotal, items (optional)."""
        return self._client.post("/promo-codes/validate", json=data)

    def get_available_promo_codes(self) -> dict[str, Any]:
        return self._client.get("/promo-codes/available")
