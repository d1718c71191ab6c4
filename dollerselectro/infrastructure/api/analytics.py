"""Admin analytics dashboard endpoints."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient

BASE = "/admin/analytics"


class AnalyticsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_dashboard_stats(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/dashboard")

    def get_sales_data(self, period: str = "monthly") -> dict[str, Any]:
        """period: daily, weekly or monthly."""
        return self._client.get(f"{BASE}/sales", params={"period": period})

    def get_product_analytics(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/products")

    def get_customer_analytics(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/customers")

    def get_order_analytics(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/orders")

    def get_revenue_by_category(self) -> dict[str, Any]:
        return self._client.get(f"{BASE}/revenue-by-category")

    def get_customer_growth(self, period: str = "monthly") -> dict[str, Any]:
        """period: monthly, quarterly or yearly."""
        return self._client.get(f"{BASE}/customer-growth", params={"period": period})
