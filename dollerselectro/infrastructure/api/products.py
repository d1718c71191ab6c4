"""Product catalogue endpoints (storefront and admin)."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient, ApiError


class ProductsAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_products(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        """filters: page, limit, category, minPrice, maxPrice, search, sortBy, sortOrder, ..."""
        return self._client.get("/products", params=filters)

    def get_featured_products(self, limit: int = 8) -> dict[str, Any]:
        return self._client.get("/products/featured", params={"limit": limit})

    def get_on_sale_products(self, limit: int = 12) -> dict[str, Any]:
        return self._client.get("/products/on-sale", params={"limit": limit})

    def get_categories(self) -> dict[str, Any]:
        return self._client.get("/products/categories")

    def search_products(self, query: str, limit: int = 20) -> dict[str, Any]:
        return self._client.get("/products/search", params={"q": query, "limit": limit})

    def get_product(self, product_id: str) -> dict[str, Any]:
        return self._client.get(f"/products/{product_id}")

    def create_product(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._client.post("/products", json=data)

    def update_product(self, product_id: str, data: dict[str, Any]) -> dict[str, Any]:
        if not product_id:
            raise ApiError("Product ID is required for update")
        return self._client.put(f"/products/{product_id}", json=data)

    def delete_product(self, product_id: str) -> dict[str, Any]:
        return self._client.delete(f"/products/{product_id}")

    def toggle_product_status(self, product_id: str, is_active: bool) -> dict[str, Any]:
        return self._client.patch(f"/products/{product_id}/toggle-status", json={"isActive": is_active})

    def update_product_stock(self, product_id: str, stock: int, operation: str = "set") -> dict[str, Any]:
        """operation: "set", "add" or "subtract"."""
        return self._client.patch(f"/products/{product_id}/stock", json={"stock": stock, "operation": operation})

    def get_admin_products(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._client.get("/products/admin/all", params=filters)
