"""Server-side shopping cart."""

from __future__ import annotations

from typing import Any

from dollerselectro.infrastructure.api.client import ApiClient


class CartAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_cart(self) -> dict[str, Any]:
        return self._client.get("/cart")

    def add_to_cart(self, product_id: str, quantity: int = 1) -> dict[str, Any]:
        return self._client.post("/cart", json={"productId": product_id, "quantity": quantity})

    def update_quantity(self, product_id: str, quantity: int) -> dict[str, Any]:
        return self._client.put(f"/cart/{product_id}", json={"quantity": quantity})

    def remove_item(self, product_id: str) -> dict[str, Any]:
        return self._client.delete(f"/cart/{product_id}")

    def clear_cart(self) -> dict[str, Any]:
        return self._client.delete("/cart")
