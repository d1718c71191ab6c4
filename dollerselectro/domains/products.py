"""Client-side helpers over product lists."""

from __future__ import annotations

from typing import Any

PLACEHOLDER_IMAGE = "/placeholder-product.jpg"


def primary_image(product: dict[str, Any]) -> str:
    images = product.get("images")
    if not isinstance(images, list) or not images:
        return PLACEHOLDER_IMAGE
    for img in images:
        if img.get("isPrimary") and img.get("url"):
            return img["url"]
    return images[0].get("url") or PLACEHOLDER_IMAGE


def discount_percentage(product: dict[str, Any]) -> int:
    price = product.get("price") or 0
    original = product.get("originalPrice") or 0
    if original and original > price and price > 0:
        return round((original - price) / original * 100)
    return 0


def is_on_sale(product: dict[str, Any]) -> bool:
    original = product.get("originalPrice") or 0
    return bool(product.get("isOnSale") and original and original > (product.get("price") or 0))


def format_price(price: float) -> str:
    return f"LKR {price:,.2f}"


def stock_status(product: dict[str, Any]) -> str:
    """in_stock, low_stock or out_of_stock."""
    stock = product.get("stock")
    if isinstance(stock, bool) or not isinstance(stock, (int, float)) or stock == 0:
        return "out_of_stock"
    threshold = product.get("lowStockThreshold")
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or stock <= threshold:
        return "low_stock"
    return "in_stock"


def filter_by_category(products: list[dict[str, Any]], category: str) -> list[dict[str, Any]]:
    if not category or category == "all":
        return products
    return [p for p in products if p.get("category") == category]


def sort_products(
    products: list[dict[str, Any]],
    sort_by: str,
    sort_order: str = "desc",
) -> list[dict[str, Any]]:
    """Stable sort by price, name (case-insensitive) or any other product key."""
    if sort_by == "rating":
        # Ratings are not part of the product payload.
        return list(products)

    def key(p: dict[str, Any]) -> Any:
        if sort_by == "name":
            return str(p.get("name") or "").lower()
        if sort_by == "price":
            return p.get("price") or 0
        value = p.get(sort_by)
        return "" if value is None else value

    return sorted(products, key=key, reverse=sort_order != "asc")


def search_products_local(products: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    if not query.strip():
        return products
    term = query.lower()

    def matches(p: dict[str, Any]) -> bool:
        fields = [p.get("name"), p.get("description"), p.get("category")]
        if any(term in str(f or "").lower() for f in fields):
            return True
        return any(term in str(tag).lower() for tag in p.get("tags") or [])

    return [p for p in products if matches(p)]
