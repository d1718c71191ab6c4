"""Order display and triage helpers."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any

CANCELLABLE_STATUSES = ("pending", "confirmed", "processing")

DELIVERY_METHOD_NAMES = {
    "home_delivery": "Home Delivery",
    "store_pickup": "Store Pickup",
    "express_delivery": "Express Delivery",
}

PAYMENT_METHOD_NAMES = {
    "credit_card": "Credit Card",
    "debit_card": "Debit Card",
    "paypal": "PayPal",
    "stripe": "Stripe",
    "cash_on_delivery": "Cash on Delivery",
    "bank_transfer": "Bank Transfer",
}

# Days from order date to expected delivery, by delivery method.
DELIVERY_DAYS = {"express_delivery": 1, "store_pickup": 0}
DEFAULT_DELIVERY_DAYS = 3


def _parse(value: str | datetime) -> datetime:
    dt = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def order_summary(order: dict[str, Any]) -> dict[str, Any]:
    items = order.get("items") or []
    return {
        "itemCount": sum(int(i.get("quantity") or 0) for i in items),
        "totalItems": len(items),
        "subtotal": order.get("subtotal"),
        "tax": order.get("tax"),
        "shipping": order.get("shipping"),
        "discount": order.get("discount"),
        "total": order.get("total"),
    }


def order_age_days(order: dict[str, Any], now: datetime | None = None) -> int:
    current = _parse(now) if now is not None else datetime.now(timezone.utc)
    diff = abs((current - _parse(order["orderDate"])).total_seconds())
    return math.ceil(diff / 86400)


def can_cancel(order: dict[str, Any]) -> bool:
    return order.get("status") in CANCELLABLE_STATUSES


def is_delivered(order: dict[str, Any]) -> bool:
    return order.get("status") == "delivered"


def is_cancelled(order: dict[str, Any]) -> bool:
    return order.get("status") == "cancelled"


def needs_attention(order: dict[str, Any]) -> bool:
    """Orders an employee should act on next."""
    payment = order.get("payment") or {}
    delivery = order.get("delivery") or {}
    return (
        order.get("status") == "pending"
        or (order.get("status") == "confirmed" and payment.get("status") == "completed")
        or delivery.get("status") == "confirmed"
    )


def estimated_delivery(order: dict[str, Any]) -> datetime | None:
    """Server estimate when present, else order date plus the method's lead time. None for pickup."""
    if order.get("estimatedDeliveryDate"):
        return _parse(order["estimatedDeliveryDate"])
    method = (order.get("delivery") or {}).get("method")
    days = DELIVERY_DAYS.get(method, DEFAULT_DELIVERY_DAYS)
    if days > 0:
        return _parse(order["orderDate"]) + timedelta(days=days)
    return None


def delivery_method_name(method: str) -> str:
    return DELIVERY_METHOD_NAMES.get(method, method)


def payment_method_name(method: str) -> str:
    return PAYMENT_METHOD_NAMES.get(method, method)


def format_currency(amount: float) -> str:
    return f"LKR {amount:,.2f}"


def filter_orders(orders: list[dict[str, Any]], status: str = "", query: str = "") -> list[dict[str, Any]]:
    """Filter by status ("all" or blank keeps everything) and by order number or customer text."""
    result = orders
    if status and status != "all":
        result = [o for o in result if o.get("status") == status]
    term = query.strip().lower()
    if term:
        def matches(o: dict[str, Any]) -> bool:
            customer = o.get("customer") if isinstance(o.get("customer"), dict) else {}
            haystack = [
                o.get("orderNumber"),
                customer.get("firstName"),
                customer.get("lastName"),
                customer.get("email"),
            ]
            return any(term in str(v or "").lower() for v in haystack)

        result = [o for o in result if matches(o)]
    return result
