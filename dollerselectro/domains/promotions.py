"""Promo code display helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def _parse(value: str | datetime) -> datetime:
    dt = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _now(now: datetime | None) -> datetime:
    return _parse(now) if now is not None else datetime.now(timezone.utc)


def format_discount_value(promo_type: str, value: float) -> str:
    if promo_type == "percentage":
        return f"{value:g}%"
    if promo_type == "fixed":
        return f"LKR {value:.2f}"
    if promo_type == "free_shipping":
        return "Free Shipping"
    return f"{value:g}"


def format_discount_amount(promo_type: str, value: float, subtotal: float) -> str:
    """Amount taken off `subtotal`, as shown in the cart summary."""
    if promo_type == "percentage":
        return f"-LKR {subtotal * value / 100:.2f}"
    if promo_type == "free_shipping":
        return "Free Shipping"
    return f"-LKR {value:.2f}"


def is_expired(valid_until: str | datetime, now: datetime | None = None) -> bool:
    return _parse(valid_until) < _now(now)


def is_promo_active(promo: dict[str, Any], now: datetime | None = None) -> bool:
    current = _now(now)
    return bool(
        promo.get("isActive")
        and _parse(promo["validFrom"]) <= current <= _parse(promo["validUntil"])
    )


def promo_status(promo: dict[str, Any], now: datetime | None = None) -> str:
    if not promo.get("isActive"):
        return "Inactive"
    if is_expired(promo["validUntil"], now):
        return "Expired"
    limit = promo.get("usageLimit", -1)
    if limit != -1 and (promo.get("usedCount") or 0) >= limit:
        return "Usage Limit Reached"
    return "Active"
