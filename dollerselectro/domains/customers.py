"""Customer display helpers for the admin table."""

from __future__ import annotations

from typing import Any


def full_name(customer: dict[str, Any]) -> str:
    return f"{customer.get('firstName', '')} {customer.get('lastName', '')}".strip()


def display_name(customer: dict[str, Any]) -> str:
    return customer.get("username") or customer.get("email") or ""


def initials(customer: dict[str, Any]) -> str:
    first = (customer.get("firstName") or "")[:1]
    last = (customer.get("lastName") or "")[:1]
    return f"{first}{last}".upper()


def is_verified(customer: dict[str, Any]) -> bool:
    return bool(customer.get("isEmailVerified") and customer.get("isPhoneVerified"))


def search_customers(customers: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    term = query.strip().lower()
    if not term:
        return customers
    return [
        c for c in customers
        if term in full_name(c).lower()
        or term in str(c.get("email") or "").lower()
        or term in str(c.get("username") or "").lower()
        or term in str(c.get("phone") or "").lower()
    ]
