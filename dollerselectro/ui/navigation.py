"""Page registry and role gating for the Streamlit app.

Kept free of Streamlit imports so routing rules can be tested on their own.
"""

from __future__ import annotations

from typing import Any

HOME = "Shop"
SIGN_IN = "Sign in"
CONTACT = "Contact"
MY_MESSAGES = "My messages"
MY_ORDERS = "My orders"
NOTIFICATIONS = "Notifications"
QUIZZES = "Quizzes"
ADMIN = "Admin dashboard"
EMPLOYEE = "Employee dashboard"

PUBLIC_PAGES = (HOME, CONTACT)
CUSTOMER_PAGES = (MY_ORDERS, MY_MESSAGES, NOTIFICATIONS, QUIZZES)

# Roles allowed on gated pages.
PAGE_ROLES: dict[str, tuple[str, ...]] = {
    ADMIN: ("admin",),
    EMPLOYEE: ("admin", "employee"),
}

ADMIN_SECTIONS = (
    "Analytics",
    "Products",
    "Orders",
    "Customers",
    "Messages",
    "Low-stock alerts",
    "Quizzes",
    "Promo codes",
    "Newsletter",
)
EMPLOYEE_SECTIONS = ("Pending orders", "Delivery", "Messages", "Products")

# Route paths produced by notification routing -> (page, section).
ROUTE_PAGES: dict[str, tuple[str, str | None]] = {
    "/login": (SIGN_IN, None),
    "/my-messages": (MY_MESSAGES, None),
    "/orders": (MY_ORDERS, None),
    "/notifications": (NOTIFICATIONS, None),
    "/admin/messages": (ADMIN, "Messages"),
    "/admin/orders": (ADMIN, "Orders"),
    "/admin/customers": (ADMIN, "Customers"),
    "/admin/employees": (ADMIN, "Customers"),
    "/admin/low-stock-alerts": (ADMIN, "Low-stock alerts"),
    "/admin/promo-codes": (ADMIN, "Promo codes"),
    "/admin/delivery": (ADMIN, "Orders"),
    "/admin/notifications": (NOTIFICATIONS, None),
    "/employee/messages": (EMPLOYEE, "Messages"),
    "/employee/orders": (EMPLOYEE, "Pending orders"),
    "/employee/products": (EMPLOYEE, "Products"),
    "/employee/delivery": (EMPLOYEE, "Delivery"),
    "/employee/promo-codes": (EMPLOYEE, None),
    "/employee/notifications": (NOTIFICATIONS, None),
    "/delivery": (MY_ORDERS, None),
    "/promo-codes": (HOME, None),
}


def can_access(page: str, role: str | None, authenticated: bool) -> bool:
    if page in PUBLIC_PAGES:
        return True
    if page == SIGN_IN:
        return not authenticated
    if not authenticated:
        return False
    allowed = PAGE_ROLES.get(page)
    return allowed is None or role in allowed


def pages_for(role: str | None, authenticated: bool) -> list[str]:
    """Pages shown in the sidebar for this visitor, in menu order."""
    ordered = [HOME, SIGN_IN, *CUSTOMER_PAGES, CONTACT, EMPLOYEE, ADMIN]
    return [p for p in ordered if can_access(p, role, authenticated)]


def page_for_route(route: str | None, role: str | None, authenticated: bool) -> tuple[str, str | None]:
    """Resolve a route path to a page this visitor may open; falls back to the shop."""
    if not route:
        return HOME, None
    page, section = ROUTE_PAGES.get(route, (HOME, None))
    if not can_access(page, role, authenticated):
        return (HOME, None) if authenticated else (SIGN_IN, None)
    return page, section


def parse_bool(value: Any, default: bool = True) -> bool:
    """Read a "true"/"false" storage value."""
    if value is None:
        return default
    return str(value).strip().lower() == "true"
