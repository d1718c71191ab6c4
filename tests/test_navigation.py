"""
Tests for page gating and route resolution in the Streamlit app.
"""

from __future__ import annotations

from dollerselectro.ui import navigation as nav


def test_guest_pages() -> None:
    assert nav.pages_for(None, False) == [nav.HOME, nav.SIGN_IN, nav.CONTACT]


def test_customer_pages_hide_dashboards() -> None:
    pages = nav.pages_for("customer", True)
    assert nav.SIGN_IN not in pages
    assert nav.MY_ORDERS in pages
    assert nav.ADMIN not in pages and nav.EMPLOYEE not in pages


def test_staff_pages() -> None:
    assert nav.EMPLOYEE in nav.pages_for("employee", True)
    assert nav.ADMIN not in nav.pages_for("employee", True)
    assert nav.ADMIN in nav.pages_for("admin", True)


def test_page_for_route() -> None:
    assert nav.page_for_route("/admin/low-stock-alerts", "admin", True) == (nav.ADMIN, "Low-stock alerts")
    assert nav.page_for_route("/employee/delivery", "employee", True) == (nav.EMPLOYEE, "Delivery")
    assert nav.page_for_route("/my-messages", "customer", True) == (nav.MY_MESSAGES, None)
    assert nav.page_for_route(None, "customer", True) == (nav.HOME, None)
    assert nav.page_for_route("/unknown", "customer", True) == (nav.HOME, None)


def test_page_for_route_falls_back_when_not_allowed() -> None:
    assert nav.page_for_route("/admin/orders", "customer", True) == (nav.HOME, None)
    assert nav.page_for_route("/orders", None, False) == (nav.SIGN_IN, None)
    assert nav.page_for_route("/login", None, False) == (nav.SIGN_IN, None)


def test_parse_bool() -> None:
    assert nav.parse_bool(None) is True
    assert nav.parse_bool(None, default=False) is False
    assert nav.parse_bool("true") is True
    assert nav.parse_bool("False") is False
    assert nav.parse_bool("garbage") is False
