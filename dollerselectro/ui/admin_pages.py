"""Role-gated staff dashboards (admin and employee)."""

from __future__ import annotations

from typing import Any

import streamlit as st

from dollerselectro.domains import alerts as alert_helpers
from dollerselectro.domains import analytics as analytics_helpers
from dollerselectro.domains import customers as customer_helpers
from dollerselectro.domains import messages as message_helpers
from dollerselectro.domains import orders as order_helpers
from dollerselectro.domains import products as product_helpers
from dollerselectro.domains import promotions as promo_helpers
from dollerselectro.infrastructure.api.shop import ShopClient
from dollerselectro.ui import navigation
from dollerselectro.ui.common import call_api, payload_list

ORDER_STATUSES = ["pending", "confirmed", "processing", "shipped", "delivered", "cancelled", "refunded"]
DELIVERY_STATUSES = ["pending", "confirmed", "processing", "shipped", "out_for_delivery", "delivered", "failed", "returned"]
MESSAGE_STATUSES = ["open", "in_progress", "resolved", "closed"]


def _section(options: tuple[str, ...]) -> str:
    current = st.session_state.get("section")
    index = options.index(current) if current in options else 0
    choice = st.radio("Section", options, index=index, horizontal=True, key="staff_section_radio")
    st.session_state.section = choice
    return choice


# --- Admin ---

def render_admin(shop: ShopClient) -> None:
    st.header("Admin dashboard")
    section = _section(navigation.ADMIN_SECTIONS)
    {
        "Analytics": _analytics,
        "Products": _products,
        "Orders": _orders_admin,
        "Customers": _customers,
        "Messages": _messages,
        "Low-stock alerts": _low_stock,
        "Quizzes": _quizzes,
        "Promo codes": _promo_codes,
        "Newsletter": _newsletter,
    }[section](shop)


def _analytics(shop: ShopClient) -> None:
    stats = (call_api(shop.analytics.get_dashboard_stats, fallback="Failed to load analytics") or {}).get("data") or {}
    overview = stats.get("overview", stats)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Revenue", order_helpers.format_currency(float(overview.get("totalRevenue") or 0)))
    c2.metric("Orders", overview.get("totalOrders", 0))
    c3.metric("Customers", overview.get("totalCustomers", 0))
    c4.metric("Products", overview.get("totalProducts", 0))
    current = float(overview.get("monthlyRevenue") or 0)
    previous = float(overview.get("lastMonthRevenue") or 0)
    if current or previous:
        st.metric("Monthly revenue", order_helpers.format_currency(current),
                  delta=f"{analytics_helpers.calculate_growth(current, previous):.1f}%")

    period = st.selectbox("Sales period", ["daily", "weekly", "monthly"], index=2)
    sales = payload_list(call_api(shop.analytics.get_sales_data, period, fallback="Failed to load sales"), "sales")
    if sales:
        st.bar_chart({row.get("period", str(i)): row.get("revenue", 0) for i, row in enumerate(sales)})
    by_category = payload_list(call_api(shop.analytics.get_revenue_by_category, fallback="Failed to load revenue"),
                               "categories")
    total = sum(float(r.get("revenue") or 0) for r in by_category)
    for row in by_category:
        share = analytics_helpers.format_percentage(float(row.get("revenue") or 0), total)
        st.write(f"{row.get('category')}: {order_helpers.format_currency(float(row.get('revenue') or 0))} ({share})")


def _products(shop: ShopClient) -> None:
    query = st.text_input("Search products", key="admin_product_search")
    products = payload_list(call_api(shop.products.get_admin_products, {"limit": 200},
                                     fallback="Failed to load products"), "products")
    products = product_helpers.search_products_local(products, query or "")
    for p in products:
        pid = p.get("_id") or p.get("id")
        status = product_helpers.stock_status(p)
        with st.expander(f"{p.get('name')} · {product_helpers.format_price(p.get('price') or 0)} · {status}"):
            stock = st.number_input("Stock", min_value=0, value=int(p.get("stock") or 0), key=f"stock-{pid}")
            c1, c2, c3 = st.columns(3)
            if c1.button("Save stock", key=f"save-stock-{pid}"):
                call_api(shop.products.update_product_stock, pid, int(stock), "set", fallback="Failed to update stock")
            label = "Deactivate" if p.get("isActive", True) else "Activate"
            if c2.button(label, key=f"toggle-{pid}"):
                call_api(shop.products.toggle_product_status, pid, not p.get("isActive", True),
                         fallback="Failed to update product")
                st.rerun()
            if c3.button("Delete", key=f"delete-{pid}"):
                call_api(shop.products.delete_product, pid, fallback="Failed to delete product")
                st.rerun()


def _order_controls(shop: ShopClient, order: dict[str, Any], key: str) -> None:
    oid = order.get("_id") or order.get("id")
    status = order.get("status", "pending")
    new_status = st.selectbox("Status", ORDER_STATUSES,
                              index=ORDER_STATUSES.index(status) if status in ORDER_STATUSES else 0,
                              key=f"{key}-status-{oid}")
    delivery = order.get("delivery") or {}
    dstatus = delivery.get("status", "pending")
    new_delivery = st.selectbox("Delivery", DELIVERY_STATUSES,
                                index=DELIVERY_STATUSES.index(dstatus) if dstatus in DELIVERY_STATUSES else 0,
                                key=f"{key}-delivery-{oid}")
    tracking = st.text_input("Tracking number", value=delivery.get("trackingNumber") or "", key=f"{key}-track-{oid}")
    if st.button("Save", key=f"{key}-save-{oid}"):
        if new_status != status:
            call_api(shop.orders.update_order_status, oid, new_status, fallback="Failed to update order")
        if new_delivery != dstatus or tracking != (delivery.get("trackingNumber") or ""):
            call_api(shop.orders.update_delivery_status, oid, new_delivery, tracking or None,
                     fallback="Failed to update delivery")
        st.rerun()
    payment = order.get("payment") or {}
    if payment.get("status") != "completed" and st.button("Mark paid", key=f"{key}-paid-{oid}"):
        call_api(shop.orders.update_payment_status, oid, "completed", fallback="Failed to update payment")
        st.rerun()


def _orders_admin(shop: ShopClient) -> None:
    c1, c2 = st.columns(2)
    status = c1.selectbox("Status", ["all", *ORDER_STATUSES], key="admin_order_status")
    query = c2.text_input("Search order # or customer", key="admin_order_query")
    orders = payload_list(call_api(shop.orders.get_admin_orders, {"limit": 100}, fallback="Failed to load orders"),
                          "orders")
    for order in order_helpers.filter_orders(orders, status, query or ""):
        flag = " ⚠️" if order_helpers.needs_attention(order) else ""
        with st.expander(f"{order.get('orderNumber')} · {order.get('status')} · "
                         f"{order_helpers.format_currency(order.get('total') or 0)}{flag}"):
            _order_controls(shop, order, "admin")


def _customers(shop: ShopClient) -> None:
    query = st.text_input("Search customers", key="admin_customer_query")
    customers = payload_list(call_api(shop.customers.get_customers, fallback="Failed to load customers"), "customers")
    for c in customer_helpers.search_customers(customers, query or ""):
        cid = c.get("_id") or c.get("id")
        verified = "✔️" if customer_helpers.is_verified(c) else ""
        with st.expander(f"{customer_helpers.initials(c)} · {customer_helpers.full_name(c)} · {c.get('email')} {verified}"):
            active = bool(c.get("isActive", True))
            st.write("Active" if active else "Inactive")
            if st.button("Deactivate" if active else "Activate", key=f"cust-toggle-{cid}"):
                call_api(shop.customers.toggle_customer_status, cid, not active, fallback="Failed to update customer")
                st.rerun()
            if st.button("Delete", key=f"cust-del-{cid}"):
                call_api(shop.customers.delete_customer, cid, fallback="Failed to delete customer")
                st.rerun()


def _messages(shop: ShopClient) -> None:
    c1, c2, c3 = st.columns(3)
    status = c1.selectbox("Status", ["all", *MESSAGE_STATUSES], key="admin_msg_status")
    priority = c2.selectbox("Priority", ["all", "low", "medium", "high", "urgent"], key="admin_msg_priority")
    query = c3.text_input("Search", key="admin_msg_query")
    messages = payload_list(call_api(shop.messages.get_all_messages, {"limit": 100},
                                     fallback="Failed to load messages"), "messages")
    for m in message_helpers.filter_messages(messages, status, priority, query or ""):
        mid = m.get("_id")
        with st.expander(f"{m.get('subject')} · {message_helpers.format_status(m.get('status', ''))} · "
                         f"{message_helpers.format_priority(m.get('priority', ''))}"):
            st.write(f"From {m.get('name')} <{m.get('email')}>")
            st.write(m.get("message", ""))
            reply = st.text_area("Reply", key=f"msg-reply-{mid}")
            internal = st.checkbox("Internal note", key=f"msg-internal-{mid}")
            if st.button("Send", key=f"msg-send-{mid}") and reply.strip():
                if internal:
                    call_api(shop.messages.add_internal_note, mid, {"note": reply}, fallback="Failed to add note")
                else:
                    call_api(shop.messages.reply_to_message, mid, {"message": reply, "isInternal": False},
                             fallback="Failed to send reply")
                st.rerun()
            current = m.get("status", "open")
            new_status = st.selectbox("Set status", MESSAGE_STATUSES,
                                      index=MESSAGE_STATUSES.index(current) if current in MESSAGE_STATUSES else 0,
                                      key=f"msg-status-{mid}")
            if new_status != current and st.button("Update status", key=f"msg-upd-{mid}"):
                call_api(shop.messages.update_message_status, mid, new_status, fallback="Failed to update status")
                st.rerun()


def _low_stock(shop: ShopClient) -> None:
    c1, c2, c3 = st.columns(3)
    status = c1.selectbox("Status", ["all", "active", "acknowledged", "resolved", "dismissed"], key="alert_status")
    priority = c2.selectbox("Priority", ["all", "critical", "high", "medium", "low"], key="alert_priority")
    if c3.button("Run stock check"):
        result = call_api(shop.low_stock_alerts.check_low_stock, fallback="Failed to check stock")
        if result:
            st.toast(result.get("message") or "Stock check complete")
    alerts = payload_list(call_api(shop.low_stock_alerts.get_alerts, {"limit": 100},
                                   fallback="Failed to load alerts"), "alerts")
    alerts = alert_helpers.sort_by_urgency(alert_helpers.filter_alerts(alerts, status, priority))
    for a in alerts:
        aid = a.get("id") or a.get("_id")
        product = a.get("product") or {}
        with st.expander(f"[{str(a.get('priority', '')).upper()}] {product.get('name')} · "
                         f"{a.get('currentStock')}/{a.get('threshold')} · {a.get('status')}"):
            st.write(a.get("message", ""))
            notes = st.text_input("Notes", key=f"alert-notes-{aid}")
            b1, b2, b3 = st.columns(3)
            for col, label, fn in (
                (b1, "Acknowledge", shop.low_stock_alerts.acknowledge_alert),
                (b2, "Resolve", shop.low_stock_alerts.resolve_alert),
                (b3, "Dismiss", shop.low_stock_alerts.dismiss_alert),
            ):
                if col.button(label, key=f"alert-{label}-{aid}"):
                    call_api(fn, aid, notes or None, fallback=f"Failed to {label.lower()} alert")
                    st.rerun()


def _quizzes(shop: ShopClient) -> None:
    quizzes = payload_list(call_api(shop.quiz.get_admin_quizzes, 1, 50, fallback="Failed to load quizzes"), "quizzes")
    with st.expander("New quiz"):
        with st.form("new_quiz"):
            title = st.text_input("Title")
            description = st.text_area("Description")
            category = st.text_input("Category", value="general")
            difficulty = st.selectbox("Difficulty", ["easy", "medium", "hard"])
            if st.form_submit_button("Create") and title:
                call_api(shop.quiz.create_quiz,
                         {"title": title, "description": description, "category": category, "difficulty": difficulty},
                         fallback="Failed to create quiz")
                st.rerun()
    for q in quizzes:
        qid = q.get("_id")
        c1, c2 = st.columns([5, 1])
        c1.write(f"**{q.get('title')}** · {q.get('difficulty', '')} · {len(q.get('questions') or [])} questions")
        if c2.button("Delete", key=f"quiz-del-{qid}"):
            call_api(shop.quiz.delete_quiz, qid, fallback="Failed to delete quiz")
            st.rerun()


def _promo_codes(shop: ShopClient) -> None:
    response = call_api(shop.promo_codes.get_promo_codes, 1, 50, fallback="Failed to load promo codes")
    codes = payload_list(response, "promoCodes")
    with st.expander("New promo code"):
        with st.form("new_promo"):
            code = st.text_input("Code")
            ptype = st.selectbox("Type", ["percentage", "fixed", "free_shipping"])
            value = st.number_input("Value", min_value=0.0, value=10.0)
            valid_from = st.date_input("Valid from")
            valid_until = st.date_input("Valid until")
            usage_limit = st.number_input("Usage limit (-1 for unlimited)", min_value=-1, value=-1)
            if st.form_submit_button("Create") and code:
                call_api(shop.promo_codes.create_promo_code, {
                    "code": code.upper(),
                    "type": ptype,
                    "value": value,
                    "validFrom": valid_from.isoformat(),
                    "validUntil": valid_until.isoformat(),
                    "usageLimit": int(usage_limit),
                }, fallback="Failed to create promo code")
                st.rerun()
    for p in codes:
        pid = p.get("_id")
        c1, c2, c3 = st.columns([4, 1, 1])
        status = promo_helpers.promo_status(p) if p.get("validUntil") else ("Active" if p.get("isActive") else "Inactive")
        c1.write(f"**{p.get('code')}** · {promo_helpers.format_discount_value(p.get('type', ''), p.get('value') or 0)}"
                 f" · {status} · used {p.get('usedCount', 0)}")
        if c2.button("Toggle", key=f"promo-toggle-{pid}"):
            call_api(shop.promo_codes.toggle_promo_code, pid, fallback="Failed to update promo code")
            st.rerun()
        if c3.button("Delete", key=f"promo-del-{pid}"):
            call_api(shop.promo_codes.delete_promo_code, pid, fallback="Failed to delete promo code")
            st.rerun()


def _newsletter(shop: ShopClient) -> None:
    stats = (call_api(shop.newsletter.get_stats, fallback="Failed to load newsletter stats") or {}).get("data") or {}
    st.json(stats.get("stats", stats))
    with st.form("send_newsletter"):
        subject = st.text_input("Subject")
        content = st.text_area("Content")
        if st.form_submit_button("Send") and subject and content:
            result = call_api(shop.newsletter.send_newsletter, {"subject": subject, "content": content},
                              fallback="Failed to send newsletter")
            if result:
                st.success(result.get("message") or "Newsletter sent")


# --- Employee ---

def render_employee(shop: ShopClient) -> None:
    st.header("Employee dashboard")
    section = _section(navigation.EMPLOYEE_SECTIONS)
    if section == "Pending orders":
        orders = payload_list(call_api(shop.orders.get_employee_pending_orders, fallback="Failed to load orders"),
                              "orders")
        _employee_orders(shop, orders, "pending")
    elif section == "Delivery":
        orders = payload_list(call_api(shop.orders.get_employee_delivery_orders, fallback="Failed to load orders"),
                              "orders")
        _employee_orders(shop, orders, "delivery")
    elif section == "Messages":
        _messages(shop)
    else:
        _products(shop)


def _employee_orders(shop: ShopClient, orders: list[dict[str, Any]], key: str) -> None:
    if not orders:
        st.info("Nothing to do here.")
        return
    for order in sorted(orders, key=lambda o: not order_helpers.needs_attention(o)):
        flag = " ⚠️" if order_helpers.needs_attention(order) else ""
        with st.expander(f"{order.get('orderNumber')} · {order.get('status')}{flag}"):
            _order_controls(shop, order, key)
