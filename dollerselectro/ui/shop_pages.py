"""Storefront pages: product catalogue, cart, orders and quizzes."""

from __future__ import annotations

from typing import Any

import streamlit as st

from dollerselectro.domains import orders as order_helpers
from dollerselectro.domains import products as product_helpers
from dollerselectro.domains.promotions import format_discount_amount
from dollerselectro.infrastructure.api.shop import ShopClient
from dollerselectro.services.auth_store import AuthStore
from dollerselectro.ui.common import call_api, payload_list

SORT_OPTIONS = {
    "Newest": ("createdAt", "desc"),
    "Price: low to high": ("price", "asc"),
    "Price: high to low": ("price", "desc"),
    "Name": ("name", "asc"),
}

STOCK_LABELS = {
    "in_stock": "In stock",
    "low_stock": "Only a few left",
    "out_of_stock": "Out of stock",
}


def _product_card(shop: ShopClient, auth: AuthStore, product: dict[str, Any], key_prefix: str) -> None:
    pid = product.get("_id") or product.get("id")
    with st.container(border=True):
        st.image(product_helpers.primary_image(product), use_container_width=True)
        st.markdown(f"**{product.get('name', '')}**")
        price_line = product_helpers.format_price(product.get("price") or 0)
        if product_helpers.is_on_sale(product):
            price_line += f"  ~~{product_helpers.format_price(product['originalPrice'])}~~"
            price_line += f"  (-{product_helpers.discount_percentage(product)}%)"
        st.markdown(price_line)
        status = product_helpers.stock_status(product)
        st.caption(STOCK_LABELS[status])
        disabled = status == "out_of_stock" or not auth.state.is_authenticated
        if st.button("Add to cart", key=f"{key_prefix}-add-{pid}", disabled=disabled, use_container_width=True):
            if call_api(shop.cart.add_to_cart, pid, 1, fallback="Failed to add to cart") is not None:
                st.toast(f"Added {product.get('name', 'item')} to cart", icon="🛒")


def _grid(shop: ShopClient, auth: AuthStore, products: list[dict[str, Any]], key_prefix: str, columns: int = 4) -> None:
    if not products:
        st.info("No products found.")
        return
    cols = st.columns(columns)
    for i, product in enumerate(products):
        with cols[i % columns]:
            _product_card(shop, auth, product, key_prefix)


def render_shop(shop: ShopClient, auth: AuthStore) -> None:
    st.header("DollersElectro")
    st.caption("Electrical supplies, lighting and tools.")

    featured = payload_list(call_api(shop.products.get_featured_products, 8, fallback="Failed to load products"), "products")
    if featured:
        st.subheader("Featured")
        _grid(shop, auth, featured, "featured")

    st.subheader("All products")
    categories = payload_list(call_api(shop.products.get_categories, fallback="Failed to load categories"), "categories")
    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        query = st.text_input("Search", key="shop_search", placeholder="Search products…")
    with c2:
        category = st.selectbox("Category", ["all", *categories], key="shop_category")
    with c3:
        sort_label = st.selectbox("Sort by", list(SORT_OPTIONS), key="shop_sort")

    response = call_api(shop.products.get_products, {"limit": 48}, fallback="Failed to load products")
    products = payload_list(response, "products")
    products = product_helpers.filter_by_category(products, category)
    products = product_helpers.search_products_local(products, query or "")
    sort_by, sort_order = SORT_OPTIONS[sort_label]
    products = product_helpers.sort_products(products, sort_by, sort_order)
    _grid(shop, auth, products, "all")

    if auth.state.is_authenticated:
        render_cart(shop)


def render_cart(shop: ShopClient) -> None:
    with st.sidebar.expander("🛒 Cart", expanded=False):
        response = call_api(shop.cart.get_cart, fallback="Failed to load cart")
        cart = (response or {}).get("data") or {}
        cart = cart.get("cart", cart) if isinstance(cart, dict) else {}
        items = cart.get("items") or []
        if not items:
            st.caption("Your cart is empty.")
            return
        for item in items:
            product = item.get("product") or {}
            pid = product.get("_id") or product.get("id") or item.get("productId")
            st.markdown(f"{product.get('name', 'Item')} × {item.get('quantity', 1)}")
            qty = st.number_input("Qty", min_value=1, value=int(item.get("quantity") or 1), key=f"cart-qty-{pid}")
            c1, c2 = st.columns(2)
            if c1.button("Update", key=f"cart-upd-{pid}"):
                call_api(shop.cart.update_quantity, pid, int(qty), fallback="Failed to update cart")
                st.rerun()
            if c2.button("Remove", key=f"cart-rm-{pid}"):
                call_api(shop.cart.remove_item, pid, fallback="Failed to remove item")
                st.rerun()
        subtotal = float(cart.get("subtotal") or cart.get("total") or 0)
        st.markdown(f"**Subtotal:** {product_helpers.format_price(subtotal)}")
        code = st.text_input("Promo code", key="cart_promo")
        if code and st.button("Apply", key="cart_promo_apply"):
            result = call_api(
                shop.promo_codes.validate_promo_code,
                {"code": code, "subtotal": subtotal},
                fallback="Invalid promo code",
            )
            promo = ((result or {}).get("data") or {}).get("promoCode")
            if promo:
                st.success(format_discount_amount(promo.get("type", ""), float(promo.get("value") or 0), subtotal))
        if st.button("Clear cart", key="cart_clear"):
            call_api(shop.cart.clear_cart, fallback="Failed to clear cart")
            st.rerun()


def render_orders(shop: ShopClient) -> None:
    st.header("My orders")
    status = st.selectbox(
        "Status",
        ["all", "pending", "confirmed", "processing", "shipped", "delivered", "cancelled"],
        key="orders_status",
    )
    response = call_api(shop.orders.get_customer_orders, {"status": None if status == "all" else status},
                        fallback="Failed to load orders")
    orders = payload_list(response, "orders")
    if not orders:
        st.info("No orders yet.")
        return
    for order in orders:
        oid = order.get("_id") or order.get("id")
        summary = order_helpers.order_summary(order)
        title = f"{order.get('orderNumber', oid)} · {order.get('status', '')} · " \
                f"{order_helpers.format_currency(order.get('total') or 0)}"
        with st.expander(title):
            st.write(f"Items: {summary['itemCount']}")
            delivery = order.get("delivery") or {}
            payment = order.get("payment") or {}
            st.write(f"Delivery: {order_helpers.delivery_method_name(delivery.get('method', ''))}")
            st.write(f"Payment: {order_helpers.payment_method_name(payment.get('method', ''))}")
            eta = order_helpers.estimated_delivery(order) if order.get("orderDate") else None
            if eta is not None and not order_helpers.is_delivered(order):
                st.write(f"Estimated delivery: {eta.strftime('%Y-%m-%d')}")
            if order_helpers.can_cancel(order):
                reason = st.text_input("Cancellation reason", key=f"cancel-reason-{oid}")
                if st.button("Cancel order", key=f"cancel-{oid}"):
                    if call_api(shop.orders.cancel_order, oid, reason or None, fallback="Failed to cancel order"):
                        st.toast("Order cancelled", icon="✅")
                        st.rerun()


def render_quizzes(shop: ShopClient) -> None:
    st.header("Quizzes")
    active = st.session_state.get("active_quiz")
    if active:
        _render_quiz_attempt(shop, active)
        return

    quizzes = payload_list(call_api(shop.quiz.get_quizzes, fallback="Failed to load quizzes"), "quizzes")
    if not quizzes:
        st.info("No quizzes available right now.")
    for quiz in quizzes:
        qid = quiz.get("_id")
        with st.container(border=True):
            st.markdown(f"**{quiz.get('title', 'Quiz')}** · {quiz.get('difficulty', '')}")
            st.caption(quiz.get("description", ""))
            if st.button("Start", key=f"quiz-start-{qid}"):
                started = call_api(shop.quiz.start_quiz, qid, fallback="Failed to start quiz")
                if started and started.get("success"):
                    data = started.get("data") or {}
                    st.session_state.active_quiz = {
                        "quiz": data.get("quiz") or quiz,
                        "userQuizId": (data.get("userQuiz") or {}).get("_id") or data.get("userQuizId"),
                    }
                    st.rerun()

    stats = call_api(shop.quiz.get_user_stats, fallback="Failed to load quiz stats")
    if stats and stats.get("data"):
        st.subheader("Your stats")
        st.json(stats["data"])


def _render_quiz_attempt(shop: ShopClient, active: dict[str, Any]) -> None:
    quiz = active["quiz"]
    st.subheader(quiz.get("title", "Quiz"))
    answers: list[dict[str, Any]] = []
    with st.form("quiz_form"):
        for i, question in enumerate(quiz.get("questions") or []):
            options = question.get("options") or []
            labels = [o.get("text", "") for o in options]
            choice = st.radio(question.get("question", f"Question {i + 1}"), labels, key=f"q-{i}", index=None)
            selected = [o.get("_id") for o in options if o.get("text") == choice]
            answers.append({"questionId": question.get("_id"), "selectedOptions": selected})
        submitted = st.form_submit_button("Submit")
    if submitted:
        result = call_api(
            shop.quiz.submit_quiz,
            quiz.get("_id"),
            active.get("userQuizId"),
            answers,
            fallback="Failed to submit quiz",
        )
        if result and result.get("success"):
            st.success(result.get("message") or "Quiz submitted!")
            st.session_state.active_quiz = None
    if st.button("Back to quizzes"):
        st.session_state.active_quiz = None
        st.rerun()
