"""
DollersElectro storefront: Streamlit UI entry point.
"""

import uuid

import streamlit as st

# Load .env first so DOLLERS_API_URL and friends are in place before clients are built
from dollerselectro.utils.config import load_config, api_base_url, log_level
load_config()

from dollerselectro.infrastructure.api.shop import ShopClient
from dollerselectro.infrastructure.storage.local_storage import FLOATING_BUTTONS_KEY, session_storage
from dollerselectro.services.auth_store import AuthStore
from dollerselectro.services.notification_center import NotificationCenter
from dollerselectro.ui import navigation
from dollerselectro.ui.admin_pages import render_admin, render_employee
from dollerselectro.ui.auth_pages import render_password_change, render_sign_in
from dollerselectro.ui.common import go_to, streamlit_toast
from dollerselectro.ui.shop_pages import render_orders, render_quizzes, render_shop
from dollerselectro.ui.support_pages import (
    render_bell,
    render_contact,
    render_my_messages,
    render_notifications,
)
from dollerselectro.utils.logger import setup_logger, get_logger

setup_logger("dollers_electro", level=log_level())
log = get_logger()

st.set_page_config(page_title="DollersElectro", page_icon="💡", layout="wide")


# Each browser session keeps its own token file
if "storage" not in st.session_state:
    st.session_state.storage = session_storage(uuid.uuid4().hex)
storage = st.session_state.storage


def _on_unauthorized(route: str) -> None:
    st.session_state.pending_route = route


# Per-session clients and state
if "shop" not in st.session_state:
    st.session_state.shop = ShopClient(storage, on_unauthorized=_on_unauthorized)
if "auth" not in st.session_state:
    auth_store = AuthStore(st.session_state.shop.auth, storage)
    auth_store.initialize_auth()
    if auth_store.state.tokens.access_token:
        auth_store.get_current_user()
    st.session_state.auth = auth_store
if "notifications" not in st.session_state:
    st.session_state.notifications = NotificationCenter(
        st.session_state.shop.chat,
        lambda: st.session_state.auth.state.user,
        toast=streamlit_toast,
    )
if "page" not in st.session_state:
    st.session_state.page = navigation.HOME
if "section" not in st.session_state:
    st.session_state.section = None
if "pending_route" not in st.session_state:
    st.session_state.pending_route = None

shop: ShopClient = st.session_state.shop
auth: AuthStore = st.session_state.auth
center: NotificationCenter = st.session_state.notifications

if st.session_state.pending_route:
    route = st.session_state.pending_route
    st.session_state.pending_route = None
    log.info("Redirecting to %s", route)
    auth.clear_auth_state()
    st.toast("Your session has ended. Please sign in again.", icon="🔒")
    page, section = navigation.page_for_route(route, auth.role, auth.state.is_authenticated)
    st.session_state.page, st.session_state.section = page, section

role = auth.role
authenticated = auth.state.is_authenticated
pages = navigation.pages_for(role, authenticated)
if st.session_state.page not in pages:
    st.session_state.page = navigation.HOME

with st.sidebar:
    st.title("💡 DollersElectro")
    if authenticated:
        user = auth.state.user or {}
        st.caption(f"Signed in as **{user.get('firstName', '')} {user.get('lastName', '')}** · {role}")
        render_bell(center, auth)
    page = st.radio("Go to", pages, index=pages.index(st.session_state.page))
    if page != st.session_state.page:
        st.session_state.page = page
        st.session_state.section = None

    floating = navigation.parse_bool(storage.get_item(FLOATING_BUTTONS_KEY), default=True)
    new_floating = st.toggle("Show quick buttons", value=floating)
    if new_floating != floating:
        storage.set_item(FLOATING_BUTTONS_KEY, "true" if new_floating else "false")

    if authenticated and st.button("Sign out", use_container_width=True):
        auth.logout()
        center.notifications, center.unread_count = [], 0
        st.session_state.live_chats = {}
        go_to(navigation.HOME)
    with st.expander("Settings"):
        st.caption(f"Backend: `{api_base_url()}`")

if authenticated and (auth.state.user or {}).get("isTemporaryPassword"):
    render_password_change(auth)
    st.stop()

page = st.session_state.page
if page == navigation.HOME:
    render_shop(shop, auth)
elif page == navigation.SIGN_IN:
    render_sign_in(auth, shop)
elif page == navigation.CONTACT:
    render_contact(shop, auth)
elif page == navigation.MY_MESSAGES:
    render_my_messages(shop)
elif page == navigation.MY_ORDERS:
    render_orders(shop)
elif page == navigation.NOTIFICATIONS:
    render_notifications(shop, center, auth)
elif page == navigation.QUIZZES:
    render_quizzes(shop)
elif page == navigation.ADMIN:
    render_admin(shop)
elif page == navigation.EMPLOYEE:
    render_employee(shop)

if navigation.parse_bool(storage.get_item(FLOATING_BUTTONS_KEY), default=True):
    st.divider()
    c1, c2, _ = st.columns([1, 1, 4])
    if c1.button("💬 Contact us", key="fab_contact"):
        go_to(navigation.CONTACT)
    if authenticated and c2.button("🧠 Quizzes", key="fab_quiz"):
        go_to(navigation.QUIZZES)
