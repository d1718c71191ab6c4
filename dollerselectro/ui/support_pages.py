"""Contact form, support conversations and the notification feed."""

from __future__ import annotations

from typing import Any

import streamlit as st

from dollerselectro.domains import messages as message_helpers
from dollerselectro.domains import validation
from dollerselectro.domains.notifications import format_notification_time
from dollerselectro.infrastructure.api.shop import ShopClient
from dollerselectro.services.auth_store import AuthStore
from dollerselectro.services.live_chat import LiveChat
from dollerselectro.services.notification_center import NotificationCenter
from dollerselectro.ui import navigation
from dollerselectro.ui.common import call_api, go_to, payload_list, streamlit_toast
from dollerselectro.utils.config import chat_poll_seconds, notification_poll_seconds

CONTACT_CATEGORIES = ["general", "product_inquiry", "order_support", "technical_support", "complaint", "feedback"]


def render_contact(shop: ShopClient, auth: AuthStore) -> None:
    st.header("Contact us")
    user = auth.state.user or {}
    with st.form("contact_form", clear_on_submit=True):
        name = st.text_input("Name", value=f"{user.get('firstName', '')} {user.get('lastName', '')}".strip())
        email = st.text_input("Email", value=user.get("email", ""))
        phone = st.text_input("Phone (optional)", value=user.get("phone") or "")
        subject = st.text_input("Subject")
        category = st.selectbox("Category", CONTACT_CATEGORIES)
        body = st.text_area("Message")
        submitted = st.form_submit_button("Send message")
    if not submitted:
        return
    if not (name and email and subject and body):
        st.warning(validation.pick_message("missing_fields"))
        return
    if not validation.is_valid_email(email):
        st.warning(validation.pick_message("invalid_email"))
        return
    payload = {"name": name, "email": email, "subject": subject, "message": body, "category": category}
    if phone:
        payload["phone"] = phone
    if call_api(shop.messages.send_contact_message, payload, fallback="Failed to send message") is not None:
        st.success("Thanks! We'll get back to you soon.")


def _chat_for(shop: ShopClient, message_id: str) -> LiveChat:
    chats: dict[str, LiveChat] = st.session_state.setdefault("live_chats", {})
    chat = chats.get(message_id)
    if chat is None:
        chat = LiveChat(shop.messages, shop.chat, message_id, toast=streamlit_toast)
        chats[message_id] = chat
    return chat


@st.fragment(run_every=chat_poll_seconds())
def _chat_panel(chat: LiveChat) -> None:
    chat.refresh()
    message = chat.message
    if not message:
        st.caption("Loading conversation…")
        return
    st.markdown(f"**{message.get('subject', '')}** · {message_helpers.format_status(message.get('status', ''))}")
    with st.chat_message("user"):
        st.markdown(message.get("message", ""))
    for reply in chat.replies:
        author = reply.get("repliedBy") or {}
        role = "user" if author.get("role") in (None, "customer") else "assistant"
        with st.chat_message(role):
            st.markdown(reply.get("message", ""))
            if reply.get("createdAt"):
                st.caption(format_notification_time(reply["createdAt"]))
    if chat.typing_text:
        st.caption(chat.typing_text)


def render_my_messages(shop: ShopClient) -> None:
    st.header("My messages")
    messages = payload_list(call_api(shop.messages.get_my_messages, fallback="Failed to load messages"), "messages")
    if not messages:
        st.info("You have not contacted us yet.")
        return
    labels = {
        m.get("_id"): f"{m.get('subject', '(no subject)')} · {message_helpers.format_status(m.get('status', ''))}"
        for m in messages
    }
    selected = st.selectbox("Conversation", list(labels), format_func=lambda mid: labels[mid], key="my_message_id")
    if not selected:
        return
    chat = _chat_for(shop, selected)
    _chat_panel(chat)
    text = st.chat_input("Write a reply…", key=f"reply-{selected}")
    if text:
        chat.on_input(text)
        chat.send_reply(text)
        chat.set_typing(False)


def _notification_row(center: NotificationCenter, auth: AuthStore, n: dict[str, Any], key_prefix: str) -> None:
    icon = "🔵" if not n.get("isRead") else "⚪"
    when = format_notification_time(n["createdAt"]) if n.get("createdAt") else ""
    c1, c2 = st.columns([5, 1])
    c1.markdown(f"{icon} **{n.get('title', '')}**  \n{n.get('message', '')}  \n_{when}_")
    if c2.button("Open", key=f"{key_prefix}-{n.get('_id')}"):
        route = center.open(n)
        if route.path is None:
            return
        page, section = navigation.page_for_route(route.path, auth.role, auth.state.is_authenticated)
        go_to(page, section)


@st.fragment(run_every=notification_poll_seconds())
def render_bell(center: NotificationCenter, auth: AuthStore) -> None:
    """Sidebar bell: badge plus the latest notifications, refreshed on a timer."""
    center.refresh()
    badge = center.badge
    with st.popover(f"🔔 {badge}" if badge else "🔔", use_container_width=True):
        if not center.notifications:
            st.caption("No notifications")
        for n in center.notifications:
            _notification_row(center, auth, n, "bell")
        if center.unread_count and st.button("Mark all as read", key="bell-read-all"):
            center.mark_all_as_read()


def render_notifications(shop: ShopClient, center: NotificationCenter, auth: AuthStore) -> None:
    st.header("Notifications")
    unread_only = st.toggle("Unread only", key="notif_unread_only")
    response = call_api(shop.chat.get_notifications, 1, 50, unread_only, fallback="Failed to load notifications")
    items = payload_list(response, "notifications")
    if st.button("Mark all as read", disabled=not items):
        if center.mark_all_as_read():
            st.rerun()
    if not items:
        st.info("You're all caught up.")
    for n in items:
        _notification_row(center, auth, n, "page")
