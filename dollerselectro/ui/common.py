"""Shared Streamlit glue: toasts, error display, page switching."""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from dollerselectro.infrastructure.api.client import ApiError, error_message
from dollerselectro.utils.logger import get_logger

logger = get_logger()

TOAST_ICONS = {"success": "✅", "error": "⚠️"}


def streamlit_toast(kind: str, text: str) -> None:
    """Toast callback for services. Safe to call from the script thread only."""
    st.toast(text, icon=TOAST_ICONS.get(kind))


def go_to(page: str, section: str | None = None) -> None:
    st.session_state.page = page
    st.session_state.section = section
    st.rerun()


def call_api(fn: Callable[..., Any], *args: Any, fallback: str = "Something went wrong", **kwargs: Any) -> Any:
    """Run an API call; on failure show the server message (or `fallback`) and return None."""
    try:
        return fn(*args, **kwargs)
    except ApiError as e:
        logger.warning("%s failed: %s", getattr(fn, "__name__", "API call"), e.message)
        st.error(error_message(e, fallback))
        return None


def payload_list(response: Any, key: str) -> list[dict[str, Any]]:
    """Pull `data.<key>` (or `data` itself when it is a list) out of an API envelope."""
    if not isinstance(response, dict):
        return []
    data = response.get("data")
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        value = data.get(key)
        if isinstance(value, list):
            return value
    return []
