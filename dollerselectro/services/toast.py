"""User feedback callback shared by the services."""

from __future__ import annotations

from typing import Callable

from dollerselectro.utils.logger import get_logger

logger = get_logger()

Toast = Callable[[str, str], None]


def log_toast(kind: str, text: str) -> None:
    """Default toast: write the message to the log. kind is "success" or "error"."""
    if kind == "error":
        logger.warning("toast: %s", text)
    else:
        logger.info("toast: %s", text)
