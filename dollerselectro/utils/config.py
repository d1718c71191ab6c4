"""Environment-backed settings for the shop client. Uses python-dotenv.

Everything reads through the accessors at the bottom of this module; a `.env`
file next to `app.py` is loaded first and wins over the process environment.
"""

from pathlib import Path
from typing import Callable, TypeVar

from dotenv import load_dotenv
import os

N = TypeVar("N", int, float)

DEFAULT_API_URL = "http://localhost:5001/api"


def _project_root() -> Path:
    """Directory holding app.py."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """Load `<project root>/.env`. Safe to call repeatedly."""
    load_dotenv(_project_root() / ".env", override=True)


def _raw(key: str) -> str:
    load_config()
    return os.getenv(key, "").strip()


def get_required(key: str) -> str:
    """
    Value of a mandatory variable.

    Raises:
        ValueError: If the variable is unset or blank.
    """
    val = _raw(key)
    if not val:
        raise ValueError(f"Missing required environment variable: {key}. Set it in .env or export it.")
    return val


def get_optional(key: str, default: str = "") -> str:
    return _raw(key) or default


def _get_number(key: str, default: N, cast: Callable[[str], N]) -> N:
    raw = _raw(key)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def get_optional_int(key: str, default: int) -> int:
    """Integer variable; unset or unparsable values give `default`."""
    return _get_number(key, default, int)


def get_optional_float(key: str, default: float) -> float:
    """Float variable; unset or unparsable values give `default`."""
    return _get_number(key, default, float)


# --- Public config accessors ---

def api_base_url() -> str:
    """Shop backend root (DOLLERS_API_URL), without a trailing slash."""
    return get_optional("DOLLERS_API_URL", DEFAULT_API_URL).rstrip("/")


def request_timeout() -> float:
    """Seconds before an HTTP call gives up (DOLLERS_REQUEST_TIMEOUT). Default 10."""
    return get_optional_float("DOLLERS_REQUEST_TIMEOUT", 10.0)


def storage_path() -> Path:
    """JSON file behind LocalStorage (DOLLERS_STORAGE_PATH)."""
    val = get_optional("DOLLERS_STORAGE_PATH")
    return Path(val) if val else _project_root() / "data" / "local_storage.json"


def notification_poll_seconds() -> int:
    return get_optional_int("NOTIFICATION_POLL_SECONDS", 10)


def chat_poll_seconds() -> int:
    return get_optional_int("CHAT_POLL_SECONDS", 3)


def validation_debounce_seconds() -> float:
    """Quiet time after the last keystroke before a live check runs. Default 1.0."""
    return get_optional_float("VALIDATION_DEBOUNCE_SECONDS", 1.0)


def log_level() -> str:
    return get_optional("LOG_LEVEL", "INFO").upper()


def project_root() -> Path:
    return _project_root()
