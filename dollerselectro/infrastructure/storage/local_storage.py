"""
Client-side key-value storage, the desktop counterpart of browser localStorage.

Values are strings; callers JSON-encode structured values themselves (the
`user` key holds a JSON document). The file-backed store keeps everything in a
single JSON object on disk.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
import threading
from pathlib import Path

from dollerselectro.utils.config import storage_path
from dollerselectro.utils.logger import get_logger

logger = get_logger()

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"
FLOATING_BUTTONS_KEY = "floatingButtonsVisible"

SESSION_ID_RE = re.compile(r"[A-Za-z0-9_-]+")

_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    """One lock per storage file, shared by every LocalStorage on that file."""
    key = path.resolve()
    with _path_locks_guard:
        return _path_locks.setdefault(key, threading.RLock())


class MemoryStorage:
    """In-memory storage with the same interface as LocalStorage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def _read(self) -> dict[str, str]:
        return self._items

    def _write(self, items: dict[str, str]) -> None:
        self._items = items

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = dict(self._read())
            items[key] = str(value)
            self._write(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = dict(self._read())
            if key in items:
                del items[key]
                self._write(items)

    def clear(self) -> None:
        with self._lock:
            self._write({})

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._read().keys())


class LocalStorage(MemoryStorage):
    """
    JSON-file backed storage.

    A missing file reads as empty. An unreadable or malformed file is logged
    and treated as empty; the next write replaces it.
    """

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = Path(path) if path is not None else storage_path()
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Local storage read failed for %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage at %s is not an object; ignoring", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        # Readers only ever see the old file or the complete new one.
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f"{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def session_storage(session_id: str, base_dir: Path | None = None) -> LocalStorage:
    """
    File-backed storage private to one UI session.

    Args:
        session_id: Letters, digits, `_` or `-`; names the file.
        base_dir: Directory for session files. Defaults to `sessions/` next
            to the configured storage path.

    Raises:
        ValueError: If `session_id` could escape the sessions directory.
    """
    if not SESSION_ID_RE.fullmatch(session_id or ""):
        raise ValueError(f"Invalid storage session id: {session_id!r}")
    root = Path(base_dir) if base_dir is not None else storage_path().parent / "sessions"
    return LocalStorage(root / f"{session_id}.json")
