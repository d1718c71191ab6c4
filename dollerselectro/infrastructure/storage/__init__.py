"""Client-side persistence (tokens, cached user, UI preferences)."""

from dollerselectro.infrastructure.storage.local_storage import LocalStorage, MemoryStorage

__all__ = ["LocalStorage", "MemoryStorage"]
