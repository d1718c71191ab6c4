"""Fixed-interval background polling."""

from __future__ import annotations

import threading
from typing import Any, Callable

from dollerselectro.utils.logger import get_logger

logger = get_logger()


class Poller:
    """
    Call `fetch` now and then every `interval` seconds on a daemon thread.

    A failing fetch is logged and the poller carries on with the next tick.
    There is no backoff and no overlap: ticks run one after another on the
    same thread.
    """

    def __init__(self, fetch: Callable[[], Any], interval: float, name: str = "poller") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._fetch = fetch
        self.interval = interval
        self.name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> bool:
        """Run one fetch synchronously. Returns False when it raised."""
        try:
            self._fetch()
            return True
        except Exception as e:
            logger.warning("%s poll failed: %s", self.name, e)
            return False

    def _run(self) -> None:
        logger.debug("%s polling every %ss", self.name, self.interval)
        while not self._stop.is_set():
            self.tick()
            if self._stop.wait(self.interval):
                break

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
