# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model root watching: mtime polling and per-file debouncing."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from pathlib import Path

from topmodel.config import MODEL_FILE_SUFFIX

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_DEBOUNCE_DELAY = 0.5
DEFAULT_POLL_INTERVAL = 0.5


class Debouncer:
    """Delays a callback per key until events for that key stop arriving.

    Each push for a key cancels the key's pending call and schedules a new
    one with the latest arguments. Keys are independent of each other.
    """

    def __init__(self, callback: Callable[..., object], delay: float = DEFAULT_DEBOUNCE_DELAY) -> None:
        self._callback = callback
        self._delay = delay
        self._timers: dict[Hashable, threading.Timer] = {}
        self._lock = threading.Lock()

    def push(self, key: Hashable, *args: object) -> None:
        """Schedule ``callback(*args)`` for *key*, replacing any pending call."""
        with self._lock:
            previous = self._timers.get(key)
            if previous is not None:
                previous.cancel()
            timer = threading.Timer(self._delay, self._fire, args=(key, args))
            timer.daemon = True
            self._timers[key] = timer
            timer.start()

    def pending(self) -> int:
        """Return the number of keys with a scheduled call."""
        with self._lock:
            return len(self._timers)

    def cancel(self) -> None:
        """Drop every scheduled call."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()

    def _fire(self, key: Hashable, args: tuple[object, ...]) -> None:
        with self._lock:
            timer = self._timers.get(key)
            if timer is None or timer is not threading.current_thread():
                # Superseded by a later push.
                return
            del self._timers[key]
        self._callback(*args)


class FileWatcher:
    """Polls the model root for created, modified and deleted model files.

    Every change is pushed into a Debouncer keyed by path, which calls
    *on_change* with the path once the file has been quiet for the delay.
    """

    def __init__(
        self,
        root: Path,
        on_change: Callable[[Path], object],
        *,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.root = root
        self.poll_interval = poll_interval
        self._debouncer = Debouncer(on_change, delay)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._file_mtimes: dict[Path, float] = {}

    def start(self) -> None:
        """Record the current state of the model root and start polling."""
        self._file_mtimes = self._scan_files()
        self._thread = threading.Thread(target=self._watch_loop, name="topmodel-watch", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and drop the changes not delivered yet."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2)
        dropped = self._debouncer.pending()
        if dropped:
            logger.info("Dropping %d undelivered change(s)", dropped)
        self._debouncer.cancel()

    def poll(self) -> list[Path]:
        """Compare the model root with the last scan and push every change.

        Returns:
            The created, modified and deleted paths, sorted.
        """
        current = self._scan_files()
        changed = [p for p, mtime in current.items() if self._file_mtimes.get(p) != mtime]
        changed.extend(p for p in self._file_mtimes if p not in current)
        self._file_mtimes = current
        for path in sorted(changed):
            self._debouncer.push(path, path)
        return sorted(changed)

    def _scan_files(self) -> dict[Path, float]:
        mtimes: dict[Path, float] = {}
        if not self.root.is_dir():
            return mtimes
        for file_path in self.root.rglob(f"*{MODEL_FILE_SUFFIX}"):
            try:
                mtimes[file_path] = file_path.stat().st_mtime
            except FileNotFoundError:
                # Deleted between listing and stat; the next poll reports it.
                continue
        return mtimes

    def _watch_loop(self) -> None:
        while not self._stop_event.wait(self.poll_interval):
            try:
                self.poll()
            except OSError:
                logger.exception("Failed to scan %s", self.root)
