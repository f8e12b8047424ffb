"""Live session listing that re-renders whenever the store file is rewritten."""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import Config
from .listing import render_listing
from .repositories import SessionRepository, SpeakerRepository
from .store import Store

log = logging.getLogger(__name__)

_DEBOUNCE_SECONDS = 1.0


class _StoreEventHandler(FileSystemEventHandler):
    """Calls ``on_change`` once a burst of writes to ``store_file`` settles."""

    def __init__(self, store_file: Path, on_change: Callable[[], None]):
        super().__init__()
        self._store_name = store_file.name
        self._on_change = on_change
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory or Path(str(event.src_path)).name != self._store_name:
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(_DEBOUNCE_SECONDS, self._on_change)
            self._timer.daemon = True
            self._timer.start()


def refresh(store: Store) -> None:
    """Reload the store and log the current listing."""
    try:
        store.reload()
        rows = render_listing(SessionRepository(store), SpeakerRepository(store))
    except Exception:
        log.error("Refreshing listing failed", exc_info=True)
        return
    log.info("%d session(s) scheduled", len(rows))
    for row in rows:
        log.info("  %s", row)


def watch(config: Config, store: Store) -> None:
    """Log the listing, then again after every store change. Blocks until SIGINT/SIGTERM."""
    store_dir = config.store_path.parent
    if not store_dir.exists():
        log.error("Store directory does not exist: %s", store_dir)
        raise SystemExit(1)

    refresh(store)
    handler = _StoreEventHandler(config.store_path, lambda: refresh(store))
    observer = Observer()
    observer.schedule(handler, str(store_dir), recursive=False)

    stopped = threading.Event()

    def _stop(signum: int, frame: object) -> None:
        log.info("Received %s, stopping", signal.Signals(signum).name)
        stopped.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _stop)

    observer.start()
    log.info("Watching %s (Ctrl+C to stop)", config.store_path)
    try:
        while not stopped.wait(timeout=1.0):
            pass
    finally:
        observer.stop()
        observer.join()
