"""File-backed key-value store holding each collection as a JSON text blob."""

from __future__ import annotations

import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)

_DEFAULT_STORE_DIR = Path.home() / ".local" / "share" / "sessionplanner"
_DEFAULT_STORE_PATH = _DEFAULT_STORE_DIR / "store.json"

SESSIONS_KEY = "app_sessions"
USERS_KEY = "app_users"
SPEAKERS_KEY = "app_speakers"
SETTINGS_KEY = "app_settings"


class Store:
    """Persistent ``key -> JSON text`` map, rewritten on every change."""

    def __init__(self, store_path: Path | None = None):
        self.path = store_path or _DEFAULT_STORE_PATH
        self._items: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        if self.path.exists():
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                log.warning("Failed to load store at %s, starting empty", self.path)
                return
            if not isinstance(raw, dict):
                log.warning("Store at %s is not a JSON object, starting empty", self.path)
                return
            self._items = {str(k): v for k, v in raw.items() if isinstance(v, str)}
            log.debug("Loaded store with %d keys", len(self._items))

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")

    def reload(self) -> None:
        """Re-read the file, picking up writes made by another process."""
        self._items = {}
        self._load()

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    def keys(self) -> list[str]:
        return list(self._items)

    # JSON helpers used by the repositories

    def get_json(self, key: str):
        """Return the decoded value for ``key``, or None when absent."""
        text = self.get_item(key)
        if text is None:
            return None
        return json.loads(text)

    def set_json(self, key: str, value) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))
