"""Whole-store export and import as a single JSON document."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from .errors import DataImportError
from .models import AppSettings, Session, Speaker, User
from .repositories import SessionRepository, SettingsRepository, SpeakerRepository, UserRepository
from .store import SESSIONS_KEY, SETTINGS_KEY, SPEAKERS_KEY, USERS_KEY, Store

log = logging.getLogger(__name__)

_COLLECTIONS = {
    "sessions": (SESSIONS_KEY, Session.from_dict),
    "users": (USERS_KEY, User.from_dict),
    "speakers": (SPEAKERS_KEY, Speaker.from_dict),
}


def _check_records(name: str, records: list[dict], parse) -> None:
    for i, record in enumerate(records):
        try:
            parse(record)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DataImportError(f"'{name}' entry {i} is not a valid record: {e!r}") from e


def export_data(store: Store) -> str:
    """Serialize all four collections plus an export timestamp."""
    data = {
        "sessions": SessionRepository(store).raw(),
        "users": UserRepository(store).raw(),
        "speakers": SpeakerRepository(store).raw(),
        "settings": SettingsRepository(store).raw(),
        "exportDate": datetime.now(tz=timezone.utc).isoformat(),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _parse_document(text: str) -> dict[str, object]:
    """Validate a backup document, returning the store writes it implies."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataImportError(f"Backup is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DataImportError("Backup must be a JSON object")

    writes: dict[str, object] = {}
    for name, (key, parse) in _COLLECTIONS.items():
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            raise DataImportError(f"'{name}' must be a list of objects")
        _check_records(name, value, parse)
        writes[key] = value

    settings = data.get("settings")
    if settings is not None:
        if not isinstance(settings, dict):
            raise DataImportError("'settings' must be an object")
        _check_records("settings", [settings], AppSettings.from_dict)
        writes[SETTINGS_KEY] = settings
    return writes


def import_data(store: Store, text: str) -> bool:
    """Replace each collection present in ``text``. Returns False on a bad document.

    Keys missing from the document keep their current data. Nothing is
    written unless the whole document is valid.
    """
    try:
        writes = _parse_document(text)
    except DataImportError as e:
        log.error("Import failed: %s", e)
        return False

    for key, value in writes.items():
        store.set_json(key, value)
    log.info("Imported %d collection(s)", len(writes))
    return True
