"""Per-collection accessors over the store.

Each operation reads the whole collection, changes it in memory and writes
the whole collection back. Nothing outside this module touches store keys
for entities.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from . import defaults
from .errors import ConstraintError, NotFoundError
from .models import AppSettings, Role, Session, SessionSpeakerConfig, Speaker, Subscriber, User
from .store import SESSIONS_KEY, SETTINGS_KEY, SPEAKERS_KEY, USERS_KEY, Store

log = logging.getLogger(__name__)

T = TypeVar("T", Session, User, Speaker)


class _CollectionRepository(Generic[T]):
    key: str
    kind: str
    entity: Callable[[dict], T]

    def __init__(self, store: Store):
        self._store = store

    def _seed(self) -> list[T]:
        raise NotImplementedError

    def _write(self, items: list[T]) -> None:
        self._store.set_json(self.key, [item.to_dict() for item in items])

    def raw(self) -> list[dict]:
        """The collection as stored, or the seed data when the key is absent."""
        data = self._store.get_json(self.key)
        if data is None:
            return [item.to_dict() for item in self._seed()]
        return data

    def list(self) -> list[T]:
        data = self._store.get_json(self.key)
        if data is None:
            return self._seed()
        return [self.entity(item) for item in data]

    def find(self, entity_id: str) -> T | None:
        for item in self.list():
            if item.id == entity_id:
                return item
        return None

    def get(self, entity_id: str) -> T:
        item = self.find(entity_id)
        if item is None:
            raise NotFoundError(self.kind, entity_id)
        return item

    def upsert(self, item: T) -> None:
        items = self.list()
        for i, existing in enumerate(items):
            if existing.id == item.id:
                items[i] = item
                break
        else:
            items.append(item)
        self._write(items)
        log.debug("Saved %s %s", self.kind, item.id)

    def delete(self, entity_id: str) -> bool:
        """Remove an entity. Returns whether it existed."""
        items = self.list()
        remaining = [item for item in items if item.id != entity_id]
        if len(remaining) == len(items):
            return False
        self._write(remaining)
        log.debug("Deleted %s %s", self.kind, entity_id)
        return True


class SessionRepository(_CollectionRepository[Session]):
    key = SESSIONS_KEY
    kind = "Session"
    entity = staticmethod(Session.from_dict)

    def _seed(self) -> list[Session]:
        return defaults.initial_sessions()

    def add_subscriber(self, session_id: str, subscriber: Subscriber) -> Session:
        sessions = self.list()
        for session in sessions:
            if session.id == session_id:
                session.subscribers.append(subscriber)
                self._write(sessions)
                return session
        raise NotFoundError(self.kind, session_id)


class UserRepository(_CollectionRepository[User]):
    key = USERS_KEY
    kind = "User"
    entity = staticmethod(User.from_dict)

    def _seed(self) -> list[User]:
        return defaults.initial_users()

    def delete(self, entity_id: str) -> bool:
        users = self.list()
        target = next((u for u in users if u.id == entity_id), None)
        if target is not None and target.role is Role.ADMIN:
            admins = [u for u in users if u.role is Role.ADMIN]
            if len(admins) <= 1:
                raise ConstraintError("Cannot delete the last remaining admin")
        return super().delete(entity_id)


class SpeakerRepository(_CollectionRepository[Speaker]):
    key = SPEAKERS_KEY
    kind = "Speaker"
    entity = staticmethod(Speaker.from_dict)

    def _seed(self) -> list[Speaker]:
        return defaults.initial_speakers()

    def resolve(
        self, configs: list[SessionSpeakerConfig]
    ) -> list[tuple[SessionSpeakerConfig, Speaker]]:
        """Pair each config with its speaker, skipping ids that no longer exist."""
        by_id = {s.id: s for s in self.list()}
        pairs = []
        for config in configs:
            speaker = by_id.get(config.speaker_id)
            if speaker is None:
                log.debug("Speaker %s not found, omitting", config.speaker_id)
                continue
            pairs.append((config, speaker))
        return pairs


class SettingsRepository:
    key = SETTINGS_KEY

    def __init__(self, store: Store):
        self._store = store

    def raw(self) -> dict:
        data = self._store.get_json(self.key)
        if data is None:
            return defaults.initial_settings().to_dict()
        return data

    def get(self) -> AppSettings:
        return AppSettings.from_dict(self.raw())

    def save(self, settings: AppSettings) -> None:
        self._store.set_json(self.key, settings.to_dict())
