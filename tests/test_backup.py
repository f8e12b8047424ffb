"""Tests for sessionplanner.backup — export_data / import_data."""

from __future__ import annotations

import json

from sessionplanner.backup import export_data, import_data
from sessionplanner.models import AppSettings, Subscriber, User
from sessionplanner.repositories import SessionRepository, SettingsRepository, SpeakerRepository, UserRepository
from sessionplanner.store import SESSIONS_KEY, SETTINGS_KEY, SPEAKERS_KEY, USERS_KEY, Store


def _snapshot(store: Store) -> dict:
    return {key: store.get_item(key) for key in (SESSIONS_KEY, USERS_KEY, SPEAKERS_KEY, SETTINGS_KEY)}


def _collections(store: Store) -> dict:
    return {
        "sessions": SessionRepository(store).raw(),
        "users": UserRepository(store).raw(),
        "speakers": SpeakerRepository(store).raw(),
        "settings": SettingsRepository(store).raw(),
    }


class TestExport:
    def test_contains_all_collections(self, store):
        data = json.loads(export_data(store))
        assert set(data) == {"sessions", "users", "speakers", "settings", "exportDate"}
        assert len(data["sessions"]) == 3
        assert data["settings"]["organizationName"] == "Mijn Organisatie"

    def test_uses_stored_data(self, sessions, sample_session):
        sessions.upsert(sample_session)
        data = json.loads(export_data(sessions._store))
        assert [s["id"] for s in data["sessions"]] == [sample_session.id]


class TestImport:
    def test_round_trip_restores_store(self, store, sessions, users, settings, sample_session, fixed_now):
        sessions.upsert(sample_session)
        sessions.add_subscriber(sample_session.id, Subscriber("Bo", "bo@x.nl", fixed_now))
        users.upsert(User(id="7", name="Extra", pin="7777"))
        settings.save(AppSettings(organization_name="School", google_calendar_id="cal"))
        before = _collections(store)
        exported = export_data(store)

        # Diverge, then restore
        sessions.delete(sample_session.id)
        users.delete("7")
        settings.save(AppSettings())

        assert import_data(store, exported) is True
        assert _collections(store) == before

    def test_malformed_json(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        before = _snapshot(store)
        assert import_data(store, "{not json") is False
        assert _snapshot(store) == before

    def test_non_object_document(self, store):
        assert import_data(store, "[]") is False

    def test_wrong_shape_leaves_store_untouched(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        before = _snapshot(store)
        doc = {"users": [{"id": "1", "name": "A", "pin": "1", "role": "ADMIN"}], "sessions": "oops"}
        assert import_data(store, json.dumps(doc)) is False
        assert _snapshot(store) == before

    def test_settings_must_be_object(self, store):
        assert import_data(store, json.dumps({"settings": ["x"]})) is False

    def test_missing_keys_keep_existing_data(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        doc = {"users": [{"id": "5", "name": "Only", "pin": "5", "role": "ADMIN"}]}
        assert import_data(store, json.dumps(doc)) is True
        assert [s.id for s in SessionRepository(store).list()] == [sample_session.id]
        assert [u.id for u in UserRepository(store).list()] == ["5"]
        assert SettingsRepository(store).get().organization_name == "Mijn Organisatie"

    def test_empty_collection_is_imported(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        assert import_data(store, json.dumps({"sessions": []})) is True
        assert SessionRepository(store).list() == []

    def test_session_without_date_rejected(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        before = _snapshot(store)
        doc = {"sessions": [{"id": "x", "title": "No date", "program": "AI Ready"}]}
        assert import_data(store, json.dumps(doc)) is False
        assert _snapshot(store) == before
        assert [s.id for s in SessionRepository(store).list()] == [sample_session.id]

    def test_subscriber_without_timestamp_rejected(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        before = _snapshot(store)
        record = sample_session.to_dict()
        record["subscribers"] = [{"name": "Bo", "email": "bo@x.nl"}]
        assert import_data(store, json.dumps({"sessions": [record]})) is False
        assert _snapshot(store) == before

    def test_unknown_program_rejected(self, store, sample_session):
        record = sample_session.to_dict()
        record["program"] = "Cooking"
        assert import_data(store, json.dumps({"sessions": [record]})) is False

    def test_bad_user_role_rejects_whole_document(self, store, sessions, sample_session):
        sessions.upsert(sample_session)
        before = _snapshot(store)
        doc = {
            "sessions": [],
            "users": [{"id": "9", "name": "X", "pin": "9", "role": "OWNER"}],
        }
        assert import_data(store, json.dumps(doc)) is False
        assert _snapshot(store) == before

    def test_speaker_without_id_rejected(self, store):
        assert import_data(store, json.dumps({"speakers": [{"name": "Anon"}]})) is False
