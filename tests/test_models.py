"""Tests for sessionplanner.models — dict conversion and enum parsing."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from sessionplanner.models import (
    AppSettings,
    InviteStatus,
    Program,
    RecurrenceFrequency,
    RecurrenceRule,
    ReminderSettings,
    Role,
    Session,
    SessionSpeakerConfig,
    Speaker,
    Subscriber,
    User,
    parse_timestamp,
)


class TestProgram:
    def test_parse_by_name(self):
        assert Program.parse("AI_READY") is Program.AI_READY

    def test_parse_by_label(self):
        assert Program.parse("Pathways Oriëntatie") is Program.PATHWAYS

    def test_parse_member(self):
        assert Program.parse(Program.GENERAL) is Program.GENERAL

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Program.parse("Cooking")


class TestParseTimestamp:
    def test_z_suffix(self):
        ts = parse_timestamp("2024-06-15T12:00:00.000Z")
        assert ts == datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        assert parse_timestamp("2024-06-15T12:00:00").tzinfo == timezone.utc


class TestSession:
    def test_defaults(self, make_session):
        s = make_session()
        assert s.speakers == []
        assert s.subscribers == []
        assert s.enable_native_signup is True
        assert s.reminders == ReminderSettings(remind_24h=True, remind_1h=True)

    def test_none_lists_become_empty(self, make_session):
        s = make_session(speakers=None, subscribers=None)
        assert s.speakers == []
        assert s.subscribers == []

    def test_duplicate_speaker_ids_rejected(self, make_session):
        with pytest.raises(ValueError, match="Duplicate speaker"):
            make_session(speakers=[SessionSpeakerConfig("sp1"), SessionSpeakerConfig("sp1")])

    def test_to_dict_uses_stored_layout(self, sample_session):
        d = sample_session.to_dict()
        assert d["program"] == "AI Ready"
        assert d["date"] == "2024-01-31"
        assert d["startTime"] == "10:00"
        assert d["speakers"] == [{"speakerId": "sp1", "isCoHost": True, "inviteStatus": "ACCEPTED"}]
        assert d["subscribers"][0]["email"] == "ann@example.com"
        assert d["reminders"] == {"remind24h": True, "remind1h": True}

    def test_to_dict_omits_unset_optionals(self, make_session):
        d = make_session().to_dict()
        assert "googleMeetLink" not in d
        assert "maxParticipants" not in d
        assert "internalNotes" not in d

    def test_from_dict_round_trip(self, sample_session):
        assert Session.from_dict(sample_session.to_dict()) == sample_session

    def test_from_dict_missing_lists(self):
        s = Session.from_dict({
            "id": "x", "title": "T", "program": "Work Ready", "date": "2024-03-01",
            "startTime": "09:00", "endTime": "10:00", "speakers": None,
        })
        assert s.program is Program.WORK_READY
        assert s.speakers == []
        assert s.subscribers == []

    def test_copy_is_deep(self, sample_session):
        clone = sample_session.copy()
        clone.subscribers.clear()
        clone.speakers[0].invite_status = InviteStatus.DECLINED
        assert len(sample_session.subscribers) == 1
        assert sample_session.speakers[0].invite_status is InviteStatus.ACCEPTED

    def test_speaker_config_lookup(self, sample_session):
        assert sample_session.speaker_config("sp1").is_co_host is True
        assert sample_session.speaker_config("missing") is None


class TestOtherEntities:
    def test_user_round_trip(self):
        u = User(id="1", name="Admin", pin="1102", role=Role.ADMIN, email="a@x.nl")
        assert User.from_dict(u.to_dict()) == u
        assert "picture" not in u.to_dict()

    def test_speaker_round_trip(self):
        sp = Speaker(id="sp9", name="N", email="n@x.nl", role_or_title="Coach", bio="Bio")
        assert sp.to_dict()["roleOrTitle"] == "Coach"
        assert Speaker.from_dict(sp.to_dict()) == sp

    def test_subscriber_round_trip(self):
        sub = Subscriber("Bo", "bo@x.nl", datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert Subscriber.from_dict(sub.to_dict()) == sub

    def test_settings_defaults_from_empty(self):
        s = AppSettings.from_dict({})
        assert s.organization_name == "Mijn Organisatie"
        assert s.google_calendar_id == ""
        assert s.enable_email_notifications is True

    def test_speaker_config_default_status(self):
        c = SessionSpeakerConfig.from_dict({"speakerId": "sp1"})
        assert c.invite_status is InviteStatus.NOT_SENT
        assert c.is_co_host is False


class TestRecurrenceRule:
    def test_none_is_inactive(self):
        assert RecurrenceRule(RecurrenceFrequency.NONE, 5).is_active is False

    def test_single_occurrence_inactive(self):
        assert RecurrenceRule(RecurrenceFrequency.WEEKLY, 1).is_active is False

    def test_active(self):
        assert RecurrenceRule(RecurrenceFrequency.DAILY, 2).is_active is True
