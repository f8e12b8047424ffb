"""Shared fixtures for sessionplanner tests."""

from __future__ import annotations

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from sessionplanner.calendar_sync import CalendarSync
from sessionplanner.meetings import MeetingLinkProvider
from sessionplanner.models import (
    InviteStatus,
    Program,
    Session,
    SessionSpeakerConfig,
    Speaker,
    Subscriber,
)
from sessionplanner.notifications import NotificationSender
from sessionplanner.repositories import (
    SessionRepository,
    SettingsRepository,
    SpeakerRepository,
    UserRepository,
)
from sessionplanner.store import Store


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path) -> Store:
    return Store(store_path=tmp_path / "store.json")


@pytest.fixture
def sessions(store) -> SessionRepository:
    repo = SessionRepository(store)
    store.set_json(repo.key, [])
    return repo


@pytest.fixture
def speakers(store) -> SpeakerRepository:
    return SpeakerRepository(store)


@pytest.fixture
def users(store) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def settings(store) -> SettingsRepository:
    return SettingsRepository(store)


@pytest.fixture
def make_session():
    def _make(session_id="s1", title="Intro AI", day=date(2024, 1, 31), **kwargs):
        fields = {
            "program": Program.AI_READY,
            "start_time": "10:00",
            "end_time": "11:30",
        }
        fields.update(kwargs)
        return Session(id=session_id, title=title, date=day, **fields)
    return _make


@pytest.fixture
def sample_session(make_session, fixed_now) -> Session:
    return make_session(
        description="Basics of machine learning",
        location="Room 1.01",
        max_participants=20,
        speakers=[SessionSpeakerConfig("sp1", is_co_host=True, invite_status=InviteStatus.ACCEPTED)],
        subscribers=[Subscriber("Ann", "ann@example.com", fixed_now)],
    )


@pytest.fixture
def sample_speaker() -> Speaker:
    return Speaker(id="sp1", name="Dr. Sarah Jansen", email="sarah@example.com", role_or_title="Researcher")


@pytest.fixture
def mock_calendar():
    calendar = MagicMock(spec=CalendarSync)
    calendar.add_attendee.return_value = True
    return calendar


@pytest.fixture
def mock_notifier():
    notifier = MagicMock(spec=NotificationSender)
    notifier.send_speaker_invite.return_value = True
    notifier.send_confirmation.return_value = True
    notifier.schedule_reminders.return_value = True
    return notifier


@pytest.fixture
def mock_meetings():
    meetings = MagicMock(spec=MeetingLinkProvider)
    meetings.create_link.return_value = "https://meet.google.com/abc123-prod"
    return meetings
