"""Data models for sessions, speakers, users and settings.

Every persisted type converts to and from the camelCase dict layout used in
the store, so stored JSON stays readable by other tools working on the
same data.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum


class Program(str, Enum):
    PATHWAYS = "Pathways Oriëntatie"
    AI_READY = "AI Ready"
    WORK_READY = "Work Ready"
    GENERAL = "Algemeen"

    @classmethod
    def parse(cls, value: str | Program) -> Program:
        """Accept a member, its name (``AI_READY``) or its label (``AI Ready``)."""
        if isinstance(value, cls):
            return value
        if value in cls.__members__:
            return cls[value]
        return cls(value)


class Role(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"


class InviteStatus(str, Enum):
    NOT_SENT = "NOT_SENT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class RecurrenceFrequency(str, Enum):
    NONE = "NONE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp, including the ``Z`` suffix browsers emit."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Speaker:
    id: str
    name: str
    email: str
    role_or_title: str = ""
    bio: str | None = None
    photo_url: str | None = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "roleOrTitle": self.role_or_title,
            "bio": self.bio,
            "photoUrl": self.photo_url,
        })

    @classmethod
    def from_dict(cls, data: dict) -> Speaker:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            role_or_title=data.get("roleOrTitle", ""),
            bio=data.get("bio"),
            photo_url=data.get("photoUrl"),
        )


@dataclass
class User:
    id: str
    name: str
    pin: str
    role: Role = Role.TEACHER
    email: str | None = None
    picture: str | None = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "pin": self.pin,
            "role": self.role.value,
            "email": self.email,
            "picture": self.picture,
        })

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            pin=data.get("pin", ""),
            role=Role(data.get("role", Role.TEACHER.value)),
            email=data.get("email"),
            picture=data.get("picture"),
        )


@dataclass
class Subscriber:
    name: str
    email: str
    subscribed_at: datetime

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "subscribedAt": self.subscribed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Subscriber:
        return cls(
            name=data.get("name", ""),
            email=data.get("email", ""),
            subscribed_at=parse_timestamp(data["subscribedAt"]),
        )


@dataclass
class SessionSpeakerConfig:
    speaker_id: str
    is_co_host: bool = False
    invite_status: InviteStatus = InviteStatus.NOT_SENT

    def to_dict(self) -> dict:
        return {
            "speakerId": self.speaker_id,
            "isCoHost": self.is_co_host,
            "inviteStatus": self.invite_status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SessionSpeakerConfig:
        return cls(
            speaker_id=data["speakerId"],
            is_co_host=bool(data.get("isCoHost", False)),
            invite_status=InviteStatus(data.get("inviteStatus", InviteStatus.NOT_SENT.value)),
        )


@dataclass
class ReminderSettings:
    remind_24h: bool = True
    remind_1h: bool = True

    def to_dict(self) -> dict:
        return {"remind24h": self.remind_24h, "remind1h": self.remind_1h}

    @classmethod
    def from_dict(cls, data: dict | None) -> ReminderSettings:
        data = data or {}
        return cls(
            remind_24h=bool(data.get("remind24h", True)),
            remind_1h=bool(data.get("remind1h", True)),
        )


@dataclass
class Session:
    id: str
    title: str
    program: Program
    date: date
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    internal_notes: str | None = None
    google_meet_link: str | None = None
    application_link: str | None = None
    recording_link: str | None = None
    max_participants: int | None = None
    image_url: str | None = None
    speakers: list[SessionSpeakerConfig] = field(default_factory=list)
    subscribers: list[Subscriber] = field(default_factory=list)
    enable_native_signup: bool = True
    reminders: ReminderSettings = field(default_factory=ReminderSettings)

    def __post_init__(self) -> None:
        # Sessions built by hand may pass None; keep the lists non-null
        if self.speakers is None:
            self.speakers = []
        if self.subscribers is None:
            self.subscribers = []
        speaker_ids = [c.speaker_id for c in self.speakers]
        if len(speaker_ids) != len(set(speaker_ids)):
            raise ValueError(f"Duplicate speaker ids in session {self.id}")

    def copy(self) -> Session:
        return copy.deepcopy(self)

    def speaker_config(self, speaker_id: str) -> SessionSpeakerConfig | None:
        for config in self.speakers:
            if config.speaker_id == speaker_id:
                return config
        return None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "title": self.title,
            "program": self.program.value,
            "description": self.description,
            "internalNotes": self.internal_notes,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "googleMeetLink": self.google_meet_link,
            "applicationLink": self.application_link,
            "recordingLink": self.recording_link,
            "maxParticipants": self.max_participants,
            "imageUrl": self.image_url,
            "speakers": [s.to_dict() for s in self.speakers],
            "subscribers": [s.to_dict() for s in self.subscribers],
            "enableNativeSignup": self.enable_native_signup,
            "reminders": self.reminders.to_dict(),
        })

    @classmethod
    def from_dict(cls, data: dict) -> Session:
        raw_date = data["date"]
        return cls(
            id=data["id"],
            title=data["title"],
            program=Program.parse(data["program"]),
            date=raw_date if isinstance(raw_date, date) else date.fromisoformat(raw_date),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
            description=data.get("description") or "",
            location=data.get("location") or "",
            internal_notes=data.get("internalNotes"),
            google_meet_link=data.get("googleMeetLink"),
            application_link=data.get("applicationLink"),
            recording_link=data.get("recordingLink"),
            max_participants=data.get("maxParticipants"),
            image_url=data.get("imageUrl"),
            speakers=[SessionSpeakerConfig.from_dict(s) for s in data.get("speakers") or []],
            subscribers=[Subscriber.from_dict(s) for s in data.get("subscribers") or []],
            enable_native_signup=bool(data.get("enableNativeSignup", True)),
            reminders=ReminderSettings.from_dict(data.get("reminders")),
        )


@dataclass
class AppSettings:
    organization_name: str = "Mijn Organisatie"
    google_calendar_id: str = ""
    google_client_id: str | None = None
    google_api_key: str | None = None
    email_webhook_url: str | None = None
    enable_email_notifications: bool = True

    def to_dict(self) -> dict:
        return _drop_none({
            "organizationName": self.organization_name,
            "googleCalendarId": self.google_calendar_id,
            "googleClientId": self.google_client_id,
            "googleApiKey": self.google_api_key,
            "emailWebhookUrl": self.email_webhook_url,
            "enableEmailNotifications": self.enable_email_notifications,
        })

    @classmethod
    def from_dict(cls, data: dict) -> AppSettings:
        return cls(
            organization_name=data.get("organizationName", "Mijn Organisatie"),
            google_calendar_id=data.get("googleCalendarId") or "",
            google_client_id=data.get("googleClientId"),
            google_api_key=data.get("googleApiKey"),
            email_webhook_url=data.get("emailWebhookUrl"),
            enable_email_notifications=bool(data.get("enableEmailNotifications", True)),
        )


@dataclass
class RecurrenceRule:
    frequency: RecurrenceFrequency = RecurrenceFrequency.NONE
    occurrence_count: int = 1

    @property
    def is_active(self) -> bool:
        return self.frequency is not RecurrenceFrequency.NONE and self.occurrence_count > 1
