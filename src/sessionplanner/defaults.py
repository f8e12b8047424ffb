"""Seed data returned by the repositories while the store is empty."""

from __future__ import annotations

from datetime import date, timedelta

from .models import (
    AppSettings,
    InviteStatus,
    Program,
    ReminderSettings,
    Role,
    Session,
    SessionSpeakerConfig,
    Speaker,
    User,
)


def initial_users() -> list[User]:
    return [
        User(id="1", name="Hoofdbeheerder", pin="1102", role=Role.ADMIN, email="admin@organisatie.nl"),
        User(id="2", name="Docent", pin="0000", role=Role.TEACHER, email="docent@organisatie.nl"),
    ]


def initial_settings() -> AppSettings:
    return AppSettings(
        organization_name="Mijn Organisatie",
        google_calendar_id="",
        enable_email_notifications=True,
    )


def initial_speakers() -> list[Speaker]:
    return [
        Speaker(
            id="sp1",
            name="Dr. Sarah Jansen",
            email="sarah.jansen@example.com",
            role_or_title="AI Ethics Researcher",
            bio="Expert in ethische vraagstukken rondom generatieve AI.",
        ),
        Speaker(
            id="sp2",
            name="Mark de Vries",
            email="mark.vries@example.com",
            role_or_title="Senior Recruiter",
            bio="Meer dan 10 jaar ervaring in tech recruitment.",
        ),
    ]


def initial_sessions(today: date | None = None) -> list[Session]:
    """Three sample sessions, one week, two weeks and a month out."""
    today = today or date.today()
    return [
        Session(
            id="1",
            title="Introductie AI Ready",
            program=Program.AI_READY,
            description=(
                "Een kennismaking met de basisprincipes van Kunstmatige Intelligentie "
                "en wat je kunt verwachten van het programma."
            ),
            date=today + timedelta(days=7),
            start_time="10:00",
            end_time="11:30",
            location="Online",
            google_meet_link="https://meet.google.com/abc-defg-hij",
            application_link="https://forms.google.com/example",
            max_participants=30,
            speakers=[SessionSpeakerConfig("sp1", is_co_host=True, invite_status=InviteStatus.ACCEPTED)],
            enable_native_signup=False,
            reminders=ReminderSettings(remind_24h=True, remind_1h=True),
        ),
        Session(
            id="2",
            title="Sollicitatiegesprek Training",
            program=Program.WORK_READY,
            description=(
                "Leer effectieve technieken voor je volgende sollicitatiegesprek. "
                "We oefenen met veelgestelde vragen."
            ),
            date=today + timedelta(days=14),
            start_time="14:00",
            end_time="16:00",
            location="Lokaal 3.02",
            max_participants=15,
            speakers=[SessionSpeakerConfig("sp2", is_co_host=False, invite_status=InviteStatus.SENT)],
            enable_native_signup=True,
            reminders=ReminderSettings(remind_24h=True, remind_1h=False),
        ),
        Session(
            id="3",
            title="Pathways Kick-off",
            program=Program.PATHWAYS,
            description="De start van jouw reis. Ontmoet je mentoren en medestudenten.",
            date=today + timedelta(days=30),
            start_time="09:00",
            end_time="12:00",
            location="Hoofd Aula",
            max_participants=100,
            enable_native_signup=True,
        ),
    ]
