"""Session listing: program, free-text and date-range filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .models import Program, Session, Speaker
from .repositories import SessionRepository, SpeakerRepository

ALL_PROGRAMS = "ALL"


@dataclass
class DateRange:
    """Inclusive day range. Either end may be open."""

    start: date | None = None
    end: date | None = None

    def __contains__(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def _matches_query(session: Session, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in session.title.lower() or needle in session.description.lower()


def visible_sessions(
    sessions: list[Session],
    program: Program | str = ALL_PROGRAMS,
    query: str = "",
    date_range: DateRange | None = None,
) -> list[Session]:
    """Filter sessions and sort them by date (stable for equal dates)."""
    wanted = None if program == ALL_PROGRAMS else Program.parse(program)
    date_range = date_range or DateRange()

    matches = [
        s for s in sessions
        if (wanted is None or s.program is wanted)
        and _matches_query(s, query)
        and s.date in date_range
    ]
    return sorted(matches, key=lambda s: s.date)


def format_session_line(session: Session, speakers: list[Speaker] | None = None) -> str:
    """One listing row: date, times, program, title, registrations, speakers."""
    capacity = f"/{session.max_participants}" if session.max_participants else ""
    line = (
        f"{session.date.isoformat()} {session.start_time}-{session.end_time}  "
        f"[{session.program.value}] {session.title}  "
        f"({len(session.subscribers)}{capacity} registered)  id={session.id}"
    )
    if speakers:
        line += "  with " + ", ".join(s.name for s in speakers)
    return line


def render_listing(
    sessions: SessionRepository,
    speakers: SpeakerRepository,
    program: Program | str = ALL_PROGRAMS,
    query: str = "",
    date_range: DateRange | None = None,
) -> list[str]:
    """Rows for every visible session, with resolved speaker names."""
    rows = []
    for session in visible_sessions(sessions.list(), program, query, date_range):
        names = [sp for _, sp in speakers.resolve(session.speakers)]
        rows.append(format_session_line(session, names))
    return rows
