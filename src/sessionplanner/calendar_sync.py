"""Mirror sessions into the configured Google Calendar via the webhook."""

from __future__ import annotations

import logging

from .models import Session, Speaker
from .repositories import SettingsRepository
from .webhook import post_event

log = logging.getLogger(__name__)


class CalendarSync:
    """Best-effort calendar mirror. Quietly does nothing without a calendar id.

    Settings are read on every call so edits take effect without restarting.
    """

    def __init__(self, settings: SettingsRepository, *, timeout: float | None = None):
        self._settings = settings
        self._timeout = timeout

    def sync_session(self, session: Session) -> None:
        settings = self._settings.get()
        if not settings.google_calendar_id:
            log.warning("Skipping calendar sync for %s: no calendar id configured", session.id)
            return
        if not settings.email_webhook_url:
            log.debug("No webhook configured, calendar sync for %s is local only", session.id)
            return

        post_event(
            settings.email_webhook_url,
            "SYNC_CALENDAR_EVENT",
            {"calendarId": settings.google_calendar_id, "session": session.to_dict()},
            timeout=self._timeout,
        )
        log.info("Synced session %s (%s) to calendar", session.id, session.title)

    def add_attendee(self, session: Session, speaker: Speaker, is_co_host: bool) -> bool:
        settings = self._settings.get()
        if not settings.google_calendar_id:
            log.warning("No calendar id configured, not adding %s to %s", speaker.email, session.id)
            return True
        if not settings.email_webhook_url:
            return True

        post_event(
            settings.email_webhook_url,
            "ADD_CALENDAR_ATTENDEE",
            {
                "calendarId": settings.google_calendar_id,
                "sessionId": session.id,
                "email": speaker.email,
                "name": speaker.name,
                "isCoHost": is_co_host,
            },
            timeout=self._timeout,
        )
        return True
