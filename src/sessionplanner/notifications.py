"""Speaker invites, registration confirmations and reminder requests."""

from __future__ import annotations

import logging
from typing import Any

from .errors import ExternalServiceError
from .models import Session, Speaker
from .repositories import SettingsRepository
from .webhook import post_event

log = logging.getLogger(__name__)


class NotificationSender:
    """Sends mail through the automation webhook.

    Without a webhook URL, or with notifications switched off, every call
    reports success without sending anything.
    """

    def __init__(self, settings: SettingsRepository, *, timeout: float | None = None):
        self._settings = settings
        self._timeout = timeout

    def _post(self, event_type: str, payload: dict[str, Any]) -> bool:
        settings = self._settings.get()
        if not settings.email_webhook_url or not settings.enable_email_notifications:
            log.info("No webhook configured or emails disabled, skipping %s", event_type)
            return True
        try:
            post_event(settings.email_webhook_url, event_type, payload, timeout=self._timeout)
        except ExternalServiceError as e:
            log.error("%s", e)
            return False
        return True

    def send_speaker_invite(self, speaker: Speaker, session: Session, is_co_host: bool) -> bool:
        log.info("Sending speaker invite to %s for %s", speaker.email, session.id)
        return self._post("SPEAKER_INVITE", {
            "to": speaker.email,
            "name": speaker.name,
            "sessionTitle": session.title,
            "date": session.date.isoformat(),
            "time": f"{session.start_time} - {session.end_time}",
            "location": session.location,
            "meetLink": session.google_meet_link or session.location,
            "isCoHost": is_co_host,
        })

    def send_confirmation(self, email: str, name: str, session: Session) -> bool:
        log.info("Sending registration confirmation to %s for %s", email, session.id)
        return self._post("STUDENT_CONFIRMATION", {
            "to": email,
            "name": name,
            "sessionTitle": session.title,
            "date": session.date.isoformat(),
            "time": session.start_time,
            "location": session.location,
        })

    def schedule_reminders(self, session: Session) -> bool:
        """Ask the webhook to schedule reminder mails for current subscribers."""
        if not session.subscribers:
            log.debug("No subscribers for %s, no reminders to schedule", session.id)
            return True
        if not (session.reminders.remind_24h or session.reminders.remind_1h):
            log.debug("Reminders disabled for %s", session.id)
            return True

        log.info("Scheduling reminders for %d subscriber(s) of %s", len(session.subscribers), session.id)
        return self._post("SCHEDULE_REMINDERS", {
            "sessionId": session.id,
            "reminders": session.reminders.to_dict(),
            "subscribers": [s.email for s in session.subscribers],
        })
