"""Student self-registration for a session."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .errors import ExternalServiceError
from .models import Subscriber
from .notifications import NotificationSender
from .repositories import SessionRepository

log = logging.getLogger(__name__)


def subscribe(
    sessions: SessionRepository,
    notifier: NotificationSender,
    session_id: str,
    name: str,
    email: str,
    *,
    now: datetime | None = None,
) -> Subscriber:
    """Append a subscriber to a session, then send a confirmation.

    The store write happens first and is never rolled back. Repeated
    registrations with the same email are kept, and ``max_participants``
    is not checked.
    """
    subscriber = Subscriber(
        name=name,
        email=email,
        subscribed_at=now or datetime.now(tz=timezone.utc),
    )
    session = sessions.add_subscriber(session_id, subscriber)
    log.info("Subscribed %s to %s (%d total)", email, session_id, len(session.subscribers))

    try:
        sent = notifier.send_confirmation(email, name, session)
    except ExternalServiceError:
        log.warning("Confirmation to %s failed", email, exc_info=True)
    else:
        if not sent:
            log.warning("Confirmation to %s was not delivered", email)
    return subscriber
