"""Orchestrator: validate -> expand -> sync externally -> commit to store."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, Mapping

from . import recurrence
from .calendar_sync import CalendarSync
from .errors import ConstraintError, ExternalServiceError, NotFoundError, ValidationError
from .generation import RESOLUTIONS, ContentGenerator, Resolution
from .meetings import MeetingLinkProvider
from .models import InviteStatus, RecurrenceRule, Session, SessionSpeakerConfig
from .notifications import NotificationSender
from .repositories import SessionRepository, SpeakerRepository

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "date", "program", "startTime", "endTime")
ONLINE_LOCATION = "Online (Google Meet)"


class PartialFailurePolicy(str, Enum):
    """What to do when one external call in a sequence fails."""

    CONTINUE = "continue"
    ABORT = "abort"


def _new_id() -> str:
    return str(uuid.uuid4())


class SessionWorkflow:
    """Coordinates saving, deleting and inviting for sessions.

    External calls are made one at a time, in order. Under
    ``PartialFailurePolicy.CONTINUE`` a failed call is logged and the
    sequence carries on; under ``ABORT`` the error is raised.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        speakers: SpeakerRepository,
        calendar: CalendarSync,
        notifier: NotificationSender,
        meetings: MeetingLinkProvider,
        *,
        generator: ContentGenerator | None = None,
        save_policy: PartialFailurePolicy = PartialFailurePolicy.CONTINUE,
        invite_policy: PartialFailurePolicy = PartialFailurePolicy.ABORT,
        online_location: str = ONLINE_LOCATION,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.sessions = sessions
        self.speakers = speakers
        self.calendar = calendar
        self.notifier = notifier
        self.meetings = meetings
        self.generator = generator
        self.save_policy = save_policy
        self.invite_policy = invite_policy
        self.online_location = online_location
        self._id_factory = id_factory
        self._inviting: set[str] = set()
        self._lock = threading.Lock()

    # -- save / delete --------------------------------------------------

    def _build_session(self, draft: Session | Mapping[str, Any], is_new: bool) -> Session:
        data = draft.to_dict() if isinstance(draft, Session) else dict(draft)

        missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise ValidationError.for_missing(missing)

        if is_new:
            data["id"] = self._id_factory()
        elif not data.get("id"):
            raise ValidationError.for_missing(["id"])

        try:
            return Session.from_dict(data)
        except (KeyError, ValueError) as e:
            raise ValidationError(f"Invalid session: {e}") from e

    def save_session(
        self,
        draft: Session | Mapping[str, Any],
        is_new: bool,
        rule: RecurrenceRule | None = None,
    ) -> list[Session]:
        """Validate, expand, sync and store a session. Returns every session saved."""
        base = self._build_session(draft, is_new)

        if rule is not None and rule.is_active:
            if is_new:
                series = recurrence.expand(base, rule, id_factory=self._id_factory)
            else:
                log.debug("Ignoring recurrence while editing existing session %s", base.id)
                series = [base]
        else:
            series = [base]

        failed = 0
        for session in series:
            try:
                self.calendar.sync_session(session)
            except ExternalServiceError as e:
                if self.save_policy is PartialFailurePolicy.ABORT:
                    raise ExternalServiceError(
                        f"Calendar sync failed for session {session.id} ({session.date}): {e}",
                        session_id=session.id,
                    ) from e
                failed += 1
                log.error(
                    "Calendar sync failed for session %s (%s), continuing",
                    session.id, session.date, exc_info=True,
                )

        for session in series:
            self.sessions.upsert(session)

        if failed:
            log.warning("Saved %d session(s), %d not synced to calendar", len(series), failed)
        else:
            log.info("Saved %d session(s)", len(series))
        return series

    def delete_session(self, session_id: str) -> bool:
        """Remove a session from the store. The calendar event is left alone."""
        deleted = self.sessions.delete(session_id)
        if deleted:
            log.info("Deleted session %s", session_id)
        else:
            log.debug("No session %s to delete", session_id)
        return deleted

    # -- speaker invitations --------------------------------------------

    @contextmanager
    def _invite_guard(self, speaker_id: str) -> Iterator[None]:
        with self._lock:
            if speaker_id in self._inviting:
                raise ConstraintError(f"An invite for speaker {speaker_id} is already in progress")
            self._inviting.add(speaker_id)
        try:
            yield
        finally:
            with self._lock:
                self._inviting.discard(speaker_id)

    def ensure_meeting_link(self, session: Session) -> str:
        """Give the session a meeting link if it has none. Returns the link."""
        if not session.google_meet_link:
            session.google_meet_link = self.meetings.create_link()
            if not session.location:
                session.location = self.online_location
            log.info("Created meeting link for session %s", session.id)
        return session.google_meet_link

    def _attempt(self, description: str, action: Callable[[], bool]) -> bool:
        try:
            ok = action()
        except ExternalServiceError:
            if self.invite_policy is PartialFailurePolicy.ABORT:
                raise
            log.error("%s failed, continuing", description, exc_info=True)
            return False
        if not ok:
            if self.invite_policy is PartialFailurePolicy.ABORT:
                raise ExternalServiceError(f"{description} failed")
            log.error("%s failed, continuing", description)
        return ok

    def invite_speaker(self, session: Session, config: SessionSpeakerConfig) -> bool:
        """Invite one speaker to an in-progress session.

        Mutates ``session``: it gains a meeting link if it had none, and the
        config is marked SENT once every step succeeded. The caller is
        responsible for saving the session afterwards.
        """
        speaker = self.speakers.find(config.speaker_id)
        if speaker is None:
            raise NotFoundError("Speaker", config.speaker_id)

        with self._invite_guard(config.speaker_id):
            self.ensure_meeting_link(session)

            attendee_ok = self._attempt(
                f"Adding {speaker.email} to calendar event",
                lambda: self.calendar.add_attendee(session, speaker, config.is_co_host),
            )
            invite_ok = self._attempt(
                f"Invite to {speaker.email}",
                lambda: self.notifier.send_speaker_invite(speaker, session, config.is_co_host),
            )

            if not (attendee_ok and invite_ok):
                return False
            config.invite_status = InviteStatus.SENT
            log.info("Invited %s to session %s", speaker.email, session.id)
            return True

    # -- content generation ---------------------------------------------

    def _require_generator(self) -> ContentGenerator:
        if self.generator is None:
            raise ExternalServiceError("No content generator configured")
        return self.generator

    def generate_description(self, session: Session) -> None:
        if not session.title or not session.program:
            raise ValidationError.for_missing(
                [name for name, value in (("title", session.title), ("program", session.program)) if not value]
            )
        generator = self._require_generator()
        try:
            result = generator.describe(session.title, session.program.value)
        except Exception as e:
            raise ExternalServiceError(f"Could not generate a description: {e}", session_id=session.id) from e

        session.description = result.text
        if result.sources:
            session.internal_notes = "Bronnen:\n" + "\n".join(result.sources)

    def generate_image(self, session: Session, resolution: Resolution = "1K") -> None:
        if not session.title:
            raise ValidationError.for_missing(["title"])
        if resolution not in RESOLUTIONS:
            raise ValidationError(f"Unsupported resolution: {resolution}")
        generator = self._require_generator()
        try:
            session.image_url = generator.illustrate(session.title, resolution)
        except Exception as e:
            raise ExternalServiceError(f"Could not generate an image: {e}", session_id=session.id) from e

    # -- reminders --------------------------------------------------------

    def send_reminders(self, session_id: str) -> bool:
        return self.notifier.schedule_reminders(self.sessions.get(session_id))
