"""Command-line interface for sessionplanner."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
import uuid
from datetime import date
from pathlib import Path

from .backup import export_data, import_data
from .calendar_sync import CalendarSync
from .config import Config, load_config
from .errors import SessionPlannerError, ValidationError
from .listing import DateRange, render_listing
from .meetings import MeetingLinkProvider
from .models import Program, RecurrenceFrequency, RecurrenceRule, Role, SessionSpeakerConfig, Speaker, User
from .notifications import NotificationSender
from .repositories import SessionRepository, SettingsRepository, SpeakerRepository, UserRepository
from .store import Store
from .subscriptions import subscribe
from .watcher import watch
from .workflow import SessionWorkflow

log = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def build_workflow(config: Config, store: Store) -> SessionWorkflow:
    settings = SettingsRepository(store)
    return SessionWorkflow(
        SessionRepository(store),
        SpeakerRepository(store),
        CalendarSync(settings, timeout=config.webhook_timeout),
        NotificationSender(settings, timeout=config.webhook_timeout),
        MeetingLinkProvider(),
        save_policy=config.save_failure_policy,
        invite_policy=config.invite_failure_policy,
        online_location=config.online_location,
    )


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sessionplanner",
        description="Plan educational sessions, invite speakers and register students",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config YAML (default: ~/.config/sessionplanner/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List sessions by date")
    p.add_argument("--program", default="ALL", help="Program name or label (default: ALL)")
    p.add_argument("--query", "-q", default="", help="Text to find in title or description")
    p.add_argument("--from", dest="start", type=_day, default=None, help="First day (inclusive)")
    p.add_argument("--to", dest="end", type=_day, default=None, help="Last day (inclusive)")

    p = sub.add_parser("add", help="Create a session, optionally repeating")
    p.add_argument("--title", required=True)
    p.add_argument("--date", required=True, type=_day)
    p.add_argument("--start", required=True, help="Start time, HH:MM")
    p.add_argument("--end", required=True, help="End time, HH:MM")
    p.add_argument("--program", default=Program.GENERAL.name)
    p.add_argument("--description", default="")
    p.add_argument("--location", default="")
    p.add_argument("--max-participants", type=int, default=None)
    p.add_argument(
        "--repeat",
        choices=[f.name for f in RecurrenceFrequency if f is not RecurrenceFrequency.NONE],
        default=None,
    )
    p.add_argument("--count", type=int, default=1, help="Total number of occurrences")

    p = sub.add_parser("delete", help="Delete a session")
    p.add_argument("session_id")

    p = sub.add_parser("subscribe", help="Register a student for a session")
    p.add_argument("session_id")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)

    p = sub.add_parser("invite", help="Invite a speaker to a session")
    p.add_argument("session_id")
    p.add_argument("speaker_id")
    p.add_argument("--co-host", action="store_true")

    p = sub.add_parser("remind", help="Request reminder mails for a session's subscribers")
    p.add_argument("session_id")

    p = sub.add_parser("attendees", help="Show a session's registrations")
    p.add_argument("session_id")
    p.add_argument("--csv", type=Path, default=None, help="Write the list as CSV to this file")

    speaker = sub.add_parser("speaker", help="Manage speakers").add_subparsers(dest="action", required=True)
    speaker.add_parser("list", help="List speakers")
    p = speaker.add_parser("add", help="Add a speaker, or update one with --id")
    p.add_argument("--id", dest="speaker_id", default=None)
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--title", default="", help="Role or job title")
    p.add_argument("--bio", default=None)
    p.add_argument("--photo-url", default=None)
    p = speaker.add_parser("delete", help="Delete a speaker")
    p.add_argument("speaker_id")

    user = sub.add_parser("user", help="Manage user accounts").add_subparsers(dest="action", required=True)
    user.add_parser("list", help="List users")
    p = user.add_parser("add", help="Add a user")
    p.add_argument("--name", required=True)
    p.add_argument("--pin", required=True)
    p.add_argument("--email", default=None)
    p.add_argument("--role", choices=[r.name for r in Role], default=Role.TEACHER.name)

    p = sub.add_parser("delete-user", help="Delete a user account")
    p.add_argument("user_id")

    settings = sub.add_parser("settings", help="Show or change app settings").add_subparsers(
        dest="action", required=True
    )
    settings.add_parser("show", help="Print the current settings")
    p = settings.add_parser("set", help="Change one or more settings")
    p.add_argument("--organization", default=None)
    p.add_argument("--calendar-id", default=None, help="Calendar to mirror sessions to (empty to disable)")
    p.add_argument("--webhook-url", default=None, help="Automation webhook for mail and calendar (empty to clear)")
    p.add_argument("--notifications", action=argparse.BooleanOptionalAction, default=None)

    p = sub.add_parser("export", help="Write a JSON backup of all data")
    p.add_argument("output", nargs="?", type=Path, default=None, help="File to write (default: stdout)")

    p = sub.add_parser("import", help="Restore data from a JSON backup")
    p.add_argument("input", type=Path)

    sub.add_parser("watch", help="Show the listing and refresh it when data changes")
    return parser


def _cmd_list(args: argparse.Namespace, store: Store) -> None:
    rows = render_listing(
        SessionRepository(store),
        SpeakerRepository(store),
        program=args.program,
        query=args.query,
        date_range=DateRange(args.start, args.end),
    )
    if not rows:
        print("No sessions found")
    for row in rows:
        print(row)


def _cmd_attendees(args: argparse.Namespace, store: Store) -> None:
    session = SessionRepository(store).get(args.session_id)
    if args.csv:
        with args.csv.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Name", "Email", "Subscribed at"])
            for s in session.subscribers:
                writer.writerow([s.name, s.email, s.subscribed_at.isoformat()])
        print(f"Wrote {len(session.subscribers)} registration(s) to {args.csv}")
        return

    capacity = f"/{session.max_participants}" if session.max_participants else ""
    print(f"{session.title} ({session.date.isoformat()}): {len(session.subscribers)}{capacity} registered")
    for s in session.subscribers:
        print(f"  {s.name} <{s.email}>  {s.subscribed_at:%Y-%m-%d %H:%M}")


def _require(**values: str) -> None:
    missing = [name for name, value in values.items() if not value.strip()]
    if missing:
        raise ValidationError.for_missing(missing)


def _cmd_speaker(args: argparse.Namespace, store: Store) -> None:
    speakers = SpeakerRepository(store)
    match args.action:
        case "list":
            for sp in speakers.list():
                title = f", {sp.role_or_title}" if sp.role_or_title else ""
                print(f"{sp.id}  {sp.name}{title} <{sp.email}>")
        case "add":
            _require(name=args.name, email=args.email)
            speaker = Speaker(
                id=args.speaker_id or _new_id(),
                name=args.name,
                email=args.email,
                role_or_title=args.title,
                bio=args.bio,
                photo_url=args.photo_url,
            )
            speakers.upsert(speaker)
            print(f"Saved speaker {speaker.id}")
        case "delete":
            if speakers.delete(args.speaker_id):
                print(f"Deleted speaker {args.speaker_id}")
            else:
                print(f"No speaker {args.speaker_id}")


def _cmd_user(args: argparse.Namespace, store: Store) -> None:
    users = UserRepository(store)
    match args.action:
        case "list":
            for u in users.list():
                email = f" <{u.email}>" if u.email else ""
                print(f"{u.id}  {u.name}{email}  {u.role.value}")
        case "add":
            _require(name=args.name, pin=args.pin)
            user = User(id=_new_id(), name=args.name, pin=args.pin, role=Role[args.role], email=args.email)
            users.upsert(user)
            print(f"Added user {user.id}")


def _cmd_settings(args: argparse.Namespace, store: Store) -> None:
    repo = SettingsRepository(store)
    current = repo.get()
    if args.action == "set":
        if args.organization is not None:
            current.organization_name = args.organization
        if args.calendar_id is not None:
            current.google_calendar_id = args.calendar_id
        if args.webhook_url is not None:
            current.email_webhook_url = args.webhook_url or None
        if args.notifications is not None:
            current.enable_email_notifications = args.notifications
        repo.save(current)
    for key, value in current.to_dict().items():
        if key == "googleApiKey":
            value = "(set)"
        print(f"{key}: {value}")


def _cmd_add(args: argparse.Namespace, workflow: SessionWorkflow) -> None:
    draft = {
        "title": args.title,
        "program": args.program,
        "date": args.date.isoformat(),
        "startTime": args.start,
        "endTime": args.end,
        "description": args.description,
        "location": args.location,
        "maxParticipants": args.max_participants,
    }
    rule = None
    if args.repeat:
        rule = RecurrenceRule(RecurrenceFrequency[args.repeat], args.count)
    saved = workflow.save_session(draft, is_new=True, rule=rule)
    for session in saved:
        print(f"Created {session.id} on {session.date.isoformat()}")


def _cmd_invite(args: argparse.Namespace, workflow: SessionWorkflow) -> None:
    session = workflow.sessions.get(args.session_id)
    workflow.speakers.get(args.speaker_id)
    config = session.speaker_config(args.speaker_id)
    if config is None:
        # Attach the speaker first, the way the editor does
        config = SessionSpeakerConfig(args.speaker_id, is_co_host=args.co_host)
        session.speakers.append(config)
    elif args.co_host:
        config.is_co_host = True

    try:
        invited = workflow.invite_speaker(session, config)
    finally:
        # The meeting link is kept even when the invite itself failed
        workflow.sessions.upsert(session)
    print("Invite sent" if invited else "Invite not sent, see log")


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from None

    store = Store(config.store_path)
    workflow = build_workflow(config, store)

    try:
        match args.command:
            case "list":
                _cmd_list(args, store)
            case "add":
                _cmd_add(args, workflow)
            case "delete":
                if workflow.delete_session(args.session_id):
                    print(f"Deleted {args.session_id}")
                else:
                    print(f"No session {args.session_id}")
            case "subscribe":
                subscribe(workflow.sessions, workflow.notifier, args.session_id, args.name, args.email)
                print(f"Registered {args.email}")
            case "invite":
                _cmd_invite(args, workflow)
            case "remind":
                sent = workflow.send_reminders(args.session_id)
                print("Reminders requested" if sent else "Reminder request failed")
            case "attendees":
                _cmd_attendees(args, store)
            case "speaker":
                _cmd_speaker(args, store)
            case "user":
                _cmd_user(args, store)
            case "settings":
                _cmd_settings(args, store)
            case "delete-user":
                if UserRepository(store).delete(args.user_id):
                    print(f"Deleted user {args.user_id}")
                else:
                    print(f"No user {args.user_id}")
            case "export":
                text = export_data(store)
                if args.output:
                    args.output.write_text(text, encoding="utf-8")
                    print(f"Exported to {args.output}")
                else:
                    print(text)
            case "import":
                if not import_data(store, args.input.read_text(encoding="utf-8")):
                    print("Error: import failed, nothing changed", file=sys.stderr)
                    raise SystemExit(1)
                print("Import complete")
            case "watch":
                watch(config, store)
    except (SessionPlannerError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from None
