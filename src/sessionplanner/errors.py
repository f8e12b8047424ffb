"""Error taxonomy shared by the repositories and workflows."""

from __future__ import annotations


class SessionPlannerError(Exception):
    """Base class for all sessionplanner errors."""


class ValidationError(SessionPlannerError):
    """Missing or invalid fields on an entity being saved."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []

    @classmethod
    def for_missing(cls, fields: list[str]) -> ValidationError:
        return cls(f"Missing required fields: {', '.join(fields)}", missing=fields)


class ConstraintError(ValidationError):
    """An operation would break a store-wide rule (e.g. removing the last admin)."""


class NotFoundError(SessionPlannerError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class ExternalServiceError(SessionPlannerError):
    """A meeting-link, calendar, notification or generation call failed."""

    def __init__(self, message: str, session_id: str | None = None):
        super().__init__(message)
        self.session_id = session_id


class DataImportError(SessionPlannerError):
    """A backup document could not be imported."""
