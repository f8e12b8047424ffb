"""Expand a base session into a series of dated occurrences."""

from __future__ import annotations

import calendar
import logging
import uuid
from datetime import date, timedelta
from typing import Callable

from .errors import ValidationError
from .models import RecurrenceFrequency, RecurrenceRule, Session

log = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of a shorter month.

    2024-01-31 + 1 month -> 2024-02-29.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def occurrence_date(base: date, frequency: RecurrenceFrequency, index: int) -> date:
    """Date of occurrence ``index`` (0 is the base), always offset from ``base``."""
    match frequency:
        case RecurrenceFrequency.DAILY:
            return base + timedelta(days=index)
        case RecurrenceFrequency.WEEKLY:
            return base + timedelta(weeks=index)
        case RecurrenceFrequency.MONTHLY:
            return add_months(base, index)
    raise ValidationError(f"Unsupported recurrence frequency: {frequency}")


def expand(
    base: Session,
    rule: RecurrenceRule,
    *,
    id_factory: Callable[[], str] = _new_id,
) -> list[Session]:
    """Return the base session followed by its derived occurrences.

    Derived sessions get a fresh id and an empty subscriber list; every
    other field is copied from the base.
    """
    if rule.frequency is RecurrenceFrequency.NONE:
        raise ValidationError("Recurrence frequency must not be NONE")
    if rule.occurrence_count < 2:
        raise ValidationError(
            f"Recurrence needs at least 2 occurrences, got {rule.occurrence_count}"
        )

    series = [base]
    for i in range(1, rule.occurrence_count):
        occurrence = base.copy()
        occurrence.id = id_factory()
        occurrence.date = occurrence_date(base.date, rule.frequency, i)
        occurrence.subscribers = []
        series.append(occurrence)

    log.debug(
        "Expanded %s into %d %s occurrences",
        base.id, len(series), rule.frequency.value.lower(),
    )
    return series
