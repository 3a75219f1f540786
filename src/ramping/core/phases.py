"""Pure urgency phase classification - no I/O dependencies."""

from datetime import date, datetime
from enum import Enum


class Phase(Enum):
    """Urgency phase of a task relative to its due date."""

    DORMANT = "dormant"  # more than 30 days out
    WHITE = "white"  # 15-30 days out
    GREEN = "green"  # 8-14 days out
    YELLOW = "yellow"  # 4-7 days out
    RED = "red"  # 0-3 days out
    OVERDUE = "overdue"  # 1-13 days late
    WAY_OVERDUE = "wayOverdue"  # 14-29 days late
    EXPIRED = "expired"  # 30+ days late
    NONE = "none"  # no due date


def _local_day(instant: datetime, reference: datetime) -> date:
    """Calendar day of `instant`, read in the same zone as `reference`."""
    if instant.tzinfo is not None and reference.tzinfo is not None:
        instant = instant.astimezone(reference.tzinfo)
    return instant.date()


def calendar_day_distance(later: datetime, earlier: datetime, reference: datetime | None = None) -> int:
    """
    Whole calendar days from `earlier`'s day to `later`'s day.

    Both instants are read in `reference`'s zone (default: `earlier`'s) and
    truncated to midnight first, so time of day never matters. Negative
    when `later` falls on an earlier day.
    """
    reference = reference or earlier
    return (_local_day(later, reference) - _local_day(earlier, reference)).days


def days_out(due_at: datetime, now: datetime) -> int:
    """Days until the due day (negative once it has passed)."""
    return calendar_day_distance(due_at, now, reference=now)


def days_late(due_at: datetime, now: datetime) -> int:
    """Days elapsed since the due day."""
    return calendar_day_distance(now, due_at, reference=now)


def classify_phase(now: datetime, due_at: datetime | None) -> Phase:
    """
    Classify a task into an urgency phase.

    Pure function - no I/O. Never raises; a missing due date is Phase.NONE.
    """
    if due_at is None:
        return Phase.NONE

    out = days_out(due_at, now)
    if out > 30:
        return Phase.DORMANT
    if out > 14:
        return Phase.WHITE
    if out > 7:
        return Phase.GREEN
    if out > 3:
        return Phase.YELLOW
    if out >= 0:
        return Phase.RED

    late = days_late(due_at, now)
    if late >= 30:
        return Phase.EXPIRED
    if late >= 14:
        return Phase.WAY_OVERDUE
    if late >= 1:
        return Phase.OVERDUE

    # Only reachable if the two distances ever disagree on rounding.
    return Phase.RED


def compute_status(now: datetime, due_at: datetime | None) -> Phase:
    """A task's status is its phase."""
    return classify_phase(now, due_at)


def is_expired(now: datetime, due_at: datetime | None) -> bool:
    return classify_phase(now, due_at) is Phase.EXPIRED
