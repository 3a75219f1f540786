"""Pure reminder cadence logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .phases import Phase

MONDAY = 0


@dataclass(frozen=True)
class Slot:
    """A time of day at which a reminder may fire."""

    hour: int
    minute: int = 0

    def on(self, day: date, tzinfo=None) -> datetime:
        """This slot on a given calendar day."""
        return datetime.combine(day, time(self.hour, self.minute), tzinfo=tzinfo)

    def format(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


YELLOW_SLOTS: tuple[Slot, ...] = (Slot(9), Slot(12), Slot(15))
RED_SLOTS: tuple[Slot, ...] = tuple(Slot(hour) for hour in range(8, 23, 2))


def next_from_slots(now: datetime, slots: tuple[Slot, ...]) -> datetime:
    """
    First slot today strictly after `now`, else the first slot tomorrow.

    Pure function - no I/O.

    Args:
        now: Current instant; results carry its tzinfo
        slots: Non-empty slots, ordered by time of day
    """
    today = now.date()
    for slot in slots:
        candidate = slot.on(today, now.tzinfo)
        if candidate > now:
            return candidate
    return slots[0].on(today + timedelta(days=1), now.tzinfo)


def next_daily_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    """Today at hour:minute if still ahead, otherwise tomorrow."""
    return next_from_slots(now, (Slot(hour, minute),))


def next_monday_at_0900(now: datetime) -> datetime:
    """Next Monday 09:00 strictly after `now` (today counts if before 09:00)."""
    slot = Slot(9)
    today = now.date()
    if today.weekday() == MONDAY:
        candidate = slot.on(today, now.tzinfo)
        if candidate > now:
            return candidate
    days_until_monday = (MONDAY - today.weekday()) % 7 or 7
    return slot.on(today + timedelta(days=days_until_monday), now.tzinfo)


def days_ahead_at(now: datetime, days: int, hour: int, minute: int = 0) -> datetime:
    """hour:minute on the calendar day `days` after today, ignoring time of day."""
    return Slot(hour, minute).on(now.date() + timedelta(days=days), now.tzinfo)


def next_remind_at(phase: Phase | str, now: datetime) -> datetime | None:
    """
    Next instant a reminder should fire for a phase.

    Pure function - no I/O. Returns None for phases without a cadence and
    for unrecognized values; never raises. A returned instant is always
    strictly after `now`.
    """
    if not isinstance(phase, Phase):
        try:
            phase = Phase(phase)
        except ValueError:
            return None

    match phase:
        case Phase.WHITE:
            return next_monday_at_0900(now)
        case Phase.GREEN:
            return next_daily_at(now, 12)
        case Phase.YELLOW:
            return next_from_slots(now, YELLOW_SLOTS)
        case Phase.RED:
            return next_from_slots(now, RED_SLOTS)
        case Phase.OVERDUE:
            return next_daily_at(now, 9)
        case Phase.WAY_OVERDUE:
            return days_ahead_at(now, 3, 9)
        case _:
            # dormant, expired, none
            return None
