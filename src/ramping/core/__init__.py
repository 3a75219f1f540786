"""Functional core - pure business logic with no I/O."""

from .phases import Phase, classify_phase, compute_status, is_expired, days_out, days_late
from .schedule import Slot, RED_SLOTS, YELLOW_SLOTS, next_remind_at, next_from_slots
from .tasks import ReminderTask, TASK_HEADER, new_task, parse_instant, notify_every_mins_for

__all__ = [
    # Phases
    "Phase",
    "classify_phase",
    "compute_status",
    "is_expired",
    "days_out",
    "days_late",
    # Schedule
    "Slot",
    "RED_SLOTS",
    "YELLOW_SLOTS",
    "next_remind_at",
    "next_from_slots",
    # Tasks
    "ReminderTask",
    "TASK_HEADER",
    "new_task",
    "parse_instant",
    "notify_every_mins_for",
]
