"""Notifier interface."""

from typing import Protocol

from ramping.core.phases import Phase
from ramping.core.tasks import ReminderTask


class Notifier(Protocol):
    """Interface for delivering a reminder about a task."""

    def notify(self, task: ReminderTask, phase: Phase) -> None:
        ...
