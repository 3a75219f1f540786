"""Task store interface."""

from typing import Protocol

from ramping.core.tasks import ReminderTask


class TaskStore(Protocol):
    """Interface for reading and writing task rows in any tabular backend."""

    def fetch_all(self) -> list[ReminderTask]:
        """Fetch all tasks, in row order."""
        ...

    def save_all(self, tasks: list[ReminderTask]) -> None:
        """Write back all tasks, replacing the stored rows."""
        ...

    def append(self, task: ReminderTask) -> None:
        """Append a single task row."""
        ...
