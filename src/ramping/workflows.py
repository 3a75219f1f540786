"""Shared workflow layer between the CLI and the sweep daemon.

The core never reads the clock; `now_in` is the single place that does,
and every other function takes `now` explicitly.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from .adapters.csv_store import CsvTaskStore
from .config import Config
from .core.phases import classify_phase
from .core.schedule import next_remind_at
from .core.tasks import ReminderTask, new_task
from .ports import Notifier, TaskStore

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Counts from one pass over the task table."""

    scanned: int = 0
    notified: int = 0
    scheduled: int = 0
    skipped: int = 0

    def format(self) -> str:
        return (
            f"scanned={self.scanned} notified={self.notified} "
            f"scheduled={self.scheduled} skipped={self.skipped}"
        )


def now_in(config: Config) -> datetime:
    """Current instant in the configured timezone."""
    return datetime.now(config.zone())


def get_store(config: Config) -> CsvTaskStore:
    """Resolve the task store from config."""
    return CsvTaskStore(config.tasks_path(), tz=config.zone())


def refresh_task(task: ReminderTask, now: datetime) -> None:
    """Recompute phase and next reminder for a task, in place."""
    task.phase = classify_phase(now, task.due_at)
    task.next_remind_at = next_remind_at(task.phase, now)


def sweep_reminders(store: TaskStore, notifier: Notifier, now: datetime) -> SweepResult:
    """
    Classify every open task, notify the ones whose reminder time has come,
    and persist phase and next reminder back to the store.

    A task seen for the first time (no stored reminder) is only scheduled.
    """
    result = SweepResult()
    tasks = store.fetch_all()

    for task in tasks:
        result.scanned += 1
        if not task.is_open:
            result.skipped += 1
            continue

        if task.is_due(now):
            phase = classify_phase(now, task.due_at)
            if next_remind_at(phase, now) is not None:
                notifier.notify(task, phase)
                task.last_notified_at = now
                result.notified += 1
            refresh_task(task, now)
        elif task.next_remind_at is None:
            refresh_task(task, now)
            if task.next_remind_at is not None:
                result.scheduled += 1
        else:
            # Not due yet, but an escalated phase may pull the reminder in
            task.phase = classify_phase(now, task.due_at)
            candidate = next_remind_at(task.phase, now)
            if candidate is None or candidate < task.next_remind_at:
                task.next_remind_at = candidate

    store.save_all(tasks)
    logger.info(f"Sweep at {now.isoformat()}: {result.format()}")
    return result


def add_reminder(
    store: TaskStore,
    title: str,
    now: datetime,
    due_at: datetime | None = None,
    priority: str | None = None,
    notes: str = "",
) -> ReminderTask:
    """Create a task, seed its schedule, and append it to the store."""
    task = new_task(title, now, due_at=due_at, priority=priority, notes=notes)
    refresh_task(task, now)
    store.append(task)
    logger.info(f"Added task {task.id}: {task.title} ({task.phase.value})")
    return task
