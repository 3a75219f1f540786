"""Console notifier adapter."""

import logging

import click

from ramping.core.phases import Phase
from ramping.core.tasks import ReminderTask

logger = logging.getLogger(__name__)


class EchoNotifier:
    """
    Writes reminders to the terminal.

    Implements Notifier protocol. Stands in for a real delivery channel.
    """

    def __init__(self, err: bool = False):
        self.err = err

    def notify(self, task: ReminderTask, phase: Phase) -> None:
        title = task.title or "Task"
        click.echo(f"Reminder [{phase.value}]: {title}", err=self.err)
        logger.info(f"Notified task {task.id} ({phase.value})")
