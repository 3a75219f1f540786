"""Ports - interfaces/protocols for external dependencies."""

from .task_store import TaskStore
from .notifier import Notifier

__all__ = [
    "TaskStore",
    "Notifier",
]
