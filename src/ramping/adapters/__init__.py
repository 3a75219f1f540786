"""Adapters - I/O implementations of ports."""

from .csv_store import CsvTaskStore, TaskStoreError
from .echo_notifier import EchoNotifier

__all__ = [
    "CsvTaskStore",
    "TaskStoreError",
    "EchoNotifier",
]
