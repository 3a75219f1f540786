"""CSV-backed task store adapter."""

import csv
import logging
from datetime import tzinfo
from pathlib import Path

from ramping.core.tasks import TASK_HEADER, ReminderTask

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Raised when the task table cannot be read or written."""

    pass


class CsvTaskStore:
    """
    CSV task table.

    Implements TaskStore protocol. One header row, one task per row, same
    columns as the Tasks sheet. No business logic - just I/O.
    """

    def __init__(self, path: Path | str, tz: tzinfo | None = None):
        self.path = Path(path).expanduser()
        self.tz = tz

    def _read(self) -> tuple[list[str], list[list[str]]]:
        """Read header and data rows. A missing or empty file has no rows."""
        if not self.path.exists():
            return list(TASK_HEADER), []

        try:
            with self.path.open(newline="") as f:
                rows = list(csv.reader(f))
        except (OSError, csv.Error) as e:
            raise TaskStoreError(f"Failed to read {self.path}: {e}") from e

        if not rows:
            return list(TASK_HEADER), []

        header = [h.strip() for h in rows[0]]
        if "id" not in header:
            raise TaskStoreError("Tasks header missing required column: id")
        return header, rows[1:]

    def _write(self, header: list[str], rows: list[list[str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open("w", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(header)
                writer.writerows(rows)
        except OSError as e:
            raise TaskStoreError(f"Failed to write {self.path}: {e}") from e

    @staticmethod
    def _full_header(header: list[str]) -> list[str]:
        """Existing columns first, then any known column the file lacks."""
        return header + [c for c in TASK_HEADER if c not in header]

    def fetch_all(self) -> list[ReminderTask]:
        header, rows = self._read()
        tasks = []
        for row in rows:
            if not any(cell.strip() for cell in row):
                continue
            task = ReminderTask.from_row(header, row, self.tz)
            if not task.id:
                logger.warning(f"Skipping task row without id: {row}")
                continue
            tasks.append(task)
        return tasks

    @staticmethod
    def _row_id(header: list[str], row: list[str]) -> str:
        id_idx = header.index("id")
        return row[id_idx].strip() if id_idx < len(row) else ""

    def save_all(self, tasks: list[ReminderTask]) -> None:
        """
        Write tasks back over their rows, matched by id.

        Rows for other ids (appended since the fetch), rows without an id and
        blank rows stay where they are. Tasks with no row yet go at the end.
        Columns this project does not know keep their values.
        """
        header, rows = self._read()
        full_header = self._full_header(header)
        pending = {task.id: task for task in tasks}

        out = []
        for row in rows:
            row = row + [""] * (len(full_header) - len(row))
            task = pending.pop(self._row_id(header, row), None)
            if task is None:
                out.append(row)
                continue
            new_row = task.to_row(full_header)
            for i, column in enumerate(full_header):
                if column not in TASK_HEADER:
                    new_row[i] = row[i]
            out.append(new_row)

        out.extend(task.to_row(full_header) for task in pending.values())
        self._write(full_header, out)

    def append(self, task: ReminderTask) -> None:
        header, rows = self._read()
        if any(self._row_id(header, row) == task.id for row in rows):
            raise TaskStoreError(f"Task {task.id} already exists")

        full_header = self._full_header(header)
        if full_header != header:
            # Pad existing rows for the added columns
            rows = [row + [""] * (len(full_header) - len(row)) for row in rows]
        rows.append(task.to_row(full_header))
        self._write(full_header, rows)
