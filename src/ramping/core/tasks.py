"""Pure reminder task domain logic - no I/O dependencies."""

from dataclasses import dataclass, fields
from datetime import datetime, tzinfo

from .phases import Phase

TASK_HEADER = [
    "id",
    "createdAt",
    "createdBy",
    "rawText",
    "title",
    "contactEmail",
    "notes",
    "dueAt",
    "tz",
    "recurrence",
    "priority",
    "status",
    "lastNotifiedAt",
    "notifyEveryMins",
    "phase",
    "nextRemindAt",
]

NOTIFY_EVERY_MINS = {
    "code-red": 15,
    "code-yellow": 60,
    "code-green": 240,
    "code-white": 480,
}
DEFAULT_PRIORITY = "code-green"

# Column name -> ReminderTask attribute
_COLUMNS = {
    "id": "id",
    "createdAt": "created_at",
    "createdBy": "created_by",
    "rawText": "raw_text",
    "title": "title",
    "contactEmail": "contact_email",
    "notes": "notes",
    "dueAt": "due_at",
    "tz": "tz",
    "recurrence": "recurrence",
    "priority": "priority",
    "status": "status",
    "lastNotifiedAt": "last_notified_at",
    "notifyEveryMins": "notify_every_mins",
    "phase": "phase",
    "nextRemindAt": "next_remind_at",
}
_INSTANT_FIELDS = {"created_at", "due_at", "last_notified_at", "next_remind_at"}


def parse_instant(value: str | None, tz: tzinfo | None = None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp.

    Naive values are placed in `tz`. Empty or malformed input gives None.
    """
    value = (value or "").strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None and tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def format_instant(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def normalize_priority(priority: str | None) -> str:
    p = (priority or "").strip().lower()
    return p if p in NOTIFY_EVERY_MINS else DEFAULT_PRIORITY


def notify_every_mins_for(priority: str | None) -> int:
    """Reminder spacing in minutes for a priority code."""
    return NOTIFY_EVERY_MINS[normalize_priority(priority)]


def _parse_phase(value: str) -> Phase | None:
    try:
        return Phase(value.strip())
    except ValueError:
        return None


@dataclass
class ReminderTask:
    """
    A row of the Tasks table.

    `priority` and `notify_every_mins` are carried through for other readers
    of the table; reminder timing comes from the phase alone.
    """

    id: str
    title: str
    due_at: datetime | None = None
    created_at: datetime | None = None
    created_by: str = ""
    raw_text: str = ""
    contact_email: str = ""
    notes: str = ""
    tz: str = "UTC"
    recurrence: str = ""
    priority: str = DEFAULT_PRIORITY
    status: str = "open"
    last_notified_at: datetime | None = None
    notify_every_mins: int = NOTIFY_EVERY_MINS[DEFAULT_PRIORITY]
    phase: Phase | None = None
    next_remind_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.status.strip().lower() == "open"

    def is_due(self, now: datetime) -> bool:
        """A stored reminder time exists and has been reached."""
        if self.next_remind_at is None:
            return False
        return now >= self.next_remind_at

    @classmethod
    def from_row(cls, header: list[str], row: list[str], tz: tzinfo | None = None) -> "ReminderTask":
        """
        Create a ReminderTask from a table row.

        Short rows are padded; unknown columns are ignored.
        """
        values = {}
        for i, column in enumerate(header):
            attr = _COLUMNS.get(column.strip())
            if attr is None:
                continue
            values[attr] = str(row[i]) if i < len(row) and row[i] is not None else ""

        task = cls(id=values.get("id", "").strip(), title=values.get("title", "").strip())
        for attr, raw in values.items():
            if attr in ("id", "title"):
                continue
            if attr in _INSTANT_FIELDS:
                setattr(task, attr, parse_instant(raw, tz))
            elif attr == "notify_every_mins":
                try:
                    task.notify_every_mins = int(raw)
                except ValueError:
                    task.notify_every_mins = notify_every_mins_for(values.get("priority"))
            elif attr == "phase":
                task.phase = _parse_phase(raw)
            elif attr == "priority":
                task.priority = raw.strip().lower() or DEFAULT_PRIORITY
            elif attr == "status":
                task.status = raw.strip() or "open"
            else:
                setattr(task, attr, raw)
        return task

    def to_row(self, header: list[str]) -> list[str]:
        """Serialize to a row in `header` order; unknown columns are blank."""
        row = []
        for column in header:
            attr = _COLUMNS.get(column.strip())
            if attr is None:
                row.append("")
                continue
            value = getattr(self, attr)
            if attr in _INSTANT_FIELDS:
                row.append(format_instant(value))
            elif isinstance(value, Phase):
                row.append(value.value)
            elif value is None:
                row.append("")
            else:
                row.append(str(value))
        return row

    def to_dict(self) -> dict:
        """JSON-friendly view."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, Phase):
                value = value.value
            data[f.name] = value
        return data


def new_task(
    title: str,
    now: datetime,
    due_at: datetime | None = None,
    priority: str | None = None,
    notes: str = "",
    task_type: str = "Personal",
    contact_email: str = "",
    created_by: str = "CommandApp",
) -> ReminderTask:
    """
    Build a new open task.

    Without a due date the reminder loop starts immediately: the task is
    due at creation time.
    """
    p = normalize_priority(priority)
    title = title.strip()
    return ReminderTask(
        id=str(int(now.timestamp() * 1000)),
        title=title,
        due_at=due_at or now,
        created_at=now,
        created_by=created_by,
        raw_text=f"{task_type} Reminder: {title}",
        contact_email=contact_email.strip() if task_type == "CRM" else "",
        notes=notes.strip(),
        tz=str(now.tzinfo) if now.tzinfo else "UTC",
        priority=p,
        status="open",
        notify_every_mins=notify_every_mins_for(p),
    )
