"""Tests for the CSV task store adapter."""

import csv
from datetime import datetime, timezone

import pytest

from ramping.adapters.csv_store import CsvTaskStore, TaskStoreError
from ramping.core.phases import Phase
from ramping.core.tasks import TASK_HEADER, ReminderTask


def read_rows(path):
    with path.open(newline="") as f:
        return list(csv.reader(f))


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "tasks.csv"


@pytest.fixture
def task():
    return ReminderTask(
        id="1",
        title="Send invoice",
        due_at=datetime(2025, 1, 3, 17, 0, tzinfo=timezone.utc),
        priority="code-yellow",
        notify_every_mins=60,
        phase=Phase.RED,
        next_remind_at=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


class TestCsvTaskStore:
    def test_missing_file_is_empty(self, path):
        assert CsvTaskStore(path).fetch_all() == []

    def test_append_creates_file_with_header(self, path, task):
        store = CsvTaskStore(path, tz=timezone.utc)
        store.append(task)

        rows = read_rows(path)
        assert rows[0] == TASK_HEADER
        assert len(rows) == 2

        fetched = store.fetch_all()
        assert len(fetched) == 1
        assert fetched[0].title == "Send invoice"
        assert fetched[0].due_at == task.due_at
        assert fetched[0].phase is Phase.RED
        assert fetched[0].next_remind_at == task.next_remind_at

    def test_header_without_id_raises(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("title,dueAt\nfoo,2025-01-01\n")
        with pytest.raises(TaskStoreError, match="missing required column: id"):
            CsvTaskStore(path).fetch_all()

    def test_skips_blank_rows_and_rows_without_id(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("id,title\n1,First\n,,\n,Orphan\n2,Second\n")
        titles = [t.title for t in CsvTaskStore(path).fetch_all()]
        assert titles == ["First", "Second"]

    def test_save_all_keeps_unknown_columns(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("id,title,Owner,status\n1,First,dana,open\n2,Second,lee,open\n")
        store = CsvTaskStore(path)

        tasks = store.fetch_all()
        tasks[0].status = "closed"
        store.save_all(tasks)

        rows = read_rows(path)
        header = rows[0]
        assert header[:4] == ["id", "title", "Owner", "status"]
        assert set(TASK_HEADER) <= set(header)
        owner = header.index("Owner")
        status = header.index("status")
        assert rows[1][owner] == "dana"
        assert rows[1][status] == "closed"
        assert rows[2][owner] == "lee"

    def test_append_pads_existing_rows(self, path, task):
        path.parent.mkdir(parents=True)
        path.write_text("id,title\n9,Old\n")
        store = CsvTaskStore(path)
        store.append(task)

        rows = read_rows(path)
        assert all(len(r) == len(rows[0]) for r in rows)
        assert [t.id for t in store.fetch_all()] == ["9", "1"]

    def test_save_all_keeps_rows_without_id(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("id,title,notes\n1,a,\n,hand-entered row,keep me\n")
        store = CsvTaskStore(path)

        store.save_all(store.fetch_all())

        rows = read_rows(path)
        header = rows[0]
        assert len(rows) == 3
        assert rows[2][header.index("title")] == "hand-entered row"
        assert rows[2][header.index("notes")] == "keep me"
        assert [t.id for t in store.fetch_all()] == ["1"]

    def test_save_all_keeps_rows_added_since_fetch(self, path, task):
        store = CsvTaskStore(path, tz=timezone.utc)
        store.append(task)
        fetched = store.fetch_all()

        later = ReminderTask(id="2", title="Added meanwhile")
        store.append(later)

        fetched[0].status = "closed"
        store.save_all(fetched)

        tasks = store.fetch_all()
        assert [t.id for t in tasks] == ["1", "2"]
        assert tasks[0].status == "closed"
        assert tasks[1].title == "Added meanwhile"

    def test_save_all_appends_unknown_ids(self, path, task):
        store = CsvTaskStore(path, tz=timezone.utc)
        store.save_all([task])
        assert [t.id for t in store.fetch_all()] == ["1"]

    def test_append_rejects_duplicate_id(self, path, task):
        store = CsvTaskStore(path, tz=timezone.utc)
        store.append(task)

        with pytest.raises(TaskStoreError, match="Task 1 already exists"):
            store.append(ReminderTask(id="1", title="Same millisecond"))

        assert len(store.fetch_all()) == 1
