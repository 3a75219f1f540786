"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ramping.cli import main
from ramping.config import Config


@pytest.fixture
def config(tmp_path):
    return Config(timezone="UTC", tasks_file=str(tmp_path / "tasks.csv"))


@pytest.fixture
def run(config):
    runner = CliRunner()

    def invoke(*args):
        with patch("ramping.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))

    return invoke


class TestPhase:
    def test_json(self, run):
        result = run("phase", "2025-01-31T23:59", "--now", "2025-01-01T00:00", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["phase"] == "white"
        assert data["days_out"] == 30
        assert data["next_remind_at"] == "2025-01-06T09:00:00+00:00"

    def test_text(self, run):
        result = run("phase", "2024-12-31", "--now", "2025-01-01T08:00")
        assert result.exit_code == 0
        assert result.output.startswith("overdue (-1 days)")
        assert "Wed 2025-01-01 09:00" in result.output

    def test_invalid_now(self, run):
        result = run("phase", "2025-01-31", "--now", "yesterday")
        assert result.exit_code == 1
        assert "Error: Invalid --now" in result.output


class TestNext:
    def test_red_rollover(self, run):
        result = run("next", "red", "--now", "2025-01-01T22:30")
        assert result.exit_code == 0
        assert result.output.strip() == "2025-01-02T08:00:00+00:00"

    def test_no_cadence(self, run):
        result = run("next", "expired", "--now", "2025-01-01T22:30")
        assert result.output.strip() == "none"

    def test_unknown_phase_rejected(self, run):
        result = run("next", "purple")
        assert result.exit_code == 2


class TestTasks:
    def test_add_then_list(self, run):
        result = run("add", "Renew insurance", "--due", "2099-01-01", "--priority", "code-red")
        assert result.exit_code == 0
        assert "✓ Added" in result.output
        assert "[dormant]" in result.output

        result = run("list", "--json")
        assert result.exit_code == 0
        tasks = json.loads(result.output)
        assert len(tasks) == 1
        assert tasks[0]["title"] == "Renew insurance"
        assert tasks[0]["priority"] == "code-red"
        assert tasks[0]["phase"] == "dormant"
        assert tasks[0]["next_remind_at"] is None

    def test_list_empty(self, run):
        result = run("list")
        assert result.exit_code == 0
        assert "No open tasks." in result.output

    def test_sweep(self, run, config):
        run("add", "Pay invoice")
        result = run("sweep")
        assert result.exit_code == 0
        assert "Sweep complete: scanned=1" in result.output

    def test_store_error(self, run, config):
        config.tasks_path().write_text("title\nfoo\n")
        result = run("list")
        assert result.exit_code == 1
        assert "Error: Tasks header missing required column: id" in result.output


def test_unknown_timezone(tmp_path):
    bad = Config(timezone="Mars/Olympus_Mons", tasks_file=str(tmp_path / "tasks.csv"))
    with patch("ramping.cli.load_config", return_value=bad):
        result = CliRunner().invoke(main, ["list"])
    assert result.exit_code == 1
    assert "Unknown timezone" in result.output
