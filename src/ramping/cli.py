"""Ramping CLI - reminder escalation."""

import json
import sys
from datetime import datetime
from zoneinfo import ZoneInfoNotFoundError

import click

from .adapters.csv_store import TaskStoreError
from .adapters.echo_notifier import EchoNotifier
from .config import Config, load_config
from .core.phases import Phase, classify_phase, days_out
from .core.schedule import next_remind_at
from .core.tasks import parse_instant
from .workflows import add_reminder, get_store, now_in, sweep_reminders


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load() -> Config:
    config = load_config()
    try:
        config.zone()
    except (ZoneInfoNotFoundError, ValueError):
        _fail(f"Unknown timezone {config.timezone!r}")
    return config


def _instant(value: str | None, config: Config, option: str) -> datetime | None:
    """Parse an ISO option value in the configured timezone."""
    if value is None:
        return None
    parsed = parse_instant(value, config.zone())
    if parsed is None:
        _fail(f"Invalid {option} value {value!r} (expected ISO-8601)")
    return parsed


def _fmt(instant: datetime | None) -> str:
    return instant.strftime("%a %Y-%m-%d %H:%M") if instant else "none"


@click.group()
@click.version_option(package_name="ramping")
def main():
    """Ramping - reminder escalation CLI."""
    pass


@main.command()
@click.argument("due")
@click.option("--now", "now_str", default=None, help="Evaluate at this instant (ISO-8601)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def phase(due: str, now_str: str | None, as_json: bool):
    """Classify a due date into an urgency phase."""
    config = _load()
    now = _instant(now_str, config, "--now") or now_in(config)
    due_at = _instant(due, config, "DUE")

    p = classify_phase(now, due_at)
    upcoming = next_remind_at(p, now)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "phase": p.value,
                    "days_out": days_out(due_at, now),
                    "next_remind_at": upcoming.isoformat() if upcoming else None,
                },
                indent=2,
            )
        )
    else:
        click.echo(f"{p.value} ({days_out(due_at, now):+d} days), next reminder: {_fmt(upcoming)}")


@main.command("next")
@click.argument("phase_name", metavar="PHASE", type=click.Choice([p.value for p in Phase]))
@click.option("--now", "now_str", default=None, help="Evaluate at this instant (ISO-8601)")
def next_cmd(phase_name: str, now_str: str | None):
    """Show when the next reminder for a phase fires."""
    config = _load()
    now = _instant(now_str, config, "--now") or now_in(config)
    upcoming = next_remind_at(Phase(phase_name), now)
    click.echo(upcoming.isoformat() if upcoming else "none")


@main.command()
@click.argument("title")
@click.option("--due", "due_str", default=None, help="Due date/time (ISO-8601); defaults to now")
@click.option(
    "--priority",
    default="code-green",
    type=click.Choice(["code-red", "code-yellow", "code-green", "code-white"]),
    help="Priority code",
)
@click.option("--notes", default="", help="Free-form notes")
def add(title: str, due_str: str | None, priority: str, notes: str):
    """Add a reminder task."""
    config = _load()
    now = now_in(config)
    due_at = _instant(due_str, config, "--due")
    try:
        task = add_reminder(get_store(config), title, now, due_at=due_at, priority=priority, notes=notes)
    except TaskStoreError as e:
        _fail(str(e))

    click.echo(f"✓ Added {task.id}: {task.title} [{task.phase.value}], next reminder: {_fmt(task.next_remind_at)}")


@main.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include closed tasks")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(show_all: bool, as_json: bool):
    """List tasks with their current phase."""
    config = _load()
    now = now_in(config)
    try:
        tasks = get_store(config).fetch_all()
    except TaskStoreError as e:
        _fail(str(e))

    if not show_all:
        tasks = [t for t in tasks if t.is_open]

    rows = []
    for t in tasks:
        p = classify_phase(now, t.due_at)
        rows.append((t, p))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": t.id,
                        "title": t.title,
                        "priority": t.priority,
                        "status": t.status,
                        "due_at": t.due_at.isoformat() if t.due_at else None,
                        "phase": p.value,
                        "next_remind_at": t.next_remind_at.isoformat() if t.next_remind_at else None,
                    }
                    for t, p in rows
                ],
                indent=2,
            )
        )
        return

    if not rows:
        click.echo("No open tasks.")
        return

    for t, p in rows:
        due = f" (due {_fmt(t.due_at)})" if t.due_at else ""
        click.echo(f"[{p.value:10}] {t.title}{due} -> {_fmt(t.next_remind_at)}")


@main.command()
def sweep():
    """Run one reminder sweep over the task table."""
    config = _load()
    try:
        result = sweep_reminders(get_store(config), EchoNotifier(), now_in(config))
    except TaskStoreError as e:
        _fail(str(e))

    click.echo(f"Sweep complete: {result.format()}")


@main.command()
def watch():
    """Run reminder sweeps on an interval (blocking)."""
    from .daemon import run_daemon

    config = _load()
    run_daemon(config)


if __name__ == "__main__":
    main()
