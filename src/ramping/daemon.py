"""Periodic reminder sweep."""

import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .adapters.echo_notifier import EchoNotifier
from .config import Config, load_config
from .ports import Notifier
from .workflows import get_store, now_in, sweep_reminders

logger = logging.getLogger(__name__)


def run_sweep(config: Config, notifier: Notifier) -> None:
    """One scheduled sweep. Failures are logged; the next run still fires."""
    try:
        sweep_reminders(get_store(config), notifier, now_in(config))
    except Exception as e:
        logger.error(f"Reminder sweep failed: {e}")


def setup_scheduler(config: Config, notifier: Notifier | None = None) -> BlockingScheduler:
    """Configure the sweep job."""
    notifier = notifier or EchoNotifier()
    scheduler = BlockingScheduler(timezone=config.zone())

    scheduler.add_job(
        run_sweep,
        IntervalTrigger(minutes=config.sweep_interval_minutes, timezone=config.zone()),
        args=[config, notifier],
        id="reminder_sweep",
        name="Reminder sweep",
        coalesce=True,
        max_instances=1,
    )
    logger.info(f"Scheduled reminder sweep every {config.sweep_interval_minutes} min ({config.timezone})")

    return scheduler


def run_daemon(config: Config | None = None) -> None:
    """Run the sweep loop until interrupted."""
    if config is None:
        config = load_config()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, config.log_level, logging.INFO),
    )

    notifier = EchoNotifier()
    scheduler = setup_scheduler(config, notifier)
    logger.info("Starting Ramping sweep daemon...")

    # Run once immediately so a fresh start doesn't wait a full interval
    run_sweep(config, notifier)

    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Sweep daemon stopped")
