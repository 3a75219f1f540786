"""Configuration management for Ramping."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

RAMPING_HOME = Path(os.environ.get("RAMPING_HOME", Path.home() / "ramping"))
CONFIG_FILE = RAMPING_HOME / "config" / "ramping.conf"
DATA_DIR = RAMPING_HOME / "data"


@dataclass
class Config:
    """Ramping configuration."""

    timezone: str = "America/Toronto"
    tasks_file: str = ""
    sweep_interval_minutes: int = 15
    log_level: str = "INFO"

    def zone(self) -> ZoneInfo:
        """Operating timezone. Raises ZoneInfoNotFoundError for unknown names."""
        return ZoneInfo(self.timezone)

    def tasks_path(self) -> Path:
        if self.tasks_file:
            return Path(self.tasks_file).expanduser()
        return DATA_DIR / "tasks.csv"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ramping.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "timezone":
                config.timezone = value
            case "tasks_file":
                config.tasks_file = value
            case "sweep_interval_minutes":
                try:
                    minutes = int(value)
                except ValueError:
                    minutes = 0
                if minutes > 0:
                    config.sweep_interval_minutes = minutes
                else:
                    logger.warning(f"Invalid SWEEP_INTERVAL_MINUTES {value!r}, using default")
            case "log_level":
                config.log_level = value.upper()

    return config
