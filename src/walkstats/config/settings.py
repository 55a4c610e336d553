"""Centralized configuration for walkstats.

Loads configuration from a .env file and the environment and provides typed
access to settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pytz

from ..core.time import SUNDAY, CalendarContext, parse_weekday
from ..observability.loguru_config import configure_loguru
from ..rollups.variants import RangeKind, RangeVariant

__all__ = [
    "ConfigError",
    "LOG_LEVELS",
    "Settings",
    "generate_example_env",
    "get_settings",
    "load_env_file",
    "load_settings",
]

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class Settings:
    """Settings for walkstats.

    Attributes
    ----------
    timezone : str
        IANA timezone used for day boundaries (default: UTC)
    first_weekday : int
        First day of the week, 0=Monday..6=Sunday (default: Sunday)
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for JSON log files (console only if not set)
    default_variant : str
        Range selector preset used when none is chosen (daily, weekly,
        monthly, yearly)
    """

    timezone: str = "UTC"
    first_weekday: int = SUNDAY
    log_level: str = "INFO"
    log_dir: Path | None = None
    default_variant: str = "daily"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if self.timezone not in pytz.all_timezones_set:
            raise ConfigError(
                f"Unknown timezone {self.timezone!r}. "
                "Set WALKSTATS_TIMEZONE to an IANA name (e.g., WALKSTATS_TIMEZONE=America/New_York)"
            )

        try:
            self.first_weekday = parse_weekday(self.first_weekday)
        except ValueError as exc:
            raise ConfigError(
                f"{exc}. Set WALKSTATS_FIRST_WEEKDAY to 0-6 (0=Monday) or a weekday name"
            ) from exc

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level {self.log_level!r}. Options: {', '.join(LOG_LEVELS)}")

        self.default_variant = str(self.default_variant).lower()
        if self.default_variant not in {kind.value for kind in RangeKind}:
            raise ConfigError(
                f"Unknown default variant {self.default_variant!r}. Options: daily, weekly, monthly, yearly"
            )

    def calendar_context(self) -> CalendarContext:
        """Calendar context for window computations."""
        return CalendarContext(timezone_name=self.timezone, first_weekday=self.first_weekday)

    def range_variant(self) -> RangeVariant:
        """Preset variant named by default_variant."""
        return RangeVariant.from_name(self.default_variant)

    def configure_logging(self) -> None:
        configure_loguru(log_dir=self.log_dir, level=self.log_level)

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, otherwise from os.environ.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")
        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        return cls(
            timezone=os.environ.get("WALKSTATS_TIMEZONE", "UTC"),
            first_weekday=os.environ.get("WALKSTATS_FIRST_WEEKDAY", str(SUNDAY)),
            log_level=os.environ.get("WALKSTATS_LOG_LEVEL", "INFO"),
            log_dir=Path(os.environ["WALKSTATS_LOG_DIR"]) if os.environ.get("WALKSTATS_LOG_DIR") else None,
            default_variant=os.environ.get("WALKSTATS_DEFAULT_VARIANT", "daily"),
        )


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Parameters
    ----------
    env_file
        Path to .env file
    """
    with open(env_file) as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ[key] = value


# Global settings instance
_settings: Settings | None = None


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from environment and keep them as current settings.

    Raises
    ------
    ConfigError
        If settings are invalid
    """
    global _settings
    _settings = Settings.from_env(env_file)
    return _settings


def get_settings() -> Settings:
    """Get current settings.

    Raises
    ------
    ConfigError
        If settings not loaded
    """
    if _settings is None:
        raise ConfigError("Settings not loaded. Call load_settings() first.")
    return _settings


def generate_example_env(output_path: Path | None = None) -> str:
    """Generate example .env file with all settings.

    Parameters
    ----------
    output_path
        Optional path to write .env file

    Returns
    -------
    str
        Example .env contents
    """
    example = """# walkstats configuration
# Copy this to .env and adjust values

# Timezone for day boundaries (optional, default: UTC)
# Examples: UTC, America/New_York, Europe/Brussels
WALKSTATS_TIMEZONE=UTC

# First day of the week (optional, default: 6 = Sunday)
# 0=Monday .. 6=Sunday, or a weekday name
WALKSTATS_FIRST_WEEKDAY=6

# Range preset when none is selected (optional, default: daily)
# Options: daily, weekly, monthly, yearly
WALKSTATS_DEFAULT_VARIANT=daily

# Log level (optional, default: INFO)
# Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
WALKSTATS_LOG_LEVEL=INFO

# Directory for JSON log files (optional, logs to console if not set)
# WALKSTATS_LOG_DIR=logs
"""

    if output_path:
        output_path.write_text(example)

    return example
