"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ..engine.options import (
    DEFAULT_SESSION_DURATION_MINUTES,
    DEFAULT_SESSION_TIME,
    MIN_GAP_MINUTES,
    TRAVEL_BUFFER_MINUTES,
    EngineOptions,
)
from ..engine.time_utils import is_valid_time, time_to_minutes


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables and provides
    validated access to configuration values.

    Attributes:
        min_gap_minutes: Minimum buffer between sessions
        travel_buffer_minutes: Buffer between two onsite sessions
        default_duration: Fallback session duration in minutes
        default_time: Start time for sessions whose owner has none (HH:MM).
            Malformed or empty times are still read as 16:00.
        work_start: Start of the availability window (HH:MM)
        work_end: End of the availability window (HH:MM)
        suggest_start: Start of the curated suggestion window (HH:MM)
        include_groups: Whether group sessions take part in checks
        output_dir: Output directory for reports and logs
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     checker = ConflictChecker(roster, config.to_engine_options())
    """

    def __init__(self, env_file: Optional[Path] = None):
        """
        Initialize configuration by loading environment variables.

        Args:
            env_file: Explicit .env path; defaults to the nearest .env
                above the working directory
        """
        # Variables already in the environment win over the file
        load_dotenv(env_file or find_dotenv(usecwd=True))

        # Engine settings
        self._min_gap_minutes = _env_int("SCHEDULER_MIN_GAP_MINUTES", MIN_GAP_MINUTES)
        self._travel_buffer_minutes = _env_int(
            "SCHEDULER_TRAVEL_BUFFER_MINUTES", TRAVEL_BUFFER_MINUTES
        )
        self._default_duration = _env_int(
            "SCHEDULER_DEFAULT_DURATION", DEFAULT_SESSION_DURATION_MINUTES
        )
        self._default_time = os.getenv("SCHEDULER_DEFAULT_TIME", DEFAULT_SESSION_TIME)

        # Working hours
        self._work_start = os.getenv("SCHEDULER_WORK_START", "08:00")
        self._work_end = os.getenv("SCHEDULER_WORK_END", "22:00")
        self._suggest_start = os.getenv("SCHEDULER_SUGGEST_START", "14:00")

        self._include_groups = os.getenv("SCHEDULER_INCLUDE_GROUPS", "true").lower() == "true"

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def min_gap_minutes(self) -> int:
        """Get the minimum gap between sessions in minutes."""
        return self._min_gap_minutes

    @property
    def travel_buffer_minutes(self) -> int:
        """Get the buffer kept between two onsite sessions."""
        return self._travel_buffer_minutes

    @property
    def default_duration(self) -> int:
        """Get the fallback session duration in minutes."""
        return self._default_duration

    @property
    def default_time(self) -> str:
        """
        Get the start time used when neither session nor owner has one.

        Only that fallback follows SCHEDULER_DEFAULT_TIME; a malformed or
        empty time string always parses as 16:00.
        """
        return self._default_time

    @property
    def work_start(self) -> str:
        return self._work_start

    @property
    def work_end(self) -> str:
        return self._work_end

    @property
    def suggest_start(self) -> str:
        return self._suggest_start

    @property
    def include_groups(self) -> bool:
        """Get whether group sessions are checked."""
        return self._include_groups

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if self._min_gap_minutes < 0:
            errors.append("SCHEDULER_MIN_GAP_MINUTES must not be negative")

        if self._travel_buffer_minutes < 0:
            errors.append("SCHEDULER_TRAVEL_BUFFER_MINUTES must not be negative")

        if self._default_duration <= 0:
            errors.append("SCHEDULER_DEFAULT_DURATION must be positive")

        for name, value in (
            ("SCHEDULER_DEFAULT_TIME", self._default_time),
            ("SCHEDULER_WORK_START", self._work_start),
            ("SCHEDULER_WORK_END", self._work_end),
            ("SCHEDULER_SUGGEST_START", self._suggest_start),
        ):
            if not is_valid_time(value):
                errors.append(f"{name} must be HH:MM, got: {value}")

        if (
            is_valid_time(self._work_start)
            and is_valid_time(self._work_end)
            and time_to_minutes(self._work_start) >= time_to_minutes(self._work_end)
        ):
            errors.append("SCHEDULER_WORK_START must be earlier than SCHEDULER_WORK_END")

        # Validate log level
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def to_engine_options(self) -> EngineOptions:
        """Build engine options from this configuration."""
        return EngineOptions(
            default_duration=self._default_duration,
            min_gap=self._min_gap_minutes,
            travel_buffer=self._travel_buffer_minutes,
            default_time=self._default_time,
            work_start=self._work_start,
            work_end=self._work_end,
            suggest_start=self._suggest_start,
            include_groups=self._include_groups,
        )

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        for directory in (self.output_dir / "reports", self.output_dir / "logs"):
            directory.mkdir(parents=True, exist_ok=True)


# Singleton instance
config = Config()
