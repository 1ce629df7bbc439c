"""
Configuration management using Pydantic models loaded from YAML.

This module is the only place that knows the config file format. It
validates the raw file and translates it into the immutable domain
``Configuration``.
"""

import logging
import os
import re
from datetime import date
from pathlib import Path
from typing import Dict

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .domain.exceptions import ConfigurationError
from .domain.models import AllowedDaysOff, Configuration, DayOff, DayPortion, WorkingDays

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "FLEXBALANCE_CONFIG_PATH"
CONFIG_FILE_NAME = "config.yml"

HALF_DAY_SUFFIX = " (h)"

SECONDS_PER_UNIT = {
    "d": 86_400,
    "h": 3600,
    "m": 60,
    "s": 1,
}

_DURATION_TOKEN = re.compile(r"^([+-]?\d+)([a-z]+)$")


def parse_duration(text: str) -> int:
    """
    Parse a duration like ``"1d 2h -30m 15s"`` into seconds.

    Args:
        text: Space-separated tokens of an integer and a unit (d, h, m, s)

    Returns:
        Sum of all tokens in seconds

    Raises:
        ValueError: If the text is empty or a token is malformed or uses an unknown unit
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Duration must not be empty")

    seconds = 0
    for token in tokens:
        match = _DURATION_TOKEN.match(token)
        if not match:
            raise ValueError(f"Invalid duration token '{token}', expected e.g. '8h'")

        amount, unit = match.groups()
        if unit not in SECONDS_PER_UNIT:
            raise ValueError(
                f"Unknown duration unit '{unit}' in '{token}', use one of d, h, m, s"
            )
        seconds += int(amount) * SECONDS_PER_UNIT[unit]

    return seconds


def parse_day_off(description: str) -> DayOff:
    """Translate a description with an optional half-day suffix into a DayOff."""
    if description.endswith(HALF_DAY_SUFFIX):
        return DayOff(
            description=description[: -len(HALF_DAY_SUFFIX)],
            portion=DayPortion.HALF,
        )
    return DayOff(description=description, portion=DayPortion.FULL)


class WorkingDaysConfig(BaseModel):
    """Expected working hours per weekday. All seven days are required."""
    model_config = ConfigDict(extra="forbid")

    monday: float = Field(ge=0)
    tuesday: float = Field(ge=0)
    wednesday: float = Field(ge=0)
    thursday: float = Field(ge=0)
    friday: float = Field(ge=0)
    saturday: float = Field(ge=0)
    sunday: float = Field(ge=0)

    def to_domain(self) -> WorkingDays:
        return WorkingDays(hours={
            1: self.monday,
            2: self.tuesday,
            3: self.wednesday,
            4: self.thursday,
            5: self.friday,
            6: self.saturday,
            7: self.sunday,
        })


class AllowedDaysOffConfig(BaseModel):
    """Yearly allowance of days off."""
    sick_days: int
    vacation_days: int


class AppConfig(BaseModel):
    """Application configuration as stored in the YAML file."""
    start_date: date
    time_zone: str
    time_adjustment: str
    working_days: WorkingDaysConfig
    allowed_days_off: AllowedDaysOffConfig
    holidays: Dict[date, str] = Field(default_factory=dict)
    vacation_days: Dict[date, str] = Field(default_factory=dict)
    sick_days: Dict[date, str] = Field(default_factory=dict)

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, value: str) -> str:
        """Ensure the time zone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Invalid time zone: {value}") from exc
        return value

    @field_validator("time_adjustment", mode="before")
    @classmethod
    def validate_time_adjustment(cls, value) -> str:
        """Ensure the time adjustment is a parseable duration string."""
        if not isinstance(value, str):
            raise ValueError("time_adjustment must be a duration string like '1h 30m'")
        parse_duration(value)
        return value

    @field_validator("holidays", "vacation_days", "sick_days", mode="before")
    @classmethod
    def validate_days(cls, value):
        """Treat an empty YAML section as no entries."""
        return {} if value is None else value

    def time_adjustment_seconds(self) -> int:
        """Get the time adjustment in seconds."""
        return parse_duration(self.time_adjustment)

    def to_domain(self) -> Configuration:
        """Convert the file model into the immutable domain configuration."""
        return Configuration(
            time_zone=self.time_zone,
            start_date=self.start_date,
            time_adjustment_seconds=self.time_adjustment_seconds(),
            working_days=self.working_days.to_domain(),
            allowed_days_off=AllowedDaysOff(
                sick_days=self.allowed_days_off.sick_days,
                vacation_days=self.allowed_days_off.vacation_days,
            ),
            holidays={day: parse_day_off(text) for day, text in self.holidays.items()},
            vacation_days={day: parse_day_off(text) for day, text in self.vacation_days.items()},
            sick_days={day: parse_day_off(text) for day, text in self.sick_days.items()},
        )

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If the file is missing, unreadable, not valid YAML or fails validation
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Create it or point {CONFIG_PATH_ENV_VAR} to the folder containing {CONFIG_FILE_NAME}."
            )

        logger.debug("Loading configuration from %s", config_path)

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
        except (yaml.YAMLError, ValueError) as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid configuration in {config_path}: expected a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}:\n{exc}") from exc


def load_configuration(config_path: Path) -> Configuration:
    """Read, validate and convert the configuration file in one step."""
    return AppConfig.load_from_yaml(config_path).to_domain()


def get_default_config_path() -> Path:
    """Get the configuration file path from the environment or the user config folder."""
    folder = os.environ.get(CONFIG_PATH_ENV_VAR)

    if folder:
        config_path = Path(folder).expanduser() / CONFIG_FILE_NAME
    else:
        config_path = Path.home() / ".config" / "flexbalance" / CONFIG_FILE_NAME

    return config_path
