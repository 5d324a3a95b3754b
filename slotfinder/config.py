"""
Configuration management using Pydantic models.
"""

from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .domain.clock import clock_value_to_time, time_to_minutes
from .domain.exceptions import InvalidConfigurationError
from .domain.models import TimeSlot, WorkingWindow

CONFIG_FILE_NAME = "slotfinder.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _validate_slot_size(value: Optional[int]) -> Optional[int]:
    if value is not None and value <= 0:
        raise ValueError(f"slot_size must be greater than zero, got {value}")
    return value


def _validate_break_time(value: Optional[int]) -> Optional[int]:
    if value is not None and value < 0:
        raise ValueError(f"break_time must not be negative, got {value}")
    return value


class DefaultsConfig(BaseModel):
    """Defaults applied to options the caller leaves out."""
    slot_size: int = 30
    break_time: int = 0
    start_time: str = "08:00"
    end_time: str = "18:00"

    check_slot_size = field_validator("slot_size")(_validate_slot_size)
    check_break_time = field_validator("break_time")(_validate_break_time)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def coerce_yaml_clock(cls, value: Any) -> Any:
        """Turn unquoted YAML times (sexagesimal ints) back into HH:MM."""
        return clock_value_to_time(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        """Ensure window bounds parse as HH:MM."""
        time_to_minutes(value)
        return value

    @model_validator(mode="after")
    def validate_window_order(self) -> "DefaultsConfig":
        """Ensure the configured window does not close before it opens."""
        if time_to_minutes(self.end_time) < time_to_minutes(self.start_time):
            raise ValueError("end_time must not be earlier than start_time")
        return self


class SlotsOptions(BaseModel):
    """
    Options for a single slot calculation.

    Accepts snake_case names as well as the camelCase aliases
    (slotSize, breakTime, startTime, endTime). Fields left as None are
    filled from a DefaultsConfig before computation.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    busy: List[TimeSlot]
    slot_size: Optional[int] = Field(default=None, alias="slotSize")
    break_time: Optional[int] = Field(default=None, alias="breakTime")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")

    check_slot_size = field_validator("slot_size")(_validate_slot_size)
    check_break_time = field_validator("break_time")(_validate_break_time)

    @field_validator("busy", mode="before")
    @classmethod
    def coerce_busy_pairs(cls, value: Any) -> Any:
        """Allow (start, end) pairs next to mappings and TimeSlot objects."""
        if isinstance(value, (list, tuple)):
            return [
                {"start": item[0], "end": item[1]}
                if isinstance(item, (list, tuple)) and len(item) == 2
                else item
                for item in value
            ]
        return value

    @classmethod
    def build(cls, data: Any = None, **overrides: Any) -> "SlotsOptions":
        """
        Build options from an existing instance, a mapping or keywords.

        Raises:
            InvalidConfigurationError: If the options fail validation
        """
        if isinstance(data, SlotsOptions):
            if not overrides:
                return data
            data = data.model_dump(exclude_none=True)

        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            raise InvalidConfigurationError(
                f"Slot options must be a mapping or SlotsOptions, got {type(data).__name__}"
            )

        # Normalise aliases to field names so a later key overrides an earlier one
        payload = cls._by_field_name(data)
        payload.update(cls._by_field_name(overrides))

        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Invalid slot options: {exc}") from exc

    @classmethod
    def _by_field_name(cls, data: Mapping[str, Any]) -> dict:
        aliases = {field.alias: name for name, field in cls.model_fields.items() if field.alias}
        return {aliases.get(key, key): value for key, value in data.items()}

    def with_defaults(self, defaults: DefaultsConfig) -> "SlotsOptions":
        """Return a copy where every omitted field takes its default."""
        return self.model_copy(
            update={
                "slot_size": defaults.slot_size if self.slot_size is None else self.slot_size,
                "break_time": defaults.break_time if self.break_time is None else self.break_time,
                "start_time": defaults.start_time if self.start_time is None else self.start_time,
                "end_time": defaults.end_time if self.end_time is None else self.end_time,
            }
        )

    def get_window(self) -> WorkingWindow:
        """Get the working window in minutes. Requires defaults to be applied."""
        return WorkingWindow.from_times(self.start_time, self.end_time)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and check the logging level name."""
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            InvalidConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise InvalidConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Invalid config in {config_path}: {exc}") from exc


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for slotfinder.yaml in current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of slotfinder/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the configuration, falling back to built-in defaults.

    An explicitly given path must exist; the default lookup may find nothing.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
