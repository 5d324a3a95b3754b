"""
Domain layer - Pure business logic without external dependencies.
"""

from .clock import minutes_to_time, time_to_minutes
from .exceptions import InvalidConfigurationError, SlotFinderError, TimeParseError
from .models import MinuteRange, TimeSlot, WorkingWindow
from .slot_calculator import SlotCalculator, merge_overlapping_slots

__all__ = [
    "InvalidConfigurationError",
    "MinuteRange",
    "SlotCalculator",
    "SlotFinderError",
    "TimeParseError",
    "TimeSlot",
    "WorkingWindow",
    "merge_overlapping_slots",
    "minutes_to_time",
    "time_to_minutes",
]
