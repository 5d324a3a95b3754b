"""
slotfinder - find free fixed-size slots in a working day around busy periods.
"""

from .config import DefaultsConfig, SlotsOptions
from .domain import InvalidConfigurationError, SlotFinderError, TimeParseError, TimeSlot
from .services import SlotFinderService, slots, slots_as_dicts

__version__ = "1.0.0"

__all__ = [
    "DefaultsConfig",
    "InvalidConfigurationError",
    "SlotFinderError",
    "SlotFinderService",
    "SlotsOptions",
    "TimeParseError",
    "TimeSlot",
    "slots",
    "slots_as_dicts",
]
