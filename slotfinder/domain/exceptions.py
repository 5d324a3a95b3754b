"""
Domain-specific exception hierarchy for the slot finder.
"""


class SlotFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidConfigurationError(SlotFinderError, ValueError):
    """Raised when slot options or the defaults profile are invalid."""


class TimeParseError(SlotFinderError, ValueError):
    """Raised when a wall-clock string is not in HH:MM form."""
