"""
Application service for finding available slots in a working day.

The service applies configured defaults to the caller's options and
delegates the actual calculation to the domain-level ``SlotCalculator``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..config import DefaultsConfig, SlotsOptions
from ..domain.models import TimeSlot
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class SlotFinderService:
    """
    Orchestrates option handling and slot calculation.

    Each call is independent; the service only holds its defaults.
    """

    def __init__(self, defaults: Optional[DefaultsConfig] = None) -> None:
        self._defaults = defaults or DefaultsConfig()

    def resolve_options(self, options: Any = None, **overrides: Any) -> SlotsOptions:
        """Validate the options and fill in every omitted field."""
        return SlotsOptions.build(options, **overrides).with_defaults(self._defaults)

    def find_slots(self, options: Any = None, **overrides: Any) -> List[TimeSlot]:
        """
        Compute available slots for one working day.

        Args:
            options: SlotsOptions instance or mapping with a ``busy`` entry
            **overrides: Individual option fields, taking precedence

        Returns:
            Ascending list of TimeSlot objects

        Raises:
            InvalidConfigurationError: If the options are invalid
            TimeParseError: If a time string is not in HH:MM form
        """
        resolved = self.resolve_options(options, **overrides)
        calculator = SlotCalculator(window=resolved.get_window())

        logger.debug(
            "Finding %d-min slots (break %d) between %s and %s around %d busy period(s)",
            resolved.slot_size,
            resolved.break_time,
            resolved.start_time,
            resolved.end_time,
            len(resolved.busy),
        )

        if not resolved.busy:
            return calculator.generate_slots(
                [],
                slot_size=resolved.slot_size,
                break_time=resolved.break_time,
            )

        return calculator.find_available_slots(
            resolved.busy,
            slot_size=resolved.slot_size,
            break_time=resolved.break_time,
        )


def slots(options: Any = None, **overrides: Any) -> List[TimeSlot]:
    """
    Find available slots using the built-in defaults.

    Example:
        >>> slots({"busy": [{"start": "09:00", "end": "17:30"}]})
        [TimeSlot(start='08:00', end='08:30'), TimeSlot(start='08:30', end='09:00'), TimeSlot(start='17:30', end='18:00')]
    """
    return SlotFinderService().find_slots(options, **overrides)


def slots_as_dicts(options: Any = None, **overrides: Any) -> List[Dict[str, str]]:
    """Same as ``slots`` but returns plain ``{"start", "end"}`` mappings."""
    return [slot.to_dict() for slot in slots(options, **overrides)]
