"""
Core business logic for calculating available time slots.

Pure domain logic without any external dependencies (no I/O, no state
kept between calls).
"""

import logging
from typing import Iterable, List, Sequence

from .exceptions import InvalidConfigurationError
from .models import MinuteRange, TimeSlot, WorkingWindow

logger = logging.getLogger(__name__)


class SlotCalculator:
    """
    Calculates fixed-size available slots around busy periods.

    Algorithm:
    1. Convert busy periods to minute ranges and sort them by start
    2. Merge overlapping or touching ranges
    3. Walk the working window, fitting slots before each busy range
    4. Fit the remaining slots between the last busy range and the window end
    """

    def __init__(self, window: WorkingWindow):
        self.window = window

    def find_available_slots(
        self,
        busy: Iterable[TimeSlot],
        slot_size: int = 30,
        break_time: int = 0
    ) -> List[TimeSlot]:
        """
        Find all available slots within the working window.

        Args:
            busy: Busy periods in any order, overlaps allowed
            slot_size: Length of each slot in minutes
            break_time: Gap between two consecutive available slots

        Returns:
            Ascending list of TimeSlot objects, each slot_size minutes long
        """
        merged = self.merge_busy_ranges(slot.to_range() for slot in busy)
        return self.generate_slots(merged, slot_size=slot_size, break_time=break_time)

    @staticmethod
    def merge_busy_ranges(ranges: Iterable[MinuteRange]) -> List[MinuteRange]:
        """
        Merge overlapping or adjacent ranges.

        Example: [09:00-10:00, 10:00-11:00, 10:30-12:00] -> [09:00-12:00]
        """
        sorted_ranges = sorted(ranges, key=lambda r: r.start)
        if not sorted_ranges:
            return []

        merged: List[MinuteRange] = []
        current = sorted_ranges[0]

        for nxt in sorted_ranges[1:]:
            if nxt.start <= current.end:
                current = MinuteRange(start=current.start, end=max(current.end, nxt.end))
            else:
                merged.append(current)
                current = nxt

        merged.append(current)

        logger.debug("Merged %d busy range(s) into %d", len(sorted_ranges), len(merged))
        return merged

    def generate_slots(
        self,
        merged_busy: Sequence[MinuteRange],
        slot_size: int,
        break_time: int = 0
    ) -> List[TimeSlot]:
        """
        Greedily place slots into the gaps around merged busy ranges.

        Break time separates two consecutive available slots only. After a
        busy range the cursor lands exactly on its end.
        """
        if slot_size <= 0:
            raise InvalidConfigurationError(f"slot_size must be greater than zero, got {slot_size}")
        if break_time < 0:
            raise InvalidConfigurationError(f"break_time must not be negative, got {break_time}")

        available: List[TimeSlot] = []
        step = slot_size + break_time
        cursor = self.window.start

        for busy in merged_busy:
            obstruction = min(busy.start, self.window.end)
            cursor = self._fill_gap(available, cursor, obstruction, slot_size, step)
            cursor = max(cursor, busy.end)

        self._fill_gap(available, cursor, self.window.end, slot_size, step)

        logger.debug(
            "Generated %d slot(s) of %d min in window %s",
            len(available),
            slot_size,
            MinuteRange(self.window.start, self.window.end),
        )
        return available

    @staticmethod
    def _fill_gap(
        available: List[TimeSlot],
        cursor: int,
        obstruction: int,
        slot_size: int,
        step: int
    ) -> int:
        """Append every slot that ends at or before the obstruction; return the new cursor."""
        while cursor + slot_size <= obstruction:
            available.append(TimeSlot.from_range(MinuteRange(cursor, cursor + slot_size)))
            cursor += step
        return cursor


def merge_overlapping_slots(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """
    Merge busy slots given in HH:MM form.

    Returns an ascending list of disjoint, non-touching slots.
    """
    merged = SlotCalculator.merge_busy_ranges(slot.to_range() for slot in slots)
    return [TimeSlot.from_range(time_range) for time_range in merged]
