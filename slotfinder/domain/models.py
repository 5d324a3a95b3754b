"""
Domain models for busy intervals and available slots.
"""

from dataclasses import dataclass
from typing import Dict

from .clock import minutes_to_time, time_to_minutes


@dataclass(frozen=True)
class MinuteRange:
    """
    A time-of-day range expressed as minutes since midnight.

    Busy input may be empty (start == end); the range is not validated.
    """
    start: int
    end: int

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "MinuteRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{minutes_to_time(self.start)}-{minutes_to_time(self.end)}"


@dataclass(frozen=True)
class TimeSlot:
    """
    A wall-clock range in HH:MM form, used for busy input and results.
    """
    start: str
    end: str

    @classmethod
    def from_range(cls, time_range: MinuteRange) -> "TimeSlot":
        return cls(
            start=minutes_to_time(time_range.start),
            end=minutes_to_time(time_range.end),
        )

    def to_range(self) -> MinuteRange:
        """Parse both ends into a MinuteRange."""
        return MinuteRange(
            start=time_to_minutes(self.start),
            end=time_to_minutes(self.end),
        )

    def duration_minutes(self) -> int:
        return self.to_range().duration_minutes()

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: HH:MM – HH:MM (N min)
        """
        return f"{self.start} – {self.end} ({self.duration_minutes()} min)"

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class WorkingWindow:
    """
    Bounds of the working day within which slots may be generated.
    """
    start: int
    end: int

    @classmethod
    def from_times(cls, start_time: str, end_time: str) -> "WorkingWindow":
        return cls(start=time_to_minutes(start_time), end=time_to_minutes(end_time))

    def contains(self, time_range: MinuteRange) -> bool:
        """Check if a range lies fully inside the window."""
        return self.start <= time_range.start and time_range.end <= self.end
