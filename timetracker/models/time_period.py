"""
Time period value shared by every node of the activity tree.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..errors import InvalidArgumentError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Sentinel bounds of an empty period: start after everything, end before everything
MAX_INSTANT = datetime.max.replace(microsecond=999000, tzinfo=timezone.utc)
MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def as_instant(value: datetime) -> datetime:
    """Normalize a datetime to an aware UTC instant truncated to milliseconds."""
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"Expected a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return (as_instant(value) - EPOCH) // timedelta(milliseconds=1)


def from_millis(millis: int) -> datetime:
    """Aware UTC instant for a count of milliseconds since the Unix epoch."""
    return EPOCH + timedelta(milliseconds=millis)


@dataclass
class TimePeriod:
    """
    Start, end and duration of a node.

    Attributes:
        start: First instant of the period
        end: Last instant of the period
        duration: Worked time in whole seconds. For projects and tasks this is
            the sum of the children's durations, so it can be larger or smaller
            than end - start when intervals overlap or leave gaps.
    """
    start: datetime
    end: datetime
    duration: int = 0

    def __post_init__(self):
        """Validate the period unless it is the empty sentinel."""
        self.start = as_instant(self.start)
        self.end = as_instant(self.end)
        if self.is_empty:
            return
        if self.end < self.start:
            raise InvalidArgumentError(
                f"Period ends before it starts: {self.start} > {self.end}"
            )
        if self.duration < 0:
            raise InvalidArgumentError(f"Duration cannot be negative: {self.duration}")

    @classmethod
    def empty(cls) -> 'TimePeriod':
        """The sentinel period of a project or task without content."""
        return cls(start=MAX_INSTANT, end=MIN_INSTANT, duration=0)

    @classmethod
    def from_duration(cls, start: datetime, seconds: int) -> 'TimePeriod':
        """Period starting at `start` and lasting `seconds`."""
        start = as_instant(start)
        return cls(start=start, end=start + timedelta(seconds=seconds), duration=seconds)

    @property
    def is_empty(self) -> bool:
        """Whether this is the sentinel "undefined span" rather than a real period."""
        return self.start == MAX_INSTANT and self.end == MIN_INSTANT

    @property
    def span(self) -> Optional[timedelta]:
        """Elapsed time between start and end, or None for an empty period."""
        if self.is_empty:
            return None
        return self.end - self.start

    def reset(self):
        """Turn this period into the empty sentinel, in place."""
        self.start = MAX_INSTANT
        self.end = MIN_INSTANT
        self.duration = 0

    def to_dict(self) -> dict:
        """Convert period to dictionary."""
        if self.is_empty:
            return {'start': None, 'end': None, 'duration': 0}
        return {
            'start': self.start.isoformat(timespec='milliseconds'),
            'end': self.end.isoformat(timespec='milliseconds'),
            'duration': self.duration,
        }
