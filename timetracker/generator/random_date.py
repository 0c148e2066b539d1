"""
Uniformly distributed random instants between two dates.
"""

from datetime import datetime

import numpy as np

from ..errors import InvalidArgumentError
from ..models import to_millis, from_millis


class RandomDate:
    """
    Source of random dates in [start, end], analogous to `Generator.random`.

    The random generator is shared with the caller so that a seeded caller
    gets a reproducible sequence of dates.
    """

    def __init__(self, start: datetime, end: datetime, rng: np.random.Generator):
        self.start_millis = to_millis(start)
        self.end_millis = to_millis(end)
        if self.end_millis < self.start_millis:
            raise InvalidArgumentError(f"Start date {start} is after end date {end}")
        self.rng = rng

    def next_date(self) -> datetime:
        """Next random instant, at millisecond resolution."""
        offset = int(self.rng.random() * (self.end_millis - self.start_millis))
        return from_millis(self.start_millis + offset)
