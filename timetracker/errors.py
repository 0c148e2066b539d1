"""
Exception types raised by the timetracker core.
"""


class TimeTrackerError(Exception):
    """Base class for all timetracker errors."""


class InvalidArgumentError(TimeTrackerError, ValueError):
    """A date range, duration bound or generator parameter is out of its domain."""


class StructuralViolationError(TimeTrackerError, TypeError):
    """A mutation would break the Project/Task/Interval tree shape."""
