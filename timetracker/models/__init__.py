"""
Models package - Activity tree and time periods.
"""

from .time_period import (
    TimePeriod,
    MAX_INSTANT,
    MIN_INSTANT,
    as_instant,
    to_millis,
    from_millis,
    round_half_up,
)
from .activity import Activity, ActivityKind, Project, Task, Interval, iter_activities

__all__ = [
    'TimePeriod',
    'MAX_INSTANT',
    'MIN_INSTANT',
    'as_instant',
    'to_millis',
    'from_millis',
    'round_half_up',
    'Activity',
    'ActivityKind',
    'Project',
    'Task',
    'Interval',
    'iter_activities',
]
