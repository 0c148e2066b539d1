"""
timetracker - Hierarchical time tracking core.

Projects hold projects and tasks, tasks hold intervals of tracked time, and
the consistency engine derives every project and task period from below.
"""

from .errors import TimeTrackerError, InvalidArgumentError, StructuralViolationError
from .models import Activity, ActivityKind, Project, Task, Interval, TimePeriod, iter_activities
from .consistency import ConsistencyEngine, recompute, recompute_upwards, refresh
from .generator import RandomDate, RandomTreeGenerator, TreeSettings, generate

__all__ = [
    'TimeTrackerError',
    'InvalidArgumentError',
    'StructuralViolationError',
    'Activity',
    'ActivityKind',
    'Project',
    'Task',
    'Interval',
    'TimePeriod',
    'iter_activities',
    'ConsistencyEngine',
    'recompute',
    'recompute_upwards',
    'refresh',
    'RandomDate',
    'RandomTreeGenerator',
    'TreeSettings',
    'generate',
]
