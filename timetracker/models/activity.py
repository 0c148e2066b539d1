"""
Activity tree data models.

A tree is rooted at a Project. Projects hold Projects and Tasks, Tasks hold
Intervals, and Intervals are the leaves carrying the tracked time.
"""

import weakref
from enum import Enum
from typing import Iterator, Optional

from ..errors import StructuralViolationError
from .time_period import TimePeriod


class ActivityKind(Enum):
    """Variant tag of an activity."""
    PROJECT = "project"
    TASK = "task"


class Activity:
    """
    Common part of projects and tasks.

    Attributes:
        name: Name shown to the user (empty for the root)
        description: Free text description
        time_period: Start, end and duration derived from the descendants
        parent: Project holding this activity, None for a root or detached node
    """

    kind: ActivityKind

    def __init__(self, name: str = "", description: str = "", parent: Optional['Project'] = None):
        self.name = name
        self.description = description
        self.time_period = TimePeriod.empty()
        self._parent = None
        if parent is not None:
            parent.add_child(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @property
    def parent(self) -> Optional['Project']:
        """Project holding this activity, if it is still alive."""
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def ancestors(self) -> Iterator['Project']:
        """Parents from the closest one up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def add_child(self, activity: 'Activity'):
        raise StructuralViolationError(f"{self!r} cannot hold activities")

    def add_interval(self, interval: 'Interval'):
        raise StructuralViolationError(f"{self!r} cannot hold intervals")


class Project(Activity):
    """Activity grouping other projects and tasks, in insertion order."""

    kind = ActivityKind.PROJECT

    def __init__(self, name: str = "", description: str = "", parent: Optional['Project'] = None):
        self._children: list[Activity] = []
        super().__init__(name, description, parent)

    @property
    def children(self) -> tuple[Activity, ...]:
        return tuple(self._children)

    def add_child(self, activity: Activity):
        """
        Append an activity to this project.

        Raises:
            StructuralViolationError: If `activity` is not a project or task,
                already has a parent, or is this project or one of its ancestors
        """
        if not isinstance(activity, Activity):
            raise StructuralViolationError(
                f"Projects hold projects and tasks, not {type(activity).__name__}"
            )
        if activity.parent is not None:
            raise StructuralViolationError(f"{activity!r} already belongs to {activity.parent!r}")
        if activity is self or any(node is activity for node in self.ancestors()):
            raise StructuralViolationError(f"Adding {activity!r} to {self!r} would create a cycle")
        activity._parent = weakref.ref(self)
        self._children.append(activity)

    def remove_child(self, activity: Activity):
        """Detach an activity and its whole subtree from this project."""
        for i, child in enumerate(self._children):
            if child is activity:
                del self._children[i]
                activity._parent = None
                return
        raise StructuralViolationError(f"{activity!r} is not a child of {self!r}")


class Task(Activity):
    """Activity whose time is recorded as a list of intervals."""

    kind = ActivityKind.TASK

    def __init__(self, name: str = "", description: str = "", parent: Optional[Project] = None):
        self._intervals: list[Interval] = []
        super().__init__(name, description, parent)

    @property
    def intervals(self) -> tuple['Interval', ...]:
        return tuple(self._intervals)

    def add_interval(self, interval: 'Interval'):
        """
        Append an interval created for this task.

        Raises:
            StructuralViolationError: If `interval` is not an Interval, was
                created for another task, or is already in the list
        """
        if not isinstance(interval, Interval):
            raise StructuralViolationError(
                f"Tasks hold intervals, not {type(interval).__name__}"
            )
        if interval.task is not self:
            raise StructuralViolationError(f"{interval!r} belongs to {interval.task!r}")
        if any(existing is interval for existing in self._intervals):
            raise StructuralViolationError(f"{interval!r} is already in {self!r}")
        self._intervals.append(interval)

    def remove_interval(self, interval: 'Interval'):
        for i, existing in enumerate(self._intervals):
            if existing is interval:
                del self._intervals[i]
                return
        raise StructuralViolationError(f"{interval!r} is not an interval of {self!r}")


class Interval:
    """
    A stretch of tracked time. Belongs to the task it was created for.

    Creating an interval appends it to `task`.
    """

    def __init__(self, task: Task, time_period: TimePeriod):
        if not isinstance(task, Task):
            raise StructuralViolationError(
                f"Intervals belong to tasks, not {type(task).__name__}"
            )
        self._task = task
        self.time_period = time_period
        task.add_interval(self)

    def __repr__(self) -> str:
        return f"Interval({self.time_period.start} - {self.time_period.end})"

    @property
    def task(self) -> Task:
        return self._task

    @property
    def time_period(self) -> TimePeriod:
        return self._time_period

    @time_period.setter
    def time_period(self, value: TimePeriod):
        if not isinstance(value, TimePeriod):
            raise StructuralViolationError(
                f"Interval periods must be TimePeriod, not {type(value).__name__}"
            )
        self._time_period = value


def iter_activities(root: Activity) -> Iterator[Activity]:
    """Walk the activities under `root` (included) in pre-order."""
    stack = [root]
    while stack:
        activity = stack.pop()
        yield activity
        match activity.kind:
            case ActivityKind.PROJECT:
                stack.extend(reversed(activity.children))
            case ActivityKind.TASK:
                pass
