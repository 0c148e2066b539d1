"""
Tree service - Editing and reading operations on one activity tree.
Every edit leaves the tree consistent, so consumers can read it right away.
"""

import pandas as pd
from datetime import datetime
from typing import Iterator, Optional

from ..consistency import recompute, recompute_upwards
from ..errors import StructuralViolationError
from ..logger import setup_logger
from ..models import (
    Activity,
    ActivityKind,
    Interval,
    Project,
    Task,
    TimePeriod,
    as_instant,
    iter_activities,
    round_half_up,
)

logger = setup_logger(__name__)

DATAFRAME_COLUMNS = [
    'path', 'kind', 'name', 'description', 'depth',
    'start', 'end', 'duration_seconds', 'is_empty',
]


class TreeService:
    """
    Service layer over an activity tree.
    Plays the part of the editor: it mutates the tree and recomputes the
    affected ancestors after each change.
    """

    def __init__(self, root: Optional[Project] = None):
        self.root = root if root is not None else Project()
        if not self.root.is_root:
            raise StructuralViolationError(f"{self.root!r} is not the root of its tree")
        recompute(self.root)

    def add_project(self, parent: Project, name: str, description: str = "") -> Project:
        """
        Create a project under `parent`.

        Args:
            parent: Project to hold the new project
            name: Name of the new project
            description: Optional description

        Returns:
            The new project
        """
        project = Project(name, description, parent)
        recompute_upwards(project)
        logger.info(f"Added project {name!r} under {parent.name!r}")
        return project

    def add_task(self, parent: Project, name: str, description: str = "") -> Task:
        """
        Create a task under `parent`.

        Args:
            parent: Project to hold the new task
            name: Name of the new task
            description: Optional description

        Returns:
            The new task
        """
        task = Task(name, description, parent)
        recompute_upwards(task)
        logger.info(f"Added task {name!r} under {parent.name!r}")
        return task

    def add_interval(self, task: Task, start: datetime, end: datetime,
                     duration: Optional[int] = None) -> Interval:
        """
        Record an interval of work on `task`.

        Args:
            task: Task the interval belongs to
            start: Start of the interval
            end: End of the interval
            duration: Worked seconds, defaults to the whole span

        Returns:
            The new interval
        """
        interval = Interval(task, self._period(start, end, duration))
        recompute_upwards(task)
        logger.info(f"Added interval to {task.name!r}")
        return interval

    def set_interval_period(self, interval: Interval, start: datetime, end: datetime,
                            duration: Optional[int] = None):
        """Replace the period of an interval."""
        interval.time_period = self._period(start, end, duration)
        recompute_upwards(interval.task)

    def remove(self, node):
        """Remove a project, task or interval together with everything below it."""
        if isinstance(node, Interval):
            task = node.task
            task.remove_interval(node)
            recompute_upwards(task)
            logger.info(f"Removed interval from {task.name!r}")
            return

        parent = node.parent
        if parent is None:
            raise StructuralViolationError("The root cannot be removed")
        parent.remove_child(node)
        recompute_upwards(parent)
        logger.info(f"Removed {node.kind.value} {node.name!r} from {parent.name!r}")

    def find(self, name: str) -> list[Activity]:
        """All activities with the given name, in pre-order."""
        return [activity for activity in iter_activities(self.root) if activity.name == name]

    def walk(self) -> Iterator[tuple[tuple[str, ...], object]]:
        """
        Yield (path, node) for every activity and interval in pre-order.
        The root has the empty path; intervals are named by their position.
        """
        stack = [((), self.root)]
        while stack:
            path, node = stack.pop()
            yield path, node
            match node.kind:
                case ActivityKind.PROJECT:
                    stack.extend(
                        (path + (child.name,), child) for child in reversed(node.children)
                    )
                case ActivityKind.TASK:
                    yield from (
                        (path + (f"#{i}",), interval) for i, interval in enumerate(node.intervals)
                    )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Flat view of the tree, one row per activity or interval in pre-order.

        Returns:
            DataFrame with DATAFRAME_COLUMNS; start and end are NaT for empty periods
        """
        rows = []
        for path, node in self.walk():
            period = node.time_period
            is_interval = isinstance(node, Interval)
            rows.append({
                'path': "/".join(path),
                'kind': 'interval' if is_interval else node.kind.value,
                'name': "" if is_interval else node.name,
                'description': "" if is_interval else node.description,
                'depth': len(path),
                'start': None if period.is_empty else period.start,
                'end': None if period.is_empty else period.end,
                'duration_seconds': period.duration,
                'is_empty': period.is_empty,
            })

        df = pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)
        df['start'] = pd.to_datetime(df['start'], utc=True)
        df['end'] = pd.to_datetime(df['end'], utc=True)
        df['duration_seconds'] = df['duration_seconds'].astype('int64')
        logger.debug(f"Built dataframe with {len(df)} rows")
        return df

    def snapshot(self) -> dict:
        """Nested plain-dict view of the tree, for comparisons and display."""
        return tree_snapshot(self.root)

    def _period(self, start: datetime, end: datetime, duration: Optional[int]) -> TimePeriod:
        if duration is None:
            duration = round_half_up((as_instant(end) - as_instant(start)).total_seconds())
        return TimePeriod(start, end, duration)


def tree_snapshot(activity: Activity) -> dict:
    """Nested plain-dict view of `activity` and its descendants, as they are now."""
    data = {
        'kind': activity.kind.value,
        'name': activity.name,
        'description': activity.description,
        'time_period': activity.time_period.to_dict(),
    }
    match activity.kind:
        case ActivityKind.PROJECT:
            data['children'] = [tree_snapshot(child) for child in activity.children]
        case ActivityKind.TASK:
            data['intervals'] = [interval.time_period.to_dict() for interval in activity.intervals]
    return data
