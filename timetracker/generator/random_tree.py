"""
Random activity tree factory.

Builds trees of projects, tasks and intervals whose size and content depend
on a `TreeSettings`, for testing and for filling the application without
entering data by hand. Names, descriptions, dates and durations are random
but the tree is consistent, and the same seed always yields the same tree.
"""

from datetime import datetime, timedelta

import numpy as np

from ..config import (
    DEFAULT_SEED,
    MILLIS_PER_SECOND,
    NAME_RANGE,
    DESCRIPTION_RANGE,
    PROJECT_PREFIX,
    TASK_PREFIX,
)
from ..consistency import recompute
from ..logger import setup_logger, log_tree_stats
from ..models import (
    ActivityKind,
    Interval,
    Project,
    Task,
    TimePeriod,
    from_millis,
    round_half_up,
    to_millis,
)
from .random_date import RandomDate
from .settings import TreeSettings

logger = setup_logger(__name__)


class RandomTreeGenerator:
    """
    Factory of random activity trees.

    Like `numpy.random.Generator` returns random numbers, `next_tree` returns
    a whole random tree. Successive calls on one instance continue the same
    random sequence, so a sequence of trees is reproducible from the seed.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = seed
        # numpy only takes non-negative seeds, map signed 64-bit seeds onto them
        self.rng = np.random.default_rng(seed % 2 ** 64)

    def next_tree(self, settings: TreeSettings) -> Project:
        """
        Create a random tree.

        Args:
            settings: Shape of the tree and bounds of its intervals

        Returns:
            Root project of the tree, with every period made consistent
        """
        dates = RandomDate(settings.start_date, settings.end_date, self.rng)

        root = Project()
        frontier = [root]
        for level in range(settings.levels):
            logger.debug(f"Generating level {level + 1} from {len(frontier)} projects")
            next_frontier = []
            for parent in frontier:
                n_children = round_half_up(settings.max_child_activities_per_project * self.rng.random())
                for _ in range(n_children):
                    child = self._add_child(parent, settings, dates)
                    if child.kind is ActivityKind.PROJECT:
                        next_frontier.append(child)
            frontier = next_frontier

        # Only intervals have dates so far, projects and tasks get theirs from below
        recompute(root)
        log_tree_stats(root, logger, name=f"Random tree (seed {self.seed})")
        return root

    def _add_child(self, parent: Project, settings: TreeSettings, dates: RandomDate):
        """Append a random project, or a random task with its intervals, to `parent`."""
        name = str(int(NAME_RANGE * self.rng.random()))
        description = str(int(self.rng.integers(0, DESCRIPTION_RANGE)))

        if self.rng.random() < settings.project_ratio:
            project = Project(PROJECT_PREFIX + name, description, parent)
            logger.debug(f"Created project {project.name!r} under {parent.name!r}")
            return project

        task = Task(TASK_PREFIX + name, description, parent)
        logger.debug(f"Created task {task.name!r} under {parent.name!r}")
        n_intervals = round_half_up(settings.max_intervals_per_task * self.rng.random())
        for _ in range(n_intervals):
            self._add_interval(task, settings, dates)
        return task

    def _add_interval(self, task: Task, settings: TreeSettings, dates: RandomDate):
        min_duration = settings.min_interval_duration_sec
        max_duration = settings.max_interval_duration_sec
        duration = round_half_up(min_duration + (max_duration - min_duration) * self.rng.random())

        start = dates.next_date()
        end = start + timedelta(seconds=duration)
        end_limit = from_millis(to_millis(settings.end_date))
        if end > end_limit:
            # Shorten the interval so that it ends within the range
            end = end_limit
            duration = round_half_up((to_millis(end) - to_millis(start)) / MILLIS_PER_SECOND)

        Interval(task, TimePeriod(start, end, duration))
        logger.debug(f"Created interval of {duration}s in {task.name!r}")


def generate(
    levels: int,
    max_child_activities_per_project: int,
    max_intervals_per_task: int,
    project_ratio: float,
    start_date: datetime,
    end_date: datetime,
    min_interval_duration_sec: int,
    max_interval_duration_sec: int,
    seed: int = DEFAULT_SEED,
) -> Project:
    """
    Create a random, consistent tree of projects, tasks and intervals.

    Args:
        levels: Number of activity levels below the root (intervals not counted)
        max_child_activities_per_project: Children per project are drawn in [0, this]
        max_intervals_per_task: Intervals per task are drawn in [0, this]
        project_ratio: Probability of a child being a project instead of a task
        start_date: Earliest interval start
        end_date: Latest interval end
        min_interval_duration_sec: Shortest interval, before clamping to end_date
        max_interval_duration_sec: Longest interval
        seed: Seed of the random generator

    Returns:
        Root project of the tree

    Raises:
        InvalidArgumentError: If end_date < start_date, the duration bounds are
            reversed, or any count or ratio is out of range
    """
    settings = TreeSettings.create(
        levels=levels,
        max_child_activities_per_project=max_child_activities_per_project,
        max_intervals_per_task=max_intervals_per_task,
        project_ratio=project_ratio,
        start_date=start_date,
        end_date=end_date,
        min_interval_duration_sec=min_interval_duration_sec,
        max_interval_duration_sec=max_interval_duration_sec,
    )
    return RandomTreeGenerator(seed).next_tree(settings)
