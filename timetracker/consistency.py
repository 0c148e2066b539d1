"""
Consistency engine - derives project and task periods from their descendants.

A project or task starts at the earliest start of its children, ends at the
latest end, and lasts the sum of their durations. Intervals are leaf data and
are never modified here.
"""

from typing import Iterable

from .models import Activity, ActivityKind, TimePeriod
from .logger import setup_logger

logger = setup_logger(__name__)


def _fold(period: TimePeriod, parts: Iterable[TimePeriod]):
    """Overwrite `period` in place with the min start, max end and summed duration of `parts`."""
    period.reset()
    for part in parts:
        if part.start < period.start:
            period.start = part.start
        if part.end > period.end:
            period.end = part.end
        period.duration += part.duration


def refresh(activity: Activity):
    """
    Recompute one project or task from the current periods of its children.

    Does not descend: children are assumed to be consistent already.
    """
    match activity.kind:
        case ActivityKind.PROJECT:
            _fold(activity.time_period, (child.time_period for child in activity.children))
        case ActivityKind.TASK:
            _fold(activity.time_period, (interval.time_period for interval in activity.intervals))


def recompute(activity: Activity):
    """
    Make `activity` and every project and task below it consistent with their intervals.

    Traverses in post-order so that children are always recomputed before the
    project reading them. Childless projects and tasks get the empty period.

    Args:
        activity: Root of the subtree to recompute
    """
    # Each project is pushed once to expand its children and once more to fold them
    stack: list[tuple[Activity, bool]] = [(activity, False)]
    count = 0
    while stack:
        node, expanded = stack.pop()
        match node.kind:
            case ActivityKind.PROJECT if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node.children))
                continue
            case ActivityKind.PROJECT | ActivityKind.TASK:
                refresh(node)
                count += 1

    logger.debug(f"Recomputed {count} activities under {activity.name or 'root'!r}")


def recompute_upwards(activity: Activity):
    """
    Restore consistency after `activity` or something below it changed.

    Recomputes the subtree of `activity`, then refreshes each ancestor up to the root.
    """
    recompute(activity)
    for ancestor in activity.ancestors():
        refresh(ancestor)


class ConsistencyEngine:
    """
    Keeps the derived periods of an activity tree in sync with its intervals.
    The tree is mutated in place; callers must not edit it while this runs.
    """

    def recompute(self, activity: Activity):
        recompute(activity)

    def recompute_upwards(self, activity: Activity):
        recompute_upwards(activity)

    def refresh(self, activity: Activity):
        refresh(activity)
