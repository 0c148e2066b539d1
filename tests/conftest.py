"""
Pytest configuration and fixtures
"""
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
FIXTURES_DIR = Path(__file__).parent / "fixtures"
sys.path.insert(0, str(project_root))

from timetracker.consistency import recompute
from timetracker.models import Interval, Project, Task, TimePeriod


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def load_fixture(name: str) -> dict:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def scenario_params():
    """Parameters of the reference scenario."""
    return {
        "levels": 2,
        "max_child_activities_per_project": 2,
        "max_intervals_per_task": 3,
        "project_ratio": 0.0,
        "start_date": utc(2020, 1, 1),
        "end_date": utc(2020, 1, 2),
        "min_interval_duration_sec": 60,
        "max_interval_duration_sec": 3600,
        "seed": 42,
    }


@pytest.fixture(scope="session")
def golden_snapshot():
    """Expected tree of the reference scenario."""
    return load_fixture("scenario_seed42.json")


@pytest.fixture(scope="session")
def mixed_params():
    """A small mixed shape whose seed yields nested projects and a clamped interval."""
    return {
        "levels": 3,
        "max_child_activities_per_project": 3,
        "max_intervals_per_task": 3,
        "project_ratio": 0.5,
        "start_date": utc(2020, 1, 1),
        "end_date": utc(2020, 1, 2),
        "min_interval_duration_sec": 3600,
        "max_interval_duration_sec": 8 * 3600,
        "seed": 14,
    }


@pytest.fixture(scope="session")
def mixed_snapshot():
    """Expected tree of the mixed shape."""
    return load_fixture("mixed_seed14.json")


@pytest.fixture
def shape_params():
    """A larger mixed tree shape."""
    return {
        "levels": 4,
        "max_child_activities_per_project": 4,
        "max_intervals_per_task": 5,
        "project_ratio": 0.5,
        "start_date": utc(2021, 3, 1),
        "end_date": utc(2021, 3, 8),
        "min_interval_duration_sec": 300,
        "max_interval_duration_sec": 6 * 3600,
    }


@pytest.fixture
def sample_tree():
    """
    Small hand-built tree:

        root
        ├── A
        │   ├── a1: 09:00-10:00 (3600s), 09:30-11:00 (5400s)
        │   └── a2: no intervals
        ├── b: 13:00-13:30 (1800s)
        └── C: no children
    """
    root = Project()
    a = Project("A", "first project", root)
    a1 = Task("a1", "overlapping intervals", a)
    first = Interval(a1, TimePeriod(utc(2022, 5, 2, 9, 0), utc(2022, 5, 2, 10, 0), 3600))
    second = Interval(a1, TimePeriod(utc(2022, 5, 2, 9, 30), utc(2022, 5, 2, 11, 0), 5400))
    a2 = Task("a2", "", a)
    b = Task("b", "", root)
    third = Interval(b, TimePeriod(utc(2022, 5, 2, 13, 0), utc(2022, 5, 2, 13, 30), 1800))
    c = Project("C", "", root)
    recompute(root)
    return {
        "root": root,
        "A": a,
        "a1": a1,
        "a2": a2,
        "b": b,
        "C": c,
        "intervals": [first, second, third],
    }
