"""
Unit tests for TreeService
"""
import gc

import pytest
import pandas as pd
from datetime import datetime, timedelta, timezone

from timetracker.errors import InvalidArgumentError, StructuralViolationError
from timetracker.models import Project, Task
from timetracker.services import TreeService
from timetracker.services.tree_service import DATAFRAME_COLUMNS

UTC = timezone.utc


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2022, 5, 2, hour, minute, tzinfo=UTC)


@pytest.mark.unit
class TestTreeService:
    """Test TreeService class."""

    @pytest.fixture
    def service(self, sample_tree):
        return TreeService(sample_tree["root"])

    def test_initialization(self):
        """Test a new service starts from an empty root."""
        service = TreeService()

        assert service.root.children == ()
        assert service.root.time_period.is_empty

    def test_non_root_rejected(self, sample_tree):
        """Test the service must wrap a whole tree."""
        with pytest.raises(StructuralViolationError):
            TreeService(sample_tree["A"])

    def test_add_interval_updates_ancestors(self, service, sample_tree):
        """Test adding an interval recomputes the chain up to the root."""
        service.add_interval(sample_tree["a2"], at(18), at(19, 30))

        assert sample_tree["a2"].time_period.duration == 5400
        assert sample_tree["A"].time_period.end == at(19, 30)
        assert service.root.time_period.end == at(19, 30)
        assert service.root.time_period.duration == 9000 + 1800 + 5400

    def test_add_interval_explicit_duration(self, service, sample_tree):
        """Test an explicit duration is kept instead of the span."""
        interval = service.add_interval(sample_tree["b"], at(14), at(16), duration=600)

        assert interval.time_period.duration == 600
        assert sample_tree["b"].time_period.duration == 1800 + 600

    def test_add_interval_reversed(self, service, sample_tree):
        """Test an interval ending before it starts is rejected."""
        with pytest.raises(InvalidArgumentError):
            service.add_interval(sample_tree["b"], at(16), at(14))

        assert len(sample_tree["b"].intervals) == 1

    def test_add_interval_to_project_rejected(self, service, sample_tree):
        """Test intervals cannot be recorded on a project."""
        with pytest.raises(StructuralViolationError):
            service.add_interval(sample_tree["C"], at(9), at(10))

    def test_add_project_and_task(self, service, sample_tree):
        """Test new activities are empty and appended in order."""
        project = service.add_project(sample_tree["C"], "P new", "desc")
        task = service.add_task(project, "T new")

        assert isinstance(project, Project)
        assert isinstance(task, Task)
        assert sample_tree["C"].children == (project,)
        assert task.parent is project
        assert task.time_period.is_empty
        assert sample_tree["C"].time_period.is_empty

    def test_add_task_under_task_rejected(self, service, sample_tree):
        """Test tasks cannot hold other tasks."""
        with pytest.raises(StructuralViolationError):
            service.add_task(sample_tree["b"], "T nested")

    def test_set_interval_period(self, service, sample_tree):
        """Test changing an interval recomputes its ancestors."""
        interval = sample_tree["intervals"][2]

        service.set_interval_period(interval, at(13), at(23))

        assert sample_tree["b"].time_period.duration == 36000
        assert service.root.time_period.end == at(23)

    def test_remove_interval(self, service, sample_tree):
        """Test removing an interval recomputes its task."""
        service.remove(sample_tree["intervals"][0])

        assert sample_tree["a1"].time_period.start == at(9, 30)
        assert service.root.time_period.start == at(9, 30)
        assert service.root.time_period.duration == 5400 + 1800

    def test_remove_project(self, service, sample_tree):
        """Test removing a project drops its whole subtree."""
        service.remove(sample_tree["A"])

        assert [child.name for child in service.root.children] == ["b", "C"]
        assert service.root.time_period.start == at(13)
        assert service.root.time_period.duration == 1800

    def test_remove_last_content(self, service, sample_tree):
        """Test removing everything leaves the empty period on the root."""
        for child in service.root.children:
            service.remove(child)

        assert service.root.time_period.is_empty

    def test_remove_root_rejected(self, service):
        """Test the root cannot be removed."""
        with pytest.raises(StructuralViolationError):
            service.remove(service.root)

    def test_find(self, service, sample_tree):
        """Test find by name."""
        assert service.find("a1") == [sample_tree["a1"]]
        assert service.find("missing") == []

    def test_walk(self, service):
        """Test walk yields activities and intervals in pre-order."""
        paths = ["/".join(path) for path, _ in service.walk()]

        assert paths == ["", "A", "A/a1", "A/a1/#0", "A/a1/#1", "A/a2", "b", "b/#0", "C"]

    def test_to_dataframe(self, service):
        """Test the flat view of the tree."""
        df = service.to_dataframe()

        assert list(df.columns) == DATAFRAME_COLUMNS
        assert len(df) == 9
        assert df["kind"].value_counts().to_dict() == {"interval": 3, "task": 3, "project": 3}
        assert df.loc[df["path"] == "", "duration_seconds"].item() == 10800
        assert df.loc[df["path"] == "A/a1", "start"].item() == pd.Timestamp("2022-05-02 09:00", tz="UTC")

    def test_to_dataframe_empty_periods(self, service):
        """Test empty periods show as NaT rather than as sentinel dates."""
        df = service.to_dataframe()
        empty = df[df["is_empty"]]

        assert sorted(empty["path"]) == ["A/a2", "C"]
        assert empty["start"].isna().all()
        assert empty["end"].isna().all()
        assert (empty["duration_seconds"] == 0).all()
        assert df.loc[~df["is_empty"], "start"].notna().all()

    def test_snapshot(self, service):
        """Test the nested view of the tree."""
        snapshot = service.snapshot()

        assert snapshot["kind"] == "project"
        assert [child["name"] for child in snapshot["children"]] == ["A", "b", "C"]
        assert snapshot["children"][1]["intervals"] == [{
            "start": "2022-05-02T13:00:00.000+00:00",
            "end": "2022-05-02T13:30:00.000+00:00",
            "duration": 1800,
        }]
        assert snapshot["children"][2]["time_period"] == {"start": None, "end": None, "duration": 0}

    def test_add_interval_rounds_default_duration(self, service, sample_tree):
        """Test the default duration rounds the span half up."""
        start = at(14)
        longer = service.add_interval(sample_tree["b"], start, start + timedelta(milliseconds=1500))
        shorter = service.add_interval(sample_tree["b"], start, start + timedelta(milliseconds=1400))

        assert longer.time_period.duration == 2
        assert shorter.time_period.duration == 1

    def test_edit_interval_of_removed_task(self, service, sample_tree):
        """Test an interval kept after its task was removed can still be edited."""
        interval = sample_tree["intervals"][2]
        service.remove(sample_tree["b"])
        del sample_tree["b"]
        gc.collect()

        service.set_interval_period(interval, at(20), at(21))

        assert interval.task.name == "b"
        assert interval.task.time_period.end == at(21)
        assert service.root.time_period.end == at(11)
