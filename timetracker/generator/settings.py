"""
Shape parameters of a randomly generated activity tree.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..config import (
    DEFAULT_LEVELS,
    DEFAULT_MAX_CHILD_ACTIVITIES,
    DEFAULT_MAX_INTERVALS,
    DEFAULT_PROJECT_RATIO,
    DEFAULT_MIN_INTERVAL_SECONDS,
    DEFAULT_MAX_INTERVAL_SECONDS,
)
from ..errors import InvalidArgumentError
from ..logger import setup_logger
from ..models import as_instant

logger = setup_logger(__name__)


class TreeSettings(BaseModel):
    """
    Size and content of a random tree.

    Attributes:
        levels: Number of activity levels below the root
        max_child_activities_per_project: Upper bound of children drawn per project
        max_intervals_per_task: Upper bound of intervals drawn per task
        project_ratio: Probability that a new child is a project (0 = only tasks, 1 = only projects)
        start_date: Earliest interval start
        end_date: Latest interval end
        min_interval_duration_sec: Shortest interval before clamping, in seconds
        max_interval_duration_sec: Longest interval, in seconds
    """
    model_config = ConfigDict(frozen=True)

    levels: int = Field(default=DEFAULT_LEVELS, ge=0)
    max_child_activities_per_project: int = Field(default=DEFAULT_MAX_CHILD_ACTIVITIES, ge=0)
    max_intervals_per_task: int = Field(default=DEFAULT_MAX_INTERVALS, ge=0)
    project_ratio: float = Field(default=DEFAULT_PROJECT_RATIO, ge=0.0, le=1.0)
    start_date: datetime
    end_date: datetime
    min_interval_duration_sec: int = Field(default=DEFAULT_MIN_INTERVAL_SECONDS, ge=0)
    max_interval_duration_sec: int = Field(default=DEFAULT_MAX_INTERVAL_SECONDS, ge=0)

    @model_validator(mode='after')
    def check_ranges(self) -> 'TreeSettings':
        if as_instant(self.end_date) < as_instant(self.start_date):
            raise ValueError(f"end_date {self.end_date} is before start_date {self.start_date}")
        if self.max_interval_duration_sec < self.min_interval_duration_sec:
            raise ValueError(
                f"max_interval_duration_sec {self.max_interval_duration_sec} is below "
                f"min_interval_duration_sec {self.min_interval_duration_sec}"
            )
        return self

    @classmethod
    def create(cls, **kwargs) -> 'TreeSettings':
        """
        Build validated settings.

        Raises:
            InvalidArgumentError: If any parameter is out of its domain
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            logger.error(f"Invalid tree settings: {e.error_count()} error(s)")
            raise InvalidArgumentError(f"Invalid tree settings: {e}") from e
