"""
Configuration constants for the timetracker core.
Centralized defaults for tree generation, naming, and logging.
"""

from pathlib import Path

# Time resolution
MILLIS_PER_SECOND = 1000

# Random Tree Defaults
DEFAULT_LEVELS = 3
DEFAULT_MAX_CHILD_ACTIVITIES = 4
DEFAULT_MAX_INTERVALS = 5
DEFAULT_PROJECT_RATIO = 0.5  # 0 = only tasks, 1 = only projects
DEFAULT_MIN_INTERVAL_SECONDS = 60  # 1 minute
DEFAULT_MAX_INTERVAL_SECONDS = 4 * 3600  # 4 hours
DEFAULT_SEED = 0

# Generated Names
PROJECT_PREFIX = "P "
TASK_PREFIX = "T "
NAME_RANGE = 1000  # names of up to 3 digits
DESCRIPTION_RANGE = 2 ** 63  # non-negative 63-bit integers

# Logging
LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "timetracker.log"
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
