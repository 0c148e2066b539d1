"""
Logging configuration for the timetracker core.
Provides centralized logging setup.
"""

import logging
import sys

from .config import LOG_DIR, LOG_FILE_NAME, LOG_LEVEL, LOG_FORMAT


def setup_logger(name: str) -> logging.Logger:
    """
    Set up a logger with both file and console handlers.
    
    Args:
        name: Name of the logger (typically __name__)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, LOG_LEVEL))
    
    # Close and remove existing handlers to avoid duplicates
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    
    # File handler - detailed logs
    LOG_DIR.mkdir(exist_ok=True)
    file_handler = logging.FileHandler(LOG_DIR / LOG_FILE_NAME)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    
    # Console handler - INFO and above
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    
    return logger


def log_tree_stats(root, logger: logging.Logger, name: str = "Tree"):
    """Log statistics about an activity tree."""
    from .models import ActivityKind, iter_activities

    projects = tasks = intervals = 0
    for activity in iter_activities(root):
        if activity.kind is ActivityKind.PROJECT:
            projects += 1
        else:
            tasks += 1
            intervals += len(activity.intervals)

    period = root.time_period
    if period.is_empty:
        logger.warning(f"{name}: {projects} projects, {tasks} tasks, no intervals")
        return

    logger.info(
        f"{name}: {projects} projects, "
        f"{tasks} tasks, "
        f"{intervals} intervals, "
        f"span: {period.start} to {period.end}, "
        f"duration: {period.duration}s"
    )
