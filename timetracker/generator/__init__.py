"""Generator package for reproducible random activity trees."""

from .random_date import RandomDate
from .random_tree import RandomTreeGenerator, generate, round_half_up
from .settings import TreeSettings
