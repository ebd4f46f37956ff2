"""Viewer state: topic cache, view mode and progress."""

from .catalog import TopicCatalog
from .progress import ProgressTracker
from .session import TopicNotFoundError, ViewerSession
from .view_mode import CYCLE_ORDER, ViewModeController

__all__ = [
    "TopicCatalog",
    "ProgressTracker",
    "TopicNotFoundError",
    "ViewerSession",
    "CYCLE_ORDER",
    "ViewModeController",
]
