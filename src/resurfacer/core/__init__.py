"""
Resurfacer Core
===============
Scheduling, configuration and error types shared by every other package.

The due-scan loop and the saved-item library live in
``resurfacer.core.due_scan`` and ``resurfacer.core.library``; they depend on
the feed and storage packages and are imported from there directly.
"""

from .exceptions import (
    ResurfacerError,
    StorageError,
    ConfigurationError,
    ItemNotFoundError,
    DuplicateItemError,
)
from .config import ResurfacerConfig, get_config, load_config, reset_config
from .constants import ReviewOutcome, RescheduleMode
from .review import ReviewScheduler, SavedItem

__all__ = [
    "ResurfacerError",
    "StorageError",
    "ConfigurationError",
    "ItemNotFoundError",
    "DuplicateItemError",
    "ResurfacerConfig",
    "get_config",
    "load_config",
    "reset_config",
    "ReviewOutcome",
    "RescheduleMode",
    "ReviewScheduler",
    "SavedItem",
]
