"""Core module - Configuration and error types."""

from .config import Settings, get_settings, settings
from .exceptions import FetchError, MalformedSelectorError, ScraperXError, UnknownFilterError

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "ScraperXError",
    "MalformedSelectorError",
    "UnknownFilterError",
    "FetchError",
]
