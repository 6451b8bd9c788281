"""Monitoring module - Logging."""

from .logger import get_logger, log_fetch_event, log_page_event, setup_logging

__all__ = ["setup_logging", "get_logger", "log_page_event", "log_fetch_event"]
