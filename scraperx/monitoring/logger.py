"""Centralized logging configuration using Loguru."""

import sys
from typing import Any

from loguru import logger

from scraperx.core.config import settings


def setup_logging() -> None:
    """Configure Loguru logging for applications using scraperx.

    The library never calls this on import; applications opt in.
    """
    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message} | "
        "{extra}"
    )

    logger.add(
        sys.stderr,
        format=console_format,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if settings.log_to_file:
        logs_dir = settings.logs_dir
        logger.add(
            logs_dir / "scraperx_{time:YYYY-MM-DD}.log",
            format=file_format,
            level="DEBUG",
            rotation="00:00",  # Rotate at midnight
            retention="14 days",
            compression="gz",
            backtrace=True,
            diagnose=settings.debug,
        )

        # Structured page/fetch events for log aggregation
        logger.add(
            logs_dir / "scraperx_{time:YYYY-MM-DD}.json",
            format="{message}",
            level="INFO",
            rotation="00:00",
            retention="14 days",
            compression="gz",
            serialize=True,
        )

    logger.info(f"Logging initialized | level={settings.log_level} | files={settings.log_to_file}")


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


def log_page_event(
    url: str | None,
    page: int,
    items_count: int,
    duration: float,
    success: bool = True,
    **extra: Any,
) -> None:
    """Log one scanned crawl page.

    Args:
        url: Page URL (None for caller-supplied HTML)
        page: Page number, starting at 1
        items_count: Number of records kept from the page
        duration: Scan duration in seconds
        success: Whether the page was scanned
        **extra: Additional context
    """
    status = "SUCCESS" if success else "FAILED"
    log_func = logger.info if success else logger.warning

    log_func(
        f"Page scanned | page={page} | url={url or '<inline>'} | items={items_count} | "
        f"status={status} | duration={duration:.2f}s",
        url=url,
        page=page,
        items_count=items_count,
        duration=duration,
        success=success,
        **extra,
    )


def log_fetch_event(
    url: str,
    status_code: int | None,
    duration: float,
    success: bool = True,
    **extra: Any,
) -> None:
    """Log one HTTP fetch.

    Args:
        url: Requested URL
        status_code: HTTP status, None if no response arrived
        duration: Request duration in seconds
        success: Whether the body was returned
        **extra: Additional context
    """
    status = "SUCCESS" if success else "FAILED"
    log_func = logger.debug if success else logger.warning

    log_func(
        f"Fetch | url={url} | code={status_code} | status={status} | duration={duration:.2f}s",
        url=url,
        status_code=status_code,
        duration=duration,
        success=success,
        **extra,
    )
