"""Error types raised by scraperx."""

from typing import Any


class ScraperXError(Exception):
    """Base class for all scraperx errors."""


class MalformedSelectorError(ScraperXError, ValueError):
    """Selector string could not be compiled into a directive."""

    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        self.reason = reason
        super().__init__(f"Malformed selector {selector!r}: {reason}")


class UnknownFilterError(ScraperXError, LookupError):
    """Filter name is not present in any active registry."""

    def __init__(self, name: str, selector: str | None = None) -> None:
        self.name = name
        self.selector = selector
        message = f"Unknown filter {name!r}"
        if selector is not None:
            message += f" in selector {selector!r}"
        super().__init__(message)


class FetchError(ScraperXError):
    """Page could not be fetched.

    When raised out of a crawl, ``partial_records`` holds the records
    accumulated before the failure.
    """

    def __init__(
        self,
        url: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.partial_records: list[dict[str, Any]] = []
        super().__init__(f"{message} | url={url}")
