"""scraperx - HTML extraction with a compact selector DSL and pagination."""

from scraperx.cleaning import BUILTIN_FILTERS, FilterRegistry, get_global_filters, set_global_filters
from scraperx.core import FetchError, MalformedSelectorError, ScraperXError, UnknownFilterError, settings
from scraperx.monitoring import setup_logging
from scraperx.scraping import (
    DOMParser,
    FilterInvocation,
    Scraper,
    ScraperConfig,
    SelectorDirective,
    compile_selector,
    crawl,
    crawl_url,
    find,
    find_url,
)

__version__ = "1.0.0"

__all__ = [
    "Scraper",
    "ScraperConfig",
    "find",
    "find_url",
    "crawl",
    "crawl_url",
    "compile_selector",
    "SelectorDirective",
    "FilterInvocation",
    "DOMParser",
    "FilterRegistry",
    "BUILTIN_FILTERS",
    "set_global_filters",
    "get_global_filters",
    "ScraperXError",
    "MalformedSelectorError",
    "UnknownFilterError",
    "FetchError",
    "settings",
    "setup_logging",
]
