"""Scraping module - Selector DSL, extraction, pagination, fetching."""

from .engine import Scraper, ScraperConfig, crawl, crawl_url, find, find_url
from .extractor import FieldExtractor
from .fetcher import HTTPFetcher
from .pagination import CrawlStage, CrawlState, PaginationCrawler
from .parser import DOMParser
from .scanner import RecordScanner
from .selector import (
    LEGACY_SELF_REFERENCE,
    MODE_HTML,
    MODE_TEXT,
    SELF_REFERENCE,
    FilterInvocation,
    SelectorDirective,
    compile_selector,
)

__all__ = [
    "Scraper",
    "ScraperConfig",
    "find",
    "find_url",
    "crawl",
    "crawl_url",
    "FieldExtractor",
    "HTTPFetcher",
    "PaginationCrawler",
    "CrawlStage",
    "CrawlState",
    "DOMParser",
    "RecordScanner",
    "SelectorDirective",
    "FilterInvocation",
    "compile_selector",
    "SELF_REFERENCE",
    "LEGACY_SELF_REFERENCE",
    "MODE_TEXT",
    "MODE_HTML",
]
