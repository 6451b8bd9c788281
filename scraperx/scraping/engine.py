"""Main scraping facade combining all components."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from bs4 import Tag

from scraperx.cleaning.filters import FilterFunc
from scraperx.cleaning.registry import FilterChain, FilterRegistry, default_registry
from scraperx.core.config import settings
from scraperx.monitoring.logger import get_logger

from .extractor import FieldExtractor
from .fetcher import HTTPFetcher
from .pagination import PageFetcher, PageSource, PaginationCrawler
from .parser import DOMParser
from .scanner import Record, RecordScanner

logger = get_logger(__name__)


@dataclass
class ScraperConfig:
    """Per-scraper configuration.

    Unset options fall back to ``settings`` when the scraper is built.
    """

    filters: Mapping[str, FilterFunc] = field(default_factory=dict)
    global_filters: FilterRegistry | None = None  # None means the process default registry
    drop_empty: bool | None = None
    strict_filters: bool | None = None
    html_parser: str | None = None
    resolve_links_from_current_page: bool = False


class Scraper:
    """Selector-DSL scraper over HTML strings, parsed documents or URLs.

    Example:
        >>> scraper = Scraper()
        >>> scraper.set_filters({"currency": lambda v, code: f"{v} {code}"})
        >>> scraper.find(html, ".product", {"name": "h3", "price": ".price|currency:USD"})
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        fetcher: PageFetcher | None = None,
    ) -> None:
        """Initialize scraper.

        Args:
            config: Scraper configuration
            fetcher: Page fetcher (defaults to HTTPFetcher)
        """
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or HTTPFetcher()

        self._filters = FilterRegistry(self.config.filters)
        global_filters = self.config.global_filters
        self._chain = FilterChain(
            self._filters,
            global_filters if global_filters is not None else default_registry,
        )

        strict = self.config.strict_filters
        self.extractor = FieldExtractor(
            self._chain,
            strict_filters=settings.strict_filters if strict is None else strict,
        )
        self.scanner = RecordScanner(self.extractor, drop_empty=self.config.drop_empty)
        self.crawler = PaginationCrawler(
            self.scanner,
            self.fetcher,
            parse=self.parse,
            resolve_from_current_page=self.config.resolve_links_from_current_page,
        )

    @property
    def filters(self) -> FilterChain:
        return self._chain

    def set_filters(self, filters: Mapping[str, FilterFunc]) -> None:
        """Replace this scraper's own filters (looked up before global ones)."""
        self._filters.replace(filters)

    def parse(self, html: str, url: str | None = None) -> DOMParser:
        return DOMParser(html, parser=self.config.html_parser, url=url)

    def _root(self, source: PageSource) -> Tag:
        if isinstance(source, str):
            return self.parse(source).root
        if isinstance(source, DOMParser):
            return source.root
        return source

    def find(
        self,
        source: PageSource,
        scope: str,
        field_map: Mapping[str, str] | None = None,
    ) -> list[Record] | Any:
        """Extract a single value, or records when ``field_map`` is given.

        Args:
            source: HTML text, DOMParser or bs4 node
            scope: Selector-DSL string (single value) or scope selector
            field_map: Output field name -> selector-DSL string

        Returns:
            Extracted value, or list of records
        """
        return self.scanner.scan(self._root(source), scope, field_map)

    async def find_url(
        self,
        url: str,
        scope: str,
        field_map: Mapping[str, str] | None = None,
    ) -> list[Record] | Any:
        """Fetch ``url`` and run :meth:`find` on it."""
        html = await self.fetcher.fetch(url)
        return self.find(self.parse(html, url), scope, field_map)

    async def crawl(
        self,
        source: PageSource,
        link_selector: str,
        scope: str | None,
        field_map: Mapping[str, str],
        max_pages: int | None = None,
        base_url: str | None = None,
    ) -> list[Record]:
        """Extract records across pages by following ``link_selector``.

        Args:
            source: First page as HTML text, DOMParser or bs4 node
            link_selector: Selector-DSL string yielding the next page URL
            scope: Scope selector for the records
            field_map: Output field name -> selector-DSL string
            max_pages: Page budget, -1 for unbounded (may never stop);
                defaults to ``settings.default_max_pages``
            base_url: URL of the first page, for relative next links

        Returns:
            Records from all crawled pages
        """
        if max_pages is None:
            max_pages = settings.default_max_pages
        if base_url is None and isinstance(source, DOMParser):
            base_url = source.url

        return await self.crawler.crawl(
            source,
            link_selector,
            scope,
            field_map,
            max_pages=max_pages,
            base_url=base_url,
        )

    async def crawl_url(
        self,
        url: str,
        link_selector: str,
        scope: str | None,
        field_map: Mapping[str, str],
        max_pages: int | None = None,
    ) -> list[Record]:
        """Fetch ``url`` and run :meth:`crawl` starting from it."""
        logger.info(f"Starting crawl: {url}")
        html = await self.fetcher.fetch(url)
        return await self.crawl(self.parse(html, url), link_selector, scope, field_map, max_pages=max_pages)


def find(
    source: PageSource,
    scope: str,
    field_map: Mapping[str, str] | None = None,
) -> list[Record] | Any:
    """Module-level :meth:`Scraper.find` using global filters only."""
    return Scraper().find(source, scope, field_map)


async def find_url(
    url: str,
    scope: str,
    field_map: Mapping[str, str] | None = None,
) -> list[Record] | Any:
    return await Scraper().find_url(url, scope, field_map)


async def crawl(
    source: PageSource,
    link_selector: str,
    scope: str | None,
    field_map: Mapping[str, str],
    max_pages: int | None = None,
    base_url: str | None = None,
) -> list[Record]:
    """Module-level :meth:`Scraper.crawl` using global filters only."""
    return await Scraper().crawl(source, link_selector, scope, field_map, max_pages, base_url)


async def crawl_url(
    url: str,
    link_selector: str,
    scope: str | None,
    field_map: Mapping[str, str],
    max_pages: int | None = None,
) -> list[Record]:
    return await Scraper().crawl_url(url, link_selector, scope, field_map, max_pages)
