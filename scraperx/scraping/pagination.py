"""Pagination handling for multi-page extraction."""

import inspect
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Mapping, Protocol
from urllib.parse import urljoin

from bs4 import Tag

from scraperx.core.exceptions import FetchError
from scraperx.monitoring.logger import get_logger, log_page_event

from .fetcher import is_absolute_url
from .parser import DOMParser
from .scanner import Record, RecordScanner

logger = get_logger(__name__)

UNBOUNDED = -1


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class CrawlStage(str, Enum):
    """Crawl state machine stages."""

    FETCHED = "fetched"  # Current page document is available
    SCANNED = "scanned"  # Records of the current page accumulated
    LINK_RESOLVED = "link_resolved"  # Next page URL looked up
    DONE = "done"


@dataclass
class CrawlState:
    """State of one in-flight crawl."""

    records: list[Record] = field(default_factory=list)
    current_page: int = 1
    next_page_url: str | None = None
    page_url: str | None = None
    stage: CrawlStage = CrawlStage.FETCHED


PageSource = str | DOMParser | Tag


def validate_max_pages(max_pages: int) -> int:
    if max_pages != UNBOUNDED and max_pages < 1:
        raise ValueError(f"max_pages must be -1 (unbounded) or >= 1, got {max_pages}")
    return max_pages


class PaginationCrawler:
    """Sequential fetch -> scan -> next-link crawl.

    By default the next-page link is resolved from the *first* document on
    every cycle, not from the page just scanned. Sites whose "next" link
    differs per page will keep fetching page 2; pass
    ``resolve_from_current_page=True`` to follow the link of each page.
    """

    def __init__(
        self,
        scanner: RecordScanner,
        fetcher: PageFetcher,
        parse: Callable[[str, str | None], DOMParser] | None = None,
        resolve_from_current_page: bool = False,
    ) -> None:
        """Initialize crawler.

        Args:
            scanner: Record scanner run on every page
            fetcher: Object with ``async fetch(url) -> str``
            parse: Builds a DOMParser from (html, url)
            resolve_from_current_page: Look up the next link on the current
                page instead of the first page
        """
        self.scanner = scanner
        self.fetcher = fetcher
        self.parse = parse or (lambda html, url: DOMParser(html, url=url))
        self.resolve_from_current_page = resolve_from_current_page

    @staticmethod
    def _root(document: DOMParser | Tag) -> Tag:
        return document.root if isinstance(document, DOMParser) else document

    def _to_document(self, source: PageSource, base_url: str | None) -> DOMParser | Tag:
        if isinstance(source, str):
            return self.parse(source, base_url)
        return source

    @staticmethod
    def _absolute(link: str, base_url: str | None) -> str:
        if is_absolute_url(link) or not base_url:
            return link
        return urljoin(base_url, link)

    async def crawl(
        self,
        source: PageSource,
        link_selector: str,
        scope: str | None,
        field_map: Mapping[str, str],
        max_pages: int = UNBOUNDED,
        base_url: str | None = None,
        on_page: Callable[[int, list[Record]], Awaitable[None] | None] | None = None,
    ) -> list[Record]:
        """Crawl pages until the next link runs out or the budget is spent.

        With ``max_pages=-1`` the crawl only stops when the link selector
        yields nothing, which may never happen.

        Args:
            source: First page as HTML text, DOMParser or bs4 node
            link_selector: Selector-DSL string yielding the next page URL
            scope: Scope selector for the records
            field_map: Output field name -> selector-DSL string
            max_pages: Page budget, -1 for unbounded
            base_url: URL of the first page, for relative next links
            on_page: Optional callback(page, records) after each scan

        Returns:
            Records from all pages in crawl order

        Raises:
            FetchError: If a page fetch fails; ``partial_records`` holds the
                records accumulated so far
        """
        validate_max_pages(max_pages)
        link_directive = self.scanner.extractor.compile(link_selector)

        state = CrawlState(page_url=base_url)
        first = current = self._to_document(source, base_url)
        first_url = base_url

        while state.stage is not CrawlStage.DONE:
            if state.stage is CrawlStage.FETCHED:
                start_time = time.time()
                records = self.scanner.scan(self._root(current), scope, field_map)
                state.records.extend(records)
                state.stage = CrawlStage.SCANNED
                log_page_event(state.page_url, state.current_page, len(records), time.time() - start_time)

                if on_page is not None:
                    result = on_page(state.current_page, records)
                    if inspect.isawaitable(result):
                        await result

            elif state.stage is CrawlStage.SCANNED:
                if self.resolve_from_current_page:
                    link_document, link_base = current, state.page_url
                else:
                    link_document, link_base = first, first_url

                link = self.scanner.extractor.extract(self._root(link_document), link_directive)
                link = str(link).strip() if link is not None else ""
                state.next_page_url = self._absolute(link, link_base) if link else None
                state.stage = CrawlStage.LINK_RESOLVED

            elif state.stage is CrawlStage.LINK_RESOLVED:
                if not state.next_page_url:
                    logger.info(f"No next page link after page {state.current_page}")
                    state.stage = CrawlStage.DONE
                elif max_pages != UNBOUNDED and state.current_page >= max_pages:
                    logger.info(f"Page budget reached | max_pages={max_pages}")
                    state.stage = CrawlStage.DONE
                else:
                    current = await self._fetch_page(state)
                    state.stage = CrawlStage.FETCHED

        logger.info(f"Crawl finished | pages={state.current_page} | records={len(state.records)}")
        return state.records

    async def _fetch_page(self, state: CrawlState) -> DOMParser:
        url = state.next_page_url
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as e:
            e.partial_records = list(state.records)
            logger.warning(f"Crawl aborted at page {state.current_page + 1} | {e}")
            raise

        state.current_page += 1
        state.page_url = url
        return self.parse(html, url)
