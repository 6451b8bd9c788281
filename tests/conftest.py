"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ["SCRAPERX_DEBUG"] = "true"
os.environ["SCRAPERX_LOG_TO_FILE"] = "false"

from scraperx.cleaning.filters import BUILTIN_FILTERS  # noqa: E402
from scraperx.cleaning.registry import default_registry  # noqa: E402
from scraperx.core.exceptions import FetchError  # noqa: E402


@pytest.fixture(autouse=True)
def restore_global_filters():
    """Keep global filter changes from leaking between tests."""
    yield
    default_registry.replace(BUILTIN_FILTERS)


class FakeFetcher:
    """In-memory page fetcher recording every requested URL."""

    def __init__(self, pages: dict[str, str] | None = None, fail_on: set[str] | None = None):
        self.pages = pages or {}
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.fail_on or url not in self.pages:
            raise FetchError(url, "HTTP 404", status_code=404)
        return self.pages[url]


@pytest.fixture
def fake_fetcher():
    """Factory for in-memory fetchers."""
    return FakeFetcher


@pytest.fixture
def items_html():
    """Simple list of items."""
    return '<ul><li class="item">A</li><li class="item">B</li></ul>'


@pytest.fixture
def products_html():
    """Product listing page."""
    return """
    <html>
      <head><title>Books</title></head>
      <body>
        <article class="product" data-id="1">
          <h3><a href="/book-one" title="Book One">Book One</a></h3>
          <p class="price"> £19.99 </p>
          <p class="stock instock">In stock</p>
        </article>
        <article class="product" data-id="2">
          <h3><a href="/book-two" title="Book Two">Book Two</a></h3>
          <p class="price">£24.99</p>
        </article>
        <article class="product" data-id="3">
          <span class="ad">Sponsored</span>
        </article>
        <ul class="pager"><li class="next"><a href="page-2.html">next</a></li></ul>
      </body>
    </html>
    """


def make_page(items: list[str], next_href: str | None = None) -> str:
    """Build a listing page with optional next link."""
    rows = "".join(f'<div class="row"><span class="name">{item}</span></div>' for item in items)
    pager = f'<a class="next" href="{next_href}">next</a>' if next_href else ""
    return f"<html><body>{rows}{pager}</body></html>"


@pytest.fixture
def page_factory():
    """Factory for listing pages."""
    return make_page
