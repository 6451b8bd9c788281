"""Books to Scrape example.

This example demonstrates:
- Selector DSL fields with attribute modes and filters
- Custom instance filters next to the built-in ones
- Following "next" links with a page budget

Usage:
    python -m examples.books_scraper.run
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scraperx import FetchError, Scraper, ScraperConfig, setup_logging
from scraperx.monitoring.logger import get_logger

logger = get_logger(__name__)

# Configuration
START_URL = "https://books.toscrape.com/catalogue/page-1.html"
MAX_PAGES = 5

FIELDS = {
    "title": "h3 a@title",
    "price": "p.price_color|price:GBP",
    "availability": "p.availability|squish",
    "rating": "p.star-rating@class|rating",
    "image": "div.image_container img@src|url:https://books.toscrape.com/catalogue/",
    "link": "h3 a@href|url:https://books.toscrape.com/catalogue/",
}

RATING_MAP = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
}


def extract_rating(class_attr: str | None) -> int:
    """Extract star rating from a class string like "star-rating Three"."""
    if not class_attr:
        return 0

    for word in class_attr.lower().split():
        if word in RATING_MAP:
            return RATING_MAP[word]
    return 0


async def run_scraper() -> list[dict]:
    """Crawl the catalogue, following each page's own next link."""
    setup_logging()

    scraper = Scraper(
        ScraperConfig(
            filters={"rating": extract_rating},
            resolve_links_from_current_page=True,
        )
    )

    try:
        books = await scraper.crawl_url(
            START_URL,
            "li.next a@href",
            "article.product_pod",
            FIELDS,
            max_pages=MAX_PAGES,
        )
    except FetchError as e:
        logger.error(f"Crawl failed: {e}")
        books = e.partial_records

    logger.info("=" * 60)
    logger.info(f"Scraped {len(books)} books")
    for book in books[:5]:
        stars = "*" * book["rating"] + "." * (5 - book["rating"])
        price = f"{book['price']:.2f} GBP" if book["price"] is not None else "n/a"
        logger.info(f"  [{stars}] {book['title'][:40]} - {price}")
    logger.info("=" * 60)

    return books


if __name__ == "__main__":
    items = asyncio.run(run_scraper())
    print(f"\nSuccessfully scraped {len(items)} books")
