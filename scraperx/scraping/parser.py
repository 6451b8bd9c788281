"""DOM parsing and querying with BeautifulSoup."""

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from scraperx.core.config import settings
from scraperx.core.exceptions import MalformedSelectorError
from scraperx.monitoring.logger import get_logger

logger = get_logger(__name__)


def select(root: Tag, selector: str) -> list[Tag]:
    """Select all elements under ``root`` matching a CSS selector.

    Raises:
        MalformedSelectorError: If the CSS is invalid
    """
    try:
        return root.select(selector)
    except SelectorSyntaxError as e:
        raise MalformedSelectorError(selector, f"invalid CSS: {e}") from e


def select_one(root: Tag, selector: str) -> Tag | None:
    """Select the first element under ``root`` matching a CSS selector.

    Raises:
        MalformedSelectorError: If the CSS is invalid
    """
    try:
        return root.select_one(selector)
    except SelectorSyntaxError as e:
        raise MalformedSelectorError(selector, f"invalid CSS: {e}") from e


def top_level_elements(root: Tag) -> list[Tag]:
    """Direct element children of ``<body>``, or of ``root`` when it has none.

    Parsers such as lxml wrap fragments in ``<html><body>``; the elements the
    caller wrote are the body's children.
    """
    container = root
    if isinstance(root, BeautifulSoup) and root.body is not None:
        container = root.body
    return container.find_all(True, recursive=False)


def text_content(element: Tag) -> str:
    """Concatenated text of the element and its descendants, untrimmed."""
    return element.get_text()


def outer_html(element: Tag) -> str:
    """Serialized markup including the element's own tag."""
    return str(element)


def attribute_value(element: Tag, name: str) -> str | None:
    """Attribute value; multi-valued attributes (``class``) are space-joined."""
    value = element.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


class DOMParser:
    """Parsed HTML document."""

    def __init__(self, html: str, parser: str | None = None, url: str | None = None) -> None:
        """Initialize parser with HTML content.

        Args:
            html: HTML content to parse
            parser: BeautifulSoup parser (lxml, html.parser, html5lib)
            url: URL the document was fetched from, if any
        """
        self._parser = parser or settings.html_parser
        self.soup = BeautifulSoup(html, self._parser)
        self.url = url

    @property
    def root(self) -> BeautifulSoup:
        return self.soup

    def select(self, selector: str) -> list[Tag]:
        return select(self.soup, selector)

    def select_one(self, selector: str) -> Tag | None:
        return select_one(self.soup, selector)

    def top_level(self) -> list[Tag]:
        return top_level_elements(self.soup)

    def __repr__(self) -> str:
        return f"DOMParser(url={self.url!r}, parser={self._parser!r})"
