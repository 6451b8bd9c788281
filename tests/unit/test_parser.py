"""Tests for DOM parsing helpers."""

import pytest

from scraperx.core.exceptions import MalformedSelectorError
from scraperx.scraping.parser import DOMParser, attribute_value, outer_html, text_content


class TestDOMParser:
    """Tests for DOMParser."""

    def test_select(self, products_html):
        doc = DOMParser(products_html, url="https://shop.test/")

        assert len(doc.select("article.product")) == 3
        assert doc.select_one("h3 a")["href"] == "/book-one"
        assert doc.url == "https://shop.test/"

    def test_select_one_missing(self, products_html):
        assert DOMParser(products_html).select_one(".missing") is None

    def test_invalid_css(self, products_html):
        with pytest.raises(MalformedSelectorError):
            DOMParser(products_html).select("a[")

    def test_top_level_inside_body(self, items_html):
        """Test lxml's html/body wrapper is skipped."""
        top = DOMParser(items_html).top_level()

        assert [el.name for el in top] == ["ul"]

    def test_top_level_without_body(self):
        """Test html.parser keeps fragments at the root."""
        top = DOMParser("<p>a</p><span>b</span>", parser="html.parser").top_level()

        assert [el.name for el in top] == ["p", "span"]


class TestNodeHelpers:
    """Tests for node reading helpers."""

    def test_text_content(self):
        node = DOMParser("<div> a <b>b</b> </div>").select_one("div")

        assert text_content(node) == " a b "

    def test_outer_html(self):
        node = DOMParser('<p id="x">hi</p>').select_one("p")

        assert outer_html(node) == '<p id="x">hi</p>'

    def test_attribute_value(self):
        node = DOMParser('<p class="a b" id="x">hi</p>').select_one("p")

        assert attribute_value(node, "class") == "a b"
        assert attribute_value(node, "id") == "x"
        assert attribute_value(node, "title") is None
