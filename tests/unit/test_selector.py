"""Tests for the selector DSL compiler."""

import pytest

from scraperx.cleaning.registry import FilterChain, FilterRegistry
from scraperx.core.exceptions import MalformedSelectorError, UnknownFilterError
from scraperx.scraping.selector import (
    MODE_HTML,
    MODE_TEXT,
    SELF_REFERENCE,
    FilterInvocation,
    SelectorDirective,
    compile_selector,
    split_unescaped,
)


class TestCompileSelector:
    """Tests for compile_selector."""

    def test_plain_selector_defaults_to_text(self):
        """Test selector without mode or filter."""
        directive = compile_selector("h3 a")

        assert directive == SelectorDirective(sub_selector="h3 a", mode=MODE_TEXT, filter=None)

    def test_attribute_mode(self):
        """Test selector with attribute mode."""
        directive = compile_selector("a.link@href")

        assert directive.sub_selector == "a.link"
        assert directive.mode == "href"
        assert directive.is_attribute is True

    def test_html_mode(self):
        """Test html mode is not an attribute."""
        directive = compile_selector("div@html")

        assert directive.mode == MODE_HTML
        assert directive.is_attribute is False

    def test_attribute_with_filter(self):
        """Test full selector decomposition."""
        directive = compile_selector("a.link@href|trim")

        assert directive.sub_selector == "a.link"
        assert directive.mode == "href"
        assert directive.filter == FilterInvocation(name="trim", args=())

    def test_filter_arguments(self):
        """Test filter arguments are split and trimmed."""
        directive = compile_selector("sel@attr|filter: a , b")

        assert directive.filter == FilterInvocation(name="filter", args=("a", "b"))

    def test_single_filter_argument(self):
        """Test filter with one argument."""
        directive = compile_selector("price|currency:USD")

        assert directive.sub_selector == "price"
        assert directive.filter.args == ("USD",)

    def test_quoted_arguments(self):
        """Test one layer of quotes is stripped from the argument string."""
        assert compile_selector('p|replace:"x,y"').filter.args == ("x", "y")
        assert compile_selector("p|replace:'a'").filter.args == ("a",)

    def test_mismatched_quotes_kept(self):
        """Test quotes are only stripped when they match."""
        assert compile_selector("p|f:\"a'").filter.args == ("\"a'",)

    def test_argument_colons_kept(self):
        """Test only the first colon separates name and arguments."""
        directive = compile_selector("p|regex:\\d+:\\d+")

        assert directive.filter.name == "regex"
        assert directive.filter.args == ("\\d+:\\d+",)

    def test_empty_argument_string(self):
        """Test trailing colon gives no arguments."""
        assert compile_selector("p|trim:").filter == FilterInvocation("trim")

    def test_whitespace_is_trimmed(self):
        """Test tokens are trimmed."""
        directive = compile_selector("  .price  @ data-value | number : int ")

        assert directive.sub_selector == ".price"
        assert directive.mode == "data-value"
        assert directive.filter == FilterInvocation("number", ("int",))

    def test_empty_mode_defaults_to_text(self):
        """Test blank mode falls back to text."""
        assert compile_selector("p@").mode == MODE_TEXT

    def test_self_reference(self):
        """Test self-reference token."""
        directive = compile_selector("&@class")

        assert directive.sub_selector == SELF_REFERENCE
        assert directive.is_self_reference is True

    def test_legacy_self_reference(self):
        """Test legacy alias maps to the self-reference token."""
        assert compile_selector("current").is_self_reference is True

    def test_directive_normalizes_legacy_self_reference(self):
        """Test a directive built directly maps the alias to the current element."""
        directive = SelectorDirective("current", mode="href")

        assert directive.sub_selector == SELF_REFERENCE
        assert directive.is_self_reference is True
        assert directive.to_selector() == "&@href"

    def test_escaped_pipe(self):
        """Test escaped pipe stays in the CSS part."""
        directive = compile_selector("[lang\\|=en]|trim")

        assert directive.sub_selector == "[lang|=en]"
        assert directive.filter.name == "trim"

    def test_compiles_fresh_directive(self):
        """Test every compile builds a new directive."""
        assert compile_selector("p") is not compile_selector("p")

    def test_directive_is_immutable(self):
        """Test directives are frozen."""
        directive = compile_selector("p")

        with pytest.raises(AttributeError):
            directive.mode = "html"


class TestMalformedSelectors:
    """Tests for selectors rejected at compile time."""

    @pytest.mark.parametrize(
        "selector",
        [
            "",
            "   ",
            "@href",
            "a|",
            "a|:x",
            "a|b|c",
            "a@data value",
            "a|bad name",
        ],
    )
    def test_rejected(self, selector):
        """Test malformed selector raises."""
        with pytest.raises(MalformedSelectorError):
            compile_selector(selector)

    def test_non_string(self):
        """Test non-string selector raises."""
        with pytest.raises(MalformedSelectorError):
            compile_selector(None)

    def test_error_carries_selector(self):
        """Test error attributes."""
        with pytest.raises(MalformedSelectorError) as exc_info:
            compile_selector("a|")

        assert exc_info.value.selector == "a|"
        assert "filter name" in exc_info.value.reason

    def test_is_value_error(self):
        """Test malformed selector is a ValueError."""
        with pytest.raises(ValueError):
            compile_selector("")


class TestStrictFilters:
    """Tests for compile-time filter validation."""

    def test_unknown_filter_strict(self):
        """Test unknown filter raises in strict mode."""
        filters = FilterRegistry({"trim": str.strip})

        with pytest.raises(UnknownFilterError) as exc_info:
            compile_selector("p|missing", filters=filters, strict=True)

        assert exc_info.value.name == "missing"

    def test_known_filter_strict(self):
        """Test known filter compiles in strict mode."""
        chain = FilterChain(FilterRegistry(), FilterRegistry({"trim": str.strip}))

        assert compile_selector("p|trim", filters=chain, strict=True).filter.name == "trim"

    def test_unknown_filter_lenient(self):
        """Test unknown filter compiles when not strict."""
        filters = FilterRegistry()

        assert compile_selector("p|missing", filters=filters).filter.name == "missing"


class TestToSelector:
    """Tests for re-serializing directives."""

    @pytest.mark.parametrize(
        "selector",
        [
            "h3 a",
            "a.link@href",
            "a.link@href|trim",
            "price|currency:USD",
            "&@html|regex:\\d+,0",
            "[lang\\|=en]@title",
            "&|replace:\\|,-",
            "a@data\\|x",
        ],
    )
    def test_reserialized_selector_compiles_equal(self, selector):
        """Test compile -> serialize -> compile is stable."""
        directive = compile_selector(selector)

        assert compile_selector(directive.to_selector()) == directive

    def test_whitespace_is_normalized(self):
        """Test serialization drops padding and default mode."""
        directive = compile_selector(" p @ text | f : a , b ")

        assert directive.to_selector() == "p|f:a,b"

    def test_pipes_outside_css_are_escaped(self):
        """Test literal pipes in mode and filter arguments are re-escaped."""
        assert compile_selector("a@data\\|x").to_selector() == "a@data\\|x"
        assert compile_selector("&|replace:\\|,-").to_selector() == "&|replace:\\|,-"


class TestSplitUnescaped:
    """Tests for split_unescaped."""

    def test_plain_split(self):
        assert split_unescaped("a|b", "|") == ["a", "b"]

    def test_escaped_separator(self):
        assert split_unescaped("a\\|b|c", "|") == ["a|b", "c"]

    def test_other_backslashes_kept(self):
        assert split_unescaped("#a\\:b", "|") == ["#a\\:b"]
