"""Field extraction for compiled selectors."""

from typing import Any

from bs4 import Tag

from scraperx.cleaning.registry import FilterChain
from scraperx.monitoring.logger import get_logger

from .parser import attribute_value, outer_html, select_one, text_content
from .selector import MODE_HTML, MODE_TEXT, FilterInvocation, SelectorDirective, compile_selector

logger = get_logger(__name__)


class FieldExtractor:
    """Resolves a directive against a node and applies its filter."""

    def __init__(self, filters: FilterChain, strict_filters: bool = False) -> None:
        """Initialize extractor.

        Args:
            filters: Instance/global filter lookup
            strict_filters: Reject unknown filter names at compile time
        """
        self.filters = filters
        self.strict_filters = strict_filters

    def compile(self, selector: str) -> SelectorDirective:
        return compile_selector(selector, filters=self.filters, strict=self.strict_filters)

    def extract(self, node: Tag, directive: SelectorDirective | str) -> Any:
        """Extract one value from ``node``.

        Args:
            node: Context element (or whole document)
            directive: Compiled directive or selector string

        Returns:
            Extracted (and filtered) value, or None if no element matched
        """
        if isinstance(directive, str):
            directive = self.compile(directive)

        target = self.resolve_target(node, directive)
        if target is None:
            return None

        value = self.read(target, directive.mode)

        if directive.filter is not None:
            value = self.apply_filter(value, directive.filter)

        return value

    @staticmethod
    def resolve_target(node: Tag, directive: SelectorDirective) -> Tag | None:
        if directive.is_self_reference:
            return node
        return select_one(node, directive.sub_selector)

    @staticmethod
    def read(element: Tag, mode: str) -> str | None:
        if mode == MODE_TEXT:
            return text_content(element)
        if mode == MODE_HTML:
            return outer_html(element)
        return attribute_value(element, mode)

    def apply_filter(self, value: Any, invocation: FilterInvocation) -> Any:
        """Call the named filter; unknown names pass the value through."""
        func = self.filters.resolve(invocation.name)
        if func is None:
            logger.warning(f"Unknown filter '{invocation.name}', value passed through unchanged")
            return value
        return func(value, *invocation.args)
