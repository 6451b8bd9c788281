"""Record scanning over repeated elements."""

from typing import Any, Mapping

from bs4 import Tag

from scraperx.core.config import settings
from scraperx.monitoring.logger import get_logger

from .extractor import FieldExtractor
from .parser import select, top_level_elements

logger = get_logger(__name__)

Record = dict[str, Any]


def all_values_none(record: Record) -> bool:
    return all(value is None for value in record.values())


class RecordScanner:
    """Builds one record per element matched by a scope selector."""

    def __init__(self, extractor: FieldExtractor, drop_empty: bool | None = None) -> None:
        """Initialize scanner.

        Args:
            extractor: Field extractor used for every field
            drop_empty: Drop all-None records; None follows
                ``settings.drop_empty_records`` at scan time
        """
        self.extractor = extractor
        self.drop_empty = drop_empty

    @property
    def drops_empty(self) -> bool:
        if self.drop_empty is None:
            return settings.drop_empty_records
        return self.drop_empty

    def scan(
        self,
        root: Tag,
        scope: str | None = None,
        field_map: Mapping[str, str] | None = None,
    ) -> list[Record] | Any:
        """Extract records (or a single value) from ``root``.

        Args:
            root: Document or element to search
            scope: Selector for the repeated element; with no ``field_map``
                it is a full selector-DSL string for one value
            field_map: Output field name -> selector-DSL string

        Returns:
            List of records in document order, or the single extracted value
            when ``field_map`` is omitted

        Example:
            >>> scanner.scan(doc.root, ".product", {
            ...     "title": "h3 a@title",
            ...     "price": ".price|price",
            ...     "url": "h3 a@href",
            ... })
        """
        if field_map is None:
            if not scope:
                raise ValueError("scope is required for single-value extraction")
            return self.extractor.extract(root, scope)

        directives = {name: self.extractor.compile(selector) for name, selector in field_map.items()}
        elements = select(root, scope) if scope else top_level_elements(root)
        drop_empty = self.drops_empty

        results: list[Record] = []
        dropped = 0
        for element in elements:
            record = {name: self.extractor.extract(element, directive) for name, directive in directives.items()}
            if drop_empty and all_values_none(record):
                dropped += 1
                continue
            results.append(record)

        logger.debug(
            f"Scanned {len(elements)} elements | scope={scope or '<top-level>'} | "
            f"records={len(results)} | dropped={dropped}"
        )
        return results
