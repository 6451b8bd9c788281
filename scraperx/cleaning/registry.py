"""Filter registries used by the field extractor.

Two scopes exist:

* an instance registry owned by one :class:`~scraperx.scraping.engine.Scraper`
  (``Scraper.set_filters``), consulted first;
* the process-wide ``default_registry`` (``set_global_filters``), consulted
  second. It starts out holding the built-in filters.

``default_registry`` is plain shared state: it is not synchronized and the
last call to ``set_global_filters`` wins. Crawls running concurrently that
replace it race with each other; pass ``global_filters=`` to ``Scraper`` to
give a crawl its own default registry instead.
"""

from typing import Callable, Iterator, Mapping

from scraperx.monitoring.logger import get_logger

from .filters import BUILTIN_FILTERS, FilterFunc

logger = get_logger(__name__)


class FilterRegistry:
    """Name to transform-function table."""

    def __init__(self, filters: Mapping[str, FilterFunc] | None = None, name: str = "instance") -> None:
        """Initialize registry.

        Args:
            filters: Initial name -> callable mapping
            name: Label used in log messages
        """
        self.name = name
        self._filters: dict[str, FilterFunc] = {}
        if filters:
            self.replace(filters)

    def replace(self, filters: Mapping[str, FilterFunc]) -> None:
        """Replace every registered filter with ``filters`` (no merging).

        Raises:
            TypeError: If a value is not callable
        """
        for key, func in filters.items():
            if not callable(func):
                raise TypeError(f"Filter {key!r} is not callable")
        self._filters = dict(filters)
        logger.debug(f"Filter registry replaced | registry={self.name} | filters={len(self._filters)}")

    def register(self, name: str, func: FilterFunc | None = None) -> FilterFunc | Callable[[FilterFunc], FilterFunc]:
        """Register one filter; usable as a decorator.

        Example:
            >>> @registry.register("currency")
            ... def currency(value, code):
            ...     return f"{value} {code}"
        """
        if func is None:
            def decorator(f: FilterFunc) -> FilterFunc:
                self.register(name, f)
                return f

            return decorator

        if not callable(func):
            raise TypeError(f"Filter {name!r} is not callable")
        self._filters[name] = func
        return func

    def get(self, name: str) -> FilterFunc | None:
        return self._filters.get(name)

    def names(self) -> list[str]:
        return sorted(self._filters)

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)


class FilterChain:
    """Lookup across an instance registry and a fallback (global) registry."""

    def __init__(self, instance: FilterRegistry, fallback: FilterRegistry) -> None:
        self.instance = instance
        self.fallback = fallback

    def resolve(self, name: str) -> FilterFunc | None:
        """Find a filter, instance registry first.

        Returns:
            The filter callable, or None if neither registry has it
        """
        func = self.instance.get(name)
        if func is None:
            func = self.fallback.get(name)
        return func

    def __contains__(self, name: object) -> bool:
        return name in self.instance or name in self.fallback


# Process-wide default registry
default_registry = FilterRegistry(BUILTIN_FILTERS, name="global")


def set_global_filters(filters: Mapping[str, FilterFunc]) -> None:
    """Replace the process-wide filters wholesale.

    Built-ins are dropped unless included, e.g.
    ``set_global_filters({**BUILTIN_FILTERS, "currency": currency})``.
    Not thread-safe; last writer wins.
    """
    default_registry.replace(filters)


def get_global_filters() -> FilterRegistry:
    return default_registry
