"""Cleaning module - Filter registries, built-in filters, normalization."""

from .filters import BUILTIN_FILTERS
from .normalizer import (
    BooleanNormalizer,
    NumberNormalizer,
    PriceNormalizer,
    TextNormalizer,
    URLNormalizer,
)
from .registry import (
    FilterChain,
    FilterRegistry,
    default_registry,
    get_global_filters,
    set_global_filters,
)

__all__ = [
    "BUILTIN_FILTERS",
    "FilterChain",
    "FilterRegistry",
    "default_registry",
    "get_global_filters",
    "set_global_filters",
    "TextNormalizer",
    "PriceNormalizer",
    "NumberNormalizer",
    "URLNormalizer",
    "BooleanNormalizer",
]
