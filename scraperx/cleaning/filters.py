"""Built-in selector filters.

Every filter is called as ``filter(value, *args)`` where ``args`` are the
string tokens parsed from the selector (``"price|price:EUR"`` calls
``price(value, "EUR")``). Filters may return any type.
"""

import re
from typing import Any, Callable

from .normalizer import (
    BooleanNormalizer,
    NumberNormalizer,
    PriceNormalizer,
    TextNormalizer,
    URLNormalizer,
)

FilterFunc = Callable[..., Any]

_trim = TextNormalizer(strip=True)
_squish = TextNormalizer(strip=True, remove_extra_whitespace=True)
_lower = TextNormalizer(strip=False, lowercase=True)
_upper = TextNormalizer(strip=False, uppercase=True)
_boolean = BooleanNormalizer()


def trim(value: Any) -> str | None:
    return _trim(value)


def squish(value: Any) -> str | None:
    return _squish(value)


def lower(value: Any) -> str | None:
    return _lower(value)


def upper(value: Any) -> str | None:
    return _upper(value)


def truncate(value: Any, length: str) -> str | None:
    return TextNormalizer(strip=False, max_length=int(length))(value)


def replace(value: Any, old: str, new: str = "") -> str | None:
    if value is None:
        return None
    return str(value).replace(old, new)


def regex(value: Any, pattern: str, group: str = "0") -> str | None:
    """Return the first match of ``pattern`` (or one of its groups)."""
    if value is None:
        return None
    match = re.search(pattern, str(value))
    if not match:
        return None
    return match.group(int(group) if group.isdigit() else group)


def price(value: Any, currency: str | None = None) -> float | None:
    return PriceNormalizer(currency_code=currency)(value)


def number(value: Any, kind: str = "float") -> float | int | None:
    if kind not in ("int", "float"):
        raise ValueError(f"number filter expects 'int' or 'float', got {kind!r}")
    return NumberNormalizer(return_type=int if kind == "int" else float)(value)


def boolean(value: Any) -> bool | None:
    return _boolean(value)


def url(value: Any, base_url: str | None = None) -> str | None:
    return URLNormalizer(base_url=base_url)(value)


def default(value: Any, fallback: str = "") -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback
    return value


BUILTIN_FILTERS: dict[str, FilterFunc] = {
    "trim": trim,
    "squish": squish,
    "lower": lower,
    "upper": upper,
    "truncate": truncate,
    "replace": replace,
    "regex": regex,
    "price": price,
    "number": number,
    "bool": boolean,
    "url": url,
    "default": default,
}
