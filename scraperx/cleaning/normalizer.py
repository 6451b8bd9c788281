"""Value normalizers backing the built-in filters."""

import re
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import parse_qs, urlencode, urljoin, urlparse, urlunparse

from scraperx.monitoring.logger import get_logger

logger = get_logger(__name__)


class BaseNormalizer(ABC):
    """Base class for normalizers."""

    @abstractmethod
    def normalize(self, value: Any) -> Any:
        """Normalize value.

        Args:
            value: Value to normalize

        Returns:
            Normalized value
        """

    def __call__(self, value: Any) -> Any:
        return self.normalize(value)


class TextNormalizer(BaseNormalizer):
    """Normalizer for text data.

    Unlike the other normalizers, None passes through unchanged so that a
    missing attribute stays missing after a text filter.
    """

    def __init__(
        self,
        strip: bool = True,
        lowercase: bool = False,
        uppercase: bool = False,
        remove_extra_whitespace: bool = False,
        max_length: int | None = None,
    ) -> None:
        """Initialize text normalizer.

        Args:
            strip: Strip leading/trailing whitespace
            lowercase: Convert to lowercase
            uppercase: Convert to uppercase
            remove_extra_whitespace: Replace runs of whitespace with one space
            max_length: Truncate to max length
        """
        self.strip = strip
        self.lowercase = lowercase
        self.uppercase = uppercase
        self.remove_extra_whitespace = remove_extra_whitespace
        self.max_length = max_length

    def normalize(self, value: Any) -> str | None:
        if value is None:
            return None

        text = str(value)

        if self.remove_extra_whitespace:
            text = re.sub(r"\s+", " ", text)

        if self.strip:
            text = text.strip()

        if self.lowercase:
            text = text.lower()
        elif self.uppercase:
            text = text.upper()

        if self.max_length is not None and len(text) > self.max_length:
            text = text[: self.max_length]

        return text


class PriceNormalizer(BaseNormalizer):
    """Normalizer for price/currency data."""

    # Currency symbols and their codes
    CURRENCY_MAP = {
        "$": "USD",
        "€": "EUR",
        "£": "GBP",
        "¥": "JPY",
        "₹": "INR",
        "kr": "SEK",
        "CHF": "CHF",
    }

    def __init__(
        self,
        currency_code: str | None = None,
        return_float: bool = True,
        thousand_separator: str = ",",
    ) -> None:
        """Initialize price normalizer.

        Args:
            currency_code: Expected currency code, used when none is detected
            return_float: Return float instead of dict
            thousand_separator: Character for thousands
        """
        self.currency_code = currency_code
        self.return_float = return_float
        self.thousand_separator = thousand_separator

    def normalize(self, value: Any) -> float | dict[str, Any] | None:
        """Normalize price value.

        Args:
            value: Price string to normalize

        Returns:
            Float price or dict with amount and currency, or None
        """
        if value is None:
            return None

        text = str(value).strip()
        if not text:
            return None

        currency = self.currency_code
        for symbol, code in self.CURRENCY_MAP.items():
            if symbol in text:
                currency = code
                text = text.replace(symbol, "")
                break

        codes = re.findall(r"[A-Z]{3}", text)
        if codes and currency is None:
            currency = codes[0]
        text = re.sub(r"[A-Z]{3}", "", text).strip()

        # European format (1.234,56)
        if "," in text and "." in text and text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        # Decimal comma (12,50)
        elif "." not in text and re.fullmatch(r"\d+,\d{2}", text):
            text = text.replace(",", ".")
        else:
            text = text.replace(self.thousand_separator, "")

        match = re.search(r"\d+(?:\.\d+)?", text)
        if not match:
            logger.debug(f"Could not parse price: {value}")
            return None

        price = float(match.group())

        if self.return_float:
            return price

        return {
            "amount": price,
            "currency": currency,
            "original": str(value),
        }


class NumberNormalizer(BaseNormalizer):
    """Normalizer for numeric data."""

    def __init__(self, return_type: type = float, default: float | int | None = None) -> None:
        """Initialize number normalizer.

        Args:
            return_type: Desired return type (int or float)
            default: Default value if parsing fails
        """
        self.return_type = return_type
        self.default = default

    def normalize(self, value: Any) -> float | int | None:
        if value is None:
            return self.default

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return self.return_type(value)

        text = str(value).strip().replace(",", "")
        match = re.search(r"-?\d+(?:\.\d+)?", text)
        if not match:
            return self.default

        return self.return_type(float(match.group()))


class URLNormalizer(BaseNormalizer):
    """Normalizer for URLs."""

    TRACKING_PARAMS = {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "fbclid",
        "gclid",
    }

    def __init__(
        self,
        base_url: str | None = None,
        remove_fragments: bool = True,
        remove_tracking_params: bool = True,
    ) -> None:
        """Initialize URL normalizer.

        Args:
            base_url: Base URL for relative links
            remove_fragments: Remove URL fragments (#...)
            remove_tracking_params: Remove tracking parameters
        """
        self.base_url = base_url
        self.remove_fragments = remove_fragments
        self.remove_tracking_params = remove_tracking_params

    def normalize(self, value: Any) -> str | None:
        if value is None:
            return None

        url = str(value).strip()
        if not url:
            return None

        if self.base_url and not url.startswith(("http://", "https://", "//")):
            url = urljoin(self.base_url, url)

        parsed = urlparse(url)

        fragment = "" if self.remove_fragments else parsed.fragment

        query = parsed.query
        if self.remove_tracking_params and query:
            params = parse_qs(query, keep_blank_values=True)
            kept = {k: v for k, v in params.items() if k not in self.TRACKING_PARAMS}
            query = urlencode(kept, doseq=True)

        return urlunparse(
            (parsed.scheme, parsed.netloc, parsed.path, parsed.params, query, fragment)
        )


class BooleanNormalizer(BaseNormalizer):
    """Normalizer for boolean data."""

    TRUE_VALUES = {"true", "yes", "1", "on", "y"}
    FALSE_VALUES = {"false", "no", "0", "off", "n"}

    def __init__(self, default: bool | None = None) -> None:
        self.default = default

    def normalize(self, value: Any) -> bool | None:
        if value is None:
            return self.default

        if isinstance(value, bool):
            return value

        text = str(value).strip().lower()

        if text in self.TRUE_VALUES:
            return True
        if text in self.FALSE_VALUES:
            return False

        return self.default
