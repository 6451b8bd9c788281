"""Selector DSL compiler.

A selector string describes how to extract one field::

    sub-selector[@mode][|filter[:arg1,arg2,...]]

* ``sub-selector`` is a CSS selector, or ``&`` for the current element.
* ``mode`` is ``text`` (default), ``html``, or an attribute name.
* ``filter`` names a registered filter; its arguments are passed as strings.

Examples:
    >>> compile_selector("a.link@href|trim")
    SelectorDirective(sub_selector='a.link', mode='href', filter=FilterInvocation(name='trim', args=()))
    >>> compile_selector('&|replace:"x,y"').filter.args
    ('x', 'y')

A literal ``|`` inside the CSS part (``[lang|=en]``) must be written ``\\|``.
"""

from dataclasses import dataclass
from typing import Container

from scraperx.core.exceptions import MalformedSelectorError, UnknownFilterError

SELF_REFERENCE = "&"
LEGACY_SELF_REFERENCE = "current"
SELF_REFERENCE_TOKENS = frozenset({SELF_REFERENCE, LEGACY_SELF_REFERENCE})

MODE_TEXT = "text"
MODE_HTML = "html"

FILTER_SEPARATOR = "|"
MODE_SEPARATOR = "@"
ARGS_SEPARATOR = ":"
ARG_DELIMITER = ","
ESCAPE = "\\"
QUOTE_CHARS = ('"', "'")


def _escape(text: str) -> str:
    return text.replace(FILTER_SEPARATOR, ESCAPE + FILTER_SEPARATOR)


@dataclass(frozen=True)
class FilterInvocation:
    """Named filter with its string arguments."""

    name: str
    args: tuple[str, ...] = ()

    def to_string(self) -> str:
        if not self.args:
            return self.name
        args = ARG_DELIMITER.join(_escape(arg) for arg in self.args)
        return f"{self.name}{ARGS_SEPARATOR}{args}"


@dataclass(frozen=True)
class SelectorDirective:
    """Compiled form of one selector string."""

    sub_selector: str
    mode: str = MODE_TEXT
    filter: FilterInvocation | None = None

    def __post_init__(self) -> None:
        if self.sub_selector in SELF_REFERENCE_TOKENS:
            object.__setattr__(self, "sub_selector", SELF_REFERENCE)

    @property
    def is_self_reference(self) -> bool:
        return self.sub_selector == SELF_REFERENCE

    @property
    def is_attribute(self) -> bool:
        return self.mode not in (MODE_TEXT, MODE_HTML)

    def to_selector(self) -> str:
        """Serialize back to an equivalent selector string."""
        text = _escape(self.sub_selector)
        if self.mode != MODE_TEXT:
            text += f"{MODE_SEPARATOR}{_escape(self.mode)}"
        if self.filter is not None:
            text += f"{FILTER_SEPARATOR}{self.filter.to_string()}"
        return text


def split_unescaped(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator`` unless preceded by a backslash.

    Escaped separators are unescaped in the result; other backslashes are kept.
    """
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == ESCAPE and text[i + 1:i + 2] == separator:
            current.append(separator)
            i += 2
            continue
        if char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    parts.append("".join(current))
    return parts


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[-1] == text[0]:
        return text[1:-1]
    return text


def _has_whitespace(text: str) -> bool:
    return any(char.isspace() for char in text)


def _compile_filter(selector: str, clause: str) -> FilterInvocation:
    name, _, raw_args = clause.partition(ARGS_SEPARATOR)
    name = name.strip()

    if not name:
        raise MalformedSelectorError(selector, "empty filter name")
    if _has_whitespace(name):
        raise MalformedSelectorError(selector, f"invalid filter name {name!r}")

    raw_args = _strip_quotes(raw_args.strip())
    if not raw_args:
        return FilterInvocation(name=name)

    args = tuple(arg.strip() for arg in raw_args.split(ARG_DELIMITER))
    return FilterInvocation(name=name, args=args)


def compile_selector(
    selector: str,
    filters: Container[str] | None = None,
    strict: bool = False,
) -> SelectorDirective:
    """Compile a selector string into a directive.

    Args:
        selector: Selector DSL string
        filters: Filter names known at compile time (registry or chain)
        strict: Reject filter names missing from ``filters``

    Returns:
        New SelectorDirective

    Raises:
        MalformedSelectorError: If the string does not follow the grammar
        UnknownFilterError: In strict mode, if the filter is not registered
    """
    if not isinstance(selector, str):
        raise MalformedSelectorError(repr(selector), "selector must be a string")
    if not selector.strip():
        raise MalformedSelectorError(selector, "empty selector")

    segments = split_unescaped(selector, FILTER_SEPARATOR)
    if len(segments) > 2:
        raise MalformedSelectorError(selector, "only one filter clause is allowed")

    base = segments[0]
    sub_selector, _, mode = base.partition(MODE_SEPARATOR)
    sub_selector = sub_selector.strip()
    mode = mode.strip() or MODE_TEXT

    if not sub_selector:
        raise MalformedSelectorError(selector, "empty sub-selector")
    if _has_whitespace(mode):
        raise MalformedSelectorError(selector, f"invalid mode {mode!r}")

    invocation = None
    if len(segments) == 2:
        invocation = _compile_filter(selector, segments[1])
        if strict and filters is not None and invocation.name not in filters:
            raise UnknownFilterError(invocation.name, selector)

    return SelectorDirective(sub_selector=sub_selector, mode=mode, filter=invocation)
