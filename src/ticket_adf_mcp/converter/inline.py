"""Inline span parsing: code, links, bold and italic."""

import re
from dataclasses import dataclass, field
from typing import Union

from .nodes import CODE, EM, STRONG, link_mark, text_node


@dataclass
class Text:
    """No formatting was found; the literal string."""
    value: str


@dataclass
class Nodes:
    """Formatting was found; an ordered run of text nodes."""
    items: list[dict] = field(default_factory=list)


InlineResult = Union[Text, Nodes]


# Each pattern captures (before, inner..., after); the lazy "before" makes the
# leftmost occurrence win within a tier.
_INLINE_CODE = re.compile(r'(.*?)`([^`]+)`(.*)', re.DOTALL)
_LINK = re.compile(r'(.*?)\[([^\]]+)\]\(([^)]+)\)(.*)', re.DOTALL)
_BOLD = re.compile(r'(.*?)\*\*([^*\n]+)\*\*(.*)', re.DOTALL)
_ITALIC = re.compile(r'(.*?)\*([^*\n]+)\*(.*)', re.DOTALL)


def unwrap(result: InlineResult) -> list[dict]:
    """Turn either result case into a list of text nodes."""
    if isinstance(result, Nodes):
        return result.items
    return [text_node(result.value)] if result.value else []


def _split(before: str, matched: dict, after: str) -> Nodes:
    items: list[dict] = []
    if before:
        items.extend(unwrap(process_inline(before)))
    items.append(matched)
    if after:
        items.extend(unwrap(process_inline(after)))
    return Nodes(items)


def process_inline(text: str) -> InlineResult:
    """
    Recursively parse inline formatting.

    Precedence is fixed: inline code, then links, then bold, then italic.
    The first tier that matches splits the text into before/matched/after;
    before and after are parsed again on their own, the matched span is not.
    Unterminated markers fall through and stay literal.
    """
    if not text:
        return Text(text)

    match = _INLINE_CODE.fullmatch(text)
    if match:
        before, code, after = match.groups()
        return _split(before, text_node(code, CODE), after)

    match = _LINK.fullmatch(text)
    if match:
        before, label, href, after = match.groups()
        return _split(before, text_node(label, link_mark(href)), after)

    match = _BOLD.fullmatch(text)
    if match:
        before, bold, after = match.groups()
        return _split(before, text_node(bold, STRONG), after)

    match = _ITALIC.fullmatch(text)
    if match:
        before, italic, after = match.groups()
        return _split(before, text_node(italic, EM), after)

    return Text(text)


def parse_inline(text: str) -> list[dict]:
    """Parse a single line of markdown into ADF text nodes."""
    return unwrap(process_inline(text))
