"""Markdown clean-up applied before block parsing."""

import re
from typing import Optional

FENCE = "```"

_TRAILING_WHITESPACE = re.compile(r'[ \t]+$', re.MULTILINE)
_EXCESS_BLANK_LINES = re.compile(r'\n{3,}')
_LEADING_BLANK_LINES = re.compile(r'\A\s*\n')
_TRAILING_BLANK_LINES = re.compile(r'\n\s*\Z')

_HEADING_MARKER = re.compile(r'^(#{1,6})[ \t]*(\S.*)$')
# A single "-" or "+" bullet; a repeated marker ("--flag") is not a bullet.
_DASH_BULLET = re.compile(r'^([ \t]*)([-+])(?!\2)[ \t]*(\S.*)$')
# "*" only counts as a bullet when followed by whitespace, so "**bold**" and
# "*italic*" line openers are left alone.
_STAR_BULLET = re.compile(r'^([ \t]*)\*(?!\*)[ \t]+(\S.*)$')
_NUMBER_MARKER = re.compile(r'^([ \t]*\d+\.)[ \t]+(\S.*)$')


def _normalize_markers(line: str) -> str:
    """Enforce a single space after heading, bullet and number markers."""
    if _HEADING_MARKER.match(line):
        return _HEADING_MARKER.sub(r'\1 \2', line)
    if _DASH_BULLET.match(line):
        return _DASH_BULLET.sub(r'\1\2 \3', line)
    if _STAR_BULLET.match(line):
        return _STAR_BULLET.sub(r'\1* \2', line)
    if _NUMBER_MARKER.match(line):
        return _NUMBER_MARKER.sub(r'\1 \2', line)
    return line


def normalize_markdown(text: Optional[str]) -> str:
    """
    Normalize markdown text ahead of conversion.

    - Unifies line endings to "\\n"
    - Strips trailing whitespace and collapses 3+ line breaks to 2
    - Enforces one space after heading/list markers (outside code fences)
    - Trims leading and trailing blank lines

    Never fails; empty or None input yields "". The result is stable under
    repeated application.
    """
    if not text:
        return ""

    text = str(text).replace('\r\n', '\n').replace('\r', '\n')
    text = _TRAILING_WHITESPACE.sub('', text)
    text = _EXCESS_BLANK_LINES.sub('\n\n', text)

    lines = []
    in_fence = False
    for line in text.split('\n'):
        if line.startswith(FENCE):
            in_fence = not in_fence
        elif not in_fence:
            line = _normalize_markers(line)
        lines.append(line)
    text = '\n'.join(lines)

    text = _LEADING_BLANK_LINES.sub('', text)
    text = _TRAILING_BLANK_LINES.sub('', text)
    return text
