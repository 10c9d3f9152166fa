"""Detection and formatting of user stories written as fenced code blocks."""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from .nodes import bold_paragraph, code_block

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r'```([^\n]*)\n(.*?)\n```', re.DOTALL)

_USER_STORY_TAG = re.compile(r'\buser-story\b', re.IGNORECASE)
_TITLE_AFTER_TAG = re.compile(r'\buser-story\b[:\s-]*(.*)$', re.IGNORECASE)
_AS_A = re.compile(r'As a', re.IGNORECASE)
_I_WANT = re.compile(r'I want', re.IGNORECASE)
_SO_THAT = re.compile(r'so that', re.IGNORECASE)
_BDD_LINE = re.compile(r'^(?:Given|When|Then|And)\b', re.IGNORECASE | re.MULTILINE)

# Captures the "I want ..." clause up to the next period, comma or line break.
_I_WANT_CLAUSE = re.compile(r'\bI want\s+([^\n,.]+)', re.IGNORECASE)

_INLINE_I_WANT = re.compile(r'\s*,\s*I want\s*', re.IGNORECASE)
_INLINE_SO_THAT = re.compile(r'\s*,\s*so that\s*', re.IGNORECASE)


@dataclass
class UserStoryExtraction:
    """Result of lifting user stories out of a description."""
    remaining_text: str
    story_nodes: list[dict] = field(default_factory=list)


def is_user_story(info: str, content: str) -> bool:
    """Check whether a fenced block (info string + body) holds a user story."""
    if _USER_STORY_TAG.search(info):
        return True
    if _AS_A.search(content) and _I_WANT.search(content) and _SO_THAT.search(content):
        return True
    return bool(_BDD_LINE.search(content))


def title_from_fence_info(info: str) -> Optional[str]:
    """Return the text following the user-story tag, if any."""
    match = _TITLE_AFTER_TAG.search(info)
    if not match:
        return None
    title = match.group(1).strip()
    return title or None


def title_from_i_want(content: str) -> Optional[str]:
    """
    Derive a title from the story's "I want" clause.

    "I want to generate titles automatically." -> "To generate titles automatically"
    """
    match = _I_WANT_CLAUSE.search(content)
    if not match:
        return None
    cleaned = re.sub(r'\s+', ' ', match.group(1)).strip()
    if not cleaned:
        return None
    return cleaned[0].upper() + cleaned[1:]


def story_heading(title: Optional[str], story_number: int) -> str:
    if title:
        return f"User story: {title}"
    if story_number > 1:
        return f"User story {story_number}:"
    return "User story:"


def format_story_body(content: str) -> str:
    """Put inline ", I want" and ", so that" clauses on their own lines."""
    content = _INLINE_I_WANT.sub('\nI want ', content)
    content = _INLINE_SO_THAT.sub('\nso that ', content)
    return content.strip()


def extract_user_stories(text: Optional[str]) -> UserStoryExtraction:
    """
    Lift fenced user-story blocks out of a raw description.

    A fenced block is a user story when its info string carries the
    "user-story" tag, when its body mentions "As a", "I want" and "so that",
    or when a body line starts with Given/When/Then/And. Each story becomes a
    bold title paragraph plus a code block, in source order; every other
    fenced block is left in the text untouched.
    """
    if not text:
        return UserStoryExtraction(remaining_text=text or "")

    story_nodes: list[dict] = []
    story_count = 0

    def _replace(match: re.Match) -> str:
        nonlocal story_count
        info = match.group(1).strip()
        content = match.group(2).strip()
        if not is_user_story(info, content):
            return match.group(0)

        story_count += 1
        title = None
        if _USER_STORY_TAG.search(info):
            title = title_from_fence_info(info)
        if not title:
            title = title_from_i_want(content)

        logger.debug("Recognized user story %d (title=%r)", story_count, title)
        story_nodes.append(bold_paragraph(story_heading(title, story_count)))
        story_nodes.append(code_block(format_story_body(content), with_attrs=False))
        return ''

    remaining = _FENCED_BLOCK.sub(_replace, text)
    return UserStoryExtraction(remaining_text=remaining.strip(), story_nodes=story_nodes)
