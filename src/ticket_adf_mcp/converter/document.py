"""Assemble a full ticket description document from markdown fields."""

from typing import Optional

from .blocks import parse_blocks
from .nodes import doc
from .normalize import normalize_markdown
from .panels import (
    ACCEPTANCE_CRITERIA_PANEL,
    DETAILS_PANEL,
    TEST_STRATEGY_PANEL,
    build_panel,
)
from .user_story import extract_user_stories


def markdown_to_nodes(text: Optional[str]) -> list[dict]:
    """Normalize and block-parse a markdown string."""
    return parse_blocks(normalize_markdown(text))


def to_document(
    description: Optional[str] = "",
    details: Optional[str] = "",
    acceptance_criteria: Optional[str] = "",
    test_strategy: Optional[str] = "",
) -> dict:
    """
    Convert ticket markdown fields into one ADF document.

    User stories found in the description come first, then the rest of the
    description, then one panel per non-empty section (implementation
    details, acceptance criteria, test strategy).
    """
    content: list[dict] = []

    if description:
        extraction = extract_user_stories(description)
        content.extend(extraction.story_nodes)
        if extraction.remaining_text:
            content.extend(markdown_to_nodes(extraction.remaining_text))

    for (panel_type, title), section in (
        (DETAILS_PANEL, details),
        (ACCEPTANCE_CRITERIA_PANEL, acceptance_criteria),
        (TEST_STRATEGY_PANEL, test_strategy),
    ):
        if section:
            content.append(build_panel(panel_type, title, section))

    return doc(content)
