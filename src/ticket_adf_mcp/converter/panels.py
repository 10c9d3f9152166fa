"""Titled panels: building them from markdown and sorting them back out."""

import logging
from dataclasses import dataclass, asdict
from typing import Optional

from .blocks import parse_blocks
from .nodes import bold_paragraph, panel
from .reverse import extract_text_from_nodes

logger = logging.getLogger(__name__)

# (panel type, title) per ticket section, in document order
DETAILS_PANEL = ("info", "Implementation Details")
ACCEPTANCE_CRITERIA_PANEL = ("success", "Acceptance Criteria")
TEST_STRATEGY_PANEL = ("note", "Test Strategy (TDD)")

# Title keywords checked in order; the first hit decides the section.
TITLE_KEYWORDS = [
    ("details", ("implementation", "detail")),
    ("acceptance_criteria", ("acceptance", "criteria")),
    ("test_strategy", ("test", "tdd")),
]

PANEL_TYPE_FALLBACK = {
    "info": "details",
    "success": "acceptance_criteria",
    "note": "test_strategy",
}


@dataclass
class ExtractedPanels:
    """Ticket sections recovered from a document tree."""
    details: str = ""
    acceptance_criteria: str = ""
    test_strategy: str = ""
    main_description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def build_panel(panel_type: str, title: Optional[str], content: Optional[str]) -> dict:
    """
    Wrap markdown content into a panel node.

    The panel type is passed through untouched for the renderer; the title,
    when given, becomes a bold first paragraph.
    """
    children: list[dict] = []
    if title:
        children.append(bold_paragraph(title))
    if content:
        children.extend(parse_blocks(content))
    return panel(panel_type, children)


def split_panel_title(node: dict) -> tuple[str, str]:
    """
    Return (title, content markdown) for a panel node.

    The title is the first text of a leading paragraph when that text is
    bold; without one, the whole panel is content.
    """
    children = node.get("content")
    if not isinstance(children, list):
        children = []
    title = ""
    content = extract_text_from_nodes(children)

    if children and isinstance(children[0], dict):
        first = children[0]
        first_content = first.get("content")
        if first.get("type") == "paragraph" and isinstance(first_content, list) and first_content:
            first_text = first_content[0] if isinstance(first_content[0], dict) else {}
            marks = first_text.get("marks")
            if isinstance(marks, list) and any(
                isinstance(mark, dict) and mark.get("type") == "strong" for mark in marks
            ):
                text = first_text.get("text")
                title = text if isinstance(text, str) else ""
                content = extract_text_from_nodes(children[1:])

    return title, content


def categorize_title(title: str) -> Optional[str]:
    """Map a panel title to a section name by keyword, or None."""
    title_lower = title.lower()
    for section, keywords in TITLE_KEYWORDS:
        if any(keyword in title_lower for keyword in keywords):
            return section
    return None


def extract_panels_from_description(description) -> ExtractedPanels:
    """
    Split a document tree into ticket sections.

    Panels are categorized by title keyword first; a panel whose title names
    no section falls back to its panel type, but only fills a section that
    is still empty. Everything outside panels renders as the main
    description.
    """
    result = ExtractedPanels()
    if not isinstance(description, dict) or not description.get("content"):
        return result

    main_content = []
    for node in description["content"]:
        if not isinstance(node, dict) or node.get("type") != "panel":
            main_content.append(node)
            continue

        title, content = split_panel_title(node)
        section = categorize_title(title)
        if section is not None:
            setattr(result, section, content)
            continue

        panel_type = (node.get("attrs") or {}).get("panelType")
        section = PANEL_TYPE_FALLBACK.get(panel_type)
        if section is not None and not getattr(result, section):
            logger.debug("Panel %r categorized as %s by panel type %s", title, section, panel_type)
            setattr(result, section, content)

    result.main_description = extract_text_from_nodes(main_content)
    return result
