"""Markdown <-> Atlassian Document Format conversion."""

from .document import to_document
from .panels import extract_panels_from_description, ExtractedPanels
from .reverse import extract_text_from_nodes

__all__ = [
    "to_document",
    "extract_panels_from_description",
    "ExtractedPanels",
    "extract_text_from_nodes",
]
