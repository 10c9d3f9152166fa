"""Constructors for Atlassian Document Format (ADF) nodes.

Nodes are plain dicts in the exact shape the ticket service accepts, so a
tree built here can be sent over the wire without a serialisation step.
"""

from typing import Optional

ADF_VERSION = 1

# taskItem state that renders as a checked box
TASK_DONE = "DONE"

STRONG = {"type": "strong"}
EM = {"type": "em"}
CODE = {"type": "code"}


def link_mark(href: str) -> dict:
    return {"type": "link", "attrs": {"href": href}}


def text_node(text: str, mark: Optional[dict] = None) -> dict:
    """Build a text leaf, optionally carrying a single mark."""
    node = {"type": "text", "text": text}
    if mark is not None:
        node["marks"] = [dict(mark)]
    return node


def paragraph(content: list[dict]) -> dict:
    return {"type": "paragraph", "content": content}


def bold_paragraph(text: str) -> dict:
    """A paragraph holding one strong text node (used for titles)."""
    return paragraph([text_node(text, STRONG)])


def heading(level: int, content: list[dict]) -> dict:
    return {"type": "heading", "attrs": {"level": level}, "content": content}


def list_item(content: list[dict]) -> dict:
    return {"type": "listItem", "content": [paragraph(content)]}


def code_block(code: str, language: Optional[str] = None, with_attrs: bool = True) -> dict:
    node: dict = {"type": "codeBlock"}
    if with_attrs:
        node["attrs"] = {"language": language or None}
    node["content"] = [text_node(code)] if code else []
    return node


def panel(panel_type: str, content: list[dict]) -> dict:
    return {"type": "panel", "attrs": {"panelType": panel_type}, "content": content}


def doc(content: list[dict]) -> dict:
    """Wrap top-level content into the root document."""
    return {"version": ADF_VERSION, "type": "doc", "content": content}
