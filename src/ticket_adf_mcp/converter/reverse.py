"""Render ADF nodes back into markdown text."""

import re

from .nodes import TASK_DONE

# Marks are always applied in this order, innermost first.
MARK_ORDER = ("strong", "em", "code", "link")

_LIST_ITEM_PART = re.compile(r'^(?:- |\d+\. )')


def _apply_marks(text: str, marks: list[dict]) -> str:
    by_type = {mark.get("type"): mark for mark in marks if isinstance(mark, dict)}
    for mark_type in MARK_ORDER:
        mark = by_type.get(mark_type)
        if mark is None:
            continue
        if mark_type == "strong":
            text = f"**{text}**"
        elif mark_type == "em":
            text = f"*{text}*"
        elif mark_type == "code":
            text = f"`{text}`"
        else:
            href = (mark.get("attrs") or {}).get("href") or "#"
            text = f"[{text}]({href})"
    return text


def _render_list(node: dict) -> list[str]:
    """Render the items of a bulletList, orderedList or taskList, one per line."""
    node_type = node["type"]
    lines = []
    for index, item in enumerate(node.get("content") or []):
        if not isinstance(item, dict) or not item.get("content"):
            continue
        if node_type == "taskList":
            if item.get("type") != "taskItem":
                continue
            item_text = extract_text_from_nodes(item["content"], True)
            if item_text.strip():
                checked = (item.get("attrs") or {}).get("state") == TASK_DONE
                lines.append(f"- [{'x' if checked else ' '}] {item_text}")
        elif item.get("type") == "listItem":
            item_text = extract_text_from_nodes(item["content"], True)
            if item_text.strip():
                prefix = f"{index + 1}. " if node_type == "orderedList" else "- "
                lines.append(prefix + item_text)
    return lines


def _join_blocks(parts: list[str]) -> str:
    """Join block-level parts: list lines by one newline, other blocks by two."""
    result = ''
    for i, part in enumerate(parts):
        if i > 0:
            if _LIST_ITEM_PART.match(part) or _LIST_ITEM_PART.match(parts[i - 1]):
                result += '\n'
            else:
                result += '\n\n'
        result += part
    return result.strip()


def extract_text_from_nodes(nodes, is_inline: bool = False) -> str:
    """
    Render a sequence of ADF nodes as markdown.

    Args:
        nodes: List of ADF node dicts (anything else renders as "")
        is_inline: Join parts without separators (paragraph/list item content)

    Returns:
        Markdown text; block-level output is trimmed
    """
    if not nodes or not isinstance(nodes, list):
        return ''

    parts: list[str] = []

    for node in nodes:
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        content = node.get("content")

        if node_type == "text":
            text = node.get("text")
            if text and isinstance(text, str):
                marks = node.get("marks")
                parts.append(_apply_marks(text, marks if isinstance(marks, list) else []))

        elif node_type == "paragraph":
            if content:
                paragraph_text = extract_text_from_nodes(content, True)
                if paragraph_text.strip():
                    parts.append(paragraph_text)

        elif node_type == "heading":
            if content:
                level = (node.get("attrs") or {}).get("level")
                if not isinstance(level, int) or isinstance(level, bool):
                    level = 1
                parts.append(f"{'#' * level} {extract_text_from_nodes(content, True)}")

        elif node_type in ("bulletList", "orderedList", "taskList"):
            parts.extend(_render_list(node))

        elif node_type == "codeBlock":
            if content is not None:
                code = extract_text_from_nodes(content, True)
                language = (node.get("attrs") or {}).get("language") or ''
                parts.append(f"```{language}\n{code}\n```")

        elif content:
            nested = extract_text_from_nodes(content)
            if nested.strip():
                parts.append(nested)

    if is_inline:
        return ''.join(parts)
    return _join_blocks(parts)
