"""Line-oriented block parsing of markdown into ADF nodes."""

import re
from typing import Optional

from .inline import parse_inline
from .nodes import code_block, heading, list_item, paragraph
from .normalize import FENCE

# Panel content reaches the parser without normalization, so any line ending counts.
_LINE_BREAK = re.compile(r'\r\n|\r|\n')

_HEADING = re.compile(r'^(#{1,6})\s+(.+)$')
# A repeated marker is the start of bold text, not a bullet.
_BULLET = re.compile(r'^\s*([-*+])(?!\1)\s+(.+)$')
_NUMBERED = re.compile(r'^\s*\d+\.\s+(.+)$')
_STARTS_WITH_EMPHASIS = re.compile(r'^\*\*[^*]*\*\*|^\*[^*]*\*')


class _BlockParser:
    """Parser state for one call to parse_blocks()."""

    def __init__(self):
        self.nodes: list[dict] = []
        self.paragraph_lines: list[str] = []
        self.in_code_block = False
        self.code_language: Optional[str] = None
        self.code_lines: list[str] = []
        # The list node new items are appended to, if one is still open.
        self.open_list: Optional[dict] = None

    def emit(self, node: dict) -> None:
        self.nodes.append(node)
        self.open_list = None

    def flush_paragraph(self) -> None:
        if not self.paragraph_lines:
            return
        # Joined with spaces: a newline inside a text node breaks rendering.
        text = ' '.join(self.paragraph_lines).strip()
        self.paragraph_lines = []
        if text:
            content = parse_inline(text)
            if content:
                self.emit(paragraph(content))

    def flush_code_block(self) -> None:
        self.emit(code_block('\n'.join(self.code_lines), self.code_language))
        self.code_lines = []
        self.code_language = None

    def add_list_item(self, list_type: str, item_text: str) -> None:
        if self.open_list is None or self.open_list["type"] != list_type:
            new_list = {"type": list_type, "content": []}
            self.emit(new_list)
            self.open_list = new_list
        self.open_list["content"].append(list_item(parse_inline(item_text)))

    def feed(self, line: str) -> None:
        if line.startswith(FENCE):
            if not self.in_code_block:
                self.flush_paragraph()
                self.in_code_block = True
                self.code_language = line[len(FENCE):].strip() or None
            else:
                self.flush_code_block()
                self.in_code_block = False
            return

        if self.in_code_block:
            self.code_lines.append(line)
            return

        match = _HEADING.match(line)
        if match:
            self.flush_paragraph()
            self.emit(heading(len(match.group(1)), parse_inline(match.group(2))))
            return

        match = _BULLET.match(line)
        if match:
            self.flush_paragraph()
            self.add_list_item("bulletList", match.group(2))
            return

        match = _NUMBERED.match(line)
        if match:
            self.flush_paragraph()
            self.add_list_item("orderedList", match.group(1))
            return

        if not line.strip():
            self.flush_paragraph()
            return

        # A line opening with bold/italic always stands as its own paragraph.
        if _STARTS_WITH_EMPHASIS.match(line.strip()):
            self.flush_paragraph()
            self.paragraph_lines.append(line)
            self.flush_paragraph()
            return

        self.paragraph_lines.append(line)

    def finish(self) -> list[dict]:
        self.flush_paragraph()
        if self.in_code_block:
            self.flush_code_block()
            self.in_code_block = False
        return self.nodes


def parse_blocks(text: str) -> list[dict]:
    """
    Parse normalized markdown into a list of top-level ADF nodes.

    Produces paragraph, heading, bulletList, orderedList and codeBlock nodes.
    Consecutive list lines of the same kind share one list node; any other
    node in between starts a fresh list.
    """
    if not text:
        return []

    parser = _BlockParser()
    for line in _LINE_BREAK.split(text):
        parser.feed(line)
    return parser.finish()
