"""MCP tool implementations."""

from .markdown_to_adf import markdown_to_adf
from .adf_to_markdown import adf_to_markdown
from .build_issue_request import build_issue_request, task_to_issue_request
from .parse_issue import parse_issue
from .ticket_markdown import ticket_to_markdown, ticket_from_markdown

__all__ = [
    "markdown_to_adf",
    "adf_to_markdown",
    "build_issue_request",
    "task_to_issue_request",
    "parse_issue",
    "ticket_to_markdown",
    "ticket_from_markdown",
]
