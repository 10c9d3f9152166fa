"""MCP Server for converting ticket content between markdown and ADF."""

import asyncio
import json
import logging
import os
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.markdown_to_adf import markdown_to_adf as do_markdown_to_adf
from .tools.adf_to_markdown import adf_to_markdown as do_adf_to_markdown
from .tools.build_issue_request import (
    build_issue_request as do_build_issue_request,
    task_to_issue_request as do_task_to_issue_request,
)
from .tools.parse_issue import parse_issue as do_parse_issue
from .tools.ticket_markdown import (
    ticket_to_markdown as do_ticket_to_markdown,
    ticket_from_markdown as do_ticket_from_markdown,
)

logger = logging.getLogger(__name__)

_SECTION_PROPERTIES = {
    "description": {
        "type": "string",
        "description": "Main description in markdown. Fenced ```user-story blocks become titled user stories.",
    },
    "details": {
        "type": "string",
        "description": "Implementation details in markdown (rendered as an info panel)",
    },
    "acceptance_criteria": {
        "type": "string",
        "description": "Acceptance criteria in markdown (rendered as a success panel)",
    },
    "test_strategy": {
        "type": "string",
        "description": "Test strategy in markdown (rendered as a note panel)",
    },
}

# Create MCP server
server = Server("ticket-adf-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="markdown_to_adf",
            description="""Convert ticket markdown fields into an Atlassian Document Format (ADF) document.

The result can be used directly as the description field of an issue.

Supports:
- Headings, bullet and numbered lists, fenced code blocks
- Bold, italic, inline code and links
- User stories in fenced blocks (```user-story Optional title)
- Implementation details, acceptance criteria and test strategy as titled panels""",
            inputSchema={
                "type": "object",
                "properties": dict(_SECTION_PROPERTIES),
            },
        ),
        Tool(
            name="adf_to_markdown",
            description="""Convert an ADF document back into markdown ticket sections.

Panels are sorted into implementation details, acceptance criteria and test
strategy by their title (or panel type); everything else becomes the main
description.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "document": {
                        "type": ["object", "string"],
                        "description": "ADF document, as an object or a JSON string",
                    },
                },
                "required": ["document"],
            },
        ),
        Tool(
            name="build_issue_request",
            description="""Build the request body for creating an issue from markdown fields.

The project key defaults to the JIRA_PROJECT environment variable.
This does not send anything; it only prepares the payload.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "Issue summary",
                    },
                    **_SECTION_PROPERTIES,
                    "project_key": {
                        "type": "string",
                        "description": "Project key (defaults to JIRA_PROJECT)",
                    },
                    "issue_type": {
                        "type": "string",
                        "description": "Issue type name",
                        "default": "Task",
                    },
                    "priority": {
                        "type": "string",
                        "description": "Priority name",
                        "default": "Medium",
                    },
                    "parent_key": {
                        "type": "string",
                        "description": "Parent issue key (for subtasks)",
                    },
                    "labels": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Labels to set",
                    },
                    "assignee": {
                        "type": "string",
                        "description": "Assignee account ID",
                    },
                },
                "required": ["title"],
            },
        ),
        Tool(
            name="parse_issue",
            description="""Parse a fetched issue payload into a flat task.

Recovers markdown description, implementation details, acceptance criteria
and test strategy from the ADF description, and simplifies priority,
status, comments and dependency links.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "issue": {
                        "type": ["object", "string"],
                        "description": "Issue JSON (with key and fields), as an object or a JSON string",
                    },
                    "related_context": {
                        "type": ["object", "string"],
                        "description": "Optional related work: {summary, tickets: [{ticket: {key, title, status}, relationship}]}",
                    },
                },
                "required": ["issue"],
            },
        ),
        Tool(
            name="task_to_issue_request",
            description="""Build the request body for creating an issue from a task.

Accepts the task format returned by parse_issue, so a parsed issue can be
edited and sent back. The project key defaults to the JIRA_PROJECT
environment variable.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task": {
                        "type": ["object", "string"],
                        "description": "Task object (title, description, details, acceptance_criteria, test_strategy, priority, ...), or a JSON string",
                    },
                    "project_key": {
                        "type": "string",
                        "description": "Project key (defaults to JIRA_PROJECT)",
                    },
                },
                "required": ["task"],
            },
        ),
        Tool(
            name="ticket_to_markdown",
            description="""Render ticket fields as a single markdown document with ## sections.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "Ticket title",
                    },
                    **_SECTION_PROPERTIES,
                },
            },
        ),
        Tool(
            name="ticket_from_markdown",
            description="""Parse a markdown document with ## sections back into ticket fields.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "markdown": {
                        "type": "string",
                        "description": "Markdown produced by ticket_to_markdown",
                    },
                },
                "required": ["markdown"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "markdown_to_adf":
            result = do_markdown_to_adf(
                description=arguments.get("description", ""),
                details=arguments.get("details", ""),
                acceptance_criteria=arguments.get("acceptance_criteria", ""),
                test_strategy=arguments.get("test_strategy", ""),
            )
        elif name == "adf_to_markdown":
            result = do_adf_to_markdown(document=arguments["document"])
        elif name == "build_issue_request":
            result = do_build_issue_request(
                title=arguments["title"],
                description=arguments.get("description", ""),
                details=arguments.get("details", ""),
                acceptance_criteria=arguments.get("acceptance_criteria", ""),
                test_strategy=arguments.get("test_strategy", ""),
                project_key=arguments.get("project_key"),
                issue_type=arguments.get("issue_type"),
                priority=arguments.get("priority"),
                parent_key=arguments.get("parent_key"),
                labels=arguments.get("labels"),
                assignee=arguments.get("assignee"),
            )
        elif name == "parse_issue":
            result = do_parse_issue(
                issue=arguments["issue"],
                related_context=arguments.get("related_context"),
            )
        elif name == "task_to_issue_request":
            result = do_task_to_issue_request(
                task=arguments["task"],
                project_key=arguments.get("project_key"),
            )
        elif name == "ticket_to_markdown":
            result = do_ticket_to_markdown(
                title=arguments.get("title", ""),
                description=arguments.get("description", ""),
                details=arguments.get("details", ""),
                acceptance_criteria=arguments.get("acceptance_criteria", ""),
                test_strategy=arguments.get("test_strategy", ""),
            )
        elif name == "ticket_from_markdown":
            result = do_ticket_from_markdown(markdown=arguments["markdown"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("TICKET_ADF_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
