"""Shared test fixtures for ticket-adf-mcp tests."""

import pytest


def _text(text, *marks):
    node = {"type": "text", "text": text}
    if marks:
        node["marks"] = [dict(m) if isinstance(m, dict) else {"type": m} for m in marks]
    return node


def _para(*content):
    return {"type": "paragraph", "content": list(content)}


@pytest.fixture
def story_fence():
    """Return a helper building a ```user-story fenced block."""
    def _fence(title, body_lines):
        head = "```user-story" + (" " + title if title else "")
        return "\n".join([head, *body_lines, "```"])
    return _fence


@pytest.fixture
def sample_ticket_markdown():
    """Return ticket fields in markdown, as an author would write them."""
    return {
        "description": """Build a voice assistant with **AI capabilities**.

Key features include:
- **Voice Commands**: wake word detection
- **Device Control**: lights and `thermostat`

See [the design doc](https://example.com/design) for details.""",
        "details": """## Architecture

1. Speech recognition service
2. Intent parser

```python
assistant.listen()
```""",
        "acceptance_criteria": "- Responds to the wake word\n- Controls lights",
        "test_strategy": "Write failing tests for the *intent parser* first.",
    }


@pytest.fixture
def sample_adf_ticket():
    """Return a ticket description as the tracker stores it (ADF)."""
    return {
        "version": 1,
        "type": "doc",
        "content": [
            _para(
                _text("Build a sophisticated voice assistant with "),
                _text("AI capabilities", "strong"),
                _text(" and smart home integration."),
            ),
            _para(_text("Key features include:")),
            {
                "type": "bulletList",
                "content": [
                    {"type": "listItem", "content": [_para(_text("Voice recognition"))]},
                    {"type": "listItem", "content": [_para(_text("Smart home control"))]},
                ],
            },
            {
                "type": "panel",
                "attrs": {"panelType": "success"},
                "content": [
                    _para(_text("Acceptance Criteria", "strong")),
                    {
                        "type": "taskList",
                        "attrs": {"localId": "task-list-1"},
                        "content": [
                            {
                                "type": "taskItem",
                                "attrs": {"localId": "task-1", "state": "TODO"},
                                "content": [_para(
                                    _text("Voice Commands", "strong"),
                                    _text(': System responds to "Hey Assistant" wake word'),
                                )],
                            },
                            {
                                "type": "taskItem",
                                "attrs": {"localId": "task-2", "state": "DONE"},
                                "content": [_para(
                                    _text("Device Control", "strong"),
                                    _text(": Can control lights and temperature"),
                                )],
                            },
                        ],
                    },
                ],
            },
            {
                "type": "panel",
                "attrs": {"panelType": "info"},
                "content": [
                    _para(_text("Implementation Details", "strong")),
                    {
                        "type": "bulletList",
                        "content": [
                            {"type": "listItem", "content": [_para(
                                _text("Framework", "strong"),
                                _text(": React Native with "),
                                _text("TypeScript", "code"),
                            )]},
                            {"type": "listItem", "content": [_para(
                                _text("Database", "strong"),
                                _text(": PostgreSQL for user data"),
                            )]},
                        ],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_issue(sample_adf_ticket):
    """Return an issue payload as returned by the tracker's REST API."""
    return {
        "key": "VOICE-42",
        "fields": {
            "summary": "Voice assistant",
            "description": sample_adf_ticket,
            "priority": {"name": "High"},
            "issuetype": {"name": "Story"},
            "parent": {"key": "VOICE-1"},
            "labels": ["voice", "ai"],
            "assignee": {"accountId": "acc-123"},
            "status": {"name": "In Progress"},
            "attachment": [],
            "comment": {
                "comments": [
                    {
                        "id": "10001",
                        "author": {"displayName": "Sam Reviewer", "emailAddress": "sam@example.com"},
                        "body": {"type": "doc", "version": 1, "content": [
                            _para(_text("Looks "), _text("good", "em")),
                        ]},
                        "created": "2025-01-15T10:00:00.000+0000",
                        "updated": "2025-01-15T10:00:00.000+0000",
                    },
                    {"id": "10002", "body": {"content": []}},
                ],
            },
            "created": "2025-01-14T09:00:00.000+0000",
            "updated": "2025-01-15T11:00:00.000+0000",
            "issuelinks": [
                {
                    "type": {"name": "Blocks", "inward": "is blocked by", "outward": "blocks"},
                    "inwardIssue": {"key": "VOICE-7", "fields": {"summary": "Audio pipeline"}},
                },
                {
                    "type": {"name": "Blocks", "inward": "is blocked by", "outward": "blocks"},
                    "outwardIssue": {"key": "VOICE-50", "fields": {"summary": "Release"}},
                },
                {
                    "type": {"name": "Relates", "inward": "relates to", "outward": "relates to"},
                    "outwardIssue": {"key": "VOICE-9"},
                },
            ],
        },
    }
