"""Ticket model and conversion between markdown fields, ADF and issue payloads."""

import logging
from dataclasses import dataclass, field, fields as dataclass_fields
from typing import Any, Optional

from .converter.document import to_document
from .converter.panels import extract_panels_from_description
from .converter.reverse import extract_text_from_nodes

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = "Medium"
DEFAULT_ISSUE_TYPE = "Task"
DEFAULT_STATUS = "To Do"

# Markdown section headers used by to_markdown() / from_markdown()
MARKDOWN_SECTIONS = [
    ("title", "Title"),
    ("description", "Description"),
    ("details", "Implementation Details"),
    ("acceptance_criteria", "Acceptance Criteria"),
    ("test_strategy", "Test Strategy (TDD)"),
]

_FIELD_ALIASES = {
    "implementation_details": "details",
    "test_strategy_tdd": "test_strategy",
}

_TEXT_FIELDS = (
    "title", "description", "details", "acceptance_criteria", "test_strategy",
    "parent_key", "assignee", "jira_key", "created", "updated",
)
_LIST_FIELDS = ("labels", "dependencies", "attachments", "comments", "issue_links")


@dataclass
class IssueLinks:
    """Dependency information derived from an issue's links."""
    dependencies: list[str] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)
    link_details: list[dict] = field(default_factory=list)


@dataclass
class Ticket:
    """A ticket whose long-form fields are markdown strings."""
    title: str = ""
    description: str = ""
    details: str = ""
    acceptance_criteria: str = ""
    test_strategy: str = ""
    priority: str = DEFAULT_PRIORITY
    issue_type: str = DEFAULT_ISSUE_TYPE
    parent_key: str = ""
    labels: list[str] = field(default_factory=list)
    assignee: str = ""
    jira_key: str = ""
    dependencies: list[str] = field(default_factory=list)
    status: str = DEFAULT_STATUS
    attachments: list = field(default_factory=list)
    comments: list = field(default_factory=list)
    related_context: Optional[dict] = None
    created: str = ""
    updated: str = ""
    issue_links: list = field(default_factory=list)

    def __post_init__(self):
        self._normalize()

    def _normalize(self) -> None:
        """Apply field defaults; runs after construction and every update."""
        for name in _TEXT_FIELDS:
            setattr(self, name, getattr(self, name) or "")
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            setattr(self, name, list(value) if isinstance(value, (list, tuple)) else [])

        priority = self.priority or ""
        self.priority = priority[:1].upper() + priority[1:] if priority else DEFAULT_PRIORITY
        self.issue_type = self.issue_type or DEFAULT_ISSUE_TYPE
        self.status = self.status or DEFAULT_STATUS
        self.related_context = self.related_context or None

    def update(self, **changes: Any) -> "Ticket":
        """
        Update several fields at once.

        Accepts "implementation_details" and "test_strategy_tdd" as aliases;
        unknown field names raise TypeError.

        Returns:
            This ticket, for chaining
        """
        for alias, target in _FIELD_ALIASES.items():
            if alias in changes:
                value = changes.pop(alias)
                if not changes.get(target):
                    changes[target] = value

        known = {f.name for f in dataclass_fields(self)}
        for name, value in changes.items():
            if name not in known:
                raise TypeError(f"Unknown ticket field: {name}")
            setattr(self, name, value)

        self._normalize()
        return self

    def add_label(self, label: str) -> "Ticket":
        if label and label not in self.labels:
            self.labels.append(label)
        return self

    def add_dependency(self, key: str) -> "Ticket":
        if key and key not in self.dependencies:
            self.dependencies.append(key)
        return self

    def add_context(self, context: Optional[dict]) -> "Ticket":
        if context:
            self.related_context = context
        return self

    def get_formatted_context(self) -> Optional[dict]:
        """Summarize related context for tool responses, or None."""
        if not self.related_context:
            return None

        related_tickets = []
        for item in self.related_context.get("tickets") or []:
            if not isinstance(item, dict):
                continue
            related = item.get("ticket") or {}
            related_tickets.append({
                "key": related.get("key"),
                "title": related.get("title"),
                "status": related.get("status"),
                "relationship": item.get("relationship"),
            })

        return {
            "summary": self.related_context.get("summary"),
            "related_tickets": related_tickets,
        }

    def to_document(self) -> dict:
        """Build the ADF description document for this ticket."""
        return to_document(
            description=self.description,
            details=self.details,
            acceptance_criteria=self.acceptance_criteria,
            test_strategy=self.test_strategy,
        )

    def to_request_data(self, project_key: Optional[str] = None) -> dict:
        """
        Build the create/update issue request body.

        Priority is only sent when it differs from the default; assignee,
        parent and labels only when set.
        """
        request_fields: dict[str, Any] = {
            "project": {"key": project_key},
            "summary": self.title,
            "description": self.to_document(),
            "issuetype": {"name": self.issue_type},
        }

        if self.priority and self.priority != DEFAULT_PRIORITY:
            request_fields["priority"] = {"name": self.priority}
        if self.assignee:
            request_fields["assignee"] = {"accountId": self.assignee}
        if self.parent_key:
            request_fields["parent"] = {"key": self.parent_key}
        if self.labels:
            request_fields["labels"] = list(self.labels)

        return {"fields": request_fields}

    def to_task_format(self) -> dict:
        """Flatten the ticket into a task dict."""
        return {
            "id": self.jira_key,
            "jira_key": self.jira_key,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority.lower(),
            "assignee": self.assignee,
            "labels": self.labels,
            "dependencies": self.dependencies,
            "subtasks": [],
            "parent_key": self.parent_key,
            "issue_type": self.issue_type,
            "created": self.created,
            "updated": self.updated,
            "details": self.details,
            "acceptance_criteria": self.acceptance_criteria,
            "test_strategy": self.test_strategy,
            "attachments": self.attachments,
            "comments": self.comments,
            "related_context": self.related_context,
        }

    def to_markdown(self) -> str:
        """Render the ticket as "## Section" markdown for LLM processing."""
        markdown = ""
        for attr, header in MARKDOWN_SECTIONS:
            value = getattr(self, attr)
            if value:
                markdown += f"## {header}\n{value}\n\n"
        return markdown.strip()

    @classmethod
    def from_markdown(cls, markdown: str) -> "Ticket":
        """Parse markdown produced by to_markdown() back into a ticket."""
        sections: dict[str, str] = {}
        current_section = ""
        current_lines: list[str] = []

        for line in (markdown or "").split("\n"):
            if line.startswith("## "):
                if current_section and current_lines:
                    sections[current_section] = "\n".join(current_lines).strip()
                current_section = line[3:].strip().lower()
                current_lines = []
            elif current_section:
                current_lines.append(line)

        if current_section and current_lines:
            sections[current_section] = "\n".join(current_lines).strip()

        return cls(
            title=sections.get("title", ""),
            description=sections.get("description", ""),
            details=sections.get("implementation details", ""),
            acceptance_criteria=sections.get("acceptance criteria", ""),
            test_strategy=(
                sections.get("test strategy (tdd)") or sections.get("test strategy", "")
            ),
        )

    @classmethod
    def from_task(cls, task: dict) -> "Ticket":
        """Create a ticket from a task dict as produced by to_task_format()."""
        return cls(
            title=task.get("title", ""),
            description=task.get("description", ""),
            details=task.get("details", ""),
            acceptance_criteria=task.get("acceptance_criteria", ""),
            test_strategy=task.get("test_strategy", ""),
            priority=task.get("priority", ""),
            issue_type=task.get("issue_type", ""),
            parent_key=task.get("parent_key", ""),
            labels=task.get("labels", []),
            assignee=task.get("assignee", ""),
            jira_key=task.get("jira_key", ""),
            dependencies=task.get("dependencies", []),
            status=task.get("status", ""),
            attachments=task.get("attachments", []),
            comments=task.get("comments", []),
            created=task.get("created", ""),
            updated=task.get("updated", ""),
            related_context=task.get("related_context"),
        )

    @classmethod
    def from_issue(cls, issue: dict) -> "Ticket":
        """
        Create a ticket from an issue payload as returned by the tracker's API.

        The ADF description is split back into the description and panel
        sections; a description without panels is split by its header lines
        instead. Priority, status, comments and issue links are simplified.
        """
        issue_fields = issue.get("fields") or {}
        key = issue.get("key", "")

        description = issue_fields.get("description")
        panels = extract_panels_from_description(description)
        sections = {
            "description": panels.main_description,
            "details": panels.details,
            "acceptance_criteria": panels.acceptance_criteria,
            "test_strategy": panels.test_strategy,
        }
        if not (panels.details or panels.acceptance_criteria or panels.test_strategy):
            # No panels: sections may still be written as header lines in the text
            sections = parse_structured_description(extract_plain_text_description(description))

        links = extract_dependencies_from_links(issue_fields.get("issuelinks") or [], key)
        logger.debug("Parsed issue %s: %d dependencies", key, len(links.dependencies))

        return cls(
            title=issue_fields.get("summary", ""),
            description=sections["description"],
            details=sections["details"],
            acceptance_criteria=sections["acceptance_criteria"],
            test_strategy=sections["test_strategy"],
            priority=convert_priority(issue_fields.get("priority")),
            issue_type=(issue_fields.get("issuetype") or {}).get("name", ""),
            parent_key=(issue_fields.get("parent") or {}).get("key", ""),
            labels=issue_fields.get("labels") or [],
            assignee=(issue_fields.get("assignee") or {}).get("accountId", ""),
            jira_key=key,
            status=convert_status(issue_fields.get("status")),
            attachments=issue_fields.get("attachment") or [],
            comments=extract_comments((issue_fields.get("comment") or {}).get("comments") or []),
            created=issue_fields.get("created", ""),
            updated=issue_fields.get("updated", ""),
            dependencies=links.dependencies,
            issue_links=links.link_details,
        )


def convert_priority(priority: Optional[dict]) -> str:
    """Lower-case priority name, "medium" when absent."""
    if not priority or not priority.get("name"):
        return "medium"
    return priority["name"].lower()


def convert_status(status: Optional[dict]) -> str:
    """Map a tracker status onto done / in-review / in-progress / pending."""
    if not status or not status.get("name"):
        return "pending"

    name = status["name"].lower()
    if "done" in name or "closed" in name or "resolved" in name:
        return "done"
    if "review" in name:
        return "in-review"
    if "progress" in name or "development" in name:
        return "in-progress"
    return "pending"


def extract_comments(comments: list[dict]) -> list[dict]:
    """Simplify issue comments, rendering ADF bodies as markdown."""
    if not isinstance(comments, list):
        return []

    return [
        {
            "id": comment.get("id"),
            "author": (comment.get("author") or {}).get("displayName") or "Unknown",
            "author_email": (comment.get("author") or {}).get("emailAddress") or "",
            "body": extract_text_from_nodes((comment.get("body") or {}).get("content") or []),
            "created": comment.get("created"),
            "updated": comment.get("updated"),
        }
        for comment in comments
    ]


def extract_dependencies_from_links(issue_links: list[dict], current_key: str) -> IssueLinks:
    """
    Derive dependencies from issue links.

    With a "Blocks" link, an inward issue blocks the current one (a
    dependency) and an outward issue is blocked by it.
    """
    result = IssueLinks()

    for link in issue_links:
        link_type = link.get("type") or {}
        type_name = link_type.get("name") or "Unknown"

        inward = link.get("inwardIssue")
        if inward:
            related_key = inward.get("key")
            result.link_details.append({
                "type": type_name,
                "direction": "outward",
                "related_issue": related_key,
                "related_summary": (inward.get("fields") or {}).get("summary"),
                "link_description": f"{current_key} {link_type.get('outward') or 'outward'} {related_key}",
            })
            if type_name == "Blocks":
                result.dependencies.append(related_key)

        outward = link.get("outwardIssue")
        if outward:
            related_key = outward.get("key")
            result.link_details.append({
                "type": type_name,
                "direction": "inward",
                "related_issue": related_key,
                "related_summary": (outward.get("fields") or {}).get("summary"),
                "link_description": f"{current_key} {link_type.get('inward') or 'inward'} {related_key}",
            })
            if type_name == "Blocks":
                result.blocks.append(related_key)

    return result


def extract_plain_text_description(description: Optional[dict]) -> str:
    """Render the non-panel part of an ADF description."""
    if not isinstance(description, dict) or not description.get("content"):
        return ""
    non_panel = [
        node for node in description["content"]
        if not (isinstance(node, dict) and node.get("type") == "panel")
    ]
    return extract_text_from_nodes(non_panel)


def _is_details_header(lower_line: str) -> bool:
    return "implementation" in lower_line and (
        "detail" in lower_line or "spec" in lower_line or "technical" in lower_line
    )


def _is_acceptance_criteria_header(lower_line: str) -> bool:
    return (
        ("acceptance" in lower_line and "criteria" in lower_line)
        or "requirements" in lower_line
        or ("done" in lower_line and "when" in lower_line)
    )


def _is_test_strategy_header(lower_line: str) -> bool:
    return (
        "test" in lower_line
        and ("strategy" in lower_line or "plan" in lower_line or "approach" in lower_line)
    ) or "tdd" in lower_line


def parse_structured_description(full_description: str) -> dict:
    """
    Split a plain-text description into sections by header-like lines.

    Returns:
        Dict with description, details, acceptance_criteria and test_strategy
    """
    result = {
        "description": "",
        "details": "",
        "acceptance_criteria": "",
        "test_strategy": "",
    }
    if not full_description:
        return result

    current_section = "description"
    current_lines: list[str] = []

    def flush_section():
        content = "\n".join(current_lines).strip()
        if content:
            result[current_section] = content
        current_lines.clear()

    for line in full_description.split("\n"):
        lower_line = line.lower().strip()
        if _is_details_header(lower_line):
            flush_section()
            current_section = "details"
        elif _is_acceptance_criteria_header(lower_line):
            flush_section()
            current_section = "acceptance_criteria"
        elif _is_test_strategy_header(lower_line):
            flush_section()
            current_section = "test_strategy"
        else:
            current_lines.append(line)

    flush_section()
    return result
