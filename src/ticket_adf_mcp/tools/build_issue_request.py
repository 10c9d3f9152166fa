"""Tool to build an issue create/update request body from markdown fields."""

import logging
import os
from typing import Optional, Union

from ..ticket import Ticket
from .adf_to_markdown import load_json_argument

logger = logging.getLogger(__name__)


def build_issue_request(
    title: str,
    description: str = "",
    details: str = "",
    acceptance_criteria: str = "",
    test_strategy: str = "",
    project_key: Optional[str] = None,
    issue_type: Optional[str] = None,
    priority: Optional[str] = None,
    parent_key: Optional[str] = None,
    labels: Optional[list[str]] = None,
    assignee: Optional[str] = None,
) -> dict:
    """
    Build the request body for creating an issue.

    Args:
        title: Issue summary
        description: Main description markdown
        details: Implementation details markdown
        acceptance_criteria: Acceptance criteria markdown
        test_strategy: Test strategy markdown
        project_key: Project key (defaults to the JIRA_PROJECT environment variable)
        issue_type: Issue type name (defaults to Task)
        priority: Priority name (defaults to Medium, which is not sent)
        parent_key: Parent issue key for subtasks
        labels: Labels to set
        assignee: Assignee account ID

    Returns:
        Dict with the request body under "request", or an error
    """
    if not title or not title.strip():
        return {"error": "A title is required"}

    project_key = project_key or os.environ.get("JIRA_PROJECT")
    if not project_key:
        return {"error": "No project key given and JIRA_PROJECT is not set"}

    ticket = Ticket(
        title=title.strip(),
        description=description,
        details=details,
        acceptance_criteria=acceptance_criteria,
        test_strategy=test_strategy,
        issue_type=issue_type,
        priority=priority,
        parent_key=parent_key,
        labels=labels,
        assignee=assignee,
    )
    logger.info("Built %s request for project %s", ticket.issue_type, project_key)

    return {
        "project": project_key,
        "request": ticket.to_request_data(project_key),
    }


def task_to_issue_request(task: Union[dict, str], project_key: Optional[str] = None) -> dict:
    """
    Build the issue request body for a task dict (as returned by parse_issue).

    Args:
        task: Task dict or JSON string with title, description, details,
            acceptance_criteria, test_strategy, priority, labels, ...
        project_key: Project key (defaults to the JIRA_PROJECT environment variable)

    Returns:
        Dict with the request body under "request", or an error
    """
    try:
        task = load_json_argument(task, "task")
    except ValueError as e:
        return {"error": str(e)}

    ticket = Ticket.from_task(task)
    if not ticket.title.strip():
        return {"error": "A title is required"}

    project_key = project_key or os.environ.get("JIRA_PROJECT")
    if not project_key:
        return {"error": "No project key given and JIRA_PROJECT is not set"}

    logger.info("Built %s request from task %s", ticket.issue_type, ticket.jira_key or "(new)")

    return {
        "project": project_key,
        "request": ticket.to_request_data(project_key),
    }
