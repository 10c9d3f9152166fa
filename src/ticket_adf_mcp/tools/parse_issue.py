"""Tool to turn a fetched issue payload into a flat task."""

from typing import Optional, Union

from ..ticket import Ticket
from .adf_to_markdown import load_json_argument


def parse_issue(issue: Union[dict, str], related_context: Optional[Union[dict, str]] = None) -> dict:
    """
    Parse an issue payload (as returned by the tracker's REST API).

    Args:
        issue: Issue JSON with "key" and "fields", as a dict or JSON string
        related_context: Optional {"summary", "tickets": [{"ticket", "relationship"}]}
            describing related work, as a dict or JSON string

    Returns:
        Task dict with markdown sections recovered from the ADF description
    """
    try:
        issue = load_json_argument(issue, "issue")
        if related_context is not None:
            related_context = load_json_argument(related_context, "related_context")
    except ValueError as e:
        return {"error": str(e)}

    if not isinstance(issue.get("fields"), dict):
        return {"error": "Issue payload has no 'fields' object"}

    ticket = Ticket.from_issue(issue).add_context(related_context)
    result = ticket.to_task_format()
    result["related_context"] = ticket.get_formatted_context()
    result["issue_links"] = ticket.issue_links
    return result
