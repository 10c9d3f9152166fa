"""Tools to render a ticket as sectioned markdown and parse it back."""

from ..ticket import Ticket


def ticket_to_markdown(
    title: str = "",
    description: str = "",
    details: str = "",
    acceptance_criteria: str = "",
    test_strategy: str = "",
) -> dict:
    """
    Render ticket fields as one markdown document with "## " sections.

    Returns:
        Dict with the markdown text
    """
    ticket = Ticket(
        title=title,
        description=description,
        details=details,
        acceptance_criteria=acceptance_criteria,
        test_strategy=test_strategy,
    )
    return {"markdown": ticket.to_markdown()}


def ticket_from_markdown(markdown: str) -> dict:
    """
    Parse sectioned markdown back into ticket fields.

    Returns:
        Dict with title, description, details, acceptance_criteria and test_strategy
    """
    ticket = Ticket.from_markdown(markdown)
    return {
        "title": ticket.title,
        "description": ticket.description,
        "details": ticket.details,
        "acceptance_criteria": ticket.acceptance_criteria,
        "test_strategy": ticket.test_strategy,
    }
