"""Tool to convert an ADF document back into ticket markdown sections."""

import json
import logging
from typing import Union

from ..converter.panels import extract_panels_from_description

logger = logging.getLogger(__name__)


def load_json_argument(value: Union[dict, str], name: str) -> dict:
    """
    Accept a JSON object either already decoded or as a string.

    Raises:
        ValueError: If the string is not valid JSON or not an object
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON for {name}: {e}") from e
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a JSON object")
    return value


def adf_to_markdown(document: Union[dict, str]) -> dict:
    """
    Split an ADF document into markdown ticket sections.

    Args:
        document: ADF document ({"version": 1, "type": "doc", ...}), as a dict or JSON string

    Returns:
        Dict with main_description, details, acceptance_criteria and test_strategy
    """
    try:
        document = load_json_argument(document, "document")
    except ValueError as e:
        logger.warning("Rejected document: %s", e)
        return {"error": str(e)}

    if document.get("type") != "doc":
        return {"error": f"Expected a 'doc' node, got: {document.get('type')!r}"}

    return extract_panels_from_description(document).to_dict()
