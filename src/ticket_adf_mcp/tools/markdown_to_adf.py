"""Tool to convert ticket markdown fields into an ADF document."""

import logging
from typing import Optional

from ..converter.document import to_document

logger = logging.getLogger(__name__)


def markdown_to_adf(
    description: Optional[str] = "",
    details: Optional[str] = "",
    acceptance_criteria: Optional[str] = "",
    test_strategy: Optional[str] = "",
) -> dict:
    """
    Convert ticket markdown fields into one ADF document.

    Args:
        description: Main description markdown (may contain user-story fences)
        details: Implementation details markdown (info panel)
        acceptance_criteria: Acceptance criteria markdown (success panel)
        test_strategy: Test strategy markdown (note panel)

    Returns:
        Dict with the document and top-level node/panel counts
    """
    document = to_document(
        description=description,
        details=details,
        acceptance_criteria=acceptance_criteria,
        test_strategy=test_strategy,
    )
    panel_count = sum(1 for node in document["content"] if node["type"] == "panel")
    logger.info("Converted markdown into %d nodes (%d panels)", len(document["content"]), panel_count)

    return {
        "document": document,
        "node_count": len(document["content"]),
        "panel_count": panel_count,
    }
