import logging
from typing import Any, Dict, Optional, Tuple

from diagramkit.compiler import compile_graph
from diagramkit.compiler.types import StructuredGraph
from diagramkit.dsl.cleaner import clean_mermaid
from diagramkit.schemas import GraphPayload
from diagramkit.validation.diagram_validator import ValidationVerdict, validate_mermaid

logger = logging.getLogger(__name__)


def clean_then_validate(text: Optional[str]) -> Tuple[str, ValidationVerdict]:
    """
    Repair untrusted Mermaid text and validate the result.

    The verdict is advisory. Callers render the cleaned text either way and
    show the violations as a warning when it is invalid.
    """
    cleaned = clean_mermaid(text or "")
    verdict = validate_mermaid(cleaned)
    if not verdict.is_valid:
        logger.info("[PIPELINE] cleaned diagram still invalid: %s", verdict.get_summary())
    return cleaned, verdict


def compile_and_check(graph: Optional[StructuredGraph], **kwargs) -> Tuple[str, ValidationVerdict]:
    code = compile_graph(graph, **kwargs)
    verdict = validate_mermaid(code)
    if graph is not None and graph.nodes and not verdict.is_valid:
        # The compiler is meant to be valid by construction.
        logger.warning("[PIPELINE] compiler produced invalid diagram: %s", verdict.get_summary())
    return code, verdict


def compile_payload(payload: Dict[str, Any], **kwargs) -> str:
    """Validate an upstream JSON graph and compile it. Raises pydantic.ValidationError."""
    graph = GraphPayload.model_validate(payload).to_graph()
    return compile_graph(graph, **kwargs)
