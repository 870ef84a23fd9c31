"""
diagramkit - Mermaid flow-diagram synthesis and validation.
"""

from diagramkit.compiler import (
    GraphEdge,
    GraphNode,
    NodeShape,
    StructuredGraph,
    compile_graph,
)
from diagramkit.dsl import clean_mermaid, sanitize_label
from diagramkit.pipeline import clean_then_validate, compile_and_check, compile_payload
from diagramkit.validation import (
    DiagramImprover,
    ValidationVerdict,
    ViolationKind,
    validate_mermaid,
)

__version__ = "0.1.0"

__all__ = [
    "GraphEdge",
    "GraphNode",
    "NodeShape",
    "StructuredGraph",
    "compile_graph",
    "clean_mermaid",
    "sanitize_label",
    "clean_then_validate",
    "compile_and_check",
    "compile_payload",
    "DiagramImprover",
    "ValidationVerdict",
    "ViolationKind",
    "validate_mermaid",
]
