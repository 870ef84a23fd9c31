"""
Validation module for Mermaid diagram text.
"""

from diagramkit.validation.diagram_validator import (
    DiagramValidationError,
    DiagramValidator,
    ValidationIssue,
    ValidationVerdict,
    ViolationKind,
    get_validation_summary,
    raise_on_errors,
    validate_mermaid,
)

from diagramkit.validation.diagram_fixer import (
    DiagramImprover,
    FixResult,
    improve_diagram,
)

__all__ = [
    "DiagramValidationError",
    "DiagramValidator",
    "ValidationIssue",
    "ValidationVerdict",
    "ViolationKind",
    "get_validation_summary",
    "raise_on_errors",
    "validate_mermaid",
    "DiagramImprover",
    "FixResult",
    "improve_diagram",
]
