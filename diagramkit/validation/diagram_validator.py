"""
Diagram Validator - Heuristic structural checks for Mermaid source text.

Catches issues like:
- Empty input
- Unknown diagram type header
- Unbalanced brackets
- Leftover HTML markup from model output
- Broken arrow tokens ("-- >")
- Duplicate node definitions
- Text with no diagram syntax at all

This is not a parser. Bracket counts are not nesting-aware and node ids are
only picked up at the start of a line. A failed verdict is advisory: callers
still render the text and show a warning next to it.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from diagramkit.config import MIN_DIAGRAM_LENGTH
from diagramkit.utils.fences import strip_code_fence

logger = logging.getLogger(__name__)


class ViolationKind(Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    UNRECOGNIZED_DIAGRAM_TYPE = "UNRECOGNIZED_DIAGRAM_TYPE"
    UNBALANCED_BRACKETS = "UNBALANCED_BRACKETS"
    DUPLICATE_NODE_ID = "DUPLICATE_NODE_ID"
    PROHIBITED_MARKUP = "PROHIBITED_MARKUP"
    BROKEN_ARROW_SYNTAX = "BROKEN_ARROW_SYNTAX"
    NO_STRUCTURAL_SYNTAX = "NO_STRUCTURAL_SYNTAX"
    TOO_SHORT = "TOO_SHORT"


@dataclass(frozen=True)
class ValidationIssue:
    """A single violated rule with a human-readable explanation"""
    kind: ViolationKind
    message: str
    suggestion: Optional[str] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "code": self.kind.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of validating one piece of Mermaid text"""
    is_valid: bool
    violations: Tuple[ViolationKind, ...] = ()
    issues: Tuple[ValidationIssue, ...] = ()
    duplicate_ids: Tuple[str, ...] = ()
    stats: Dict[str, int] = field(default_factory=dict)

    def has(self, kind: ViolationKind) -> bool:
        return kind in self.violations

    @property
    def messages(self) -> List[str]:
        return [i.message for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "violations": [v.value for v in self.violations],
            "issues": [i.to_dict() for i in self.issues],
            "duplicate_ids": list(self.duplicate_ids),
            "stats": dict(self.stats),
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        if self.is_valid:
            return "Valid | 0 violations"
        codes = ", ".join(v.value for v in self.violations)
        return f"Invalid | {len(self.violations)} violations: {codes}"


class DiagramValidationError(ValueError):
    def __init__(self, verdict: ValidationVerdict):
        self.verdict = verdict
        super().__init__(
            f"Diagram validation failed with {len(verdict.violations)} violations:\n"
            + "\n".join(f"[{i.kind.value}] {i.message}" for i in verdict.issues)
        )


class DiagramValidator:
    """
    Runs the fixed battery of structural checks against Mermaid text.

    Usage:
        validator = DiagramValidator()
        verdict = validator.validate(code)

        if not verdict.is_valid:
            for issue in verdict.issues:
                print(f"[{issue.kind.value}] {issue.message}")
    """

    DIAGRAM_TYPES = (
        "graph",
        "flowchart",
        "sequencediagram",
        "classdiagram",
        "erdiagram",
        "journey",
        "gantt",
        "pie",
        "gitgraph",
        "mindmap",
        "timeline",
    )

    # Keyword tokens are matched case-insensitively, symbols literally.
    STRUCTURAL_TOKENS = ("-->", "->", "---", "::", "[", "(", "{")
    STRUCTURAL_KEYWORDS = ("subgraph", "participant", "activate", "note")

    BRACKET_PAIRS = (("[", "]"), ("(", ")"), ("{", "}"))

    BROKEN_ARROWS = ("-- >", "- >")

    PROHIBITED_MARKUP_RE = re.compile(r"<\s{0,3}/?\s{0,3}(?:br|div|span)\b", re.IGNORECASE)
    NODE_DEFINITION_RE = re.compile(r"\s*(\w+)[\[({]")

    def __init__(self, min_length: int = MIN_DIAGRAM_LENGTH):
        self.min_length = min_length

    def validate(self, text: Optional[str]) -> ValidationVerdict:
        """Validate Mermaid text. Never raises."""
        if not text or not text.strip():
            issue = ValidationIssue(
                kind=ViolationKind.EMPTY_INPUT,
                message="Diagram text is empty",
                suggestion="Provide Mermaid source starting with a diagram type such as 'graph TD'",
            )
            return ValidationVerdict(
                is_valid=False,
                violations=(ViolationKind.EMPTY_INPUT,),
                issues=(issue,),
                stats={"length": 0, "lines": 0, "node_definitions": 0},
            )

        code = strip_code_fence(text)
        duplicates, definitions = self._find_duplicate_ids(code)

        issues: List[ValidationIssue] = []
        issues.extend(self._check_diagram_type(code))
        issues.extend(self._check_length(code))
        issues.extend(self._check_brackets(code))
        issues.extend(self._check_markup(code))
        issues.extend(self._check_arrows(code))
        issues.extend(self._check_duplicate_ids(duplicates))
        issues.extend(self._check_structural_syntax(code))

        if duplicates:
            logger.info("[VALIDATOR] duplicate node ids: %s", ", ".join(duplicates))

        verdict = ValidationVerdict(
            is_valid=not issues,
            violations=tuple(i.kind for i in issues),
            issues=tuple(issues),
            duplicate_ids=tuple(duplicates),
            stats={
                "length": len(code),
                "lines": len(code.splitlines()),
                "node_definitions": definitions,
            },
        )
        logger.debug("[VALIDATOR] %s", verdict.get_summary())
        return verdict

    def _check_diagram_type(self, code: str) -> List[ValidationIssue]:
        if code.lower().startswith(self.DIAGRAM_TYPES):
            return []
        first_line = code.splitlines()[0] if code else ""
        return [ValidationIssue(
            kind=ViolationKind.UNRECOGNIZED_DIAGRAM_TYPE,
            message="Code does not start with a known Mermaid diagram type",
            suggestion="Start with e.g. 'graph TD', 'flowchart LR' or 'sequenceDiagram'",
            detail=first_line[:80],
        )]

    def _check_length(self, code: str) -> List[ValidationIssue]:
        if len(code) > self.min_length:
            return []
        return [ValidationIssue(
            kind=ViolationKind.TOO_SHORT,
            message=f"Code is too short for a Mermaid diagram ({len(code)} chars)",
            suggestion="Add at least one node or edge",
        )]

    def _check_brackets(self, code: str) -> List[ValidationIssue]:
        unbalanced = []
        for opening, closing in self.BRACKET_PAIRS:
            open_count = code.count(opening)
            close_count = code.count(closing)
            if open_count != close_count:
                unbalanced.append(f"{opening}{closing} {open_count}/{close_count}")
        if not unbalanced:
            return []
        return [ValidationIssue(
            kind=ViolationKind.UNBALANCED_BRACKETS,
            message="Unbalanced brackets in code",
            suggestion="Close every node shape bracket on the same line",
            detail="; ".join(unbalanced),
        )]

    def _check_markup(self, code: str) -> List[ValidationIssue]:
        match = self.PROHIBITED_MARKUP_RE.search(code)
        if not match:
            return []
        return [ValidationIssue(
            kind=ViolationKind.PROHIBITED_MARKUP,
            message="Code contains HTML markup (<br>, <div> or <span>)",
            suggestion="Run the cleaner or replace markup with plain text",
            detail=match.group(0),
        )]

    def _check_arrows(self, code: str) -> List[ValidationIssue]:
        found = [arrow for arrow in self.BROKEN_ARROWS if arrow in code]
        if not found:
            return []
        return [ValidationIssue(
            kind=ViolationKind.BROKEN_ARROW_SYNTAX,
            message="Code contains arrows with whitespace inside the token",
            suggestion="Write arrows as '-->' or '-- label -->'",
            detail=", ".join(repr(a) for a in found),
        )]

    def _find_duplicate_ids(self, code: str) -> Tuple[List[str], int]:
        seen: Dict[str, int] = {}
        for line in code.splitlines():
            match = self.NODE_DEFINITION_RE.match(line)
            if match:
                node_id = match.group(1)
                seen[node_id] = seen.get(node_id, 0) + 1
        duplicates = [node_id for node_id, count in seen.items() if count > 1]
        return duplicates, sum(seen.values())

    def _check_duplicate_ids(self, duplicates: List[str]) -> List[ValidationIssue]:
        if not duplicates:
            return []
        return [ValidationIssue(
            kind=ViolationKind.DUPLICATE_NODE_ID,
            message=f"Node ids defined more than once: {', '.join(duplicates)}",
            suggestion="Define each node once and reference it by id afterwards",
            detail=",".join(duplicates),
        )]

    def _check_structural_syntax(self, code: str) -> List[ValidationIssue]:
        if any(token in code for token in self.STRUCTURAL_TOKENS):
            return []
        lowered = code.lower()
        if any(keyword in lowered for keyword in self.STRUCTURAL_KEYWORDS):
            return []
        return [ValidationIssue(
            kind=ViolationKind.NO_STRUCTURAL_SYNTAX,
            message="Code contains no arrows, brackets or diagram keywords",
            suggestion="Add node definitions or edges such as 'a --> b'",
        )]


def validate_mermaid(text: Optional[str], min_length: int = MIN_DIAGRAM_LENGTH) -> ValidationVerdict:
    """Convenience function to validate Mermaid text."""
    return DiagramValidator(min_length=min_length).validate(text)


def get_validation_summary(text: Optional[str]) -> str:
    """Get a quick validation summary string."""
    return validate_mermaid(text).get_summary()


def raise_on_errors(text: Optional[str]) -> ValidationVerdict:
    """Validate and raise DiagramValidationError if any rule failed."""
    verdict = validate_mermaid(text)
    if not verdict.is_valid:
        raise DiagramValidationError(verdict)
    return verdict
