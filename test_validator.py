"""Tests for the heuristic Mermaid validator"""

import time

import pytest

from diagramkit.validation import (
    DiagramValidationError,
    DiagramValidator,
    ViolationKind,
    get_validation_summary,
    raise_on_errors,
    validate_mermaid,
)

VALID_FLOW = """graph TD
    A[Start] --> B{Is it working?}
    B -->|Yes| C[Great!]
    B -->|No| D[Debug more]
    D --> B"""


def test_valid_flowchart():
    verdict = validate_mermaid(VALID_FLOW)
    assert verdict.is_valid
    assert verdict.violations == ()
    assert verdict.get_summary().startswith("Valid")


@pytest.mark.parametrize("text", ["", "   \n\t", None])
def test_empty_input_short_circuits(text):
    verdict = validate_mermaid(text)
    assert not verdict.is_valid
    assert verdict.violations == (ViolationKind.EMPTY_INPUT,)


def test_duplicate_node_ids():
    verdict = validate_mermaid("graph TD\n    a[X]\n    a[Y]\n    a --> a")
    assert not verdict.is_valid
    assert ViolationKind.DUPLICATE_NODE_ID in verdict.violations
    assert verdict.duplicate_ids == ("a",)
    assert verdict.stats["node_definitions"] == 2


def test_duplicates_across_bracket_kinds():
    verdict = validate_mermaid("graph TD\n    a[X]\n    b{Y}\n    a(Z)\n    b{W}\n    c[Q]\n    a --> b")
    assert set(verdict.duplicate_ids) == {"a", "b"}


def test_duplicate_detection_ignores_references():
    verdict = validate_mermaid("graph TD\n    a[X] --> b[Y]\n    a --> c[Z]\n    b --> c")
    assert not verdict.has(ViolationKind.DUPLICATE_NODE_ID)


def test_duplicates_are_logged(caplog):
    with caplog.at_level("INFO", logger="diagramkit.validation.diagram_validator"):
        validate_mermaid("graph TD\n    dup[X]\n    dup[Y]")
    assert "dup" in caplog.text


def test_unbalanced_brackets():
    verdict = validate_mermaid("graph TD\n    a[Start")
    assert not verdict.is_valid
    assert ViolationKind.UNBALANCED_BRACKETS in verdict.violations


def test_bracket_counts_are_not_nesting_aware():
    # "][" counts as balanced, a documented limitation
    assert not validate_mermaid("graph TD\n    a]Start[ --> b").has(ViolationKind.UNBALANCED_BRACKETS)


def test_unrecognized_type():
    verdict = validate_mermaid("not a diagram at all, just prose text here")
    assert ViolationKind.UNRECOGNIZED_DIAGRAM_TYPE in verdict.violations
    assert ViolationKind.NO_STRUCTURAL_SYNTAX in verdict.violations


@pytest.mark.parametrize(
    "header",
    [
        "graph LR",
        "flowchart TD",
        "sequenceDiagram",
        "SEQUENCEDIAGRAM",
        "classDiagram",
        "erDiagram",
        "journey",
        "gantt",
        "pie title Pets",
        "gitGraph",
        "mindmap",
        "timeline",
    ],
)
def test_recognized_headers(header):
    verdict = validate_mermaid(f"{header}\n    participant a --> b")
    assert not verdict.has(ViolationKind.UNRECOGNIZED_DIAGRAM_TYPE)


def test_code_fence_is_stripped():
    verdict = validate_mermaid(f"```mermaid\n{VALID_FLOW}\n```")
    assert verdict.is_valid


def test_too_short():
    verdict = validate_mermaid("graph TD\na-->b")
    assert verdict.violations == (ViolationKind.TOO_SHORT,)


def test_min_length_is_configurable():
    assert DiagramValidator(min_length=5).validate("graph TD\na-->b").is_valid


@pytest.mark.parametrize("markup", ["<br>", "<br/>", "<div>", "</span>", "<SPAN class='x'>"])
def test_prohibited_markup(markup):
    verdict = validate_mermaid(f"graph TD\n    a[Start{markup}now] --> b")
    assert ViolationKind.PROHIBITED_MARKUP in verdict.violations


@pytest.mark.parametrize("arrow", ["-- >", "- >"])
def test_broken_arrow_syntax(arrow):
    verdict = validate_mermaid(f"graph TD\n    a[Start] {arrow} b[End]")
    assert ViolationKind.BROKEN_ARROW_SYNTAX in verdict.violations


def test_incomplete_labeled_arrow_is_not_flagged():
    verdict = validate_mermaid("graph TD\n    a[Start] -- pending\n    a --> b")
    assert verdict.is_valid


def test_structural_keywords():
    verdict = validate_mermaid("sequenceDiagram\n    participant Alice\n    Note over Alice: hi")
    assert not verdict.has(ViolationKind.NO_STRUCTURAL_SYNTAX)


def test_violations_accumulate_in_rule_order():
    verdict = validate_mermaid("hello <br> x -- > [")
    assert verdict.violations == (
        ViolationKind.UNRECOGNIZED_DIAGRAM_TYPE,
        ViolationKind.UNBALANCED_BRACKETS,
        ViolationKind.PROHIBITED_MARKUP,
        ViolationKind.BROKEN_ARROW_SYNTAX,
    )
    assert len(verdict.issues) == 4
    assert all(issue.message for issue in verdict.issues)


def test_to_dict_and_summary():
    verdict = validate_mermaid("graph TD\n    a[Start")
    data = verdict.to_dict()
    assert data["is_valid"] is False
    assert data["violations"] == ["UNBALANCED_BRACKETS"]
    assert data["issues"][0]["code"] == "UNBALANCED_BRACKETS"
    assert "UNBALANCED_BRACKETS" in get_validation_summary("graph TD\n    a[Start")


def test_raise_on_errors():
    with pytest.raises(DiagramValidationError) as exc:
        raise_on_errors("graph TD\n    a[Start")
    assert exc.value.verdict.has(ViolationKind.UNBALANCED_BRACKETS)
    assert raise_on_errors(VALID_FLOW).is_valid


def test_adversarial_input_is_fast():
    hostile = [
        "graph TD\n" + "a" * 50000,
        "graph TD\n" + " " * 50000 + "a",
        "graph TD\n" + "<" * 50000,
        "graph TD\n" + "< / " * 20000,
        "graph TD\n" + "a[\n" * 20000,
    ]
    start = time.perf_counter()
    for text in hostile:
        validate_mermaid(text)
    assert time.perf_counter() - start < 2.0
