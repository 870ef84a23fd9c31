"""Tests for the DiagramImprover"""

import requests

from diagramkit.llm.base import TextGenerator
from diagramkit.validation import DiagramImprover, ViolationKind, improve_diagram
from diagramkit.validation.diagram_fixer import (
    CONFIDENCE_ALREADY_VALID,
    CONFIDENCE_CLEANED_VALID,
    CONFIDENCE_REWRITE_INVALID,
    CONFIDENCE_REWRITE_VALID,
    CONFIDENCE_UNFIXED,
)

VALID = "graph TD\n    a[Start]\n    b[End]\n\n    a --> b"
BROKEN = "graph TD\n    a[Start\n    a --> b"


class FakeRewriter(TextGenerator):
    def __init__(self, reply: str = "", error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


def test_valid_code_is_returned_as_is():
    rewriter = FakeRewriter(reply="should not be used")
    result = DiagramImprover(rewriter=rewriter).improve(f"```mermaid\n{VALID}\n```")

    assert result.code == VALID
    assert result.valid
    assert result.confidence == CONFIDENCE_ALREADY_VALID
    assert not result.rewriter_used
    assert rewriter.prompts == []


def test_cleaner_alone_fixes_arrows():
    result = improve_diagram("graph TD<br/>    a[Start] -- go -- > b[End]")

    assert result.valid
    assert result.code == "graph TD\n    a[Start] -- go --> b[End]"
    assert result.confidence == CONFIDENCE_CLEANED_VALID
    assert not result.rewriter_used


def test_without_rewriter_returns_cleaned_code():
    result = improve_diagram(BROKEN)

    assert result.code == BROKEN
    assert not result.valid
    assert result.verdict.has(ViolationKind.UNBALANCED_BRACKETS)
    assert result.confidence == CONFIDENCE_UNFIXED


def test_rewriter_fixes_broken_code():
    rewriter = FakeRewriter(reply=f"```mermaid\n{VALID}\n```")
    result = DiagramImprover(rewriter=rewriter).improve(BROKEN, title="Lieferantenwechsel")

    assert result.valid
    assert result.code == VALID
    assert result.rewriter_used
    assert result.confidence == CONFIDENCE_REWRITE_VALID

    prompt = rewriter.prompts[0]
    assert "Lieferantenwechsel" in prompt
    assert "Unbalanced brackets" in prompt
    assert BROKEN in prompt


def test_rewriter_output_still_invalid():
    rewriter = FakeRewriter(reply="this is not mermaid at all, sorry")
    result = DiagramImprover(rewriter=rewriter).improve(BROKEN)

    assert not result.valid
    assert result.rewriter_used
    assert result.confidence == CONFIDENCE_REWRITE_INVALID


def test_rewriter_failure_keeps_cleaned_code():
    rewriter = FakeRewriter(error=requests.ConnectionError("ollama down"))
    result = DiagramImprover(rewriter=rewriter).improve(BROKEN)

    assert result.code == BROKEN
    assert not result.rewriter_used
    assert result.confidence == CONFIDENCE_UNFIXED
    assert "Rewrite failed, original code kept" in result.improvements


def test_empty_rewrite_keeps_cleaned_code():
    result = DiagramImprover(rewriter=FakeRewriter(reply="```\n```")).improve(BROKEN)

    assert result.code == BROKEN
    assert result.confidence == CONFIDENCE_UNFIXED


def test_llm_client_is_lazy():
    improver = DiagramImprover()
    assert improver.rewriter is None

    improver = DiagramImprover(use_llm=True)
    assert improver._rewriter is None
    assert improver.rewriter is not None


def test_to_dict():
    data = improve_diagram(VALID).to_dict()
    assert data["valid"] is True
    assert data["confidence"] == CONFIDENCE_ALREADY_VALID
    assert data["verdict"]["violations"] == []


def test_rewriter_reply_wrapped_in_prose():
    reply = (
        "Here is the corrected code:\n"
        "```mermaid\n"
        "graph TD\n    a[Start] --> b[End]\n"
        "```\n"
        "I balanced the brackets."
    )
    result = DiagramImprover(rewriter=FakeRewriter(reply=reply)).improve(BROKEN)

    assert result.code == "graph TD\n    a[Start] --> b[End]"
    assert result.valid
    assert result.confidence == CONFIDENCE_REWRITE_VALID
