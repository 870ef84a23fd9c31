"""
Diagram Improver - Hybrid repair of Mermaid text from an external model.

Cleaner fixes (markup tags, split arrows) -> applied first, no LLM
Anything the cleaner cannot fix -> optional LLM rewrite
LLM missing or failing -> cleaned original is returned, never an exception
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from diagramkit.dsl.cleaner import clean_mermaid
from diagramkit.llm.base import TextGenerator
from diagramkit.llm.prompts import build_repair_prompt
from diagramkit.utils.fences import extract_code_block, strip_code_fence
from diagramkit.validation.diagram_validator import (
    DiagramValidator,
    ValidationVerdict,
)

logger = logging.getLogger(__name__)

CONFIDENCE_ALREADY_VALID = 0.95
CONFIDENCE_REWRITE_VALID = 0.85
CONFIDENCE_CLEANED_VALID = 0.5
CONFIDENCE_REWRITE_INVALID = 0.4
CONFIDENCE_UNFIXED = 0.1


@dataclass
class FixResult:
    """Result of an improvement run"""
    code: str
    verdict: ValidationVerdict
    confidence: float
    improvements: List[str] = field(default_factory=list)
    rewriter_used: bool = False

    @property
    def valid(self) -> bool:
        return self.verdict.is_valid

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "valid": self.valid,
            "confidence": self.confidence,
            "improvements": self.improvements,
            "rewriter_used": self.rewriter_used,
            "verdict": self.verdict.to_dict(),
        }


class DiagramImprover:
    """
    Repairs Mermaid text with the cleaner, then an optional rewriter.

    Usage:
        improver = DiagramImprover(use_llm=False)
        result = improver.improve(raw_code, title="Lieferantenwechsel")
        render(result.code)
        if not result.valid:
            show_warning(result.verdict.messages)
    """

    def __init__(self, rewriter: Optional[TextGenerator] = None, use_llm: bool = False):
        """
        Args:
            rewriter: Anything with generate(prompt) -> str. Takes precedence.
            use_llm: Build the default LLMClient lazily when no rewriter is given.
        """
        self.use_llm = use_llm
        self.validator = DiagramValidator()
        self._rewriter = rewriter

    @property
    def rewriter(self) -> Optional[TextGenerator]:
        """Lazy load LLM client"""
        if self._rewriter is None and self.use_llm:
            from diagramkit.llm.client import LLMClient
            self._rewriter = LLMClient()
        return self._rewriter

    def improve(
        self,
        code: str,
        title: Optional[str] = None,
        context: Optional[str] = None,
    ) -> FixResult:
        original = strip_code_fence(code or "")
        verdict = self.validator.validate(original)
        if verdict.is_valid:
            logger.info("[FIXER] code is already valid, returning as-is")
            return FixResult(
                code=original,
                verdict=verdict,
                confidence=CONFIDENCE_ALREADY_VALID,
                improvements=["Code was already valid"],
            )

        cleaned = clean_mermaid(original)
        improvements: List[str] = []
        if cleaned != original:
            improvements.append("Repaired markup tags and arrow tokens")
            verdict = self.validator.validate(cleaned)
            if verdict.is_valid:
                logger.info("[FIXER] cleaner alone produced valid code")
                return FixResult(
                    code=cleaned,
                    verdict=verdict,
                    confidence=CONFIDENCE_CLEANED_VALID,
                    improvements=improvements,
                )

        rewriter = self.rewriter
        if rewriter is None:
            logger.info(
                "[FIXER] no rewriter configured, %d violations remain",
                len(verdict.violations),
            )
            return FixResult(
                code=cleaned,
                verdict=verdict,
                confidence=CONFIDENCE_UNFIXED,
                improvements=improvements,
            )

        prompt = build_repair_prompt(cleaned, verdict.messages, title=title, context=context)
        try:
            rewritten = rewriter.generate(prompt)
        except (requests.RequestException, RuntimeError, ValueError) as e:
            logger.warning("[FIXER] rewrite failed, keeping cleaned code: %s", e)
            improvements.append("Rewrite failed, original code kept")
            return FixResult(
                code=cleaned,
                verdict=verdict,
                confidence=CONFIDENCE_UNFIXED,
                improvements=improvements,
            )

        rewritten = clean_mermaid(extract_code_block(rewritten or ""))
        if not rewritten:
            logger.warning("[FIXER] rewriter returned no code, keeping cleaned code")
            improvements.append("Rewrite returned no code, original code kept")
            return FixResult(
                code=cleaned,
                verdict=verdict,
                confidence=CONFIDENCE_UNFIXED,
                improvements=improvements,
            )

        new_verdict = self.validator.validate(rewritten)
        improvements.append("LLM-based syntax correction")
        logger.info(
            "[FIXER] rewrite done: %d -> %d chars, valid=%s",
            len(cleaned),
            len(rewritten),
            new_verdict.is_valid,
        )
        return FixResult(
            code=rewritten,
            verdict=new_verdict,
            confidence=CONFIDENCE_REWRITE_VALID if new_verdict.is_valid else CONFIDENCE_REWRITE_INVALID,
            improvements=improvements,
            rewriter_used=True,
        )


def improve_diagram(
    code: str,
    rewriter: Optional[TextGenerator] = None,
    use_llm: bool = False,
    title: Optional[str] = None,
    context: Optional[str] = None,
) -> FixResult:
    """Convenience function to improve Mermaid text."""
    return DiagramImprover(rewriter=rewriter, use_llm=use_llm).improve(
        code, title=title, context=context
    )
