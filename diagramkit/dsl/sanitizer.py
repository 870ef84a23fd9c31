"""
Label sanitizer for Mermaid node and edge text.

Everything that ends up between node brackets or inside an edge label goes
through sanitize_label(). The output never contains characters Mermaid
treats as structure, and is never empty.
"""

import re

from diagramkit.config import FALLBACK_LABEL

# Brackets of all three node shapes, double quotes and the pipe used by
# "-->|label|" edge syntax.
_STRUCTURAL_CHARS_RE = re.compile(r'[\[\](){}"|]')
_WHITESPACE_RE = re.compile(r"\s+")

_BULLET_RE = re.compile(r"^\s*(?:[-*•+]|\d{1,3}[.)])\s+")
_HEADING_RE = re.compile(r"^\s*#{1,6}\s*")
_CITATION_RE = re.compile(r"\[\^?\d{1,3}\]|【[^】]*】")
_HTML_TAG_RE = re.compile(r"<[^<>]{0,200}>")
_EMPHASIS_RE = re.compile(r"\*\*|__|`")


def sanitize_label(raw: str) -> str:
    # Order matters: whitespace is collapsed after removal so that
    # "a [b] c" does not end up with a double space.
    text = _STRUCTURAL_CHARS_RE.sub("", raw or "")
    text = _WHITESPACE_RE.sub(" ", text)
    text = text.strip()
    return text or FALLBACK_LABEL


def sanitize_fragment(text: str) -> str:
    """
    Turn a sentence fragment from model output into a label.

    Strips list bullets, citation markers like "[1]" or "【3†source】",
    inline HTML tags and markdown emphasis before the regular label rules.
    """
    if not text:
        return FALLBACK_LABEL

    # Citations first, otherwise "[1]" loses its brackets and leaves "1".
    fragment = _CITATION_RE.sub("", text)
    fragment = _HTML_TAG_RE.sub(" ", fragment)
    fragment = _EMPHASIS_RE.sub("", fragment)
    fragment = _BULLET_RE.sub("", fragment, count=1)
    return sanitize_label(fragment)


def sanitize_title(text: str) -> str:
    """Markdown heading ("## Lieferantenwechsel") to plain label."""
    if not text:
        return FALLBACK_LABEL
    return sanitize_fragment(_HEADING_RE.sub("", text, count=1))


def truncate_label(label: str, max_len: int) -> str:
    """Truncate long labels with an ellipsis. max_len <= 0 disables it."""
    if max_len <= 0 or len(label) <= max_len:
        return label
    if max_len <= 3:
        return label[:max_len]
    return label[:max_len - 3].rstrip() + "..."
