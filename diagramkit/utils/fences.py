import re

_LEADING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE_RE = re.compile(r"\n?```[ \t]*$")


def strip_code_fence(text: str) -> str:
    """
    Remove a markdown code fence wrapped around diagram text.

    Handles both "```mermaid ... ```" and bare "``` ... ```".
    Text without a fence is only trimmed.
    """
    if not text:
        return ""

    stripped = text.strip()
    stripped = _LEADING_FENCE_RE.sub("", stripped, count=1)
    stripped = _TRAILING_FENCE_RE.sub("", stripped, count=1)
    return stripped.strip()


# Opening fence of a block anywhere in the text. A language tag is only taken
# when it sits alone on the fence line, so "```graph TD" keeps its header.
_OPENING_FENCE_RE = re.compile(r"```(?:[A-Za-z0-9_-]*[ \t]*\n)?")


def extract_code_block(text: str) -> str:
    """
    Pull diagram code out of a model reply.

    Replies often wrap the code in prose ("Here is the corrected code:").
    The first closed fenced block wins; a reply without one is treated as
    bare code and only loses a surrounding fence, if any.
    """
    if not text:
        return ""

    opening = _OPENING_FENCE_RE.search(text)
    if opening:
        end = text.find("```", opening.end())
        if end != -1:
            return text[opening.end():end].strip()
    return strip_code_fence(text)
