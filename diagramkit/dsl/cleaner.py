import logging
import re

logger = logging.getLogger(__name__)

# <br>, <br/>, <br /> in any case
LINE_BREAK_TAG_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)

# "-- >" and "- ->" with whitespace inside the arrow token
SPLIT_LONG_ARROW_RE = re.compile(r"--[ \t]+>")
SPLIT_SHORT_ARROW_RE = re.compile(r"-[ \t]+->")

# "-- text -- >" after step 2 has already become "-- text -->",
# this catches the remaining "-- text --  >" / "-- text ->" shapes.
# Label and padding are bounded so a long line without ">" cannot
# backtrack quadratically.
LABELED_ARROW_RE = re.compile(
    r"--[ \t]{1,8}([^\s>-][^\n>]{0,120}?)[ \t]{1,8}--?[ \t]{0,8}>"
)


def _close_labeled_arrow(match: re.Match) -> str:
    label = match.group(1).strip()
    return f"-- {label} -->"


def clean_mermaid(raw: str) -> str:
    """
    Best-effort repair of Mermaid text that did not come from the compiler.

    Steps run in a fixed order, each over the previous step's output:
      1. line-break tags become real newlines
      2. whitespace inside arrow tokens is closed up
      3. labeled arrows with stray spaces become "-- text -->"

    Text that matches none of these passes through unchanged. The result is
    not guaranteed to be valid.
    """
    if not raw:
        return ""

    code = LINE_BREAK_TAG_RE.sub("\n", raw)

    code = SPLIT_LONG_ARROW_RE.sub("-->", code)
    code = SPLIT_SHORT_ARROW_RE.sub("->", code)

    code = LABELED_ARROW_RE.sub(_close_labeled_arrow, code)

    if code != raw:
        logger.debug("[CLEANER] repaired %d -> %d chars", len(raw), len(code))

    return code
