from typing import List, Optional

REPAIR_PROMPT = """You are an expert in Mermaid diagram syntax. Fix the following Mermaid code.

TITLE: {title}
CONTEXT: {context}

ORIGINAL CODE:
```mermaid
{code}
```

PROBLEMS FOUND:
- {problems}

Rules:
- Use only valid Mermaid syntax (graph TD, flowchart, sequenceDiagram, ...)
- Keep the original meaning, nodes and structure
- Define every node once, then reference it by id
- No HTML tags such as <br> or <div>
- Write arrows as --> or -- label -->

Return ONLY the corrected Mermaid code, without explanations or markdown fences.
"""


def build_repair_prompt(
    code: str,
    problems: List[str],
    title: Optional[str] = None,
    context: Optional[str] = None,
) -> str:
    return REPAIR_PROMPT.format(
        title=title or "Unknown",
        context=context or "No context available",
        code=code,
        problems="\n- ".join(problems) if problems else "none detected",
    )
