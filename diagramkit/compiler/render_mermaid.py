import logging
import re
from typing import Dict, List, Optional, Set

from diagramkit.compiler.types import GraphEdge, GraphNode, NodeShape, StructuredGraph
from diagramkit.config import DEFAULT_DIRECTION, MAX_LABEL_LENGTH
from diagramkit.dsl.sanitizer import sanitize_label, truncate_label

logger = logging.getLogger(__name__)

INDENT = "    "
DIRECTIONS = {"TD", "TB", "LR", "RL", "BT"}
ERROR_DIAGRAM = "graph TD; error[Diagram unavailable]"

SHAPE_BRACKETS = {
    NodeShape.BOX: ("[", "]"),
    NodeShape.DIAMOND: ("{", "}"),
    NodeShape.ROUNDED: ("(", ")"),
}

_UNSAFE_ID_RE = re.compile(r"\W")
# Angle brackets are what turn label text into markup or arrow tokens.
_ANGLE_RE = re.compile(r"[<>]")


class _IdMapper:
    """
    Maps raw node ids to Mermaid-safe ids, one instance per render.

    Non-word characters become "_". Distinct raw ids that end up with the
    same safe id get a numeric suffix, so "step 1" and "step-1" render as
    step_1 and step_1_2.
    """

    def __init__(self):
        self._map: Dict[str, str] = {}
        self._used: Set[str] = set()

    def get(self, raw_id: str) -> str:
        raw_id = raw_id or ""
        if raw_id not in self._map:
            base = _UNSAFE_ID_RE.sub("_", raw_id) or "node"
            safe = base
            counter = 1
            while safe in self._used:
                counter += 1
                safe = f"{base}_{counter}"
            self._used.add(safe)
            self._map[raw_id] = safe
        return self._map[raw_id]


def _render_label(raw: Optional[str], max_len: int) -> str:
    label = sanitize_label(_ANGLE_RE.sub(" ", raw or ""))
    return truncate_label(label, max_len)


def _render_node(node: GraphNode, ids: _IdMapper, max_len: int) -> str:
    opening, closing = SHAPE_BRACKETS.get(node.shape, SHAPE_BRACKETS[NodeShape.BOX])
    label = _render_label(node.label, max_len)
    return f"{INDENT}{ids.get(node.id)}{opening}{label}{closing}"


def _render_edge(edge: GraphEdge, ids: _IdMapper, max_len: int) -> str:
    source = ids.get(edge.source)
    target = ids.get(edge.target)

    if edge.label and edge.label.strip():
        label = _render_label(edge.label, max_len)
        return f"{INDENT}{source} --{label}--> {target}"

    return f"{INDENT}{source} --> {target}"


def render_mermaid(
    graph: Optional[StructuredGraph],
    direction: str = DEFAULT_DIRECTION,
    max_label_length: int = MAX_LABEL_LENGTH,
) -> str:
    """
    Render a StructuredGraph as a Mermaid flowchart.

    Layout:
        graph TD
            a[Start]
            b{Valid?}

            a --> b
            b --yes--> c

    Node declarations come first, then one blank line, then edges, each in
    input order. Identical input always yields identical text. Distinct node
    ids stay distinct after normalization.
    A missing graph renders a one-node placeholder diagram instead of failing.
    """
    if graph is None:
        logger.warning("[COMPILER] no graph given, rendering placeholder")
        return ERROR_DIAGRAM

    direction = (direction or "").upper()
    if direction not in DIRECTIONS:
        direction = "TD"

    ids = _IdMapper()
    lines: List[str] = [f"graph {direction}"]

    for node in graph.nodes:
        lines.append(_render_node(node, ids, max_label_length))

    if graph.edges:
        lines.append("")
        for edge in graph.edges:
            lines.append(_render_edge(edge, ids, max_label_length))

    logger.debug(
        "[COMPILER] rendered %d nodes, %d edges",
        len(graph.nodes),
        len(graph.edges),
    )
    return "\n".join(lines).rstrip()
