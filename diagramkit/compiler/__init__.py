from typing import Optional

from diagramkit.compiler.render_mermaid import render_mermaid
from diagramkit.compiler.types import GraphEdge, GraphNode, NodeShape, StructuredGraph
from diagramkit.config import DEFAULT_DIRECTION, MAX_LABEL_LENGTH


def compile_graph(
    graph: Optional[StructuredGraph],
    direction: str = DEFAULT_DIRECTION,
    max_label_length: int = MAX_LABEL_LENGTH,
) -> str:
    return render_mermaid(graph, direction=direction, max_label_length=max_label_length)


__all__ = [
    "compile_graph",
    "render_mermaid",
    "GraphNode",
    "GraphEdge",
    "NodeShape",
    "StructuredGraph",
]
