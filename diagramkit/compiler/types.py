from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class NodeShape(Enum):
    BOX = "box"            # id[label]
    DIAMOND = "diamond"    # id{label}
    ROUNDED = "rounded"    # id(label)


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    shape: NodeShape = NodeShape.BOX


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    label: Optional[str] = None


@dataclass(frozen=True)
class StructuredGraph:
    nodes: Tuple[GraphNode, ...] = field(default_factory=tuple)
    edges: Tuple[GraphEdge, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but keep the graph immutable.
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
