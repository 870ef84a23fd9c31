from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional

from diagramkit.compiler.types import GraphEdge, GraphNode, NodeShape, StructuredGraph


class NodePayload(BaseModel):
    id: str = Field(min_length=1)
    label: str = ""
    shape: Literal["box", "diamond", "rounded"] = "box"

    @field_validator("shape", mode="before")
    @classmethod
    def _lower_shape(cls, value):
        return value.lower() if isinstance(value, str) else value

    def to_node(self) -> GraphNode:
        return GraphNode(id=self.id, label=self.label, shape=NodeShape(self.shape))


class EdgePayload(BaseModel):
    """Upstream producers send "from"/"to", which are reserved words here."""
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", min_length=1)
    target: str = Field(alias="to", min_length=1)
    label: Optional[str] = None

    def to_edge(self) -> GraphEdge:
        return GraphEdge(source=self.source, target=self.target, label=self.label)


class GraphPayload(BaseModel):
    """Structured graph as delivered by the recommendation/search step."""
    nodes: List[NodePayload] = Field(default_factory=list)
    edges: List[EdgePayload] = Field(default_factory=list)

    def to_graph(self) -> StructuredGraph:
        return StructuredGraph(
            nodes=tuple(n.to_node() for n in self.nodes),
            edges=tuple(e.to_edge() for e in self.edges),
        )
