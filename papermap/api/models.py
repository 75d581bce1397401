# papermap/api/models.py

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from papermap.graph.schema import ConnectionDirection, FamiliarityLevel, RelationshipType
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship


class Position(BaseModel):
    x: float
    y: float


class NodeDisplay(BaseModel):
    """
    Metadata a renderer needs to draw one paper node.
    """
    title: str
    year: int
    category: str = Field(..., description="Raw paper category.")
    category_label: str
    topic: str = Field(..., description="Inferred research topic lane.")
    topic_label: str
    color: str
    familiarity_level: FamiliarityLevel
    is_favorite: bool = False
    opacity: float = Field(
        1.0,
        ge=0.0,
        le=1.0,
        description="Familiarity-based opacity when emphasis is on, else 1.",
    )


class NodePayload(BaseModel):
    id: str
    position: Position
    display: NodeDisplay


class EdgePayload(BaseModel):
    """
    One relationship as drawn. ``source_id``/``target_id`` follow the flow
    direction (older work to newer work), which is not always the authored
    ``from``/``to`` direction.
    """
    id: str
    source_id: str
    target_id: str
    type_label: str
    strength_label: str
    color: str
    stroke_width: float
    dash: Optional[str] = None


class Connection(BaseModel):
    """A direct relationship of the focus paper, seen from that paper."""
    direction: ConnectionDirection
    relationship: Relationship
    other_paper_id: str


class BridgeRecommendation(BaseModel):
    """A paper two hops away from the focus paper, with its score."""
    paper: Paper
    score: float
    reasons: List[str] = Field(default_factory=list)
    via: List[str] = Field(
        default_factory=list,
        description="Intermediate paper ids linking the focus paper and this one.",
    )


class GraphResponse(BaseModel):
    view_mode: str
    layer_mode: str
    direction: str
    focus_paper_id: Optional[str] = None
    nodes: List[NodePayload] = Field(default_factory=list)
    edges: List[EdgePayload] = Field(default_factory=list)


class ConnectionsResponse(BaseModel):
    paper_id: str
    connections: List[Connection] = Field(default_factory=list)


class BridgesResponse(BaseModel):
    paper_id: str
    recommendations: List[BridgeRecommendation] = Field(default_factory=list)


class GraphStats(BaseModel):
    """
    Summary counts over the displayed graph.
    """
    paper_count: int
    relationship_count: int
    relationship_type_counts: Dict[RelationshipType, int] = Field(
        default_factory=dict,
        description="Displayed relationships per type, zeros included.",
    )
    most_connected_paper: Optional[Paper] = None
    most_connected_degree: int = 0
