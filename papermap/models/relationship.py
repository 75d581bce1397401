# papermap/models/relationship.py

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from papermap.graph.schema import RelationshipType


class Relationship(BaseModel):
    """
    Directed, typed, weighted edge between two papers.

    The direction carries meaning ("A extends B"), but traversal code is free
    to treat the edge as undirected. Endpoint existence is not checked here;
    the relationship filter drops edges whose endpoints are missing.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    from_paper_id: str
    to_paper_id: str
    relationship_type: RelationshipType
    strength: int = Field(default=5, ge=1, le=10)
    description: Optional[str] = None

    def touches(self, paper_id: str) -> bool:
        return self.from_paper_id == paper_id or self.to_paper_id == paper_id
