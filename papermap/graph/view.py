# papermap/graph/view.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from papermap.graph.filtering import filter_relationships
from papermap.graph.neighborhood import expand_neighborhood
from papermap.graph.schema import ViewMode
from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphView:
    """Papers and relationships selected for display."""

    papers: List[Paper] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    @property
    def paper_ids(self) -> List[str]:
        return [paper.id for paper in self.papers]

    @property
    def node_count(self) -> int:
        return len(self.papers)

    @property
    def edge_count(self) -> int:
        return len(self.relationships)


def _incident_papers(papers: Sequence[Paper], relationships: Sequence[Relationship]) -> List[Paper]:
    linked = set()
    for rel in relationships:
        linked.add(rel.from_paper_id)
        linked.add(rel.to_paper_id)
    return [paper for paper in papers if paper.id in linked]


def compose_view(
    papers: Sequence[Paper],
    relationships: Sequence[Relationship],
    config: FilterConfiguration,
) -> GraphView:
    """
    Select the papers and relationships shown for the configured view mode.

    - overview / timeline: every filtered relationship, and every paper that
      touches at least one of them (corpus order).
    - focus: the overview selection restricted to the neighborhood of
      ``config.focus_paper_id`` within ``config.focus_depth`` hops. Only
      relationships with both ends inside the neighborhood are kept.

    A focus view without a usable focus paper (none set, or not part of the
    overview) falls back to the overview selection.
    """
    filtered = filter_relationships(relationships, papers, config)
    overview = GraphView(papers=_incident_papers(papers, filtered), relationships=filtered)

    if config.view_mode != ViewMode.FOCUS:
        return overview

    focus_id = config.focus_paper_id
    if focus_id is None or focus_id not in set(overview.paper_ids):
        logger.debug("Focus paper %r not in current view; showing overview", focus_id)
        return overview

    visited = expand_neighborhood(focus_id, filtered, config.focus_depth)
    return GraphView(
        papers=[paper for paper in overview.papers if paper.id in visited],
        relationships=[
            rel
            for rel in filtered
            if rel.from_paper_id in visited and rel.to_paper_id in visited
        ],
    )
