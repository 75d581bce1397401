# papermap/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from papermap.api.models import (
    BridgeRecommendation,
    Connection,
    EdgePayload,
    GraphStats,
    NodePayload,
)
from papermap.api.query import (
    build_edge_payloads,
    build_node_payloads,
    list_connections,
    most_connected_paper,
    paper_degrees,
    recommend_bridges,
    relationship_type_counts,
)
from papermap.config.settings import Settings, get_settings
from papermap.config.store import FilterSettingsStore
from papermap.graph.filtering import filter_relationships
from papermap.graph.layout import LayoutPosition, compute_layout, layout_orientation
from papermap.graph.schema import LayoutDirection, ViewMode
from papermap.graph.view import GraphView, compose_view
from papermap.models.filters import FilterConfiguration, PinnedFilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Everything the rendering surface needs for one recompute."""

    config: FilterConfiguration
    view: GraphView
    direction: LayoutDirection
    positions: Dict[str, LayoutPosition] = field(default_factory=dict)
    nodes: List[NodePayload] = field(default_factory=list)
    edges: List[EdgePayload] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    bridges: List[BridgeRecommendation] = field(default_factory=list)


class GraphEngine:
    """
    Holds the corpus and the current FilterConfiguration and recomputes the
    displayed graph from scratch on every call to ``snapshot``.

    The configuration is restored from the store on construction and saved
    back after every explicit change. Nothing is cached between snapshots.
    """

    def __init__(
        self,
        papers: Sequence[Paper],
        relationships: Sequence[Relationship],
        store: Optional[FilterSettingsStore] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.papers: List[Paper] = list(papers)
        self.relationships: List[Relationship] = list(relationships)
        self.store = store
        self._config = store.load() if store is not None else FilterConfiguration()

    @property
    def config(self) -> FilterConfiguration:
        return self._config

    def has_paper(self, paper_id: str) -> bool:
        return any(paper.id == paper_id for paper in self.papers)

    # ------------------------------------------------------------------
    # Explicit user actions
    # ------------------------------------------------------------------

    def set_focus(self, paper_id: Optional[str]) -> FilterConfiguration:
        """
        Focus the view on ``paper_id``; ``None`` returns to the overview.

        An unknown id is still stored; the view composer falls back to the
        overview until that paper shows up in the filtered graph.
        """
        if paper_id is None:
            changes = {"focus_paper_id": None, "view_mode": ViewMode.OVERVIEW}
        else:
            changes = {"focus_paper_id": paper_id, "view_mode": ViewMode.FOCUS}
        return self.apply_config(self._config.model_copy(update=changes))

    def apply_config(self, config: FilterConfiguration) -> FilterConfiguration:
        self._config = config
        if self.store is not None:
            self.store.save(config)
        return config

    def pin(self) -> Optional[PinnedFilterConfiguration]:
        if self.store is None:
            return None
        return self.store.pin(self._config)

    def restore_pinned(self) -> Optional[FilterConfiguration]:
        """Replace the current configuration with the pinned one, if any."""
        if self.store is None:
            return None
        pinned = self.store.load_pinned()
        if pinned is None:
            logger.info("No pinned filter settings to restore")
            return None
        return self.apply_config(pinned.unpinned())

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def filtered_relationships(self, config: Optional[FilterConfiguration] = None) -> List[Relationship]:
        return filter_relationships(self.relationships, self.papers, config or self._config)

    def bridging_relationships(self, config: Optional[FilterConfiguration] = None) -> List[Relationship]:
        config = config or self._config
        if self.settings.bridge_ignores_min_strength:
            return filter_relationships(self.relationships, self.papers, config, min_strength=1)
        return self.filtered_relationships(config)

    def connections(self, paper_id: str, view: Optional[GraphView] = None) -> List[Connection]:
        view = view or compose_view(self.papers, self.relationships, self._config)
        return list_connections(paper_id, view.relationships)

    def bridges(
        self,
        paper_id: str,
        limit: Optional[int] = None,
        config: Optional[FilterConfiguration] = None,
    ) -> List[BridgeRecommendation]:
        return recommend_bridges(
            paper_id,
            self.papers,
            self.bridging_relationships(config),
            limit=self.settings.bridge_limit if limit is None else limit,
            weights=self.settings.bridge_weights,
        )

    def stats(self, config: Optional[FilterConfiguration] = None) -> GraphStats:
        """Type counts and the best-connected paper of the displayed graph."""
        view = compose_view(self.papers, self.relationships, config or self._config)
        hub = most_connected_paper(view.papers, view.relationships)
        return GraphStats(
            paper_count=view.node_count,
            relationship_count=view.edge_count,
            relationship_type_counts=relationship_type_counts(view.relationships),
            most_connected_paper=hub,
            most_connected_degree=paper_degrees(view.relationships).get(hub.id, 0) if hub else 0,
        )

    def snapshot(
        self,
        limit: Optional[int] = None,
        config: Optional[FilterConfiguration] = None,
    ) -> EngineSnapshot:
        """
        Recompute the whole view.

        ``config`` previews another configuration without storing it.
        """
        config = config or self._config
        view = compose_view(self.papers, self.relationships, config)
        direction = layout_orientation(config)
        positions = compute_layout(view.papers, config.layer_mode, direction)

        connections: List[Connection] = []
        bridges: List[BridgeRecommendation] = []
        if config.focus_paper_id is not None:
            connections = self.connections(config.focus_paper_id, view)
            bridges = self.bridges(config.focus_paper_id, limit, config)

        logger.debug(
            "Recomputed %s view: %d papers, %d relationships",
            config.view_mode.value,
            view.node_count,
            view.edge_count,
        )

        return EngineSnapshot(
            config=config,
            view=view,
            direction=direction,
            positions=positions,
            nodes=build_node_payloads(view.papers, positions, config),
            edges=build_edge_payloads(view.relationships),
            connections=connections,
            bridges=bridges,
        )
