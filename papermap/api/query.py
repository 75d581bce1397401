from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from papermap.api.models import (
    BridgeRecommendation,
    Connection,
    EdgePayload,
    NodeDisplay,
    NodePayload,
    Position,
)
from papermap.graph.layout import LayoutPosition, TopicFn
from papermap.graph.neighborhood import build_traversal_graph
from papermap.graph.schema import ConnectionDirection, RelationshipType
from papermap.graph.styles import (
    RELATIONSHIP_STYLES,
    category_color,
    category_label,
    edge_stroke_width,
    familiarity_opacity,
    topic_label,
)
from papermap.graph.topics import infer_research_topic
from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship
from papermap.models.scoring import BridgeWeights


# ---------------------------------------------------------------------------
# Direct connections
# ---------------------------------------------------------------------------


def list_connections(
    focus_paper_id: str,
    relationships: Iterable[Relationship],
) -> List[Connection]:
    """
    Return one entry per relationship touching ``focus_paper_id``.

    Direction is relative to the focus paper:
      - 'outgoing' : focus paper is the ``from`` end
      - 'incoming' : focus paper is the ``to`` end
    Order follows the input relationships.
    """
    connections: List[Connection] = []
    for rel in relationships:
        if not rel.touches(focus_paper_id):
            continue
        if rel.from_paper_id == focus_paper_id:
            connections.append(
                Connection(
                    direction=ConnectionDirection.OUTGOING,
                    relationship=rel,
                    other_paper_id=rel.to_paper_id,
                )
            )
        else:
            connections.append(
                Connection(
                    direction=ConnectionDirection.INCOMING,
                    relationship=rel,
                    other_paper_id=rel.from_paper_id,
                )
            )
    return connections


def rank_connections(
    connections: Sequence[Connection],
    papers: Iterable[Paper],
) -> List[Connection]:
    """
    Side-panel ordering: strongest first, then the newer other paper.

    Connections whose other paper is not in ``papers`` are dropped.
    """
    years = {paper.id: paper.year for paper in papers}
    known = [c for c in connections if c.other_paper_id in years]
    return sorted(
        known,
        key=lambda c: (-c.relationship.strength, -years[c.other_paper_id]),
    )


_OUTGOING_SUMMARY = {
    RelationshipType.EXTENDS: "extends",
    RelationshipType.BUILDS_ON: "builds on",
    RelationshipType.INSPIRES: "inspires",
}

_INCOMING_SUMMARY = {
    RelationshipType.INSPIRED_BY: "inspired",
    RelationshipType.EXTENDS: "extended by",
    RelationshipType.BUILDS_ON: "built upon by",
}


def describe_connection(relationship_type: RelationshipType, direction: ConnectionDirection) -> str:
    """Short label for a connection as read from the focus paper."""
    if direction == ConnectionDirection.OUTGOING:
        return _OUTGOING_SUMMARY.get(relationship_type, "linked to")
    return _INCOMING_SUMMARY.get(relationship_type, "linked from")


# ---------------------------------------------------------------------------
# Graph statistics
# ---------------------------------------------------------------------------


def relationship_type_counts(relationships: Iterable[Relationship]) -> Dict[RelationshipType, int]:
    """Number of relationships per type; every type is present, zeros included."""
    counts: Dict[RelationshipType, int] = {rtype: 0 for rtype in RelationshipType}
    for rel in relationships:
        counts[rel.relationship_type] += 1
    return counts


def paper_degrees(relationships: Iterable[Relationship]) -> Dict[str, int]:
    """Relationship count per paper id, both directions, parallel edges counted."""
    degrees: Dict[str, int] = {}
    for rel in relationships:
        degrees[rel.from_paper_id] = degrees.get(rel.from_paper_id, 0) + 1
        degrees[rel.to_paper_id] = degrees.get(rel.to_paper_id, 0) + 1
    return degrees


def most_connected_paper(
    papers: Sequence[Paper],
    relationships: Iterable[Relationship],
) -> Optional[Paper]:
    """
    Paper with the most relationships. Ties go to the paper listed first.

    Returns None only for an empty paper list; with no relationships the
    first paper is returned.
    """
    degrees = paper_degrees(relationships)
    best: Optional[Paper] = None
    best_degree = -1
    for paper in papers:
        degree = degrees.get(paper.id, 0)
        if degree > best_degree:
            best, best_degree = paper, degree
    return best


# ---------------------------------------------------------------------------
# Bridge recommendations
# ---------------------------------------------------------------------------


def _edge_strengths(relationships: Iterable[Relationship]) -> Dict[frozenset, int]:
    """Strongest relationship between each unordered pair of papers."""
    best: Dict[frozenset, int] = {}
    for rel in relationships:
        pair = frozenset((rel.from_paper_id, rel.to_paper_id))
        best[pair] = max(best.get(pair, 0), rel.strength)
    return best


def recommend_bridges(
    focus_paper_id: str,
    papers: Sequence[Paper],
    relationships: Sequence[Relationship],
    limit: int = 5,
    weights: Optional[BridgeWeights] = None,
) -> List[BridgeRecommendation]:
    """
    Rank papers reachable from the focus paper through exactly one
    intermediate paper.

    The focus paper and its direct neighbors are never recommended. Each
    candidate is scored from:
      - the number of distinct intermediates ("common connections")
      - the strongest bridge (summed strength of its two edges)
      - a shared category
      - shared tags (capped)
      - publication-year proximity

    Ties are broken by newer year, then title, then id.
    """
    weights = weights or BridgeWeights()
    if limit <= 0:
        return []

    paper_map = {paper.id: paper for paper in papers}
    focus = paper_map.get(focus_paper_id)
    if focus is None:
        return []

    G = build_traversal_graph(relationships)
    if focus_paper_id not in G:
        return []

    strengths = _edge_strengths(relationships)
    direct: Set[str] = set(G.neighbors(focus_paper_id))

    via: Dict[str, List[str]] = {}
    for middle in sorted(direct):
        for candidate in G.neighbors(middle):
            if candidate == focus_paper_id or candidate in direct:
                continue
            via.setdefault(candidate, []).append(middle)

    focus_tags = set(focus.tags)
    recommendations: List[BridgeRecommendation] = []

    for candidate_id, middles in via.items():
        candidate = paper_map.get(candidate_id)
        if candidate is None:
            continue

        reasons: List[str] = []
        score = weights.common_connection * len(middles)
        reasons.append(f"{len(middles)} common connection(s)")

        best_bridge = max(
            strengths[frozenset((focus_paper_id, m))] + strengths[frozenset((m, candidate_id))]
            for m in middles
        )
        score += weights.bridge_strength * best_bridge / 20.0

        if candidate.category == focus.category:
            score += weights.category_match
            reasons.append("same category")

        shared_tags = [tag for tag in candidate.tags if tag in focus_tags]
        if shared_tags:
            score += weights.tag_overlap * min(weights.tag_overlap_cap, len(shared_tags))
            reasons.append(f"shared tags: {', '.join(shared_tags[:2])}")

        year_gap = abs(candidate.year - focus.year)
        if year_gap <= weights.year_window:
            score += weights.year_proximity
            reasons.append("close publication year")
        else:
            score -= weights.year_gap_penalty * (year_gap - weights.year_window)

        recommendations.append(
            BridgeRecommendation(
                paper=candidate,
                score=round(score, 4),
                reasons=reasons,
                via=middles,
            )
        )

    recommendations.sort(
        key=lambda r: (-r.score, -r.paper.year, r.paper.title, r.paper.id)
    )
    return recommendations[:limit]


# ---------------------------------------------------------------------------
# Render payloads
# ---------------------------------------------------------------------------


def flow_endpoints(relationship: Relationship) -> tuple[str, str]:
    """
    Drawn (source, target) of a relationship.

    Most relationships are authored "newer paper -> referenced paper", so the
    edge is reversed to read old -> new. 'inspires' is authored as
    "source inspires target" and keeps its direction.
    """
    if relationship.relationship_type == RelationshipType.INSPIRES:
        return relationship.from_paper_id, relationship.to_paper_id
    return relationship.to_paper_id, relationship.from_paper_id


def build_node_payloads(
    papers: Iterable[Paper],
    positions: Mapping[str, LayoutPosition],
    config: FilterConfiguration,
    topic_of: TopicFn = infer_research_topic,
) -> List[NodePayload]:
    nodes: List[NodePayload] = []
    for paper in papers:
        pos = positions.get(paper.id)
        if pos is None:
            continue
        topic = topic_of(paper)
        opacity = (
            familiarity_opacity(paper.familiarity_level)
            if config.use_familiarity_emphasis
            else 1.0
        )
        nodes.append(
            NodePayload(
                id=paper.id,
                position=Position(x=pos.x, y=pos.y),
                display=NodeDisplay(
                    title=paper.title,
                    year=paper.year,
                    category=paper.category,
                    category_label=category_label(paper.category),
                    topic=getattr(topic, "value", str(topic)),
                    topic_label=topic_label(topic),
                    color=paper.color or category_color(paper.category),
                    familiarity_level=paper.familiarity_level,
                    is_favorite=paper.is_favorite,
                    opacity=opacity,
                ),
            )
        )
    return nodes


def build_edge_payloads(relationships: Iterable[Relationship]) -> List[EdgePayload]:
    edges: List[EdgePayload] = []
    for rel in relationships:
        style = RELATIONSHIP_STYLES[rel.relationship_type]
        source, target = flow_endpoints(rel)
        edges.append(
            EdgePayload(
                id=rel.id,
                source_id=source,
                target_id=target,
                type_label=style.label,
                strength_label=f"{rel.strength}/10",
                color=style.color,
                stroke_width=edge_stroke_width(rel.strength),
                dash=style.dash,
            )
        )
    return edges
