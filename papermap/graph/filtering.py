# papermap/graph/filtering.py

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship

logger = logging.getLogger(__name__)


def filter_relationships(
    relationships: Iterable[Relationship],
    papers: Iterable[Paper],
    config: FilterConfiguration,
    *,
    min_strength: Optional[int] = None,
) -> List[Relationship]:
    """
    Reduce the full relationship set to the ones the current filter allows.

    A relationship survives iff:
      - its type is one of ``config.enabled_relationship_types``
      - its strength is at least the minimum strength
      - both endpoints are papers in ``papers``

    Relationships with a dangling endpoint are dropped silently; they are a
    data problem, not a caller error. Input order is preserved.

    ``min_strength`` overrides ``config.min_strength`` when given. The engine
    uses this to collect bridging edges below the display threshold.
    """
    enabled = set(config.enabled_relationship_types)
    if not enabled:
        return []

    threshold = config.min_strength if min_strength is None else min_strength
    paper_ids = {paper.id for paper in papers}

    kept: List[Relationship] = []
    dangling = 0
    for rel in relationships:
        if rel.relationship_type not in enabled:
            continue
        if rel.strength < threshold:
            continue
        if rel.from_paper_id not in paper_ids or rel.to_paper_id not in paper_ids:
            dangling += 1
            continue
        kept.append(rel)

    if dangling:
        logger.debug("Dropped %d relationship(s) with unknown endpoints", dangling)

    return kept
