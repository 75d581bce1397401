# papermap/graph/neighborhood.py

from __future__ import annotations

from typing import Iterable, Set

import networkx as nx

from papermap.models.relationship import Relationship


def build_traversal_graph(relationships: Iterable[Relationship]) -> nx.Graph:
    """
    Undirected adjacency view over the relationships.

    Each relationship contributes one edge between its endpoints regardless
    of direction; parallel relationships collapse into a single edge. The
    direction itself stays on the Relationship objects.
    """
    G = nx.Graph()
    for rel in relationships:
        G.add_edge(rel.from_paper_id, rel.to_paper_id)
    return G


def expand_neighborhood(
    root_id: str,
    relationships: Iterable[Relationship],
    depth: int,
) -> Set[str]:
    """
    Return every paper id within ``depth`` hops of ``root_id``.

    Level-by-level BFS: at each level the frontier is replaced by the
    neighbors not seen yet, and the walk stops early once a level finds
    nothing new. The root is always part of the result, even when it does
    not appear in any relationship.
    """
    G = build_traversal_graph(relationships)

    visited: Set[str] = {root_id}
    if root_id not in G:
        return visited

    frontier: Set[str] = {root_id}
    for _ in range(max(0, depth)):
        discovered: Set[str] = set()
        for node in frontier:
            for nbr in G.neighbors(node):
                if nbr not in visited:
                    discovered.add(nbr)
        if not discovered:
            break
        visited |= discovered
        frontier = discovered

    return visited
