"""Deterministic 2D layouts for the displayed papers."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple

from papermap.graph.schema import (
    LayerMode,
    LayoutDirection,
    PaperCategory,
    RESEARCH_TOPIC_ORDER,
    ViewMode,
)
from papermap.graph.topics import infer_research_topic
from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper


@dataclass(frozen=True)
class LayoutPosition:
    """Top-left anchor of one paper node."""

    paper_id: str
    x: float
    y: float


TopicFn = Callable[[Paper], Hashable]

ESTIMATED_NODE_WIDTH = 260.0
INNER_COL_GAP = ESTIMATED_NODE_WIDTH + 44.0
INNER_ROW_GAP = 210.0
MAX_CELL_COLS = 2
TOPIC_GAP = MAX_CELL_COLS * INNER_COL_GAP + 160.0
YEAR_SECTION_GAP = 120.0
CATEGORY_COLUMN_GAP = INNER_COL_GAP + 96.0

CATEGORY_ORDER: Tuple[str, ...] = tuple(c.value for c in PaperCategory)


def _sort_key(paper: Paper) -> Tuple[int, str, str]:
    return (paper.year, paper.title, paper.id)


def _unique(papers: Iterable[Paper]) -> List[Paper]:
    seen = set()
    out: List[Paper] = []
    for paper in papers:
        if paper.id in seen:
            continue
        seen.add(paper.id)
        out.append(paper)
    return out


def _key(value: Hashable) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _ordered_groups(present: Iterable[str], preferred: Sequence[str]) -> List[str]:
    """Known groups in ``preferred`` order, then any others alphabetically."""
    present_set = set(present)
    known = [g for g in preferred if g in present_set]
    extra = sorted(present_set - set(preferred))
    return known + extra


def _centered(index: int, count: int, gap: float) -> float:
    return (index - (count - 1) / 2) * gap


def _layout_by_year(papers: Sequence[Paper]) -> Dict[str, Tuple[float, float]]:
    rows: Dict[int, List[Paper]] = defaultdict(list)
    for paper in papers:
        rows[paper.year].append(paper)

    coords: Dict[str, Tuple[float, float]] = {}
    for row_index, year in enumerate(sorted(rows)):
        row = sorted(rows[year], key=lambda p: (p.title, p.id))
        for col, paper in enumerate(row):
            coords[paper.id] = (_centered(col, len(row), INNER_COL_GAP), row_index * INNER_ROW_GAP)
    return coords


def _layout_by_year_topic(papers: Sequence[Paper], topic_of: TopicFn) -> Dict[str, Tuple[float, float]]:
    ordered = sorted(papers, key=_sort_key)
    topic_by_id = {paper.id: _key(topic_of(paper)) for paper in ordered}
    year_order = sorted({paper.year for paper in ordered})
    topic_order = _ordered_groups(topic_by_id.values(), [_key(t) for t in RESEARCH_TOPIC_ORDER])

    cells: Dict[Tuple[int, str], List[Paper]] = defaultdict(list)
    for paper in ordered:
        cells[(paper.year, topic_by_id[paper.id])].append(paper)

    # Each year band is as tall as its fullest cell.
    year_start: Dict[int, float] = {}
    cursor = 0.0
    for year in year_order:
        year_start[year] = cursor
        max_rows = 1
        for topic in topic_order:
            count = len(cells.get((year, topic), ()))
            max_rows = max(max_rows, -(-count // MAX_CELL_COLS))
        cursor += max_rows * INNER_ROW_GAP + YEAR_SECTION_GAP

    coords: Dict[str, Tuple[float, float]] = {}
    for year in year_order:
        for topic_index, topic in enumerate(topic_order):
            cell = cells.get((year, topic), [])
            lane_x = _centered(topic_index, len(topic_order), TOPIC_GAP)
            columns = min(MAX_CELL_COLS, len(cell))
            for index, paper in enumerate(cell):
                local_col = index % MAX_CELL_COLS
                local_row = index // MAX_CELL_COLS
                coords[paper.id] = (
                    lane_x + _centered(local_col, columns, INNER_COL_GAP),
                    year_start[year] + local_row * INNER_ROW_GAP,
                )
    return coords


def _layout_by_category(papers: Sequence[Paper]) -> Dict[str, Tuple[float, float]]:
    columns: Dict[str, List[Paper]] = defaultdict(list)
    for paper in sorted(papers, key=_sort_key):
        columns[paper.category].append(paper)

    order = _ordered_groups(columns.keys(), CATEGORY_ORDER)
    coords: Dict[str, Tuple[float, float]] = {}
    for col_index, category in enumerate(order):
        x = _centered(col_index, len(order), CATEGORY_COLUMN_GAP)
        for row, paper in enumerate(columns[category]):
            coords[paper.id] = (x, row * INNER_ROW_GAP)
    return coords


def compute_layout(
    papers: Iterable[Paper],
    layer_mode: LayerMode = LayerMode.YEAR_TOPIC,
    direction: LayoutDirection = LayoutDirection.TOP_BOTTOM,
    *,
    topic_of: TopicFn = infer_research_topic,
) -> Dict[str, LayoutPosition]:
    """Assign one position per paper under the chosen grouping strategy.

    The result depends only on the papers, the layer mode, the direction and
    the topic function, so re-running after a filter change gives the same
    coordinates for papers that are still displayed in the same groups.

    Args:
        papers: Papers to place. Duplicate ids are placed once.
        layer_mode: Grouping strategy (year, year x topic, or category).
        direction: ``LR`` transposes the top-to-bottom coordinates.
        topic_of: Topic classifier used by the year x topic lanes.

    Returns:
        Mapping of paper id to its ``LayoutPosition``.
    """

    unique = _unique(papers)
    if not unique:
        return {}

    if layer_mode == LayerMode.YEAR:
        coords = _layout_by_year(unique)
    elif layer_mode == LayerMode.CATEGORY:
        coords = _layout_by_category(unique)
    else:
        coords = _layout_by_year_topic(unique, topic_of)

    transpose = direction == LayoutDirection.LEFT_RIGHT
    positions: Dict[str, LayoutPosition] = {}
    for paper in unique:
        x, y = coords[paper.id]
        if transpose:
            x, y = y, x
        positions[paper.id] = LayoutPosition(paper_id=paper.id, x=float(x), y=float(y))
    return positions


def layout_orientation(config: FilterConfiguration) -> LayoutDirection:
    """Timeline views always flow left to right; other modes follow the config."""
    if config.view_mode == ViewMode.TIMELINE:
        return LayoutDirection.LEFT_RIGHT
    return config.layout_direction


def bounding_box(positions: Mapping[str, LayoutPosition]) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of the positions, zeros when empty."""
    if not positions:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in positions.values()]
    ys = [p.y for p in positions.values()]
    return (min(xs), min(ys), max(xs), max(ys))
