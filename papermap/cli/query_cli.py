from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from papermap.api.query import describe_connection, rank_connections
from papermap.cli.common import CORPUS_FILE_OPTION, STORE_FILE_OPTION, console, load_engine
from papermap.engine import GraphEngine
from papermap.graph.layout import bounding_box
from papermap.graph.neighborhood import expand_neighborhood
from papermap.graph.schema import LayerMode, ViewMode
from papermap.models.filters import FilterConfiguration

app = typer.Typer(
    help="Read/query utilities over a paper corpus."
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require_paper(engine: GraphEngine, paper_id: str) -> None:
    if not engine.has_paper(paper_id):
        console.print(f"[red]Paper '{paper_id}' not found in corpus.[/red]")
        raise typer.Exit(code=1)


def _titles(engine: GraphEngine) -> Dict[str, str]:
    return {paper.id: paper.title for paper in engine.papers}


def _with_overrides(config: FilterConfiguration, **overrides: Any) -> FilterConfiguration:
    """Re-validate the config with the non-None overrides applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return config
    return FilterConfiguration.model_validate({**config.model_dump(), **changes})


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("view")
def view(
    mode: Optional[ViewMode] = typer.Option(None, "--mode", "-m", help="overview, focus or timeline."),
    layer: Optional[LayerMode] = typer.Option(None, "--layer", "-l", help="year, year_topic or category."),
    focus: Optional[str] = typer.Option(None, "--focus", "-f", help="Focus paper id (focus mode)."),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=1, max=2, help="Focus depth."),
    min_strength: Optional[int] = typer.Option(
        None, "--min-strength", min=1, max=10, help="Minimum relationship strength."
    ),
    corpus_file: Optional[Path] = CORPUS_FILE_OPTION,
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Show the displayed papers with their layout positions.

    Options override the saved filter settings for this run only.
    """
    engine = load_engine(corpus_file, store_file)
    if focus is not None and mode is None:
        mode = ViewMode.FOCUS
    config = _with_overrides(
        engine.config,
        view_mode=mode,
        layer_mode=layer,
        focus_paper_id=focus,
        focus_depth=depth,
        min_strength=min_strength,
    )
    snap = engine.snapshot(config=config)

    console.print(
        f"[bold]{config.view_mode.value} view[/bold] "
        f"(layer={config.layer_mode.value}, direction={snap.direction.value}): "
        f"{snap.view.node_count} papers, {snap.view.edge_count} relationships"
    )

    if not snap.nodes:
        console.print("  (nothing to display)")
        return

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Paper id")
    tbl.add_column("Title")
    tbl.add_column("Year", justify="right")
    tbl.add_column("Topic")
    tbl.add_column("x", justify="right")
    tbl.add_column("y", justify="right")

    for node in sorted(snap.nodes, key=lambda n: (n.position.y, n.position.x)):
        tbl.add_row(
            node.id,
            node.display.title,
            str(node.display.year),
            node.display.topic,
            f"{node.position.x:.0f}",
            f"{node.position.y:.0f}",
        )

    console.print(tbl)
    min_x, min_y, max_x, max_y = bounding_box(snap.positions)
    console.print(f"[dim]extent: x {min_x:.0f}..{max_x:.0f}, y {min_y:.0f}..{max_y:.0f}[/dim]")


@app.command("neighbors")
def neighbors(
    paper_id: str = typer.Argument(..., help="Paper id whose neighborhood to inspect."),
    depth: int = typer.Option(
        1,
        "--depth",
        "-d",
        min=0,
        help="Graph distance to traverse (1 = direct neighbors).",
    ),
    corpus_file: Optional[Path] = CORPUS_FILE_OPTION,
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Show the papers within DEPTH hops, over the currently filtered relationships.
    """
    engine = load_engine(corpus_file, store_file)
    _require_paper(engine, paper_id)

    visited = expand_neighborhood(paper_id, engine.filtered_relationships(), depth)
    titles = _titles(engine)

    console.print(f"[bold]Neighborhood of '{paper_id}'[/bold] (depth ≤ {depth}):")
    others = sorted(visited - {paper_id})
    if not others:
        console.print("  (no neighbors)")
        return

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Paper id")
    tbl.add_column("Title")
    for other in others:
        tbl.add_row(other, titles.get(other, ""))
    console.print(tbl)


@app.command("connections")
def connections(
    paper_id: str = typer.Argument(..., help="Paper id to list direct relationships for."),
    corpus_file: Optional[Path] = CORPUS_FILE_OPTION,
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    List the paper's displayed relationships, strongest first.
    """
    engine = load_engine(corpus_file, store_file)
    _require_paper(engine, paper_id)

    ranked = rank_connections(engine.connections(paper_id), engine.papers)
    titles = _titles(engine)

    if not ranked:
        console.print(f"[yellow]No displayed connections for '{paper_id}'.[/yellow]")
        return

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Direction")
    tbl.add_column("Relation")
    tbl.add_column("Other paper")
    tbl.add_column("Title")
    tbl.add_column("Strength", justify="right")

    for conn in ranked:
        rel = conn.relationship
        tbl.add_row(
            conn.direction.value,
            describe_connection(rel.relationship_type, conn.direction),
            conn.other_paper_id,
            titles.get(conn.other_paper_id, ""),
            f"{rel.strength}/10",
        )
    console.print(tbl)


@app.command("stats")
def stats(
    corpus_file: Optional[Path] = CORPUS_FILE_OPTION,
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Count displayed relationships per type and name the most connected paper.
    """
    engine = load_engine(corpus_file, store_file)
    summary = engine.stats()

    console.print(
        f"[bold]{summary.paper_count} papers, {summary.relationship_count} relationships[/bold]"
    )

    tbl = Table(show_header=True, header_style="bold")
    tbl.add_column("Relationship type")
    tbl.add_column("Count", justify="right")
    for rtype, count in summary.relationship_type_counts.items():
        tbl.add_row(rtype.value, str(count))
    console.print(tbl)

    hub = summary.most_connected_paper
    if hub is None:
        console.print("  (no papers displayed)")
        return
    console.print(
        f"Most connected: {hub.id} ({hub.title}) with {summary.most_connected_degree} relationship(s)"
    )


@app.command("bridges")
def bridges(
    paper_id: str = typer.Argument(..., help="Paper id to recommend bridge papers for."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Max recommendations."),
    corpus_file: Optional[Path] = CORPUS_FILE_OPTION,
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Recommend papers two hops away that are not yet directly connected.
    """
    engine = load_engine(corpus_file, store_file)
    _require_paper(engine, paper_id)

    recs = engine.bridges(paper_id, limit)
    if not recs:
        console.print(f"[yellow]No bridge recommendations for '{paper_id}'.[/yellow]")
        return

    console.print(f"[bold]Bridge recommendations for '{paper_id}':[/bold]")
    rows: List[str] = []
    for rec in recs:
        rows.append(
            f"  • {rec.paper.id}: {rec.paper.title} "
            f"(score={rec.score:.2f}; via {', '.join(rec.via)}; {' / '.join(rec.reasons)})"
        )
    for row in rows:
        console.print(row)
