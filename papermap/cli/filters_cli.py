from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from papermap.cli.common import STORE_FILE_OPTION, console, open_store
from papermap.graph.schema import LayerMode, LayoutDirection, RelationshipType, ViewMode
from papermap.models.filters import FilterConfiguration

app = typer.Typer(help="Inspect and change the saved graph filter settings.")


def _print_config(config: FilterConfiguration, title: str) -> None:
    tbl = Table(title=title, show_header=True, header_style="bold")
    tbl.add_column("Setting")
    tbl.add_column("Value")
    for key, value in config.to_snapshot().items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value) or "(none)"
        tbl.add_row(key, "" if value is None else str(value))
    console.print(tbl)


@app.command("show")
def show(
    as_json: bool = typer.Option(False, "--json", help="Print the raw snapshot as JSON."),
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Show the filter settings restored at start.
    """
    config = open_store(store_file).load()
    if as_json:
        console.print_json(json.dumps(config.to_snapshot()))
        return
    _print_config(config, "Filter settings")


@app.command("set")
def set_filters(
    mode: Optional[ViewMode] = typer.Option(None, "--mode", "-m"),
    layer: Optional[LayerMode] = typer.Option(None, "--layer", "-l"),
    direction: Optional[LayoutDirection] = typer.Option(None, "--direction"),
    focus: Optional[str] = typer.Option(None, "--focus", "-f", help="Focus paper id; '' clears it."),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", min=1, max=2),
    min_strength: Optional[int] = typer.Option(None, "--min-strength", min=1, max=10),
    types: Optional[List[RelationshipType]] = typer.Option(
        None, "--type", "-t", help="Enabled relationship type; repeat for several."
    ),
    emphasis: Optional[bool] = typer.Option(
        None, "--emphasis/--no-emphasis", help="Fade nodes by familiarity."
    ),
    store_file: Optional[Path] = STORE_FILE_OPTION,
) -> None:
    """
    Update and save the filter settings. Unspecified settings are kept.
    """
    store = open_store(store_file)
    current = store.load()

    changes = {
        "view_mode": mode,
        "layer_mode": layer,
        "layout_direction": direction,
        "focus_paper_id": focus,
        "focus_depth": depth,
        "min_strength": min_strength,
        "enabled_relationship_types": types or None,
        "use_familiarity_emphasis": emphasis,
    }
    changes = {k: v for k, v in changes.items() if v is not None}

    config = FilterConfiguration.model_validate({**current.model_dump(), **changes})
    store.save(config)
    _print_config(config, "Saved filter settings")


@app.command("pin")
def pin(store_file: Optional[Path] = STORE_FILE_OPTION) -> None:
    """
    Pin the current settings so they can be restored later.
    """
    store = open_store(store_file)
    pinned = store.pin(store.load())
    console.print(f"[green]Pinned filter settings at {pinned.saved_at.isoformat()}[/green]")


@app.command("restore")
def restore(store_file: Optional[Path] = STORE_FILE_OPTION) -> None:
    """
    Replace the current settings with the pinned snapshot.
    """
    store = open_store(store_file)
    pinned = store.load_pinned()
    if pinned is None:
        console.print("[red]No pinned filter settings found.[/red]")
        raise typer.Exit(code=1)

    config = pinned.unpinned()
    store.save(config)
    _print_config(config, f"Restored settings pinned at {pinned.saved_at.isoformat()}")
