# papermap/cli/common.py

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from papermap.config.settings import get_settings
from papermap.config.store import FilterSettingsStore, JsonKeyValueStore
from papermap.engine import GraphEngine
from papermap.graph.io import load_corpus

console = Console()

CORPUS_FILE_OPTION = typer.Option(
    None,
    "--corpus-file",
    "-c",
    help=(
        "Path to a JSON corpus file. "
        "If omitted, corpus.json in the configured data directory is used."
    ),
)

STORE_FILE_OPTION = typer.Option(
    None,
    "--store-file",
    "-s",
    help="JSON file holding saved filter settings (defaults to the data directory).",
)


def open_store(store_file: Optional[Path]) -> FilterSettingsStore:
    settings = get_settings()
    if store_file is None:
        return FilterSettingsStore(settings=settings)
    return FilterSettingsStore(JsonKeyValueStore(store_file), settings=settings)


def load_engine(corpus_file: Optional[Path], store_file: Optional[Path] = None) -> GraphEngine:
    """
    Build an engine over the corpus file, with filters restored from the store.

    Exits with code 1 when the corpus is missing or invalid.
    """
    settings = get_settings()
    path = Path(corpus_file) if corpus_file is not None else settings.corpus_path
    if not path.exists():
        console.print(f"[red]Corpus file not found:[/red] {path}")
        raise typer.Exit(code=1)

    try:
        corpus = load_corpus(path)
    except (ValueError, ValidationError) as exc:
        console.print(f"[red]Invalid corpus file {path}:[/red] {exc}")
        raise typer.Exit(code=1)

    return GraphEngine(
        corpus.papers,
        corpus.relationships,
        store=open_store(store_file),
        settings=settings,
    )
