# papermap/cli/main.py

from __future__ import annotations

import typer
from papermap.cli import filters_cli, query_cli

app = typer.Typer(help="CLI tools for exploring a related-papers graph.")

app.add_typer(query_cli.app, name="query")
app.add_typer(filters_cli.app, name="filters")

if __name__ == "__main__":
    app()
