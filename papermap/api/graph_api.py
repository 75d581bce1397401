from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

from papermap.api.models import BridgesResponse, ConnectionsResponse, GraphResponse, GraphStats
from papermap.config.settings import get_settings
from papermap.config.store import FilterSettingsStore
from papermap.engine import GraphEngine
from papermap.graph.io import load_corpus
from papermap.models.filters import FilterConfiguration, PinnedFilterConfiguration

logger = logging.getLogger("papermap.web")
logging.basicConfig(level=get_settings().LOG_LEVEL.upper())

app = FastAPI(
    title="Paper Map API",
    description="Filtered, laid-out views over a corpus of related research papers.",
    version="0.1.0",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log method, path, and response status.
    """
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info(
        "Completed %s %s with status %s in %.2fms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Engine access
# ---------------------------------------------------------------------------

_ENGINE_CACHE: Optional[GraphEngine] = None


def _load_engine_from_disk() -> GraphEngine:
    """
    Build the engine from the configured corpus file.

    In tests, this function is bypassed because test modules monkeypatch
    get_engine() directly to return an engine over a small toy corpus.
    """
    global _ENGINE_CACHE

    if _ENGINE_CACHE is not None:
        return _ENGINE_CACHE

    settings = get_settings()
    path = settings.corpus_path
    if not path.exists():
        raise RuntimeError(f"No corpus found at {path}. Set PAPERMAP_DATA_DIR or add the file.")

    corpus = load_corpus(path)
    logger.info(
        "Loaded corpus from %s: %d papers, %d relationships",
        path,
        len(corpus.papers),
        len(corpus.relationships),
    )
    _ENGINE_CACHE = GraphEngine(
        corpus.papers,
        corpus.relationships,
        store=FilterSettingsStore(settings=settings),
        settings=settings,
    )
    return _ENGINE_CACHE


def get_engine() -> GraphEngine:
    """
    Indirection point for retrieving the engine.

    Tests monkeypatch this function, so all endpoints must call get_engine()
    rather than touching _ENGINE_CACHE directly.
    """
    return _load_engine_from_disk()


def _require_paper(engine: GraphEngine, paper_id: str) -> None:
    if not engine.has_paper(paper_id):
        raise HTTPException(status_code=404, detail="Paper not found")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class FocusRequest(BaseModel):
    paper_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/graph", response_model=GraphResponse)
def get_graph_view() -> GraphResponse:
    """
    Displayed nodes (with positions) and edges for the current configuration.
    """
    snap = get_engine().snapshot()
    return GraphResponse(
        view_mode=snap.config.view_mode.value,
        layer_mode=snap.config.layer_mode.value,
        direction=snap.direction.value,
        focus_paper_id=snap.config.focus_paper_id,
        nodes=snap.nodes,
        edges=snap.edges,
    )


@app.get("/graph/stats", response_model=GraphStats)
def get_graph_stats() -> GraphStats:
    """
    Relationship counts per type and the most connected displayed paper.
    """
    return get_engine().stats()


@app.get("/papers/{paper_id}/connections", response_model=ConnectionsResponse)
def get_connections(paper_id: str) -> ConnectionsResponse:
    engine = get_engine()
    _require_paper(engine, paper_id)
    return ConnectionsResponse(paper_id=paper_id, connections=engine.connections(paper_id))


@app.get("/papers/{paper_id}/bridges", response_model=BridgesResponse)
def get_bridges(
    paper_id: str,
    limit: Optional[int] = Query(None, ge=0, le=50, description="Max recommendations."),
) -> BridgesResponse:
    engine = get_engine()
    _require_paper(engine, paper_id)
    return BridgesResponse(paper_id=paper_id, recommendations=engine.bridges(paper_id, limit))


@app.post("/focus", response_model=FilterConfiguration)
def set_focus(request: FocusRequest) -> FilterConfiguration:
    """
    Focus the graph on a paper, or clear the focus with ``paper_id: null``.
    """
    engine = get_engine()
    if request.paper_id is not None:
        _require_paper(engine, request.paper_id)
    return engine.set_focus(request.paper_id)


@app.get("/filters", response_model=FilterConfiguration)
def get_filters() -> FilterConfiguration:
    return get_engine().config


@app.put("/filters", response_model=FilterConfiguration)
def put_filters(config: FilterConfiguration) -> FilterConfiguration:
    return get_engine().apply_config(config)


@app.post("/filters/pin", response_model=PinnedFilterConfiguration)
def pin_filters() -> PinnedFilterConfiguration:
    pinned = get_engine().pin()
    if pinned is None:
        raise HTTPException(status_code=409, detail="No settings store configured.")
    return pinned


@app.post("/filters/restore", response_model=FilterConfiguration)
def restore_filters() -> FilterConfiguration:
    restored = get_engine().restore_pinned()
    if restored is None:
        raise HTTPException(status_code=404, detail="No pinned filter settings.")
    return restored
