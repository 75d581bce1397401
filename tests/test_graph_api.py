from fastapi.testclient import TestClient

from papermap.api.graph_api import app
from papermap.config.settings import Settings
from papermap.config.store import FilterSettingsStore, JsonKeyValueStore
from papermap.engine import GraphEngine
from papermap.graph.schema import RelationshipType
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship


def _build_test_engine(tmp_path) -> GraphEngine:
    papers = [
        Paper(id="A", title="Paper A", year=2019, category="cnn"),
        Paper(id="B", title="Paper B", year=2020, category="cnn"),
        Paper(id="C", title="Paper C", year=2021, category="cnn"),
        Paper(id="ALONE", title="Unconnected", year=2018),
    ]
    relationships = [
        Relationship(id="ab", from_paper_id="B", to_paper_id="A",
                     relationship_type=RelationshipType.EXTENDS, strength=7),
        Relationship(id="bc", from_paper_id="C", to_paper_id="B",
                     relationship_type=RelationshipType.INSPIRED_BY, strength=3),
    ]
    settings = Settings(DATA_DIR=tmp_path)
    store = FilterSettingsStore(JsonKeyValueStore(tmp_path / "filters.json"), settings=settings)
    return GraphEngine(papers, relationships, store=store, settings=settings)


def _client(monkeypatch, tmp_path) -> TestClient:
    from papermap.api import graph_api

    engine = _build_test_engine(tmp_path)
    monkeypatch.setattr(graph_api, "get_engine", lambda: engine)
    return TestClient(app)


def test_health_endpoint():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_graph_overview(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.get("/graph")
    assert resp.status_code == 200
    data = resp.json()

    assert data["view_mode"] == "overview"
    assert data["direction"] == "TB"
    assert data["focus_paper_id"] is None
    assert {n["id"] for n in data["nodes"]} == {"A", "B", "C"}

    edges = {e["id"]: e for e in data["edges"]}
    assert set(edges) == {"ab", "bc"}
    # drawn older -> newer
    assert (edges["ab"]["source_id"], edges["ab"]["target_id"]) == ("A", "B")
    assert edges["ab"]["strength_label"] == "7/10"


def test_focus_then_graph(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.post("/focus", json={"paper_id": "A"})
    assert resp.status_code == 200
    assert resp.json()["viewMode"] == "focus"
    assert resp.json()["focusPaperId"] == "A"

    data = client.get("/graph").json()
    assert data["view_mode"] == "focus"
    assert {n["id"] for n in data["nodes"]} == {"A", "B"}

    resp = client.post("/focus", json={"paper_id": None})
    assert resp.json()["viewMode"] == "overview"


def test_focus_unknown_paper_is_404(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.post("/focus", json={"paper_id": "nope"})
    assert resp.status_code == 404


def test_connections_endpoint(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.get("/papers/B/connections")
    assert resp.status_code == 200
    data = resp.json()

    assert data["paper_id"] == "B"
    directions = {c["other_paper_id"]: c["direction"] for c in data["connections"]}
    assert directions == {"A": "outgoing", "C": "incoming"}

    assert client.get("/papers/ALONE/connections").json()["connections"] == []
    assert client.get("/papers/missing/connections").status_code == 404


def test_bridges_endpoint(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.get("/papers/A/bridges")
    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    assert [r["paper"]["id"] for r in recs] == ["C"]
    assert recs[0]["via"] == ["B"]

    assert client.get("/papers/A/bridges", params={"limit": 0}).json()["recommendations"] == []
    assert client.get("/papers/missing/bridges").status_code == 404


def test_put_filters_normalizes_and_applies(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.put(
        "/filters",
        json={"minStrength": 5, "enabledRelationshipTypes": ["extends", "inspired_by", "cites"]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["minStrength"] == 5
    assert data["enabledRelationshipTypes"] == ["extends", "inspired_by"]

    assert client.get("/filters").json()["minStrength"] == 5
    graph = client.get("/graph").json()
    assert {e["id"] for e in graph["edges"]} == {"ab"}

    # weak B-C edge is hidden, so C is no longer reachable in two hops
    assert client.get("/papers/A/bridges").json()["recommendations"] == []


def test_pin_and_restore_filters(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    assert client.post("/filters/restore").status_code == 404

    client.put("/filters", json={"minStrength": 4})
    resp = client.post("/filters/pin")
    assert resp.status_code == 200
    assert "savedAt" in resp.json()

    client.put("/filters", json={"minStrength": 9})
    resp = client.post("/filters/restore")
    assert resp.status_code == 200
    assert resp.json()["minStrength"] == 4
    assert client.get("/filters").json()["minStrength"] == 4


def test_graph_stats_endpoint(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path)

    resp = client.get("/graph/stats")
    assert resp.status_code == 200
    data = resp.json()

    assert data["paper_count"] == 3
    assert data["relationship_count"] == 2
    assert data["relationship_type_counts"]["extends"] == 1
    assert data["relationship_type_counts"]["inspired_by"] == 1
    assert data["relationship_type_counts"]["related"] == 0
    assert data["most_connected_paper"]["id"] == "B"
    assert data["most_connected_degree"] == 2
