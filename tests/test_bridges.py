# tests/test_bridges.py

from papermap.api.query import recommend_bridges
from papermap.config.settings import Settings
from papermap.engine import GraphEngine
from papermap.graph.schema import RelationshipType
from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship
from papermap.models.scoring import BridgeWeights


def _rel(rid, src, dst, strength=5, rtype=RelationshipType.BUILDS_ON):
    return Relationship(
        id=rid,
        from_paper_id=src,
        to_paper_id=dst,
        relationship_type=rtype,
        strength=strength,
    )


def build_scored_corpus():
    papers = [
        Paper(id="F", title="Focus", year=2020, category="cnn", tags=["x", "y"]),
        Paper(id="M1", title="Middle one", year=2019, category="other"),
        Paper(id="M2", title="Middle two", year=2019, category="other"),
        Paper(id="K", title="Candidate", year=2021, category="cnn", tags=["x", "y", "z"]),
        Paper(id="FAR", title="Far away", year=2010, category="other"),
    ]
    relationships = [
        _rel("f-m1", "F", "M1", 5),
        _rel("m1-k", "M1", "K", 5),
        _rel("f-m2", "F", "M2", 10),
        _rel("m2-k", "K", "M2", 10),
        _rel("m2-far", "M2", "FAR", 2),
    ]
    return papers, relationships


def test_score_combines_all_signals():
    papers, rels = build_scored_corpus()

    recs = recommend_bridges("F", papers, rels)

    top = recs[0]
    assert top.paper.id == "K"
    # 2 common * 4 + best bridge (10+10)/20 * 2 + category 3 + 2 shared tags + close year 1
    assert top.score == 16.0
    assert top.via == ["M1", "M2"]
    assert top.reasons == [
        "2 common connection(s)",
        "same category",
        "shared tags: x, y",
        "close publication year",
    ]


def test_only_two_hop_candidates_are_recommended():
    papers, rels = build_scored_corpus()

    ids = [r.paper.id for r in recommend_bridges("F", papers, rels)]

    assert ids == ["K", "FAR"]
    assert "F" not in ids
    assert "M1" not in ids and "M2" not in ids


def test_direct_neighbor_in_a_triangle_is_excluded():
    papers = [Paper(id=pid, title=pid, year=2020) for pid in ("A", "B", "C")]
    rels = [_rel("ab", "A", "B"), _rel("bc", "B", "C"), _rel("ac", "A", "C")]

    assert recommend_bridges("A", papers, rels) == []


def test_ties_prefer_newer_papers():
    papers = [
        Paper(id="F", title="Focus", year=2020),
        Paper(id="M", title="Middle", year=2020),
        Paper(id="OLDER", title="Older", year=2021),
        Paper(id="NEWER", title="Newer", year=2022),
    ]
    rels = [_rel("fm", "F", "M"), _rel("mo", "M", "OLDER"), _rel("mn", "M", "NEWER")]

    recs = recommend_bridges("F", papers, rels)

    assert recs[0].score == recs[1].score
    assert [r.paper.id for r in recs] == ["NEWER", "OLDER"]


def test_limit_and_unknown_focus():
    papers, rels = build_scored_corpus()

    assert len(recommend_bridges("F", papers, rels, limit=1)) == 1
    assert recommend_bridges("F", papers, rels, limit=0) == []
    assert recommend_bridges("NOPE", papers, rels) == []


def test_custom_weights():
    papers, rels = build_scored_corpus()
    weights = BridgeWeights(category_match=0, tag_overlap=0, year_proximity=0, bridge_strength=0)

    recs = recommend_bridges("F", papers, rels, weights=weights)

    assert {r.paper.id: r.score for r in recs} == {"K": 8.0, "FAR": 4.0}


def build_scenario():
    # A --extends(7)--> B --inspired_by(3)--> C
    papers = [
        Paper(id="A", title="Paper A", year=2020),
        Paper(id="B", title="Paper B", year=2020),
        Paper(id="C", title="Paper C", year=2021),
    ]
    relationships = [
        _rel("ab", "A", "B", 7, RelationshipType.EXTENDS),
        _rel("bc", "B", "C", 3, RelationshipType.INSPIRED_BY),
    ]
    config = FilterConfiguration(
        min_strength=5,
        enabled_relationship_types=["extends", "inspired_by"],
    )
    return papers, relationships, config


def test_bridges_follow_displayed_edges_by_default(tmp_path):
    papers, rels, config = build_scenario()
    engine = GraphEngine(papers, rels, settings=Settings(DATA_DIR=tmp_path))
    engine.apply_config(config)

    assert engine.bridges("A") == []


def test_bridges_may_cross_weak_edges_when_enabled(tmp_path):
    papers, rels, config = build_scenario()
    settings = Settings(DATA_DIR=tmp_path, bridge_ignores_min_strength=True)
    engine = GraphEngine(papers, rels, settings=settings)
    engine.apply_config(config)

    recs = engine.bridges("A")

    assert [r.paper.id for r in recs] == ["C"]
    assert recs[0].via == ["B"]
    # the displayed view still hides the weak edge
    assert [r.id for r in engine.filtered_relationships()] == ["ab"]
