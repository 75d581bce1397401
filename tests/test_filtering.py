# tests/test_filtering.py

from papermap.graph.filtering import filter_relationships
from papermap.graph.schema import RelationshipType
from papermap.models.filters import FilterConfiguration
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship


def build_toy_corpus():
    papers = [
        Paper(id="A", title="Paper A", year=2020),
        Paper(id="B", title="Paper B", year=2020),
        Paper(id="C", title="Paper C", year=2021),
    ]
    relationships = [
        Relationship(id="r1", from_paper_id="A", to_paper_id="B",
                     relationship_type=RelationshipType.EXTENDS, strength=7),
        Relationship(id="r2", from_paper_id="B", to_paper_id="C",
                     relationship_type=RelationshipType.INSPIRED_BY, strength=3),
        Relationship(id="r3", from_paper_id="C", to_paper_id="GHOST",
                     relationship_type=RelationshipType.EXTENDS, strength=9),
        Relationship(id="r4", from_paper_id="A", to_paper_id="C",
                     relationship_type=RelationshipType.CHALLENGES, strength=8),
    ]
    return papers, relationships


def test_min_strength_drops_weak_relationships():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(min_strength=5)

    kept = filter_relationships(rels, papers, config)

    assert [r.id for r in kept] == ["r1", "r4"]


def test_scenario_min_strength_five_keeps_only_a_to_b():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(
        min_strength=5,
        enabled_relationship_types=[RelationshipType.EXTENDS, RelationshipType.INSPIRED_BY],
    )

    kept = filter_relationships(rels, papers, config)

    assert [r.id for r in kept] == ["r1"]


def test_disabled_types_are_dropped():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(enabled_relationship_types=["extends"])

    kept = filter_relationships(rels, papers, config)

    assert {r.relationship_type for r in kept} == {RelationshipType.EXTENDS}
    assert "r4" not in {r.id for r in kept}


def test_dangling_endpoint_is_dropped_silently():
    papers, rels = build_toy_corpus()

    kept = filter_relationships(rels, papers, FilterConfiguration())

    assert "r3" not in {r.id for r in kept}


def test_empty_enabled_types_yields_empty_result():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(enabled_relationship_types=[])

    assert config.enabled_relationship_types == ()
    assert filter_relationships(rels, papers, config) == []


def test_every_survivor_satisfies_the_filter():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(
        min_strength=4,
        enabled_relationship_types=["extends", "challenges", "inspired_by"],
    )
    paper_ids = {p.id for p in papers}

    for rel in filter_relationships(rels, papers, config):
        assert rel.strength >= config.min_strength
        assert rel.relationship_type in config.enabled_relationship_types
        assert rel.from_paper_id in paper_ids
        assert rel.to_paper_id in paper_ids


def test_filter_is_repeatable_and_keeps_input_order():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration()

    first = filter_relationships(rels, papers, config)
    second = filter_relationships(rels, papers, config)

    assert first == second
    assert [r.id for r in first] == ["r1", "r2", "r4"]


def test_min_strength_override():
    papers, rels = build_toy_corpus()
    config = FilterConfiguration(min_strength=9)

    kept = filter_relationships(rels, papers, config, min_strength=1)

    assert [r.id for r in kept] == ["r1", "r2", "r4"]
