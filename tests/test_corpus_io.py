# tests/test_corpus_io.py

import json

import pytest
from pydantic import ValidationError

from papermap.graph.io import Corpus, load_corpus, save_corpus
from papermap.graph.schema import FamiliarityLevel, RelationshipType
from papermap.models.paper import Paper
from papermap.models.relationship import Relationship


def build_corpus() -> Corpus:
    return Corpus(
        papers=[
            Paper(
                id="p1",
                title="CsiNet",
                year=2018,
                category="csi_compression",
                tags=["csi", " autoencoder ", ""],
                familiarity_level=FamiliarityLevel.FAMILIAR,
            ),
            Paper(id="p2", title="CRNet", year=2020, category="cnn"),
        ],
        relationships=[
            Relationship(
                id="r1",
                from_paper_id="p2",
                to_paper_id="p1",
                relationship_type=RelationshipType.EXTENDS,
                strength=8,
                description="Multi-resolution encoder on top of CsiNet",
            )
        ],
    )


def test_save_and_load_roundtrip(tmp_path):
    corpus = build_corpus()

    # no suffix: .json is appended
    saved_path = save_corpus(corpus, tmp_path / "corpus")

    assert saved_path.exists()
    assert saved_path.suffix == ".json"

    loaded = load_corpus(saved_path)

    assert loaded.papers == corpus.papers
    assert loaded.relationships == corpus.relationships
    assert loaded.papers[0].tags == ("csi", "autoencoder")


def test_load_corpus_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_corpus(tmp_path / "does_not_exist.json")


def test_save_corpus_no_overwrite(tmp_path):
    path = save_corpus(build_corpus(), tmp_path / "corpus.json")

    with pytest.raises(FileExistsError):
        save_corpus(build_corpus(), path, overwrite=False)


def test_invalid_strength_is_rejected(tmp_path):
    path = tmp_path / "bad.json"
    payload = {
        "papers": [{"id": "p1", "title": "T", "year": 2020}],
        "relationships": [
            {
                "id": "r1",
                "from_paper_id": "p1",
                "to_paper_id": "p1",
                "relationship_type": "extends",
                "strength": 11,
            }
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_corpus(path)
