# papermap/graph/io.py

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field

from papermap.models.paper import Paper
from papermap.models.relationship import Relationship

PathLike = Union[str, Path]


class CorpusFile(BaseModel):
    """On-disk shape of a corpus: ``{"papers": [...], "relationships": [...]}``."""

    papers: List[Paper] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)


@dataclass
class Corpus:
    papers: List[Paper] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)


def load_corpus(path: PathLike) -> Corpus:
    """
    Read papers and relationships from a JSON corpus file.

    Raises FileNotFoundError for a missing file and pydantic's
    ValidationError for records that break the model (e.g. strength 11).
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    parsed = CorpusFile.model_validate(data)
    return Corpus(papers=parsed.papers, relationships=parsed.relationships)


def save_corpus(
    corpus: Corpus,
    path: PathLike,
    overwrite: bool = True,
) -> Path:
    """
    Write a corpus as JSON.

    - If `path` has no suffix, `.json` is appended.
    - Creates parent directories if needed.
    - If `overwrite` is False and the file already exists, raises FileExistsError.
    """
    output_path = Path(path)

    if output_path.suffix == "":
        output_path = output_path.with_suffix(".json")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Corpus file already exists and overwrite=False: {output_path}")

    payload = CorpusFile(papers=corpus.papers, relationships=corpus.relationships)
    output_path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")

    return output_path
