# papermap/models/paper.py

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from papermap.graph.schema import FamiliarityLevel


class Paper(BaseModel):
    """
    A single research paper in the corpus.

    Papers are created by an external loader and are never mutated by the
    engine; the model is frozen so they can be shared between views safely.

    Fields
    ------
    category:
        Usually one of ``PaperCategory``; unknown categories are kept as-is
        and simply sort after the known ones in the category layout.
    tags:
        Free-form tags. Blank entries are dropped and the rest stripped.
    familiarity_level:
        How well the reader knows this paper. Only used for display emphasis.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    year: int
    category: str = "other"
    tags: Tuple[str, ...] = ()
    familiarity_level: FamiliarityLevel = FamiliarityLevel.NOT_STARTED
    is_favorite: bool = False
    color: Optional[str] = Field(
        default=None,
        description="Display color as a hex string; the category color when unset.",
    )
    authors: Tuple[str, ...] = ()
    abstract: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value):
        if value is None:
            return ()
        return tuple(str(tag).strip() for tag in value if tag and str(tag).strip())
