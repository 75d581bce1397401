# papermap/models/scoring.py

from __future__ import annotations

from pydantic import BaseModel, Field


class BridgeWeights(BaseModel):
    """
    Weighting policy for bridge recommendations.

    Fields
    ------
    common_connection:
        Added once per intermediate paper linking the focus paper and the
        candidate.
    bridge_strength:
        Multiplies the strongest bridge, measured as the summed strength of
        its two edges divided by 20 (so in (0, 1]).
    category_match:
        Flat bonus when the candidate shares the focus paper's category.
    tag_overlap:
        Added per shared tag, up to ``tag_overlap_cap`` tags.
    year_proximity:
        Flat bonus when the publication years are at most ``year_window``
        apart.
    year_gap_penalty:
        Subtracted per year beyond ``year_window``. Zero disables it.
    """

    common_connection: float = Field(default=4.0, ge=0.0)
    bridge_strength: float = Field(default=2.0, ge=0.0)
    category_match: float = Field(default=3.0, ge=0.0)
    tag_overlap: float = Field(default=1.0, ge=0.0)
    tag_overlap_cap: int = Field(default=3, ge=0)
    year_proximity: float = Field(default=1.0, ge=0.0)
    year_window: int = Field(default=2, ge=0)
    year_gap_penalty: float = Field(default=0.0, ge=0.0)
