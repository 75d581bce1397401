# papermap/models/filters.py

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from papermap.graph.schema import (
    ALL_RELATIONSHIP_TYPES,
    CORE_RELATIONSHIP_TYPES,
    LayerMode,
    LayoutDirection,
    RelationshipType,
    ViewMode,
)

MIN_STRENGTH_RANGE = (1, 10)
FOCUS_DEPTH_RANGE = (1, 2)


def _clamp_int(value: Any, bounds: Tuple[int, int], default: int) -> int:
    """
    Round and clamp a numeric input into ``bounds``.

    Numeric strings are parsed first. Anything that is not a finite number
    (including bools) falls back to ``default`` rather than failing
    validation.
    """
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    low, high = bounds
    return max(low, min(high, int(round(value))))


def normalize_relationship_types(values: Any) -> Tuple[RelationshipType, ...]:
    """
    Keep known relationship types only, de-duplicated in first-seen order.
    """
    if values is None:
        return ()
    if isinstance(values, (str, RelationshipType)):
        values = [values]

    known = {t.value: t for t in ALL_RELATIONSHIP_TYPES}
    seen = set()
    out = []
    for raw in values:
        key = raw.value if isinstance(raw, RelationshipType) else str(raw)
        if key in known and key not in seen:
            seen.add(key)
            out.append(known[key])
    return tuple(out)


class FilterConfiguration(BaseModel):
    """
    Input parameters of the graph engine.

    Serialized as a flat record with camelCase keys (``viewMode``,
    ``focusDepth``, ...). Numeric fields are rounded and clamped on input so
    that an out-of-range persisted value never breaks a restore.

    ``enabled_relationship_types`` behaves as a set; it is stored as an
    ordered tuple so serialization is stable. An explicitly empty tuple is a
    legal state and filters out every relationship.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )

    view_mode: ViewMode = ViewMode.OVERVIEW
    layout_direction: LayoutDirection = LayoutDirection.TOP_BOTTOM
    layer_mode: LayerMode = LayerMode.YEAR_TOPIC
    focus_depth: int = Field(default=1, description="Hops around the focus paper (1 or 2).")
    focus_paper_id: Optional[str] = None
    enabled_relationship_types: Tuple[RelationshipType, ...] = ALL_RELATIONSHIP_TYPES
    min_strength: int = Field(default=1, description="Minimum relationship strength (1-10).")
    use_familiarity_emphasis: bool = False

    @field_validator("focus_depth", mode="before")
    @classmethod
    def _clamp_focus_depth(cls, value):
        return _clamp_int(value, FOCUS_DEPTH_RANGE, 1)

    @field_validator("min_strength", mode="before")
    @classmethod
    def _clamp_min_strength(cls, value):
        return _clamp_int(value, MIN_STRENGTH_RANGE, 1)

    @field_validator("enabled_relationship_types", mode="before")
    @classmethod
    def _normalize_types(cls, value):
        return normalize_relationship_types(value)

    @field_validator("focus_paper_id", mode="before")
    @classmethod
    def _blank_focus_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_snapshot(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, data: dict) -> "FilterConfiguration":
        """
        Rebuild a configuration from a persisted snapshot.

        A stored type list that names only unknown types (or is not a list
        at all) is replaced by the core relationship types. An explicitly
        empty list is a saved choice and stays empty.
        """
        config = cls.model_validate(data)
        raw_types = data.get("enabledRelationshipTypes", data.get("enabled_relationship_types"))
        stored_empty = isinstance(raw_types, (list, tuple)) and len(raw_types) == 0
        if not config.enabled_relationship_types and not stored_empty:
            config = config.model_copy(
                update={"enabled_relationship_types": CORE_RELATIONSHIP_TYPES}
            )
        return config


class PinnedFilterConfiguration(FilterConfiguration):
    """A configuration snapshot explicitly saved by the user."""

    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def unpinned(self) -> FilterConfiguration:
        return FilterConfiguration.model_validate(
            self.model_dump(exclude={"saved_at"})
        )
