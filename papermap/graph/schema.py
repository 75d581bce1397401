# papermap/graph/schema.py

from enum import Enum


class RelationshipType(str, Enum):
    EXTENDS = "extends"
    BUILDS_ON = "builds_on"
    COMPARES_WITH = "compares_with"
    INSPIRED_BY = "inspired_by"
    INSPIRES = "inspires"
    CHALLENGES = "challenges"
    APPLIES = "applies"
    RELATED = "related"


ALL_RELATIONSHIP_TYPES = tuple(RelationshipType)

# Fallback set used when a persisted filter names no usable type.
CORE_RELATIONSHIP_TYPES = (
    RelationshipType.EXTENDS,
    RelationshipType.BUILDS_ON,
    RelationshipType.INSPIRED_BY,
    RelationshipType.INSPIRES,
)


class FamiliarityLevel(str, Enum):
    NOT_STARTED = "not_started"
    DIFFICULT = "difficult"
    MODERATE = "moderate"
    FAMILIAR = "familiar"
    # Legacy value, displayed like FAMILIAR
    EXPERT = "expert"


class PaperCategory(str, Enum):
    CSI_COMPRESSION = "csi_compression"
    AUTOENCODER = "autoencoder"
    QUANTIZATION = "quantization"
    TRANSFORMER = "transformer"
    CNN = "cnn"
    OTHER = "other"


class ResearchTopic(str, Enum):
    CSI_ARCHITECTURE = "csi_architecture"
    CSI_QUANTIZATION = "csi_quantization"
    GENERAL_QUANTIZATION = "general_quantization"
    STATE_SPACE = "state_space"
    OTHER = "other"


# Left-to-right lane order for the year x topic layout
RESEARCH_TOPIC_ORDER = tuple(ResearchTopic)


class ViewMode(str, Enum):
    OVERVIEW = "overview"
    FOCUS = "focus"
    TIMELINE = "timeline"


class LayerMode(str, Enum):
    """
    Grouping strategy used by the layout engine.

    YEAR       - one row per publication year.
    YEAR_TOPIC - year bands split into research-topic lanes (default).
    CATEGORY   - one column per paper category.
    """
    YEAR = "year"
    YEAR_TOPIC = "year_topic"
    CATEGORY = "category"


class LayoutDirection(str, Enum):
    TOP_BOTTOM = "TB"
    LEFT_RIGHT = "LR"


class ConnectionDirection(str, Enum):
    OUTGOING = "outgoing"
    INCOMING = "incoming"
