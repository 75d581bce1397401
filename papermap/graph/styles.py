# papermap/graph/styles.py

"""
Enum-keyed display lookup tables handed to the rendering surface.

The engine does not paint anything; it only resolves a relationship type,
category or familiarity level to the values a renderer needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from papermap.graph.schema import FamiliarityLevel, PaperCategory, RelationshipType, ResearchTopic


@dataclass(frozen=True)
class EdgeStyle:
    color: str
    label: str
    dash: Optional[str] = None


RELATIONSHIP_STYLES: Dict[RelationshipType, EdgeStyle] = {
    RelationshipType.EXTENDS: EdgeStyle("#2563eb", "extends"),
    RelationshipType.BUILDS_ON: EdgeStyle("#16a34a", "builds on"),
    RelationshipType.COMPARES_WITH: EdgeStyle("#f59e0b", "compares with", "6 3"),
    RelationshipType.INSPIRED_BY: EdgeStyle("#8b5cf6", "inspired by", "3 3"),
    RelationshipType.INSPIRES: EdgeStyle("#9333ea", "inspires", "3 3"),
    RelationshipType.CHALLENGES: EdgeStyle("#ef4444", "challenges", "8 4"),
    RelationshipType.APPLIES: EdgeStyle("#0891b2", "applies"),
    RelationshipType.RELATED: EdgeStyle("#6b7280", "related", "4 4"),
}

CATEGORY_COLORS: Dict[str, str] = {
    PaperCategory.CSI_COMPRESSION.value: "#2563eb",
    PaperCategory.AUTOENCODER.value: "#7c3aed",
    PaperCategory.QUANTIZATION.value: "#dc2626",
    PaperCategory.TRANSFORMER.value: "#8b5cf6",
    PaperCategory.CNN.value: "#10b981",
    PaperCategory.OTHER.value: "#6b7280",
}

CATEGORY_LABELS: Dict[str, str] = {
    PaperCategory.CSI_COMPRESSION.value: "CSI Compression",
    PaperCategory.AUTOENCODER.value: "AutoEncoder",
    PaperCategory.QUANTIZATION.value: "Quantization",
    PaperCategory.TRANSFORMER.value: "Transformer",
    PaperCategory.CNN.value: "CNN",
    PaperCategory.OTHER.value: "Other",
}

RESEARCH_TOPIC_LABELS: Dict[ResearchTopic, str] = {
    ResearchTopic.CSI_ARCHITECTURE: "CSI Architecture",
    ResearchTopic.CSI_QUANTIZATION: "CSI Quantization",
    ResearchTopic.GENERAL_QUANTIZATION: "General Quantization",
    ResearchTopic.STATE_SPACE: "State-Space",
    ResearchTopic.OTHER: "Other",
}

FAMILIARITY_STARS: Dict[FamiliarityLevel, int] = {
    FamiliarityLevel.NOT_STARTED: 0,
    FamiliarityLevel.DIFFICULT: 1,
    FamiliarityLevel.MODERATE: 2,
    FamiliarityLevel.FAMILIAR: 3,
    FamiliarityLevel.EXPERT: 3,
}

OPACITY_BY_STARS: Dict[int, float] = {0: 0.0, 1: 0.35, 2: 0.7, 3: 1.0}


def familiarity_opacity(level: Optional[FamiliarityLevel]) -> float:
    if level is None:
        return OPACITY_BY_STARS[0]
    return OPACITY_BY_STARS[FAMILIARITY_STARS.get(level, 0)]


def edge_stroke_width(strength: int) -> float:
    return max(1.0, min(4.0, strength / 3))


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category.replace("_", " ").title())


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[PaperCategory.OTHER.value])


def topic_label(topic) -> str:
    """Display label for a topic lane; custom topic keys are title-cased."""
    if isinstance(topic, ResearchTopic):
        return RESEARCH_TOPIC_LABELS[topic]
    key = str(topic)
    try:
        return RESEARCH_TOPIC_LABELS[ResearchTopic(key)]
    except ValueError:
        return key.replace("_", " ").title()
