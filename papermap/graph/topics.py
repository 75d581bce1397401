# papermap/graph/topics.py

from __future__ import annotations

import re
from typing import Iterable

from papermap.graph.schema import PaperCategory, ResearchTopic
from papermap.models.paper import Paper

CSI_DOMAIN_KEYWORDS = (
    "csi",
    "csinet",
    "massive mimo",
    "fdd",
    "mimo feedback",
    "channel state information",
    "channel estimation",
    "beamforming",
    "pilot",
    "wireless foundation model",
)

QUANTIZATION_KEYWORDS = (
    "quantization",
    "quantized",
    "low-bit",
    "bit-level",
    "bitwidth",
    "binarized",
    "ternary",
    "vector quantization",
    "vq-vae",
    "gptq",
    "awq",
    "hawq",
    "brecq",
    "fsq",
)

STATE_SPACE_PHRASES = ("state-space", "state space", "state-space model")
# Short names only count as whole tokens ("s4" must not match "s40")
STATE_SPACE_TOKENS = ("ssm", "mamba", "s4")

ARCHITECTURE_CATEGORIES = {
    PaperCategory.AUTOENCODER.value,
    PaperCategory.CNN.value,
    PaperCategory.TRANSFORMER.value,
    PaperCategory.CSI_COMPRESSION.value,
}

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def infer_research_topic(paper: Paper) -> ResearchTopic:
    """
    Coarse research topic used for the topic lanes of the layout.

    Keyword matching over title, tags and category. State-space work wins
    over everything else; CSI papers that also talk about quantization get
    their own lane. If no keyword matches, the category decides.
    """
    title = (paper.title or "").lower()
    tags = " ".join(paper.tags).lower()
    category = (paper.category or "").lower()
    haystack = " ".join([title, tags, category])
    tokens = {tok for tok in _TOKEN_SPLIT.split(haystack) if tok}

    has_state_space = _contains_any(haystack, STATE_SPACE_PHRASES) or any(
        tok in tokens for tok in STATE_SPACE_TOKENS
    )
    has_csi = _contains_any(haystack, CSI_DOMAIN_KEYWORDS)
    has_quantization = _contains_any(haystack, QUANTIZATION_KEYWORDS)

    if has_state_space:
        return ResearchTopic.STATE_SPACE
    if has_csi and has_quantization:
        return ResearchTopic.CSI_QUANTIZATION
    if has_quantization:
        return ResearchTopic.GENERAL_QUANTIZATION
    if has_csi:
        return ResearchTopic.CSI_ARCHITECTURE

    if category == PaperCategory.QUANTIZATION.value:
        return ResearchTopic.GENERAL_QUANTIZATION
    if category in ARCHITECTURE_CATEGORIES:
        return ResearchTopic.CSI_ARCHITECTURE

    return ResearchTopic.OTHER
