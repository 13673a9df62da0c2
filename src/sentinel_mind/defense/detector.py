"""
Threat Detector — Keyword and indicator scoring against the threat catalog.

Every category is scored independently: each trigger keyword found as a
case-insensitive substring adds the keyword weight, each structural
indicator that matches adds the indicator weight. Scoring is a pure
function of the input text and the (immutable) catalog.
"""

from __future__ import annotations

import logging
import math
import re

from pydantic import BaseModel, Field

from sentinel_mind.config import DetectionConfig, ThreatLevel
from sentinel_mind.defense.catalog import DEFAULT_THREAT_CATALOG, ThreatPatternCatalog

logger = logging.getLogger(__name__)


# Structural tests over the lowercased input. Indicators absent from this
# table (shock, overload, mirroring, ...) have no structural test and never match.
INDICATOR_PATTERNS: dict[str, re.Pattern[str]] = {
    "tonal_shift": re.compile(r"[.!?]\s*\w+\s*[.!?]"),
    "pause_pattern": re.compile(r"\.\.\."),
    "analog_marking": re.compile(r"\*\w+\*"),
    "multiple_negations": re.compile(r"(not|n't).*?(not|n't)"),
    "paradox": re.compile(r"(but|yet|however).*?(but|yet|however)"),
    "pattern_interrupt": re.compile(r"suddenly|now|stop|wait", re.IGNORECASE),
    "storytelling": re.compile(r"once upon|imagine|let me tell", re.IGNORECASE),
    "metaphor": re.compile(r"like|as if|just like", re.IGNORECASE),
    "anchoring": re.compile(r"every time|whenever|each time", re.IGNORECASE),
}


class DetectedThreat(BaseModel):
    """Result of scoring one threat pattern against one input."""

    category: str
    pattern: str
    score: int = Field(ge=0)
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)
    matched_indicators: list[str] = Field(default_factory=list)


def indicator_matches(text: str, indicator: str) -> bool:
    """Check a single structural indicator against already-lowercased text."""
    pattern = INDICATOR_PATTERNS.get(indicator)
    return bool(pattern and pattern.search(text))


class ThreatDetector:
    """Scores text against every pattern in a threat catalog."""

    def __init__(
        self,
        catalog: ThreatPatternCatalog = DEFAULT_THREAT_CATALOG,
        config: DetectionConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or DetectionConfig()

    def detect(self, text: str) -> list[DetectedThreat]:
        """
        Detect threats in a piece of text.

        Args:
            text: The utterance to analyze.

        Returns:
            Detections scoring above the threshold, highest score first.
            Equal scores keep catalog declaration order.
        """
        if not text or not text.strip():
            return []

        lowered = text.lower()
        threats: list[DetectedThreat] = []

        for pattern in self.catalog.all():
            keywords = [k for k in pattern.keywords if k in lowered]
            indicators = [i for i in pattern.indicators if indicator_matches(lowered, i)]
            score = (
                len(keywords) * self.config.keyword_weight
                + len(indicators) * self.config.indicator_weight
            )
            logger.debug("Scored %s: %d (keywords=%s, indicators=%s)",
                         pattern.category, score, keywords, indicators)

            if score > self.config.min_score:
                threats.append(
                    DetectedThreat(
                        category=pattern.category,
                        pattern=pattern.detection,
                        score=score,
                        confidence=min(score / 100, 1.0),
                        matched_keywords=keywords,
                        matched_indicators=indicators,
                    )
                )

        # sorted() is stable, so ties stay in declaration order
        return sorted(threats, key=lambda t: t.score, reverse=True)


def classify_threat_level(detections: list[DetectedThreat]) -> ThreatLevel:
    """Map the highest detection score onto the threat level scale."""
    if not detections:
        return ThreatLevel.NONE

    max_score = max(t.score for t in detections)

    if max_score > 80:
        return ThreatLevel.CRITICAL
    if max_score > 60:
        return ThreatLevel.HIGH
    if max_score > 40:
        return ThreatLevel.MEDIUM
    if max_score > 20:
        return ThreatLevel.LOW
    return ThreatLevel.NONE


def aggregate_confidence(detections: list[DetectedThreat]) -> int:
    """Mean detection confidence as a 0-100 integer (0 when nothing was detected)."""
    if not detections:
        return 0

    average = sum(t.confidence for t in detections) / len(detections)
    # Round half up; round() would use banker's rounding
    return int(math.floor(average * 100 + 0.5))
