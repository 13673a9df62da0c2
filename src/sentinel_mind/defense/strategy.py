"""
Strategy selection, countermeasure merging, and recommendations.

Selection precedence is load-bearing: an aggressive mode or a critical
level always wins, then a passive mode or a low level, and only then the
auto-mode lookup table.
"""

from __future__ import annotations

import logging

from sentinel_mind.config import DefenseMode, ThreatLevel
from sentinel_mind.defense.catalog import (
    DEFAULT_STRATEGY_CATALOG,
    DefenseStrategy,
    StrategyCatalog,
)
from sentinel_mind.defense.detector import DetectedThreat

logger = logging.getLogger(__name__)


# No "critical" entry: a critical level never reaches the table (rule 1).
AUTO_STRATEGY_MAP: dict[ThreatLevel, str] = {
    ThreatLevel.HIGH: "conscious_analysis",
    ThreatLevel.MEDIUM: "reality_anchor",
    ThreatLevel.LOW: "shield_protocol",
    ThreatLevel.NONE: "shield_protocol",
}

AUTO_DEFAULT_STRATEGY = "reality_anchor"

THREAT_COUNTERS: dict[str, tuple[str, ...]] = {
    "embedded_commands": (
        "Consciously reject embedded suggestions",
        'Repeat "I choose my own thoughts"',
    ),
    "confusion_technique": (
        "Focus on one simple fact",
        "Count backwards from 10",
    ),
    "rapid_induction": (
        "Keep eyes open and focused",
        "Tense muscles deliberately",
    ),
    "covert_hypnosis": (
        "Interrupt the story",
        "Ask direct questions",
    ),
    "nlp_manipulation": (
        "Break rapport deliberately",
        "Use different sensory language",
    ),
}

CRITICAL_RECOMMENDATIONS = (
    "⚠️ IMMEDIATE ACTION: Physically remove yourself from situation",
    "🛡️ Activate full shield protocol",
    "📱 Call trusted friend for reality check",
)

HIGH_RECOMMENDATIONS = (
    "🔍 Maintain heightened awareness",
    "💪 Use pattern interrupt techniques",
    "🎯 Focus on physical sensations",
)

FOLLOW_UP_RECOMMENDATIONS = (
    "📊 Document this interaction for analysis",
    "🧠 Practice defensive techniques regularly",
    "👥 Share experience with support network",
)


def coerce_mode(mode: DefenseMode | str | None) -> DefenseMode:
    """Normalize a mode value, falling back to auto for anything unrecognized."""
    if isinstance(mode, DefenseMode):
        return mode
    try:
        return DefenseMode(str(mode).lower())
    except ValueError:
        logger.debug("Unrecognized defense mode %r, using auto", mode)
        return DefenseMode.AUTO


class StrategySelector:
    """Picks a defense strategy from threat level and requested mode."""

    def __init__(self, catalog: StrategyCatalog = DEFAULT_STRATEGY_CATALOG) -> None:
        self.catalog = catalog

    def select(
        self,
        level: ThreatLevel | str,
        mode: DefenseMode | str = DefenseMode.AUTO,
    ) -> DefenseStrategy:
        """
        Select a defense strategy.

        Resolution order (first match wins):
            1. aggressive mode or critical level -> pattern_interrupt
            2. passive mode or low level -> shield_protocol
            3. auto table keyed by level, defaulting to reality_anchor
        """
        level = ThreatLevel(level)
        mode = coerce_mode(mode)

        if mode == DefenseMode.AGGRESSIVE or level == ThreatLevel.CRITICAL:
            key = "pattern_interrupt"
        elif mode == DefenseMode.PASSIVE or level == ThreatLevel.LOW:
            key = "shield_protocol"
        else:
            key = AUTO_STRATEGY_MAP.get(level, AUTO_DEFAULT_STRATEGY)

        logger.debug("Strategy for level=%s mode=%s: %s", level.value, mode.value, key)
        return self.catalog.require(key)


class CounterMeasureGenerator:
    """Merges strategy actions with category-specific counters."""

    def generate(
        self,
        detections: list[DetectedThreat],
        strategy: DefenseStrategy,
    ) -> list[str]:
        measures: list[str] = list(strategy.execution)
        for threat in detections:
            measures.extend(THREAT_COUNTERS.get(threat.category, ()))

        # dict preserves first-seen order
        return list(dict.fromkeys(measures))


class RecommendationGenerator:
    """Threshold-driven advisory directives."""

    def recommend(
        self,
        level: ThreatLevel,
        detections: list[DetectedThreat],
    ) -> list[str]:
        recommendations: list[str] = []

        if level == ThreatLevel.CRITICAL:
            recommendations.extend(CRITICAL_RECOMMENDATIONS)
        if level == ThreatLevel.HIGH:
            recommendations.extend(HIGH_RECOMMENDATIONS)
        if detections:
            recommendations.extend(FOLLOW_UP_RECOMMENDATIONS)

        return recommendations
