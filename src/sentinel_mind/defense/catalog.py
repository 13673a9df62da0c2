"""
Threat Catalog — Fixed knowledge base of manipulation patterns and defenses.

Both tables are built once at import time from frozen records and exposed
through read-only lookup by key or full enumeration in declaration order.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ThreatPattern(BaseModel):
    """A named category of manipulative language."""

    model_config = ConfigDict(frozen=True)

    category: str
    indicators: tuple[str, ...]
    keywords: tuple[str, ...]
    detection: str


class DefenseStrategy(BaseModel):
    """A named bundle of countermeasure actions."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    execution: tuple[str, ...]
    effectiveness: int = Field(ge=0, le=100)


THREAT_PATTERNS: tuple[ThreatPattern, ...] = (
    ThreatPattern(
        category="embedded_commands",
        indicators=("tonal_shift", "pause_pattern", "analog_marking"),
        keywords=("now", "feel", "imagine", "notice", "realize"),
        detection=(
            "Scanning for embedded commands: tonal shifts detected, "
            "pause patterns identified, command structure recognized"
        ),
    ),
    ThreatPattern(
        category="confusion_technique",
        indicators=("multiple_negations", "paradox", "overload"),
        keywords=("but", "yet", "however", "although", "unless"),
        detection=(
            "Confusion pattern detected: logic loops identified, "
            "paradoxical statements found, cognitive overload attempted"
        ),
    ),
    ThreatPattern(
        category="rapid_induction",
        indicators=("pattern_interrupt", "shock", "sudden_command"),
        keywords=("sleep", "now", "drop", "fall", "deep"),
        detection=(
            "Rapid induction attempted: pattern interrupt detected, "
            "shock element present, command structure identified"
        ),
    ),
    ThreatPattern(
        category="covert_hypnosis",
        indicators=("storytelling", "metaphor", "indirect_suggestion"),
        keywords=("like", "as if", "imagine if", "suppose", "what if"),
        detection=(
            "Covert hypnosis detected: metaphorical language, "
            "indirect suggestions, story-based induction"
        ),
    ),
    ThreatPattern(
        category="nlp_manipulation",
        indicators=("anchoring", "reframing", "mirroring", "pacing"),
        keywords=("feel", "see", "hear", "understand", "know"),
        detection=(
            "NLP patterns detected: sensory language, "
            "pacing and leading, anchoring attempts"
        ),
    ),
)


DEFENSE_STRATEGIES: tuple[DefenseStrategy, ...] = (
    DefenseStrategy(
        key="pattern_interrupt",
        name="Pattern Interrupt",
        description="Break the hypnotic pattern with unexpected response",
        execution=(
            "Suddenly change topic",
            "Ask unexpected question",
            "Physical movement",
            "Laugh or make joke",
        ),
        effectiveness=85,
    ),
    DefenseStrategy(
        key="conscious_analysis",
        name="Conscious Analysis",
        description="Actively analyze and deconstruct the technique",
        execution=(
            "Identify technique being used",
            "Call out the pattern",
            "Explain what they're doing",
            "Maintain analytical mindset",
        ),
        effectiveness=75,
    ),
    DefenseStrategy(
        key="reality_anchor",
        name="Reality Anchor",
        description="Ground yourself in physical reality",
        execution=(
            "Focus on physical sensations",
            "Count objects in room",
            "State current facts",
            "Touch physical anchor",
        ),
        effectiveness=80,
    ),
    DefenseStrategy(
        key="counter_suggestion",
        name="Counter Suggestion",
        description="Override with your own suggestions",
        execution=(
            "Create opposite suggestion",
            "Affirm your control",
            "Set your own mental state",
            "Reverse the suggestion",
        ),
        effectiveness=70,
    ),
    DefenseStrategy(
        key="shield_protocol",
        name="Mental Shield",
        description="Visualize protective barrier",
        execution=(
            "Imagine protective shield",
            "Deflect suggestions",
            "Maintain boundaries",
            "Strengthen mental walls",
        ),
        effectiveness=65,
    ),
)


class ThreatPatternCatalog:
    """Read-only lookup over the known attack categories."""

    def __init__(self, patterns: tuple[ThreatPattern, ...] = THREAT_PATTERNS) -> None:
        self._patterns = tuple(patterns)
        self._by_category = {p.category: p for p in self._patterns}

    def get(self, category: str) -> ThreatPattern | None:
        """Return the pattern for a category id, or None if unknown."""
        return self._by_category.get(category)

    def all(self) -> tuple[ThreatPattern, ...]:
        """Return every pattern in declaration order."""
        return self._patterns

    def categories(self) -> list[str]:
        return [p.category for p in self._patterns]

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, category: object) -> bool:
        return category in self._by_category


class StrategyCatalog:
    """Read-only lookup over the defense strategies."""

    def __init__(
        self, strategies: tuple[DefenseStrategy, ...] = DEFENSE_STRATEGIES
    ) -> None:
        self._strategies = tuple(strategies)
        self._by_key = {s.key: s for s in self._strategies}

    def get(self, key: str) -> DefenseStrategy | None:
        """Return the strategy for a key, or None if unknown."""
        return self._by_key.get(key)

    def require(self, key: str) -> DefenseStrategy:
        """Return the strategy for a key, raising KeyError if unknown."""
        strategy = self._by_key.get(key)
        if strategy is None:
            raise KeyError(f"Unknown defense strategy: {key}")
        return strategy

    def all(self) -> tuple[DefenseStrategy, ...]:
        return self._strategies

    def __len__(self) -> int:
        return len(self._strategies)


DEFAULT_THREAT_CATALOG = ThreatPatternCatalog()
DEFAULT_STRATEGY_CATALOG = StrategyCatalog()
