"""
Defense Protocol — Full threat analysis pipeline.

    detect → classify → select strategy → merge countermeasures
           → recommend → aggregate confidence

Each call reads only the immutable catalogs, so a single instance can be
shared across threads.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from sentinel_mind.config import DefenseMode, DetectionConfig, ThreatLevel
from sentinel_mind.defense.catalog import (
    DEFAULT_STRATEGY_CATALOG,
    DEFAULT_THREAT_CATALOG,
    StrategyCatalog,
    ThreatPatternCatalog,
)
from sentinel_mind.defense.detector import (
    DetectedThreat,
    ThreatDetector,
    aggregate_confidence,
    classify_threat_level,
)
from sentinel_mind.defense.strategy import (
    CounterMeasureGenerator,
    RecommendationGenerator,
    StrategySelector,
)


class DefenseAnalysis(BaseModel):
    """Outcome of analyzing one utterance."""

    threat_detected: bool
    threat_level: ThreatLevel
    attack_type: str | None = None
    attack_patterns: list[str] = Field(default_factory=list)
    defense_strategy: str
    strategy_key: str
    counter_measures: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    confidence: int = Field(ge=0, le=100)
    detections: list[DetectedThreat] = Field(default_factory=list)


class DefenseProtocol:
    """Stateless threat analysis over the threat and strategy catalogs."""

    def __init__(
        self,
        threat_catalog: ThreatPatternCatalog = DEFAULT_THREAT_CATALOG,
        strategy_catalog: StrategyCatalog = DEFAULT_STRATEGY_CATALOG,
        detection: DetectionConfig | None = None,
    ) -> None:
        self.detector = ThreatDetector(threat_catalog, detection)
        self.selector = StrategySelector(strategy_catalog)
        self.counter_measures = CounterMeasureGenerator()
        self.recommendations = RecommendationGenerator()

    def analyze(self, text: str, mode: DefenseMode | str = DefenseMode.AUTO) -> DefenseAnalysis:
        """
        Analyze an utterance for manipulation patterns.

        Args:
            text: The utterance to analyze. Empty text is a valid, threat-free input.
            mode: Requested defense posture.

        Returns:
            The complete defense analysis.
        """
        threats = self.detector.detect(text)
        level = classify_threat_level(threats)
        strategy = self.selector.select(level, mode)

        return DefenseAnalysis(
            threat_detected=bool(threats),
            threat_level=level,
            attack_type=threats[0].category if threats else None,
            attack_patterns=[t.pattern for t in threats],
            defense_strategy=strategy.name,
            strategy_key=strategy.key,
            counter_measures=self.counter_measures.generate(threats, strategy) if threats else [],
            recommendations=self.recommendations.recommend(level, threats),
            confidence=aggregate_confidence(threats),
            detections=threats,
        )
