"""Defense package — threat detection, strategy selection, emergency protocol."""

from sentinel_mind.defense.catalog import (
    DEFAULT_STRATEGY_CATALOG,
    DEFAULT_THREAT_CATALOG,
    DefenseStrategy,
    StrategyCatalog,
    ThreatPattern,
    ThreatPatternCatalog,
)
from sentinel_mind.defense.detector import (
    DetectedThreat,
    ThreatDetector,
    aggregate_confidence,
    classify_threat_level,
)
from sentinel_mind.defense.emergency import (
    EmergencyProtocol,
    EmergencyProtocolController,
    GroundingResponse,
)
from sentinel_mind.defense.protocol import DefenseAnalysis, DefenseProtocol
from sentinel_mind.defense.strategy import (
    CounterMeasureGenerator,
    RecommendationGenerator,
    StrategySelector,
)

__all__ = [
    "DEFAULT_STRATEGY_CATALOG",
    "DEFAULT_THREAT_CATALOG",
    "CounterMeasureGenerator",
    "DefenseAnalysis",
    "DefenseProtocol",
    "DefenseStrategy",
    "DetectedThreat",
    "EmergencyProtocol",
    "EmergencyProtocolController",
    "GroundingResponse",
    "RecommendationGenerator",
    "StrategyCatalog",
    "StrategySelector",
    "ThreatDetector",
    "ThreatPattern",
    "ThreatPatternCatalog",
    "aggregate_confidence",
    "classify_threat_level",
]
