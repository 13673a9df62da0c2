"""Tests for strategy selection, countermeasures, and recommendations."""

import pytest

from sentinel_mind.config import DefenseMode, ThreatLevel
from sentinel_mind.defense.catalog import DEFAULT_STRATEGY_CATALOG
from sentinel_mind.defense.detector import DetectedThreat
from sentinel_mind.defense.strategy import (
    AUTO_STRATEGY_MAP,
    CounterMeasureGenerator,
    RecommendationGenerator,
    StrategySelector,
    coerce_mode,
)


def _threat(category: str, score: int = 50) -> DetectedThreat:
    return DetectedThreat(category=category, pattern="p", score=score, confidence=score / 100)


@pytest.fixture
def selector() -> StrategySelector:
    return StrategySelector()


class TestStrategySelector:
    """Test rule precedence and the auto table."""

    def test_critical_beats_passive(self, selector: StrategySelector) -> None:
        strategy = selector.select(ThreatLevel.CRITICAL, DefenseMode.PASSIVE)
        assert strategy.key == "pattern_interrupt"

    def test_aggressive_beats_low(self, selector: StrategySelector) -> None:
        assert selector.select(ThreatLevel.LOW, DefenseMode.AGGRESSIVE).key == "pattern_interrupt"

    def test_passive_beats_auto_table(self, selector: StrategySelector) -> None:
        assert selector.select(ThreatLevel.HIGH, DefenseMode.PASSIVE).key == "shield_protocol"

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (ThreatLevel.NONE, "shield_protocol"),
            (ThreatLevel.LOW, "shield_protocol"),
            (ThreatLevel.MEDIUM, "reality_anchor"),
            (ThreatLevel.HIGH, "conscious_analysis"),
            (ThreatLevel.CRITICAL, "pattern_interrupt"),
        ],
    )
    def test_auto_mode(self, selector: StrategySelector, level: ThreatLevel, expected: str) -> None:
        assert selector.select(level, DefenseMode.AUTO).key == expected

    def test_auto_table_has_no_critical_entry(self) -> None:
        assert ThreatLevel.CRITICAL not in AUTO_STRATEGY_MAP

    def test_string_mode(self, selector: StrategySelector) -> None:
        assert selector.select(ThreatLevel.MEDIUM, "AGGRESSIVE").key == "pattern_interrupt"

    def test_string_level(self, selector: StrategySelector) -> None:
        assert selector.select("high", DefenseMode.AUTO).key == "conscious_analysis"
        assert selector.select("critical", "passive").key == "pattern_interrupt"

    def test_string_level_is_logged(
        self, selector: StrategySelector, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("DEBUG", logger="sentinel_mind.defense.strategy"):
            selector.select("medium", "auto")
        assert "level=medium mode=auto: reality_anchor" in caplog.text

    def test_unknown_mode_falls_back_to_auto(self, selector: StrategySelector) -> None:
        assert coerce_mode("berserk") == DefenseMode.AUTO
        assert selector.select(ThreatLevel.MEDIUM, "berserk").key == "reality_anchor"

    def test_counter_suggestion_never_selected(self, selector: StrategySelector) -> None:
        for level in ThreatLevel:
            for mode in DefenseMode:
                assert selector.select(level, mode).key != "counter_suggestion"


class TestCounterMeasureGenerator:
    """Test countermeasure merging."""

    def test_strategy_actions_first(self) -> None:
        strategy = DEFAULT_STRATEGY_CATALOG.require("reality_anchor")
        measures = CounterMeasureGenerator().generate([_threat("rapid_induction")], strategy)

        assert measures[:4] == list(strategy.execution)
        assert measures[4:] == ["Keep eyes open and focused", "Tense muscles deliberately"]

    def test_deduplicates_in_order(self) -> None:
        strategy = DEFAULT_STRATEGY_CATALOG.require("shield_protocol")
        detections = [_threat("covert_hypnosis"), _threat("covert_hypnosis", 40)]
        measures = CounterMeasureGenerator().generate(detections, strategy)

        assert len(measures) == len(set(measures)) == 6
        assert measures[-2:] == ["Interrupt the story", "Ask direct questions"]

    def test_every_category_has_counters(self) -> None:
        strategy = DEFAULT_STRATEGY_CATALOG.require("pattern_interrupt")
        detections = [
            _threat(c)
            for c in (
                "embedded_commands",
                "confusion_technique",
                "rapid_induction",
                "covert_hypnosis",
                "nlp_manipulation",
            )
        ]
        measures = CounterMeasureGenerator().generate(detections, strategy)
        assert len(measures) == 4 + 5 * 2

    def test_no_detections(self) -> None:
        strategy = DEFAULT_STRATEGY_CATALOG.require("shield_protocol")
        assert CounterMeasureGenerator().generate([], strategy) == list(strategy.execution)


class TestRecommendationGenerator:
    """Test threshold-driven recommendations."""

    def test_none(self) -> None:
        assert RecommendationGenerator().recommend(ThreatLevel.NONE, []) == []

    def test_critical(self) -> None:
        recs = RecommendationGenerator().recommend(ThreatLevel.CRITICAL, [_threat("x", 90)])
        assert len(recs) == 6
        assert recs[0].endswith("Physically remove yourself from situation")
        assert recs[-1].endswith("Share experience with support network")

    def test_high(self) -> None:
        recs = RecommendationGenerator().recommend(ThreatLevel.HIGH, [_threat("x", 70)])
        assert len(recs) == 6
        assert recs[0].endswith("Maintain heightened awareness")

    def test_low_only_follow_up(self) -> None:
        recs = RecommendationGenerator().recommend(ThreatLevel.LOW, [_threat("x", 35)])
        assert len(recs) == 3
        assert recs[0].endswith("Document this interaction for analysis")
