"""Tests for the threat catalog, detector, and classifier."""

import pytest

from sentinel_mind.config import DetectionConfig, ThreatLevel
from sentinel_mind.defense.catalog import (
    DEFAULT_STRATEGY_CATALOG,
    DEFAULT_THREAT_CATALOG,
    ThreatPattern,
)
from sentinel_mind.defense.detector import (
    DetectedThreat,
    ThreatDetector,
    aggregate_confidence,
    classify_threat_level,
    indicator_matches,
)

RELAXED_NOW = "You will feel very relaxed now... notice how heavy your eyelids feel"
EMBEDDED_CRITICAL = "Relax. Now. Imagine you feel *calm*... notice it and realize it."
RAPID_HIGH = "Sleep now, drop deep, fall."


@pytest.fixture
def detector() -> ThreatDetector:
    return ThreatDetector()


def _threat(score: int, category: str = "embedded_commands") -> DetectedThreat:
    return DetectedThreat(
        category=category, pattern="p", score=score, confidence=min(score / 100, 1.0)
    )


class TestThreatPatternCatalog:
    """Test the fixed knowledge base."""

    def test_declaration_order(self) -> None:
        assert DEFAULT_THREAT_CATALOG.categories() == [
            "embedded_commands",
            "confusion_technique",
            "rapid_induction",
            "covert_hypnosis",
            "nlp_manipulation",
        ]

    def test_lookup(self) -> None:
        pattern = DEFAULT_THREAT_CATALOG.get("rapid_induction")
        assert pattern is not None
        assert "sleep" in pattern.keywords
        assert "pattern_interrupt" in pattern.indicators

    def test_unknown_lookup(self) -> None:
        assert DEFAULT_THREAT_CATALOG.get("telepathy") is None
        assert "telepathy" not in DEFAULT_THREAT_CATALOG

    def test_patterns_are_immutable(self) -> None:
        pattern = DEFAULT_THREAT_CATALOG.get("embedded_commands")
        with pytest.raises(ValueError):
            pattern.keywords = ("hack",)  # type: ignore[misc]

    def test_strategy_catalog(self) -> None:
        assert len(DEFAULT_STRATEGY_CATALOG) == 5
        assert DEFAULT_STRATEGY_CATALOG.require("shield_protocol").name == "Mental Shield"
        assert DEFAULT_STRATEGY_CATALOG.get("counter_suggestion").effectiveness == 70
        with pytest.raises(KeyError):
            DEFAULT_STRATEGY_CATALOG.require("nope")


class TestIndicators:
    """Test structural indicator heuristics."""

    def test_pause_pattern(self) -> None:
        assert indicator_matches("wait... there", "pause_pattern")
        assert not indicator_matches("wait. there", "pause_pattern")

    def test_paradox_needs_two_conjunctions(self) -> None:
        assert indicator_matches("yes but no yet maybe", "paradox")
        assert not indicator_matches("yes but no", "paradox")

    def test_analog_marking(self) -> None:
        assert indicator_matches("you can *relax* here", "analog_marking")

    def test_indicator_without_structural_test(self) -> None:
        assert not indicator_matches("shock shock shock", "shock")


class TestThreatDetector:
    """Test keyword and indicator scoring."""

    def test_empty_input(self, detector: ThreatDetector) -> None:
        assert detector.detect("") == []

    def test_whitespace_input(self, detector: ThreatDetector) -> None:
        assert detector.detect("   \n\t ") == []

    def test_neutral_text(self, detector: ThreatDetector) -> None:
        detections = detector.detect("The weather report says it will be sunny tomorrow.")
        assert detections == []
        assert classify_threat_level(detections) == ThreatLevel.NONE

    def test_relaxation_scenario(self, detector: ThreatDetector) -> None:
        detections = detector.detect(RELAXED_NOW)

        categories = [t.category for t in detections]
        assert "embedded_commands" in categories or "nlp_manipulation" in categories
        assert classify_threat_level(detections).rank >= ThreatLevel.MEDIUM.rank

        embedded = detections[0]
        assert embedded.category == "embedded_commands"
        assert embedded.score == 50
        assert embedded.confidence == pytest.approx(0.5)
        assert embedded.matched_keywords == ["now", "feel", "notice"]
        assert embedded.matched_indicators == ["pause_pattern"]

    def test_case_insensitive_keywords(self, detector: ThreatDetector) -> None:
        assert detector.detect(RAPID_HIGH.upper())[0].score == 70

    def test_threshold_is_exclusive(self, detector: ThreatDetector) -> None:
        # rapid_induction scores exactly 30 here: "now" keyword + pattern_interrupt
        detections = detector.detect(RELAXED_NOW)
        assert "rapid_induction" not in [t.category for t in detections]

    def test_confidence_capped(self, detector: ThreatDetector) -> None:
        detections = detector.detect(EMBEDDED_CRITICAL)
        assert detections[0].score == 110
        assert detections[0].confidence == 1.0

    def test_sorted_by_score(self, detector: ThreatDetector) -> None:
        detections = detector.detect("Sleep now, drop deep, fall... feel it, notice it.")
        assert [(t.category, t.score) for t in detections] == [
            ("rapid_induction", 70),
            ("embedded_commands", 50),
        ]

    def test_ties_keep_declaration_order(self, detector: ThreatDetector) -> None:
        detections = detector.detect("But suppose it is like that, yet different.")
        assert [(t.category, t.score) for t in detections] == [
            ("confusion_technique", 40),
            ("covert_hypnosis", 40),
        ]

    def test_pure_function(self, detector: ThreatDetector) -> None:
        assert detector.detect(EMBEDDED_CRITICAL) == detector.detect(EMBEDDED_CRITICAL)

    def test_monotonic_in_keywords(self) -> None:
        detector = ThreatDetector(config=DetectionConfig(min_score=0))
        words = ["sleep", "now", "drop", "fall", "deep"]

        previous = 0
        for count in range(1, len(words) + 1):
            text = " ".join(words[:count])
            rapid = next(t for t in detector.detect(text) if t.category == "rapid_induction")
            assert rapid.score >= previous
            previous = rapid.score

    def test_custom_catalog(self) -> None:
        from sentinel_mind.defense.catalog import ThreatPatternCatalog

        catalog = ThreatPatternCatalog(
            (
                ThreatPattern(
                    category="urgency",
                    indicators=("pattern_interrupt",),
                    keywords=("hurry", "quick"),
                    detection="Urgency pressure",
                ),
            )
        )
        detections = ThreatDetector(catalog).detect("Hurry, quick, stop!")
        assert detections[0].category == "urgency"
        assert detections[0].score == 40


class TestClassifier:
    """Test threat level thresholds."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (81, ThreatLevel.CRITICAL),
            (80, ThreatLevel.HIGH),
            (61, ThreatLevel.HIGH),
            (60, ThreatLevel.MEDIUM),
            (41, ThreatLevel.MEDIUM),
            (40, ThreatLevel.LOW),
            (21, ThreatLevel.LOW),
            (20, ThreatLevel.NONE),
        ],
    )
    def test_thresholds(self, score: int, expected: ThreatLevel) -> None:
        assert classify_threat_level([_threat(score)]) == expected

    def test_uses_max_score(self) -> None:
        detections = [_threat(35), _threat(90, "rapid_induction")]
        assert classify_threat_level(detections) == ThreatLevel.CRITICAL

    def test_no_detections(self) -> None:
        assert classify_threat_level([]) == ThreatLevel.NONE


class TestConfidence:
    """Test confidence aggregation."""

    def test_empty(self) -> None:
        assert aggregate_confidence([]) == 0

    def test_mean(self) -> None:
        assert aggregate_confidence([_threat(70), _threat(50)]) == 60

    def test_rounds_half_up(self) -> None:
        threat = DetectedThreat(category="x", pattern="p", score=12, confidence=0.125)
        assert aggregate_confidence([threat]) == 13
