"""Tests for the adaptive learning tracker."""

import pytest

from sentinel_mind.agents.factory import AgentProfileFactory
from sentinel_mind.agents.learning import AdaptiveLearningTracker
from sentinel_mind.agents.schemas import AgentProfile
from sentinel_mind.config import LearningConfig


@pytest.fixture
def tracker() -> AdaptiveLearningTracker:
    return AdaptiveLearningTracker()


@pytest.fixture
def agent(tracker: AdaptiveLearningTracker) -> AgentProfile:
    profile = AgentProfileFactory().create("resistant", "hard")
    tracker.register(profile)
    return profile


class TestLedger:
    """Test per-technique accounting."""

    def test_register_is_idempotent(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        tracker.record_interaction(agent, "trust", 20)
        tracker.register(agent)
        assert tracker.profile(agent.id).total_interactions == 1

    def test_running_totals(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        tracker.record_interaction(agent, "trust", 20)
        tracker.record_interaction(agent, "trust", 40)
        profile = tracker.record_interaction(agent, "overload", 10)

        assert profile.total_interactions == 3
        stats = profile.technique_effectiveness["trust"]
        assert stats.count == 2
        assert stats.total_effectiveness == 60
        assert stats.mean_effectiveness == 30

    def test_unregistered_agent(self, tracker: AdaptiveLearningTracker) -> None:
        stranger = AgentProfileFactory().create("susceptible", "easy")
        with pytest.raises(KeyError, match="No learning profile"):
            tracker.record_interaction(stranger, "trust", 50)

    def test_forget(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        tracker.forget(agent.id)
        with pytest.raises(KeyError):
            tracker.profile(agent.id)


class TestAdaptation:
    """Test resistance growth from mastered techniques."""

    def test_fifth_interaction_adapts(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        for _ in range(4):
            tracker.record_interaction(agent, "rapid_induction", 85)
        assert agent.state.resistance == 80
        assert agent.resistance_patterns == set()

        profile = tracker.record_interaction(agent, "rapid_induction", 85)

        assert agent.state.resistance == 85
        assert agent.resistance_patterns == {"rapid_induction"}
        assert profile.adaptation_level == 1

    def test_below_mastery_still_counts_cycle(
        self, tracker: AdaptiveLearningTracker, agent: AgentProfile
    ) -> None:
        for _ in range(5):
            tracker.record_interaction(agent, "trust", 70)

        assert agent.state.resistance == 80
        assert agent.resistance_patterns == set()
        assert tracker.profile(agent.id).adaptation_level == 1

    def test_each_mastered_technique_adds_a_step(
        self, tracker: AdaptiveLearningTracker, agent: AgentProfile
    ) -> None:
        for effectiveness, technique in [
            (90, "overload"),
            (80, "double_binds"),
            (90, "overload"),
            (10, "trust"),
            (75, "double_binds"),
        ]:
            tracker.record_interaction(agent, technique, effectiveness)

        assert agent.state.resistance == 90
        assert agent.resistance_patterns == {"overload", "double_binds"}

    def test_resistance_capped(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        for _ in range(25):
            tracker.record_interaction(agent, "overload", 95)

        assert agent.state.resistance == 95
        assert tracker.profile(agent.id).adaptation_level == 5

    def test_disabled_learning_never_adapts(self, tracker: AdaptiveLearningTracker) -> None:
        agent = AgentProfileFactory().create("resistant", "hard", adaptive_learning=False)
        tracker.register(agent)

        for _ in range(10):
            tracker.record_interaction(agent, "overload", 95)

        assert agent.state.resistance == 80
        assert agent.resistance_patterns == set()
        profile = tracker.profile(agent.id)
        assert profile.total_interactions == 10
        assert profile.adaptation_level == 0

    def test_custom_interval(self, agent: AgentProfile) -> None:
        tracker = AdaptiveLearningTracker(LearningConfig(adaptation_interval=2, resistance_step=3))
        tracker.register(agent)

        tracker.record_interaction(agent, "overload", 90)
        tracker.record_interaction(agent, "overload", 90)

        assert agent.state.resistance == 83

    def test_adapt_returns_mastered(self, tracker: AdaptiveLearningTracker, agent: AgentProfile) -> None:
        tracker.record_interaction(agent, "overload", 90)
        tracker.record_interaction(agent, "trust", 30)
        assert tracker.adapt(agent) == ["overload"]
