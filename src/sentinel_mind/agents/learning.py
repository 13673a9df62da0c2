"""
Adaptive Learning Tracker — Turns repeated effective exposure into resistance.

Every ``adaptation_interval`` recorded interactions the agent reviews its
ledger. Techniques whose mean effectiveness exceeds the mastery threshold
raise the agent's resistance and join its learned resistance patterns,
which the simulator then penalizes on future exposure.
"""

from __future__ import annotations

import logging

from sentinel_mind.agents.schemas import AgentProfile, LearningProfile, TechniqueStats
from sentinel_mind.config import LearningConfig

logger = logging.getLogger(__name__)


class AdaptiveLearningTracker:
    """Per-agent learning ledgers, keyed by agent id."""

    def __init__(self, config: LearningConfig | None = None) -> None:
        self.config = config or LearningConfig()
        self._profiles: dict[str, LearningProfile] = {}

    def register(self, agent: AgentProfile) -> LearningProfile:
        """Create the ledger for a new agent (idempotent)."""
        profile = self._profiles.get(agent.id)
        if profile is None:
            profile = LearningProfile(agent_id=agent.id)
            self._profiles[agent.id] = profile
        return profile

    def profile(self, agent_id: str) -> LearningProfile:
        """Return an agent's ledger, raising KeyError if it was never registered."""
        try:
            return self._profiles[agent_id]
        except KeyError:
            raise KeyError(f"No learning profile for agent: {agent_id}") from None

    def forget(self, agent_id: str) -> None:
        self._profiles.pop(agent_id, None)

    def record_interaction(
        self,
        agent: AgentProfile,
        technique: str,
        effectiveness: float,
    ) -> LearningProfile:
        """
        Record one interaction and adapt the agent when the interval is reached.

        Args:
            agent: The agent that was exposed.
            technique: Technique identifier.
            effectiveness: How effective the exposure was (0-100).

        Returns:
            The updated learning profile.
        """
        profile = self.profile(agent.id)

        profile.total_interactions += 1
        stats = profile.technique_effectiveness.setdefault(technique, TechniqueStats())
        stats.count += 1
        stats.total_effectiveness += effectiveness

        if (
            agent.adaptive_learning
            and profile.total_interactions % self.config.adaptation_interval == 0
        ):
            self.adapt(agent)

        return profile

    def adapt(self, agent: AgentProfile) -> list[str]:
        """
        Run one adaptation cycle.

        Returns:
            Techniques that crossed the mastery threshold this cycle.
        """
        profile = self.profile(agent.id)
        profile.adaptation_level += 1

        mastered: list[str] = []
        for technique, stats in profile.technique_effectiveness.items():
            if stats.mean_effectiveness > self.config.mastery_threshold:
                agent.state.resistance = min(
                    self.config.resistance_cap,
                    agent.state.resistance + self.config.resistance_step,
                )
                agent.resistance_patterns.add(technique)
                mastered.append(technique)

        logger.info(
            "Agent %s adapted (level %d): resistance=%.1f, learned=%s",
            agent.id,
            profile.adaptation_level,
            agent.state.resistance,
            mastered,
        )
        return mastered
