"""
SentinelMind Engine — Host-facing facade over the defense and agent subsystems.

Exposes the operations a host application calls:
  analyze_threat · activate_emergency_protocol · create_agent
  respond_to_technique · record_learning

Threat analysis and the emergency protocol are stateless and lock-free.
Agents are held in an in-process registry; each agent has its own lock, so
calls on the same agent are serialized (later callers block) while calls
on different agents run in parallel. Agent reads return snapshots taken
under the agent's lock. Persistence is left to the host.
"""

from __future__ import annotations

import logging
import random
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from sentinel_mind.agents.factory import AgentProfileFactory
from sentinel_mind.agents.learning import AdaptiveLearningTracker
from sentinel_mind.agents.schemas import AgentProfile, AgentResponse, LearningProfile
from sentinel_mind.agents.simulator import AgentStateSimulator
from sentinel_mind.config import Archetype, DefenseMode, Difficulty, SentinelConfig
from sentinel_mind.defense.emergency import (
    EmergencyProtocol,
    EmergencyProtocolController,
    GroundingResponse,
)
from sentinel_mind.defense.protocol import DefenseAnalysis, DefenseProtocol

logger = logging.getLogger(__name__)


class AgentNotFoundError(KeyError):
    """Raised when an operation references an agent id that does not exist."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(agent_id)
        self.agent_id = agent_id

    def __str__(self) -> str:
        return f"Agent not found: {self.agent_id}"


@dataclass
class _AgentSlot:
    profile: AgentProfile
    lock: threading.Lock = field(default_factory=threading.Lock)


class DefenseEngine:
    """
    Central entry point for SentinelMind.

    Coordinates:
    - Threat analysis (detect → classify → strategy → countermeasures)
    - Emergency extraction protocol
    - Practice agents (create → respond → learn → adapt)
    """

    def __init__(
        self,
        config: SentinelConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or SentinelConfig()

        self.defense = DefenseProtocol(detection=self.config.detection)
        self.emergency = EmergencyProtocolController()

        self.factory = AgentProfileFactory()
        self.simulator = AgentStateSimulator(
            rng or random.Random(self.config.simulation.resolve_seed())
        )
        self.learning = AdaptiveLearningTracker(self.config.learning)

        self._agents: dict[str, _AgentSlot] = {}
        self._registry_lock = threading.Lock()

    # ── Defense ───────────────────────────────────────────────

    def analyze_threat(
        self,
        text: str,
        mode: DefenseMode | str | None = None,
    ) -> DefenseAnalysis:
        """Analyze an utterance; mode defaults to the configured default mode."""
        return self.defense.analyze(text, mode or self.config.defense.default_mode)

    def activate_emergency_protocol(self) -> EmergencyProtocol:
        return self.emergency.activate()

    def grounding(self) -> GroundingResponse:
        return self.emergency.grounding()

    # ── Agents ────────────────────────────────────────────────

    def create_agent(
        self,
        archetype: Archetype | str,
        difficulty: Difficulty | str,
        adaptive_learning: bool = True,
    ) -> AgentProfile:
        """Create and register a practice agent; returns a snapshot of it."""
        profile = self.factory.create(archetype, difficulty, adaptive_learning)
        with self._registry_lock:
            self._agents[profile.id] = _AgentSlot(profile)
            self.learning.register(profile)
        return profile.model_copy(deep=True)

    def get_agent(self, agent_id: str) -> AgentProfile:
        """Return a consistent snapshot of an agent."""
        with self._locked(agent_id) as profile:
            return profile.model_copy(deep=True)

    def list_agents(self) -> list[AgentProfile]:
        with self._registry_lock:
            agent_ids = list(self._agents)

        snapshots = []
        for agent_id in agent_ids:
            try:
                snapshots.append(self.get_agent(agent_id))
            except AgentNotFoundError:
                continue
        return snapshots

    def remove_agent(self, agent_id: str) -> None:
        """Drop an agent and its learning ledger."""
        with self._locked(agent_id):
            with self._registry_lock:
                del self._agents[agent_id]
                self.learning.forget(agent_id)

    def agent_briefing(self, agent_id: str) -> str:
        with self._locked(agent_id) as profile:
            return self.factory.briefing(profile)

    def learning_profile(self, agent_id: str) -> LearningProfile:
        with self._locked(agent_id):
            return self.learning.profile(agent_id).model_copy(deep=True)

    def respond_to_technique(
        self,
        agent_id: str,
        technique: str,
        content: str = "",
    ) -> AgentResponse:
        """
        Apply a technique to an agent.

        The state update, the learning record, and any adaptation it
        triggers happen under the agent's lock as one unit.

        Raises:
            AgentNotFoundError: If the agent id is unknown or was removed.
        """
        with self._locked(agent_id) as profile:
            response = self.simulator.respond(profile, technique, content)
            self.learning.record_interaction(profile, technique, response.effectiveness)
        return response

    def record_learning(
        self,
        agent_id: str,
        technique: str,
        effectiveness: float,
    ) -> LearningProfile:
        """
        Record an interaction directly, e.g. when replaying a stored session.

        Raises:
            AgentNotFoundError: If the agent id is unknown or was removed.
        """
        with self._locked(agent_id) as profile:
            ledger = self.learning.record_interaction(profile, technique, effectiveness)
            return ledger.model_copy(deep=True)

    @contextmanager
    def _locked(self, agent_id: str) -> Iterator[AgentProfile]:
        """Hold an agent's lock, re-checking it was not removed while waiting."""
        slot = self._slot(agent_id)
        with slot.lock:
            with self._registry_lock:
                registered = self._agents.get(agent_id) is slot
            if not registered:
                raise AgentNotFoundError(agent_id)
            yield slot.profile

    def _slot(self, agent_id: str) -> _AgentSlot:
        with self._registry_lock:
            slot = self._agents.get(agent_id)
        if slot is None:
            raise AgentNotFoundError(agent_id)
        return slot
