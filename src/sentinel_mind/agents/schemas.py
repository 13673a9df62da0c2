"""Agent data schemas — profile, mutable state, interaction history, learning ledger."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from sentinel_mind.config import Archetype


class InteractionRecord(BaseModel):
    """One technique exposure in an agent's history."""

    technique: str
    effectiveness: float = Field(ge=0.0, le=100.0)
    response: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AgentState(BaseModel):
    """Mutable simulation state, owned by exactly one AgentProfile."""

    model_config = ConfigDict(validate_assignment=True)

    trance_depth: float = Field(default=0.0, ge=0.0, le=100.0)
    resistance: float = Field(default=0.0, ge=0.0, le=100.0)
    suggestibility: float = Field(default=0.0, ge=0.0, le=100.0)
    awareness: float = Field(default=0.0, ge=0.0, le=100.0)
    emotional: str = "neutral"
    history: list[InteractionRecord] = Field(default_factory=list)


class AgentProfile(BaseModel):
    """Identity and static traits of a simulated interlocutor."""

    id: str
    name: str
    archetype: Archetype
    personality: str
    skill_level: int = Field(ge=1, le=10)
    adaptability: int = Field(ge=1, le=10)
    specialties: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    adaptive_learning: bool = True
    resistance_patterns: set[str] = Field(default_factory=set)
    state: AgentState = Field(default_factory=AgentState)


class AgentResponse(BaseModel):
    """How an agent reacted to a single technique."""

    agent_id: str
    technique: str
    verbal: str
    physical: str
    cognitive: str
    effectiveness: float = Field(ge=0.0, le=100.0)
    tier: str


class TechniqueStats(BaseModel):
    """Running totals for one technique."""

    count: int = 0
    total_effectiveness: float = 0.0

    @property
    def mean_effectiveness(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_effectiveness / self.count


class LearningProfile(BaseModel):
    """Per-agent learning ledger kept by the adaptive learning tracker."""

    agent_id: str
    total_interactions: int = 0
    technique_effectiveness: dict[str, TechniqueStats] = Field(default_factory=dict)
    adaptation_level: int = 0
