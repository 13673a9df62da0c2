"""Agent package — practice agent presets, state simulation, adaptive learning."""

from sentinel_mind.agents.factory import AGENT_PRESETS, AgentPreset, AgentProfileFactory
from sentinel_mind.agents.learning import AdaptiveLearningTracker
from sentinel_mind.agents.schemas import (
    AgentProfile,
    AgentResponse,
    AgentState,
    InteractionRecord,
    LearningProfile,
    TechniqueStats,
)
from sentinel_mind.agents.simulator import AgentStateSimulator

__all__ = [
    "AGENT_PRESETS",
    "AdaptiveLearningTracker",
    "AgentPreset",
    "AgentProfile",
    "AgentProfileFactory",
    "AgentResponse",
    "AgentState",
    "AgentStateSimulator",
    "InteractionRecord",
    "LearningProfile",
    "TechniqueStats",
]
