"""
Agent State Simulator — Scores technique exposures and evolves agent state.

Effectiveness is a deterministic function of the agent's current state,
traits, and learned resistances. The only randomness is the choice of
canned phrasing within an effectiveness tier, drawn from a single injected
``random.Random`` so sessions can be replayed.
"""

from __future__ import annotations

import logging
import random

from sentinel_mind.agents.schemas import AgentProfile, AgentResponse, InteractionRecord

logger = logging.getLogger(__name__)

BASE_EFFECTIVENESS = 50.0
LEARNED_RESISTANCE_BONUS = 20.0
AWARENESS_PENALTY_WEIGHT = 20.0
WEAKNESS_BONUS = 30.0
SPECIALTY_PENALTY = 30.0

HIGH_TIER_THRESHOLD = 70.0
MEDIUM_TIER_THRESHOLD = 40.0

RESPONSE_POOLS: dict[str, dict[str, tuple[str, ...]]] = {
    "high": {
        "verbal": (
            "Mmm... yes... feeling so relaxed...",
            "Going deeper... can't resist...",
            "So heavy... so comfortable...",
            "Yes... whatever you say...",
        ),
        "physical": (
            "Eyes closing, body relaxing, breathing slowing",
            "Head dropping forward, shoulders loose",
            "Limbs heavy, breathing deep and even",
        ),
        "cognitive": (
            "Reduced critical thinking, increased suggestibility",
            "Narrowed attention, suggestions accepted without review",
        ),
    },
    "medium": {
        "verbal": (
            "I feel... different... but still here...",
            "That's... interesting... I can feel something...",
            "Part of me wants to let go...",
            "I'm relaxed but... still aware...",
        ),
        "physical": (
            "Some relaxation, occasional eye flutter",
            "Breathing slower, posture softening",
            "Slight stillness, gaze unfocused",
        ),
        "cognitive": (
            "Partial focus, some analytical thought remaining",
            "Drifting attention, still questioning suggestions",
        ),
    },
    "low": {
        "verbal": (
            "I see what you're trying to do.",
            "That technique won't work on me.",
            "Nice try, but I'm fully aware.",
            "I'm consciously resisting that suggestion.",
        ),
        "physical": (
            "Alert, possibly tensing",
            "Arms crossed, steady eye contact",
            "Upright posture, no visible relaxation",
        ),
        "cognitive": (
            "Fully analytical, detecting techniques",
            "Critical factor engaged, labelling each suggestion",
        ),
    },
}


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def effectiveness_tier(effectiveness: float) -> str:
    """Map an effectiveness score onto its response tier."""
    if effectiveness > HIGH_TIER_THRESHOLD:
        return "high"
    if effectiveness > MEDIUM_TIER_THRESHOLD:
        return "medium"
    return "low"


class AgentStateSimulator:
    """
    Applies techniques to agents.

    The simulator holds no agent state of its own; every call mutates only
    the ``state`` of the agent it is given. Callers that share agents across
    threads must serialize calls per agent.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def compute_effectiveness(self, agent: AgentProfile, technique: str) -> float:
        """Score a technique against the agent's current state (0-100)."""
        state = agent.state
        resistance_bonus = (
            LEARNED_RESISTANCE_BONUS if technique in agent.resistance_patterns else 0.0
        )

        suggestibility_factor = state.suggestibility / 100
        resistance_factor = (100 - state.resistance - resistance_bonus) / 100
        awareness_penalty = (state.awareness / 100) * AWARENESS_PENALTY_WEIGHT

        effectiveness = (
            BASE_EFFECTIVENESS * suggestibility_factor * resistance_factor - awareness_penalty
        )

        if technique in agent.weaknesses:
            effectiveness += WEAKNESS_BONUS
        if f"resist_{technique}" in agent.specialties:
            effectiveness -= SPECIALTY_PENALTY

        return clamp(effectiveness)

    def respond(self, agent: AgentProfile, technique: str, content: str = "") -> AgentResponse:
        """
        Apply a technique to an agent and return its reaction.

        Args:
            agent: The agent to expose. Its state is updated in place.
            technique: Technique identifier, e.g. "rapid_induction".
            content: What was said; recorded for context only.

        Returns:
            The agent's verbal, physical, and cognitive reaction.
        """
        effectiveness = self.compute_effectiveness(agent, technique)
        tier = effectiveness_tier(effectiveness)
        pool = RESPONSE_POOLS[tier]

        response = AgentResponse(
            agent_id=agent.id,
            technique=technique,
            verbal=self.rng.choice(pool["verbal"]),
            physical=self.rng.choice(pool["physical"]),
            cognitive=self.rng.choice(pool["cognitive"]),
            effectiveness=effectiveness,
            tier=tier,
        )

        self._update_state(agent, effectiveness)
        agent.state.history.append(
            InteractionRecord(
                technique=technique,
                effectiveness=effectiveness,
                response=response.verbal,
            )
        )

        logger.debug(
            "Agent %s: %s -> %.1f (%s), content=%d chars",
            agent.id,
            technique,
            effectiveness,
            tier,
            len(content),
        )
        return response

    def _update_state(self, agent: AgentProfile, effectiveness: float) -> None:
        state = agent.state

        if effectiveness > 50:
            state.trance_depth = clamp(state.trance_depth + effectiveness / 10)

        state.awareness = clamp(max(10.0, 100 - state.trance_depth))
        state.suggestibility = clamp(min(95.0, 30 + state.trance_depth * 0.7))

        if effectiveness > 70:
            state.emotional = "compliant"
        elif effectiveness > 40:
            state.emotional = "relaxed"
        elif effectiveness < 20:
            state.emotional = "resistant"
