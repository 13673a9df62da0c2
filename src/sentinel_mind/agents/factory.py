"""
Agent Factory — Builds practice agents from a closed table of presets.

Presets are keyed by (archetype, difficulty). Any combination outside the
table deliberately falls back to the susceptible/easy preset instead of
raising, so hosts can pass user-supplied values straight through.
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from sentinel_mind.config import Archetype, Difficulty
from sentinel_mind.agents.schemas import AgentProfile, AgentState

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class AgentPreset(BaseModel):
    """Fixed template for one (archetype, difficulty) pair."""

    model_config = ConfigDict(frozen=True)

    name: str
    personality: str
    skill_level: int
    adaptability: int
    specialties: tuple[str, ...]
    weaknesses: tuple[str, ...]
    trance_depth: float
    resistance: float
    suggestibility: float
    awareness: float
    emotional: str


AGENT_PRESETS: dict[tuple[Archetype, Difficulty], AgentPreset] = {
    (Archetype.SUSCEPTIBLE, Difficulty.EASY): AgentPreset(
        name="Alex (Highly Susceptible)",
        personality="Trusting, imaginative, and eager to experience hypnosis",
        skill_level=2,
        adaptability=3,
        specialties=(),
        weaknesses=("visualization", "relaxation", "trust"),
        trance_depth=0,
        resistance=10,
        suggestibility=90,
        awareness=50,
        emotional="curious",
    ),
    (Archetype.SUSCEPTIBLE, Difficulty.MEDIUM): AgentPreset(
        name="Jordan (Moderately Susceptible)",
        personality="Open-minded but occasionally analytical",
        skill_level=4,
        adaptability=5,
        specialties=("pattern_recognition",),
        weaknesses=("confusion", "fractionation"),
        trance_depth=0,
        resistance=30,
        suggestibility=70,
        awareness=60,
        emotional="neutral",
    ),
    (Archetype.RESISTANT, Difficulty.HARD): AgentPreset(
        name="Morgan (Highly Resistant)",
        personality="Skeptical, analytical, and consciously resistant",
        skill_level=7,
        adaptability=8,
        specialties=("critical_thinking", "pattern_detection", "conscious_resistance"),
        weaknesses=("overload", "double_binds"),
        trance_depth=0,
        resistance=80,
        suggestibility=20,
        awareness=90,
        emotional="skeptical",
    ),
    (Archetype.ADVERSARIAL, Difficulty.EXPERT): AgentPreset(
        name="Dr. Shadow (Master Hypnotist)",
        personality="Cunning, adaptive, uses advanced techniques",
        skill_level=10,
        adaptability=10,
        specialties=("rapid_induction", "covert_hypnosis", "nlp_mastery", "confusion_techniques"),
        weaknesses=(),
        trance_depth=0,
        resistance=95,
        suggestibility=5,
        awareness=100,
        emotional="focused",
    ),
}

DEFAULT_PRESET_KEY = (Archetype.SUSCEPTIBLE, Difficulty.EASY)

BRIEFINGS: dict[Archetype, str] = {
    Archetype.SUSCEPTIBLE: (
        "This practice partner is {name}.\n"
        "They are {personality}.\n\n"
        "Current State:\n"
        "- Trance Depth: {trance_depth:.0f}%\n"
        "- Resistance: {resistance:.0f}%\n"
        "- Suggestibility: {suggestibility:.0f}%\n\n"
        "Weaknesses: {weaknesses}\n\n"
        "Try different induction techniques and observe their responses.\n"
        "The agent will adapt to your techniques over time, becoming more challenging."
    ),
    Archetype.RESISTANT: (
        "This practice partner is {name}.\n"
        "They are {personality}.\n\n"
        "Current Defense Level: {resistance:.0f}%\n"
        "Specialties: {specialties}\n\n"
        "This is a challenging subject. They will actively resist your attempts.\n"
        "Look for their weaknesses: {weaknesses}\n\n"
        "The agent learns from your techniques and becomes more resistant over time."
    ),
    Archetype.ADVERSARIAL: (
        "WARNING: This is {name}.\n"
        "They are {personality}.\n\n"
        "Skills: {specialties}\n"
        "Threat Level: {skill_level}/10\n\n"
        "They will attempt to influence YOU. Practice your defensive techniques.\n"
        "Stay aware and use the defense protocols when needed.\n\n"
        'Say "They got me" if you need emergency extraction.'
    ),
}


def _coerce(enum_cls: type[E], value: object) -> E | None:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return None


class AgentProfileFactory:
    """Creates agent profiles from the preset table."""

    def __init__(
        self,
        presets: dict[tuple[Archetype, Difficulty], AgentPreset] | None = None,
    ) -> None:
        self.presets = presets if presets is not None else AGENT_PRESETS

    @staticmethod
    def generate_id() -> str:
        """Generate a fresh unique agent id."""
        return f"agent_{uuid.uuid4().hex[:12]}"

    def resolve_preset(
        self,
        archetype: Archetype | str,
        difficulty: Difficulty | str,
    ) -> AgentPreset:
        """Look up a preset, falling back to susceptible/easy for unknown pairs."""
        key = (_coerce(Archetype, archetype), _coerce(Difficulty, difficulty))
        preset = self.presets.get(key)
        if preset is None:
            logger.warning(
                "No preset for %s/%s, falling back to %s/%s",
                archetype,
                difficulty,
                DEFAULT_PRESET_KEY[0].value,
                DEFAULT_PRESET_KEY[1].value,
            )
            preset = self.presets[DEFAULT_PRESET_KEY]
        return preset

    def create(
        self,
        archetype: Archetype | str,
        difficulty: Difficulty | str,
        adaptive_learning: bool = True,
    ) -> AgentProfile:
        """
        Create a new agent profile.

        Args:
            archetype: susceptible, resistant, or adversarial.
            difficulty: easy, medium, hard, or expert.
            adaptive_learning: Whether repeated effective techniques raise resistance.

        Returns:
            A fresh profile with its own state and a unique id.
        """
        preset = self.resolve_preset(archetype, difficulty)

        profile = AgentProfile(
            id=self.generate_id(),
            name=preset.name,
            archetype=_coerce(Archetype, archetype) or Archetype.SUSCEPTIBLE,
            personality=preset.personality,
            skill_level=preset.skill_level,
            adaptability=preset.adaptability,
            specialties=preset.specialties,
            weaknesses=preset.weaknesses,
            adaptive_learning=adaptive_learning,
            state=AgentState(
                trance_depth=preset.trance_depth,
                resistance=preset.resistance,
                suggestibility=preset.suggestibility,
                awareness=preset.awareness,
                emotional=preset.emotional,
            ),
        )
        logger.info("Created agent %s (%s)", profile.id, profile.name)
        return profile

    def briefing(self, profile: AgentProfile) -> str:
        """Render the practice briefing for an agent."""
        template = BRIEFINGS.get(profile.archetype, BRIEFINGS[Archetype.SUSCEPTIBLE])
        state = profile.state
        return template.format(
            name=profile.name,
            personality=profile.personality,
            trance_depth=state.trance_depth,
            resistance=state.resistance,
            suggestibility=state.suggestibility,
            skill_level=profile.skill_level,
            specialties=", ".join(profile.specialties) or "none",
            weaknesses=", ".join(profile.weaknesses) or "none",
        )
