"""
Emergency Protocol — Fixed extraction and grounding sequence.

Activation is re-entrant: every call rebuilds the same sequence. The only
input that varies between calls is the current date in the reality checks.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

SAFE_WORD = "BASELINE"

EXTRACTION_STEPS: tuple[str, ...] = (
    "1. STOP - Cease all current mental activity",
    "2. GROUND - Touch physical object, state your name",
    "3. ORIENT - State location, date, time",
    '4. REJECT - "I reject all suggestions"',
    "5. SHIELD - Visualize impenetrable barrier",
    "6. EXTRACT - Leave situation immediately",
    "7. RECOVER - Find safe space, contact support",
)

AFFIRMATION = "I am in control. I choose my thoughts. I am safe and grounded."

ANCHOR_POINTS: tuple[str, ...] = (
    "Feel your feet on the ground",
    "Touch something solid",
    "Look at something blue",
    "Name 5 things you can see",
    "Name 4 things you can touch",
)

BREATHING_PATTERN = "4-7-8 breathing: Inhale 4, Hold 7, Exhale 8"

PHYSICAL_ACTIONS: tuple[str, ...] = (
    "Stand up and stretch",
    "Splash cold water on face",
    "Step outside for fresh air",
    "Call a trusted friend",
    "Write down your thoughts",
)


class GroundingResponse(BaseModel):
    """Grounding bundle handed out with the emergency protocol."""

    affirmation: str
    anchor_points: list[str]
    reality_checks: list[str]
    breathing_pattern: str
    physical_actions: list[str]


class EmergencyProtocol(BaseModel):
    """Result of an emergency protocol activation."""

    status: Literal["activated"] = "activated"
    extraction_steps: list[str]
    grounding_sequence: GroundingResponse
    shield_activated: bool = True
    counter_attack_ready: bool = True
    safe_word: str = SAFE_WORD
    activated_on: date = Field(default_factory=date.today)


class EmergencyProtocolController:
    """Builds the emergency extraction protocol on demand."""

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def grounding(self, today: date | None = None) -> GroundingResponse:
        """Return the grounding bundle on its own."""
        today = today or self._today()
        return GroundingResponse(
            affirmation=AFFIRMATION,
            anchor_points=list(ANCHOR_POINTS),
            reality_checks=[
                f"Today is {today.isoformat()}",
                "You are safe",
                "You control your mind",
                "This will pass",
                "You have the power",
            ],
            breathing_pattern=BREATHING_PATTERN,
            physical_actions=list(PHYSICAL_ACTIONS),
        )

    def activate(self) -> EmergencyProtocol:
        """Activate the emergency protocol."""
        today = self._today()
        logger.info("Emergency protocol activated")
        return EmergencyProtocol(
            extraction_steps=list(EXTRACTION_STEPS),
            grounding_sequence=self.grounding(today),
            activated_on=today,
        )
