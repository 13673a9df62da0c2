"""Configuration management for SentinelMind."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Auto-load .env file if present (fail silently if python-dotenv not installed)
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


class ThreatLevel(str, Enum):
    """Ordinal severity of a defense analysis."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Position on the none < low < medium < high < critical scale."""
        return list(ThreatLevel).index(self)


class DefenseMode(str, Enum):
    """Caller-requested defense posture."""

    AGGRESSIVE = "aggressive"
    PASSIVE = "passive"
    AUTO = "auto"


class Archetype(str, Enum):
    """Simulated interlocutor archetypes."""

    SUSCEPTIBLE = "susceptible"
    RESISTANT = "resistant"
    ADVERSARIAL = "adversarial"


class Difficulty(str, Enum):
    """Practice difficulty presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class DetectionConfig(BaseModel):
    """Threat detection configuration."""

    min_score: int = Field(default=30, ge=0, le=1000)
    keyword_weight: int = Field(default=10, ge=0, le=100)
    indicator_weight: int = Field(default=20, ge=0, le=100)


class DefenseConfig(BaseModel):
    """Defense analysis configuration."""

    default_mode: DefenseMode = DefenseMode.AUTO


class SimulationConfig(BaseModel):
    """Agent simulation configuration."""

    seed: int | None = None

    def resolve_seed(self) -> int | None:
        """Resolve the random seed from config or environment."""
        if self.seed is not None:
            return self.seed

        raw = os.environ.get("SENTINEL_SEED", "")
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"SENTINEL_SEED must be an integer, got {raw!r}") from exc


class LearningConfig(BaseModel):
    """Adaptive learning configuration."""

    adaptation_interval: int = Field(default=5, ge=1, le=100)
    mastery_threshold: float = Field(default=70.0, ge=0.0, le=100.0)
    resistance_step: float = Field(default=5.0, ge=0.0, le=100.0)
    resistance_cap: float = Field(default=95.0, ge=0.0, le=100.0)


class SentinelConfig(BaseModel):
    """Master configuration for SentinelMind."""

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    defense: DefenseConfig = Field(default_factory=DefenseConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    learning: LearningConfig = Field(default_factory=LearningConfig)

    verbose: bool = False
    debug: bool = False

    @classmethod
    def from_file(cls, config_path: Path) -> SentinelConfig:
        """Load configuration from YAML file."""
        import yaml

        with open(config_path) as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        import yaml

        config_path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json", exclude_none=True)
        with open(config_path, "w") as fh:
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False)
