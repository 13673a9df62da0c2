"""
SentinelMind: Cognitive defense and adaptive adversary simulation.

Scores text for manipulative influence patterns, selects countermeasures,
and simulates practice agents whose resistance adapts to repeated techniques.
"""

__version__ = "0.1.0"
__author__ = "SentinelMind Contributors"

from sentinel_mind.config import SentinelConfig
from sentinel_mind.engine import AgentNotFoundError, DefenseEngine

__all__ = ["AgentNotFoundError", "DefenseEngine", "SentinelConfig", "__version__"]
