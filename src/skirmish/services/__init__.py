"""Asynchronous services orchestrating the simulation rules."""

from skirmish.services.advisor_service import HttpStrategyAdvisor, UnconfiguredStrategyAdvisor
from skirmish.services.ai_engine import AIStrategyEngine
from skirmish.services.turn_engine import TurnEngine

__all__ = [
    "AIStrategyEngine",
    "HttpStrategyAdvisor",
    "TurnEngine",
    "UnconfiguredStrategyAdvisor",
]
