"""Enumerations used by the simulation rules."""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """Owner tag of a territory."""

    PLAYER = "player"
    AI = "ai"
    NEUTRAL = "neutral"


class TurnPhase(StrEnum):
    """States of the turn state machine."""

    NOT_STARTED = "not_started"
    PLAYER_TURN = "player_turn"
    AI_THINKING = "ai_thinking"
    AI_TURN = "ai_turn"
    GAME_OVER = "game_over"


class ActionType(StrEnum):
    """Kinds of action a side may take between two adjacent territories."""

    ATTACK = "attack"
    TRANSFER = "transfer"


def opponent_of(side: Side) -> Side:
    """Return the competing side for ``side``."""

    if side == Side.PLAYER:
        return Side.AI
    if side == Side.AI:
        return Side.PLAYER
    raise ValueError(f"neutral territories have no opponent, got {side!r}")
