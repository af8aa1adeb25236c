"""Reinforcement, aggregation and win detection."""

from __future__ import annotations

from dataclasses import dataclass

from skirmish.domain.enums import Side
from skirmish.domain.models import Board, GameState, set_units
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class BoardTotals:
    """Unit and territory counts per side."""

    player_units: int
    ai_units: int
    player_territories: int
    ai_territories: int
    neutral_territories: int


def reinforce(board: Board, side: Side, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Add reinforcements to every territory owned by ``side``.

    Returns the number of territories reinforced.
    """

    owned = board.owned_by(side)
    for territory in owned:
        set_units(territory, territory.units + rules.turn.reinforcement_per_territory)
    return len(owned)


def count_totals(board: Board) -> BoardTotals:
    player_units = ai_units = 0
    player_territories = ai_territories = neutral_territories = 0
    for territory in board:
        if territory.owner == Side.PLAYER:
            player_units += territory.units
            player_territories += 1
        elif territory.owner == Side.AI:
            ai_units += territory.units
            ai_territories += 1
        else:
            neutral_territories += 1
    return BoardTotals(
        player_units=player_units,
        ai_units=ai_units,
        player_territories=player_territories,
        ai_territories=ai_territories,
        neutral_territories=neutral_territories,
    )


def detect_winner(totals: BoardTotals) -> Side | None:
    """Return the side holding every contested territory, if any.

    The AI being wiped out is checked first, so an empty contest goes to the
    player.
    """

    if totals.ai_territories == 0:
        return Side.PLAYER
    if totals.player_territories == 0:
        return Side.AI
    return None


def apply_totals(state: GameState, totals: BoardTotals) -> None:
    state.player_units = totals.player_units
    state.ai_units = totals.ai_units
    state.player_territories = totals.player_territories
    state.ai_territories = totals.ai_territories
    state.neutral_territories = totals.neutral_territories
