"""Candidate generation and scoring for the automated side.

Scores are ranking weights, not probabilities.  A strategic hint (free text
from an advisor) only nudges them through case-insensitive keyword and name
matches.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from skirmish.domain.enums import ActionType, Side, opponent_of
from skirmish.domain.models import Board, Territory
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig

FALLBACK_HINT = (
    "Focus on expanding territory and reinforcing borders with player territories."
)


@dataclass(slots=True)
class AIAction:
    """Scored candidate action from ``source`` into ``target``."""

    kind: ActionType
    source: Territory
    target: Territory
    confidence: float


def eligible_sources(board: Board, side: Side = Side.AI) -> list[Territory]:
    """Owned territories with more than one unit."""

    return [territory for territory in board.owned_by(side) if territory.units > 1]


def hostile_border_count(board: Board, territory: Territory, enemy: Side) -> int:
    return sum(1 for other in board.neighbours(territory) if other.owner == enemy)


def _mentions(hint: str, territory: Territory) -> bool:
    return territory.name.lower() in hint


def evaluate_attack(
    source: Territory,
    target: Territory,
    board: Board,
    hint: str,
    *,
    side: Side = Side.AI,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    weights = rules.strategy
    enemy = opponent_of(side)
    text = hint.lower()

    confidence = (source.units - 1) / max(1, target.units)
    if target.owner == enemy:
        confidence *= weights.player_target_multiplier
    confidence += weights.attack_border_bonus * hostile_border_count(board, target, enemy)

    if _mentions(text, target):
        confidence *= weights.hint_name_multiplier
    if "attack" in text and "player" in text:
        confidence *= weights.hint_aggression_multiplier
    if "defensive" in text or "defend" in text:
        confidence *= weights.hint_defensive_multiplier
    return confidence


def evaluate_transfer(
    source: Territory,
    destination: Territory,
    board: Board,
    hint: str,
    *,
    side: Side = Side.AI,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Score moving units to ``destination``; zero unless the source is clearly larger."""

    weights = rules.strategy
    if source.units <= destination.units + weights.transfer_margin:
        return 0.0

    enemy = opponent_of(side)
    text = hint.lower()

    confidence = (source.units - destination.units) / max(1, source.units + destination.units)
    confidence += weights.transfer_border_bonus * hostile_border_count(board, destination, enemy)

    if _mentions(text, destination):
        confidence *= weights.hint_name_multiplier
    if "reinforce" in text or "strengthen" in text:
        confidence *= weights.hint_reinforce_multiplier
    return confidence


def enumerate_candidates(
    board: Board,
    hint: str,
    *,
    side: Side = Side.AI,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[AIAction]:
    """Score every (eligible source, neighbour) pair in board order.

    Friendly neighbours become transfers, everything else an attack.  Zero
    scores stay in the list.
    """

    candidates: list[AIAction] = []
    for source in eligible_sources(board, side):
        for target in board.neighbours(source):
            if target.owner == side:
                score = evaluate_transfer(source, target, board, hint, side=side, rules=rules)
                candidates.append(AIAction(ActionType.TRANSFER, source, target, score))
            else:
                score = evaluate_attack(source, target, board, hint, side=side, rules=rules)
                candidates.append(AIAction(ActionType.ATTACK, source, target, score))
    return candidates


def select_actions(
    candidates: Sequence[AIAction],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[AIAction]:
    """Take the highest-scoring candidates, keeping enumeration order on ties."""

    ranked = sorted(candidates, key=lambda action: action.confidence, reverse=True)
    return ranked[: rules.strategy.max_actions]
