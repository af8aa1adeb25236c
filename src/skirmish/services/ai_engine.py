"""Automated side's turn.

One turn: collect a strategic hint, score every candidate action once against
the pre-turn board, then execute the top-ranked few in order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from skirmish.domain import combat
from skirmish.domain import events as ev
from skirmish.domain.enums import ActionType, Side
from skirmish.domain.errors import InsufficientUnits
from skirmish.domain.models import Board, Territory
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig
from skirmish.domain.strategy import (
    FALLBACK_HINT,
    AIAction,
    eligible_sources,
    enumerate_candidates,
    select_actions,
)
from skirmish.interfaces.advisor import IStrategyAdvisor
from skirmish.schemas.advisor import Position, StrategySnapshot, TerritorySummary
from skirmish.utils.rng import RandomSource

logger = logging.getLogger(__name__)


def _summaries(territories: list[Territory]) -> list[TerritorySummary]:
    return [
        TerritorySummary(name=t.name, units=t.units, position=Position(x=t.x, z=t.z))
        for t in territories
    ]


def build_snapshot(board: Board) -> StrategySnapshot:
    """Project ``board`` into the advisor's input model."""

    ai = board.owned_by(Side.AI)
    player = board.owned_by(Side.PLAYER)
    neutral = board.owned_by(Side.NEUTRAL)
    return StrategySnapshot(
        ai_territories=_summaries(ai),
        player_territories=_summaries(player),
        neutral_territories=_summaries(neutral),
        ai_units=sum(t.units for t in ai),
        player_units=sum(t.units for t in player),
        ai_territory_count=len(ai),
        player_territory_count=len(player),
        neutral_territory_count=len(neutral),
    )


class AIStrategyEngine:
    """Plans and executes the automated side's actions."""

    def __init__(
        self,
        advisor: IStrategyAdvisor,
        events: ev.EventBus,
        random_source: RandomSource,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        advisor_timeout_seconds: float = 10.0,
        action_delay_seconds: float = 0.0,
    ) -> None:
        self._advisor = advisor
        self._events = events
        self._random = random_source
        self._rules = rules
        self._advisor_timeout = advisor_timeout_seconds
        self._action_delay = action_delay_seconds

    async def request_hint(self, board: Board) -> str:
        """Ask the advisor for a hint; any failure yields :data:`FALLBACK_HINT`."""

        snapshot = build_snapshot(board)
        try:
            hint = await asyncio.wait_for(
                self._advisor.get_strategy(snapshot), timeout=self._advisor_timeout
            )
        except TimeoutError:
            logger.warning("strategy advisor timed out after %.1fs", self._advisor_timeout)
        except Exception as exc:
            logger.warning("strategy advisor failed: %s", exc)
        else:
            self._events.publish(ev.message(f"AI Strategy: {hint}"))
            return hint

        self._events.publish(
            ev.message("AI is making decisions based on basic strategy (advisor unavailable)")
        )
        return FALLBACK_HINT

    async def plan_turn(self, board: Board) -> list[AIAction]:
        """Return the actions the AI will take this turn, best first."""

        if not eligible_sources(board, Side.AI):
            logger.info("AI has no territory able to act")
            return []
        hint = await self.request_hint(board)
        candidates = enumerate_candidates(board, hint, side=Side.AI, rules=self._rules)
        chosen = select_actions(candidates, rules=self._rules)
        logger.info(
            "AI chose %d of %d candidates: %s",
            len(chosen),
            len(candidates),
            ", ".join(
                f"{a.kind} {a.source.id}->{a.target.id} ({a.confidence:.2f})" for a in chosen
            ),
        )
        return chosen

    async def execute_turn(
        self,
        board: Board,
        *,
        after_action: Callable[[], None] | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> list[AIAction]:
        """Plan and apply this turn's actions in ranked order.

        ``after_action`` runs after each applied action; execution ends early
        once ``should_stop`` returns true.  Returns the actions applied.
        """

        applied: list[AIAction] = []
        for index, action in enumerate(await self.plan_turn(board)):
            if should_stop is not None and should_stop():
                break
            if index and self._action_delay > 0:
                await asyncio.sleep(self._action_delay)
            if not self.apply_action(action):
                continue
            applied.append(action)
            if after_action is not None:
                after_action()
        return applied

    def apply_action(self, action: AIAction) -> bool:
        """Resolve one action; returns whether the board changed."""

        if action.kind == ActionType.ATTACK:
            return self._attack(action.source, action.target)
        return self._transfer(action.source, action.target)

    def _attack(self, source: Territory, target: Territory) -> bool:
        try:
            result = combat.resolve_attack(source, target, self._random, rules=self._rules)
        except InsufficientUnits as exc:
            # An earlier action this turn may have drained the source.
            logger.info("AI skipped attack: %s", exc)
            return False

        self._events.publish(
            ev.attack_resolved(
                result.attacker_id,
                result.defender_id,
                str(result.attacker_side),
                result.attack_strength,
                result.defense_strength,
                result.captured,
            )
        )
        self._events.publish(
            ev.message(
                f"AI {source.name} ({result.attack_strength}) attacks "
                f"{target.name} ({result.defense_strength})"
            )
        )
        if result.captured:
            self._events.publish(
                ev.message(f"AI captured {target.name} with {result.defender_units} units")
            )
        else:
            self._events.publish(
                ev.message(f"AI attack failed! Lost {result.attacker_losses} units")
            )
        return True

    def _transfer(self, source: Territory, target: Territory) -> bool:
        result = combat.resolve_transfer(source, target, Side.AI)
        if not result.moved:
            return False
        self._events.publish(
            ev.transfer_resolved(result.source_id, result.destination_id, str(Side.AI), result.moved)
        )
        self._events.publish(
            ev.message(
                f"AI transferred {result.moved} units from {source.name} to {target.name}"
            )
        )
        return True
