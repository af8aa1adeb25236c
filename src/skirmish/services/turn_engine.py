"""Turn state machine for a single game.

``NOT_STARTED -> PLAYER_TURN -> AI_THINKING -> AI_TURN -> PLAYER_TURN ...``
with ``GAME_OVER`` reachable from any state and absorbing.  All board
mutations run on the caller's event loop; the lock only guards against a
second round starting while one is suspended on the advisor or a pacing delay.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging

from skirmish.domain import combat, selection, turn
from skirmish.domain import events as ev
from skirmish.domain.enums import ActionType, Side, TurnPhase
from skirmish.domain.errors import InsufficientUnits
from skirmish.domain.models import Board, GameState, TerritoryID
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig
from skirmish.interfaces.advisor import IStrategyAdvisor
from skirmish.services.ai_engine import AIStrategyEngine
from skirmish.utils.rng import RandomSource, system_random_source

logger = logging.getLogger(__name__)


class TurnEngine:
    """Drives one game: human selections, reinforcement, the AI turn, and win detection."""

    def __init__(
        self,
        board: Board,
        advisor: IStrategyAdvisor,
        *,
        events: ev.EventBus | None = None,
        random_source: RandomSource | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        thinking_delay_seconds: float = 0.0,
        action_delay_seconds: float = 0.0,
        advisor_timeout_seconds: float = 10.0,
    ) -> None:
        self._board = board
        self.events = events or ev.EventBus()
        self._random = random_source or system_random_source()
        self._rules = rules
        self._thinking_delay = thinking_delay_seconds
        self._state = GameState()
        self._selection: TerritoryID | None = None
        self._round_lock = asyncio.Lock()
        self._ai = AIStrategyEngine(
            advisor,
            self.events,
            self._random,
            rules=rules,
            advisor_timeout_seconds=advisor_timeout_seconds,
            action_delay_seconds=action_delay_seconds,
        )
        self._apply_totals()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> GameState:
        return dataclasses.replace(self._state)

    @property
    def selection(self) -> TerritoryID | None:
        return self._selection

    @property
    def round_in_progress(self) -> bool:
        return self._round_lock.locked()

    # ------------------------------------------------------------------
    # Life cycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._state.phase != TurnPhase.NOT_STARTED:
            logger.debug("start ignored in phase %s", self._state.phase)
            return
        self._state.game_started = True
        self._state.turn_number = 1
        self._set_phase(TurnPhase.PLAYER_TURN, Side.PLAYER)
        self._refresh()
        if not self._state.game_over:
            self._message("Game started! Your turn.")

    def submit_selection(self, territory_id: str) -> TerritoryID | None:
        """Feed one "territory picked" event from the human side.

        Returns the selection after the click.
        """

        rejection = self._input_rejection()
        if rejection is not None:
            logger.debug("selection of %s rejected: %s", territory_id, rejection)
            self._message(rejection)
            return self._selection

        outcome = selection.select_territory(
            self._selection, TerritoryID(territory_id), self._board, side=Side.PLAYER
        )
        self._selection = outcome.selection
        if outcome.message:
            self._message(outcome.message)
        if outcome.action is not None:
            self._apply_player_action(outcome.action)
            self._refresh()
        return self._selection

    async def end_player_turn(self) -> bool:
        """Run one full round: player reinforcement, AI turn, AI reinforcement.

        Returns ``False`` without touching the board when the round cannot
        start.
        """

        if self._round_lock.locked():
            self._message("The AI turn is already in progress")
            return False
        if not self._state.game_started or self._state.game_over:
            return False

        async with self._round_lock:
            self._selection = None
            turn.reinforce(self._board, Side.PLAYER, rules=self._rules)
            self._message("Turn ended. Adding 1 unit to each of your territories.")
            self._refresh()
            if self._state.game_over:
                return True

            try:
                await self._run_ai_turn()
            except BaseException:
                # Cancelled or failed mid-turn: hand control back to the player.
                logger.warning("AI turn %d aborted", self._state.turn_number)
                if not self._state.game_over:
                    self._set_phase(TurnPhase.PLAYER_TURN, Side.PLAYER)
                    self._refresh()
                raise
            if self._state.game_over:
                return True

            turn.reinforce(self._board, Side.AI, rules=self._rules)
            self._state.turn_number += 1
            self._set_phase(TurnPhase.PLAYER_TURN, Side.PLAYER)
            self._refresh()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _run_ai_turn(self) -> None:
        self._set_phase(TurnPhase.AI_THINKING, Side.AI)
        self._message("AI is thinking...")
        self._publish_state()
        if self._thinking_delay > 0:
            await asyncio.sleep(self._thinking_delay)

        self._set_phase(TurnPhase.AI_TURN, Side.AI)
        self._publish_state()
        await self._ai.execute_turn(
            self._board,
            after_action=self._refresh,
            should_stop=lambda: self._state.game_over,
        )

    def _input_rejection(self) -> str | None:
        if self._state.game_over:
            return "The game is over"
        if not self._state.game_started:
            return "The game has not started"
        if self._state.phase != TurnPhase.PLAYER_TURN or self._round_lock.locked():
            return "It is not your turn"
        return None

    def _apply_player_action(self, action: selection.PlannedAction) -> None:
        source = self._board.get(action.source_id)
        target = self._board.get(action.target_id)

        if action.kind == ActionType.TRANSFER:
            try:
                result = combat.resolve_transfer(source, target, Side.PLAYER)
            except InsufficientUnits:
                self._message("Not enough units to transfer")
                return
            self.events.publish(
                ev.transfer_resolved(
                    result.source_id, result.destination_id, str(Side.PLAYER), result.moved
                )
            )
            self._message(f"Transferred {result.moved} units from {source.name} to {target.name}")
            return

        try:
            outcome = combat.resolve_attack(source, target, self._random, rules=self._rules)
        except InsufficientUnits:
            self._message("Not enough units to attack")
            return
        self.events.publish(
            ev.attack_resolved(
                outcome.attacker_id,
                outcome.defender_id,
                str(Side.PLAYER),
                outcome.attack_strength,
                outcome.defense_strength,
                outcome.captured,
            )
        )
        self._message(
            f"{source.name} ({outcome.attack_strength}) attacks "
            f"{target.name} ({outcome.defense_strength})"
        )
        if outcome.captured:
            self._message(
                f"Attack successful! Captured {target.name} with {outcome.defender_units} units"
            )
        else:
            self._message(f"Attack failed! Lost {outcome.attacker_losses} units")

    def _set_phase(self, phase: TurnPhase, side: Side) -> None:
        logger.info("turn %d: %s", self._state.turn_number, phase)
        self._state.phase = phase
        self._state.current_turn = side

    def _apply_totals(self) -> turn.BoardTotals:
        totals = turn.count_totals(self._board)
        turn.apply_totals(self._state, totals)
        return totals

    def _refresh(self) -> None:
        """Recompute the projection, check for a winner, and publish it."""

        totals = self._apply_totals()
        if self._state.game_started and not self._state.game_over:
            winner = turn.detect_winner(totals)
            if winner is not None:
                self._state.game_over = True
                self._state.winner = winner
                self._selection = None
                self._set_phase(TurnPhase.GAME_OVER, self._state.current_turn)
                if winner == Side.PLAYER:
                    self._message("You win! All AI territories captured.")
                else:
                    self._message("AI wins! All your territories captured.")
        self._publish_state()

    def _publish_state(self) -> None:
        self.events.publish(ev.state_changed(self._state.to_dict()))

    def _message(self, text: str) -> None:
        self.events.publish(ev.message(text))
