"""Runtime primitives backing the HTTP API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from skirmish.config import Settings, get_settings
from skirmish.domain.events import EventLog
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig
from skirmish.factory import create_turn_engine
from skirmish.interfaces.advisor import IStrategyAdvisor
from skirmish.services.turn_engine import TurnEngine

logger = logging.getLogger(__name__)


class GameNotFound(LookupError):
    """No game is registered under the requested id."""


@dataclass(slots=True)
class GameSession:
    """A running game plus the events it has published."""

    id: int
    engine: TurnEngine
    log: EventLog
    seed: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class GameRegistry:
    """In-memory store of running games; nothing is persisted."""

    def __init__(
        self,
        settings: Settings,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        advisor: IStrategyAdvisor | None = None,
    ) -> None:
        self._settings = settings
        self._rules = rules
        self._advisor = advisor
        self._games: dict[int, GameSession] = {}
        self._next_id = 1

    def create(self, *, seed: int | None = None) -> GameSession:
        game_id = self._next_id
        self._next_id += 1
        engine = create_turn_engine(
            self._settings,
            game_id=game_id,
            seed=seed,
            advisor=self._advisor,
            rules=self._rules,
        )
        log = EventLog(max_events=self._settings.event_log_size)
        engine.events.subscribe(log)
        engine.start()
        session = GameSession(id=game_id, engine=engine, log=log, seed=seed)
        while len(self._games) >= self._settings.max_games:
            oldest = next(iter(self._games))
            del self._games[oldest]
            logger.info("evicted game %d to stay within %d games", oldest, self._settings.max_games)
        self._games[game_id] = session
        logger.info("created game %d (seed=%s)", game_id, seed)
        return session

    def get(self, game_id: int) -> GameSession:
        try:
            return self._games[game_id]
        except KeyError:
            raise GameNotFound(game_id) from None

    def list_games(self) -> list[GameSession]:
        return [self._games[key] for key in sorted(self._games)]

    def delete(self, game_id: int) -> None:
        if self._games.pop(game_id, None) is None:
            raise GameNotFound(game_id)

    @staticmethod
    def to_summary_dict(session: GameSession) -> dict[str, object]:
        return {
            "id": session.id,
            "seed": session.seed,
            "created_at": session.created_at,
            "state": session.engine.state.to_dict(),
        }

    @staticmethod
    def to_detail_dict(session: GameSession) -> dict[str, object]:
        engine = session.engine
        board = engine.board
        summary = GameRegistry.to_summary_dict(session)
        summary.update(
            {
                "selection": engine.selection,
                "round_in_progress": engine.round_in_progress,
                "event_count": len(session.log),
                "messages": session.log.messages()[-10:],
                "territories": [
                    {
                        "id": territory.id,
                        "name": territory.name,
                        "x": territory.x,
                        "z": territory.z,
                        "owner": str(territory.owner),
                        "units": territory.units,
                        "neighbours": [other.id for other in board.neighbours(territory)],
                    }
                    for territory in board
                ],
            }
        )
        return summary


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        advisor: IStrategyAdvisor | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.games = GameRegistry(self.settings, rules=rules, advisor=advisor)

    async def shutdown(self) -> None:
        logger.info("shutting down with %d games in memory", len(self.games.list_games()))


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
