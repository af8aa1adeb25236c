"""HTTP routes for the simulation API.

Unknown games and territories surface as 404 through the handlers registered
in :func:`skirmish.api.app.create_app`.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from skirmish import __version__
from skirmish.api.runtime import ApiState, GameRegistry, GameSession
from skirmish.schemas.game import (
    EventRead,
    GameCreate,
    GameDetail,
    GameSummary,
    SelectionRequest,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - set by the lifespan
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _detail(session: GameSession) -> GameDetail:
    return GameDetail.model_validate(GameRegistry.to_detail_dict(session))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    board_rules = state.rules.board
    return {
        "status": "ok",
        "version": __version__,
        "games": len(state.games.list_games()),
        "grid_size": board_rules.grid_size,
        "adjacency_threshold": board_rules.adjacency_threshold,
        "advisor_configured": state.settings.advisor_configured,
    }


@router.get("/games", response_model=list[GameSummary])
async def list_games(state: ApiStateDep) -> list[GameSummary]:
    return [
        GameSummary.model_validate(GameRegistry.to_summary_dict(session))
        for session in state.games.list_games()
    ]


@router.post("/games", response_model=GameDetail, status_code=status.HTTP_201_CREATED)
async def create_game(request: GameCreate, state: ApiStateDep) -> GameDetail:
    return _detail(state.games.create(seed=request.seed))


@router.get("/games/{game_id}", response_model=GameDetail)
async def get_game(game_id: int, state: ApiStateDep) -> GameDetail:
    return _detail(state.games.get(game_id))


@router.post("/games/{game_id}/select", response_model=GameDetail)
async def select_territory(
    game_id: int,
    request: SelectionRequest,
    state: ApiStateDep,
) -> GameDetail:
    session = state.games.get(game_id)
    session.engine.submit_selection(request.territory_id)
    return _detail(session)


@router.post("/games/{game_id}/end-turn", response_model=GameDetail)
async def end_turn(game_id: int, state: ApiStateDep) -> GameDetail:
    session = state.games.get(game_id)
    if not await session.engine.end_player_turn():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="turn cannot be ended now",
        )
    return _detail(session)


@router.get("/games/{game_id}/events", response_model=list[EventRead])
async def list_events(
    game_id: int,
    state: ApiStateDep,
    since: Annotated[int, Query(ge=0)] = 0,
) -> list[EventRead]:
    session = state.games.get(game_id)
    return [
        EventRead(index=index, type=event.type, payload=event.payload)
        for index, event in session.log.indexed(since)
    ]


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: int, state: ApiStateDep) -> Response:
    state.games.delete(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
