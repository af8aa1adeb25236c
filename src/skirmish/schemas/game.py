from datetime import datetime

from pydantic import BaseModel, Field


class GameCreate(BaseModel):
    seed: int | None = Field(
        default=None, ge=0, description="Seed for reproducible combat; random when omitted"
    )


class SelectionRequest(BaseModel):
    territory_id: str = Field(..., min_length=1, description="Id of the picked territory")


class GameStateRead(BaseModel):
    phase: str
    current_turn: str
    game_started: bool
    game_over: bool
    winner: str | None
    turn_number: int
    player_units: int
    ai_units: int
    player_territories: int
    ai_territories: int
    neutral_territories: int


class TerritoryRead(BaseModel):
    id: str
    name: str
    x: float
    z: float
    owner: str
    units: int = Field(..., ge=0)
    neighbours: list[str]


class GameSummary(BaseModel):
    id: int
    seed: int | None
    created_at: datetime
    state: GameStateRead


class GameDetail(GameSummary):
    selection: str | None
    round_in_progress: bool
    event_count: int
    messages: list[str]
    territories: list[TerritoryRead]


class EventRead(BaseModel):
    index: int
    type: str
    payload: dict[str, object]
