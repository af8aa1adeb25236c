from pydantic import BaseModel, Field


class Position(BaseModel):
    x: float
    z: float


class TerritorySummary(BaseModel):
    name: str = Field(..., description="Display name, also matched against hint text")
    units: int = Field(..., ge=0)
    position: Position


class StrategySnapshot(BaseModel):
    """Read-only view of the board handed to a strategy advisor."""

    ai_territories: list[TerritorySummary] = Field(default_factory=list)
    player_territories: list[TerritorySummary] = Field(default_factory=list)
    neutral_territories: list[TerritorySummary] = Field(default_factory=list)
    ai_units: int = Field(default=0, ge=0)
    player_units: int = Field(default=0, ge=0)
    ai_territory_count: int = Field(default=0, ge=0)
    player_territory_count: int = Field(default=0, ge=0)
    neutral_territory_count: int = Field(default=0, ge=0)
