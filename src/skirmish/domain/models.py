"""In-memory board model.

Territories are plain dataclasses; the :class:`Board` owns their ordering and
answers adjacency queries.  Adjacency is derived from positions on every call
and never cached.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from typing import NewType

from .enums import Side, TurnPhase
from .errors import UnknownTerritory
from .rules_config import DEFAULT_RULES

TerritoryID = NewType("TerritoryID", str)


@dataclass(slots=True)
class Territory:
    """A board cell with an owner and a unit count.

    ``x`` and ``z`` are only used for adjacency distance.
    """

    id: TerritoryID
    name: str
    x: float
    z: float
    owner: Side = Side.NEUTRAL
    units: int = 0


def set_units(territory: Territory, units: int) -> None:
    """Assign a unit count, clamped to zero."""

    territory.units = max(0, int(units))


def set_owner(territory: Territory, owner: Side) -> None:
    territory.owner = owner


def distance(a: Territory, b: Territory) -> float:
    return math.hypot(a.x - b.x, a.z - b.z)


class Board:
    """Ordered territory collection with a distance-based adjacency relation."""

    def __init__(
        self,
        territories: Iterable[Territory],
        *,
        adjacency_threshold: float = DEFAULT_RULES.board.adjacency_threshold,
    ) -> None:
        self._territories: dict[TerritoryID, Territory] = {}
        for territory in territories:
            if territory.id in self._territories:
                raise ValueError(f"duplicate territory id: {territory.id}")
            self._territories[territory.id] = territory
        self.adjacency_threshold = adjacency_threshold

    def __iter__(self) -> Iterator[Territory]:
        return iter(self._territories.values())

    def __len__(self) -> int:
        return len(self._territories)

    def __contains__(self, territory_id: object) -> bool:
        return territory_id in self._territories

    def territories(self) -> list[Territory]:
        """Return territories in setup order."""

        return list(self._territories.values())

    def get(self, territory_id: str) -> Territory:
        try:
            return self._territories[TerritoryID(territory_id)]
        except KeyError:
            raise UnknownTerritory(territory_id) from None

    def adjacent(self, a: Territory, b: Territory) -> bool:
        """Return whether two distinct territories lie within the threshold."""

        if a.id == b.id:
            return False
        return distance(a, b) < self.adjacency_threshold

    def neighbours(self, territory: Territory) -> list[Territory]:
        return [other for other in self if self.adjacent(territory, other)]

    def owned_by(self, side: Side) -> list[Territory]:
        return [territory for territory in self if territory.owner == side]

    def set_owner(self, territory: Territory, owner: Side) -> None:
        set_owner(territory, owner)

    def set_units(self, territory: Territory, units: int) -> None:
        set_units(territory, units)


@dataclass(slots=True)
class GameState:
    """Read-only projection of the board consumed by presentation code."""

    phase: TurnPhase = TurnPhase.NOT_STARTED
    current_turn: Side = Side.PLAYER
    game_started: bool = False
    game_over: bool = False
    winner: Side | None = None
    turn_number: int = 0
    player_units: int = 0
    ai_units: int = 0
    player_territories: int = 0
    ai_territories: int = 0
    neutral_territories: int = 0

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["phase"] = str(self.phase)
        payload["current_turn"] = str(self.current_turn)
        payload["winner"] = str(self.winner) if self.winner is not None else None
        return payload
