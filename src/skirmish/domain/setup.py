"""Initial board layout."""

from __future__ import annotations

from .enums import Side
from .models import Board, Territory, TerritoryID
from .rules_config import DEFAULT_RULES, RulesConfig


def territory_id(x: int, z: int) -> TerritoryID:
    return TerritoryID(f"{x}-{z}")


def territory_name(x: int, z: int) -> str:
    return f"Territory ({x},{z})"


def build_board(*, rules: RulesConfig = DEFAULT_RULES) -> Board:
    """Create the square grid with its four corners removed.

    The player starts in the low corner and the AI in the high corner, each
    with ``starting_units`` on every cell of a ``starting_block`` square.  All
    other territories are neutral and empty.
    """

    size = rules.board.grid_size
    spacing = rules.board.spacing
    block = rules.board.starting_block
    offset = (size - 1) * spacing / 2
    corners = {(0, 0), (0, size - 1), (size - 1, 0), (size - 1, size - 1)}

    territories: list[Territory] = []
    for x in range(size):
        for z in range(size):
            if (x, z) in corners:
                continue
            territory = Territory(
                id=territory_id(x, z),
                name=territory_name(x, z),
                x=x * spacing - offset,
                z=z * spacing - offset,
            )
            if x < block and z < block:
                territory.owner = Side.PLAYER
                territory.units = rules.board.starting_units
            elif x > size - 1 - block and z > size - 1 - block:
                territory.owner = Side.AI
                territory.units = rules.board.starting_units
            territories.append(territory)

    return Board(territories, adjacency_threshold=rules.board.adjacency_threshold)
