"""Two-click selection protocol for the human side.

The first click picks one of the side's own territories, the second click
picks a target.  :func:`select_territory` is a pure transition: it never
touches the board, it only reports the new selection and the action to run.
"""

from __future__ import annotations

from dataclasses import dataclass

from skirmish.domain.enums import ActionType, Side
from skirmish.domain.models import Board, TerritoryID


@dataclass(frozen=True, slots=True)
class PlannedAction:
    """An action between two adjacent territories, not yet resolved."""

    kind: ActionType
    source_id: TerritoryID
    target_id: TerritoryID


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    """Result of a click: the next selection, an optional action, a message."""

    selection: TerritoryID | None
    action: PlannedAction | None = None
    message: str | None = None


def select_territory(
    selection: TerritoryID | None,
    clicked_id: TerritoryID,
    board: Board,
    *,
    side: Side = Side.PLAYER,
) -> SelectionOutcome:
    """Apply a click on ``clicked_id`` to the current ``selection``.

    Raises :class:`~skirmish.domain.errors.UnknownTerritory` when either id is
    not on the board.
    """

    clicked = board.get(clicked_id)

    if selection is None:
        if clicked.owner != side:
            return SelectionOutcome(None, message=f"{clicked.name} is not yours to select")
        return SelectionOutcome(
            clicked.id, message=f"Selected {clicked.name} with {clicked.units} units"
        )

    selected = board.get(selection)
    if selected.id == clicked.id:
        return SelectionOutcome(None, message="Deselected territory")

    if not board.adjacent(selected, clicked):
        return SelectionOutcome(selected.id, message="Territories are not adjacent")

    kind = ActionType.TRANSFER if clicked.owner == side else ActionType.ATTACK
    return SelectionOutcome(None, action=PlannedAction(kind, selected.id, clicked.id))
