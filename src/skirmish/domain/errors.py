"""Exceptions raised by the simulation rules."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for recoverable rule violations."""


class InsufficientUnits(SimulationError):
    """An attack or transfer was attempted without enough units at the source."""

    def __init__(self, territory_name: str, units: int, action: str) -> None:
        super().__init__(f"{territory_name} has {units} units, not enough to {action}")
        self.territory_name = territory_name
        self.units = units
        self.action = action


class UnknownTerritory(SimulationError, KeyError):
    """A territory id does not exist on the board."""

    def __init__(self, territory_id: str) -> None:
        super().__init__(territory_id)
        self.territory_id = territory_id

    def __str__(self) -> str:
        return f"unknown territory: {self.territory_id}"


class AdvisorUnavailable(SimulationError):
    """The strategy advisor could not produce a hint."""
