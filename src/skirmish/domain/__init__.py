"""Pure rules for the territory-control simulation.

Everything here is synchronous and operates on in-memory dataclasses:

* Territories, the board and the game-state projection (see :mod:`models`).
* Declarative rule constants (see :mod:`rules_config`).
* Combat and transfer resolution, the human selection protocol, AI scoring,
  and turn bookkeeping as plain functions.

Asynchronous orchestration (advisor calls, pacing) lives in
:mod:`skirmish.services`.
"""

from . import (
    combat,
    enums,
    errors,
    events,
    models,
    rules_config,
    selection,
    setup,
    strategy,
    turn,
)

__all__ = [
    "combat",
    "enums",
    "errors",
    "events",
    "models",
    "rules_config",
    "selection",
    "setup",
    "strategy",
    "turn",
]
