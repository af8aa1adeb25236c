"""Attack and transfer resolution.

Both operations mutate the territories they are given and return a record of
what happened.  Precondition failures raise :class:`InsufficientUnits` before
anything is touched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from skirmish.domain.enums import Side
from skirmish.domain.errors import InsufficientUnits
from skirmish.domain.models import Territory, TerritoryID, set_owner, set_units
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig
from skirmish.utils.rng import RandomSource


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Outcome of a single attack."""

    attacker_id: TerritoryID
    defender_id: TerritoryID
    attacker_side: Side
    attack_strength: int
    defense_strength: int
    captured: bool
    attacker_units: int
    defender_units: int
    attacker_losses: int = 0
    defender_losses: int = 0


@dataclass(frozen=True, slots=True)
class TransferResult:
    """Outcome of a unit transfer between two territories."""

    source_id: TerritoryID
    destination_id: TerritoryID
    initiator: Side
    moved: int
    source_units: int
    destination_units: int


def strength(units: int, draw: float, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Scale ``units`` by a factor in ``[floor, floor + spread)``."""

    factor = rules.combat.strength_floor + draw * rules.combat.strength_spread
    return math.floor(units * factor)


def resolve_attack(
    attacker: Territory,
    defender: Territory,
    rand: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> AttackResult:
    """Resolve an attack from ``attacker`` into ``defender``.

    One unit always stays behind, so the attacker needs at least two.  Ties
    go to the defender.
    """

    if attacker.units <= 1:
        raise InsufficientUnits(attacker.name, attacker.units, "attack")

    attacker_units = attacker.units
    defender_units = defender.units
    attack_strength = strength(attacker_units - 1, rand(), rules=rules)
    defense_strength = strength(defender_units, rand(), rules=rules)

    if attack_strength > defense_strength:
        remaining = math.floor(
            (attacker_units - 1) * attack_strength / (attack_strength + defense_strength)
        )
        set_units(attacker, rules.combat.minimum_survivors)
        set_owner(defender, attacker.owner)
        set_units(defender, remaining)
        return AttackResult(
            attacker_id=attacker.id,
            defender_id=defender.id,
            attacker_side=attacker.owner,
            attack_strength=attack_strength,
            defense_strength=defense_strength,
            captured=True,
            attacker_units=attacker.units,
            defender_units=defender.units,
        )

    floor_units = rules.combat.minimum_survivors
    attacker_losses = math.floor(attacker_units * rules.combat.failed_attack_loss_ratio)
    defender_losses = math.floor(defender_units * rules.combat.defender_loss_ratio)
    set_units(attacker, max(floor_units, attacker_units - attacker_losses))
    set_units(defender, max(floor_units, defender_units - defender_losses))
    return AttackResult(
        attacker_id=attacker.id,
        defender_id=defender.id,
        attacker_side=attacker.owner,
        attack_strength=attack_strength,
        defense_strength=defense_strength,
        captured=False,
        attacker_units=attacker.units,
        defender_units=defender.units,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
    )


def transfer_amount(units: int, initiator: Side) -> int:
    """Units moved by a transfer out of a territory holding ``units``.

    The player moves half of the stack; the AI always keeps one unit back.
    """

    if initiator == Side.AI:
        return max(0, (units - 1) // 2)
    return max(0, units // 2)


def resolve_transfer(
    source: Territory,
    destination: Territory,
    initiator: Side,
) -> TransferResult:
    """Move units between two territories without changing ownership.

    Player transfers of zero units raise :class:`InsufficientUnits`; AI
    transfers of zero units are a silent no-op.
    """

    moved = transfer_amount(source.units, initiator)
    if moved == 0 and initiator != Side.AI:
        raise InsufficientUnits(source.name, source.units, "transfer")

    if moved:
        set_units(source, source.units - moved)
        set_units(destination, destination.units + moved)

    return TransferResult(
        source_id=source.id,
        destination_id=destination.id,
        initiator=initiator,
        moved=moved,
        source_units=source.units,
        destination_units=destination.units,
    )
