"""Unit tests for attack and transfer resolution."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from skirmish.domain import combat
from skirmish.domain import models as dm
from skirmish.domain.enums import Side
from skirmish.domain.errors import InsufficientUnits
from skirmish.utils.rng import sequence_random_source


def _territory(ident: str, owner: Side, units: int) -> dm.Territory:
    return dm.Territory(
        id=dm.TerritoryID(ident), name=f"Territory {ident}", x=0.0, z=0.0, owner=owner, units=units
    )


def test_attacker_victory_with_lowest_draws():
    attacker = _territory("a", Side.PLAYER, 5)
    defender = _territory("d", Side.AI, 3)

    result = combat.resolve_attack(attacker, defender, sequence_random_source([0.0]))

    assert result.attack_strength == 3
    assert result.defense_strength == 2
    assert result.captured is True
    assert attacker.units == 1
    assert defender.owner == Side.PLAYER
    assert defender.units == 2
    assert result.defender_units == 2


def test_attack_requires_two_units():
    attacker = _territory("a", Side.PLAYER, 1)
    defender = _territory("d", Side.NEUTRAL, 0)

    with pytest.raises(InsufficientUnits, match="not enough to attack"):
        combat.resolve_attack(attacker, defender, sequence_random_source([0.0]))

    assert attacker.units == 1
    assert defender.owner == Side.NEUTRAL
    assert defender.units == 0


def test_tie_goes_to_defender():
    # attack floor(2 * 0.8) = 1, defense floor(1 * 1.0) = 1
    attacker = _territory("a", Side.AI, 3)
    defender = _territory("d", Side.PLAYER, 1)

    result = combat.resolve_attack(attacker, defender, sequence_random_source([0.0, 0.5]))

    assert result.attack_strength == result.defense_strength == 1
    assert result.captured is False
    assert defender.owner == Side.PLAYER


def test_failed_attack_losses():
    attacker = _territory("a", Side.PLAYER, 4)
    defender = _territory("d", Side.AI, 10)

    result = combat.resolve_attack(attacker, defender, sequence_random_source([0.0]))

    # attack floor(3 * 0.8) = 2, defense floor(10 * 0.8) = 8
    assert result.captured is False
    assert result.attacker_losses == 2
    assert result.defender_losses == 3
    assert attacker.units == 2
    assert defender.units == 7
    assert defender.owner == Side.AI


def test_failed_attack_keeps_one_unit_on_each_side():
    attacker = _territory("a", Side.PLAYER, 2)
    defender = _territory("d", Side.NEUTRAL, 0)

    # attack floor(1 * 0.8) = 0, defense 0: a tie
    result = combat.resolve_attack(attacker, defender, sequence_random_source([0.0]))

    assert result.captured is False
    assert attacker.units == 1
    assert defender.units == 1


def test_capturing_empty_territory():
    attacker = _territory("a", Side.AI, 4)
    defender = _territory("d", Side.NEUTRAL, 0)

    combat.resolve_attack(attacker, defender, sequence_random_source([0.0]))

    # attack floor(3 * 0.8) = 2 beats 0, remaining floor(3 * 2 / 2) = 3
    assert defender.owner == Side.AI
    assert defender.units == 3
    assert attacker.units == 1


def test_upper_draws_raise_strength():
    attacker = _territory("a", Side.PLAYER, 11)
    defender = _territory("d", Side.AI, 10)

    result = combat.resolve_attack(attacker, defender, sequence_random_source([0.99, 0.0]))

    assert result.attack_strength == 11  # floor(10 * 1.196)
    assert result.defense_strength == 8
    assert result.captured is True
    assert defender.units == 5  # floor(10 * 11 / 19)


def test_player_transfer_moves_half():
    source = _territory("s", Side.PLAYER, 10)
    destination = _territory("d", Side.PLAYER, 2)

    result = combat.resolve_transfer(source, destination, Side.PLAYER)

    assert result.moved == 5
    assert source.units == 5
    assert destination.units == 7


def test_player_transfer_of_one_unit_fails():
    source = _territory("s", Side.PLAYER, 1)
    destination = _territory("d", Side.PLAYER, 2)

    with pytest.raises(InsufficientUnits, match="not enough to transfer"):
        combat.resolve_transfer(source, destination, Side.PLAYER)

    assert source.units == 1
    assert destination.units == 2


def test_ai_transfer_keeps_one_unit_back():
    source = _territory("s", Side.AI, 5)
    destination = _territory("d", Side.AI, 4)

    result = combat.resolve_transfer(source, destination, Side.AI)

    assert result.moved == 2
    assert source.units == 3
    assert destination.units == 6


@pytest.mark.parametrize("units", [0, 1, 2])
def test_ai_transfer_of_nothing_is_silent(units):
    source = _territory("s", Side.AI, units)
    destination = _territory("d", Side.AI, 4)

    result = combat.resolve_transfer(source, destination, Side.AI)

    assert result.moved == 0
    assert source.units == units
    assert destination.units == 4


def test_transfer_never_changes_owner():
    source = _territory("s", Side.PLAYER, 8)
    destination = _territory("d", Side.NEUTRAL, 0)

    combat.resolve_transfer(source, destination, Side.PLAYER)

    assert destination.owner == Side.NEUTRAL


@given(
    source_units=st.integers(min_value=0, max_value=500),
    destination_units=st.integers(min_value=0, max_value=500),
    initiator=st.sampled_from([Side.PLAYER, Side.AI]),
)
def test_transfer_conserves_units(source_units, destination_units, initiator):
    source = _territory("s", initiator, source_units)
    destination = _territory("d", initiator, destination_units)
    before = source_units + destination_units

    try:
        combat.resolve_transfer(source, destination, initiator)
    except InsufficientUnits:
        pass

    assert source.units + destination.units == before
    assert source.units >= 0


@given(
    attacker_units=st.integers(min_value=2, max_value=300),
    defender_units=st.integers(min_value=0, max_value=300),
    draws=st.lists(st.floats(min_value=0.0, max_value=0.999), min_size=2, max_size=2),
)
def test_attack_outcome_invariants(attacker_units, defender_units, draws):
    attacker = _territory("a", Side.AI, attacker_units)
    defender = _territory("d", Side.PLAYER, defender_units)

    result = combat.resolve_attack(attacker, defender, sequence_random_source(draws))

    assert attacker.units >= 1
    assert defender.units >= 0
    if result.captured:
        assert attacker.units == 1
        assert defender.owner == attacker.owner
        assert defender.units <= attacker_units - 1
    else:
        assert defender.owner == Side.PLAYER
        assert defender.units >= 1
