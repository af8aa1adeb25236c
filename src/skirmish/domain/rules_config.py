"""Declarative rule configuration for the simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoardRules:
    """Grid layout and adjacency constants."""

    grid_size: int = 5
    spacing: float = 5.0
    adjacency_threshold: float = 7.0  # above spacing, below the diagonal (~7.07)
    starting_units: int = 3
    starting_block: int = 2  # edge length of each side's starting corner


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Strength factors and loss ratios for combat."""

    strength_floor: float = 0.8
    strength_spread: float = 0.4
    failed_attack_loss_ratio: float = 0.5
    defender_loss_ratio: float = 0.3
    minimum_survivors: int = 1


@dataclass(frozen=True, slots=True)
class StrategyRules:
    """Scoring weights for the automated side."""

    max_actions: int = 3
    player_target_multiplier: float = 1.5
    attack_border_bonus: float = 0.2
    transfer_border_bonus: float = 0.3
    transfer_margin: int = 2
    hint_name_multiplier: float = 1.5
    hint_aggression_multiplier: float = 1.2
    hint_defensive_multiplier: float = 0.8
    hint_reinforce_multiplier: float = 1.3


@dataclass(frozen=True, slots=True)
class TurnRules:
    """Reinforcement granted at the end of each side's turn."""

    reinforcement_per_territory: int = 1


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    board: BoardRules = BoardRules()
    combat: CombatRules = CombatRules()
    strategy: StrategyRules = StrategyRules()
    turn: TurnRules = TurnRules()


DEFAULT_RULES = RulesConfig()
