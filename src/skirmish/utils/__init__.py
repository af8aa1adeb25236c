"""Utility functions for the simulation."""

from skirmish.utils.rng import (
    RandomSource,
    generate_seed,
    seeded_random_source,
    sequence_random_source,
    system_random_source,
)

__all__ = [
    "RandomSource",
    "generate_seed",
    "seeded_random_source",
    "sequence_random_source",
    "system_random_source",
]
