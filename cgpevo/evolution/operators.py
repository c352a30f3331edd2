"""Mutation and inheritance operators.

Functional wrappers around the in-place Genotype methods: they work on a copy,
derive the random stream from the RNGManager, give the offspring a new
deterministic id, and optionally check its invariants.
"""

from __future__ import annotations

import logging
import random
import uuid

from cgpevo.evolution.genotype import Genotype
from cgpevo.evolution.strategies import MutationStrategy, MutationVariant
from cgpevo.utils.rng_manager import RNGManager


def _offspring_id(rng_manager: RNGManager) -> uuid.UUID:
    rng = rng_manager.get_context_rng('offspring_ids')
    return uuid.UUID(int=rng.getrandbits(128), version=4)


def _should_validate(genotype: Genotype) -> bool:
    return bool(genotype.population.config.get('validate_offspring', True))


def apply_mutation(genotype: Genotype, variant: MutationVariant, rng: random.Random) -> None:
    """Mutate ``genotype`` in place with the strategy selected by ``variant``."""
    if variant.strategy is MutationStrategy.FIXED_COUNT:
        genotype.fixed_count_mutation(variant.fixed_count, rng)
    elif variant.strategy is MutationStrategy.PROBABILISTIC:
        genotype.probabilistic_mutation(variant.probabilistic, rng)
    else:  # pragma: no cover - enum is closed
        raise ValueError(f"Unknown mutation strategy: {variant.strategy}")


def mutate(genotype: Genotype, rng_manager: RNGManager, variant: MutationVariant | None = None) -> Genotype:
    """Return a mutated copy of ``genotype``.

    The child id comes from the manager's persistent ``offspring_ids`` stream and
    keys the mutation stream, so repeated calls give distinct children while a
    fresh RNGManager with the same seed replays the same sequence.
    ``variant`` defaults to the population's configured strategy.
    """
    if variant is None:
        variant = genotype.population.mutation_variant
    mutated = genotype.clone()
    mutated.genotype_id = _offspring_id(rng_manager)
    rng = rng_manager.get_rng_for_mutation(mutated.genotype_id)
    mutated.fitness = None
    apply_mutation(mutated, variant, rng)

    if _should_validate(mutated):
        mutated.assert_valid()
    logging.debug(
        f"Mutated {genotype.genotype_id} -> {mutated.genotype_id} "
        f"({variant.strategy.value}, {mutated.diff(genotype)} elements changed)"
    )
    return mutated


def inherit(parent1: Genotype, parent2: Genotype, rng_manager: RNGManager, preference: float | None = None) -> Genotype:
    """Blend two parents into one offspring.

    ``preference`` is the per-element probability of taking parent1's value and
    defaults to the population's ``crossover_preference``.
    """
    if preference is None:
        preference = parent1.population.crossover_preference
    child = parent1.population.create_genotype()
    child.genotype_id = _offspring_id(rng_manager)
    rng = rng_manager.get_rng_for_crossover(parent1.genotype_id, parent2.genotype_id, child.genotype_id)
    child.inherit(parent1, parent2, preference, rng)

    if _should_validate(child):
        child.assert_valid()
    return child


__all__ = ["apply_mutation", "mutate", "inherit"]
