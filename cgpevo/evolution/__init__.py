"""Evolutionary engine: genotype, population and operators."""

from .genotype import Genotype
from .operators import apply_mutation, inherit, mutate
from .population import Population
from .strategies import (
    FixedCountMutation,
    MutationStrategy,
    MutationVariant,
    ProbabilisticMutation,
)

__all__ = [
    "Genotype",
    "Population",
    "apply_mutation",
    "inherit",
    "mutate",
    "FixedCountMutation",
    "MutationStrategy",
    "MutationVariant",
    "ProbabilisticMutation",
]
