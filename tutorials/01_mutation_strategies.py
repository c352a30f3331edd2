"""
Mutation Strategies Tutorial

Goals:
- Apply fixed-count mutation (exactly N atomic changes)
- Apply probabilistic mutation (independent per-element chances)
- Count how many elements changed with Genotype.diff
"""

from cgpevo.evolution.operators import mutate
from cgpevo.evolution.population import Population
from cgpevo.evolution.strategies import MutationStrategy, MutationVariant, ProbabilisticMutation
from cgpevo.utils.rng_manager import RNGManager


def main():
    rng = RNGManager(seed=7)
    population = Population(1, 1, {'mutation_strategy': 'fixed_count', 'fixed_count': {'mutation_count': 2}})
    parent = population.create_primordial_generation(1, rng)[0]

    # Uses the population's configured strategy (fixed_count, 2 mutations)
    child = mutate(parent, rng)
    print('fixed_count changed:', child.diff(parent))

    # Override the strategy for a single call
    variant = MutationVariant(
        strategy=MutationStrategy.PROBABILISTIC,
        probabilistic=ProbabilisticMutation(
            connection_mutation_chance=0.1,
            function_mutation_chance=0.1,
            output_mutation_chance=0.5,
            constant_mutation_chance=0.2,
        ),
    )
    child = mutate(parent, rng, variant)
    print('probabilistic changed:', child.diff(parent))
    print('child valid:', child.validate())


if __name__ == '__main__':
    main()
