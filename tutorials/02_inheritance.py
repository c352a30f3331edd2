"""
Inheritance Tutorial

Goals:
- Blend two parents gene-by-gene with a preference scalar
- Observe that preference 1.0 / 0.0 copies a single parent
"""

from cgpevo.evolution.operators import inherit
from cgpevo.evolution.population import Population
from cgpevo.utils.rng_manager import RNGManager


def main():
    rng = RNGManager(seed=3)
    population = Population(2, 2, {'nodes_per_layer': 3, 'layers': 4})
    parent1, parent2 = population.create_primordial_generation(2, rng)

    for preference in (1.0, 0.75, 0.5, 0.0):
        child = inherit(parent1, parent2, rng, preference=preference)
        print(
            f"preference={preference}: "
            f"diff_parent1={child.diff(parent1)} diff_parent2={child.diff(parent2)} valid={child.validate()}"
        )


if __name__ == '__main__':
    main()
