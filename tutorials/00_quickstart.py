"""
Quickstart Tutorial

Goals:
- Create a population layout (inputs, layers, levels-back)
- Seed one genotype from a reproducible random stream
- Grow it into a brain and run it on an input vector
"""

from cgpevo.evolution.population import Population
from cgpevo.utils.rng_manager import RNGManager


def main():
    # A population fixes the layout shared by all of its genotypes:
    # 2 primary inputs, 1 output, 3 layers of 4 nodes, each node may look back 2 layers.
    population = Population(2, 1, {'nodes_per_layer': 4, 'layers': 3, 'levels_back': 2})

    # Seeding draws every function id, connection and constant from an explicit stream.
    rng = RNGManager(seed=42)
    genotype = population.create_genotype()
    genotype.create_primordial_seed(rng.get_context_rng('seed'))
    print('valid:', genotype.validate())

    # Growth compiles the genotype into a single-pass evaluator over its active nodes.
    brain = genotype.grow()
    print('active_nodes:', brain.active_nodes)
    print('output:', brain.run([0.5, -0.25]))


if __name__ == '__main__':
    main()
