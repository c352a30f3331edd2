"""
Serialization Tutorial

Goals:
- Save a genotype to JSON and load it back (padding slots included)
- See how a corrupted record reports the offending field
"""

import json

from cgpevo.evolution.genotype import Genotype
from cgpevo.evolution.population import Population
from cgpevo.utils.rng_manager import RNGManager
from cgpevo.utils.validation import GenotypeFormatError


def main():
    population = Population(1, 1, {'nodes_per_layer': 2, 'layers': 2, 'levels_back': 1})
    genotype = population.create_primordial_generation(1, RNGManager(seed=1))[0]

    text = genotype.to_json()
    restored = Genotype.from_json(population, text)
    print('round_trip_equal:', restored == genotype)

    record = json.loads(text)
    record['function_genes'][0]['connections'][0] = 5  # forward reference
    try:
        population.create_genotype().load(record)
    except GenotypeFormatError as exc:
        print('load_error_field:', exc.field)


if __name__ == '__main__':
    main()
