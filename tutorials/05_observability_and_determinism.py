"""
Observability & Determinism Tutorial

Goals:
- Build a genotype report (fingerprint, active nodes, function histogram)
- Show that the same seed reproduces the same signature
"""

from cgpevo.evolution.population import Population
from cgpevo.utils.observability import determinism_signature, genotype_report
from cgpevo.utils.rng_manager import RNGManager


def main():
    population = Population(2, 1)
    sigs = []
    for _ in range(2):
        genotype = population.create_primordial_generation(1, RNGManager(seed=123))[0]
        report = genotype_report(genotype)
        sigs.append(determinism_signature(report))
    print('active_nodes:', report['active_nodes'])
    print('function_histogram:', report['function_histogram'])
    print('signatures_equal:', sigs[0] == sigs[1])


if __name__ == '__main__':
    main()
