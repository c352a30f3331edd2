"""
Function Fit Evolution Demo (CGPEvo)

Summary:
- Evolves CGP genotypes to approximate a 1-D target function
- Minimal generational loop: truncation selection, inheritance, mutation
- Logs per-generation results to CSV and prints the best error

Defaults finish in seconds on CPU. Use --quick for a short sanity test.
"""

from __future__ import annotations

import argparse
import csv
import math
from typing import List

from cgpevo.domains.base import Domain, evaluate_genotype
from cgpevo.evolution.genotype import Genotype
from cgpevo.evolution.operators import apply_mutation
from cgpevo.evolution.population import Population
from cgpevo.generation.brain import Brain
from cgpevo.utils.rng_manager import RNGManager


class CurveFit(Domain):
    """Fitness is the negated mean absolute error against ``x*x + 0.5*sin(3x)``."""

    def __init__(self, samples: int = 32) -> None:
        self.xs = [-1.0 + 2.0 * i / (samples - 1) for i in range(samples)]

    @staticmethod
    def target(x: float) -> float:
        return x * x + 0.5 * math.sin(3.0 * x)

    def inputs(self) -> int:
        return 1

    def outputs(self) -> int:
        return 1

    def evaluate(self, brain: Brain) -> float:
        error = sum(abs(brain.run([x])[0] - self.target(x)) for x in self.xs)
        return -error / len(self.xs)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--pop', type=int, default=48)
    ap.add_argument('--gens', type=int, default=60)
    ap.add_argument('--seed', type=int, default=1234)
    ap.add_argument('--strategy', choices=['fixed_count', 'probabilistic'], default='fixed_count')
    ap.add_argument('--csv', default='demos/function_fit_log.csv')
    ap.add_argument('--quick', action='store_true', help='use a tiny config for sanity-run')
    args = ap.parse_args()

    if args.quick:
        args.pop = 8
        args.gens = 3

    rng = RNGManager(seed=args.seed)
    domain = CurveFit()
    population = Population(1, 1, {
        'nodes_per_layer': 4,
        'layers': 6,
        'levels_back': 3,
        'functions': ['identity', 'constant', 'scale', 'add', 'subtract', 'multiply', 'sin', 'cos'],
        'mutation_strategy': args.strategy,
        'fixed_count': {'mutation_count': 3},
    })

    pop: List[Genotype] = population.create_primordial_generation(args.pop, rng)
    select = rng.get_context_rng('selection')
    breed = rng.get_context_rng('breeding')

    rows: List[dict] = []
    for gen in range(args.gens):
        for genotype in pop:
            if genotype.fitness is None:
                evaluate_genotype(genotype, domain)
        pop.sort(key=lambda g: g.fitness, reverse=True)
        best = pop[0]
        print(f"gen={gen} best_mae={-best.fitness:.4f} active={len(best.grow().active_nodes)}")

        for idx, genotype in enumerate(pop):
            rows.append({
                'generation': gen,
                'idx': idx,
                'is_best': genotype is best,
                'mae': round(-genotype.fitness, 6),
                'genotype_id': str(genotype.genotype_id),
            })

        # Keep the top quarter, refill with mutated offspring of parent pairs
        parents = pop[: max(2, args.pop // 4)]
        children: List[Genotype] = []
        while len(parents) + len(children) < len(pop):
            p1, p2 = select.sample(parents, 2)
            child = population.create_genotype()
            child.inherit(p1, p2, population.crossover_preference, breed)
            apply_mutation(child, population.mutation_variant, breed)
            children.append(child)
        pop = parents + children

    final_best = max((g for g in pop if g.fitness is not None), key=lambda g: g.fitness)
    print(f"final_best_mae={-final_best.fitness:.4f}")
    print('final_best_genotype:', final_best.to_json())

    # CSV output
    try:
        with open(args.csv, 'w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=['generation', 'idx', 'is_best', 'mae', 'genotype_id'])
            w.writeheader()
            w.writerows(rows)
        print('csv_log:', args.csv)
    except OSError as exc:
        print('csv_log_failed:', exc)


if __name__ == '__main__':
    main()
