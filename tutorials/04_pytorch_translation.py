"""
PyTorch Translation Tutorial

Goals:
- Translate a grown genotype into a batched torch module
- Check parity with the scalar brain on a few rows
"""

import torch

from cgpevo.evolution.population import Population
from cgpevo.translation.pytorch import to_pytorch_model
from cgpevo.utils.rng_manager import RNGManager


def main():
    population = Population(3, 2, {'nodes_per_layer': 4, 'layers': 4, 'levels_back': 2})
    genotype = population.create_primordial_generation(1, RNGManager(seed=5))[0]

    model = to_pytorch_model(genotype, {'device': 'cpu', 'dtype': torch.float64})
    x = torch.randn(4, 3, dtype=torch.float64)
    with torch.no_grad():
        y = model(x)
    print('output_shape:', tuple(y.shape))

    brain = genotype.grow()
    expected = torch.tensor([brain.run(row) for row in x.tolist()], dtype=torch.float64)
    print('parity:', bool(torch.allclose(y, expected)))


if __name__ == '__main__':
    main()
