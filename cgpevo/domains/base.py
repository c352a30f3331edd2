"""Evaluator contract for control and prediction domains.

A domain drives a grown brain (``brain.run(inputs) -> outputs``) through its
own episodes and reduces the outcome to a single fitness scalar.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from cgpevo.generation.brain import Brain
from cgpevo.utils.validation import ConfigurationError


class Domain(ABC):
    @abstractmethod
    def inputs(self) -> int:
        ...

    @abstractmethod
    def outputs(self) -> int:
        ...

    @abstractmethod
    def evaluate(self, brain: Brain) -> float:
        """Run the brain through the domain and return its fitness."""


def evaluate_genotype(genotype: Any, domain: Domain) -> float:
    """Grow ``genotype``, score it on ``domain`` and record ``genotype.fitness``."""
    layout = genotype.layout
    if layout.inputs != domain.inputs() or layout.outputs != domain.outputs():
        raise ConfigurationError(
            "domain_mismatch",
            "Population inputs/outputs do not match the domain",
            population=(layout.inputs, layout.outputs),
            domain=(domain.inputs(), domain.outputs()),
        )
    fitness = float(domain.evaluate(genotype.grow()))
    genotype.fitness = fitness
    return fitness


__all__ = ["Domain", "evaluate_genotype"]
