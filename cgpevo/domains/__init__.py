"""Domain (evaluator) interfaces."""

from .base import Domain, evaluate_genotype  # noqa: F401

__all__ = ['Domain', 'evaluate_genotype']
