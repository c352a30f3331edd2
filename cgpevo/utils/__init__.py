"""Shared utilities: random streams, validation errors, observability."""

from .rng_manager import RNGManager  # noqa: F401
from .validation import (  # noqa: F401
    ConfigurationError,
    GenotypeFormatError,
    InvariantViolation,
    ValidationError,
)

__all__ = [
    'RNGManager',
    'ValidationError',
    'ConfigurationError',
    'InvariantViolation',
    'GenotypeFormatError',
]
