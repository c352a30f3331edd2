"""Structured validation errors shared across CGPEvo."""

from __future__ import annotations

from typing import Any


class ValidationError(Exception):
    """Error with a machine-readable type and structured details.

    Attributes:
        error_type: Short identifier such as ``"levels_back_invalid"``
        message: Human readable description
        details: Extra context (offending values, indices, field names)
    """

    def __init__(self, error_type: str, message: str, **details: Any) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.error_type}] {self.message}"
        extra = ", ".join(f"{k}={v!r}" for k, v in sorted(self.details.items()))
        return f"[{self.error_type}] {self.message} ({extra})"


class ConfigurationError(ValidationError):
    """Inconsistent population layout, catalog, or operator configuration."""


class InvariantViolation(ValidationError):
    """A genotype broke a structural invariant. Always a programming error."""


class GenotypeFormatError(ValidationError):
    """A persisted genotype record could not be loaded."""

    def __init__(self, error_type: str, message: str, field: str, **details: Any) -> None:
        super().__init__(error_type, message, field=field, **details)
        self.field = field


__all__ = [
    "ValidationError",
    "ConfigurationError",
    "InvariantViolation",
    "GenotypeFormatError",
]
