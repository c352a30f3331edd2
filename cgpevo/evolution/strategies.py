"""Mutation strategy configuration (tagged variant)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cgpevo.utils.validation import ConfigurationError


class MutationStrategy(str, Enum):
    FIXED_COUNT = 'fixed_count'
    PROBABILISTIC = 'probabilistic'


@dataclass
class FixedCountMutation:
    """Apply exactly ``mutation_count`` atomic mutations."""

    mutation_count: int = 2

    def validate(self) -> None:
        count = self.mutation_count
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ConfigurationError(
                "mutation_count_invalid",
                "mutation_count must be a non-negative integer",
                value=self.mutation_count,
            )


@dataclass
class ProbabilisticMutation:
    """Independent per-element mutation chances."""

    connection_mutation_chance: float = 0.05
    function_mutation_chance: float = 0.05
    output_mutation_chance: float = 0.1
    constant_mutation_chance: float = 0.1

    def validate(self) -> None:
        for name in (
            'connection_mutation_chance',
            'function_mutation_chance',
            'output_mutation_chance',
            'constant_mutation_chance',
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    "mutation_chance_invalid",
                    f"{name} must be within [0, 1]",
                    parameter=name,
                    value=value,
                )


@dataclass
class MutationVariant:
    """Selected strategy plus the settings of every strategy."""

    strategy: MutationStrategy = MutationStrategy.FIXED_COUNT
    fixed_count: FixedCountMutation = field(default_factory=FixedCountMutation)
    probabilistic: ProbabilisticMutation = field(default_factory=ProbabilisticMutation)

    def validate(self) -> None:
        self.fixed_count.validate()
        self.probabilistic.validate()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "MutationVariant":
        raw = config.get('mutation_strategy', MutationStrategy.FIXED_COUNT.value)
        try:
            strategy = MutationStrategy(raw)
        except ValueError:
            raise ConfigurationError(
                "unknown_mutation_strategy",
                f"Unknown mutation strategy: {raw!r}",
                value=raw,
                known=tuple(s.value for s in MutationStrategy),
            ) from None
        fixed = dict(config.get('fixed_count', {}) or {})
        prob = dict(config.get('probabilistic', {}) or {})
        try:
            variant = cls(
                strategy=strategy,
                fixed_count=FixedCountMutation(**fixed),
                probabilistic=ProbabilisticMutation(**prob),
            )
        except TypeError as exc:
            raise ConfigurationError(
                "unknown_mutation_parameter",
                f"Invalid mutation settings: {exc}",
            ) from exc
        variant.validate()
        return variant


__all__ = [
    'MutationStrategy',
    'FixedCountMutation',
    'ProbabilisticMutation',
    'MutationVariant',
]
