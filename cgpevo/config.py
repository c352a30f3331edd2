"""Configuration defaults and presets.

Configs are plain dicts read with ``config.get(key, default)``. Nested dicts
(``fixed_count``, ``probabilistic``) hold the per-strategy mutation settings.
"""

from __future__ import annotations

import copy
from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    # Layout
    'nodes_per_layer': 4,
    'layers': 8,
    'levels_back': 2,
    'outputs_use_levels_back': True,
    # Function catalog restriction (None = whole catalog)
    'functions': None,
    # Evolvable constants
    'constant_min': -1.0,
    'constant_max': 1.0,
    'constant_mutation_stdev': 0.1,
    # Mutation
    'mutation_strategy': 'fixed_count',
    'fixed_count': {
        'mutation_count': 2,
    },
    'probabilistic': {
        'connection_mutation_chance': 0.05,
        'function_mutation_chance': 0.05,
        'output_mutation_chance': 0.1,
        'constant_mutation_chance': 0.1,
    },
    # Inheritance
    'crossover_preference': 0.5,
    # Check invariants on every offspring produced by the operators
    'validate_offspring': True,
}


def merge_config(base: dict[str, Any], overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Deep-merge ``overrides`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


PRESET_MINIMAL = merge_config(DEFAULT_CONFIG, {
    'nodes_per_layer': 3,
    'layers': 2,
    'levels_back': 1,
    'functions': ['identity', 'constant', 'add', 'subtract', 'multiply'],
    'fixed_count': {'mutation_count': 1},
})

PRESET_STANDARD = merge_config(DEFAULT_CONFIG, {})

PRESET_RESEARCH = merge_config(DEFAULT_CONFIG, {
    'nodes_per_layer': 8,
    'layers': 16,
    'levels_back': 4,
    'mutation_strategy': 'probabilistic',
    'constant_min': -5.0,
    'constant_max': 5.0,
    'constant_mutation_stdev': 0.25,
})


__all__ = [
    'DEFAULT_CONFIG',
    'PRESET_MINIMAL',
    'PRESET_STANDARD',
    'PRESET_RESEARCH',
    'merge_config',
]
