"""Population: owner of the layout, catalog and operator settings.

Genotypes keep a read-only reference to their population and query it for the
layout, the enabled function ids, and the constants range. The generational
loop itself (selection, scheduling, bookkeeping) is left to the caller.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from cgpevo.config import DEFAULT_CONFIG, merge_config
from cgpevo.core.functions import FunctionCatalog, default_catalog
from cgpevo.core.layout import Layout
from cgpevo.evolution.genotype import Genotype
from cgpevo.evolution.strategies import MutationVariant
from cgpevo.utils.rng_manager import RNGManager
from cgpevo.utils.validation import ConfigurationError


class Population:
    """Shared configuration for every genotype of one evolutionary run."""

    def __init__(self, inputs: int, outputs: int, config: dict | None = None,
                 catalog: FunctionCatalog | None = None) -> None:
        self.config = merge_config(DEFAULT_CONFIG, config)
        cfg = self.config

        self.layout = Layout(
            inputs=inputs,
            outputs=outputs,
            nodes_per_layer=cfg.get('nodes_per_layer'),
            layers=cfg.get('layers'),
            levels_back=cfg.get('levels_back'),
            outputs_use_levels_back=bool(cfg.get('outputs_use_levels_back', True)),
        )
        self.layout.validate()

        catalog = catalog or default_catalog()
        functions = cfg.get('functions')
        if functions:
            catalog = catalog.subset(functions)
        self.catalog = catalog
        self.function_ids = catalog.function_ids()

        cmin = float(cfg.get('constant_min', -1.0))
        cmax = float(cfg.get('constant_max', 1.0))
        if not (math.isfinite(cmin) and math.isfinite(cmax)) or cmin > cmax:
            raise ConfigurationError(
                "constant_range_invalid",
                "constant_min must not exceed constant_max",
                constant_min=cmin,
                constant_max=cmax,
            )
        self.constant_range = (cmin, cmax)
        self.constant_mutation_stdev = float(cfg.get('constant_mutation_stdev', 0.1))
        if not self.constant_mutation_stdev >= 0.0:
            raise ConfigurationError(
                "constant_stdev_invalid",
                "constant_mutation_stdev must be non-negative",
                value=self.constant_mutation_stdev,
            )

        self.mutation_variant = MutationVariant.from_config(cfg)
        self.crossover_preference = float(cfg.get('crossover_preference', 0.5))
        if not 0.0 <= self.crossover_preference <= 1.0:
            raise ConfigurationError(
                "crossover_preference_invalid",
                "crossover_preference must be within [0, 1]",
                value=self.crossover_preference,
            )

        logging.info(
            f"Population layout: inputs={inputs} outputs={outputs} "
            f"layers={self.layout.layers}x{self.layout.nodes_per_layer} "
            f"levels_back={self.layout.levels_back} functions={len(self.function_ids)} "
            f"mutation={self.mutation_variant.strategy.value}"
        )

    def create_genotype(self) -> Genotype:
        """Return an empty genotype bound to this population."""
        return Genotype(population=self)

    def create_primordial_generation(self, size: int, rng_manager: RNGManager) -> list[Genotype]:
        if size < 0:
            raise ValueError("size must be non-negative")
        rng = rng_manager.get_context_rng('primordial')
        generation: list[Genotype] = []
        for _ in range(size):
            genotype = self.create_genotype()
            genotype.genotype_id = uuid.UUID(int=rng.getrandbits(128), version=4)
            genotype.create_primordial_seed(rng)
            generation.append(genotype)
        logging.debug(f"Seeded {size} primordial genotypes")
        return generation


__all__ = ["Population"]
