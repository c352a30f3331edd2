"""Deterministic random sources for seeding, mutation and crossover.

Every stochastic operation in CGPEvo receives an explicit ``random.Random``.
RNGManager hands those out: named context streams are persistent, while
per-genotype streams are derived from the master seed and the genotype ids so
that the same inputs always reproduce the same draws.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any


class RNGManager:
    """Factory for reproducible ``random.Random`` streams."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().randrange(2**63)
        self.seed = int(seed)
        self._contexts: dict[str, random.Random] = {}

    def _derive_seed(self, *parts: Any) -> int:
        h = hashlib.sha256()
        h.update(str(self.seed).encode())
        for part in parts:
            h.update(b"\x1f")
            h.update(str(part).encode())
        return int.from_bytes(h.digest()[:8], "big")

    def get_context_rng(self, context: str) -> random.Random:
        """Return the persistent stream for ``context`` (created on first use)."""
        rng = self._contexts.get(context)
        if rng is None:
            rng = random.Random(self._derive_seed("context", context))
            self._contexts[context] = rng
        return rng

    def get_rng_for_mutation(self, genotype_id: Any) -> random.Random:
        return random.Random(self._derive_seed("mutation", genotype_id))

    def get_rng_for_crossover(self, parent1_id: Any, parent2_id: Any, offspring_id: Any = None) -> random.Random:
        # Ordered ids: the preference scalar is not symmetric in its parents
        if offspring_id is None:
            return random.Random(self._derive_seed("crossover", parent1_id, parent2_id))
        return random.Random(self._derive_seed("crossover", parent1_id, parent2_id, offspring_id))

    def get_state(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "contexts": {name: rng.getstate() for name, rng in self._contexts.items()},
        }

    def set_state(self, state: dict[str, Any]) -> None:
        self.seed = int(state["seed"])
        self._contexts = {}
        for name, rng_state in state.get("contexts", {}).items():
            rng = random.Random()
            rng.setstate(rng_state)
            self._contexts[name] = rng


__all__ = ["RNGManager"]
