"""Population layout and connection-range arithmetic.

Node indices are laid out as ``[primary inputs | layer 0 | layer 1 | ...]``:
index ``i < inputs`` is a primary input and function gene ``g`` is node
``inputs + g``. A gene only connects to primary inputs or to nodes of the
``levels_back`` layers directly before its own, so every connection points
strictly backwards and the graph is acyclic by construction.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from cgpevo.utils.validation import ConfigurationError


@dataclass(frozen=True)
class Layout:
    inputs: int
    outputs: int
    nodes_per_layer: int
    layers: int
    levels_back: int
    outputs_use_levels_back: bool = True

    @property
    def function_gene_count(self) -> int:
        return self.nodes_per_layer * self.layers

    @property
    def node_count(self) -> int:
        return self.inputs + self.function_gene_count

    def validate(self) -> None:
        checks = [
            ("inputs", self.inputs),
            ("outputs", self.outputs),
            ("nodes_per_layer", self.nodes_per_layer),
            ("layers", self.layers),
            ("levels_back", self.levels_back),
        ]
        for name, value in checks:
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(
                    f"{name}_invalid",
                    f"Layout parameter '{name}' must be a positive integer",
                    parameter=name,
                    value=value,
                )

    def layer_of(self, gene_index: int) -> int:
        if not 0 <= gene_index < self.function_gene_count:
            raise IndexError(f"gene index {gene_index} out of range")
        return gene_index // self.nodes_per_layer

    def node_index(self, gene_index: int) -> int:
        return self.inputs + gene_index


def connection_range(layout: Layout, layer: int, levels_back: int) -> tuple[int, int]:
    """Return ``[lo, hi)`` of the node window a gene in ``layer`` may connect to.

    ``hi`` is the first node of ``layer`` itself. ``lo`` is the first node of the
    earliest layer inside the window, clamped to 0 (the first primary input) once
    the window reaches back past layer 0. ``layer == layout.layers`` is the
    virtual layer used for output genes.
    """
    if not 0 <= layer <= layout.layers:
        raise ValueError(f"layer {layer} outside [0, {layout.layers}]")
    if levels_back < 1:
        raise ValueError("levels_back must be >= 1")
    hi = layout.inputs + layer * layout.nodes_per_layer
    first_layer = layer - levels_back
    if first_layer <= 0:
        lo = 0
    else:
        lo = layout.inputs + first_layer * layout.nodes_per_layer
    return lo, hi


def output_range(layout: Layout) -> tuple[int, int]:
    if layout.outputs_use_levels_back:
        return connection_range(layout, layout.layers, layout.levels_back)
    return 0, layout.node_count


def is_legal_connection(layout: Layout, index: int, lo: int, hi: int) -> bool:
    # Primary inputs stay reachable from every layer
    return 0 <= index < layout.inputs or lo <= index < hi


def random_connection(layout: Layout, lo: int, hi: int, rng: random.Random) -> int:
    """Draw uniformly over the primary inputs plus the ``[lo, hi)`` window."""
    if lo <= layout.inputs:
        return rng.randrange(0, hi)
    k = rng.randrange(layout.inputs + hi - lo)
    if k < layout.inputs:
        return k
    return lo + k - layout.inputs


__all__ = [
    "Layout",
    "connection_range",
    "output_range",
    "is_legal_connection",
    "random_connection",
]
