"""Executable artifact grown from a genotype."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from cgpevo.core.functions import ScalarFn


@dataclass(frozen=True)
class NodeStep:
    """Evaluation of one active function gene."""

    node: int
    function_id: int
    fn: ScalarFn
    args: tuple[int, ...]
    constant: float


class Brain:
    """Single-pass evaluator over the active nodes of a genotype.

    Non-finite node values are replaced by 0.0 so that a brain always produces
    finite outputs for finite inputs.
    """

    def __init__(self, inputs: int, node_count: int, plan: Sequence[NodeStep], output_connections: Sequence[int]) -> None:
        self.inputs = inputs
        self.outputs = len(output_connections)
        self.node_count = node_count
        self.plan = tuple(plan)
        self.output_connections = tuple(output_connections)

    @property
    def active_nodes(self) -> list[int]:
        return [step.node for step in self.plan]

    def run(self, inputs: Sequence[float]) -> list[float]:
        if len(inputs) != self.inputs:
            raise ValueError(f"Expected {self.inputs} inputs, got {len(inputs)}")
        values = [0.0] * self.node_count
        for i, x in enumerate(inputs):
            x = float(x)
            if not math.isfinite(x):
                raise ValueError(f"Input {i} is not finite: {x}")
            values[i] = x
        for step in self.plan:
            value = step.fn([values[a] for a in step.args], step.constant)
            values[step.node] = value if math.isfinite(value) else 0.0
        return [values[i] for i in self.output_connections]


__all__ = ["Brain", "NodeStep"]
