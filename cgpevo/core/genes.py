"""Gene structures of a CGP genotype (pure data)."""

from __future__ import annotations

from dataclasses import dataclass, field

from cgpevo.core.functions import MAX_FUNCTION_ARITY


@dataclass
class FunctionGene:
    """One graph node: a function id plus fixed-capacity upstream connections.

    Only the first ``arity(function)`` slots are read when the graph is grown.
    The trailing slots are padding, kept legal so that a later function change
    to a higher arity is immediately valid.
    """

    function: int = 0
    connections: list[int] = field(default_factory=lambda: [0] * MAX_FUNCTION_ARITY)

    def __post_init__(self) -> None:
        if len(self.connections) != MAX_FUNCTION_ARITY:
            raise ValueError(
                f"FunctionGene requires exactly {MAX_FUNCTION_ARITY} connection slots, "
                f"got {len(self.connections)}"
            )

    def copy(self) -> "FunctionGene":
        return FunctionGene(self.function, list(self.connections))


@dataclass
class OutputGene:
    """Selects the node that feeds one brain output."""

    connection: int = 0

    def copy(self) -> "OutputGene":
        return OutputGene(self.connection)


__all__ = ["FunctionGene", "OutputGene"]
