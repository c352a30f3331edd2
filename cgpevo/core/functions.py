"""Function catalog: the primitive operations a CGP node can compute.

Each entry binds a function id to its arity and a scalar evaluation rule
``fn(args, constant) -> float``. Only the first ``arity`` connection slots of a
gene feed ``args``; ``constant`` is the gene's evolvable constant and is ignored
unless the function declares ``uses_constant``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Iterable, Sequence

from cgpevo.utils.validation import ConfigurationError

MAX_FUNCTION_ARITY = 2


class FunctionId(IntEnum):
    IDENTITY = 0
    CONSTANT = 1
    SCALE = 2
    ADD = 3
    SUBTRACT = 4
    MULTIPLY = 5
    DIVIDE = 6
    MINIMUM = 7
    MAXIMUM = 8
    AVERAGE = 9
    NEGATE = 10
    ABS = 11
    SIN = 12
    COS = 13
    TANH = 14
    SQRT = 15
    GATE = 16
    AND = 17
    OR = 18
    NOT = 19


ScalarFn = Callable[[Sequence[float], float], float]


@dataclass(frozen=True)
class FunctionSpec:
    """Catalog entry for one primitive function.

    Attributes:
        function_id: Integer id stored in function genes
        name: Lower-case name used in configs (``"add"``)
        arity: Number of meaningful connection slots (0..MAX_FUNCTION_ARITY)
        fn: Scalar rule ``fn(args, constant)``
        uses_constant: Whether the gene's evolvable constant is consumed
        torch_fn: Optional tensor rule ``torch_fn(args, constant)`` for batched translation
    """

    function_id: int
    name: str
    arity: int
    fn: ScalarFn
    uses_constant: bool = False
    torch_fn: Callable[..., Any] | None = None


def _divide(args: Sequence[float], _c: float) -> float:
    if args[1] == 0.0:
        return 0.0
    return args[0] / args[1]


def _truth(x: float) -> bool:
    return x > 0.0


_BUILTINS: list[FunctionSpec] = [
    FunctionSpec(FunctionId.IDENTITY, "identity", 1, lambda a, c: a[0]),
    FunctionSpec(FunctionId.CONSTANT, "constant", 0, lambda a, c: c, uses_constant=True),
    FunctionSpec(FunctionId.SCALE, "scale", 1, lambda a, c: a[0] * c, uses_constant=True),
    FunctionSpec(FunctionId.ADD, "add", 2, lambda a, c: a[0] + a[1]),
    FunctionSpec(FunctionId.SUBTRACT, "subtract", 2, lambda a, c: a[0] - a[1]),
    FunctionSpec(FunctionId.MULTIPLY, "multiply", 2, lambda a, c: a[0] * a[1]),
    FunctionSpec(FunctionId.DIVIDE, "divide", 2, _divide),
    FunctionSpec(FunctionId.MINIMUM, "minimum", 2, lambda a, c: min(a[0], a[1])),
    FunctionSpec(FunctionId.MAXIMUM, "maximum", 2, lambda a, c: max(a[0], a[1])),
    FunctionSpec(FunctionId.AVERAGE, "average", 2, lambda a, c: (a[0] + a[1]) / 2.0),
    FunctionSpec(FunctionId.NEGATE, "negate", 1, lambda a, c: -a[0]),
    FunctionSpec(FunctionId.ABS, "abs", 1, lambda a, c: abs(a[0])),
    FunctionSpec(FunctionId.SIN, "sin", 1, lambda a, c: math.sin(a[0])),
    FunctionSpec(FunctionId.COS, "cos", 1, lambda a, c: math.cos(a[0])),
    FunctionSpec(FunctionId.TANH, "tanh", 1, lambda a, c: math.tanh(a[0])),
    FunctionSpec(FunctionId.SQRT, "sqrt", 1, lambda a, c: math.sqrt(abs(a[0]))),
    FunctionSpec(FunctionId.GATE, "gate", 2, lambda a, c: a[1] if _truth(a[0]) else 0.0),
    FunctionSpec(FunctionId.AND, "and", 2, lambda a, c: 1.0 if _truth(a[0]) and _truth(a[1]) else 0.0),
    FunctionSpec(FunctionId.OR, "or", 2, lambda a, c: 1.0 if _truth(a[0]) or _truth(a[1]) else 0.0),
    FunctionSpec(FunctionId.NOT, "not", 1, lambda a, c: 0.0 if _truth(a[0]) else 1.0),
]


class FunctionCatalog:
    """Immutable id -> FunctionSpec table."""

    def __init__(self, specs: Iterable[FunctionSpec]) -> None:
        table: dict[int, FunctionSpec] = {}
        names: dict[str, int] = {}
        for spec in specs:
            fid = int(spec.function_id)
            if not 0 <= spec.arity <= MAX_FUNCTION_ARITY:
                raise ConfigurationError(
                    "arity_out_of_range",
                    f"Function '{spec.name}' declares arity {spec.arity}",
                    function=spec.name,
                    max_arity=MAX_FUNCTION_ARITY,
                )
            if fid in table:
                raise ConfigurationError(
                    "duplicate_function_id",
                    f"Function id {fid} registered twice",
                    function_id=fid,
                )
            if spec.name in names:
                raise ConfigurationError(
                    "duplicate_function_name",
                    f"Function name '{spec.name}' registered twice",
                    function=spec.name,
                )
            table[fid] = spec
            names[spec.name] = fid
        if not table:
            raise ConfigurationError("empty_catalog", "Function catalog has no entries")
        self._table = table
        self._names = names

    def __contains__(self, function_id: object) -> bool:
        try:
            return int(function_id) in self._table  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self._table)

    def spec(self, function_id: int) -> FunctionSpec:
        try:
            return self._table[int(function_id)]
        except KeyError:
            raise ConfigurationError(
                "unknown_function",
                f"Function id {function_id} is not in the catalog",
                function_id=int(function_id),
            ) from None

    def arity(self, function_id: int) -> int:
        return self.spec(function_id).arity

    def evaluate(self, function_id: int, inputs: Sequence[float], constant: float = 0.0) -> float:
        spec = self.spec(function_id)
        return float(spec.fn(inputs, constant))

    def function_ids(self) -> list[int]:
        return sorted(self._table)

    def lookup(self, name: str) -> int:
        try:
            return self._names[name]
        except KeyError:
            raise ConfigurationError(
                "unknown_function_name",
                f"Function '{name}' is not in the catalog",
                function=name,
            ) from None

    def subset(self, names: Iterable[str]) -> "FunctionCatalog":
        """Return a catalog restricted to ``names`` (ids are preserved)."""
        return FunctionCatalog(self._table[self.lookup(n)] for n in names)


def default_catalog() -> FunctionCatalog:
    return FunctionCatalog(_BUILTINS)


def is_builtin(spec: FunctionSpec) -> bool:
    return any(spec is b for b in _BUILTINS)


__all__ = [
    "MAX_FUNCTION_ARITY",
    "FunctionId",
    "FunctionSpec",
    "FunctionCatalog",
    "default_catalog",
    "is_builtin",
]
