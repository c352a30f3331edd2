"""PyTorch translation of a grown CGP brain.

The resulting module evaluates a whole batch of input vectors at once and is
numerically equivalent to ``Brain.run`` row by row at the default float64 dtype
(non-finite node values are zeroed the same way). A narrower dtype overflows
sooner than Python floats and may zero values that ``Brain.run`` keeps.
Custom catalog entries provide their own ``torch_fn``; built-in functions use
the table below.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import torch
import torch.nn as nn

from cgpevo.core.functions import FunctionId, is_builtin
from cgpevo.generation.brain import Brain
from cgpevo.utils.validation import ConfigurationError


def _divide(a: list[torch.Tensor], c: torch.Tensor) -> torch.Tensor:
    b_is_zero = a[1] == 0
    safe = torch.where(b_is_zero, torch.ones_like(a[1]), a[1])
    return torch.where(b_is_zero, torch.zeros_like(a[0]), a[0] / safe)


def _truth(x: torch.Tensor) -> torch.Tensor:
    return x > 0


_TORCH_BUILTINS: dict[int, Callable[[list[torch.Tensor], torch.Tensor], torch.Tensor]] = {
    FunctionId.IDENTITY: lambda a, c: a[0],
    FunctionId.CONSTANT: lambda a, c: c,
    FunctionId.SCALE: lambda a, c: a[0] * c,
    FunctionId.ADD: lambda a, c: a[0] + a[1],
    FunctionId.SUBTRACT: lambda a, c: a[0] - a[1],
    FunctionId.MULTIPLY: lambda a, c: a[0] * a[1],
    FunctionId.DIVIDE: _divide,
    FunctionId.MINIMUM: lambda a, c: torch.minimum(a[0], a[1]),
    FunctionId.MAXIMUM: lambda a, c: torch.maximum(a[0], a[1]),
    FunctionId.AVERAGE: lambda a, c: (a[0] + a[1]) / 2.0,
    FunctionId.NEGATE: lambda a, c: -a[0],
    FunctionId.ABS: lambda a, c: torch.abs(a[0]),
    FunctionId.SIN: lambda a, c: torch.sin(a[0]),
    FunctionId.COS: lambda a, c: torch.cos(a[0]),
    FunctionId.TANH: lambda a, c: torch.tanh(a[0]),
    FunctionId.SQRT: lambda a, c: torch.sqrt(torch.abs(a[0])),
    FunctionId.GATE: lambda a, c: torch.where(_truth(a[0]), a[1], torch.zeros_like(a[1])),
    FunctionId.AND: lambda a, c: (_truth(a[0]) & _truth(a[1])).to(c.dtype),
    FunctionId.OR: lambda a, c: (_truth(a[0]) | _truth(a[1])).to(c.dtype),
    FunctionId.NOT: lambda a, c: (~_truth(a[0])).to(c.dtype),
}


class CGPModule(nn.Module):
    """Batched evaluator: ``forward(x[batch, inputs]) -> y[batch, outputs]``."""

    def __init__(self, brain: Brain, torch_fns: list[Callable[..., torch.Tensor]],
                 device: Any = 'cpu', dtype: torch.dtype = torch.float64) -> None:
        super().__init__()
        self.inputs = brain.inputs
        self.outputs = brain.outputs
        self._nodes = [step.node for step in brain.plan]
        self._args = [step.args for step in brain.plan]
        self._torch_fns = torch_fns
        self._output_connections = list(brain.output_connections)
        self.register_buffer(
            'constants',
            torch.tensor([step.constant for step in brain.plan], device=device, dtype=dtype),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if x.dim() != 2 or x.size(1) != self.inputs:
            raise ValueError(f"Expected input of shape [batch, {self.inputs}], got {tuple(x.shape)}")
        x = x.to(dtype=self.constants.dtype, device=self.constants.device)
        values: dict[int, torch.Tensor] = {i: x[:, i] for i in range(self.inputs)}
        for k, node in enumerate(self._nodes):
            args = [values[a] for a in self._args[k]]
            out = self._torch_fns[k](args, self.constants[k])
            if out.dim() == 0:
                out = out.expand(x.size(0))
            values[node] = torch.nan_to_num(out, nan=0.0, posinf=0.0, neginf=0.0)
        return torch.stack([values[i] for i in self._output_connections], dim=1)


def to_pytorch_model(source: Any, config: dict | None = None) -> CGPModule:
    """Translate a Genotype (grown first) or a Brain into a CGPModule.

    Config keys: ``device`` (default ``'cpu'``) and ``dtype`` (default float64).
    """
    config = config or {}
    brain = source if isinstance(source, Brain) else source.grow()
    catalog = None if isinstance(source, Brain) else source.population.catalog

    torch_fns: list[Callable[..., torch.Tensor]] = []
    for step in brain.plan:
        fn = None
        if catalog is not None:
            spec = catalog.spec(step.function_id)
            fn = spec.torch_fn
            if fn is None and is_builtin(spec):
                fn = _TORCH_BUILTINS.get(step.function_id)
        else:
            fn = _TORCH_BUILTINS.get(step.function_id)
        if fn is None:
            raise ConfigurationError(
                "no_torch_function",
                f"Function id {step.function_id} has no tensor implementation",
                function_id=step.function_id,
            )
        torch_fns.append(fn)

    model = CGPModule(brain, torch_fns, device=config.get('device', 'cpu'), dtype=config.get('dtype', torch.float64))
    logging.debug(f"Translated brain with {len(brain.plan)} active nodes to PyTorch")
    return model


__all__ = ["CGPModule", "to_pytorch_model"]
