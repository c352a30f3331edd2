"""Growth: compile a genotype into a Brain.

Walks back from the output genes to find the active nodes (only the first
``arity`` slots of a gene are followed), then emits an evaluation plan in node
order. Node order is layer order, so every argument of a step is computed before
the step runs.
"""

from __future__ import annotations

import logging
from typing import Any

from cgpevo.core.functions import FunctionSpec
from cgpevo.generation.brain import Brain, NodeStep
from cgpevo.utils.validation import ConfigurationError, InvariantViolation


def _resolve_specs(genotype: Any) -> list[FunctionSpec]:
    catalog = genotype.population.catalog
    specs: list[FunctionSpec] = []
    for gene_index, gene in enumerate(genotype.function_genes):
        try:
            specs.append(catalog.spec(gene.function))
        except ConfigurationError as exc:
            raise ConfigurationError(
                "unknown_function",
                f"Gene {gene_index} uses function id {gene.function} missing from the catalog",
                gene=gene_index,
                function_id=gene.function,
            ) from exc
    return specs


def active_nodes(genotype: Any, specs: list[FunctionSpec] | None = None) -> list[bool]:
    """Flags, per node index, whether the node feeds any output."""
    layout = genotype.layout
    if specs is None:
        specs = _resolve_specs(genotype)
    active = [False] * layout.node_count
    stack = [out.connection for out in genotype.output_genes]
    while stack:
        node = stack.pop()
        if node < layout.inputs or active[node]:
            continue
        active[node] = True
        gene_index = node - layout.inputs
        gene = genotype.function_genes[gene_index]
        stack.extend(gene.connections[:specs[gene_index].arity])
    return active


def grow_brain(genotype: Any) -> Brain:
    layout = genotype.layout
    if len(genotype.function_genes) != layout.function_gene_count or len(genotype.constants) != len(genotype.function_genes):
        raise InvariantViolation(
            "shape_mismatch",
            "Cannot grow a genotype that does not match its layout",
            function_genes=len(genotype.function_genes),
            constants=len(genotype.constants),
        )
    specs = _resolve_specs(genotype)
    active = active_nodes(genotype, specs)

    plan: list[NodeStep] = []
    for gene_index, gene in enumerate(genotype.function_genes):
        node = layout.inputs + gene_index
        if not active[node]:
            continue
        spec = specs[gene_index]
        plan.append(NodeStep(
            node=node,
            function_id=int(gene.function),
            fn=spec.fn,
            args=tuple(gene.connections[:spec.arity]),
            constant=genotype.constants[gene_index],
        ))

    logging.debug(f"Grew brain: {len(plan)}/{layout.function_gene_count} active nodes")
    return Brain(
        inputs=layout.inputs,
        node_count=layout.node_count,
        plan=plan,
        output_connections=[out.connection for out in genotype.output_genes],
    )


__all__ = ["grow_brain", "active_nodes"]
