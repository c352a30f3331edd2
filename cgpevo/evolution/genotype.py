"""Cartesian genotype: function genes, output genes and evolvable constants.

The genotype never changes shape after seeding. Every stochastic method takes
an explicit ``random.Random`` so that a given stream always reproduces the same
seeding, mutation or inheritance outcome.
"""

from __future__ import annotations

import json
import math
import random
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cgpevo.core.functions import MAX_FUNCTION_ARITY
from cgpevo.core.genes import FunctionGene, OutputGene
from cgpevo.core.layout import (
    Layout,
    connection_range,
    is_legal_connection,
    output_range,
    random_connection,
)
from cgpevo.generation.growth import grow_brain
from cgpevo.utils.validation import ConfigurationError, GenotypeFormatError, InvariantViolation

if TYPE_CHECKING:
    from cgpevo.evolution.population import Population
    from cgpevo.evolution.strategies import FixedCountMutation, ProbabilisticMutation
    from cgpevo.generation.brain import Brain

SCHEMA_VERSION = 1

_MUTATION_KINDS = ('function', 'connection', 'output', 'constant')


@dataclass(eq=False)
class Genotype:
    """Evolvable CGP program.

    Attributes:
        population: Owning population (read-only layout, catalog and ranges)
        function_genes: Graph body, ``layers * nodes_per_layer`` genes
        output_genes: One selector per domain output
        constants: One evolvable constant per function gene
        genotype_id: Identifier used to derive per-genotype random streams
        fitness: Optional fitness value assigned by evaluation
    """

    population: Population = field(repr=False)
    function_genes: list[FunctionGene] = field(default_factory=list)
    output_genes: list[OutputGene] = field(default_factory=list)
    constants: list[float] = field(default_factory=list)
    genotype_id: uuid.UUID = field(default_factory=uuid.uuid4)
    fitness: float | None = None

    @property
    def layout(self) -> Layout:
        return self.population.layout

    def connection_range(self, layer: int, levels_back: int | None = None) -> tuple[int, int]:
        if levels_back is None:
            levels_back = self.layout.levels_back
        return connection_range(self.layout, layer, levels_back)

    def evolvable_constant(self, index: int) -> float:
        return self.constants[index]

    def reset(self) -> None:
        self.function_genes = []
        self.output_genes = []
        self.constants = []
        self.fitness = None

    def clone(self) -> "Genotype":
        return Genotype(
            population=self.population,
            function_genes=[g.copy() for g in self.function_genes],
            output_genes=[g.copy() for g in self.output_genes],
            constants=list(self.constants),
            genotype_id=self.genotype_id,
            fitness=self.fitness,
        )

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def create_primordial_seed(self, rng: random.Random) -> None:
        layout = self.layout
        function_ids = self.population.function_ids
        self.reset()
        for gene_index in range(layout.function_gene_count):
            lo, hi = self.connection_range(layout.layer_of(gene_index))
            self.function_genes.append(FunctionGene(
                function=rng.choice(function_ids),
                connections=[random_connection(layout, lo, hi, rng) for _ in range(MAX_FUNCTION_ARITY)],
            ))
        lo, hi = output_range(layout)
        self.output_genes = [OutputGene(random_connection(layout, lo, hi, rng)) for _ in range(layout.outputs)]
        cmin, cmax = self.population.constant_range
        self.constants = [rng.uniform(cmin, cmax) for _ in range(layout.function_gene_count)]

    # ------------------------------------------------------------------
    # Atomic mutations
    # ------------------------------------------------------------------
    def _mutate_function(self, gene_index: int, rng: random.Random) -> None:
        self.function_genes[gene_index].function = rng.choice(self.population.function_ids)

    def _mutate_connection(self, gene_index: int, slot: int, rng: random.Random) -> None:
        lo, hi = self.connection_range(self.layout.layer_of(gene_index))
        self.function_genes[gene_index].connections[slot] = random_connection(self.layout, lo, hi, rng)

    def _mutate_output(self, output_index: int, rng: random.Random) -> None:
        lo, hi = output_range(self.layout)
        self.output_genes[output_index].connection = random_connection(self.layout, lo, hi, rng)

    def _mutate_constant(self, index: int, rng: random.Random) -> None:
        cmin, cmax = self.population.constant_range
        value = self.constants[index] + rng.gauss(0.0, self.population.constant_mutation_stdev)
        self.constants[index] = min(cmax, max(cmin, value))

    def fixed_count_mutation(self, config: FixedCountMutation, rng: random.Random) -> None:
        """Apply exactly ``config.mutation_count`` atomic mutations.

        Each step picks one of the four mutation kinds uniformly, then a uniform
        element of that kind. A redraw may coincide with the old value.
        """
        if config.mutation_count:
            self._check_shape()
        gene_count = len(self.function_genes)
        for _ in range(config.mutation_count):
            kind = rng.choice(_MUTATION_KINDS)
            if kind == 'function':
                self._mutate_function(rng.randrange(gene_count), rng)
            elif kind == 'connection':
                self._mutate_connection(rng.randrange(gene_count), rng.randrange(MAX_FUNCTION_ARITY), rng)
            elif kind == 'output':
                self._mutate_output(rng.randrange(len(self.output_genes)), rng)
            else:
                self._mutate_constant(rng.randrange(len(self.constants)), rng)
        if config.mutation_count:
            self.fitness = None

    def probabilistic_mutation(self, config: ProbabilisticMutation, rng: random.Random) -> None:
        """Independent Bernoulli trial per element; a trial hits when ``rng.random() < chance``."""
        for gene_index in range(len(self.function_genes)):
            if rng.random() < config.function_mutation_chance:
                self._mutate_function(gene_index, rng)
            for slot in range(MAX_FUNCTION_ARITY):
                if rng.random() < config.connection_mutation_chance:
                    self._mutate_connection(gene_index, slot, rng)
        for output_index in range(len(self.output_genes)):
            if rng.random() < config.output_mutation_chance:
                self._mutate_output(output_index, rng)
        for index in range(len(self.constants)):
            if rng.random() < config.constant_mutation_chance:
                self._mutate_constant(index, rng)
        self.fitness = None

    # ------------------------------------------------------------------
    # Inheritance
    # ------------------------------------------------------------------
    def inherit(self, parent1: "Genotype", parent2: "Genotype", preference: float, rng: random.Random) -> None:
        """Replace this genotype with a per-gene blend of two parents.

        Each function gene, output gene and constant comes from ``parent1`` with
        probability ``preference`` and from ``parent2`` otherwise. Parents share
        the layout, so every inherited connection is already legal.
        """
        if not 0.0 <= preference <= 1.0:
            raise ValueError(f"preference must be within [0, 1], got {preference}")
        for parent in (parent1, parent2):
            if parent.layout != self.layout:
                raise ConfigurationError(
                    "layout_mismatch",
                    "Parents must share the offspring's population layout",
                    parent_id=str(parent.genotype_id),
                )
            missing = set(parent.population.function_ids) - set(self.population.function_ids)
            if missing:
                raise ConfigurationError(
                    "catalog_mismatch",
                    "Parent population uses functions outside the offspring's catalog",
                    parent_id=str(parent.genotype_id),
                    function_ids=sorted(missing),
                )
            parent._check_shape()

        def pick(a: Any, b: Any) -> Any:
            return a if rng.random() < preference else b

        function_genes = [pick(a, b).copy() for a, b in zip(parent1.function_genes, parent2.function_genes)]
        output_genes = [pick(a, b).copy() for a, b in zip(parent1.output_genes, parent2.output_genes)]
        constants = [pick(a, b) for a, b in zip(parent1.constants, parent2.constants)]
        self.function_genes = function_genes
        self.output_genes = output_genes
        self.constants = constants
        self.fitness = None

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------
    def grow(self) -> Brain:
        return grow_brain(self)

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------
    def _check_shape(self) -> None:
        layout = self.layout
        if (len(self.function_genes) != layout.function_gene_count
                or len(self.output_genes) != layout.outputs
                or len(self.constants) != len(self.function_genes)):
            raise InvariantViolation(
                "shape_mismatch",
                "Genotype does not match its population layout (not seeded?)",
                function_genes=len(self.function_genes),
                output_genes=len(self.output_genes),
                constants=len(self.constants),
            )

    def validate(self, collect_errors: list[Any] | None = None) -> bool:
        """Check every structural invariant. Errors are appended to ``collect_errors``."""
        layout = self.layout
        errors: list[InvariantViolation] = []
        if len(self.function_genes) != layout.function_gene_count:
            errors.append(InvariantViolation(
                "function_gene_count",
                "Function gene count differs from the layout",
                expected=layout.function_gene_count,
                actual=len(self.function_genes),
            ))
        if len(self.constants) != len(self.function_genes):
            errors.append(InvariantViolation(
                "constant_count",
                "Constants are not index-aligned with function genes",
                constants=len(self.constants),
                function_genes=len(self.function_genes),
            ))
        if len(self.output_genes) != layout.outputs:
            errors.append(InvariantViolation(
                "output_gene_count",
                "Output gene count differs from the layout",
                expected=layout.outputs,
                actual=len(self.output_genes),
            ))
        for gene_index, gene in enumerate(self.function_genes[:layout.function_gene_count]):
            if gene.function not in self.population.catalog:
                errors.append(InvariantViolation(
                    "unknown_function",
                    "Function id missing from the catalog",
                    gene=gene_index,
                    function=gene.function,
                ))
            lo, hi = self.connection_range(layout.layer_of(gene_index))
            for slot, target in enumerate(gene.connections):
                if not is_legal_connection(layout, target, lo, hi):
                    errors.append(InvariantViolation(
                        "illegal_connection",
                        "Connection outside the legal window of its layer",
                        gene=gene_index,
                        slot=slot,
                        connection=target,
                        window=(lo, hi),
                    ))
        lo, hi = output_range(layout)
        for output_index, out in enumerate(self.output_genes):
            if not is_legal_connection(layout, out.connection, lo, hi):
                errors.append(InvariantViolation(
                    "illegal_output_connection",
                    "Output gene outside the legal output window",
                    output=output_index,
                    connection=out.connection,
                    window=(lo, hi),
                ))
        if collect_errors is not None:
            collect_errors.extend(errors)
        return not errors

    def assert_valid(self) -> None:
        errors: list[InvariantViolation] = []
        if not self.validate(errors):
            raise errors[0]

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genotype):
            return NotImplemented
        return (self.function_genes == other.function_genes
                and self.output_genes == other.output_genes
                and self.constants == other.constants)

    __hash__ = None  # type: ignore[assignment]

    def diff(self, other: "Genotype") -> int:
        """Number of elements (function ids, slots, outputs, constants) that differ."""
        if (len(self.function_genes) != len(other.function_genes)
                or len(self.output_genes) != len(other.output_genes)
                or len(self.constants) != len(other.constants)):
            raise ValueError("Cannot diff genotypes of different shapes")
        count = 0
        for a, b in zip(self.function_genes, other.function_genes):
            count += int(a.function != b.function)
            count += sum(1 for x, y in zip(a.connections, b.connections) if x != y)
        count += sum(1 for a, b in zip(self.output_genes, other.output_genes) if a.connection != b.connection)
        count += sum(1 for a, b in zip(self.constants, other.constants) if a != b)
        return count

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self) -> dict[str, Any]:
        return {
            'schema_version': SCHEMA_VERSION,
            'function_genes': [
                {'function': int(g.function), 'connections': list(g.connections)}
                for g in self.function_genes
            ],
            'output_genes': [{'connection': g.connection} for g in self.output_genes],
            'constants': list(self.constants),
        }

    def load(self, record: Any) -> None:
        """Replace the genes with a saved record. Raises GenotypeFormatError."""
        function_genes, output_genes, constants = _parse_record(record, self)
        self.function_genes = function_genes
        self.output_genes = output_genes
        self.constants = constants
        self.fitness = None

    def to_json(self) -> str:
        return json.dumps(self.save())

    @classmethod
    def from_json(cls, population: Population, text: str) -> "Genotype":
        try:
            record = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GenotypeFormatError("invalid_json", f"Invalid JSON: {exc.msg}", field="<root>") from exc
        genotype = cls(population)
        genotype.load(record)
        return genotype


def _expect_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GenotypeFormatError("not_an_integer", f"{field_name} must be an integer", field=field_name, value=value)
    return value


def _expect_list(value: Any, field_name: str, length: int) -> list[Any]:
    if not isinstance(value, list):
        raise GenotypeFormatError("not_a_list", f"{field_name} must be a list", field=field_name)
    if len(value) != length:
        raise GenotypeFormatError(
            "length_mismatch",
            f"{field_name} has {len(value)} entries, expected {length}",
            field=field_name,
            expected=length,
            actual=len(value),
        )
    return value


def _expect_key(entry: Any, key: str, field_name: str) -> Any:
    if not isinstance(entry, dict):
        raise GenotypeFormatError("not_a_mapping", f"{field_name} must be an object", field=field_name)
    if key not in entry:
        raise GenotypeFormatError("missing_field", f"{field_name}.{key} is missing", field=f"{field_name}.{key}")
    return entry[key]


def _parse_record(record: Any, genotype: Genotype) -> tuple[list[FunctionGene], list[OutputGene], list[float]]:
    layout = genotype.layout
    catalog = genotype.population.catalog
    if not isinstance(record, dict):
        raise GenotypeFormatError("not_a_mapping", "Genotype record must be an object", field="<root>")
    version = record.get('schema_version', SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise GenotypeFormatError(
            "unsupported_schema_version",
            f"Unsupported schema version {version!r}",
            field="schema_version",
            value=version,
        )

    function_genes: list[FunctionGene] = []
    raw_genes = _expect_list(_expect_key(record, 'function_genes', '<root>'), 'function_genes',
                             layout.function_gene_count)
    for gene_index, entry in enumerate(raw_genes):
        base = f"function_genes[{gene_index}]"
        function = _expect_int(_expect_key(entry, 'function', base), f"{base}.function")
        if function not in catalog:
            raise GenotypeFormatError("unknown_function", f"Function id {function} is not in the catalog",
                                      field=f"{base}.function", value=function)
        raw_conns = _expect_list(_expect_key(entry, 'connections', base), f"{base}.connections", MAX_FUNCTION_ARITY)
        lo, hi = genotype.connection_range(layout.layer_of(gene_index))
        connections = []
        for slot, raw in enumerate(raw_conns):
            slot_field = f"{base}.connections[{slot}]"
            target = _expect_int(raw, slot_field)
            if not is_legal_connection(layout, target, lo, hi):
                raise GenotypeFormatError("illegal_connection", f"{slot_field} outside window [{lo}, {hi})",
                                          field=slot_field, value=target)
            connections.append(target)
        function_genes.append(FunctionGene(function, connections))

    output_genes: list[OutputGene] = []
    raw_outputs = _expect_list(_expect_key(record, 'output_genes', '<root>'), 'output_genes', layout.outputs)
    lo, hi = output_range(layout)
    for output_index, entry in enumerate(raw_outputs):
        out_field = f"output_genes[{output_index}].connection"
        target = _expect_int(_expect_key(entry, 'connection', f"output_genes[{output_index}]"), out_field)
        if not is_legal_connection(layout, target, lo, hi):
            raise GenotypeFormatError("illegal_connection", f"{out_field} outside window [{lo}, {hi})",
                                      field=out_field, value=target)
        output_genes.append(OutputGene(target))

    constants: list[float] = []
    raw_constants = _expect_list(_expect_key(record, 'constants', '<root>'), 'constants', layout.function_gene_count)
    for index, raw in enumerate(raw_constants):
        const_field = f"constants[{index}]"
        if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
            raise GenotypeFormatError("not_a_number", f"{const_field} must be a finite number",
                                      field=const_field, value=raw)
        constants.append(float(raw))

    return function_genes, output_genes, constants


__all__ = ["Genotype", "SCHEMA_VERSION"]
