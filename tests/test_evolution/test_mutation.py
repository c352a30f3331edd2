import random

import pytest

from cgpevo.evolution.operators import apply_mutation, mutate
from cgpevo.evolution.population import Population
from cgpevo.evolution.strategies import (
    FixedCountMutation,
    MutationStrategy,
    MutationVariant,
    ProbabilisticMutation,
)
from cgpevo.utils.rng_manager import RNGManager
from cgpevo.utils.validation import ConfigurationError, InvariantViolation

ZERO = ProbabilisticMutation(0.0, 0.0, 0.0, 0.0)
ONE = ProbabilisticMutation(1.0, 1.0, 1.0, 1.0)


def _seeded(config=None, inputs=2, outputs=2, seed=0):
    base = {'nodes_per_layer': 4, 'layers': 5, 'levels_back': 2}
    base.update(config or {})
    genotype = Population(inputs, outputs, base).create_genotype()
    genotype.create_primordial_seed(random.Random(seed))
    return genotype


def test_fixed_count_zero_leaves_genotype_unchanged():
    genotype = _seeded()
    before = genotype.clone()
    genotype.fixed_count_mutation(FixedCountMutation(0), random.Random(1))
    assert genotype == before


@pytest.mark.parametrize("count", [1, 2, 5])
def test_fixed_count_changes_at_most_count_elements(count):
    rng = random.Random(2)
    genotype = _seeded()
    for _ in range(100):
        before = genotype.clone()
        genotype.fixed_count_mutation(FixedCountMutation(count), rng)
        assert genotype.validate()
        assert genotype.diff(before) <= count


def test_fixed_count_eventually_touches_every_kind():
    rng = random.Random(5)
    genotype = _seeded()
    start = genotype.clone()
    for _ in range(200):
        genotype.fixed_count_mutation(FixedCountMutation(1), rng)
    assert any(a.function != b.function for a, b in zip(genotype.function_genes, start.function_genes))
    assert any(a.connections != b.connections for a, b in zip(genotype.function_genes, start.function_genes))
    assert any(a != b for a, b in zip(genotype.output_genes, start.output_genes))
    assert any(a != b for a, b in zip(genotype.constants, start.constants))


def test_probabilistic_zero_chances_leave_genotype_unchanged():
    genotype = _seeded()
    before = genotype.clone()
    genotype.probabilistic_mutation(ZERO, random.Random(1))
    assert genotype == before


def test_probabilistic_full_chances_redraw_every_element_legally():
    genotype = _seeded()
    before = genotype.clone()
    genotype.probabilistic_mutation(ONE, random.Random(1))
    assert genotype.validate()
    # Gaussian perturbation of an interior constant never lands on the old value
    assert all(a != b for a, b in zip(genotype.constants, before.constants))
    assert genotype.diff(before) > len(genotype.constants)


def test_probabilistic_expected_count_matches_chance():
    genotype = _seeded({'nodes_per_layer': 10, 'layers': 10, 'constant_min': -100.0, 'constant_max': 100.0})
    config = ProbabilisticMutation(0.0, 0.0, 0.0, 0.5)
    rng = random.Random(9)
    counts = []
    for _ in range(50):
        before = genotype.clone()
        genotype.probabilistic_mutation(config, rng)
        counts.append(genotype.diff(before))
    mean = sum(counts) / len(counts)
    assert 45 < mean < 55


def test_probabilistic_is_reproducible():
    a = _seeded()
    b = a.clone()
    config = ProbabilisticMutation(0.3, 0.3, 0.3, 0.3)
    a.probabilistic_mutation(config, random.Random(42))
    b.probabilistic_mutation(config, random.Random(42))
    assert a == b


def test_constant_mutation_stays_in_range():
    genotype = _seeded({'constant_min': 0.0, 'constant_max': 0.1, 'constant_mutation_stdev': 5.0})
    rng = random.Random(3)
    for _ in range(20):
        genotype.probabilistic_mutation(ProbabilisticMutation(0.0, 0.0, 0.0, 1.0), rng)
        assert all(0.0 <= c <= 0.1 for c in genotype.constants)


def test_variant_from_config_and_dispatch():
    variant = MutationVariant.from_config({
        'mutation_strategy': 'probabilistic',
        'probabilistic': {'connection_mutation_chance': 0.0, 'function_mutation_chance': 0.0,
                          'output_mutation_chance': 0.0, 'constant_mutation_chance': 0.0},
    })
    assert variant.strategy is MutationStrategy.PROBABILISTIC
    genotype = _seeded()
    before = genotype.clone()
    apply_mutation(genotype, variant, random.Random(0))
    assert genotype == before

    variant = MutationVariant.from_config({'mutation_strategy': 'fixed_count', 'fixed_count': {'mutation_count': 3}})
    assert variant.fixed_count.mutation_count == 3
    apply_mutation(genotype, variant, random.Random(0))
    assert 0 <= genotype.diff(before) <= 3


@pytest.mark.parametrize("config", [
    {'mutation_strategy': 'sometimes'},
    {'fixed_count': {'mutation_count': -1}},
    {'probabilistic': {'output_mutation_chance': 1.5}},
    {'probabilistic': {'unknown_chance': 0.1}},
])
def test_variant_configuration_errors(config):
    with pytest.raises(ConfigurationError):
        MutationVariant.from_config(config)


def test_mutate_operator_returns_new_valid_child():
    parent = _seeded()
    snapshot = parent.clone()
    child = mutate(parent, RNGManager(seed=1))
    assert parent == snapshot
    assert child.genotype_id != parent.genotype_id
    assert child.validate()
    assert child.diff(parent) <= parent.population.mutation_variant.fixed_count.mutation_count


def test_mutate_operator_is_deterministic_per_seed():
    parent = _seeded()
    variant = MutationVariant(strategy=MutationStrategy.PROBABILISTIC, probabilistic=ProbabilisticMutation(0.2, 0.2, 0.2, 0.2))
    a = mutate(parent, RNGManager(seed=5), variant)
    b = mutate(parent, RNGManager(seed=5), variant)
    assert a == b
    assert a.genotype_id == b.genotype_id


def test_repeated_mutate_calls_give_distinct_reproducible_children():
    parent = _seeded()
    rng = RNGManager(seed=1)
    children = [mutate(parent, rng) for _ in range(5)]
    assert len({c.genotype_id for c in children}) == 5
    assert len({c.to_json() for c in children}) > 1

    replay = RNGManager(seed=1)
    again = [mutate(parent, replay) for _ in range(5)]
    assert [c.genotype_id for c in again] == [c.genotype_id for c in children]
    assert again == children


def test_fixed_count_on_unseeded_genotype_is_an_invariant_violation():
    genotype = Population(2, 2, {'nodes_per_layer': 2, 'layers': 2, 'levels_back': 1}).create_genotype()
    with pytest.raises(InvariantViolation):
        genotype.fixed_count_mutation(FixedCountMutation(2), random.Random(0))
    genotype.fixed_count_mutation(FixedCountMutation(0), random.Random(0))


@pytest.mark.parametrize("config", [
    {'fixed_count': {'mutation_count': True}},
    {'fixed_count': {'mutation_count': 1.5}},
    {'probabilistic': {'connection_mutation_chance': 'often'}},
    {'probabilistic': {'function_mutation_chance': None}},
    {'probabilistic': {'output_mutation_chance': False}},
])
def test_variant_rejects_wrongly_typed_settings(config):
    with pytest.raises(ConfigurationError):
        MutationVariant.from_config(config)
