import random

import pytest

from cgpevo.evolution.operators import inherit
from cgpevo.evolution.population import Population
from cgpevo.utils.rng_manager import RNGManager
from cgpevo.utils.validation import ConfigurationError, InvariantViolation

CONFIG = {'nodes_per_layer': 4, 'layers': 5, 'levels_back': 2}


def _pair(population=None):
    population = population or Population(3, 2, CONFIG)
    a = population.create_genotype()
    b = population.create_genotype()
    a.create_primordial_seed(random.Random(1))
    b.create_primordial_seed(random.Random(2))
    return a, b


@pytest.mark.parametrize("preference", [0.0, 0.3, 0.5, 1.0])
def test_inherit_from_identical_parents_is_a_copy(preference):
    a, _ = _pair()
    child = a.population.create_genotype()
    child.inherit(a, a, preference, random.Random(0))
    assert child == a


def test_preference_extremes_copy_one_parent():
    a, b = _pair()
    child = a.population.create_genotype()
    child.inherit(a, b, 1.0, random.Random(0))
    assert child == a
    child.inherit(a, b, 0.0, random.Random(0))
    assert child == b


def test_uniform_blend_takes_each_element_from_a_parent():
    a, b = _pair()
    child = a.population.create_genotype()
    child.inherit(a, b, 0.5, random.Random(7))
    assert child.validate()
    from_a = 0
    for i, gene in enumerate(child.function_genes):
        assert gene in (a.function_genes[i], b.function_genes[i])
        from_a += gene == a.function_genes[i]
    for i, out in enumerate(child.output_genes):
        assert out in (a.output_genes[i], b.output_genes[i])
    for i, c in enumerate(child.constants):
        assert c in (a.constants[i], b.constants[i])
    assert 0 < from_a < len(child.function_genes)


def test_offspring_genes_are_not_shared_with_parents():
    a, b = _pair()
    child = a.population.create_genotype()
    child.inherit(a, b, 1.0, random.Random(0))
    child.function_genes[0].connections[0] = 0
    child.output_genes[0].connection = 0
    child.function_genes[0].function = -1
    assert a.function_genes[0].function != -1


def test_inherit_into_a_parent_is_safe():
    a, b = _pair()
    expected = a.population.create_genotype()
    expected.inherit(a, b, 0.5, random.Random(3))
    a.inherit(a, b, 0.5, random.Random(3))
    assert a == expected


def test_preference_out_of_range():
    a, b = _pair()
    with pytest.raises(ValueError):
        a.population.create_genotype().inherit(a, b, 1.5, random.Random(0))


def test_parents_from_different_layouts_rejected():
    a, _ = _pair()
    _, other = _pair(Population(3, 2, dict(CONFIG, layers=6)))
    with pytest.raises(ConfigurationError):
        a.population.create_genotype().inherit(a, other, 0.5, random.Random(0))


def test_unseeded_parent_rejected():
    a, _ = _pair()
    empty = a.population.create_genotype()
    with pytest.raises(InvariantViolation):
        a.population.create_genotype().inherit(a, empty, 0.5, random.Random(0))


def test_inherit_operator_is_deterministic_and_uses_population_preference():
    population = Population(3, 2, dict(CONFIG, crossover_preference=1.0))
    a, b = _pair(population)
    child = inherit(a, b, RNGManager(seed=3))
    assert child == a
    assert child.genotype_id not in (a.genotype_id, b.genotype_id)

    c1 = inherit(a, b, RNGManager(seed=3), preference=0.5)
    c2 = inherit(a, b, RNGManager(seed=3), preference=0.5)
    assert c1 == c2
    assert c1.validate()


def test_parents_using_functions_outside_offspring_catalog_rejected():
    a, b = _pair()
    restricted = Population(3, 2, dict(CONFIG, functions=['add']))
    with pytest.raises(ConfigurationError) as info:
        restricted.create_genotype().inherit(a, b, 0.5, random.Random(0))
    assert info.value.error_type == 'catalog_mismatch'


def test_parents_from_narrower_catalog_accepted():
    a, b = _pair(Population(3, 2, dict(CONFIG, functions=['add', 'multiply'])))
    child = Population(3, 2, CONFIG).create_genotype()
    child.inherit(a, b, 0.5, random.Random(0))
    assert child.validate()


def test_repeated_inherit_calls_give_distinct_reproducible_children():
    a, b = _pair()
    rng = RNGManager(seed=4)
    children = [inherit(a, b, rng) for _ in range(5)]
    assert len({c.genotype_id for c in children}) == 5
    assert len({c.to_json() for c in children}) > 1

    replay = RNGManager(seed=4)
    again = [inherit(a, b, replay) for _ in range(5)]
    assert [c.genotype_id for c in again] == [c.genotype_id for c in children]
    assert again == children
