import json
import random

import pytest

from cgpevo.core.functions import FunctionId
from cgpevo.evolution.genotype import SCHEMA_VERSION, Genotype
from cgpevo.evolution.population import Population
from cgpevo.utils.validation import GenotypeFormatError

CONFIG = {'nodes_per_layer': 3, 'layers': 3, 'levels_back': 1}


def _seeded(seed=0):
    population = Population(2, 2, CONFIG)
    genotype = population.create_genotype()
    genotype.create_primordial_seed(random.Random(seed))
    return genotype


def test_save_load_round_trip():
    for seed in range(5):
        genotype = _seeded(seed)
        copy = genotype.population.create_genotype()
        copy.load(genotype.save())
        assert copy == genotype


def test_round_trip_keeps_unused_padding_slots():
    genotype = _seeded()
    # Arity-1 function with distinct padding in the unused second slot
    gene = genotype.function_genes[4]
    gene.function = FunctionId.IDENTITY
    gene.connections = [0, 3]
    assert genotype.validate()

    record = json.loads(genotype.to_json())
    assert record['function_genes'][4] == {'function': int(FunctionId.IDENTITY), 'connections': [0, 3]}
    restored = Genotype.from_json(genotype.population, genotype.to_json())
    assert restored.function_genes[4].connections == [0, 3]
    assert restored == genotype


def test_record_layout_order():
    record = _seeded().save()
    assert list(record) == ['schema_version', 'function_genes', 'output_genes', 'constants']
    assert record['schema_version'] == SCHEMA_VERSION


def _corrupt(mutator):
    genotype = _seeded()
    record = json.loads(genotype.to_json())
    mutator(record)
    target = genotype.population.create_genotype()
    with pytest.raises(GenotypeFormatError) as info:
        target.load(record)
    return info.value


def test_load_errors_name_the_offending_field():
    err = _corrupt(lambda r: r.update(schema_version=99))
    assert err.field == 'schema_version'

    err = _corrupt(lambda r: r['function_genes'].pop())
    assert err.field == 'function_genes'
    assert err.error_type == 'length_mismatch'

    def forward_reference(r):
        # Layer 0 gene may only reference primary inputs
        r['function_genes'][1]['connections'][1] = 2
    err = _corrupt(forward_reference)
    assert err.field == 'function_genes[1].connections[1]'
    assert err.error_type == 'illegal_connection'

    err = _corrupt(lambda r: r['function_genes'][0].update(function=999))
    assert err.field == 'function_genes[0].function'

    err = _corrupt(lambda r: r['function_genes'][0].update(function=True))
    assert err.error_type == 'not_an_integer'

    err = _corrupt(lambda r: r['output_genes'][1].pop('connection'))
    assert err.field == 'output_genes[1].connection'

    err = _corrupt(lambda r: r['constants'].__setitem__(2, 'x'))
    assert err.field == 'constants[2]'

    err = _corrupt(lambda r: r.pop('constants'))
    assert err.error_type == 'missing_field'


def test_failed_load_leaves_genotype_untouched():
    genotype = _seeded()
    before = genotype.clone()
    record = genotype.save()
    record['constants'] = []
    with pytest.raises(GenotypeFormatError):
        genotype.load(record)
    assert genotype == before


def test_from_json_rejects_invalid_text():
    with pytest.raises(GenotypeFormatError) as info:
        Genotype.from_json(Population(2, 2, CONFIG), '{not json')
    assert info.value.field == '<root>'
