"""Fingerprints and determinism checks for genotypes."""

from __future__ import annotations

import hashlib
import json
from collections import Counter
from typing import Any, Iterable

from cgpevo.generation.growth import active_nodes


def _canonical(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def genotype_fingerprint(genotype: Any) -> str:
    """SHA-256 over the persisted record; equal genotypes share a fingerprint."""
    return hashlib.sha256(_canonical(genotype.save()).encode()).hexdigest()


def genotype_report(genotype: Any) -> dict[str, Any]:
    layout = genotype.layout
    active = active_nodes(genotype)
    active_genes = [i for i in range(layout.function_gene_count) if active[layout.inputs + i]]
    catalog = genotype.population.catalog
    histogram = Counter(catalog.spec(genotype.function_genes[i].function).name for i in active_genes)
    return {
        'genotype_id': str(genotype.genotype_id),
        'fingerprint': genotype_fingerprint(genotype),
        'function_genes': layout.function_gene_count,
        'active_nodes': len(active_genes),
        'function_histogram': dict(sorted(histogram.items())),
        'fitness': genotype.fitness,
    }


def determinism_signature(report: dict[str, Any]) -> str:
    """Hash of a report without its volatile fields (ids, fitness)."""
    stable = {k: v for k, v in report.items() if k not in ('genotype_id', 'fitness')}
    return hashlib.sha256(_canonical(stable).encode()).hexdigest()


def assert_determinism_equivalence(reports: Iterable[dict[str, Any]]) -> None:
    signatures = {determinism_signature(r) for r in reports}
    if len(signatures) > 1:
        raise AssertionError(f"Determinism drift: {len(signatures)} distinct signatures")


__all__ = [
    'genotype_fingerprint',
    'genotype_report',
    'determinism_signature',
    'assert_determinism_equivalence',
]
