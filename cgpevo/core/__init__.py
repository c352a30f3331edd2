"""Core data model: function catalog, genes and layout arithmetic."""

from .functions import (  # noqa: F401
    MAX_FUNCTION_ARITY,
    FunctionCatalog,
    FunctionId,
    FunctionSpec,
    default_catalog,
)
from .genes import FunctionGene, OutputGene  # noqa: F401
from .layout import Layout, connection_range  # noqa: F401

__all__ = [
    'MAX_FUNCTION_ARITY',
    'FunctionCatalog',
    'FunctionId',
    'FunctionSpec',
    'default_catalog',
    'FunctionGene',
    'OutputGene',
    'Layout',
    'connection_range',
]
