"""Growth of genotypes into executable brains."""

from .brain import Brain, NodeStep  # noqa: F401
from .growth import active_nodes, grow_brain  # noqa: F401

__all__ = [
    'Brain',
    'NodeStep',
    'active_nodes',
    'grow_brain',
]
