"""
CGPEvo - Cartesian Genetic Programming Evolution System

Evolves layered function graphs (CGP genotypes) with mutation and inheritance,
and grows them into executable brains scored by external domains.
"""

__version__ = "0.1.0"

# Expose common submodules for convenience
from .core import *  # noqa: F401,F403
from .domains import *  # noqa: F401,F403
from .evolution import *  # noqa: F401,F403
from .generation import *  # noqa: F401,F403
from .translation import *  # noqa: F401,F403
from .utils import *  # noqa: F401,F403

# Configuration presets as top-level names
from .config import PRESET_MINIMAL, PRESET_RESEARCH, PRESET_STANDARD  # noqa: F401
