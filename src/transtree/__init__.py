"""transtree: transmission tree primitives for outbreak reconstruction samplers."""

from __future__ import annotations

__version__ = "0.1.0"

# Tree state
from .tree import IMPORTED, TreeState

# Core operations
from .ancestors import find_possible_ancestors, propose_ancestor, sample_one
from .locality import find_descendants, find_local_cases
from .moves import swap_with_ancestor
from .genetics import GeneticData, genetic_distance

# Configuration and errors
from .config import CoreConfig, load_config, dump_config
from .exceptions import (
    TransTreeError,
    InvalidArgumentError,
    PreconditionViolationError,
    ValidationError,
    ConfigurationError,
)
from .rng import RandomState, choose_rng

__all__ = [
    "__version__",
    # Tree state
    "IMPORTED",
    "TreeState",
    # Core operations
    "find_possible_ancestors",
    "sample_one",
    "propose_ancestor",
    "find_descendants",
    "find_local_cases",
    "swap_with_ancestor",
    "GeneticData",
    "genetic_distance",
    # Configuration
    "CoreConfig",
    "load_config",
    "dump_config",
    "RandomState",
    "choose_rng",
    # Errors
    "TransTreeError",
    "InvalidArgumentError",
    "PreconditionViolationError",
    "ValidationError",
    "ConfigurationError",
]
