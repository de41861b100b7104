"""Core package for the TreeSeed job -> resource assignment optimizer.

Exports base data structures, the optimizer and its error types.
"""

from treeseed.config import OptimizerParams  # noqa: F401
from treeseed.errors import InvalidConfiguration, NotYetOptimized, OracleUnavailable  # noqa: F401
from treeseed.fitness import FitnessWeights, evaluate, least_loaded_resource  # noqa: F401
from treeseed.models import Assignment, Job, ProblemInstance, Resource  # noqa: F401
from treeseed.optimizer import TreeSeedOptimizer  # noqa: F401

__all__ = [
    "Assignment",
    "FitnessWeights",
    "InvalidConfiguration",
    "Job",
    "NotYetOptimized",
    "OptimizerParams",
    "OracleUnavailable",
    "ProblemInstance",
    "Resource",
    "TreeSeedOptimizer",
    "evaluate",
    "least_loaded_resource",
]
