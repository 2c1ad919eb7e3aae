"""
Geometry optimization.

- GeometryOptimizer: Line-search energy minimization of one molecule
- OptimizationHandle: Result of GeometryOptimizer.optimize_coordinates_async()
"""

from .background import OptimizationHandle, shutdown_executor
from .geometry_optimizer import GeometryOptimizer, OptimizerState

__all__ = [
    "GeometryOptimizer",
    "OptimizerState",
    "OptimizationHandle",
    "shutdown_executor",
]
