"""
Exception hierarchy for geometry optimization.

GeometryOptimizer.setup() and optimize() catch these and report them as a
False result plus GeometryOptimizer.error_string; step() raises
NotConfiguredError directly.
"""


class OptimizerError(Exception):
    """Base class for geometry optimizer failures."""


class NoMoleculeError(OptimizerError):
    """No molecule (or an empty molecule) was bound when setting up."""


class UnsupportedForceFieldError(OptimizerError):
    """The requested force field name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Force field '{name}' is not supported.")
        self.name = name


class ForceFieldSetupError(OptimizerError):
    """The force field rejected the molecule (e.g. missing parameters)."""


SetupError = ForceFieldSetupError


class NotConfiguredError(OptimizerError):
    """An operation that needs a configured force field was called before setup()."""
