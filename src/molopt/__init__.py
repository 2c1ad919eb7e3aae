"""
molopt - Geometry optimization of molecules with pluggable force fields.

Force fields are looked up by name in a capability registry, so new
energy models can be added without touching the optimizer:

    >>> from molopt import GeometryOptimizer, Molecule
    >>> molecule = Molecule()
    >>> molecule.add_atom("Ar", [0.0, 0.0, 0.0])
    >>> molecule.add_atom("Ar", [3.0, 0.0, 0.0])
    >>> GeometryOptimizer.optimize_coordinates(molecule, "lj")
    True
"""

__version__ = "0.1.0"

from .config import OptimizerSettings, load_settings
from .core import Atom, CoordinateSet, Molecule
from .errors import (
    ForceFieldSetupError,
    NoMoleculeError,
    NotConfiguredError,
    OptimizerError,
    SetupError,
    UnsupportedForceFieldError,
)
from .forcefield import DEFAULT_FORCE_FIELD, ForceField
from .optimizer import GeometryOptimizer, OptimizationHandle, OptimizerState
from .registry import Registry, force_fields, register_force_field

__all__ = [
    "Atom",
    "CoordinateSet",
    "DEFAULT_FORCE_FIELD",
    "ForceField",
    "ForceFieldSetupError",
    "GeometryOptimizer",
    "Molecule",
    "NoMoleculeError",
    "NotConfiguredError",
    "OptimizationHandle",
    "OptimizerError",
    "OptimizerSettings",
    "OptimizerState",
    "Registry",
    "SetupError",
    "UnsupportedForceFieldError",
    "force_fields",
    "load_settings",
    "register_force_field",
]
