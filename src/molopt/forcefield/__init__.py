"""
Force fields for geometry optimization.

Importing this package registers the built-in force fields in
``molopt.registry.force_fields``:

- "lj" / "lennard_jones": LennardJonesForceField (non-bonded)
- "morse": MorseForceField (bond stretching)

Third-party force fields register themselves the same way with
``molopt.registry.register_force_field``.
"""

from .forcefield import ForceField
from .lennard_jones import LennardJonesForceField
from .morse import MorseForceField

DEFAULT_FORCE_FIELD = "lj"

__all__ = [
    "DEFAULT_FORCE_FIELD",
    "ForceField",
    "LennardJonesForceField",
    "MorseForceField",
]
