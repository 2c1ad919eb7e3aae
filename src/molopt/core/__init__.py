"""
Core data model for geometry optimization.

- Atom: A single atom with a mutable position
- Molecule: Ordered atoms plus bonds
- CoordinateSet: The (N, 3) positions an optimizer iterates on
- ElementRegistry: Element data used for force field parameters
"""

from .atom import Atom
from .coordinates import CoordinateSet
from .element_registry import ElementData, ElementRegistry, elements
from .molecule import Molecule

__all__ = [
    "Atom",
    "CoordinateSet",
    "ElementData",
    "ElementRegistry",
    "Molecule",
    "elements",
]
