"""
Atom class for molecules handled by the geometry optimizer.
"""
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .element_registry import ElementData, elements


@dataclass(eq=False)
class Atom:
    """
    A single atom with a mutable 3D position.

    Attributes:
        symbol: Element symbol or pseudoatom label (e.g. 'C', 'Ar', 'X').
        position: (3,) position vector.
        index: Index of the atom in its molecule (default: -1).

    Example:
        >>> from molopt.core import Atom
        >>> atom = Atom("C", [0.0, 0.0, 0.0])
        >>> atom.set_position([1.0, 0.0, 0.0])
    """
    symbol: str
    position: NDArray[np.floating] = field(default_factory=lambda: np.zeros(3))
    index: int = -1

    def __post_init__(self) -> None:
        """Validate atom properties after initialization."""
        if not self.symbol:
            raise ValueError("Atom symbol cannot be empty")
        self.position = _as_vector(self.position)

    def set_position(self, position: ArrayLike) -> None:
        """Set the position of the atom."""
        self.position = _as_vector(position)

    @property
    def element(self) -> Optional[ElementData]:
        """Element data for this atom, or None for unknown symbols."""
        return elements.get_element(self.symbol)


def _as_vector(position: ArrayLike) -> NDArray[np.floating]:
    vector = np.array(position, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Position must be a (3,) vector, got shape {vector.shape}")
    return vector
