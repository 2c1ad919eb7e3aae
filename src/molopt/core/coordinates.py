"""
Coordinate set the geometry optimizer iterates on.
"""
from typing import TYPE_CHECKING, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

if TYPE_CHECKING:
    from .molecule import Molecule


class CoordinateSet:
    """
    Ordered (N, 3) array of positions, index-aligned with a molecule's atoms.

    The set owns its array: constructing from an existing array copies it,
    and copy() returns an independent set.

    Example:
        >>> from molopt.core import CoordinateSet
        >>> coords = CoordinateSet([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        >>> coords.position(1)
        array([1., 0., 0.])
    """

    def __init__(self, positions: ArrayLike) -> None:
        array = np.array(positions, dtype=np.float64)
        if array.size == 0:
            array = array.reshape(0, 3)
        if array.ndim != 2 or array.shape[1] != 3:
            raise ValueError(f"Positions must be (N, 3) array, got shape {array.shape}")
        self._positions = array

    @classmethod
    def zeros(cls, size: int) -> "CoordinateSet":
        """Create a set of *size* positions at the origin."""
        return cls(np.zeros((size, 3)))

    @classmethod
    def from_molecule(cls, molecule: "Molecule") -> "CoordinateSet":
        """Copy the current atom positions of *molecule*."""
        return cls([atom.position for atom in molecule.atoms])

    @property
    def positions(self) -> NDArray[np.floating]:
        """The (N, 3) position array (not a copy)."""
        return self._positions

    @property
    def size(self) -> int:
        return self._positions.shape[0]

    def position(self, index: int) -> NDArray[np.floating]:
        """Return a copy of the position at *index*."""
        return self._positions[index].copy()

    def set_position(self, index: int, position: ArrayLike) -> None:
        self._positions[index] = np.asarray(position, dtype=np.float64)

    def assign(self, other: "CoordinateSet") -> None:
        """
        Overwrite this set in place with the positions of *other*.

        Raises:
            ValueError: If the sizes differ.
        """
        if other.size != self.size:
            raise ValueError(
                f"Cannot assign {other.size} positions to a set of {self.size}"
            )
        self._positions[:] = other.positions

    def copy(self) -> "CoordinateSet":
        return CoordinateSet(self._positions)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[NDArray[np.floating]]:
        for index in range(self.size):
            yield self.position(index)

    def __repr__(self) -> str:
        return f"CoordinateSet(size={self.size})"
