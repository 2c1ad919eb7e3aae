"""
Molecule container: ordered atoms and an optional bond list.
"""
from typing import Iterable, List, Optional, Tuple

from numpy.typing import ArrayLike

from .atom import Atom
from .coordinates import CoordinateSet


class Molecule:
    """
    Ordered collection of atoms with mutable positions.

    Bonds are only used by bonded force fields; the geometry optimizer
    itself reads the atom count and writes positions.

    Attributes:
        name: Optional molecule name.

    Example:
        >>> from molopt.core import Molecule
        >>> h2 = Molecule(name="hydrogen")
        >>> h2.add_atom("H", [0.0, 0.0, 0.0])
        >>> h2.add_atom("H", [0.9, 0.0, 0.0])
        >>> h2.add_bond(0, 1)
        >>> h2.size
        2
    """

    def __init__(self, atoms: Optional[Iterable[Atom]] = None, name: str = "") -> None:
        self.name = name
        self._atoms: List[Atom] = []
        self._bonds: List[Tuple[int, int]] = []
        for atom in atoms or []:
            self._append(atom)

    def add_atom(self, symbol: str, position: ArrayLike = (0.0, 0.0, 0.0)) -> Atom:
        """Create a new atom and append it to the molecule."""
        return self._append(Atom(symbol, position))

    def _append(self, atom: Atom) -> Atom:
        atom.index = len(self._atoms)
        self._atoms.append(atom)
        return atom

    def add_bond(self, i: int, j: int) -> None:
        """
        Add a bond between atoms *i* and *j*.

        Raises:
            IndexError: If either index is out of range.
            ValueError: If i == j.
        """
        n_atoms = len(self._atoms)
        if not (0 <= i < n_atoms and 0 <= j < n_atoms):
            raise IndexError(f"Bond ({i}, {j}) out of range for {n_atoms} atoms")
        if i == j:
            raise ValueError(f"Cannot bond atom {i} to itself")
        bond = (min(i, j), max(i, j))
        if bond not in self._bonds:
            self._bonds.append(bond)

    def atom(self, index: int) -> Atom:
        return self._atoms[index]

    @property
    def atoms(self) -> List[Atom]:
        return list(self._atoms)

    @property
    def bonds(self) -> List[Tuple[int, int]]:
        return list(self._bonds)

    @property
    def size(self) -> int:
        return len(self._atoms)

    @property
    def is_empty(self) -> bool:
        return not self._atoms

    def coordinates(self) -> CoordinateSet:
        """Return a copy of the current atom positions."""
        return CoordinateSet.from_molecule(self)

    def set_coordinates(self, coordinates: CoordinateSet) -> None:
        """
        Write *coordinates* onto the atoms, index for index.

        Raises:
            ValueError: If the coordinate set size differs from the atom count.
        """
        if coordinates.size != self.size:
            raise ValueError(
                f"Coordinate set has {coordinates.size} positions, "
                f"molecule has {self.size} atoms"
            )
        for index, atom in enumerate(self._atoms):
            atom.set_position(coordinates.position(index))

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Molecule(name={self.name!r}, atoms={self.size}, bonds={len(self._bonds)})"
