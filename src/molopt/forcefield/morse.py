"""
Morse bond-stretching force field.
"""
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from molopt.core import elements
from molopt.errors import ForceFieldSetupError
from molopt.registry import register_force_field

from .forcefield import ForceField

if TYPE_CHECKING:
    from molopt.core import Molecule


@register_force_field("morse")
class MorseForceField(ForceField):
    """
    Morse potential over the bonds of a molecule.

    U(r) = D * [1 - exp(-a*(r - r₀))]²

    where r₀ for a bond is the sum of the covalent radii of its two atoms.
    Non-bonded pairs do not interact, so this is only suitable for refining
    bond lengths.

    Attributes:
        well_depth: D, the dissociation energy.
        width: a, controls the steepness of the well.

    Example:
        >>> from molopt.registry import force_fields
        >>> morse = force_fields.create("morse", well_depth=2.0)
    """

    def __init__(
        self,
        well_depth: float = 1.0,
        width: float = 2.0,
        backend: str = "numerical",
    ) -> None:
        super().__init__(backend=backend)

        if well_depth <= 0:
            raise ValueError(f"well_depth must be positive, got {well_depth}")
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")

        self.well_depth = well_depth
        self.width = width

        self._bond_i = np.zeros(0, dtype=np.intp)
        self._bond_j = np.zeros(0, dtype=np.intp)
        self._r0 = np.zeros(0)

    def _assign_parameters(self, molecule: "Molecule") -> None:
        bonds = molecule.bonds
        r0 = []
        for i, j in bonds:
            radii = []
            for index in (i, j):
                symbol = molecule.atom(index).symbol
                element = elements.get_element(symbol)
                if element is None or element.covalent_radius is None:
                    raise ForceFieldSetupError(
                        f"No covalent radius for atom {index} ({symbol})"
                    )
                radii.append(element.covalent_radius)
            r0.append(sum(radii))

        self._bond_i = np.array([b[0] for b in bonds], dtype=np.intp)
        self._bond_j = np.array([b[1] for b in bonds], dtype=np.intp)
        self._r0 = np.array(r0, dtype=np.float64)

    @property
    def equilibrium_lengths(self) -> NDArray[np.floating]:
        """r₀ for each bond, in bond order."""
        return self._r0.copy()

    def compute_energy(self, positions: NDArray[np.floating]) -> float:
        dr = positions[self._bond_i] - positions[self._bond_j]
        r = np.sqrt(np.sum(dr**2, axis=1))
        exp_term = np.exp(-self.width * (r - self._r0))
        return float(np.sum(self.well_depth * (1.0 - exp_term) ** 2))

    def compute_gradient(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Analytic gradient.

        dU/dr = 2Da * exp(-a(r - r₀)) * [1 - exp(-a(r - r₀))]
        """
        dr = positions[self._bond_i] - positions[self._bond_j]
        r = np.sqrt(np.sum(dr**2, axis=1))
        exp_term = np.exp(-self.width * (r - self._r0))
        du_dr = 2.0 * self.well_depth * self.width * exp_term * (1.0 - exp_term)

        gradient = np.zeros_like(positions, dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            bond_gradient = (du_dr / r)[:, np.newaxis] * dr

        np.add.at(gradient, self._bond_i, bond_gradient)
        np.add.at(gradient, self._bond_j, -bond_gradient)
        return gradient

    def get_name(self) -> str:
        return f"Morse(D={self.well_depth}, a={self.width})"
