"""
Lennard-Jones force field.

Non-bonded 12-6 interactions between every pair of atoms, parameterized
per element from van der Waals radii.
"""
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from molopt.core import elements
from molopt.errors import ForceFieldSetupError
from molopt.registry import register_force_field

from .forcefield import ForceField

if TYPE_CHECKING:
    from molopt.core import Molecule

# r_min = 2^(1/6) * sigma
_RMIN_TO_SIGMA = 2.0 ** (-1.0 / 6.0)


@register_force_field("lj", "lennard_jones")
class LennardJonesForceField(ForceField):
    """
    Lennard-Jones 12-6 force field.

    U(r) = 4ε_ij[(σ_ij/r)¹² - (σ_ij/r)⁶]

    Per-element σ is chosen so that the pair minimum of two like atoms sits
    at twice the van der Waals radius. Unlike pairs use Lorentz-Berthelot
    mixing: σ_ij = (σ_i + σ_j) / 2, ε_ij = sqrt(ε_i ε_j).

    Attributes:
        epsilon: Default well depth for every element.
        cutoff: Pairs farther apart than this do not interact.
        parameters: Per-symbol (epsilon, sigma) overrides.

    Example:
        >>> from molopt.registry import force_fields
        >>> lj = force_fields.create("lj")
        >>> lj.bind(molecule)
        True
        >>> lj.energy(molecule.coordinates())
    """

    def __init__(
        self,
        epsilon: float = 1.0,
        cutoff: float = 10.0,
        parameters: Optional[Dict[str, Tuple[float, float]]] = None,
        backend: str = "numerical",
    ) -> None:
        super().__init__(backend=backend)

        if epsilon <= 0:
            raise ValueError(f"Epsilon must be positive, got {epsilon}")
        if cutoff <= 0:
            raise ValueError(f"Cutoff must be positive, got {cutoff}")
        for symbol, (eps, sigma) in (parameters or {}).items():
            if eps <= 0 or sigma <= 0:
                raise ValueError(
                    f"Parameters for '{symbol}' must be positive, got ({eps}, {sigma})"
                )

        self.epsilon = epsilon
        self.cutoff = cutoff
        self.parameters = dict(parameters or {})

        self._pair_i = np.zeros(0, dtype=np.intp)
        self._pair_j = np.zeros(0, dtype=np.intp)
        self._pair_epsilon = np.zeros(0)
        self._pair_sigma = np.zeros(0)

    def _atom_parameters(self, symbol: str, index: int) -> Tuple[float, float]:
        if symbol in self.parameters:
            return self.parameters[symbol]

        element = elements.get_element(symbol)
        if element is None or element.vdw_radius is None:
            raise ForceFieldSetupError(
                f"No Lennard-Jones parameters for atom {index} ({symbol})"
            )
        return self.epsilon, 2.0 * element.vdw_radius * _RMIN_TO_SIGMA

    def _assign_parameters(self, molecule: "Molecule") -> None:
        params = [
            self._atom_parameters(atom.symbol, index)
            for index, atom in enumerate(molecule.atoms)
        ]
        epsilon = np.array([p[0] for p in params], dtype=np.float64)
        sigma = np.array([p[1] for p in params], dtype=np.float64)

        i, j = np.triu_indices(molecule.size, k=1)
        self._pair_i = i
        self._pair_j = j
        self._pair_epsilon = np.sqrt(epsilon[i] * epsilon[j])
        self._pair_sigma = 0.5 * (sigma[i] + sigma[j])

    def _pair_terms(
        self, positions: NDArray[np.floating]
    ) -> Tuple[NDArray, NDArray, NDArray, NDArray, NDArray]:
        """Return (dr, r, sr6, epsilon, mask) for all pairs."""
        dr = positions[self._pair_i] - positions[self._pair_j]
        with np.errstate(invalid="ignore"):
            r = np.sqrt(np.sum(dr**2, axis=1))
        # NaN distances stay in so non-finite positions give a non-finite energy
        mask = ~(r >= self.cutoff)
        with np.errstate(divide="ignore", invalid="ignore"):
            sr6 = (self._pair_sigma / r) ** 6
        return dr, r, sr6, self._pair_epsilon, mask

    def compute_energy(self, positions: NDArray[np.floating]) -> float:
        """
        Total LJ energy.

        Coincident atoms give a non-finite energy.
        """
        _, _, sr6, epsilon, mask = self._pair_terms(positions)
        with np.errstate(invalid="ignore", over="ignore"):
            energy = 4.0 * epsilon[mask] * (sr6[mask] ** 2 - sr6[mask])
        return float(np.sum(energy))

    def compute_gradient(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Analytic gradient.

        dU/dr = 4ε(-12σ¹²/r¹³ + 6σ⁶/r⁷), projected on (r_i - r_j) / r.
        """
        dr, r, sr6, epsilon, mask = self._pair_terms(positions)
        gradient = np.zeros_like(positions, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            du_dr = 4.0 * epsilon * (-12.0 * sr6**2 + 6.0 * sr6) / r
            pair_gradient = (du_dr / r)[:, np.newaxis] * dr
        pair_gradient[~mask] = 0.0

        np.add.at(gradient, self._pair_i, pair_gradient)
        np.add.at(gradient, self._pair_j, -pair_gradient)
        return gradient

    def get_name(self) -> str:
        return f"LennardJones(epsilon={self.epsilon}, cutoff={self.cutoff})"
