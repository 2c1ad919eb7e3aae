"""
Abstract base class for force fields.

A force field is bound to one molecule (parameter assignment) and then
evaluates energy and gradient for coordinate sets aligned with that
molecule's atoms. Subclasses implement compute_energy() and
_assign_parameters(); the gradient comes from a gradient backend unless
compute_gradient() is overridden with an analytic form.
"""
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np
from numpy.typing import NDArray

from molopt.errors import ForceFieldSetupError
from molopt.force import GradientBackend
from molopt.registry import gradient_backends

if TYPE_CHECKING:
    from molopt.core import CoordinateSet, Molecule

logger = logging.getLogger(__name__)


class ForceField(ABC):
    """
    Abstract base for all force fields.

    Lifecycle:
        1. Create (usually through ``molopt.registry.force_fields``)
        2. bind(molecule) assigns parameters; returns False on failure
        3. energy() / gradient() / rms_gradient() for coordinate sets

    Attributes:
        backend: Gradient backend used when no analytic gradient exists.

    Example:
        >>> class Harmonic(ForceField):
        ...     def _assign_parameters(self, molecule):
        ...         pass
        ...     def compute_energy(self, positions):
        ...         return float(np.sum(positions ** 2))
        ...     def get_name(self):
        ...         return "harmonic"
    """

    def __init__(self, backend: str = "numerical") -> None:
        """
        Args:
            backend: Name of a registered gradient backend.

        Raises:
            ValueError: If the backend name is not registered.
        """
        gradient_backend = gradient_backends.create(backend)
        if gradient_backend is None:
            raise ValueError(
                f"Unknown gradient backend: {backend}. "
                f"Choose from: {', '.join(sorted(gradient_backends.names()))}"
            )
        self.backend: GradientBackend = gradient_backend
        self._molecule: Optional["Molecule"] = None
        self._atom_count = 0
        self._error_string = ""

    # ------------------------------------------------------------------ #
    #  Setup
    # ------------------------------------------------------------------ #

    def bind(self, molecule: "Molecule") -> bool:
        """
        Assign parameters for *molecule*.

        Returns:
            False if the molecule cannot be handled (see error_string).
        """
        self._molecule = None
        self._atom_count = 0
        self._error_string = ""

        try:
            self._assign_parameters(molecule)
        except ForceFieldSetupError as e:
            self._error_string = str(e)
            logger.debug("%s rejected molecule: %s", self.get_name(), e)
            return False

        self._molecule = molecule
        self._atom_count = molecule.size
        return True

    @abstractmethod
    def _assign_parameters(self, molecule: "Molecule") -> None:
        """
        Assign per-atom / per-interaction parameters.

        Raises:
            ForceFieldSetupError: If parameters are missing for some atom.
        """
        pass

    @property
    def molecule(self) -> Optional["Molecule"]:
        return self._molecule

    @property
    def atom_count(self) -> int:
        """Number of atoms in the bound molecule (0 before bind)."""
        return self._atom_count

    @property
    def error_string(self) -> str:
        return self._error_string

    # ------------------------------------------------------------------ #
    #  Evaluation
    # ------------------------------------------------------------------ #

    @abstractmethod
    def compute_energy(self, positions: NDArray[np.floating]) -> float:
        """Total energy for (N, 3) positions."""
        pass

    def compute_gradient(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """dE/dr for (N, 3) positions. Override for an analytic gradient."""
        return self.backend.compute_gradient(self.compute_energy, positions)

    def energy(self, coordinates: "CoordinateSet") -> float:
        return float(self.compute_energy(coordinates.positions))

    def gradient(self, coordinates: "CoordinateSet") -> NDArray[np.floating]:
        """Return the (N, 3) gradient, one vector per atom."""
        return np.asarray(self.compute_gradient(coordinates.positions), dtype=np.float64)

    def rms_gradient(self, coordinates: "CoordinateSet") -> float:
        """Root-mean-square magnitude of the per-atom gradient vectors."""
        gradient = self.gradient(coordinates)
        if len(gradient) == 0:
            return 0.0
        return float(np.sqrt(np.mean(np.sum(gradient**2, axis=1))))

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this force field."""
        pass
