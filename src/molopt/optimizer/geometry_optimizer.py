"""
Geometry optimizer for a single molecule.

GeometryOptimizer sets up a named force field for a molecule and refines
its coordinates with a safeguarded steepest-descent line search:

- the step size doubles after every accepted move and shrinks tenfold
  after every rejected one
- a non-finite energy resets the move and displaces every atom in a
  random direction instead of aborting
- the geometry is converged when the RMS gradient drops below a threshold
"""
from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Optional

import numpy as np

from molopt.config import OptimizerSettings
from molopt.core import CoordinateSet
from molopt.errors import (
    ForceFieldSetupError,
    NoMoleculeError,
    NotConfiguredError,
    OptimizerError,
    UnsupportedForceFieldError,
)
from molopt.forcefield import DEFAULT_FORCE_FIELD
from molopt.registry import Registry, force_fields

if TYPE_CHECKING:
    from molopt.core import Molecule
    from molopt.forcefield import ForceField

    from .background import OptimizationHandle

logger = logging.getLogger(__name__)


class OptimizerState(enum.Enum):
    UNCONFIGURED = "unconfigured"
    READY = "ready"
    RUNNING = "running"
    CONVERGED = "converged"
    FAILED = "failed"


class GeometryOptimizer:
    """
    Energy minimization of one molecule with a named force field.

    The optimizer owns its force field instance and a private copy of the
    coordinates. The molecule is only written to by write_coordinates()
    (called at the end of optimize()). A single optimizer must not be
    driven from two threads at once.

    Attributes:
        settings: Line search parameters.

    Example:
        >>> from molopt.optimizer import GeometryOptimizer
        >>> optimizer = GeometryOptimizer(molecule)
        >>> optimizer.set_force_field("morse")
        True
        >>> if not optimizer.optimize():
        ...     print(optimizer.error_string)

        Or as a one-shot call:

        >>> GeometryOptimizer.optimize_coordinates(molecule)
        True
    """

    def __init__(
        self,
        molecule: Optional["Molecule"] = None,
        settings: Optional[OptimizerSettings] = None,
        rng: Optional[np.random.Generator] = None,
        registry: Optional[Registry] = None,
    ) -> None:
        """
        Args:
            molecule: Molecule to optimize.
            settings: Line search parameters (defaults if omitted).
            rng: Random generator for divergence recovery. Unseeded if omitted.
            registry: Force field registry (the process-wide one if omitted).
        """
        self.settings = settings or OptimizerSettings()
        self._molecule = molecule
        self._force_field_name = self.settings.force_field
        self._registry = registry if registry is not None else force_fields
        self._rng = rng if rng is not None else np.random.default_rng()

        self._force_field: Optional["ForceField"] = None
        self._coordinates: Optional[CoordinateSet] = None
        self._error_string = ""
        self._state = OptimizerState.UNCONFIGURED
        self._step_count = 0

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def molecule(self) -> Optional["Molecule"]:
        return self._molecule

    @molecule.setter
    def molecule(self, molecule: Optional["Molecule"]) -> None:
        self.set_molecule(molecule)

    def set_molecule(self, molecule: Optional["Molecule"]) -> None:
        """
        Bind a different molecule.

        Takes effect at the next setup(); the current force field and
        coordinates are released.
        """
        if molecule is not self._molecule:
            self._molecule = molecule
            self._release()

    @property
    def force_field(self) -> str:
        """Name of the force field used for optimization."""
        return self._force_field_name

    def set_force_field(self, name: str) -> bool:
        """
        Select the force field by registered name.

        The name is stored even if it is not registered, in which case the
        next setup() fails with UnsupportedForceFieldError.

        Returns:
            Whether *name* is currently registered.
        """
        if name != self._force_field_name:
            self._force_field_name = name
            self._release()
        return name in self._registry

    @property
    def error_string(self) -> str:
        """Description of the last error, or an empty string."""
        return self._error_string

    @property
    def state(self) -> OptimizerState:
        return self._state

    @property
    def step_count(self) -> int:
        """Number of step() calls since the last successful setup()."""
        return self._step_count

    @property
    def coordinates(self) -> Optional[CoordinateSet]:
        """Copy of the current private coordinates, or None before setup()."""
        if self._coordinates is None:
            return None
        return self._coordinates.copy()

    # ------------------------------------------------------------------ #
    #  Energy
    # ------------------------------------------------------------------ #

    def energy(self) -> float:
        """Force field energy at the current coordinates (0 if not set up)."""
        if self._force_field is None or self._coordinates is None:
            return 0.0
        return self._force_field.energy(self._coordinates)

    # ------------------------------------------------------------------ #
    #  Optimization
    # ------------------------------------------------------------------ #

    def setup(self) -> bool:
        """
        Create and bind the force field and copy the molecule's coordinates.

        Can be called again to start over from the molecule's current
        coordinates.

        Returns:
            False if an error occurred (see error_string).
        """
        self._release()
        try:
            self._force_field, self._coordinates = self._setup()
        except OptimizerError as e:
            self._fail(e)
            return False

        self._error_string = ""
        self._state = OptimizerState.READY
        logger.debug(
            "Set up %s for %d atoms (energy %.6g)",
            self._force_field.get_name(),
            self._coordinates.size,
            self.energy(),
        )
        return True

    def _setup(self) -> tuple["ForceField", CoordinateSet]:
        molecule = self._molecule
        if molecule is None:
            raise NoMoleculeError("No molecule specified")
        if molecule.is_empty:
            raise NoMoleculeError("Molecule has no atoms")

        name = self._force_field_name
        try:
            force_field = self._registry.create(name)
        except Exception as e:
            raise ForceFieldSetupError(
                f"Failed to create force field '{name}': {e}"
            ) from e
        if force_field is None:
            raise UnsupportedForceFieldError(name)

        try:
            bound = force_field.bind(molecule)
        except Exception as e:
            raise ForceFieldSetupError(f"Failed to setup force field: {e}") from e
        if not bound:
            raise ForceFieldSetupError(
                f"Failed to setup force field: {force_field.error_string}"
            )
        if force_field.atom_count != molecule.size:
            raise ForceFieldSetupError(
                f"Force field reports {force_field.atom_count} atoms, "
                f"molecule has {molecule.size}"
            )

        return force_field, CoordinateSet.from_molecule(molecule)

    def step(self) -> bool:
        """
        Perform one line search along the current gradient.

        The state is RUNNING only while the call is in progress; afterwards
        it is CONVERGED or back to READY.

        Returns:
            True if the RMS gradient is below settings.convergence_value.

        Raises:
            NotConfiguredError: If setup() has not succeeded.
        """
        if self._force_field is None or self._coordinates is None:
            error = NotConfiguredError("Optimizer is not set up; call setup() first")
            self._error_string = str(error)
            raise error

        self._state = OptimizerState.RUNNING
        self._step_count += 1

        settings = self.settings
        force_field = self._force_field
        coordinates = self._coordinates

        step = settings.initial_step
        initial_energy = force_field.energy(coordinates)
        gradient = force_field.gradient(coordinates)

        for _ in range(settings.line_search_steps):
            saved = coordinates.copy()

            coordinates.positions[:] -= gradient * step
            final_energy = force_field.energy(coordinates)

            if not np.isfinite(final_energy):
                # Diverged: restart from the saved positions displaced in
                # random directions
                coordinates.assign(saved)
                self._perturb(coordinates)
                gradient = force_field.gradient(coordinates)
                logger.warning(
                    "Non-finite energy in step %d, perturbing coordinates",
                    self._step_count,
                )
                continue

            if (
                final_energy < initial_energy
                and abs(final_energy - initial_energy) < settings.step_convergence
            ):
                break
            elif final_energy < initial_energy:
                step = min(step * settings.step_growth, settings.max_step)
                initial_energy = final_energy
            else:
                coordinates.assign(saved)
                step *= settings.step_shrink

        rms_gradient = force_field.rms_gradient(coordinates)
        converged = bool(rms_gradient < settings.convergence_value)
        logger.debug(
            "Step %d: energy=%.6g rmsg=%.4g",
            self._step_count,
            force_field.energy(coordinates),
            rms_gradient,
        )

        self._state = OptimizerState.CONVERGED if converged else OptimizerState.READY
        return converged

    def _perturb(self, coordinates: CoordinateSet) -> None:
        """Move every atom by settings.perturbation along a random unit vector."""
        directions = self._rng.normal(size=coordinates.positions.shape)
        norms = np.linalg.norm(directions, axis=1)
        # A zero-length draw is replaced by the x axis
        directions[norms == 0] = (1.0, 0.0, 0.0)
        norms[norms == 0] = 1.0
        coordinates.positions[:] += (
            self.settings.perturbation * directions / norms[:, np.newaxis]
        )

    def optimize(self) -> bool:
        """
        Set up and step until converged, then write the coordinates back.

        There is no iteration cap: a force field that never reaches the
        convergence threshold makes this loop forever. Callers needing a
        bound should call setup() and step() themselves.

        Returns:
            True on convergence, False if setup() failed.
        """
        if not self.setup():
            return False

        converged = False
        while not converged:
            converged = self.step()

        self.write_coordinates()
        logger.info(
            "Converged after %d steps (energy %.6g)", self._step_count, self.energy()
        )
        return converged

    def write_coordinates(self) -> None:
        """Copy the optimized coordinates onto the molecule's atoms."""
        if self._molecule is None or self._coordinates is None:
            return
        self._molecule.set_coordinates(self._coordinates)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _release(self) -> None:
        self._force_field = None
        self._coordinates = None
        self._step_count = 0
        self._state = OptimizerState.UNCONFIGURED

    def _fail(self, error: OptimizerError) -> None:
        self._release()
        self._error_string = str(error)
        self._state = OptimizerState.FAILED
        logger.warning("Geometry optimizer setup failed: %s", error)

    # ------------------------------------------------------------------ #
    #  Static methods
    # ------------------------------------------------------------------ #

    @staticmethod
    def optimize_coordinates(
        molecule: "Molecule", force_field: str = DEFAULT_FORCE_FIELD
    ) -> bool:
        """Optimize the geometry of *molecule* in place."""
        optimizer = GeometryOptimizer(molecule)
        optimizer.set_force_field(force_field)
        return optimizer.optimize()

    @staticmethod
    def optimize_coordinates_async(
        molecule: "Molecule", force_field: str = DEFAULT_FORCE_FIELD
    ) -> "OptimizationHandle":
        """
        Run optimize_coordinates() on a background thread.

        The molecule must not be touched until the handle completes.
        """
        from .background import submit

        return submit(GeometryOptimizer.optimize_coordinates, molecule, force_field)
