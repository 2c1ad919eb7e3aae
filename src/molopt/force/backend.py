"""
Gradient backends for force fields that only implement an energy function.

This module provides the GradientBackend ABC and two implementations,
registered in ``molopt.registry.gradient_backends``:

- "numerical": central finite differences (always available)
- "autograd": reverse-mode autodiff via the autograd package
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import NDArray

from molopt.registry import gradient_backends


class GradientBackend(ABC):
    """
    Abstract base for gradient computation strategies (Strategy Pattern).

    Force fields write E(positions); a backend turns that into dE/dr so the
    force field does not need an analytic gradient.

    Example:
        >>> from molopt.registry import gradient_backends
        >>> backend = gradient_backends.create("numerical")
        >>> gradient = backend.compute_gradient(energy_fn, positions)
    """

    @abstractmethod
    def compute_gradient(
        self,
        energy_fn: Callable[[NDArray[np.floating]], float],
        positions: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Compute dE/dr.

        Args:
            energy_fn: Function mapping (N, 3) positions to a scalar energy.
            positions: (N, 3) positions.

        Returns:
            (N, 3) gradient array.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this backend."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend's dependencies are installed."""
        pass


@gradient_backends.register_class("numerical")
class NumericalBackend(GradientBackend):
    """
    Central finite differences.

    dE/dx_ij = (E(r + h*e_ij) - E(r - h*e_ij)) / (2*h)

    Costs 6N energy evaluations per gradient, so it is meant for small
    molecules, prototyping and for validating analytic gradients.

    Example:
        >>> backend = NumericalBackend(h=1e-6)
        >>> gradient = backend.compute_gradient(energy_fn, positions)
    """

    def __init__(self, h: float = 1e-5) -> None:
        if h <= 0:
            raise ValueError(f"h must be positive, got {h}")
        self.h = h

    def is_available(self) -> bool:
        """Always available (no dependencies)."""
        return True

    def compute_gradient(
        self,
        energy_fn: Callable[[NDArray[np.floating]], float],
        positions: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        gradient = np.zeros_like(positions, dtype=np.float64)
        h = self.h

        for i in range(len(positions)):
            for j in range(3):
                pos_plus = np.array(positions, dtype=np.float64)
                pos_minus = np.array(positions, dtype=np.float64)
                pos_plus[i, j] += h
                pos_minus[i, j] -= h

                gradient[i, j] = (energy_fn(pos_plus) - energy_fn(pos_minus)) / (2 * h)

        return gradient

    def get_name(self) -> str:
        return f"Numerical(h={self.h})"


@gradient_backends.register_class("autograd")
class AutogradBackend(GradientBackend):
    """
    Autograd backend (NumPy-style autodiff).

    The energy function must be written with ``autograd.numpy`` operations.

    Requires:
        pip install autograd
    """

    def __init__(self) -> None:
        self._grad: Optional[Any] = None
        self._available: Optional[bool] = None

    def _init_autograd(self) -> bool:
        """Lazy import of autograd."""
        if self._available is not None:
            return self._available

        try:
            from autograd import grad

            self._grad = grad
            self._available = True
        except ImportError:
            self._available = False

        return self._available

    def is_available(self) -> bool:
        return self._init_autograd()

    def compute_gradient(
        self,
        energy_fn: Callable[[NDArray[np.floating]], float],
        positions: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Raises:
            RuntimeError: If autograd is not installed.
        """
        if not self._init_autograd():
            raise RuntimeError(
                "Autograd is not installed. Install with: pip install autograd"
            )

        gradient = self._grad(energy_fn)(np.asarray(positions, dtype=np.float64))
        return np.asarray(gradient, dtype=np.float64)

    def get_name(self) -> str:
        return "Autograd(NumPy)"
