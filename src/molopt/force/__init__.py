"""
Gradient computation for energy-only force fields.

Importing this package registers the "numerical" and "autograd" backends
in ``molopt.registry.gradient_backends``.
"""

from .backend import AutogradBackend, GradientBackend, NumericalBackend

__all__ = [
    "GradientBackend",
    "NumericalBackend",
    "AutogradBackend",
]
