"""
Optimizer settings and YAML loading.

Example YAML:
    optimizer:
      force_field: morse
      convergence_value: 0.05
      line_search_steps: 20
"""
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from molopt.forcefield import DEFAULT_FORCE_FIELD


@dataclass
class OptimizerSettings:
    """
    Parameters of the geometry optimizer line search.

    Attributes:
        force_field: Registered name of the force field to use.
        initial_step: Step size at the start of every step() call.
        step_convergence: Energy decrease below which the line search stops.
        line_search_steps: Maximum inner iterations per step() call.
        convergence_value: RMS gradient below which the geometry is converged.
        max_step: Upper bound on the step size.
        step_growth: Step size multiplier after an accepted move.
        step_shrink: Step size multiplier after a rejected move.
        perturbation: Length of the random displacement applied to every
            atom when the energy becomes non-finite.
    """

    force_field: str = DEFAULT_FORCE_FIELD
    initial_step: float = 0.05
    step_convergence: float = 1e-5
    line_search_steps: int = 10
    convergence_value: float = 0.1
    max_step: float = 1.0
    step_growth: float = 2.0
    step_shrink: float = 0.1
    perturbation: float = 1.0

    def __post_init__(self) -> None:
        if not self.force_field:
            raise ValueError("force_field cannot be empty")
        for name in (
            "initial_step",
            "step_convergence",
            "convergence_value",
            "max_step",
            "perturbation",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.line_search_steps <= 0:
            raise ValueError(
                f"line_search_steps must be positive, got {self.line_search_steps}"
            )
        if self.initial_step > self.max_step:
            raise ValueError(
                f"initial_step ({self.initial_step}) cannot exceed "
                f"max_step ({self.max_step})"
            )
        if self.step_growth <= 1:
            raise ValueError(f"step_growth must be > 1, got {self.step_growth}")
        if not 0 < self.step_shrink < 1:
            raise ValueError(f"step_shrink must be in (0, 1), got {self.step_shrink}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OptimizerSettings":
        """
        Build settings from a mapping; missing keys keep their defaults.

        Raises:
            ValueError: On unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(d) - set(known)
        if unknown:
            raise ValueError(f"Unknown optimizer settings: {sorted(unknown)}")

        defaults = cls()
        kwargs = {}
        for name, value in d.items():
            kwargs[name] = _coerce(name, value, type(getattr(defaults, name)))
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(name: str, value: Any, kind: type) -> Any:
    """Convert a raw config value to the field type without losing precision."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be {kind.__name__}, got {value!r}")
    if kind is int:
        number = float(value)
        if not number.is_integer():
            raise ValueError(f"{name} must be an integer, got {value!r}")
        return int(number)
    return kind(value)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Returns:
        The parsed mapping (empty for an empty file).

    Raises:
        ValueError: If the document is not a mapping.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_settings(path: Union[str, Path]) -> OptimizerSettings:
    """
    Load OptimizerSettings from YAML.

    Accepts a flat mapping or one nested under an ``optimizer`` key.
    """
    config = load_yaml(path)
    return OptimizerSettings.from_dict(config.get("optimizer", config) or {})
