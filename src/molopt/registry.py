"""
Capability registry for named, pluggable implementations.

A Registry maps a name to a factory (usually a class) so that callers can
ask for "the force field named X" without knowing how X is implemented.
Module-level registries are populated at import time by the packages that
provide implementations.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Set

logger = logging.getLogger(__name__)

_MISSING = object()


class Registry:
    """
    Thread-safe mapping from names to factories.

    Registration policy: the last registration of a name wins. Replacing an
    existing entry is logged at WARNING level so that accidental overrides
    can be diagnosed.

    Attributes:
        kind: Human-readable category name used in log messages.

    Example:
        >>> from molopt.registry import Registry
        >>> shapes = Registry("shape")
        >>> shapes.register("square", Square)
        >>> shape = shapes.create("square")
        >>> shapes.create("circle") is None
        True
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._factories: Dict[str, Callable[..., Any]] = {}
        self._lock = threading.RLock()

    def register(self, name: str, factory: Callable[..., Any]) -> None:
        """
        Register *factory* under *name*.

        Args:
            name: Lookup name.
            factory: Callable returning a new instance.

        Raises:
            ValueError: If name is empty.
            TypeError: If factory is not callable.
        """
        if not name:
            raise ValueError(f"{self.kind} name cannot be empty")
        if not callable(factory):
            raise TypeError(
                f"{self.kind} factory must be callable, got {type(factory).__name__}"
            )

        with self._lock:
            previous = self._factories.get(name)
            self._factories[name] = factory

        if previous is not None and previous is not factory:
            logger.warning(
                "Replacing %s '%s': %r -> %r", self.kind, name, previous, factory
            )

    def register_class(self, *names: str) -> Callable[[type], type]:
        """Class decorator registering the class under each of *names*."""

        def decorator(cls: type) -> type:
            for name in names:
                self.register(name, cls)
            return cls

        return decorator

    def unregister(self, name: str) -> bool:
        """Remove *name*. Returns False if it was not registered."""
        with self._lock:
            return self._factories.pop(name, None) is not None

    def create(self, name: str, *args: Any, **kwargs: Any) -> Optional[Any]:
        """
        Create a new instance of the implementation registered as *name*.

        Returns:
            The new instance, or None if *name* is not registered.
        """
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            return None
        return factory(*args, **kwargs)

    def names(self) -> Set[str]:
        """Return the set of registered names."""
        with self._lock:
            return set(self._factories)

    @contextmanager
    def override(self, name: str, factory: Callable[..., Any]) -> Iterator[None]:
        """
        Temporarily register *factory* as *name*.

        The previous entry (or its absence) is restored on exit.
        """
        with self._lock:
            previous = self._factories.get(name, _MISSING)
            self._factories[name] = factory
        try:
            yield
        finally:
            with self._lock:
                if previous is _MISSING:
                    self._factories.pop(name, None)
                else:
                    self._factories[name] = previous

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories

    def __len__(self) -> int:
        with self._lock:
            return len(self._factories)

    def __repr__(self) -> str:
        return f"Registry({self.kind!r}, names={sorted(self.names())})"


# Process-wide registries
force_fields = Registry("force field")
gradient_backends = Registry("gradient backend")


def register_force_field(*names: str) -> Callable[[type], type]:
    """
    Register a ForceField subclass under one or more names.

    Example:
        >>> @register_force_field("harmonic")
        ... class HarmonicForceField(ForceField):
        ...     ...
    """
    return force_fields.register_class(*names)
