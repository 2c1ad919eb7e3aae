"""
Unit tests for the capability registry.
"""
import logging
import threading

import pytest

from molopt.registry import Registry, force_fields, gradient_backends


class Widget:
    """Trivial product for registry tests."""

    def __init__(self, size: int = 1) -> None:
        self.size = size


class OtherWidget(Widget):
    pass


class TestRegistry:
    """Tests for Registry."""

    def test_register_and_create(self) -> None:
        """Registered names create fresh instances."""
        registry = Registry("widget")
        registry.register("widget", Widget)

        first = registry.create("widget")
        second = registry.create("widget")

        assert isinstance(first, Widget)
        assert first is not second

    def test_create_unknown_returns_none(self) -> None:
        """Unknown names return None instead of raising."""
        registry = Registry("widget")
        assert registry.create("missing") is None

    def test_create_passes_arguments(self) -> None:
        """Arguments are forwarded to the factory."""
        registry = Registry("widget")
        registry.register("widget", Widget)
        assert registry.create("widget", size=5).size == 5

    def test_names(self) -> None:
        """names() lists every registered name."""
        registry = Registry("widget")
        registry.register("a", Widget)
        registry.register("b", OtherWidget)
        assert registry.names() == {"a", "b"}
        assert len(registry) == 2
        assert "a" in registry
        assert "c" not in registry

    def test_last_registration_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        """Re-registering replaces the factory and logs a warning."""
        registry = Registry("widget")
        registry.register("w", Widget)

        with caplog.at_level(logging.WARNING, logger="molopt.registry"):
            registry.register("w", OtherWidget)

        assert isinstance(registry.create("w"), OtherWidget)
        assert any("Replacing widget 'w'" in r.getMessage() for r in caplog.records)

    def test_same_factory_twice_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        """Registering the identical factory again does not warn."""
        registry = Registry("widget")
        registry.register("w", Widget)
        with caplog.at_level(logging.WARNING, logger="molopt.registry"):
            registry.register("w", Widget)
        assert not caplog.records

    def test_empty_name_rejected(self) -> None:
        """Empty names raise ValueError."""
        registry = Registry("widget")
        with pytest.raises(ValueError, match="cannot be empty"):
            registry.register("", Widget)

    def test_non_callable_rejected(self) -> None:
        """Factories must be callable."""
        registry = Registry("widget")
        with pytest.raises(TypeError):
            registry.register("w", 42)

    def test_unregister(self) -> None:
        """unregister removes the entry and reports whether it existed."""
        registry = Registry("widget")
        registry.register("w", Widget)
        assert registry.unregister("w") is True
        assert registry.unregister("w") is False
        assert registry.create("w") is None

    def test_register_class_decorator(self) -> None:
        """The decorator registers under every alias and returns the class."""
        registry = Registry("widget")

        @registry.register_class("alpha", "beta")
        class Decorated(Widget):
            pass

        assert registry.names() == {"alpha", "beta"}
        assert isinstance(registry.create("beta"), Decorated)

    def test_override_restores_absence(self) -> None:
        """override() removes a name that did not exist before."""
        registry = Registry("widget")
        with registry.override("temp", Widget):
            assert isinstance(registry.create("temp"), Widget)
        assert "temp" not in registry

    def test_override_restores_previous(self) -> None:
        """override() restores the previous factory, even on error."""
        registry = Registry("widget")
        registry.register("w", Widget)

        with pytest.raises(RuntimeError):
            with registry.override("w", OtherWidget):
                assert isinstance(registry.create("w"), OtherWidget)
                raise RuntimeError("boom")

        created = registry.create("w")
        assert type(created) is Widget

    def test_concurrent_lookup_and_registration(self) -> None:
        """Concurrent readers and writers do not corrupt the table."""
        registry = Registry("widget")
        registry.register("base", Widget)
        errors = []

        def reader() -> None:
            for _ in range(500):
                if not isinstance(registry.create("base"), Widget):
                    errors.append("lookup failed")
                registry.names()

        def writer(offset: int) -> None:
            for i in range(100):
                registry.register(f"w{offset}-{i}", Widget)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        threads += [threading.Thread(target=writer, args=(k,)) for k in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(registry) == 201


class TestBuiltinRegistries:
    """Tests for the process-wide registries."""

    def test_builtin_force_fields(self) -> None:
        """Importing molopt.forcefield registers the built-in force fields."""
        import molopt.forcefield  # noqa: F401

        assert {"lj", "lennard_jones", "morse"} <= force_fields.names()

    def test_builtin_backends(self) -> None:
        """Importing molopt.force registers the gradient backends."""
        import molopt.force  # noqa: F401

        assert {"numerical", "autograd"} <= gradient_backends.names()
