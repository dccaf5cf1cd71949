"""Tests for ElementRegistry."""

import pytest
from models.element import Capacitor, Resistor, Wire
from models.errors import DuplicateTypeError, UnknownTypeError
from models.registry import ElementRegistry, build_default_registry


class TestRegister:
    def test_register_and_get(self):
        registry = ElementRegistry()
        registry.register("Resistor", Resistor)
        assert registry.get("Resistor") is Resistor
        assert "Resistor" in registry
        assert len(registry) == 1

    def test_duplicate_type_rejected(self):
        registry = ElementRegistry()
        registry.register("Resistor", Resistor)
        with pytest.raises(DuplicateTypeError, match='"Resistor" is already registered'):
            registry.register("Resistor", Capacitor)
        assert registry.get("Resistor") is Resistor

    def test_get_unknown_returns_none(self):
        assert ElementRegistry().get("Inductor") is None

    def test_types_in_registration_order(self):
        registry = ElementRegistry()
        registry.register("Wire", Wire)
        registry.register("Resistor", Resistor)
        assert registry.get_types() == ["Wire", "Resistor"]

    def test_registries_are_independent(self):
        first = build_default_registry()
        second = build_default_registry()
        first.register("Custom", Resistor)
        assert "Custom" not in second


class TestCreate:
    def test_create_builtin(self):
        element = build_default_registry().create("Capacitor", "C1", [(0, 0), (0, 10)], "Bypass")
        assert isinstance(element, Capacitor)
        assert element.element_id == "C1"
        assert str(element.label) == "Bypass"

    def test_create_unknown_type(self):
        with pytest.raises(UnknownTypeError, match='"Inductor" is not registered'):
            build_default_registry().create("Inductor", "L1", [(0, 0), (1, 0)])

    def test_custom_factory_receives_arguments(self):
        calls = []

        def factory(element_id, terminals, label, properties):
            calls.append((element_id, terminals, label, properties))
            return Resistor(element_id, terminals, label, properties)

        registry = ElementRegistry()
        registry.register("Custom", factory)
        registry.create("Custom", "X1", [(0, 0), (1, 0)], properties={"resistance": 5})
        assert calls == [("X1", [(0, 0), (1, 0)], None, {"resistance": 5})]

    def test_default_types(self):
        assert build_default_registry().get_types() == ["Resistor", "Capacitor", "Wire"]
