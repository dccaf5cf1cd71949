"""Tests for Label and Properties value containers."""

import pytest
from models.errors import InvalidLabelError, InvalidPropertyError
from models.properties import UNDEFINED, VARIABLE, Label, Properties


class TestProperties:
    def test_describe(self):
        properties = Properties({"resistance": 100, "capacitance": "variable"})
        assert properties.describe() == "resistance: 100, capacitance: variable"

    def test_describe_empty(self):
        assert Properties({}).describe() == ""

    @pytest.mark.parametrize("value", [100, 0.01, -5, VARIABLE, UNDEFINED])
    def test_valid_values(self, value):
        assert Properties({"resistance": value}).get("resistance") == value

    @pytest.mark.parametrize("value", ["100", None, True, [1], "Variable"])
    def test_invalid_values_rejected(self, value):
        with pytest.raises(InvalidPropertyError, match='"resistance"'):
            Properties({"resistance": value})

    def test_non_dict_rejected(self):
        with pytest.raises(InvalidPropertyError):
            Properties(["resistance"])

    def test_update(self):
        properties = Properties({"resistance": 100})
        properties.update("resistance", VARIABLE)
        assert properties.get("resistance") == VARIABLE

    def test_update_rejects_invalid_value_and_keeps_old(self):
        properties = Properties({"resistance": 100})
        with pytest.raises(InvalidPropertyError):
            properties.update("resistance", "lots")
        assert properties.get("resistance") == 100

    def test_copies_input_dict(self):
        values = {"resistance": 100}
        properties = Properties(values)
        properties.update("resistance", 5)
        assert values["resistance"] == 100

    def test_remove(self):
        properties = Properties({"resistance": 100})
        properties.remove("resistance")
        properties.remove("missing")
        assert "resistance" not in properties
        assert len(properties) == 0

    def test_coerce(self):
        assert Properties.coerce(None).to_dict() == {}
        assert Properties.coerce({"a": 1}).to_dict() == {"a": 1}
        existing = Properties({"a": 1})
        assert Properties.coerce(existing) is existing


class TestLabel:
    def test_str(self):
        assert str(Label("Input")) == "Input"

    @pytest.mark.parametrize("value", ["", "   ", "x" * 51, 42])
    def test_invalid_labels_rejected(self, value):
        with pytest.raises(InvalidLabelError):
            Label(value)

    def test_max_length_allowed(self):
        assert Label("x" * 50).value == "x" * 50

    def test_equality_by_value(self):
        assert Label("A") == Label("A")
        assert Label("A") != Label("B")

    def test_coerce(self):
        assert Label.coerce(None) is None
        assert Label.coerce("A") == Label("A")
