"""
Label and Properties - value containers attached to circuit elements.

Neither affects connectivity. Property values are restricted to numbers
and the two sentinels understood by downstream simulation tooling.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import InvalidLabelError, InvalidPropertyError

VARIABLE = "variable"
UNDEFINED = "undefined"
SENTINELS = (VARIABLE, UNDEFINED)

MAX_LABEL_LENGTH = 50

PropertyValue = Union[int, float, str]


def is_valid_property_value(value) -> bool:
    """Return True for numbers (not bools) and the two sentinel strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return value in SENTINELS


@dataclass(frozen=True)
class Label:
    """Display label for an element."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip() or len(self.value) > MAX_LABEL_LENGTH:
            raise InvalidLabelError(
                f"Invalid label: Must be non-empty and at most {MAX_LABEL_LENGTH} characters."
            )

    @classmethod
    def coerce(cls, value) -> Optional["Label"]:
        if value is None or isinstance(value, Label):
            return value
        return cls(value)

    def __str__(self) -> str:
        return self.value


@dataclass
class Properties:
    """
    Mapping of property name to value.

    Each value is a number, "variable" (swept by a simulator) or
    "undefined" (not yet chosen by the user).
    """

    values: dict[str, PropertyValue] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.values, dict):
            raise InvalidPropertyError("<properties>", self.values)
        for name, value in self.values.items():
            if not is_valid_property_value(value):
                raise InvalidPropertyError(name, value)
        self.values = dict(self.values)

    @classmethod
    def coerce(cls, value) -> "Properties":
        if value is None:
            return cls()
        if isinstance(value, Properties):
            return value
        return cls(value)

    def get(self, name: str, default=None):
        return self.values.get(name, default)

    def update(self, name: str, value: PropertyValue) -> None:
        """Set a single property, rejecting invalid values."""
        if not is_valid_property_value(value):
            raise InvalidPropertyError(name, value)
        self.values[name] = value

    def remove(self, name: str) -> None:
        self.values.pop(name, None)

    def describe(self) -> str:
        return ", ".join(f"{name}: {value}" for name, value in self.values.items())

    def to_dict(self) -> dict:
        return dict(self.values)

    def __contains__(self, name) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)
