"""
Element data models - resistors, capacitors and wires.

This module contains no Qt dependencies. Terminals are Position values
in canvas coordinates; consecutive terminals of a wire are the endpoints
of its segments.

Element types use display names as canonical identifiers:
'Resistor', 'Capacitor', 'Wire'
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from .errors import InvalidGeometryError
from .position import Position
from .properties import UNDEFINED, Label, Properties

ELEMENT_TYPES = [
    "Resistor",
    "Capacitor",
    "Wire",
]

# Prefix used when generating element ids (R1, C1, W1, ...)
ID_PREFIXES = {
    "Resistor": "R",
    "Capacitor": "C",
    "Wire": "W",
}

# Exact terminal count per type; None means "at least MIN_WIRE_TERMINALS"
TERMINAL_COUNTS = {
    "Resistor": 2,
    "Capacitor": 2,
    "Wire": None,
}

MIN_WIRE_TERMINALS = 2

DEFAULT_PROPERTIES = {
    "Resistor": {"resistance": UNDEFINED},
    "Capacitor": {"capacitance": UNDEFINED},
    "Wire": {},
}


def id_prefix_for(element_type: str) -> str:
    """Return the id prefix for a type, falling back to its first letter."""
    if element_type in ID_PREFIXES:
        return ID_PREFIXES[element_type]
    return element_type[:1].upper() or "X"


@dataclass(eq=False)
class Element:
    """
    Base data class for anything placed on the schematic.

    Elements compare by identity: two distinct objects with equal fields
    are still two distinct occupants of a connection point.
    """

    element_type: ClassVar[str] = "Element"

    element_id: Optional[str]
    terminals: list[Position]
    label: Optional[Label] = None
    properties: Optional[Properties] = None

    def __post_init__(self):
        if type(self) is Element:
            raise TypeError("Cannot instantiate abstract class Element directly.")
        if not isinstance(self.terminals, (list, tuple)):
            raise InvalidGeometryError("Terminals must be a list of positions.")
        self.terminals = [Position.coerce(t) for t in self.terminals]
        self.label = Label.coerce(self.label)
        if self.properties is None:
            self.properties = Properties(dict(DEFAULT_PROPERTIES.get(self.element_type, {})))
        else:
            self.properties = Properties.coerce(self.properties)
        self.validate_terminals(self.terminals)

    def validate_terminals(self, terminals: list[Position]) -> None:
        """Check the terminal count for this variant."""
        if not terminals:
            raise InvalidGeometryError(f"{self.element_type} must have at least one terminal.")

    def is_wire_like(self) -> bool:
        """Whether other terminals may attach anywhere along this element's body."""
        return False

    def set_terminals(self, terminals: list) -> None:
        """Replace all terminal positions, keeping the variant's count rule."""
        new_terminals = [Position.coerce(t) for t in terminals]
        self.validate_terminals(new_terminals)
        self.terminals = new_terminals

    def terminal_keys(self) -> list[str]:
        return [t.key for t in self.terminals]

    def describe(self) -> str:
        terminals = ", ".join(str(t) for t in self.terminals)
        text = f"{self.element_type} {self.element_id}"
        if self.label is not None:
            text += f' "{self.label}"'
        text += f" at {terminals}"
        props = self.properties.describe()
        if props:
            text += f" [{props}]"
        return text

    def to_dict(self) -> dict:
        """Serialize element to dictionary."""
        data = {
            "type": self.element_type,
            "id": self.element_id,
            "terminals": [t.to_dict() for t in self.terminals],
            "properties": self.properties.to_dict(),
        }
        if self.label is not None:
            data["label"] = str(self.label)
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.element_id!r}, terminals={[str(t) for t in self.terminals]})"


@dataclass(eq=False, repr=False)
class TwoTerminalElement(Element):
    """An element with exactly two terminals."""

    def validate_terminals(self, terminals: list[Position]) -> None:
        if len(terminals) != 2:
            raise InvalidGeometryError(
                f"{self.element_type} must have exactly 2 terminals, got {len(terminals)}."
            )


@dataclass(eq=False, repr=False)
class Resistor(TwoTerminalElement):
    element_type: ClassVar[str] = "Resistor"


@dataclass(eq=False, repr=False)
class Capacitor(TwoTerminalElement):
    element_type: ClassVar[str] = "Capacitor"


@dataclass(eq=False, repr=False)
class Wire(Element):
    """A polyline; each pair of consecutive terminals is one segment."""

    element_type: ClassVar[str] = "Wire"

    def validate_terminals(self, terminals: list[Position]) -> None:
        if len(terminals) < MIN_WIRE_TERMINALS:
            raise InvalidGeometryError(
                f"Wire must have at least {MIN_WIRE_TERMINALS} terminals, got {len(terminals)}."
            )

    def is_wire_like(self) -> bool:
        return True
