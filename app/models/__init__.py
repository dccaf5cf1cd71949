"""
Pure Python data models for the circuit generator.

This package contains Qt-free data classes that represent circuit elements
and the connectivity model. All models use only Python standard library
types (no PyQt6 dependencies).
"""

from .circuit import COLLINEARITY_TOLERANCE, CircuitModel
from .element import (
    DEFAULT_PROPERTIES,
    ELEMENT_TYPES,
    ID_PREFIXES,
    TERMINAL_COUNTS,
    Capacitor,
    Element,
    Resistor,
    Wire,
)
from .errors import (
    CircuitError,
    ConnectionConflictError,
    DuplicateElementError,
    DuplicateTypeError,
    InvalidGeometryError,
    InvalidLabelError,
    InvalidPropertyError,
    UnknownTypeError,
)
from .position import Position
from .properties import UNDEFINED, VARIABLE, Label, Properties
from .registry import ElementRegistry, build_default_registry

__all__ = [
    "CircuitModel",
    "COLLINEARITY_TOLERANCE",
    "Element",
    "Resistor",
    "Capacitor",
    "Wire",
    "ELEMENT_TYPES",
    "ID_PREFIXES",
    "TERMINAL_COUNTS",
    "DEFAULT_PROPERTIES",
    "Position",
    "Label",
    "Properties",
    "VARIABLE",
    "UNDEFINED",
    "ElementRegistry",
    "build_default_registry",
    "CircuitError",
    "ConnectionConflictError",
    "DuplicateElementError",
    "DuplicateTypeError",
    "InvalidGeometryError",
    "InvalidLabelError",
    "InvalidPropertyError",
    "UnknownTypeError",
]
