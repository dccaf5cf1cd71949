"""
Error taxonomy for the circuit model.

Every error is a ValueError so callers that already guard input
validation with ``except ValueError`` keep working.
"""


class CircuitError(ValueError):
    """Base class for all rejected circuit operations."""


class DuplicateElementError(CircuitError):
    """Raised when an element id is already present in the circuit."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Element with id {element_id} is already in the circuit.")


class DuplicateTypeError(CircuitError):
    """Raised when an element type is registered twice."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f'Element type "{type_name}" is already registered.')


class UnknownTypeError(CircuitError):
    """Raised when asked to create an element type nobody registered."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f'Element type "{type_name}" is not registered.')


class ConnectionConflictError(CircuitError):
    """Raised when a coordinate is already taken by a different element pair."""

    def __init__(self, position):
        self.position = position
        super().__init__(
            f"Node at position {position} is already connected and cannot accept additional connections."
        )


class InvalidGeometryError(CircuitError):
    """Raised for negative coordinates, bad terminal lists or bad orientations."""


class InvalidPropertyError(CircuitError):
    """Raised when a property value is not a number, "variable" or "undefined"."""

    def __init__(self, name: str, value=None):
        self.name = name
        self.value = value
        super().__init__(f'Invalid value for property "{name}". Must be a float, "variable", or "undefined".')


class InvalidLabelError(CircuitError):
    """Raised when a label is empty or longer than the allowed length."""
