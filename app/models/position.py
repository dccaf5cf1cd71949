"""
Position - Immutable canvas coordinate.

This module contains no Qt dependencies. Coordinates are plain numbers
and must be non-negative (the canvas origin is the top-left corner).
"""

from dataclasses import dataclass

from .errors import InvalidGeometryError


def format_coordinate(value: float) -> str:
    """Render a coordinate so that 10 and 10.0 produce the same text."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Position:
    """A point on the schematic canvas. Equality is component-wise."""

    x: float
    y: float

    def __post_init__(self):
        if isinstance(self.x, bool) or isinstance(self.y, bool):
            raise InvalidGeometryError("Position coordinates must be numbers.")
        if not isinstance(self.x, (int, float)) or not isinstance(self.y, (int, float)):
            raise InvalidGeometryError("Position coordinates must be numbers.")
        if self.x < 0 or self.y < 0:
            raise InvalidGeometryError("Position coordinates must be non-negative.")

    @property
    def key(self) -> str:
        """Connection index key, e.g. ``"10,20"``."""
        return f"{format_coordinate(self.x)},{format_coordinate(self.y)}"

    def translated(self, dx: float, dy: float) -> "Position":
        """Return a new position offset by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        return cls(data["x"], data["y"])

    @classmethod
    def coerce(cls, value) -> "Position":
        """
        Accept a Position, an (x, y) pair or an {"x", "y"} dict.

        Raises:
            InvalidGeometryError: If the value cannot be read as a position.
        """
        if isinstance(value, Position):
            return value
        if isinstance(value, dict) and "x" in value and "y" in value:
            return cls.from_dict(value)
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidGeometryError("Terminals must be Position instances or (x, y) pairs.")

    def __str__(self) -> str:
        return f"({format_coordinate(self.x)}, {format_coordinate(self.y)})"
