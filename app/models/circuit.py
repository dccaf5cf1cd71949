"""
CircuitModel - Central data store for circuit connectivity.

This module contains no Qt dependencies. It holds all elements, the
coordinate-keyed connection index and the element-pair link list, and
enforces the rules for adding elements and joining terminals.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from .element import Element, id_prefix_for
from .errors import CircuitError, ConnectionConflictError, DuplicateElementError
from .position import Position

# Cross products at or below this magnitude count as collinear
COLLINEARITY_TOLERANCE = 1e-10

# A connection point lists elements, plus the bare node recorded by a
# wire-body connection.
Occupant = Union[Element, Position]


def iter_segments(element: Element) -> Iterator[tuple[Position, Position]]:
    """Yield (start, end) for each pair of consecutive terminals."""
    return zip(element.terminals, element.terminals[1:])


@dataclass
class CircuitModel:
    """
    Aggregate root holding all circuit state.

    ``connections`` maps a coordinate key ("x,y") to everything known to
    touch that exact point, in the order the connections were made.
    ``links`` records which element pairs the service layer connected,
    so neighbours can be listed without scanning coordinates.
    """

    elements: dict[str, Element] = field(default_factory=dict)
    connections: dict[str, list[Occupant]] = field(default_factory=dict)
    links: list[tuple[str, str]] = field(default_factory=list)
    element_counter: dict[str, int] = field(default_factory=dict)

    # --- Element operations ---

    def validate_add_element(self, element: Element) -> None:
        """
        Check that an element may be added.

        Raises:
            DuplicateElementError: If another element already uses the id.
        """
        if not element.element_id:
            raise CircuitError("Element must have an id before it is added to the circuit.")
        if element.element_id in self.elements:
            raise DuplicateElementError(element.element_id)

    def add_element(self, element: Element) -> None:
        """Validate and add an element. Connections are made separately."""
        self.validate_add_element(element)
        self.elements[element.element_id] = element

    def delete_element(self, element_id: str) -> None:
        """
        Remove an element and prune it from every connection point.

        Unknown ids are ignored.
        """
        if element_id not in self.elements:
            return

        del self.elements[element_id]

        for key in list(self.connections):
            remaining = [
                occupant for occupant in self.connections[key]
                if not (isinstance(occupant, Element) and occupant.element_id == element_id)
            ]
            if remaining:
                self.connections[key] = remaining
            else:
                del self.connections[key]

        self.links = [pair for pair in self.links if element_id not in pair]

    def get_element(self, element_id: str) -> Optional[Element]:
        return self.elements.get(element_id)

    def next_element_id(self, element_type: str) -> str:
        """Generate the next free id for a type (R1, R2, W1, ...)."""
        prefix = id_prefix_for(element_type)
        count = self.element_counter.get(prefix, 0)
        while True:
            count += 1
            candidate = f"{prefix}{count}"
            if candidate not in self.elements:
                break
        self.element_counter[prefix] = count
        return candidate

    # --- Connection operations ---

    def validate_connection(self, element_a: Element, element_b: Element) -> None:
        """
        Validate and record a connection between two elements.

        Two independent passes run on every call:

        1. Terminal to terminal: every coordinate both elements have a
           terminal on is recorded with both elements as occupants. A
           coordinate that already lists any third occupant is rejected.
        2. Terminal to wire body: when exactly one of the two is wire-like,
           the other element's first terminal is tested against the wire's
           segments in order. The first segment containing it records the
           wire and the bare node at that coordinate.

        Checks and recording happen per coordinate, so a conflict on a
        later shared terminal leaves earlier ones recorded.

        Raises:
            ConnectionConflictError: If a coordinate is already taken.
        """
        self._connect_shared_terminals(element_a, element_b)
        self._connect_wire_body(element_a, element_b)

    def _connect_shared_terminals(self, element_a: Element, element_b: Element) -> None:
        keys_a = set(element_a.terminal_keys())

        for node in element_b.terminals:
            key = node.key
            if key not in keys_a:
                continue

            occupants = self.connections.get(key, [])
            if any(occupant is not element_a and occupant is not element_b for occupant in occupants):
                raise ConnectionConflictError(node)

            self.connections.setdefault(key, []).extend((element_a, element_b))

    def _connect_wire_body(self, element_a: Element, element_b: Element) -> None:
        if element_a.is_wire_like() == element_b.is_wire_like():
            return

        if element_a.is_wire_like():
            wire, other = element_a, element_b
        else:
            wire, other = element_b, element_a

        if not other.terminals:
            return
        node = other.terminals[0]

        for start, end in iter_segments(wire):
            if not self.is_node_on_wire_segment(node, start, end):
                continue

            key = node.key
            occupants = self.connections.get(key, [])
            if any(isinstance(occupant, Position) and occupant == node for occupant in occupants):
                raise ConnectionConflictError(node)

            self.connections.setdefault(key, []).extend((wire, node))
            return

    @staticmethod
    def is_node_on_wire_segment(node: Position, wire_start: Position, wire_end: Position) -> bool:
        """Return True if node lies on the closed segment wire_start-wire_end."""
        if (
            node.x < min(wire_start.x, wire_end.x) or node.x > max(wire_start.x, wire_end.x)
            or node.y < min(wire_start.y, wire_end.y) or node.y > max(wire_start.y, wire_end.y)
        ):
            return False

        cross_product = (
            (wire_end.y - wire_start.y) * (node.x - wire_start.x)
            - (node.y - wire_start.y) * (wire_end.x - wire_start.x)
        )
        return abs(cross_product) <= COLLINEARITY_TOLERANCE

    def link_elements(self, element_a: Element, element_b: Element) -> None:
        """Record that two elements were connected. Order-insensitive, no duplicates."""
        id_a, id_b = element_a.element_id, element_b.element_id
        if (id_a, id_b) in self.links or (id_b, id_a) in self.links:
            return
        self.links.append((id_a, id_b))

    def neighbors(self, element_id: str) -> list[str]:
        """Return ids of elements linked to the given element."""
        partners = set()
        for id_a, id_b in self.links:
            if id_a == element_id:
                partners.add(id_b)
            elif id_b == element_id:
                partners.add(id_a)
        return sorted(partners)

    def find_connections(self, element: Element) -> list[Element]:
        """
        Return elements sharing a connection point with the given element.

        Scans every coordinate that lists the element and collects the
        other elements there, in first-seen order without repeats.
        """
        found: list[Element] = []
        for occupants in self.connections.values():
            if not any(occupant is element for occupant in occupants):
                continue
            for occupant in occupants:
                if isinstance(occupant, Element) and occupant is not element and occupant not in found:
                    found.append(occupant)
        return found

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.elements.clear()
        self.connections.clear()
        self.links.clear()
        self.element_counter.clear()

    def describe(self) -> str:
        """Return a plain-text description: every element, then every connection point."""
        count = len(self.elements)
        lines = [f"Circuit with {count} element{'s' if count != 1 else ''}"]
        for element in self.elements.values():
            lines.append(f"  {element.describe()}")

        if self.connections:
            lines.append("Connections:")
            for key, occupants in self.connections.items():
                names = ", ".join(_occupant_name(occupant) for occupant in occupants)
                lines.append(f"  {key}: {names}")

        return "\n".join(lines)

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary. Connections are stored as links."""
        return {
            "elements": [e.to_dict() for e in self.elements.values()],
            "links": [[id_a, id_b] for id_a, id_b in self.links],
            "counters": self.element_counter.copy(),
        }

    @classmethod
    def from_dict(cls, data: dict, registry=None) -> "CircuitModel":
        """
        Deserialize circuit from dictionary.

        Elements are built through the registry; the connection index is
        rebuilt by replaying every link in its saved order.

        Raises:
            UnknownTypeError: If an element type is not registered.
            ConnectionConflictError: If the saved links conflict.
        """
        if registry is None:
            from .registry import build_default_registry

            registry = build_default_registry()

        model = cls()
        model.element_counter = dict(data.get("counters", {}))

        for element_data in data.get("elements", []):
            element = registry.create(
                element_data["type"],
                element_data["id"],
                element_data["terminals"],
                element_data.get("label"),
                element_data.get("properties"),
            )
            model.add_element(element)

        for id_a, id_b in data.get("links", []):
            element_a = model.elements[id_a]
            element_b = model.elements[id_b]
            model.validate_connection(element_a, element_b)
            model.link_elements(element_a, element_b)

        return model


def _occupant_name(occupant: Occupant) -> str:
    if isinstance(occupant, Element):
        return occupant.element_id
    return str(occupant)
