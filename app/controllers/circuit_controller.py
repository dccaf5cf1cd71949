"""
CircuitController - Orchestrates element CRUD, connections and edits.

This module contains no Qt dependencies. It manages the CircuitModel,
delegates every rule check to it, and notifies views of changes through
an observer pattern.
"""

import logging
import math
from typing import Any, Callable, Optional, Union

from models.circuit import CircuitModel
from models.element import Element
from models.errors import (
    CircuitError,
    ConnectionConflictError,
    InvalidGeometryError,
    InvalidPropertyError,
)
from models.position import Position
from models.properties import Label, is_valid_property_value
from models.registry import ElementRegistry, build_default_registry

logger = logging.getLogger(__name__)

VALID_ORIENTATIONS = (0, 90, 180, 270)

ElementRef = Union[Element, str]


class CircuitController:
    """
    Controller for circuit element and connection operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        element_added (Element) - A new element was added
        element_removed (str) - An element was removed (by ID)
        elements_connected (tuple[Element, Element]) - Two elements were connected
        element_moved (Element) - An element's terminals were translated
        element_rotated (Element) - An element was rotated about its first terminal
        terminals_changed (Element) - An element's terminals were replaced
        properties_changed (Element) - An element's properties changed
        label_changed (Element) - An element's label changed
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (None) - Circuit loaded from file
        model_saved (None) - Circuit saved to file
    """

    def __init__(self, model: Optional[CircuitModel] = None,
                 registry: Optional[ElementRegistry] = None):
        self.model = model or CircuitModel()
        self.registry = registry or build_default_registry()
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def _resolve(self, ref: ElementRef) -> Element:
        if isinstance(ref, Element):
            if self.model.get_element(ref.element_id) is not ref:
                raise CircuitError(f"Element {ref.element_id} has not been added to the circuit.")
            return ref
        element = self.model.get_element(ref)
        if element is None:
            raise CircuitError(f"No element with id {ref} in the circuit.")
        return element

    # --- Element operations ---

    def create_element(self, element_type: str, terminals: list,
                       label=None, properties=None,
                       element_id: Optional[str] = None) -> Element:
        """
        Build an element through the registry and add it to the circuit.

        Generates an id (R1, W2, ...) when none is given.

        Raises:
            UnknownTypeError: If the type is not registered.
            DuplicateElementError: If the id is already used.
        """
        if element_id is None:
            element_id = self.model.next_element_id(element_type)
        element = self.registry.create(element_type, element_id, terminals, label, properties)
        self.model.add_element(element)
        logger.debug("Created %s %s", element_type, element_id)
        self._notify('element_added', element)
        return element

    def add_element(self, element: Element) -> Element:
        """
        Add an already built element, generating an id if it has none.

        Raises:
            DuplicateElementError: If the id is already used.
        """
        if not element.element_id:
            element.element_id = self.model.next_element_id(element.element_type)
        self.model.add_element(element)
        logger.debug("Added %s %s", element.element_type, element.element_id)
        self._notify('element_added', element)
        return element

    def delete_element(self, element_id: str) -> None:
        """Remove an element and its connection entries. Unknown ids are ignored."""
        self.model.delete_element(element_id)
        self._notify('element_removed', element_id)

    def get_elements(self) -> list[Element]:
        """Return a copy of the element list."""
        return list(self.model.elements.values())

    # --- Connection operations ---

    def connect_elements(self, element_a: ElementRef, element_b: ElementRef) -> None:
        """
        Connect two elements if the model accepts the connection.

        On success the pair is recorded in the model's link list.

        Raises:
            ConnectionConflictError: If a shared coordinate is already taken.
        """
        a = self._resolve(element_a)
        b = self._resolve(element_b)
        try:
            self.model.validate_connection(a, b)
        except ConnectionConflictError as e:
            logger.warning("Rejected connection %s-%s: %s", a.element_id, b.element_id, e)
            raise
        self.model.link_elements(a, b)
        self._notify('elements_connected', (a, b))

    def find_connections(self, element: ElementRef) -> list[Element]:
        """Return every element sharing a connection point with the given one."""
        return self.model.find_connections(self._resolve(element))

    # --- Editing operations ---

    def move_element(self, element_id: str, new_reference) -> None:
        """
        Translate an element so its first terminal lands on new_reference.

        Raises:
            InvalidGeometryError: If any terminal would leave the canvas.
        """
        element = self.model.get_element(element_id)
        if element is None:
            return
        target = Position.coerce(new_reference)
        reference = element.terminals[0]
        dx = target.x - reference.x
        dy = target.y - reference.y
        element.set_terminals([t.translated(dx, dy) for t in element.terminals])
        self._notify('element_moved', element)

    def rotate_element(self, element_id: str, orientation: int) -> None:
        """
        Rotate an element about its first terminal.

        Raises:
            InvalidGeometryError: If orientation is not 0, 90, 180 or 270,
                or a rotated terminal would leave the canvas.
        """
        if orientation not in VALID_ORIENTATIONS:
            raise InvalidGeometryError("Orientation must be one of 0, 90, 180, or 270 degrees.")
        element = self.model.get_element(element_id)
        if element is None:
            return

        reference = element.terminals[0]
        rotated = [reference]
        for terminal in element.terminals[1:]:
            rel_x, rel_y = _rotate_offset(terminal.x - reference.x, terminal.y - reference.y, orientation)
            rotated.append(Position(reference.x + rel_x, reference.y + rel_y))

        element.set_terminals(rotated)
        self._notify('element_rotated', element)

    def set_terminals(self, element_id: str, terminals: list) -> None:
        """Replace an element's terminals outright (used by undo)."""
        element = self.model.get_element(element_id)
        if element is None:
            return
        element.set_terminals(terminals)
        self._notify('terminals_changed', element)

    def update_properties(self, element_id: str, updates: dict) -> None:
        """
        Update several properties at once.

        Every value is checked before any is applied.

        Raises:
            InvalidPropertyError: If any value is invalid.
        """
        element = self.model.get_element(element_id)
        if element is None:
            return
        for name, value in updates.items():
            if not is_valid_property_value(value):
                raise InvalidPropertyError(name, value)
        for name, value in updates.items():
            element.properties.update(name, value)
        self._notify('properties_changed', element)

    def set_label(self, element_id: str, label: Optional[str]) -> None:
        """Set or clear an element's display label."""
        element = self.model.get_element(element_id)
        if element is None:
            return
        element.label = Label.coerce(label)
        self._notify('label_changed', element)

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self.model.clear()
        self._notify('circuit_cleared', None)


def _rotate_offset(x: float, y: float, angle: int) -> tuple[int, int]:
    """Rotate an offset about the origin, snapping to whole canvas units."""
    rad = math.radians(angle)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return round(x * cos_a - y * sin_a), round(x * sin_a + y * cos_a)
