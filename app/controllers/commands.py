"""
Command Pattern Implementation for Undo/Redo.

Each command stores minimal state needed to undo/redo an operation.
Commands are executed through the CircuitController to maintain consistency.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models.element import Element
from models.errors import ConnectionConflictError
from models.position import Position


def _contains(occupants: list, occupant) -> bool:
    """Membership by identity for elements, by value for bare wire-body nodes."""
    if isinstance(occupant, Position):
        return occupant in occupants
    return any(o is occupant for o in occupants)


class Command(ABC):
    """Base class for undoable commands."""

    @abstractmethod
    def execute(self) -> None:
        """Execute the command (perform the action)."""
        pass

    @abstractmethod
    def undo(self) -> None:
        """Undo the command (reverse the action)."""
        pass

    def get_description(self) -> str:
        """Return a human-readable description of this command."""
        return self.__class__.__name__


class AddElementCommand(Command):
    """Command to create an element through the registry and add it."""

    def __init__(self, controller, element_type: str, terminals: list,
                 label=None, properties=None, element_id: Optional[str] = None):
        self.controller = controller
        self.element_type = element_type
        self.terminals = terminals
        self.label = label
        self.properties = properties
        self.element_id = element_id
        self.element: Optional[Element] = None

    def execute(self) -> None:
        """Create the element on first run; re-add the same object on redo."""
        if self.element is None:
            self.element = self.controller.create_element(
                self.element_type,
                self.terminals,
                label=self.label,
                properties=self.properties,
                element_id=self.element_id,
            )
            self.element_id = self.element.element_id
        else:
            self.controller.add_element(self.element)

    def undo(self) -> None:
        """Remove the added element."""
        if self.element_id:
            self.controller.delete_element(self.element_id)

    def get_description(self) -> str:
        return f"Add {self.element_type}"


class DeleteElementCommand(Command):
    """Command to delete an element from the circuit."""

    def __init__(self, controller, element_id: str):
        self.controller = controller
        self.element_id = element_id
        self.element: Optional[Element] = None
        self.deleted_links: list[tuple[int, tuple[str, str]]] = []
        self.occupied: dict[str, list] = {}

    def execute(self) -> None:
        """Delete the element and store it, its links and its connection points for undo."""
        model = self.controller.model
        self.element = model.get_element(self.element_id)

        # Store links with their indices so undo puts them back in order
        self.deleted_links = [
            (idx, pair) for idx, pair in enumerate(model.links) if self.element_id in pair
        ]
        self.occupied = {}
        if self.element is not None:
            for key, occupants in model.connections.items():
                if any(occupant is self.element for occupant in occupants):
                    self.occupied[key] = list(occupants)

        self.controller.delete_element(self.element_id)

    def undo(self) -> None:
        """
        Restore the element with its connection points and links.

        Occupants that left a connection point since the delete stay gone,
        and links to elements no longer in the circuit are not restored.

        Raises:
            ConnectionConflictError: If another element took one of the
                freed connection points after the delete.
        """
        if self.element is None:
            return
        model = self.controller.model
        model.validate_add_element(self.element)

        # Check every point before touching the model so a conflict leaves it unchanged
        restored = {}
        for key, saved in self.occupied.items():
            current = model.connections.get(key, [])
            if any(not _contains(saved, occupant) for occupant in current):
                raise ConnectionConflictError(self._position_at(key, saved))
            merged = [
                occupant for occupant in saved
                if occupant is self.element or _contains(current, occupant)
            ]
            if any(occupant is not self.element for occupant in merged):
                restored[key] = merged

        model.add_element(self.element)
        model.connections.update(restored)
        for idx, pair in self.deleted_links:
            partner = pair[1] if pair[0] == self.element_id else pair[0]
            if partner in model.elements:
                model.links.insert(min(idx, len(model.links)), pair)
        self.controller._notify("element_added", self.element)

    def _position_at(self, key: str, occupants: list) -> Position:
        candidates = list(self.element.terminals) + [o for o in occupants if isinstance(o, Position)]
        match = next((p for p in candidates if p.key == key), None)
        if match is None:
            # The element moved after connecting; the index still uses the old point
            x, y = key.split(",")
            match = Position(float(x), float(y))
        return match

    def get_description(self) -> str:
        return f"Delete {self.element_id}"


class _TerminalSnapshotCommand(Command):
    """Shared undo for commands that only change terminal positions."""

    def __init__(self, controller, element_id: str):
        self.controller = controller
        self.element_id = element_id
        self.old_terminals: Optional[list[Position]] = None

    def _snapshot(self) -> bool:
        element = self.controller.model.get_element(self.element_id)
        if element is None:
            return False
        if self.old_terminals is None:
            self.old_terminals = list(element.terminals)
        return True

    def undo(self) -> None:
        """Restore the terminals recorded before the first execute."""
        if self.old_terminals is not None:
            self.controller.set_terminals(self.element_id, self.old_terminals)


class MoveElementCommand(_TerminalSnapshotCommand):
    """Command to move an element so its first terminal lands on a new position."""

    def __init__(self, controller, element_id: str, new_reference):
        super().__init__(controller, element_id)
        self.new_reference = Position.coerce(new_reference)

    def execute(self) -> None:
        if self._snapshot():
            self.controller.move_element(self.element_id, self.new_reference)

    def get_description(self) -> str:
        return f"Move {self.element_id}"


class RotateElementCommand(_TerminalSnapshotCommand):
    """Command to rotate an element about its first terminal."""

    def __init__(self, controller, element_id: str, orientation: int):
        super().__init__(controller, element_id)
        self.orientation = orientation

    def execute(self) -> None:
        if self._snapshot():
            self.controller.rotate_element(self.element_id, self.orientation)

    def get_description(self) -> str:
        return f"Rotate {self.element_id} {self.orientation}°"


class UpdatePropertiesCommand(Command):
    """Command to change one or more property values of an element."""

    def __init__(self, controller, element_id: str, updates: dict):
        self.controller = controller
        self.element_id = element_id
        self.updates = dict(updates)
        self.old_values: Optional[dict] = None

    def execute(self) -> None:
        """Apply the updates and store the values they replace."""
        element = self.controller.model.get_element(self.element_id)
        if element is None:
            return
        if self.old_values is None:
            self.old_values = element.properties.to_dict()
        self.controller.update_properties(self.element_id, self.updates)

    def undo(self) -> None:
        """Restore the previous property values, dropping ones that did not exist."""
        if self.old_values is None:
            return
        element = self.controller.model.get_element(self.element_id)
        if element is None:
            return
        for name in self.updates:
            if name not in self.old_values:
                element.properties.remove(name)
        restored = {name: self.old_values[name] for name in self.updates if name in self.old_values}
        self.controller.update_properties(self.element_id, restored)

    def get_description(self) -> str:
        return f"Change {self.element_id} properties"


class SetLabelCommand(Command):
    """Command to set or clear an element's label."""

    def __init__(self, controller, element_id: str, new_label: Optional[str]):
        self.controller = controller
        self.element_id = element_id
        self.new_label = new_label
        self.old_label: Optional[str] = None
        self._executed = False

    def execute(self) -> None:
        element = self.controller.model.get_element(self.element_id)
        if element is None:
            return
        if not self._executed:
            self.old_label = str(element.label) if element.label is not None else None
            self._executed = True
        self.controller.set_label(self.element_id, self.new_label)

    def undo(self) -> None:
        if self._executed:
            self.controller.set_label(self.element_id, self.old_label)

    def get_description(self) -> str:
        return f"Label {self.element_id}"


class CompoundCommand(Command):
    """Command that groups multiple commands into a single undo step."""

    def __init__(self, commands: list[Command], description: str = "Multiple actions"):
        self.commands = commands
        self.description = description

    def execute(self) -> None:
        """Execute all commands in order."""
        for command in self.commands:
            command.execute()

    def undo(self) -> None:
        """Undo all commands in reverse order."""
        for command in reversed(self.commands):
            command.undo()

    def get_description(self) -> str:
        return self.description
