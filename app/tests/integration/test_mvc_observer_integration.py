"""Integration tests for the observer pattern and controller interactions.

Covers:
- Observer propagation (events fired for each mutation)
- Cross-controller coordination (shared model reference)
- Undo/redo across mixed operations
"""

from unittest.mock import MagicMock

import pytest
from controllers.circuit_controller import CircuitController
from controllers.commands import (
    AddElementCommand,
    CompoundCommand,
    DeleteElementCommand,
    MoveElementCommand,
    SetLabelCommand,
    UpdatePropertiesCommand,
)
from controllers.file_controller import FileController
from controllers.undo_manager import UndoManager
from models.errors import ConnectionConflictError
from models.position import Position

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class EventLog:
    """Simple observer that records (event, data) tuples."""

    def __init__(self):
        self.events = []

    def __call__(self, event, data):
        self.events.append((event, data))

    def names(self):
        return [event for event, _ in self.events]


@pytest.fixture
def ctrl():
    return CircuitController()


@pytest.fixture
def log(ctrl):
    event_log = EventLog()
    ctrl.add_observer(event_log)
    return event_log


@pytest.fixture(autouse=True)
def qsettings(monkeypatch):
    monkeypatch.setattr("controllers.file_controller.QSettings", MagicMock())


# ---------------------------------------------------------------------------
# Observer propagation
# ---------------------------------------------------------------------------


class TestObserverPropagation:
    def test_build_and_edit_sequence(self, ctrl, log):
        ctrl.create_element("Resistor", [(10, 20), (30, 40)])
        ctrl.create_element("Capacitor", [(10, 20), (50, 60)])
        ctrl.connect_elements("R1", "C1")
        ctrl.update_properties("R1", {"resistance": 1000})
        ctrl.set_label("C1", "Bypass")
        ctrl.move_element("C1", (100, 100))
        ctrl.rotate_element("C1", 180)
        ctrl.delete_element("R1")

        assert log.names() == [
            "element_added",
            "element_added",
            "elements_connected",
            "properties_changed",
            "label_changed",
            "element_moved",
            "element_rotated",
            "element_removed",
        ]

    def test_rejected_connection_is_silent(self, ctrl, log):
        ctrl.create_element("Resistor", [(0, 0), (10, 0)])
        ctrl.create_element("Resistor", [(0, 0), (0, 10)])
        ctrl.create_element("Resistor", [(0, 0), (10, 10)])
        ctrl.connect_elements("R1", "R2")

        with pytest.raises(ConnectionConflictError):
            ctrl.connect_elements("R3", "R1")
        assert log.names().count("elements_connected") == 1

    def test_multiple_observers(self, ctrl):
        first, second = EventLog(), EventLog()
        ctrl.add_observer(first)
        ctrl.add_observer(second)
        ctrl.create_element("Wire", [(0, 0), (10, 0)])
        assert first.names() == second.names() == ["element_added"]


# ---------------------------------------------------------------------------
# Cross-controller coordination
# ---------------------------------------------------------------------------


class TestSharedModel:
    def test_file_controller_sees_circuit_edits(self, ctrl, log, tmp_path):
        files = FileController(ctrl.model, circuit_ctrl=ctrl, session_file=str(tmp_path / "session.txt"))
        ctrl.create_element("Resistor", [(0, 0), (10, 0)])
        filepath = tmp_path / "one.json"
        files.save_circuit(filepath)

        ctrl.clear_circuit()
        files.load_circuit(filepath)
        assert [e.element_id for e in ctrl.get_elements()] == ["R1"]
        assert log.names()[-3:] == ["model_saved", "circuit_cleared", "model_loaded"]

    def test_new_ids_continue_after_load(self, ctrl, tmp_path):
        files = FileController(ctrl.model, circuit_ctrl=ctrl, session_file=str(tmp_path / "session.txt"))
        ctrl.create_element("Resistor", [(0, 0), (10, 0)])
        ctrl.create_element("Resistor", [(20, 0), (30, 0)])
        ctrl.delete_element("R2")
        filepath = tmp_path / "two.json"
        files.save_circuit(filepath)

        files.load_circuit(filepath)
        assert ctrl.create_element("Resistor", [(40, 0), (50, 0)]).element_id == "R3"


# ---------------------------------------------------------------------------
# Undo/redo across mixed operations
# ---------------------------------------------------------------------------


class TestUndoAcrossOperations:
    def test_full_history(self, ctrl):
        manager = UndoManager()
        manager.execute(AddElementCommand(ctrl, "Resistor", [(10, 10), (20, 10)]))
        manager.execute(AddElementCommand(ctrl, "Wire", [(20, 10), (40, 10)]))
        ctrl.connect_elements("R1", "W1")
        manager.execute(UpdatePropertiesCommand(ctrl, "R1", {"resistance": 330}))
        manager.execute(SetLabelCommand(ctrl, "R1", "Load"))
        manager.execute(MoveElementCommand(ctrl, "W1", (60, 60)))

        resistor = ctrl.model.get_element("R1")
        wire = ctrl.model.get_element("W1")

        while manager.undo():
            pass

        assert ctrl.get_elements() == []
        assert ctrl.model.connections == {}

        for _ in range(5):
            manager.redo()

        assert ctrl.model.get_element("R1") is resistor
        assert resistor.properties.get("resistance") == 330
        assert str(resistor.label) == "Load"
        assert wire.terminals[0] == Position(60, 60)

    def test_delete_undo_restores_links(self, ctrl):
        manager = UndoManager()
        ctrl.create_element("Wire", [(40, 10), (60, 10)])
        ctrl.create_element("Resistor", [(50, 10), (50, 30)])
        ctrl.connect_elements("W1", "R1")

        manager.execute(DeleteElementCommand(ctrl, "R1"))
        assert ctrl.model.neighbors("W1") == []

        manager.undo()
        assert ctrl.model.neighbors("W1") == ["R1"]

    def test_compound_delete(self, ctrl):
        manager = UndoManager()
        ctrl.create_element("Resistor", [(10, 20), (30, 40)])
        ctrl.create_element("Capacitor", [(10, 20), (50, 60)])
        ctrl.connect_elements("R1", "C1")

        manager.execute(CompoundCommand([
            DeleteElementCommand(ctrl, "R1"),
            DeleteElementCommand(ctrl, "C1"),
        ], "Delete selection"))
        assert ctrl.get_elements() == []

        manager.undo()
        assert sorted(ctrl.model.elements) == ["C1", "R1"]
        assert ctrl.model.neighbors("R1") == ["C1"]
