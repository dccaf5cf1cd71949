"""
Shared test fixtures for the circuit generator test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, controllers, cli)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from controllers.circuit_controller import CircuitController
from models.circuit import CircuitModel
from models.element import Capacitor, Resistor


@pytest.fixture
def circuit():
    return CircuitModel()


@pytest.fixture
def controller():
    return CircuitController()


@pytest.fixture
def events(controller):
    """Record (event, data) pairs emitted by the controller fixture."""
    received = []
    controller.add_observer(lambda event, data: received.append((event, data)))
    return received


@pytest.fixture
def divider_circuit():
    """
    R1 (10,20)-(30,40) shares (10,20) with C1 and (30,40) with R2.

    Both connections are established and linked.
    """
    model = CircuitModel()
    r1 = Resistor("R1", [(10, 20), (30, 40)], properties={"resistance": 100})
    c1 = Capacitor("C1", [(10, 20), (50, 60)])
    r2 = Resistor("R2", [(30, 40), (70, 80)], properties={"resistance": 220})
    for element in (r1, c1, r2):
        model.add_element(element)
    for a, b in ((r1, c1), (r1, r2)):
        model.validate_connection(a, b)
        model.link_elements(a, b)
    model.element_counter = {"R": 2, "C": 1}
    return model
