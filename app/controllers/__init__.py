"""
Controllers for the circuit generator.

This package contains Qt-free controller classes that orchestrate
operations between models and views using an observer pattern.
File persistence uses QSettings only for the recent-files list.
"""

from .circuit_controller import CircuitController
from .file_controller import FileController, validate_circuit_data
from .undo_manager import UndoManager

__all__ = [
    "CircuitController",
    "FileController",
    "UndoManager",
    "validate_circuit_data",
]
