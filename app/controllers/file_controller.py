"""
FileController - Handles circuit file I/O and session persistence.

File dialog interaction is the responsibility of the view layer.
Recent files tracking uses QSettings for cross-session persistence.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from models.circuit import CircuitModel
from models.element import TERMINAL_COUNTS
from models.registry import ElementRegistry
from PyQt6.QtCore import QSettings

logger = logging.getLogger(__name__)

SESSION_FILE = "last_session.txt"
MAX_RECENT_FILES = 10
SETTINGS_ORG = "Circuit Generator"
SETTINGS_APP = "Circuit Generator"
RECENT_FILES_KEY = "file/recent_files"


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "elements" not in data or not isinstance(data["elements"], list):
        raise ValueError("Missing or invalid 'elements' list.")
    if "links" in data and not isinstance(data["links"], list):
        raise ValueError("Invalid 'links' list.")

    counters = data.get("counters", {})
    if not isinstance(counters, dict):
        raise ValueError("Invalid 'counters' mapping.")
    for prefix, count in counters.items():
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"Counter '{prefix}' must be a non-negative integer.")

    element_ids = set()
    for i, element in enumerate(data["elements"]):
        if not isinstance(element, dict):
            raise ValueError(f"Element #{i + 1} is not an object.")
        for key in ("id", "type", "terminals"):
            if key not in element:
                raise ValueError(f"Element #{i + 1} is missing required field '{key}'.")
        terminals = element["terminals"]
        if not isinstance(terminals, list) or not terminals:
            raise ValueError(f"Element '{element['id']}' has no terminals.")
        for terminal in terminals:
            if not isinstance(terminal, dict) or "x" not in terminal or "y" not in terminal:
                raise ValueError(f"Element '{element['id']}' has invalid terminal data.")
            if not isinstance(terminal["x"], (int, float)) or not isinstance(terminal["y"], (int, float)):
                raise ValueError(f"Element '{element['id']}' terminal values must be numeric.")
        expected = TERMINAL_COUNTS.get(element["type"])
        if expected is not None and len(terminals) != expected:
            raise ValueError(
                f"Element '{element['id']}' needs {expected} terminals, found {len(terminals)}."
            )
        if element["id"] in element_ids:
            raise ValueError(f"Element id '{element['id']}' appears more than once.")
        element_ids.add(element["id"])

    for i, link in enumerate(data.get("links", [])):
        if not isinstance(link, list) or len(link) != 2:
            raise ValueError(f"Link #{i + 1} must be a pair of element ids.")
        for element_id in link:
            if element_id not in element_ids:
                raise ValueError(f"Link #{i + 1} references unknown element '{element_id}'.")


class FileController:
    """
    Manages circuit file I/O and session persistence.

    Handles saving/loading circuit data as JSON, exporting the plain-text
    description, and tracking the current file path for quick-save and
    session restore.
    """

    def __init__(
        self,
        model: Optional[CircuitModel] = None,
        circuit_ctrl=None,
        registry: Optional[ElementRegistry] = None,
        session_file: str = SESSION_FILE,
    ):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        if registry is None and circuit_ctrl is not None:
            registry = circuit_ctrl.registry
        self.registry = registry
        self.current_file: Optional[Path] = None
        self._session_file = session_file

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        self._save_session()
        self.add_recent_file(filepath)
        logger.info("Saved circuit to %s", filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_saved", None)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates the JSON structure, rebuilds the model (replaying every
        saved connection) and updates the current model in place so views
        holding a reference stay connected.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If the file structure is invalid or a saved
                connection is rejected.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            data = json.load(f)

        validate_circuit_data(data)
        new_model = CircuitModel.from_dict(data, self.registry)

        self.model.clear()
        self.model.elements = new_model.elements
        self.model.connections = new_model.connections
        self.model.links = new_model.links
        self.model.element_counter = new_model.element_counter

        self.current_file = filepath
        self._save_session()
        self.add_recent_file(filepath)
        logger.info("Loaded circuit from %s (%d elements)", filepath, len(self.model.elements))

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_loaded", None)

    def export_description(self, filepath) -> None:
        """Write the circuit's plain-text description (UTF-8)."""
        filepath = Path(filepath)
        filepath.write_text(self.model.describe() + "\n", encoding="utf-8")

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "Circuit Generator") -> str:
        """Get window title based on current file."""
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base

    def _save_session(self) -> None:
        """Save current file path for session restore."""
        try:
            with open(self._session_file, "w") as f:
                f.write(os.path.abspath(str(self.current_file)) if self.current_file else "")
        except OSError as e:
            logger.debug("Could not write session file %s: %s", self._session_file, e)

    def load_last_session(self) -> Optional[Path]:
        """Return the last opened file path if it still exists, else None."""
        try:
            with open(self._session_file, "r") as f:
                path_str = f.read().strip()
        except OSError:
            return None
        if path_str:
            path = Path(path_str)
            if path.exists():
                return path
        return None

    def get_recent_files(self) -> List[str]:
        """
        Get list of recently opened files from QSettings.

        Returns:
            List of file paths (most recent first), with non-existent files removed.
        """
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        recent = settings.value(RECENT_FILES_KEY, [])

        if not isinstance(recent, list):
            recent = []

        existing = [f for f in recent if os.path.exists(f)]

        if len(existing) != len(recent):
            settings.setValue(RECENT_FILES_KEY, existing)

        return existing

    def add_recent_file(self, filepath: Path) -> None:
        """Move a file to the front of the recent files list."""
        filepath_str = str(Path(filepath).absolute())
        recent = self.get_recent_files()

        if filepath_str in recent:
            recent.remove(filepath_str)
        recent.insert(0, filepath_str)

        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        settings.setValue(RECENT_FILES_KEY, recent[:MAX_RECENT_FILES])

    def clear_recent_files(self) -> None:
        """Clear the recent files list."""
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        settings.setValue(RECENT_FILES_KEY, [])
