"""
UndoManager - Manages undo/redo stacks and command execution.

Keeps a bounded history of executed element commands. Domain errors
raised by a command propagate to the caller and leave both stacks
untouched.
"""

import logging
from typing import Optional

from controllers.commands import Command

logger = logging.getLogger(__name__)


class UndoManager:
    """
    Runs commands and remembers them so they can be undone.

    The undo history is capped at ``max_depth`` entries; the oldest entry
    is dropped once the cap is reached.
    """

    def __init__(self, max_depth: int = 100):
        self.max_depth = max_depth
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []

    def _push_undo(self, command: Command) -> None:
        self._undo_stack.append(command)

        # Enforce max depth
        while len(self._undo_stack) > self.max_depth:
            self._undo_stack.pop(0)

    def execute(self, command: Command) -> None:
        """
        Execute a command and push it onto the undo stack.

        A new action invalidates the redo history.
        """
        command.execute()
        self._push_undo(command)
        self._redo_stack.clear()
        logger.debug("Executed %s", command.get_description())

    def undo(self) -> bool:
        """Undo the most recent command. Returns False when there is nothing to undo."""
        if not self._undo_stack:
            return False

        command = self._undo_stack[-1]
        command.undo()
        self._undo_stack.pop()
        self._redo_stack.append(command)
        logger.debug("Undid %s", command.get_description())
        return True

    def redo(self) -> bool:
        """Redo the most recently undone command. Returns False when there is nothing to redo."""
        if not self._redo_stack:
            return False

        command = self._redo_stack[-1]
        command.execute()
        self._redo_stack.pop()
        self._push_undo(command)
        logger.debug("Redid %s", command.get_description())
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def get_undo_description(self) -> Optional[str]:
        """Description of the command undo() would reverse, or None."""
        return self._undo_stack[-1].get_description() if self._undo_stack else None

    def get_redo_description(self) -> Optional[str]:
        """Description of the command redo() would repeat, or None."""
        return self._redo_stack[-1].get_description() if self._redo_stack else None

    def clear(self) -> None:
        """Forget all history, e.g. after loading a different circuit."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    def get_undo_count(self) -> int:
        return len(self._undo_stack)

    def get_redo_count(self) -> int:
        return len(self._redo_stack)
