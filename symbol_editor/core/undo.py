from typing import Optional

from loguru import logger

from symbol_editor.core.command import Command


class UndoManager:
    def __init__(self):
        self.undo_stack: list[Command] = []
        self.redo_stack: list[Command] = []
        self._clean_index: Optional[int] = 0

    @property
    def index(self) -> int:
        """Number of commands currently applied."""
        return len(self.undo_stack)

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        self._clean_index = 0

    def add_command(self, command: Command):
        """
        Adds a command to the undo stack.
        This is called after a command has been executed.
        """
        if self._clean_index is not None and self._clean_index > self.index:
            # The saved state lived in the redo history that is being dropped.
            self._clean_index = None
        self.undo_stack.append(command)
        self.redo_stack.clear()
        logger.debug("Pushed '{}' ({} on undo stack)", command.name, self.index)

    def undo(self):
        """
        Undoes the last command.
        """
        if not self.undo_stack:
            return
        command = self.undo_stack.pop()
        command.undo()
        self.redo_stack.append(command)
        logger.debug("Undid '{}'", command.name)

    def redo(self):
        """
        Redoes the last undone command.
        """
        if not self.redo_stack:
            return
        command = self.redo_stack.pop()
        command.execute()
        self.undo_stack.append(command)
        logger.debug("Redid '{}'", command.name)

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo_text(self) -> str:
        return self.undo_stack[-1].name if self.undo_stack else ""

    def redo_text(self) -> str:
        return self.redo_stack[-1].name if self.redo_stack else ""

    def set_clean(self):
        self._clean_index = self.index

    def is_clean(self) -> bool:
        return self._clean_index == self.index


class UndoGroup:
    """Routes undo and redo to whichever of several independent stacks is active.

    The editor and the symbol library each own an :class:`UndoManager`; the
    menu actions talk to the group.
    """

    def __init__(self):
        self._managers: dict[str, UndoManager] = {}
        self._active: Optional[str] = None

    def add_manager(self, name: str, manager: UndoManager):
        self._managers[name] = manager
        if self._active is None:
            self._active = name

    def remove_manager(self, name: str):
        self._managers.pop(name, None)
        if self._active == name:
            self._active = next(iter(self._managers), None)

    def set_active(self, name: str):
        if name not in self._managers:
            raise KeyError(name)
        self._active = name

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    @property
    def active(self) -> Optional[UndoManager]:
        if self._active is None:
            return None
        return self._managers[self._active]

    def undo(self):
        if self.active is not None:
            self.active.undo()

    def redo(self):
        if self.active is not None:
            self.active.redo()

    def can_undo(self) -> bool:
        return self.active is not None and self.active.can_undo()

    def can_redo(self) -> bool:
        return self.active is not None and self.active.can_redo()

    def undo_text(self) -> str:
        return self.active.undo_text() if self.active is not None else ""

    def redo_text(self) -> str:
        return self.active.redo_text() if self.active is not None else ""

    def is_clean(self) -> bool:
        return self.active is None or self.active.is_clean()
