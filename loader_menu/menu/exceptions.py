"""Exceptions raised while building menu trees.

These are authoring errors. Nothing in the running engine raises or
catches them: a bad menu tree is rejected when it is constructed.

Exception Hierarchy:
    MenuError (base)
        ├── MenuDefinitionError
        └── MenuCycleError
"""


class MenuError(Exception):
    """Base exception for menu tree errors."""



class MenuDefinitionError(MenuError, ValueError):
    """A menu entry is missing a field its entry type requires."""

    def __init__(self, entry_type: str, reason: str):
        self.entry_type = entry_type
        self.reason = reason
        super().__init__(f"Invalid {entry_type} entry: {reason}")


class MenuCycleError(MenuError):
    """A submenu transitively includes itself."""

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Submenu cycle: {' -> '.join(path)}")
