"""Right-button sweep selection of file-system entries and the text a drag carries."""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional

DRAG_SEPARATOR = "*"


class _Instruction(Enum):
    NOTHING = "nothing"
    SELECT = "select"
    UNSELECT = "unselect"


class DragSelection:
    """Entries marked for dragging into the project.

    Pressing the right button on an entry selects it, or unselects it if it
    was already selected. Moving with the button held applies the same
    action to every entry passed over, until the button is released.
    """

    def __init__(self) -> None:
        self._selected: dict[str, None] = {}
        self._instruction = _Instruction.NOTHING

    @property
    def selected(self) -> tuple[str, ...]:
        """Selected entries in the order they were selected."""
        return tuple(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def is_selected(self, entry) -> bool:
        return os.fspath(entry) in self._selected

    def _apply(self, entry) -> None:
        if entry is None or self._instruction is _Instruction.NOTHING:
            return
        key = os.fspath(entry)
        if self._instruction is _Instruction.SELECT:
            self._selected[key] = None
        else:
            self._selected.pop(key, None)

    def _choose_instruction(self, entry) -> None:
        self._instruction = (
            _Instruction.UNSELECT if self.is_selected(entry) else _Instruction.SELECT
        )

    def press(self, entry) -> None:
        """Right button pressed over ``entry``."""
        if entry is not None:
            self._choose_instruction(entry)
        self._apply(entry)

    def move(self, entry) -> None:
        """Pointer moved over ``entry`` with the right button held."""
        self._apply(entry)

    def release(self) -> None:
        """Right button released: further moves change nothing."""
        self._instruction = _Instruction.NOTHING

    def toggle(self, entry) -> None:
        """Flip the selection of a single entry."""
        if entry is None:
            return
        self._choose_instruction(entry)
        self._apply(entry)

    def drag_text(self, current=None) -> Optional[str]:
        """Start a left-button drag from ``current``.

        ``current`` joins the selection; the selected entries are returned
        joined by '*' and the selection is cleared. ``None`` is returned,
        and the selection kept, when there is nothing to drag.
        """
        self._instruction = _Instruction.SELECT
        self._apply(current)
        if not self._selected:
            return None
        text = DRAG_SEPARATOR.join(self._selected)
        self._selected.clear()
        return text