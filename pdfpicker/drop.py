"""Drop placement and expansion helpers for the project tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from pdfpicker.project_item import CheckState, ProjectItem

DROP_MARGIN = 2


class DropPosition(Enum):
    """Where a dragged entry lands relative to the item under the cursor."""

    ABOVE_ITEM = "above"
    BELOW_ITEM = "below"
    ON_ITEM = "on"
    ON_VIEWPORT = "viewport"


@dataclass(frozen=True)
class Rect:
    """An integer rectangle whose right and bottom edges are inclusive."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width - 1

    @property
    def bottom(self) -> int:
        return self.top + self.height - 1

    def contains(self, x: int, y: int) -> bool:
        """True if the point lies strictly inside, not on an edge."""
        return self.left < x < self.right and self.top < y < self.bottom


def drop_indicator_position(x: int, y: int, rect: Rect) -> DropPosition:
    """Classify a drop at ``(x, y)`` over the item occupying ``rect``."""
    if y - rect.top < DROP_MARGIN:
        return DropPosition.ABOVE_ITEM
    if rect.bottom - y < DROP_MARGIN:
        return DropPosition.BELOW_ITEM
    if rect.contains(x, y):
        return DropPosition.ON_ITEM
    return DropPosition.ON_VIEWPORT


def toggled_check_state(current) -> CheckState:
    """State a click on a check box switches to."""
    if CheckState(current) in (CheckState.CHECKED, CheckState.PARTIALLY_CHECKED):
        return CheckState.UNCHECKED
    return CheckState.CHECKED


def expanded_ids(item: ProjectItem, is_expanded: Callable[[ProjectItem], bool]) -> set[int]:
    """Ids of expanded items below ``item`` reachable through expanded parents.

    ``item`` itself is the root and is always descended into.
    """
    result: set[int] = set()
    stack = list(item.children)
    while stack:
        current = stack.pop()
        if not is_expanded(current):
            continue
        result.add(current.id)
        stack.extend(current.children)
    return result