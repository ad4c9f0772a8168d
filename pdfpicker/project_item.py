"""Project tree items and the enumerations shared by the project model."""

from __future__ import annotations

import os
import weakref
from enum import IntEnum
from typing import Iterator, Optional


class Column(IntEnum):
    """Columns shown for every project item."""

    NAME = 0
    RESULT_HOLDER = 1


COLUMN_COUNT = len(Column)


class Status(IntEnum):
    """Whether an item came from the saved project list or was found on disk."""

    DEFAULT = 0
    LISTED = 1
    NOT_LISTED = 2


class CheckState(IntEnum):
    """Tri-state check mark of an item."""

    UNCHECKED = 0
    PARTIALLY_CHECKED = 1
    CHECKED = 2


class ProjectItem:
    """A node of the project tree: a directory or a PDF file."""

    def __init__(self, item_id: int, path, parent: Optional[ProjectItem] = None) -> None:
        self._id = int(item_id)
        self._path = os.path.abspath(os.fspath(path))
        self.order_index = 1.0
        self._parent_ref: Optional[weakref.ref] = None
        self._children: list[ProjectItem] = []
        self.parent = parent

    def __repr__(self) -> str:
        return f"ProjectItem(id={self._id}, path={self._path!r}, order={self.order_index})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def path(self) -> str:
        """Absolute path of the item."""
        return self._path

    @property
    def name(self) -> str:
        """Last component of the item's path."""
        return os.path.basename(self._path)

    @property
    def parent(self) -> Optional[ProjectItem]:
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, parent: Optional[ProjectItem]) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def children(self) -> tuple[ProjectItem, ...]:
        return tuple(self._children)

    def __iter__(self) -> Iterator[ProjectItem]:
        return iter(list(self._children))

    def append_child(self, child: ProjectItem) -> None:
        self._children.append(child)

    def remove_child(self, item_id: int) -> None:
        """Detach the first child with the given id; unknown ids are ignored."""
        for child in self._children:
            if child.id == item_id:
                child.parent = None
                self._children.remove(child)
                break

    def child(self, row: int) -> Optional[ProjectItem]:
        return self._children[row] if 0 <= row < len(self._children) else None

    def child_count(self) -> int:
        return len(self._children)

    def row(self) -> int:
        """Position of this item among its parent's children (0 without a parent)."""
        parent = self.parent
        if parent is None:
            return 0
        for position, sibling in enumerate(parent._children):
            if sibling is self:
                return position
        raise LookupError(f"{self!r} is not among its parent's children")

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def is_dir(self) -> bool:
        return os.path.isdir(self._path)

    def sort_children(self, descending: bool = False) -> None:
        """Order the children by their order index."""
        self._children.sort(key=lambda item: item.order_index, reverse=descending)