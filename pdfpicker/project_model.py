"""The project tree: loading, check marks, result holders and reordering."""

from __future__ import annotations

import os
from typing import Callable, Iterable, Mapping, Optional

from pdfpicker.check_state import CheckTracker
from pdfpicker.project_item import CheckState, ProjectItem, Status

DB_FILE_NAME = "picker.sqlite"

RecordLoader = Callable[[str], Optional[Iterable[Mapping]]]


def _subdirectories(path: str) -> list[str]:
    try:
        with os.scandir(path) as entries:
            names = [
                entry.path
                for entry in entries
                if not entry.name.startswith(".") and entry.is_dir()
            ]
    except OSError:
        return []
    return sorted(names, key=lambda p: os.path.basename(p).lower())


def _pdf_files(path: str) -> list[str]:
    try:
        with os.scandir(path) as entries:
            names = [
                entry.path
                for entry in entries
                if not entry.name.startswith(".")
                and entry.name.lower().endswith(".pdf")
                and entry.is_file()
            ]
    except OSError:
        return []
    return sorted(names, key=lambda p: os.path.basename(p).lower())


def _print_state(value) -> CheckState:
    value = int(value or 0)
    if value == 0:
        return CheckState.UNCHECKED
    if value == 1:
        return CheckState.PARTIALLY_CHECKED
    return CheckState.CHECKED


class ProjectModel:
    """Holds the tree of project directories and PDF files.

    Saved state is obtained through ``record_loader``: a callable that takes
    the project database path and returns an iterable of mappings with the
    keys ``id``, ``parent_id``, ``path``, ``print_checkstate``,
    ``result_holder`` and ``expanded``, or ``None`` when nothing is saved.
    """

    def __init__(self) -> None:
        self.root = ProjectItem(0, "")
        self.record_loader: Optional[RecordLoader] = None
        self.expanded_items: list[ProjectItem] = []
        self._tracker = CheckTracker()
        self._item_paths: dict[str, ProjectItem] = {}
        self._id_max = 0
        self._order = 0.0

    def set_project_path(self, root_path) -> bool:
        """Use ``root_path`` as the project directory; False if it does not exist."""
        candidate = ProjectItem(0, root_path)
        if not candidate.exists():
            return False
        self.root = candidate
        return True

    def load_project_items(self) -> None:
        """Load items from saved state, or scan the file system and check everything."""
        self._cleanup()
        if self._read_saved():
            return
        self._order = self.root.order_index
        self._scan(self.root)
        for child in self.root:
            self._tracker.set_check_state(child, CheckState.CHECKED)

    def project_db_file_path(self) -> str:
        return os.path.join(self.root.path, DB_FILE_NAME)

    def find_item(self, path) -> Optional[ProjectItem]:
        """Item at ``path``; ``None`` as the path means the root."""
        if path is None:
            return self.root
        return self._item_paths.get(os.path.abspath(os.fspath(path)))

    def check_state(self, item: ProjectItem) -> CheckState:
        return self._tracker.check_state(item)

    def set_check_state(self, item: ProjectItem, state) -> None:
        self._tracker.set_check_state(item, state)

    def set_checked(self, items: Iterable[ProjectItem], state) -> None:
        for item in items:
            self._tracker.set_check_state(item, state)

    def result_holder_state(self, item: ProjectItem) -> CheckState:
        if not item.is_dir():
            return CheckState.UNCHECKED
        return self._tracker.result_holder_state(item)

    def set_result_holder(self, item: ProjectItem, state) -> None:
        self._tracker.set_result_holder(item, state)

    def status(self, item: ProjectItem) -> Status:
        return self._tracker.status(item)

    def result_holder_paths(self) -> list[str]:
        return self._tracker.result_holder_paths(self.root)

    def make_build_file_structure(self) -> dict[str, list[str]]:
        """Map each result-holder directory to the checked PDFs below it."""
        result: dict[str, list[str]] = {}
        for path in self.result_holder_paths():
            holder = self._item_paths.get(path)
            if holder is None:
                continue
            result[holder.path] = self._tracker.checked_pdf_paths(holder)
        return result

    def new_order(
        self,
        parent_item: Optional[ProjectItem],
        dropped_row: Optional[int],
        dragged_count: int,
    ) -> tuple[float, float]:
        """First order index and step for items dropped before ``dropped_row``.

        ``None`` or a row past the end means the items go to the end.
        ``(0.0, 0.0)`` means nothing can be placed.
        """
        if parent_item is None or not dragged_count:
            return 0.0, 0.0
        dropped = parent_item.child(dropped_row) if dropped_row is not None else None
        before = (
            parent_item.child(dropped_row - 1)
            if dropped is not None and dropped_row is not None
            else None
        )
        if dropped is None:
            last = parent_item.child(parent_item.child_count() - 1)
            order = last.order_index if last is not None else parent_item.order_index
            step = 1.0
        else:
            order = before.order_index if before is not None else parent_item.order_index
            step = (dropped.order_index - order) / (dragged_count + 1)
        return order + step, step

    def move_items(
        self,
        parent_item: Optional[ProjectItem],
        dropped_row: Optional[int],
        dragged_items: Iterable[ProjectItem],
    ) -> None:
        """Move items under ``parent_item`` before ``dropped_row``."""
        dragged = list(dragged_items)
        if not dragged:
            return
        parent = parent_item if parent_item is not None else self.root
        order, step = self.new_order(parent, dropped_row, len(dragged))
        if order == 0.0 and step == 0.0:
            return
        for item in dragged:
            item.order_index = order
            order += step
            old_parent = item.parent
            if old_parent is not parent:
                if old_parent is not None:
                    old_parent.remove_child(item.id)
                self._insert_item(item, parent)
        parent.sort_children()

    def add_paths(
        self,
        parent_item: Optional[ProjectItem],
        dropped_row: Optional[int],
        full_paths: str,
    ) -> list[ProjectItem]:
        """Add PDF files given as a '*'-joined list; return the items added."""
        if not full_paths:
            return []
        parent = parent_item if parent_item is not None else self.root
        paths = full_paths.split("*")
        order, step = self.new_order(parent, dropped_row, len(paths))
        if order == 0.0 and step == 0.0:
            return []
        added: list[ProjectItem] = []
        for path in paths:
            self._id_max += 1
            item = ProjectItem(self._id_max, path, parent)
            if not item.exists():
                continue
            if item.is_dir() or not item.name.lower().endswith(".pdf"):
                continue
            if item.path in self._item_paths:
                continue
            item.order_index = order
            order += step
            self._insert_item(item, parent)
            added.append(item)
        parent.sort_children()
        return added

    def _cleanup(self) -> None:
        self._id_max = 0
        self._tracker.clear()
        self._item_paths.clear()
        self.expanded_items = []

    def _insert_item(self, item: ProjectItem, parent: Optional[ProjectItem] = None) -> None:
        parent = parent if parent is not None else self.root
        item.parent = parent
        parent.append_child(item)
        self._item_paths[item.path] = item

    def _read_saved(self) -> bool:
        if self.record_loader is None:
            return False
        records = self.record_loader(self.project_db_file_path())
        if records is None:
            return False
        records = list(records)
        if not records:
            return True

        items_by_id: dict[int, ProjectItem] = {self.root.id: self.root}
        self._order = self.root.order_index
        for record in records:
            path = record.get("path") or ""
            if not path:
                continue
            item_id = int(record.get("id", 0))
            parent = items_by_id.get(int(record.get("parent_id", 0)), self.root)
            item = ProjectItem(item_id, path, parent)
            if not item.exists():
                continue
            self._order += 1
            item.order_index = self._order
            self._insert_item(item, parent)
            items_by_id[item_id] = item

            self._tracker._checked[item_id] = _print_state(record.get("print_checkstate"))
            self._tracker._result_holders[item_id] = (
                CheckState.UNCHECKED
                if int(record.get("result_holder") or 0) == 0
                else CheckState.CHECKED
            )
            if not item.is_dir():
                self._tracker.set_status(item, Status.LISTED)
            if record.get("expanded"):
                self.expanded_items.append(item)
            self._id_max = max(self._id_max, item_id)

        self._scan(self.root)
        return True

    def _scan(self, item: ProjectItem) -> bool:
        """Add child directories holding PDFs and PDF files not yet known."""
        pdf_paths = _pdf_files(item.path)
        found_pdf = False
        for child_path in _subdirectories(item.path):
            child = self._item_paths.get(child_path)
            if child is None:
                self._id_max += 1
                child = ProjectItem(self._id_max, child_path, item)
                self._order += 1
                child.order_index = self._order
            if not self._scan(child):
                continue
            if child.path not in self._item_paths:
                self._insert_item(child, item)
            found_pdf = True

        for pdf_path in pdf_paths:
            if os.path.abspath(pdf_path) in self._item_paths:
                continue
            self._id_max += 1
            child = ProjectItem(self._id_max, pdf_path, item)
            self._order += 1
            child.order_index = self._order
            self._insert_item(child, item)
            self._tracker.set_status(child, Status.NOT_LISTED)

        return bool(pdf_paths) or found_pdf