"""Check marks, result holders and statuses of project items."""

from __future__ import annotations

from pdfpicker.project_item import CheckState, ProjectItem, Status


def _is_top_level_or_root(item: ProjectItem) -> bool:
    parent = item.parent
    return parent is None


class CheckTracker:
    """Keeps per-item check states and propagates them through the tree.

    The root item (the one without a parent) is never updated by propagation.
    """

    def __init__(self) -> None:
        self._checked: dict[int, CheckState] = {}
        self._result_holders: dict[int, CheckState] = {}
        self._statuses: dict[int, Status] = {}

    def clear(self) -> None:
        self._checked.clear()
        self._result_holders.clear()
        self._statuses.clear()

    def check_state(self, item: ProjectItem) -> CheckState:
        return self._checked.get(item.id, CheckState.UNCHECKED)

    def set_check_state(self, item: ProjectItem, state) -> None:
        """Set an item's check mark and update its descendants and ancestors."""
        self._checked[item.id] = CheckState(state)
        self._propagate(item)

    def _propagate(self, item: ProjectItem) -> None:
        state = self.check_state(item)
        if state in (CheckState.CHECKED, CheckState.UNCHECKED):
            for child in item:
                if self.check_state(child) != state:
                    self.set_check_state(child, state)

        parent = item.parent
        if parent is None or parent.parent is None:
            return

        siblings = parent.children
        checked = sum(1 for s in siblings if self.check_state(s) != CheckState.UNCHECKED)
        partial = any(self.check_state(s) == CheckState.PARTIALLY_CHECKED for s in siblings)

        if partial or 0 < checked < len(siblings):
            self.set_check_state(parent, CheckState.PARTIALLY_CHECKED)
        elif checked == 0:
            if self.check_state(parent) != CheckState.UNCHECKED:
                self.set_check_state(parent, CheckState.UNCHECKED)
        elif checked == len(siblings):
            if self.check_state(parent) != CheckState.CHECKED:
                self.set_check_state(parent, CheckState.CHECKED)

    def result_holder_state(self, item: ProjectItem) -> CheckState:
        return self._result_holders.get(item.id, CheckState.UNCHECKED)

    def set_result_holder(self, item: ProjectItem, state) -> None:
        """Mark a directory as the place a merged PDF goes.

        Checking one clears the mark on all its ancestors and descendants.
        """
        state = CheckState(state)
        if state == CheckState.CHECKED:
            ancestor = item.parent
            while ancestor is not None and ancestor.parent is not None:
                self._result_holders[ancestor.id] = CheckState.UNCHECKED
                ancestor = ancestor.parent
            stack = list(item.children)
            while stack:
                descendant = stack.pop()
                self._result_holders[descendant.id] = CheckState.UNCHECKED
                stack.extend(descendant.children)
        self._result_holders[item.id] = state

    def status(self, item: ProjectItem) -> Status:
        return self._statuses.get(item.id, Status.DEFAULT)

    def set_status(self, item: ProjectItem, status) -> None:
        self._statuses[item.id] = Status(status)

    def checked_pdf_paths(self, item: ProjectItem) -> list[str]:
        """Paths of fully checked files below an item, in tree order."""
        result: list[str] = []
        for child in item:
            state = self.check_state(child)
            if state == CheckState.UNCHECKED:
                continue
            if child.is_dir():
                result.extend(self.checked_pdf_paths(child))
            elif state == CheckState.CHECKED:
                result.append(child.path)
        return result

    def result_holder_paths(self, root: ProjectItem) -> list[str]:
        """Paths of the highest directories marked as result holders."""
        result: list[str] = []
        for child in root:
            if not child.is_dir():
                continue
            if self.result_holder_state(child) == CheckState.CHECKED:
                result.append(child.path)
                continue
            result.extend(self.result_holder_paths(child))
        return result