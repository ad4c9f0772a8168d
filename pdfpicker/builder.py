"""Merging the checked PDFs of each result holder into one document."""

from __future__ import annotations

import abc
import logging
import os
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

TITLE_PREFIX = "Титул "
DEFAULT_WORKERS = 4

Merge = Callable[[str, Iterator[str]], None]
ProgressCallback = Callable[[int, int], None]
Callback = Callable[[], None]


class _Cancelled(Exception):
    """Raised into a running merge when the build is cancelled."""


def find_title_file_name(parent_path) -> Optional[str]:
    """Name of the first PDF in ``parent_path`` whose name starts with the title prefix."""
    parent_path = os.fspath(parent_path)
    if not os.path.isdir(parent_path):
        return None
    try:
        with os.scandir(parent_path) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if entry.name.lower().endswith(".pdf") and entry.is_file()
            )
    except OSError:
        return None
    return next((name for name in names if name.startswith(TITLE_PREFIX)), None)


class PdfBuilder(abc.ABC):
    """Merges lists of PDF files into one destination file per result holder.

    ``merge(destination, sources)`` writes the merged document; it should
    consume ``sources`` lazily, one file at a time, so that progress is
    reported and cancellation takes effect between files.
    """

    def __init__(
        self,
        merge: Merge,
        workers: int = DEFAULT_WORKERS,
        on_progress: Optional[ProgressCallback] = None,
        on_finished: Optional[Callback] = None,
        on_cancelled: Optional[Callback] = None,
    ) -> None:
        if workers < 1:
            raise ValueError("at least one worker is required")
        self._merge = merge
        self._workers = workers
        self.on_progress = on_progress
        self.on_finished = on_finished
        self.on_cancelled = on_cancelled
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._expected = 0
        self._current = 0

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    @abc.abstractmethod
    def destination_file_path(self, parent_path: str) -> Optional[str]:
        """Path of the merged file for ``parent_path``; ``None`` to skip it."""

    def run(self, file_structure: Mapping[str, Iterable[str]]) -> list[str]:
        """Merge every source list; return the destination paths scheduled."""
        if not file_structure:
            return []
        structure = {parent: list(sources) for parent, sources in file_structure.items()}
        with self._lock:
            self._expected = sum(len(sources) for sources in structure.values())
            self._current = 0

        jobs: list[tuple[str, list[str]]] = []
        for parent, sources in structure.items():
            if not sources:
                continue
            destination = self.destination_file_path(parent)
            if not destination:
                continue
            jobs.append((destination, sources))

        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            for destination, sources in jobs:
                pool.submit(self._build_one, destination, sources)

        with self._lock:
            complete = self._current == self._expected
        if complete and not self.cancelled:
            self._all_files_processed()
        return [destination for destination, _ in jobs]

    def cancel(self) -> None:
        """Stop the build; files not yet started are left alone."""
        self._stopped.set()
        if self.on_cancelled is not None:
            self.on_cancelled()

    def _build_one(self, destination: str, sources: list[str]) -> None:
        if self.cancelled:
            return
        try:
            if os.path.isfile(destination):
                os.remove(destination)
            self._merge(destination, self._track(sources))
        except _Cancelled:
            return
        except Exception:
            logger.exception("building %s failed", destination)

    def _track(self, sources: list[str]) -> Iterator[str]:
        for path in sources:
            yield path
            if self.cancelled:
                raise _Cancelled()
            self._file_processed()

    def _file_processed(self) -> None:
        with self._lock:
            self._current += 1
            current, expected = self._current, self._expected
        if self.on_progress is not None:
            self.on_progress(current, expected)

    def _all_files_processed(self) -> None:
        if self.on_finished is not None:
            self.on_finished()


class ProjectDirectoriesBuilder(PdfBuilder):
    """Writes each merged file into its own project directory."""

    def destination_file_path(self, parent_path: str) -> Optional[str]:
        title = find_title_file_name(parent_path)
        if title:
            return parent_path + "/" + title.replace(TITLE_PREFIX, "")
        slash = parent_path.rfind("/")
        tail = parent_path[slash:] if slash >= 0 else parent_path
        return parent_path + tail + ".pdf"


class SeparateDirectoryBuilder(PdfBuilder):
    """Writes every merged file into one chosen directory."""

    def __init__(
        self,
        directory: str,
        merge: Merge,
        workers: int = DEFAULT_WORKERS,
        on_progress: Optional[ProgressCallback] = None,
        on_finished: Optional[Callback] = None,
        on_cancelled: Optional[Callback] = None,
    ) -> None:
        super().__init__(merge, workers, on_progress, on_finished, on_cancelled)
        self.directory = directory

    def destination_file_path(self, parent_path: str) -> Optional[str]:
        if not self.directory:
            return None
        title = find_title_file_name(parent_path)
        if title:
            return self.directory + title.replace(TITLE_PREFIX, "")
        if parent_path.endswith(":"):
            colon = parent_path.rfind(":")
            return self.directory + parent_path[: len(parent_path) - colon] + ".pdf"
        slash = parent_path.rfind("/")
        return self.directory + parent_path[slash + 1:] + ".pdf"


class ProjectAndSeparateDirectoryBuilder(ProjectDirectoriesBuilder):
    """Writes into the project directories, then copies the results to one directory."""

    def __init__(
        self,
        directory: str,
        merge: Merge,
        workers: int = DEFAULT_WORKERS,
        on_progress: Optional[ProgressCallback] = None,
        on_finished: Optional[Callback] = None,
        on_cancelled: Optional[Callback] = None,
    ) -> None:
        super().__init__(merge, workers, on_progress, on_finished, on_cancelled)
        self.directory = directory
        self._destinations: list[str] = []

    def destination_file_path(self, parent_path: str) -> Optional[str]:
        destination = super().destination_file_path(parent_path)
        self._destinations.append(destination)
        return destination

    def run(self, file_structure: Mapping[str, Iterable[str]]) -> list[str]:
        self._destinations = []
        return super().run(file_structure)

    def _all_files_processed(self) -> None:
        for destination in self._destinations:
            if self.cancelled:
                return
            target = os.path.join(self.directory, os.path.basename(destination))
            if os.path.exists(target):
                continue
            try:
                shutil.copyfile(destination, target)
            except OSError:
                logger.exception("copying %s failed", destination)
        super()._all_files_processed()