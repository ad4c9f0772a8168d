"""Save options of a build and the choice of builder they lead to."""

from __future__ import annotations

from enum import IntFlag
from typing import Optional

from pdfpicker.builder import (
    Merge,
    PdfBuilder,
    ProjectAndSeparateDirectoryBuilder,
    ProjectDirectoriesBuilder,
    SeparateDirectoryBuilder,
)


class SaveOptions(IntFlag):
    """Where merged files are written."""

    NONE = 0x0
    PROJECT_DIRECTORIES = 0x1
    SEPARATE_DIRECTORY = 0x2


class BuildError(Exception):
    """A build cannot be started."""


def normalize_folder(path) -> str:
    """Folder path ending in '/', or an empty string if none was given."""
    if not path:
        return ""
    path = str(path)
    return path if path.endswith("/") else path + "/"


def _require_directory(separate_directory) -> str:
    directory = normalize_folder(separate_directory)
    if not directory:
        raise BuildError("no directory chosen for the merged files")
    return directory


def make_builder(options, separate_directory: Optional[str], merge: Merge) -> PdfBuilder:
    """Builder matching ``options``; raises BuildError if none fits."""
    options = SaveOptions(options)
    if options == SaveOptions.NONE:
        raise BuildError("no save options selected")
    if options == SaveOptions.PROJECT_DIRECTORIES:
        return ProjectDirectoriesBuilder(merge)
    if options == SaveOptions.SEPARATE_DIRECTORY:
        return SeparateDirectoryBuilder(_require_directory(separate_directory), merge)
    if (
        SaveOptions.PROJECT_DIRECTORIES in options
        and SaveOptions.SEPARATE_DIRECTORY in options
    ):
        return ProjectAndSeparateDirectoryBuilder(
            _require_directory(separate_directory), merge
        )
    raise BuildError("cannot build with these options")


def prepare_build(model, options, separate_directory: Optional[str], merge: Merge):
    """Check the model and options; return the builder and the file structure."""
    options = SaveOptions(options)
    if options == SaveOptions.NONE:
        raise BuildError("no save options selected")
    structure = model.make_build_file_structure()
    if not structure:
        raise BuildError("no files selected for building")
    builder = make_builder(options, separate_directory, merge)
    return builder, structure