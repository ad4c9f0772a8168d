import os
from pathlib import Path

import pytest

from pdfpicker.builder import (
    ProjectAndSeparateDirectoryBuilder,
    ProjectDirectoriesBuilder,
    SeparateDirectoryBuilder,
    find_title_file_name,
)


def concat_merge(destination, sources):
    with open(destination, "wb") as out:
        for source in sources:
            out.write(Path(source).read_bytes())


@pytest.fixture
def section(tmp_path):
    sec = tmp_path / "proj" / "sec"
    sec.mkdir(parents=True)
    for name, data in [("1.pdf", b"one"), ("2.pdf", b"two"), ("3.pdf", b"three")]:
        (sec / name).write_bytes(data)
    return sec


def paths(section, *names):
    return [str(section / name) for name in names]


def test_find_title_file_name(section):
    (section / "Титул Отчёт.pdf").write_bytes(b"t")
    assert find_title_file_name(section) == "Титул Отчёт.pdf"


def test_find_title_missing(section, tmp_path):
    assert find_title_file_name(section) is None
    assert find_title_file_name(tmp_path / "absent") is None


def test_project_destination_without_title(section):
    builder = ProjectDirectoriesBuilder(concat_merge)
    parent = str(section).replace(os.sep, "/")
    assert builder.destination_file_path(parent) == parent + "/sec.pdf"


def test_project_destination_with_title(section):
    (section / "Титул Отчёт.pdf").write_bytes(b"t")
    builder = ProjectDirectoriesBuilder(concat_merge)
    assert builder.destination_file_path(str(section)) == str(section) + "/Отчёт.pdf"


def test_separate_destination(section):
    builder = SeparateDirectoryBuilder("/out/", concat_merge)
    assert builder.destination_file_path("/x/y/Section") == "/out/Section.pdf"
    assert builder.destination_file_path("C:") == "/out/C.pdf"


def test_separate_destination_with_title(section):
    (section / "Титул Отчёт.pdf").write_bytes(b"t")
    builder = SeparateDirectoryBuilder("/out/", concat_merge)
    assert builder.destination_file_path(str(section)) == "/out/Отчёт.pdf"


def test_separate_destination_without_directory():
    assert SeparateDirectoryBuilder("", concat_merge).destination_file_path("/x/y") is None


def test_run_merges_in_order(section):
    progress, finished = [], []
    builder = ProjectDirectoriesBuilder(
        concat_merge,
        workers=1,
        on_progress=lambda done, total: progress.append((done, total)),
        on_finished=lambda: finished.append(True),
    )
    parent = str(section)
    scheduled = builder.run({parent: paths(section, "1.pdf", "2.pdf")})
    destination = builder.destination_file_path(parent)
    assert scheduled == [destination]
    assert Path(destination).read_bytes() == b"one" + b"two"
    assert progress == [(1, 2), (2, 2)]
    assert finished == [True]


def test_run_replaces_existing_destination(section):
    builder = ProjectDirectoriesBuilder(concat_merge, workers=1)
    parent = str(section)
    destination = builder.destination_file_path(parent)
    Path(destination).write_bytes(b"old content")
    builder.run({parent: paths(section, "2.pdf")})
    assert Path(destination).read_bytes() == b"two"


def test_run_empty_structure_does_nothing():
    finished = []
    builder = ProjectDirectoriesBuilder(concat_merge, on_finished=lambda: finished.append(1))
    assert builder.run({}) == []
    assert finished == []


def test_run_skips_empty_source_lists(section, tmp_path):
    builder = ProjectDirectoriesBuilder(concat_merge, workers=1)
    other = str(tmp_path / "proj")
    scheduled = builder.run({str(section): paths(section, "1.pdf"), other: []})
    assert scheduled == [builder.destination_file_path(str(section))]


def test_cancel_stops_after_current_file(section):
    progress, finished, cancelled = [], [], []

    def on_progress(done, total):
        progress.append((done, total))
        builder.cancel()

    builder = ProjectDirectoriesBuilder(
        concat_merge,
        workers=1,
        on_progress=on_progress,
        on_finished=lambda: finished.append(1),
        on_cancelled=lambda: cancelled.append(1),
    )
    builder.run({str(section): paths(section, "1.pdf", "2.pdf", "3.pdf")})
    assert progress == [(1, 3)]
    assert cancelled == [1]
    assert finished == []
    assert builder.cancelled is True


def test_failing_merge_is_contained(section):
    finished = []

    def broken(destination, sources):
        raise RuntimeError("broken")

    builder = ProjectDirectoriesBuilder(broken, on_finished=lambda: finished.append(1))
    scheduled = builder.run({str(section): paths(section, "1.pdf")})
    assert len(scheduled) == 1
    assert finished == []


def test_workers_must_be_positive():
    with pytest.raises(ValueError):
        ProjectDirectoriesBuilder(concat_merge, workers=0)


def test_project_and_separate_copies_results(section, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    finished = []
    builder = ProjectAndSeparateDirectoryBuilder(
        str(out) + "/", concat_merge, workers=2, on_finished=lambda: finished.append(1)
    )
    scheduled = builder.run({str(section): paths(section, "1.pdf", "3.pdf")})
    assert len(scheduled) == 1
    merged = Path(scheduled[0])
    copied = out / merged.name
    assert copied.read_bytes() == merged.read_bytes() == b"one" + b"three"
    assert finished == [1]