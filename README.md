# pdfpicker

A library for picking PDF files out of a project's folder tree, choosing which
folders receive the results, and assembling the picked files into one combined
PDF per result folder.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `pdfpicker.project_item`

- `ProjectItem(item_id, path, parent=None)` is one node of the tree: a folder or
  a PDF file. The path is stored as an absolute path. Each item has an `id`, a
  `path`, a `name`, a `parent` (held by weak reference), `children`, and a
  mutable `order_index` (default `1.0`). Methods: `append_child`, `remove_child`,
  `child(row)`, `child_count()`, `row()`, `exists()`, `is_dir()` and
  `sort_children(descending=False)`, which sorts by `order_index`.
- `CheckState` has the members `UNCHECKED`, `PARTIALLY_CHECKED` and `CHECKED`.
- `Status` has the members `DEFAULT`, `LISTED` (the item came from saved state)
  and `NOT_LISTED` (the item was found on disk).
- `Column` has the members `NAME` and `RESULT_HOLDER`.

### `pdfpicker.check_state`

`CheckTracker` keeps the check state, result-holder mark and status of each
item.

- `set_check_state` applies a state to an item. A checked or unchecked state is
  pushed down to all of the item's descendants. Parents are then updated: a
  parent becomes partially checked when only some of its children are checked,
  or when any child is partially checked. The root is never changed.
- `set_result_holder` marks a folder as a result folder. Checking one clears the
  mark on the folders above it (up to the root) and on every folder below it.
- `checked_pdf_paths(item)` lists the fully checked files below an item, in tree
  order.
- `result_holder_paths(root)` lists the highest marked folders.

### `pdfpicker.project_model`

`ProjectModel` holds the whole tree.

- `set_project_path(path)` sets the project folder. It returns `False` if the
  folder does not exist.
- `load_project_items()` scans the folder. It keeps every `.pdf` file and every
  folder that holds PDF files somewhere below it. Hidden entries are skipped and
  entries are sorted by name. After a fresh scan, every top-level item is
  checked.
- `check_state`, `set_check_state`, `set_checked`, `result_holder_state`,
  `set_result_holder` and `status` read and change the per-item state.
  `find_item(path)` looks up an item; passing `None` returns the root.
- `make_build_file_structure()` maps each result folder to the checked PDF files
  below it.
- `new_order(parent_item, dropped_row, dragged_count)` computes the first order
  index and the step for items placed before a row.
- `move_items(parent_item, dropped_row, dragged_items)` moves or reorders items.
- `add_paths(parent_item, dropped_row, full_paths)` adds existing PDF files given
  as one `*`-joined string and returns the items it added. Files already in the
  tree are skipped.
- `project_db_file_path()` returns the path of `picker.sqlite` in the project
  root.

### `pdfpicker.builder`

- `find_title_file_name(folder)` returns the first PDF in the folder, by name,
  whose name starts with `Титул `. It returns `None` if there is no such file.
- `PdfBuilder` is the abstract base class. Every builder takes
  `merge(destination, sources)` plus optional `workers` (default 4),
  `on_progress(current, expected)`, `on_finished()` and `on_cancelled()`.
- `run(file_structure)` does the following:
  - merges each source list on a thread pool;
  - deletes an existing destination file first;
  - logs merge errors and does not raise them;
  - calls `on_finished` once every file is processed;
  - returns the scheduled destination paths.
- `cancel()` stops the build between files.
- Where each builder writes:
  - `ProjectDirectoriesBuilder` writes into the result folder itself. The file
    is named after the title file minus its prefix, or else after the folder.
  - `SeparateDirectoryBuilder(directory, merge, ...)` writes into one chosen
    directory. The path is built by string concatenation, so `directory` should
    end in `/`.
  - `ProjectAndSeparateDirectoryBuilder(directory, merge, ...)` writes into the
    result folders and then copies each file into `directory`. It does not
    overwrite a file that is already there.

### `pdfpicker.options`

- `SaveOptions` is a flag set with the members `NONE`, `PROJECT_DIRECTORIES` and
  `SEPARATE_DIRECTORY`.
- `normalize_folder(path)` appends a trailing `/`.
- `make_builder(options, separate_directory, merge)` picks the matching builder.
- `prepare_build(model, options, separate_directory, merge)` returns
  `(builder, structure)`.
- Both `make_builder` and `prepare_build` raise `BuildError` in these cases:
  - no option is set;
  - no files are picked (`prepare_build` only);
  - a separate directory is needed but was not given.

### `pdfpicker.drop` and `pdfpicker.selection`

These are helpers for front ends.

- `drop_indicator_position(x, y, rect)` classifies a drop point as a
  `DropPosition` relative to a `Rect`.
- `toggled_check_state(current)` gives the state a click switches to.
- `expanded_ids(item, is_expanded)` collects the ids of expanded items.
- `DragSelection` models a sweep selection with the right button:
  - `press`, `move`, `release` and `toggle` change the selection;
  - `drag_text(current)` returns the selected entries joined with `*`, ready
    for `ProjectModel.add_paths`.

## Usage

```python
from pdfpicker.project_model import ProjectModel
from pdfpicker.project_item import CheckState
from pdfpicker.options import SaveOptions, prepare_build


def merge(destination, sources):
    """Write the pages of every path in `sources` into `destination`."""
    ...  # use the PDF library of your choice


model = ProjectModel()
model.set_project_path("/path/to/project")
model.load_project_items()

folder = model.find_item("/path/to/project/volume-1")
model.set_result_holder(folder, CheckState.CHECKED)

builder, structure = prepare_build(model, SaveOptions.PROJECT_DIRECTORIES, None, merge)
builder.run(structure)
```

## What the package does not do

- **It does not read or write PDF files.** The `merge` callable you pass to a
  builder does that work.
- **It does not read or write `picker.sqlite`.** To restore a saved tree, set
  `ProjectModel.record_loader` to a callable. It takes the database path and
  returns record mappings with the keys `id`, `parent_id`, `path`,
  `print_checkstate`, `result_holder` and `expanded`. It returns `None` when
  nothing is saved. Items from those records are placed first. Files found on
  disk that are not in the records are added after them and marked `NOT_LISTED`.
  Saving the tree is left to the caller.
- **There is no graphical interface and no command-line program.**