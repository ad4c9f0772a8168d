from pdfpicker.selection import DragSelection


def test_press_selects_entry():
    sel = DragSelection()
    sel.press("/a.pdf")
    assert sel.is_selected("/a.pdf")
    assert sel.selected == ("/a.pdf",)


def test_press_on_selected_entry_unselects_it():
    sel = DragSelection()
    sel.press("/a.pdf")
    sel.release()
    sel.press("/a.pdf")
    assert not sel.is_selected("/a.pdf")
    assert len(sel) == 0


def test_sweep_selects_entries_passed_over():
    sel = DragSelection()
    sel.press("/a.pdf")
    sel.move("/b.pdf")
    sel.move("/c.pdf")
    sel.release()
    assert sel.selected == ("/a.pdf", "/b.pdf", "/c.pdf")


def test_sweep_starting_on_selected_entry_unselects():
    sel = DragSelection()
    for entry in ("/a.pdf", "/b.pdf", "/c.pdf"):
        sel.toggle(entry)
    sel.press("/a.pdf")
    sel.move("/b.pdf")
    sel.release()
    assert sel.selected == ("/c.pdf",)


def test_move_after_release_changes_nothing():
    sel = DragSelection()
    sel.press("/a.pdf")
    sel.release()
    sel.move("/b.pdf")
    assert not sel.is_selected("/b.pdf")
    assert len(sel) == 1


def test_move_without_press_changes_nothing():
    sel = DragSelection()
    sel.move("/a.pdf")
    assert len(sel) == 0


def test_toggle_flips_selection():
    sel = DragSelection()
    sel.toggle("/a.pdf")
    assert sel.is_selected("/a.pdf")
    sel.toggle("/a.pdf")
    assert not sel.is_selected("/a.pdf")


def test_drag_text_joins_with_star_and_clears():
    sel = DragSelection()
    sel.press("/x/a.pdf")
    sel.move("/x/b.pdf")
    sel.release()
    text = sel.drag_text()
    assert text == "/x/a.pdf*/x/b.pdf"
    assert len(sel) == 0


def test_drag_text_includes_current_entry():
    sel = DragSelection()
    sel.toggle("/x/a.pdf")
    text = sel.drag_text("/x/c.pdf")
    assert text.split("*") == ["/x/a.pdf", "/x/c.pdf"]


def test_drag_text_with_nothing_selected_returns_none():
    sel = DragSelection()
    assert sel.drag_text() is None
    assert len(sel) == 0


def test_drag_text_with_only_current():
    sel = DragSelection()
    assert sel.drag_text("/only.pdf") == "/only.pdf"