from core.desktop.interface.editor import Editor


def test_user_edits_emit_change():
    changes = []
    editor = Editor("Buy milk", on_change=changes.append)
    editor.text_area.text = "Buy oat milk"
    assert changes == ["Buy oat milk"]
    assert editor.value == "Buy oat milk"


def test_programmatic_value_is_silent():
    changes = []
    editor = Editor("Buy milk", on_change=changes.append)
    editor.set_value("From store")
    assert changes == []
    assert editor.value == "From store"


def test_focus_transitions_reported_once():
    seen = []
    editor = Editor(on_focus_change=seen.append)
    editor.sync_focus(True)
    editor.sync_focus(True)
    editor.sync_focus(False)
    assert seen == [True, False]
    assert editor.has_focus is False


def test_strikethrough_switches_window_style():
    editor = Editor("done", strikethrough=True)
    assert "class:task.completed" in editor.text_area.window.style()
    editor.strikethrough = False
    assert "class:task.completed" not in editor.text_area.window.style()
