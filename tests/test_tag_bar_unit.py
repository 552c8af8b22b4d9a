from core.desktop.interface.tag_bar import TagBar, format_tags, parse_tags


def test_parse_tags_accepts_hashes_commas_and_spaces():
    assert parse_tags("#a, b   #c") == frozenset({"a", "b", "c"})
    assert parse_tags("") == frozenset()


def test_format_tags_is_sorted():
    assert format_tags({"work", "home"}) == "#home #work"


def test_commit_emits_only_on_change():
    emitted = []
    bar = TagBar({"home"}, on_tags_changed=emitted.append)
    bar.commit()
    assert emitted == []

    bar.text_area.text = "#home #work"
    bar.commit()
    bar.commit()
    assert emitted == [{"home", "work"}]
    assert bar.tags == frozenset({"home", "work"})


def test_blur_commits_pending_text():
    emitted = []
    bar = TagBar(on_tags_changed=emitted.append)
    bar.sync_focus(True)
    bar.text_area.text = "#urgent"
    assert emitted == []
    bar.sync_focus(False)
    assert emitted == [{"urgent"}]


def test_store_update_does_not_clobber_focused_input():
    bar = TagBar({"a"})
    bar.sync_focus(True)
    bar.text_area.text = "#a #typing"
    bar.set_tags({"b"})
    assert bar.text_area.text == "#a #typing"

    bar.sync_focus(False)
    bar.set_tags({"c"})
    assert bar.text_area.text == "#c"
