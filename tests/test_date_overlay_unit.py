from datetime import datetime, timedelta, timezone

from prompt_toolkit.keys import Keys

from core.desktop.interface.constants import TIMESTAMP_FORMAT
from core.desktop.interface.date_overlay import DateOverlay
from util.timefmt import format_instant

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _overlay(initial=None):
    commits, closes = [], []
    overlay = DateOverlay(
        "Due",
        initial,
        on_commit=commits.append,
        on_closed=lambda: closes.append(True),
        clock=lambda: NOW,
    )
    return overlay, commits, closes


def test_force_open_prefills_current_value():
    overlay, _, _ = _overlay(NOW)
    overlay.force_open(True)
    assert overlay.visible
    assert overlay.input.text == format_instant(NOW, TIMESTAMP_FORMAT)


def test_force_open_without_value_starts_empty():
    overlay, _, _ = _overlay()
    overlay.force_open(True)
    assert overlay.input.text == ""


def test_submit_commits_parsed_instant():
    overlay, commits, _ = _overlay()
    overlay.force_open(True)
    assert overlay.submit("+1d") is True
    assert commits == [NOW + timedelta(days=1)]


def test_submit_clear_commits_none():
    overlay, commits, _ = _overlay(NOW)
    assert overlay.submit("none") is True
    assert commits == [None]


def test_invalid_input_keeps_overlay_open():
    overlay, commits, _ = _overlay()
    overlay.force_open(True)
    assert overlay.submit("someday maybe") is False
    assert commits == []
    assert overlay.visible
    assert overlay.error.startswith("Invalid date")


def test_dismiss_reports_close_once():
    overlay, _, closes = _overlay()
    overlay.dismiss()
    assert closes == []
    overlay.force_open(True)
    overlay.dismiss()
    overlay.dismiss()
    assert closes == [True]
    assert not overlay.visible


def test_escape_is_bound_eagerly():
    overlay, _, _ = _overlay()
    bindings = overlay.container.content.get_key_bindings()
    escape = [b for b in bindings.bindings if b.keys == (Keys.Escape,)]
    assert escape
    assert all(b.eager() for b in escape)
