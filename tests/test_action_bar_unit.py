from datetime import datetime, timedelta, timezone

from prompt_toolkit.data_structures import Point
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from core import DateField, Task
from core.desktop.interface.action_bar import build_action_entries, render_action_bar
from core.desktop.interface.constants import SHORT_DATE_FORMAT, TOOLTIP_GROUP_ACTIVE, TOOLTIP_GROUP_INACTIVE
from util.timefmt import format_instant

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _entries(task, has_focus=True, open_slots=()):
    return {e.key: e for e in build_action_entries(task, has_focus, set(open_slots), NOW)}


def test_empty_task_shows_placeholders():
    entries = _entries(Task(id="t1"))
    assert entries["complete"].label == "✓"
    assert entries["complete"].tooltip == "Complete"
    assert entries["schedule"].label == "tap to schedule"
    assert entries["start"].label == "no start date"
    assert entries["due"].label == "no due date"
    assert entries["delete"].label == "✗"


def test_completed_task_offers_undo():
    entries = _entries(Task(id="t1", completed=True))
    assert entries["complete"].label == "↺"
    assert entries["complete"].tooltip == "Mark as not done"


def test_dates_render_relative_and_short():
    start = NOW + timedelta(days=10)
    task = Task(id="t1", schedule=NOW + timedelta(days=3), start=start, due=NOW + timedelta(days=20))
    entries = _entries(task)
    assert entries["schedule"].label == "in 3 days"
    assert entries["start"].label == format_instant(start, SHORT_DATE_FORMAT)
    assert entries["due"].label == format_instant(NOW + timedelta(days=20), SHORT_DATE_FORMAT)


def test_tooltip_group_follows_focus():
    assert {e.tooltip_group for e in _entries(Task(id="t1"), True).values()} == {TOOLTIP_GROUP_ACTIVE}
    assert {e.tooltip_group for e in _entries(Task(id="t1"), False).values()} == {TOOLTIP_GROUP_INACTIVE}


def test_open_slot_marks_entry_active():
    entries = _entries(Task(id="t1"), open_slots=[DateField.DUE])
    assert entries["due"].active
    assert not entries["schedule"].active
    assert not entries["start"].active


def test_render_places_dividers_between_dates():
    entries = build_action_entries(Task(id="t1"), True, set(), NOW)
    fragments = render_action_bar(entries, lambda key: None, keys=("schedule", "start", "due"))
    texts = [frag[1] for frag in fragments]
    assert texts[1] == " │ "
    assert texts[3] == " → "


def test_fragment_handlers_activate_and_hover():
    activated, hovered = [], []
    entries = build_action_entries(Task(id="t1"), True, set(), NOW)
    fragments = render_action_bar(entries, activated.append, hovered.append, keys=("complete",))
    handler = fragments[0][2]

    assert handler(MouseEvent(Point(0, 0), MouseEventType.MOUSE_MOVE, MouseButton.NONE, frozenset())) is None
    assert handler(MouseEvent(Point(0, 0), MouseEventType.MOUSE_UP, MouseButton.LEFT, frozenset())) is None
    assert handler(MouseEvent(Point(0, 0), MouseEventType.MOUSE_DOWN, MouseButton.LEFT, frozenset())) is NotImplemented
    assert activated == ["complete"]
    assert [entry.key for entry in hovered] == ["complete"]
