"""Action bar rendering policy: labels, tooltip groups and active markers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from core import DateField, Task
from core.desktop.interface.constants import (
    SHORT_DATE_FORMAT,
    TOOLTIP_GROUP_ACTIVE,
    TOOLTIP_GROUP_INACTIVE,
)
from core.desktop.interface.i18n import translate
from util.timefmt import format_instant, relative

BAR_ORDER: Tuple[str, ...] = ("complete", "schedule", "start", "due", "delete")


@dataclass(frozen=True)
class ActionEntry:
    key: str
    label: str
    tooltip: str
    tooltip_group: str
    active: bool = False


def tooltip_group(has_focus: bool) -> str:
    return TOOLTIP_GROUP_ACTIVE if has_focus else TOOLTIP_GROUP_INACTIVE


def build_action_entries(
    task: Task,
    has_focus: bool,
    open_slots: Set[DateField],
    now: datetime,
    t: Callable[..., str] = translate,
) -> List[ActionEntry]:
    group = tooltip_group(has_focus)
    if task.completed:
        complete = ActionEntry("complete", "↺", t("TOOLTIP_UNCOMPLETE"), group)
    else:
        complete = ActionEntry("complete", "✓", t("TOOLTIP_COMPLETE"), group)
    schedule_label = relative(task.schedule, now, t) if task.schedule else t("TAP_TO_SCHEDULE")
    start_label = format_instant(task.start, SHORT_DATE_FORMAT) if task.start else t("NO_START_DATE")
    due_label = format_instant(task.due, SHORT_DATE_FORMAT) if task.due else t("NO_DUE_DATE")
    return [
        complete,
        ActionEntry("schedule", schedule_label, t("TOOLTIP_SCHEDULED"), group, DateField.SCHEDULE in open_slots),
        ActionEntry("start", start_label, t("TOOLTIP_START"), group, DateField.START in open_slots),
        ActionEntry("due", due_label, t("TOOLTIP_DUE"), group, DateField.DUE in open_slots),
        ActionEntry("delete", "✗", t("TOOLTIP_DELETE"), group),
    ]


def _entry_handler(entry: ActionEntry, on_activate, on_hover):
    def handler(event: MouseEvent):
        if event.event_type == MouseEventType.MOUSE_MOVE:
            if on_hover:
                on_hover(entry)
            return None
        if event.event_type == MouseEventType.MOUSE_UP and event.button == MouseButton.LEFT:
            on_activate(entry.key)
            return None
        return NotImplemented

    return handler


def render_action_bar(
    entries: Sequence[ActionEntry],
    on_activate: Callable[[str], None],
    on_hover: Optional[Callable[[ActionEntry], None]] = None,
    keys: Optional[Iterable[str]] = None,
) -> List[tuple]:
    wanted = set(keys) if keys is not None else set(BAR_ORDER)
    parts: List[tuple] = []
    for entry in entries:
        if entry.key not in wanted:
            continue
        if parts:
            if entry.key == "due":
                parts.append(("class:action.divider", " → "))
            elif entry.key == "start":
                parts.append(("class:action.divider", " │ "))
            else:
                parts.append(("class:action.divider", "  "))
        style = "class:action.active" if entry.active else "class:action"
        parts.append((style, f" {entry.label} ", _entry_handler(entry, on_activate, on_hover)))
    return parts


__all__ = ["ActionEntry", "BAR_ORDER", "build_action_entries", "render_action_bar", "tooltip_group"]
