"""One editable task row: editor, progressive action bar, tags and date overlays."""

from dataclasses import replace
from datetime import datetime
from functools import partial
from typing import Callable, Dict, List, Optional

from prompt_toolkit.application.current import get_app_or_none
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import ConditionalContainer, HSplit, VSplit, Window
from prompt_toolkit.layout.containers import Container

from core import DateField, Task, is_deferred, local_wall_clock, utc_now
from application.edit_dispatcher import EditDispatcher
from core.desktop.interface.action_bar import ActionEntry, build_action_entries, render_action_bar
from core.desktop.interface.constants import ITEM_KEYS
from core.desktop.interface.date_overlay import DateOverlay
from core.desktop.interface.editor import Editor
from core.desktop.interface.focus import FocusController
from core.desktop.interface.i18n import translate
from core.desktop.interface.interaction import (
    InteractionSurface,
    ItemRegion,
    TrackedFormattedTextControl,
)
from core.desktop.interface.overlays import OverlayCoordinator
from core.desktop.interface.tag_bar import TagBar

MAIN_ACTIONS = ("complete", "schedule", "start", "due")


class TaskItem:
    def __init__(
        self,
        task: Task,
        dispatcher: EditDispatcher,
        surface: InteractionSurface,
        *,
        initial_focus: bool = False,
        on_focus_change: Optional[Callable[[bool], None]] = None,
        on_tooltip: Optional[Callable[[ActionEntry], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        clock: Callable[[], datetime] = utc_now,
        t: Callable[..., str] = translate,
    ):
        self.task = task
        self.dispatcher = dispatcher
        self.surface = surface
        self.owner = task.id
        self.region = ItemRegion(task.id)
        self.on_focus_change = on_focus_change
        self.on_tooltip = on_tooltip
        self.on_delete = on_delete
        self.clock = clock
        self._t = t

        self.focus = FocusController(initial_focus, on_focus_change=self._focus_changed)
        self.overlays = OverlayCoordinator(on_commit=self._commit_date, on_change=self._invalidate)
        self.editor = Editor(
            task.content,
            focus_requested=initial_focus,
            strikethrough=task.completed,
            on_change=self._content_changed,
            on_focus_change=self.focus.editor_focus_changed,
            surface=surface,
            owner=self.owner,
        )
        self.tag_bar = TagBar(task.tags, on_tags_changed=self._tags_changed, surface=surface, owner=self.owner)
        self.date_overlays: Dict[DateField, DateOverlay] = {}
        for slot in DateField:
            overlay = DateOverlay(
                t(f"OVERLAY_TITLE_{slot.name}"),
                getattr(task, slot.value),
                on_commit=partial(self.overlays.commit, slot),
                on_closed=partial(self._overlay_closed, slot),
                clock=clock,
                t=t,
                surface=surface,
                owner=self.owner,
            )
            self.date_overlays[slot] = overlay
            self.overlays.bind(slot, overlay)
        self.container = self._build_container()

    # Lifecycle -----------------------------------------------------------

    def mount(self) -> None:
        self.focus.mount(self.surface, self.region)

    def unmount(self) -> None:
        self.focus.unmount()
        self.surface.untrack_owner(self.owner)

    def update(self, task: Task) -> None:
        """Take a fresh record from the store without clobbering active input."""
        self.task = task
        if not self.editor.has_focus:
            self.editor.set_value(task.content)
        self.editor.strikethrough = task.completed
        self.tag_bar.set_tags(task.tags)
        for slot, overlay in self.date_overlays.items():
            if not overlay.visible:
                overlay.initial_instant = getattr(task, slot.value)

    # State ---------------------------------------------------------------

    @property
    def has_focus(self) -> bool:
        return self.focus.has_focus

    def is_deferred(self, now: Optional[datetime] = None) -> bool:
        return is_deferred(self.task.start, now or self.clock())

    def sync_focus(self, is_focused: Callable[[object], bool]) -> None:
        self.editor.sync_focus(is_focused(self.editor))
        self.tag_bar.sync_focus(is_focused(self.tag_bar))

    def action_entries(self) -> List[ActionEntry]:
        return build_action_entries(self.task, self.has_focus, self.overlays.open_slots(), self.clock(), self._t)

    # Intents -------------------------------------------------------------

    def toggle_completion(self) -> None:
        self.dispatcher.toggle_completion(self.task)
        self.task = replace(self.task, completed=not self.task.completed)
        self.editor.strikethrough = self.task.completed
        self.focus.set_focus(False)

    def delete(self) -> None:
        self.dispatcher.remove(self.task.id)
        if self.on_delete:
            self.on_delete(self.task.id)

    def open_overlay(self, slot: DateField) -> None:
        self.overlays.open(DateField(slot))

    def activate(self, key: str) -> None:
        if key == "complete":
            self.toggle_completion()
        elif key == "delete":
            self.delete()
        elif key in {slot.value for slot in DateField}:
            self.open_overlay(DateField(key))

    def focus_editor(self) -> None:
        app = get_app_or_none()
        if app is None:
            return
        try:
            app.layout.focus(self.editor)
        except ValueError:
            pass

    # Callbacks -----------------------------------------------------------

    def _content_changed(self, text: str) -> None:
        self.task = replace(self.task, content=text)
        self.dispatcher.change_content(self.task.id, text)

    def _tags_changed(self, tags) -> None:
        self.dispatcher.change_tags(self.task.id, tags)

    def _commit_date(self, slot: DateField, instant: Optional[datetime]) -> None:
        self.dispatcher.commit_date(self.task.id, slot, instant)
        if slot is DateField.START and instant is not None:
            instant = local_wall_clock(instant)
        changes = {slot.value: instant}
        if slot is DateField.SCHEDULE:
            changes["locked"] = instant is not None
        self.task = replace(self.task, **changes)
        self.date_overlays[slot].initial_instant = instant
        self.focus_editor()

    def _overlay_closed(self, slot: DateField) -> None:
        self.overlays.closed(slot)
        self.focus_editor()

    def _focus_changed(self, value: bool) -> None:
        if not value:
            for slot in list(self.overlays.open_slots()):
                self.overlays.close(slot)
        if self.on_focus_change:
            self.on_focus_change(value)
        self._invalidate()

    def _hover(self, entry: ActionEntry) -> None:
        if self.on_tooltip:
            self.on_tooltip(entry)

    def _invalidate(self) -> None:
        app = get_app_or_none()
        if app is not None:
            app.invalidate()

    # Layout --------------------------------------------------------------

    def _fragments(self, keys) -> FormattedText:
        return FormattedText(render_action_bar(self.action_entries(), self.activate, self._hover, keys=keys))

    def _bullet(self) -> FormattedText:
        style = "class:task.bullet.done" if self.task.completed else "class:task.bullet"
        return FormattedText([(style, "● " if self.has_focus else "○ ")])

    def _row_style(self) -> str:
        return "class:task.deferred" if self.is_deferred() else "class:task"

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add(ITEM_KEYS["complete"])
        def _(event):
            self.toggle_completion()

        @kb.add(ITEM_KEYS["schedule"])
        def _(event):
            self.open_overlay(DateField.SCHEDULE)

        @kb.add(ITEM_KEYS["start"])
        def _(event):
            self.open_overlay(DateField.START)

        @kb.add(ITEM_KEYS["due"])
        def _(event):
            self.open_overlay(DateField.DUE)

        @kb.add(ITEM_KEYS["delete"])
        def _(event):
            self.delete()

        return kb

    def _tracked(self, get_text, **kwargs) -> TrackedFormattedTextControl:
        return TrackedFormattedTextControl(get_text, surface=self.surface, owner=self.owner, show_cursor=False, **kwargs)

    def _build_container(self) -> Container:
        action_row = VSplit(
            [
                Window(content=self._tracked(lambda: ""), width=2, char=" "),
                Window(content=self._tracked(lambda: self._fragments(MAIN_ACTIONS)), height=1, dont_extend_width=True),
                Window(content=self._tracked(lambda: [("class:action.divider", " │ # ")]), width=5, height=1),
                self.tag_bar,
                Window(content=self._tracked(lambda: self._fragments(("delete",))), width=4, height=1),
            ],
            height=1,
        )
        return HSplit(
            [
                VSplit([Window(content=self._tracked(self._bullet), width=2, height=1), self.editor]),
                ConditionalContainer(action_row, filter=Condition(lambda: self.focus.has_focus)),
            ],
            style=self._row_style,
            key_bindings=self._key_bindings(),
        )

    def overlay_containers(self) -> List[Container]:
        return [overlay.container for overlay in self.date_overlays.values()]

    def __pt_container__(self):
        return self.container


__all__ = ["TaskItem", "MAIN_ACTIONS"]
