#!/usr/bin/env python3
"""Full-screen task list: one TaskItem per visible task over a YAML store."""

import logging
import re
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

import yaml
from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (
    DynamicContainer,
    Float,
    FloatContainer,
    HSplit,
    Layout,
    Window,
)
from prompt_toolkit.layout.containers import Container

from application.browse import BrowseRequest, cycle
from application.edit_dispatcher import EditDispatcher
from application.ports import TaskRepository
from application.store_client import BackgroundStoreClient
from config import get_store_path, get_tui_ttimeoutlen
from core import Task, utc_now
from core.desktop.interface.action_bar import ActionEntry
from core.desktop.interface.cli_commands import browse_from_args
from core.desktop.interface.constants import TOOLTIP_GROUP_ACTIVE
from core.desktop.interface.i18n import configured_lang, translate
from core.desktop.interface.interaction import InteractionSurface, TrackedFormattedTextControl
from core.desktop.interface.task_item import TaskItem
from core.desktop.interface.tui_themes import DEFAULT_THEME, build_style
from infrastructure.file_repository import FileTaskRepository

logger = logging.getLogger("task_item.tui")

RELOAD_THROTTLE = 0.3


class TaskListTUI:
    def __init__(
        self,
        store_path: Optional[Path] = None,
        theme: str = DEFAULT_THEME,
        browse: Optional[BrowseRequest] = None,
        *,
        repository: Optional[TaskRepository] = None,
        clock: Callable[[], datetime] = utc_now,
        app_input=None,
        app_output=None,
    ):
        configured_lang.cache_clear()
        self.repository = repository or FileTaskRepository(store_path or get_store_path())
        self.repository.bootstrap()
        self.store = BackgroundStoreClient(self.repository, on_error=self._store_error)
        self.dispatcher = EditDispatcher(self.store, on_failure=self._store_error)
        self.surface = InteractionSurface()
        self.browse = browse or BrowseRequest()
        self.clock = clock

        self.items: Dict[str, TaskItem] = {}
        self.visible_ids: List[str] = []
        self.total_count = 0
        self.focused_id: Optional[str] = None
        self._pending_ids: set = set()
        self.status_message = ""
        self.status_message_expires = 0.0
        self.status_is_error = False
        self.tooltip = ""
        self._last_signature = self.repository.compute_signature()
        self._last_check = time.time()

        self._items_container: Container = Window()
        self._overlay_layer: Container = HSplit([])
        self.load_tasks(self.repository.snapshot())

        self.app = Application(
            layout=Layout(self._build_root()),
            key_bindings=self._build_keybindings(),
            style=build_style(theme),
            full_screen=True,
            mouse_support=True,
            input=app_input,
            output=app_output,
            refresh_interval=0.5,
            before_render=self._before_render,
            after_render=self._after_render,
        )
        # prompt_toolkit waits 0.5s by default to disambiguate a bare Esc.
        self.app.ttimeoutlen = get_tui_ttimeoutlen()
        self.app.key_processor.before_key_press += self._before_key_press
        self._focus_initial()

    # Status --------------------------------------------------------------

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, **kwargs)

    def set_status_message(self, message: str, ttl: float = 4.0, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.status_message_expires = time.time() + ttl

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def _store_error(self, message: str) -> None:
        self.set_status_message(self._t("STATUS_STORE_ERROR", error=message), ttl=8.0, error=True)
        self.force_render()

    def _show_tooltip(self, entry: ActionEntry) -> None:
        # Collapsed items never feed the shared tooltip line.
        if entry.tooltip_group != TOOLTIP_GROUP_ACTIVE:
            return
        if entry.tooltip != self.tooltip:
            self.tooltip = entry.tooltip
            self.force_render()

    def get_status_text(self) -> FormattedText:
        if self.status_message and time.time() < self.status_message_expires:
            style = "class:status.error" if self.status_is_error else "class:header"
            return FormattedText([(style, f" {self.status_message}")])
        parts = [
            ("class:header", f" {self._t('APP_TITLE')} "),
            ("class:text.dim", self._t("LIST_COUNT", shown=len(self.visible_ids), total=self.total_count)),
        ]
        if self.tooltip and self.focused_id:
            parts.append(("class:tooltip", f"  {self.tooltip}"))
        return FormattedText(parts)

    def get_footer_text(self) -> FormattedText:
        direction = self._t("DIRECTION_ASC" if self.browse.ascending else "DIRECTION_DESC")
        hints = self._t(
            "FOOTER_HINTS",
            availability=self._t(f"AVAILABILITY_{self.browse.availability.name}"),
            order=self._t(f"ORDER_{self.browse.order.name}"),
            direction=direction,
        )
        return FormattedText([("class:text.dim", f" {hints}")])

    # Data ----------------------------------------------------------------

    def load_tasks(self, tasks: Optional[List[Task]] = None) -> None:
        """Apply the browse request to ``tasks`` and reconcile item widgets."""
        if tasks is None:
            tasks = self.repository.snapshot()
        tasks = list(tasks)
        known = {task.id for task in tasks}
        self._pending_ids -= known
        # Rows created locally stay until the worker has stored them.
        tasks.extend(self.items[task_id].task for task_id in self._pending_ids if task_id in self.items)
        self.total_count = len(tasks)
        now = self.clock()
        try:
            visible = self.browse.execute(tasks, now)
        except re.error as exc:
            self.set_status_message(self._t("STATUS_BAD_QUERY", error=exc), error=True)
            self.browse.query_regexp = None
            visible = self.browse.execute(tasks, now)

        visible_ids = [task.id for task in visible]
        if self.focused_id and self.focused_id in self.items and self.focused_id not in visible_ids:
            # Never yank the row the user is editing.
            fresh = next((task for task in tasks if task.id == self.focused_id), None)
            if fresh is not None:
                visible_ids.append(fresh.id)
                visible.append(fresh)

        for task in visible:
            item = self.items.get(task.id)
            if item is None:
                self.items[task.id] = self._create_item(task)
            elif task is not item.task:
                item.update(task)
        for task_id in list(self.items):
            if task_id not in visible_ids:
                self._drop_item(task_id)
        self.visible_ids = visible_ids
        self._rebuild_containers()

    def maybe_reload(self, now: Optional[float] = None) -> bool:
        """Re-read the store when its file signature changed (throttled)."""
        now = time.time() if now is None else now
        if now - self._last_check < RELOAD_THROTTLE:
            return False
        self._last_check = now
        signature = self.repository.compute_signature()
        if signature == self._last_signature:
            return False
        self._last_signature = signature
        try:
            tasks = self.repository.load()
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Store reload failed: %s", exc)
            self.set_status_message(self._t("STATUS_STORE_ERROR", error=exc), ttl=8.0, error=True)
            return False
        self.load_tasks(tasks)
        return True

    def _create_item(self, task: Task, initial_focus: bool = False) -> TaskItem:
        item = TaskItem(
            task,
            self.dispatcher,
            self.surface,
            initial_focus=initial_focus,
            on_focus_change=lambda value, task_id=task.id: self._item_focus_changed(task_id, value),
            on_tooltip=self._show_tooltip,
            on_delete=self._item_deleted,
            clock=self.clock,
        )
        item.mount()
        return item

    def _drop_item(self, task_id: str) -> None:
        item = self.items.pop(task_id, None)
        if item is None:
            return
        item.unmount()
        self._pending_ids.discard(task_id)
        if self.focused_id == task_id:
            self.focused_id = None
            self.tooltip = ""

    def _rebuild_containers(self) -> None:
        rows = [self.items[task_id] for task_id in self.visible_ids]
        if rows:
            self._items_container = HSplit([item.container for item in rows])
        else:
            self._items_container = Window(
                content=TrackedFormattedTextControl(
                    lambda: [("class:text.dim", f" {self._t('EMPTY_LIST')}")],
                    surface=self.surface,
                    owner=None,
                ),
                height=1,
            )
        self._overlay_layer = HSplit([overlay for item in rows for overlay in item.overlay_containers()])

    # Item callbacks ------------------------------------------------------

    def _item_focus_changed(self, task_id: str, value: bool) -> None:
        if value:
            self.focused_id = task_id
        elif self.focused_id == task_id:
            self.focused_id = None
            self.tooltip = ""
        self.force_render()

    def _item_deleted(self, task_id: str) -> None:
        if task_id in self.visible_ids:
            index = self.visible_ids.index(task_id)
            self.visible_ids.remove(task_id)
            self.total_count = max(0, self.total_count - 1)
        else:
            index = 0
        self._drop_item(task_id)
        self._rebuild_containers()
        if self.visible_ids:
            target = self.visible_ids[min(index, len(self.visible_ids) - 1)]
            self._focus_item(target)
        self.force_render()

    # Actions -------------------------------------------------------------

    def new_task(self) -> TaskItem:
        task = Task.new(tags=self.browse.tags)
        self._collapse_focused()
        item = self._create_item(task, initial_focus=True)
        self.items[task.id] = item
        self._pending_ids.add(task.id)
        self.visible_ids.insert(0, task.id)
        self.total_count += 1
        self._rebuild_containers()
        self.store.request_insert(task)
        self.set_status_message(self._t("STATUS_CREATED"), ttl=2.0)
        self._focus_item(task.id)
        return item

    def focus_relative(self, delta: int) -> None:
        if not self.visible_ids:
            return
        current = self.surface.owner_of(self.app.layout.current_control)
        if current in self.visible_ids:
            index = (self.visible_ids.index(current) + delta) % len(self.visible_ids)
        else:
            index = 0 if delta > 0 else len(self.visible_ids) - 1
        self._collapse_focused()
        self._focus_item(self.visible_ids[index])

    def collapse(self) -> None:
        self._collapse_focused()
        self.force_render()

    def cycle_availability(self) -> None:
        self.browse.availability = cycle(self.browse.availability)
        self.load_tasks()

    def cycle_order(self) -> None:
        self.browse.order = cycle(self.browse.order)
        self.load_tasks()

    def flip_direction(self) -> None:
        self.browse.ascending = not self.browse.ascending
        self.load_tasks()

    def _collapse_focused(self) -> None:
        if self.focused_id and self.focused_id in self.items:
            self.items[self.focused_id].focus.set_focus(False)

    def _focus_initial(self) -> None:
        if self.visible_ids:
            self._focus_item(self.visible_ids[0])

    def _focus_item(self, task_id: str) -> None:
        item = self.items.get(task_id)
        app = getattr(self, "app", None)
        if item is None or app is None:
            return
        try:
            app.layout.focus(item.editor)
        except ValueError as exc:
            logger.debug("Cannot focus %s: %s", task_id, exc)

    # Render hooks --------------------------------------------------------

    def _before_render(self, _app) -> None:
        self.maybe_reload()

    def _after_render(self, _app) -> None:
        for task_id in list(self.visible_ids):
            item = self.items.get(task_id)
            if item is not None:
                item.sync_focus(self.app.layout.has_focus)

    def _before_key_press(self, _processor) -> None:
        self.surface.dispatch_from(self.app.layout.current_control, "key")

    # Layout --------------------------------------------------------------

    def _tracked_window(self, get_text, **kwargs) -> Window:
        return Window(
            content=TrackedFormattedTextControl(get_text, surface=self.surface, owner=None, show_cursor=False),
            **kwargs,
        )

    def _build_root(self) -> Container:
        body = HSplit(
            [
                self._tracked_window(self.get_status_text, height=1),
                self._tracked_window(lambda: "", height=1, char="─", style="class:border"),
                DynamicContainer(lambda: self._items_container),
                # Clicks on the empty area below the rows count as "outside" every item.
                self._tracked_window(lambda: "", style="class:text"),
                self._tracked_window(lambda: "", height=1, char="─", style="class:border"),
                self._tracked_window(self.get_footer_text, height=1),
            ]
        )
        return FloatContainer(
            content=body,
            floats=[Float(content=DynamicContainer(lambda: self._overlay_layer), top=2)],
        )

    def _build_keybindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-n")
        def _(event):
            self.new_task()

        @kb.add("tab")
        def _(event):
            self.focus_relative(1)

        @kb.add("s-tab")
        def _(event):
            self.focus_relative(-1)

        @kb.add("escape", eager=True)
        def _(event):
            self.collapse()

        @kb.add("f2")
        def _(event):
            self.cycle_availability()

        @kb.add("f3")
        def _(event):
            self.cycle_order()

        @kb.add("f4")
        def _(event):
            self.flip_direction()

        @kb.add("c-q")
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        return kb

    # Lifecycle -----------------------------------------------------------

    def run(self) -> None:
        try:
            self.app.run()
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        for task_id in list(self.items):
            self._drop_item(task_id)
        self.store.close()


def cmd_tui(args) -> int:
    browse = browse_from_args(args)
    store = getattr(args, "store", None)
    tui = TaskListTUI(
        store_path=Path(store) if store else None,
        theme=getattr(args, "theme", DEFAULT_THEME) or DEFAULT_THEME,
        browse=browse,
    )
    tui.run()
    return 0


__all__ = ["TaskListTUI", "cmd_tui", "RELOAD_THROTTLE"]
