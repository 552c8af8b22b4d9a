"""Inline content editor for a task row."""

from typing import Callable, Hashable, Optional

from prompt_toolkit.widgets import TextArea

from core.desktop.interface.interaction import InteractionSurface, track_text_area


class Editor:
    """TextArea wrapper emitting ``on_change(text)`` and ``on_focus_change(bool)``.

    Focus is reported by the host through ``sync_focus`` after each render,
    since prompt_toolkit windows do not publish focus events themselves.
    """

    def __init__(
        self,
        value: str = "",
        *,
        focus_requested: bool = False,
        strikethrough: bool = False,
        on_change: Optional[Callable[[str], None]] = None,
        on_focus_change: Optional[Callable[[bool], None]] = None,
        surface: Optional[InteractionSurface] = None,
        owner: Optional[Hashable] = None,
    ):
        self.focus_requested = focus_requested
        self.strikethrough = strikethrough
        self.on_change = on_change
        self.on_focus_change = on_focus_change
        self._has_focus = False
        self._programmatic = False
        self.text_area = track_text_area(
            TextArea(text=value, multiline=False, wrap_lines=True, focus_on_click=True), surface, owner
        )
        self.text_area.window.style = self._window_style
        self.text_area.buffer.on_text_changed += self._text_changed

    @property
    def value(self) -> str:
        return self.text_area.text

    @property
    def control(self):
        return self.text_area.control

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def set_value(self, text: str) -> None:
        """Replace the text without emitting ``on_change``."""
        if text == self.text_area.text:
            return
        self._programmatic = True
        try:
            self.text_area.text = text
        finally:
            self._programmatic = False

    def sync_focus(self, focused: bool) -> None:
        if focused == self._has_focus:
            return
        self._has_focus = focused
        if self.on_focus_change:
            self.on_focus_change(focused)

    def _text_changed(self, buffer) -> None:
        if self._programmatic or not self.on_change:
            return
        self.on_change(buffer.text)

    def _window_style(self) -> str:
        if self.strikethrough:
            return "class:task.content class:task.completed"
        return "class:task.content"

    def __pt_container__(self):
        return self.text_area


__all__ = ["Editor"]
