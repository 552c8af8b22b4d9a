"""Date picker overlay: a framed single-line input shown as a float."""

import logging
from datetime import datetime
from typing import Callable, Hashable, Optional

from prompt_toolkit.application.current import get_app_or_none
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import ConditionalContainer, HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.widgets import Frame, TextArea

from core import utc_now
from core.desktop.interface.constants import TIMESTAMP_FORMAT
from core.desktop.interface.i18n import translate
from core.desktop.interface.interaction import InteractionSurface, track_text_area
from util.timefmt import format_instant
from util.timeparse import parse_instant

logger = logging.getLogger("task_item.tui")

OVERLAY_WIDTH = 48


class DateOverlay:
    """Owns its own visibility; the coordinator drives it through ``force_open``."""

    def __init__(
        self,
        title: str,
        initial_instant: Optional[datetime] = None,
        *,
        on_commit: Callable[[Optional[datetime]], None],
        on_closed: Callable[[], None],
        clock: Callable[[], datetime] = utc_now,
        t: Callable[..., str] = translate,
        surface: Optional[InteractionSurface] = None,
        owner: Optional[Hashable] = None,
    ):
        self.title = title
        self.initial_instant = initial_instant
        self.on_commit = on_commit
        self.on_closed = on_closed
        self.clock = clock
        self._t = t
        self.visible = False
        self.error = ""
        self.input = track_text_area(
            TextArea(multiline=False, accept_handler=self._accept, style="class:overlay.input"), surface, owner
        )

        kb = KeyBindings()

        @kb.add("escape", eager=True)
        def _(event):
            self.dismiss()

        body = HSplit(
            [
                self.input,
                Window(content=FormattedTextControl(self._hint_text), height=2, wrap_lines=True),
            ]
        )
        self.container = ConditionalContainer(
            Frame(body, title=title, style="class:overlay", width=OVERLAY_WIDTH, key_bindings=kb),
            filter=Condition(lambda: self.visible),
        )

    @property
    def control(self):
        return self.input.control

    def force_open(self, value: bool) -> None:
        value = bool(value)
        if value == self.visible:
            return
        self.visible = value
        self.error = ""
        if value:
            self.input.text = format_instant(self.initial_instant, TIMESTAMP_FORMAT) if self.initial_instant else ""
            self.input.buffer.cursor_position = len(self.input.text)
            self._focus_input()

    def dismiss(self) -> None:
        """Close from inside the overlay (Esc) and report it."""
        if not self.visible:
            return
        self.visible = False
        self.error = ""
        self.on_closed()

    def submit(self, text: str) -> bool:
        """Parse and commit ``text``; returns False and keeps the overlay open on bad input."""
        try:
            instant = parse_instant(text, self.clock())
        except ValueError as exc:
            self.error = self._t("OVERLAY_INVALID", error=exc)
            return False
        self.error = ""
        self.on_commit(instant)
        return True

    def _accept(self, buffer) -> bool:
        self.submit(buffer.text)
        return True

    def _focus_input(self) -> None:
        app = get_app_or_none()
        if app is None:
            return
        try:
            app.layout.focus(self.input)
        except ValueError as exc:
            logger.debug("Overlay %s not in layout yet: %s", self.title, exc)

    def _hint_text(self) -> FormattedText:
        if self.error:
            return FormattedText([("class:overlay.error", self.error)])
        return FormattedText([("class:text.dim", self._t("OVERLAY_HINT"))])

    def __pt_container__(self):
        return self.container


__all__ = ["DateOverlay", "OVERLAY_WIDTH"]
