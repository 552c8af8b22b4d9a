"""Outside-interaction detection for list items.

Every pointer-aware control on screen is tagged with the owner token of the
item it belongs to (``None`` for the bare list surface). Pointer and keyboard
events are reported to the surface with the owner they originated in; each
registered listener whose region does not contain that owner is notified.
"""

import weakref
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional, Tuple

from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl, UIControl
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType
from prompt_toolkit.widgets import TextArea

POINTER_EVENTS = (MouseEventType.MOUSE_DOWN, MouseEventType.MOUSE_UP)


@dataclass(frozen=True)
class Interaction:
    kind: str  # "mouse" | "key"
    owner: Optional[Hashable] = None


@dataclass(frozen=True)
class ItemRegion:
    """Bounding region of one item instance: every control tagged with ``owner``."""

    owner: Hashable

    def contains(self, interaction: Interaction) -> bool:
        return interaction.owner is not None and interaction.owner == self.owner


class Subscription:
    def __init__(self, surface: "InteractionSurface", token: int):
        self._surface = surface
        self._token: Optional[int] = token

    @property
    def active(self) -> bool:
        return self._token is not None

    def close(self) -> None:
        if self._token is None:
            return
        self._surface._remove(self._token)
        self._token = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class InteractionSurface:
    def __init__(self) -> None:
        self._listeners: Dict[int, Tuple[ItemRegion, Callable[[], None]]] = {}
        self._owners: "weakref.WeakKeyDictionary[UIControl, Hashable]" = weakref.WeakKeyDictionary()
        self._next_token = 0

    def track(self, control: UIControl, owner: Optional[Hashable]) -> None:
        self._owners[control] = owner

    def untrack_owner(self, owner: Hashable) -> None:
        for control, tagged in list(self._owners.items()):
            if tagged == owner:
                del self._owners[control]

    def owner_of(self, control: Optional[UIControl]) -> Optional[Hashable]:
        if control is None:
            return None
        return self._owners.get(control)

    def listen(self, region: ItemRegion, callback: Callable[[], None]) -> Subscription:
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = (region, callback)
        return Subscription(self, token)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispatch(self, interaction: Interaction) -> None:
        for region, callback in list(self._listeners.values()):
            if not region.contains(interaction):
                callback()

    def dispatch_from(self, control: Optional[UIControl], kind: str) -> None:
        self.dispatch(Interaction(kind=kind, owner=self.owner_of(control)))

    def _remove(self, token: int) -> None:
        self._listeners.pop(token, None)


class TrackedFormattedTextControl(FormattedTextControl):
    """FormattedTextControl that reports pointer interactions and supports an external mouse handler."""

    def __init__(self, *args, surface: Optional[InteractionSurface] = None, owner: Optional[Hashable] = None,
                 mouse_handler=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._surface = surface
        self._external_mouse_handler = mouse_handler
        if surface is not None:
            surface.track(self, owner)

    def mouse_handler(self, mouse_event: MouseEvent):
        if self._surface is not None and mouse_event.event_type in POINTER_EVENTS:
            self._surface.dispatch_from(self, "mouse")
        if self._external_mouse_handler:
            result = self._external_mouse_handler(mouse_event)
            if result is not NotImplemented:
                return result
        return super().mouse_handler(mouse_event)


class TrackedBufferControl(BufferControl):
    """BufferControl that reports pointer interactions to the surface it is tagged on."""

    def __init__(self, *args, surface: Optional[InteractionSurface] = None, owner: Optional[Hashable] = None,
                 **kwargs):
        super().__init__(*args, **kwargs)
        self._surface = surface
        if surface is not None:
            surface.track(self, owner)

    @classmethod
    def like(cls, control: BufferControl, *, surface: InteractionSurface,
             owner: Optional[Hashable]) -> "TrackedBufferControl":
        """Same buffer and settings as ``control``, tagged with ``owner``."""
        return cls(
            buffer=control.buffer,
            input_processors=control.input_processors,
            include_default_input_processors=control.include_default_input_processors,
            lexer=control.lexer,
            preview_search=control.preview_search,
            focusable=control.focusable,
            search_buffer_control=control.search_buffer_control,
            menu_position=control.menu_position,
            focus_on_click=control.focus_on_click,
            key_bindings=control.key_bindings,
            surface=surface,
            owner=owner,
        )

    def mouse_handler(self, mouse_event: MouseEvent):
        if self._surface is not None and mouse_event.event_type in POINTER_EVENTS:
            self._surface.dispatch_from(self, "mouse")
        return super().mouse_handler(mouse_event)


def track_text_area(text_area: TextArea, surface: Optional[InteractionSurface],
                    owner: Optional[Hashable]) -> TextArea:
    """Give ``text_area`` a TrackedBufferControl; a no-op without a surface."""
    if surface is None:
        return text_area
    control = TrackedBufferControl.like(text_area.control, surface=surface, owner=owner)
    text_area.control = control
    text_area.window.content = control
    return text_area


__all__ = [
    "Interaction",
    "ItemRegion",
    "InteractionSurface",
    "Subscription",
    "TrackedBufferControl",
    "TrackedFormattedTextControl",
    "track_text_area",
]
