"""Single-flag focus state of a list item."""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from core.desktop.interface.interaction import InteractionSurface, ItemRegion, Subscription


class FocusController:
    """Owns ``has_focus``, the only input to action-bar visibility.

    Binary on purpose: nothing in the item needs a third state.
    """

    def __init__(self, initial: bool = False, on_focus_change: Optional[Callable[[bool], None]] = None):
        self._has_focus = bool(initial)
        self.on_focus_change = on_focus_change
        self._subscription: Optional[Subscription] = None

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    @property
    def mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def set_focus(self, value: bool) -> None:
        value = bool(value)
        if value == self._has_focus:
            return
        self._has_focus = value
        self._notify()

    def editor_focus_changed(self, focused: bool) -> None:
        # Focus is only gained from the editor; losing it is the surface's job.
        if focused and not self._has_focus:
            self.set_focus(True)

    def mount(self, surface: InteractionSurface, region: ItemRegion) -> None:
        """Install the outside-interaction listener and report the initial value."""
        if self.mounted:
            return
        self._subscription = surface.listen(region, lambda: self.set_focus(False))
        self._notify()

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    @contextmanager
    def attached(self, surface: InteractionSurface, region: ItemRegion) -> Iterator["FocusController"]:
        self.mount(surface, region)
        try:
            yield self
        finally:
            self.unmount()

    def _notify(self) -> None:
        if callable(self.on_focus_change):
            self.on_focus_change(self._has_focus)


__all__ = ["FocusController"]
