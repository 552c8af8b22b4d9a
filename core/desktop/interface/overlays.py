"""Open/closed state of the three date overlays of an item."""

from datetime import datetime
from typing import Callable, Dict, Optional, Protocol, Set

from core import DateField

OverlaySlot = DateField


class OverlayHandle(Protocol):
    """Imperative channel to an overlay instance that owns its own visibility state."""

    def force_open(self, value: bool) -> None:
        ...


class OverlayCoordinator:
    """Independent open flags for schedule/start/due.

    Opening one slot never closes the others; committed values are forwarded
    verbatim to ``on_commit`` and the slot is closed afterwards.
    """

    def __init__(self, on_commit: Callable[[OverlaySlot, Optional[datetime]], None],
                 on_change: Optional[Callable[[], None]] = None):
        self.on_commit = on_commit
        self.on_change = on_change
        self._open: Dict[OverlaySlot, bool] = {slot: False for slot in OverlaySlot}
        self._handles: Dict[OverlaySlot, OverlayHandle] = {}

    def bind(self, slot: OverlaySlot, handle: OverlayHandle) -> None:
        self._handles[OverlaySlot(slot)] = handle

    def is_open(self, slot: OverlaySlot) -> bool:
        return self._open[OverlaySlot(slot)]

    def open_slots(self) -> Set[OverlaySlot]:
        return {slot for slot, flag in self._open.items() if flag}

    def open(self, slot: OverlaySlot) -> None:
        slot = OverlaySlot(slot)
        self._open[slot] = True
        self._send(slot, True)
        self._changed()

    def close(self, slot: OverlaySlot) -> None:
        slot = OverlaySlot(slot)
        self._open[slot] = False
        self._send(slot, False)
        self._changed()

    def closed(self, slot: OverlaySlot) -> None:
        """The overlay reported that it closed itself."""
        slot = OverlaySlot(slot)
        if not self._open[slot]:
            return
        self._open[slot] = False
        self._changed()

    def toggle(self, slot: OverlaySlot) -> None:
        if self.is_open(slot):
            self.close(slot)
        else:
            self.open(slot)

    def commit(self, slot: OverlaySlot, instant: Optional[datetime]) -> None:
        slot = OverlaySlot(slot)
        self.on_commit(slot, instant)
        self.close(slot)

    def _send(self, slot: OverlaySlot, value: bool) -> None:
        handle = self._handles.get(slot)
        if handle is not None:
            handle.force_open(value)

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()


__all__ = ["OverlayCoordinator", "OverlayHandle", "OverlaySlot"]
