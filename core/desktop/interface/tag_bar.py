"""Tag input: ``#a #b`` text, committed on Enter or when focus leaves."""

import re
from typing import Callable, FrozenSet, Hashable, Iterable, Optional, Set

from prompt_toolkit.widgets import TextArea

from core import normalize_tags
from core.desktop.interface.interaction import InteractionSurface, track_text_area

_SPLIT_RE = re.compile(r"[\s,]+")


def parse_tags(text: str) -> FrozenSet[str]:
    return normalize_tags(part for part in _SPLIT_RE.split(text or "") if part)


def format_tags(tags: Iterable[str]) -> str:
    return " ".join(f"#{tag}" for tag in sorted(tags))


class TagBar:
    def __init__(self, initial_tags: Iterable[str] = (), *,
                 on_tags_changed: Optional[Callable[[Set[str]], None]] = None,
                 surface: Optional[InteractionSurface] = None, owner: Optional[Hashable] = None):
        self._tags = normalize_tags(initial_tags)
        self.on_tags_changed = on_tags_changed
        self._has_focus = False
        self.text_area = track_text_area(TextArea(
            text=format_tags(self._tags),
            multiline=False,
            focus_on_click=True,
            accept_handler=self._accept,
            style="class:tags",
        ), surface, owner)

    @property
    def tags(self) -> FrozenSet[str]:
        return self._tags

    @property
    def control(self):
        return self.text_area.control

    def set_tags(self, tags: Iterable[str]) -> None:
        """Take a new value from the store; a focused, dirty input is left alone."""
        normalized = normalize_tags(tags)
        if normalized == self._tags:
            return
        self._tags = normalized
        if not self._has_focus:
            self.text_area.text = format_tags(normalized)

    def commit(self) -> None:
        parsed = parse_tags(self.text_area.text)
        if parsed == self._tags:
            return
        self._tags = parsed
        if self.on_tags_changed:
            self.on_tags_changed(set(parsed))

    def sync_focus(self, focused: bool) -> None:
        if focused == self._has_focus:
            return
        self._has_focus = focused
        if not focused:
            self.commit()

    def _accept(self, buffer) -> bool:
        self.commit()
        return True

    def __pt_container__(self):
        return self.text_area


__all__ = ["TagBar", "format_tags", "parse_tags"]
