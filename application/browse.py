"""List query: availability filter, tag/regexp filters and ordering."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from core import Task, as_aware, is_deferred


class Availability(str, Enum):
    ALL = "all"
    INCOMPLETE = "incomplete"
    AVAILABLE = "available"
    DONE = "done"


class OrderType(str, Enum):
    CAPTURED = "captured"
    START = "start"
    DUE = "due"
    SCHEDULED = "scheduled"


_ORDER_FIELD = {
    OrderType.START: "start",
    OrderType.DUE: "due",
    OrderType.SCHEDULED: "schedule",
}


def _matches_availability(task: Task, availability: Availability, now: datetime) -> bool:
    if availability is Availability.ALL:
        return True
    if availability is Availability.DONE:
        return task.completed
    if availability is Availability.AVAILABLE:
        return not task.completed and not is_deferred(task.start, now)
    return not task.completed


def _sort_key(task: Task, order: OrderType) -> Tuple[int, float, float]:
    captured = as_aware(task.captured).timestamp()
    name = _ORDER_FIELD.get(order)
    if name is None:
        return (0, captured, 0.0)
    value = getattr(task, name)
    # Dated tasks first, undated after, ties broken by capture time.
    if value is None:
        return (1, captured, 0.0)
    return (0, as_aware(value).timestamp(), captured)


@dataclass
class BrowseRequest:
    availability: Availability = Availability.INCOMPLETE
    order: OrderType = OrderType.CAPTURED
    ascending: bool = True
    tags: Sequence[str] = field(default_factory=tuple)
    query_regexp: Optional[str] = None
    query_text: Optional[str] = None

    def execute(self, tasks: Iterable[Task], now: datetime) -> List[Task]:
        """Filter and order tasks. Raises re.error for an invalid regexp."""
        pattern = re.compile(self.query_regexp) if self.query_regexp else None
        needle = (self.query_text or "").casefold()
        wanted = {t.strip().lstrip("#") for t in self.tags if t and t.strip()}
        availability = Availability(self.availability)
        order = OrderType(self.order)
        selected = [
            task
            for task in tasks
            if wanted.issubset(task.tags)
            and (pattern is None or pattern.search(task.content))
            and needle in task.content.casefold()
            and _matches_availability(task, availability, now)
        ]
        selected.sort(key=lambda t: _sort_key(t, order))
        if not self.ascending:
            selected.reverse()
        return selected


def cycle(value: Enum) -> Enum:
    members = list(type(value))
    return members[(members.index(value) + 1) % len(members)]


__all__ = ["Availability", "OrderType", "BrowseRequest", "cycle"]
