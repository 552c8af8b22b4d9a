from datetime import datetime
from typing import Optional

from .instants import as_aware


def is_deferred(start: Optional[datetime], now: datetime) -> bool:
    """True when the task has a start instant strictly in the future."""
    if start is None:
        return False
    return as_aware(start) > as_aware(now)


__all__ = ["is_deferred"]
