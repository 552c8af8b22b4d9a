from datetime import datetime
from typing import Callable, Dict, Optional

from core import as_aware

_EN_TEMPLATES: Dict[str, str] = {
    "REL_NOW": "a few seconds",
    "REL_MINUTE": "a minute",
    "REL_MINUTES": "{n} minutes",
    "REL_HOUR": "an hour",
    "REL_HOURS": "{n} hours",
    "REL_DAY": "a day",
    "REL_DAYS": "{n} days",
    "REL_MONTH": "a month",
    "REL_MONTHS": "{n} months",
    "REL_YEAR": "a year",
    "REL_YEARS": "{n} years",
    "REL_FUTURE": "in {span}",
    "REL_PAST": "{span} ago",
}

# (upper bound in seconds, singular key, plural key, unit seconds)
_THRESHOLDS = (
    (45, "REL_NOW", "REL_NOW", 1),
    (90, "REL_MINUTE", "REL_MINUTE", 60),
    (45 * 60, "REL_MINUTE", "REL_MINUTES", 60),
    (90 * 60, "REL_HOUR", "REL_HOUR", 3600),
    (22 * 3600, "REL_HOUR", "REL_HOURS", 3600),
    (36 * 3600, "REL_DAY", "REL_DAY", 86400),
    (26 * 86400, "REL_DAY", "REL_DAYS", 86400),
    (45 * 86400, "REL_MONTH", "REL_MONTH", 30 * 86400),
    (320 * 86400, "REL_MONTH", "REL_MONTHS", 30 * 86400),
    (548 * 86400, "REL_YEAR", "REL_YEAR", 365 * 86400),
)


def _default_translate(key: str, **kwargs) -> str:
    return _EN_TEMPLATES.get(key, key).format(**kwargs)


def relative(instant: datetime, now: datetime, t: Optional[Callable[..., str]] = None) -> str:
    """Humanized distance between ``instant`` and ``now`` ("in 3 days", "2 hours ago")."""
    tr = t or _default_translate
    seconds = (as_aware(instant) - as_aware(now)).total_seconds()
    distance = abs(seconds)
    span = ""
    for bound, single, plural, unit in _THRESHOLDS:
        if distance < bound:
            n = max(1, int(round(distance / unit)))
            span = tr(single) if n == 1 or single == plural else tr(plural, n=n)
            break
    if not span:
        n = max(2, int(round(distance / (365 * 86400))))
        span = tr("REL_YEARS", n=n)
    return tr("REL_FUTURE", span=span) if seconds > 0 else tr("REL_PAST", span=span)


def format_instant(instant: datetime, pattern: str = "%Y-%m-%d %H:%M") -> str:
    """Format in local wall-clock time."""
    return as_aware(instant).astimezone().strftime(pattern)


__all__ = ["relative", "format_instant"]
