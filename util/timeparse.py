from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from core import as_aware

_OFFSET_RE = re.compile(r"^([+-])(\d+)\s*([mhdw])$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_TIME_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})[ T](\d{1,2}):(\d{2})$")

_UNIT_SECONDS = {"m": 60, "h": 3600, "d": 86400, "w": 7 * 86400}
CLEAR_WORDS = frozenset({"", "none", "clear", "-"})


def _local_midnight(day: dt.date) -> dt.datetime:
    return dt.datetime(day.year, day.month, day.day).astimezone()


def parse_instant(text: str, now: dt.datetime) -> Optional[dt.datetime]:
    """Parse overlay input into an aware instant; ``None`` means "clear".

    Accepts ``today``, ``tomorrow``, offsets like ``+3d``/``-2h``/``+1w``/``+30m``,
    ``YYYY-MM-DD``, ``YYYY-MM-DD HH:MM`` (local time) and full ISO-8601 with an
    offset or ``Z``. Raises ValueError for anything else.
    """
    s = (text or "").strip().lower()
    if s in CLEAR_WORDS:
        return None
    local_now = as_aware(now).astimezone()
    if s == "today":
        return _local_midnight(local_now.date())
    if s == "tomorrow":
        return _local_midnight(local_now.date() + dt.timedelta(days=1))
    m = _OFFSET_RE.match(s)
    if m:
        sign = 1 if m.group(1) == "+" else -1
        seconds = int(m.group(2)) * _UNIT_SECONDS[m.group(3)]
        return local_now + dt.timedelta(seconds=sign * seconds)
    if _DATE_RE.match(s):
        return _local_midnight(dt.datetime.strptime(s, "%Y-%m-%d").date())
    m = _DATE_TIME_RE.match(s)
    if m:
        hh, mm = int(m.group(2)), int(m.group(3))
        if not (0 <= hh <= 23 and 0 <= mm <= 59):
            raise ValueError(f"Invalid time: {text!r}")
        day = dt.datetime.strptime(m.group(1), "%Y-%m-%d")
        return day.replace(hour=hh, minute=mm).astimezone()
    raw = text.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = dt.datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Unrecognized date: {text!r}") from None
    return as_aware(parsed)


__all__ = ["CLEAR_WORDS", "parse_instant"]
