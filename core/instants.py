"""Instant encodings used in task patches and the persisted snapshot."""

from datetime import datetime, timezone
from typing import Optional, Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(instant: datetime) -> datetime:
    """Attach the local zone to naive wall-clock values."""
    if instant.tzinfo is None:
        return instant.astimezone()
    return instant


def encode_absolute(instant: Optional[datetime]) -> Optional[int]:
    """Absolute (UTC-qualified) encoding: epoch milliseconds."""
    if instant is None:
        return None
    delta = as_aware(instant) - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def local_wall_clock(instant: datetime) -> datetime:
    """Naive local wall-clock time for ``instant``; naive input is already local."""
    return as_aware(instant).astimezone().replace(tzinfo=None)


def encode_naive(instant: Optional[datetime]) -> Optional[str]:
    """Local wall-clock ISO string without a zone offset (no ``Z`` marker)."""
    if instant is None:
        return None
    return local_wall_clock(instant).isoformat(timespec="milliseconds")


def decode_absolute(value: Union[int, float, str, None]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return as_aware(parsed).astimezone(timezone.utc)
    return datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)


def decode_naive(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return local_wall_clock(value)
    return datetime.fromisoformat(str(value).strip()).replace(tzinfo=None)


__all__ = [
    "EPOCH",
    "utc_now",
    "as_aware",
    "encode_absolute",
    "encode_naive",
    "local_wall_clock",
    "decode_absolute",
    "decode_naive",
]
