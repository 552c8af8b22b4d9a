from .task import DateField, PATCH_FIELDS, PatchError, Task, apply_patch, normalize_tags
from .deferred import is_deferred
from .instants import (
    as_aware,
    decode_absolute,
    decode_naive,
    encode_absolute,
    encode_naive,
    local_wall_clock,
    utc_now,
)

__all__ = [
    "Task",
    "DateField",
    "PatchError",
    "PATCH_FIELDS",
    "apply_patch",
    "normalize_tags",
    "is_deferred",
    # Instants
    "as_aware",
    "utc_now",
    "encode_absolute",
    "encode_naive",
    "decode_absolute",
    "decode_naive",
    "local_wall_clock",
]
