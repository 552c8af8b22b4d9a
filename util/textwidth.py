"""Printable-width helpers for wide (CJK, emoji) characters."""

from wcwidth import wcwidth


def display_width(text: str) -> int:
    text = (text or "").expandtabs(4)
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Cut ``text`` so its visible width does not exceed ``width``."""
    text = (text or "").expandtabs(4)
    acc = []
    used = 0
    for ch in text:
        w = max(0, wcwidth(ch) or 0)
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def pad_display(text: str, width: int, ellipsis: str = "…") -> str:
    """Trim (marking the cut with ``ellipsis``) and pad to exactly ``width`` columns."""
    if display_width(text) > width:
        text = trim_display(text, max(0, width - display_width(ellipsis))) + ellipsis
    return text + " " * max(0, width - display_width(text))


__all__ = ["display_width", "pad_display", "trim_display"]
