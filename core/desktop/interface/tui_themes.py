#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "status.error": "#e06c75 bold",
        "tooltip": "#e5c07b",
        "task": "",
        "task.deferred": "#6d717a",
        "task.content": "#d7dfe6",
        "task.completed": "#7a7f85 strike",
        "task.bullet": "#97a0a9",
        "task.bullet.done": "#9ad974 bold",
        "action": "#97a0a9",
        "action.active": "bg:#3b3b3b #ffb347 bold",
        "action.divider": "#4b525a",
        "tags": "#8fbcbb",
        "overlay": "bg:#262626 #d7dfe6",
        "overlay.input": "bg:#303030 #ffffff",
        "overlay.error": "#e06c75 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "status.error": "#ff6b6b bold",
        "tooltip": "#f0c674",
        "task": "",
        "task.deferred": "#6f757d",
        "task.content": "#e8eaec",
        "task.completed": "#8a9097 strike",
        "task.bullet": "#a7b0ba",
        "task.bullet.done": "#b8f171 bold",
        "action": "#a7b0ba",
        "action.active": "bg:#3d4047 #ffb347 bold",
        "action.divider": "#5a6169",
        "tags": "#88c0d0",
        "overlay": "bg:#1f2125 #e8eaec",
        "overlay.input": "bg:#2c2f35 #ffffff",
        "overlay.error": "#ff6b6b bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    return Style.from_dict(get_theme_palette(theme))
