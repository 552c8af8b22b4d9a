from prompt_toolkit.styles import Style

from core.desktop.interface.tui_themes import DEFAULT_THEME, THEMES, build_style, get_theme_palette


def test_unknown_theme_falls_back_to_default():
    assert get_theme_palette("non-existent") == THEMES[DEFAULT_THEME]


def test_palette_is_a_copy():
    palette = get_theme_palette(DEFAULT_THEME)
    palette["text"] = "#000000"
    assert THEMES[DEFAULT_THEME]["text"] != "#000000"


def test_themes_define_the_same_classes():
    keys = {name: set(palette) for name, palette in THEMES.items()}
    assert len(set(map(frozenset, keys.values()))) == 1
    assert "task.completed" in keys[DEFAULT_THEME]
    assert "strike" in THEMES[DEFAULT_THEME]["task.completed"]


def test_build_style():
    assert isinstance(build_style("dark-contrast"), Style)
