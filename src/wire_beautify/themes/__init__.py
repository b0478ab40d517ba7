"""Theme definitions for rendered sheets."""

from wire_beautify.themes.dark import DARK_THEME
from wire_beautify.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "LIGHT_THEME", "DARK_THEME"]
