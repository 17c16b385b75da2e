"""Predefined palette of theme colors selectable for the website."""
from typing import Dict

# token -> (display name, hex)
THEME_COLOR_PALETTE: Dict[str, tuple] = {
    "blue": ("Blue", "#3182ce"),
    "red": ("Red", "#e53e3e"),
    "green": ("Green", "#38a169"),
    "purple": ("Purple", "#805ad5"),
    "orange": ("Orange", "#dd6b20"),
    "teal": ("Teal", "#319795"),
    "pink": ("Pink", "#d53f8c"),
    "cyan": ("Cyan", "#00b5d8"),
    "beige": ("Beige", "#f5f0e1"),
    "cream": ("Cream", "#fffdd0"),
    "gold": ("Gold", "#eeb252"),
    "sand": ("Sand", "#f2e8de"),
    "taupe": ("Taupe", "#e2cbac"),
    "white": ("White", "#ffffff"),
}

DEFAULT_THEME_COLOR = "blue"
