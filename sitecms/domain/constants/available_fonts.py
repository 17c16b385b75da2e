"""
Available Fonts
===============

Curated list of Google Fonts the website can use, grouped by category.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


FONT_CATEGORY_LABELS: Dict[str, str] = {
    "sans-serif": "Sans Serif",
    "serif": "Serif",
    "display": "Display",
    "handwriting": "Handwriting",
    "monospace": "Monospace",
}


@dataclass(frozen=True)
class FontMetadata:
    """Metadata for one selectable font."""
    name: str
    category: str
    weights: Tuple[int, ...]

    @property
    def family(self) -> str:
        fallback = "cursive" if self.category in ("display", "handwriting") else self.category
        return f"'{self.name}', {fallback}"


AVAILABLE_FONTS: List[FontMetadata] = [
    # Sans-serif
    FontMetadata("Inter", "sans-serif", (400, 500, 600, 700)),
    FontMetadata("Roboto", "sans-serif", (400, 500, 700)),
    FontMetadata("Open Sans", "sans-serif", (400, 600, 700)),
    FontMetadata("Lato", "sans-serif", (400, 700)),
    FontMetadata("Montserrat", "sans-serif", (400, 500, 600, 700)),
    FontMetadata("Poppins", "sans-serif", (400, 500, 600, 700)),
    FontMetadata("Nunito", "sans-serif", (400, 600, 700)),
    FontMetadata("Raleway", "sans-serif", (400, 500, 600, 700)),
    FontMetadata("Work Sans", "sans-serif", (400, 500, 600, 700)),
    FontMetadata("Quicksand", "sans-serif", (400, 500, 600, 700)),
    # Serif
    FontMetadata("Playfair Display", "serif", (400, 500, 600, 700)),
    FontMetadata("Merriweather", "serif", (400, 700)),
    FontMetadata("Lora", "serif", (400, 500, 600, 700)),
    FontMetadata("Crimson Text", "serif", (400, 600, 700)),
    FontMetadata("Source Serif Pro", "serif", (400, 600, 700)),
    FontMetadata("Libre Baskerville", "serif", (400, 700)),
    FontMetadata("PT Serif", "serif", (400, 700)),
    # Display
    FontMetadata("Oswald", "display", (400, 500, 600, 700)),
    FontMetadata("Bebas Neue", "display", (400,)),
    FontMetadata("Anton", "display", (400,)),
    FontMetadata("Archivo Black", "display", (400,)),
    FontMetadata("Righteous", "display", (400,)),
    # Handwriting
    FontMetadata("Dancing Script", "handwriting", (400, 500, 600, 700)),
    FontMetadata("Pacifico", "handwriting", (400,)),
    FontMetadata("Caveat", "handwriting", (400, 500, 600, 700)),
    FontMetadata("Satisfy", "handwriting", (400,)),
    FontMetadata("Great Vibes", "handwriting", (400,)),
    # Monospace
    FontMetadata("Fira Code", "monospace", (400, 500, 600, 700)),
    FontMetadata("Source Code Pro", "monospace", (400, 500, 600, 700)),
    FontMetadata("JetBrains Mono", "monospace", (400, 500, 600, 700)),
    FontMetadata("Roboto Mono", "monospace", (400, 500, 700)),
]

DEFAULT_FONT = "Inter"


def normalize_font_name(name: str) -> str:
    """Lowercase and collapse whitespace so lookups ignore formatting."""
    return " ".join(name.split()).lower()


_FONTS_BY_KEY: Dict[str, FontMetadata] = {
    normalize_font_name(font.name): font for font in AVAILABLE_FONTS
}


def find_font(name: Optional[str]) -> Optional[FontMetadata]:
    """Look up a font by name, case-insensitively."""
    if not name:
        return None
    return _FONTS_BY_KEY.get(normalize_font_name(name))


def fonts_by_category() -> Dict[str, List[FontMetadata]]:
    grouped: Dict[str, List[FontMetadata]] = {category: [] for category in FONT_CATEGORY_LABELS}
    for font in AVAILABLE_FONTS:
        grouped[font.category].append(font)
    return grouped
