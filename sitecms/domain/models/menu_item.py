"""
Menu Item Model
===============

Entry of the website's header menu. Each menu item can own one page of
content.
"""
import re
import unicodedata
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from sitecms.utils.datetime_utils import now

MENU_TEXT_MAX_LENGTH = 50
MENU_URL_MAX_LENGTH = 2048
INTERNAL_URL_PATTERN = re.compile(r"^/[a-z0-9\-/]*$")
EXTERNAL_URL_PATTERN = re.compile(r"^https?://[^\s]+$")


def slugify(text: str) -> str:
    """Build an internal menu URL ("/my-page") from a menu text."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")
    return f"/{slug}" if slug else "/"


def clean_menu_text(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise ValueError("Menu item text is required")
    if len(text) > MENU_TEXT_MAX_LENGTH:
        raise ValueError(f"Menu item text must be at most {MENU_TEXT_MAX_LENGTH} characters")
    return text


def clean_menu_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ValueError("Menu item URL is required")
    if len(url) > MENU_URL_MAX_LENGTH:
        raise ValueError("Menu item URL is too long")
    if not (INTERNAL_URL_PATTERN.match(url) or EXTERNAL_URL_PATTERN.match(url)):
        raise ValueError(
            "Menu item URL must be a lowercase path starting with '/' or an http(s) URL"
        )
    return url


@dataclass(frozen=True)
class MenuItem:
    """Immutable menu entry; ``with_*`` return updated copies."""
    text: str
    url: str
    position: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", clean_menu_text(self.text))
        object.__setattr__(self, "url", clean_menu_url(self.url))
        if isinstance(self.position, bool) or not isinstance(self.position, int) or self.position < 0:
            raise ValueError("Position must be a non-negative number")

    def with_text(self, text: str) -> "MenuItem":
        return replace(self, text=text, updated_at=now())

    def with_url(self, url: str) -> "MenuItem":
        return replace(self, url=url, updated_at=now())

    def with_position(self, position: int) -> "MenuItem":
        return replace(self, position=position, updated_at=now())
