"""
Page Content Model
==================

HTML body of the page attached to a menu item.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from sitecms.utils.datetime_utils import now

PAGE_CONTENT_MAX_BYTES = 1024 * 1024


def clean_page_body(content: str) -> str:
    if content is None or not str(content).strip():
        raise ValueError("Page content cannot be empty")
    if len(content.encode("utf-8")) > PAGE_CONTENT_MAX_BYTES:
        raise ValueError("Page content is too large (max 1 MB)")
    return content


@dataclass(frozen=True)
class PageContent:
    """One page per menu item; ``with_content`` returns an updated copy."""
    menu_item_id: str
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        if not self.menu_item_id:
            raise ValueError("Menu item ID is required")
        object.__setattr__(self, "content", clean_page_body(self.content))

    def with_content(self, content: str) -> "PageContent":
        return replace(self, content=content, updated_at=now())
