"""
Page Blocks
===========

Custom blocks the page editor inserts into page HTML, and the parser that
reads them back.

Supported blocks:
- callout: highlighted paragraph with an emoji (``div.callout-block``)
- cardGrid: grid of title/body cards (``div.card-grid``)
- table: bordered table (``table``)
- productList: catalog products rendered from a ProductListConfig (``div.product-list``)
- buttonLink: call-to-action link (``div.button-link-wrapper``)
- imageWithOverlay: image with optional overlaid text (``div.image-with-overlay``)

Every block renders with ``to_html()`` to the same markup ``parse_blocks``
recognises.
"""
from dataclasses import dataclass, field
from html import escape
from html.parser import HTMLParser
from typing import Callable, ClassVar, Dict, List, Optional, Tuple

from sitecms.domain.models.product import (
    PRODUCT_LIST_LAYOUTS,
    PRODUCT_LIST_SORTS,
    ProductListConfig,
)

VOID_TAGS = frozenset({"area", "br", "col", "hr", "img", "input", "link", "meta", "source", "wbr"})

CALLOUT_VARIANTS: Dict[str, str] = {
    "info": "ℹ️",
    "tip": "✨",
    "warning": "⚠️",
    "highlight": "\U0001f4a1",
}
TABLE_BORDER_MIN = 1
TABLE_BORDER_MAX = 5
TABLE_BORDER_DEFAULT = 1
OVERLAY_SIZES = ("small", "medium", "large")
OVERLAY_POSITIONS = ("top", "center", "bottom")
OVERLAY_ALIGNS = ("left", "center", "right")
SAFE_LINK_PREFIXES = ("http://", "https://", "mailto:", "tel:", "/", "#")


# ---------------------------------------------------------------------------
# Minimal HTML tree
# ---------------------------------------------------------------------------

@dataclass
class HtmlNode:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["HtmlNode"] = field(default_factory=list)
    text: str = ""

    @property
    def is_text(self) -> bool:
        return self.tag == "#text"

    @property
    def classes(self) -> List[str]:
        return self.attrs.get("class", "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def find(self, predicate: Callable[["HtmlNode"], bool]) -> Optional["HtmlNode"]:
        for child in self.children:
            if not child.is_text and predicate(child):
                return child
            found = child.find(predicate)
            if found is not None:
                return found
        return None

    def find_all(self, predicate: Callable[["HtmlNode"], bool]) -> List["HtmlNode"]:
        matches = []
        for child in self.children:
            if not child.is_text and predicate(child):
                matches.append(child)
            matches.extend(child.find_all(predicate))
        return matches

    def text_content(self) -> str:
        if self.is_text:
            return self.text
        return "".join(child.text_content() for child in self.children)

    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    def to_html(self) -> str:
        if self.is_text:
            return escape(self.text, quote=False)
        attrs = "".join(f' {name}="{escape(value)}"' for name, value in self.attrs.items())
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = HtmlNode("#root")
        self._stack: List[HtmlNode] = [self.root]

    def handle_starttag(self, tag, attrs):
        node = HtmlNode(tag, {name: value if value is not None else "" for name, value in attrs})
        self._stack[-1].children.append(node)
        if tag not in VOID_TAGS:
            self._stack.append(node)

    def handle_endtag(self, tag):
        for index in range(len(self._stack) - 1, 0, -1):
            if self._stack[index].tag == tag:
                del self._stack[index:]
                return

    def handle_data(self, data):
        self._stack[-1].children.append(HtmlNode("#text", text=data))


def parse_html(html: str) -> HtmlNode:
    """Parse an HTML fragment into a tree rooted at a ``#root`` node."""
    builder = _TreeBuilder()
    builder.feed(html or "")
    builder.close()
    return builder.root


def safe_link(url: Optional[str]) -> str:
    url = (url or "").strip()
    if url.lower().startswith(SAFE_LINK_PREFIXES):
        return url
    return "#"


def _attr_flag(node: HtmlNode, name: str, default: bool = True) -> bool:
    value = node.attrs.get(name)
    if value is None:
        return default
    return value != "false"


def _choice(value: Optional[str], allowed: Tuple[str, ...], default: str) -> str:
    return value if value in allowed else default


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CalloutBlock:
    type: ClassVar[str] = "callout"
    variant: str = "info"
    emoji: str = CALLOUT_VARIANTS["info"]
    content_html: str = "<p></p>"

    def __post_init__(self) -> None:
        if self.variant not in CALLOUT_VARIANTS:
            raise ValueError(f"Invalid callout variant '{self.variant}'")

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "div" and node.has_class("callout-block")

    @classmethod
    def from_node(cls, node: HtmlNode) -> "CalloutBlock":
        variant = _choice(node.attrs.get("data-variant"), tuple(CALLOUT_VARIANTS), "info")
        emoji = node.attrs.get("data-emoji") or CALLOUT_VARIANTS[variant]
        content = node.find(lambda n: n.has_class("callout-block__content"))
        if content is not None:
            content_html = content.inner_html()
        else:
            content_html = "".join(
                child.to_html() for child in node.children
                if child.is_text or not child.has_class("callout-block__emoji")
            )
        return cls(variant=variant, emoji=emoji, content_html=content_html)

    def to_html(self) -> str:
        variant = escape(self.variant)
        emoji = escape(self.emoji)
        return (
            f'<div class="callout-block callout-block--{variant}" '
            f'data-variant="{variant}" data-emoji="{emoji}">'
            f'<span class="callout-block__emoji" contenteditable="false">{emoji}</span>'
            f'<div class="callout-block__content">{self.content_html}</div></div>'
        )

    def to_dict(self) -> dict:
        return {"type": self.type, "variant": self.variant, "emoji": self.emoji, "html": self.content_html}


@dataclass(frozen=True)
class Card:
    title_html: str
    body_html: str


@dataclass(frozen=True)
class CardGridBlock:
    type: ClassVar[str] = "cardGrid"
    cards: Tuple[Card, ...] = ()

    def __post_init__(self) -> None:
        if not self.cards:
            raise ValueError("A card grid needs at least one card")

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "div" and node.has_class("card-grid")

    @classmethod
    def from_node(cls, node: HtmlNode) -> Optional["CardGridBlock"]:
        cards = []
        for card in (child for child in node.children if not child.is_text and child.has_class("card")):
            title = card.find(lambda n: n.has_class("card-title"))
            body = card.find(lambda n: n.has_class("card-body"))
            cards.append(Card(
                title_html=title.inner_html() if title is not None else "",
                body_html=body.inner_html() if body is not None else "",
            ))
        if not cards:
            return None
        return cls(cards=tuple(cards))

    def to_html(self) -> str:
        cards = "".join(
            f'<div class="card"><div class="card-title">{card.title_html}</div>'
            f'<div class="card-body">{card.body_html}</div></div>'
            for card in self.cards
        )
        return f'<div class="card-grid">{cards}</div>'

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "cards": [{"title": card.title_html, "body": card.body_html} for card in self.cards],
        }


@dataclass(frozen=True)
class TableBlock:
    type: ClassVar[str] = "table"
    rows: Tuple[Tuple[str, ...], ...] = ()
    has_header: bool = False
    border_thickness: int = TABLE_BORDER_DEFAULT

    def __post_init__(self) -> None:
        thickness = max(TABLE_BORDER_MIN, min(TABLE_BORDER_MAX, int(self.border_thickness)))
        object.__setattr__(self, "border_thickness", thickness)

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "table"

    @classmethod
    def from_node(cls, node: HtmlNode) -> "TableBlock":
        rows = []
        has_header = False
        for index, row in enumerate(node.find_all(lambda n: n.tag == "tr")):
            cells = [cell for cell in row.children if cell.tag in ("td", "th")]
            if index == 0 and cells and all(cell.tag == "th" for cell in cells):
                has_header = True
            rows.append(tuple(cell.text_content().strip() for cell in cells))
        try:
            thickness = int(node.attrs.get("data-border-thickness", TABLE_BORDER_DEFAULT))
        except ValueError:
            thickness = TABLE_BORDER_DEFAULT
        return cls(rows=tuple(rows), has_header=has_header, border_thickness=thickness)

    def to_html(self) -> str:
        body = []
        for index, row in enumerate(self.rows):
            cell_tag = "th" if index == 0 and self.has_header else "td"
            cells = "".join(f"<{cell_tag}>{escape(cell)}</{cell_tag}>" for cell in row)
            body.append(f"<tr>{cells}</tr>")
        return (
            f'<table class="tiptap-table" data-border-thickness="{self.border_thickness}">'
            f'<tbody>{"".join(body)}</tbody></table>'
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "rows": [list(row) for row in self.rows],
            "hasHeader": self.has_header,
            "borderThickness": self.border_thickness,
        }


@dataclass(frozen=True)
class ProductListBlock:
    type: ClassVar[str] = "productList"
    config: ProductListConfig = field(default_factory=ProductListConfig.default)

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "div" and node.has_class("product-list")

    @classmethod
    def from_node(cls, node: HtmlNode) -> "ProductListBlock":
        raw_ids = node.attrs.get("data-category-ids", "")
        category_ids = tuple(cid.strip() for cid in raw_ids.split(",") if cid.strip()) or None
        try:
            max_products = int(node.attrs["data-max-products"])
            if max_products < 1:
                max_products = None
        except (KeyError, ValueError):
            max_products = None
        config = ProductListConfig(
            category_ids=category_ids,
            layout=_choice(node.attrs.get("data-layout"), PRODUCT_LIST_LAYOUTS, "grid"),
            sort_by=_choice(node.attrs.get("data-sort-by"), PRODUCT_LIST_SORTS, "displayOrder"),
            show_name=_attr_flag(node, "data-show-name"),
            show_description=_attr_flag(node, "data-show-description"),
            show_price=_attr_flag(node, "data-show-price"),
            show_image=_attr_flag(node, "data-show-image"),
            max_products=max_products,
        )
        return cls(config=config)

    def to_html(self) -> str:
        config = self.config
        attrs = {
            "class": "product-list",
            "data-layout": config.layout,
            "data-sort-by": config.sort_by,
            "data-show-name": str(config.show_name).lower(),
            "data-show-description": str(config.show_description).lower(),
            "data-show-price": str(config.show_price).lower(),
            "data-show-image": str(config.show_image).lower(),
        }
        if config.category_ids:
            attrs["data-category-ids"] = ",".join(config.category_ids)
        if config.max_products is not None:
            attrs["data-max-products"] = str(config.max_products)
        rendered = "".join(f' {name}="{escape(value)}"' for name, value in attrs.items())

        layout_label = "Grid" if config.layout == "grid" else "List"
        if config.category_ids:
            count = len(config.category_ids)
            category_label = f"filtered by {count} {'category' if count == 1 else 'categories'}"
        else:
            category_label = "all categories"
        return (
            f"<div{rendered}><div class=\"product-list-placeholder\">"
            f"Products ({layout_label} - {category_label})</div></div>"
        )

    def to_dict(self) -> dict:
        return {"type": self.type, "config": self.config.to_dict()}


@dataclass(frozen=True)
class ButtonLinkBlock:
    type: ClassVar[str] = "buttonLink"
    text: str = "Click here"
    url: str = "#"

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", (self.text or "").strip() or "Click here")
        object.__setattr__(self, "url", safe_link(self.url))

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "div" and node.has_class("button-link-wrapper")

    @classmethod
    def from_node(cls, node: HtmlNode) -> "ButtonLinkBlock":
        anchor = node.find(lambda n: n.tag == "a")
        url = (anchor.attrs.get("href") if anchor is not None else None) or node.attrs.get("data-url")
        text = anchor.text_content() if anchor is not None else ""
        return cls(text=text, url=url or "#")

    def to_html(self) -> str:
        url = escape(self.url)
        return (
            f'<div class="button-link-wrapper" data-url="{url}">'
            f'<a class="button-link" href="{url}">{escape(self.text, quote=False)}</a></div>'
        )

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text, "url": self.url}


@dataclass(frozen=True)
class ImageWithOverlayBlock:
    type: ClassVar[str] = "imageWithOverlay"
    src: str = ""
    alt: str = ""
    overlay_text: Optional[str] = None
    overlay_color: str = "#ffffff"
    overlay_size: str = "medium"
    overlay_position: str = "center"
    overlay_align: str = "center"
    full_width: bool = False

    def __post_init__(self) -> None:
        if not self.src:
            raise ValueError("An image block needs a source URL")
        object.__setattr__(self, "src", safe_link(self.src))
        object.__setattr__(self, "overlay_text", (self.overlay_text or "").strip() or None)
        object.__setattr__(self, "overlay_size", _choice(self.overlay_size, OVERLAY_SIZES, "medium"))
        object.__setattr__(self, "overlay_position", _choice(self.overlay_position, OVERLAY_POSITIONS, "center"))
        object.__setattr__(self, "overlay_align", _choice(self.overlay_align, OVERLAY_ALIGNS, "center"))

    @classmethod
    def matches(cls, node: HtmlNode) -> bool:
        return node.tag == "div" and node.has_class("image-with-overlay")

    @classmethod
    def from_node(cls, node: HtmlNode) -> Optional["ImageWithOverlayBlock"]:
        image = node.find(lambda n: n.tag == "img")
        if image is None or not image.attrs.get("src"):
            return None
        return cls(
            src=image.attrs["src"],
            alt=image.attrs.get("alt", ""),
            overlay_text=node.attrs.get("data-overlay-text"),
            overlay_color=node.attrs.get("data-overlay-color") or "#ffffff",
            overlay_size=node.attrs.get("data-overlay-size", "medium"),
            overlay_position=node.attrs.get("data-overlay-position", "center"),
            overlay_align=node.attrs.get("data-overlay-align", "center"),
            full_width=node.attrs.get("data-full-width") == "true",
        )

    def to_html(self) -> str:
        attrs = {
            "class": "image-with-overlay",
            "data-overlay-color": self.overlay_color,
            "data-overlay-size": self.overlay_size,
            "data-overlay-position": self.overlay_position,
            "data-overlay-align": self.overlay_align,
        }
        if self.overlay_text:
            attrs["data-overlay-text"] = self.overlay_text
        if self.full_width:
            attrs["data-full-width"] = "true"
        rendered = "".join(f' {name}="{escape(value)}"' for name, value in attrs.items())
        overlay = ""
        if self.overlay_text:
            overlay = (
                f'<div class="text-overlay text-overlay-{self.overlay_position} '
                f'text-overlay-align-{self.overlay_align}">{escape(self.overlay_text, quote=False)}</div>'
            )
        return (
            f'<div{rendered}><img class="tiptap-image" src="{escape(self.src)}" '
            f'alt="{escape(self.alt)}">{overlay}</div>'
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "src": self.src,
            "alt": self.alt,
            "overlayText": self.overlay_text,
            "overlayColor": self.overlay_color,
            "overlaySize": self.overlay_size,
            "overlayPosition": self.overlay_position,
            "overlayAlign": self.overlay_align,
            "fullWidth": self.full_width,
        }


BLOCK_TYPES = (
    CalloutBlock,
    CardGridBlock,
    TableBlock,
    ProductListBlock,
    ButtonLinkBlock,
    ImageWithOverlayBlock,
)


def parse_blocks(html: str) -> list:
    """
    Extract the custom blocks of a page, in document order.

    Blocks are not searched for inside other blocks. Markup that looks like a
    block but cannot be read (e.g. an image block without an image) is skipped.
    """
    blocks = []

    def visit(node: HtmlNode) -> None:
        for child in node.children:
            if child.is_text:
                continue
            block_type = next((bt for bt in BLOCK_TYPES if bt.matches(child)), None)
            if block_type is None:
                visit(child)
                continue
            try:
                block = block_type.from_node(child)
            except ValueError:
                block = None
            if block is not None:
                blocks.append(block)

    visit(parse_html(html))
    return blocks


def render_blocks(blocks: list) -> str:
    return "".join(block.to_html() for block in blocks)
