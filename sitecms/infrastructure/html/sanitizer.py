"""
HTML Sanitizer
==============

Cleans page HTML with bleach before it is stored. The rich-text tags and
the markup of the custom page blocks (``class`` and ``data-*`` attributes)
are kept; scripts, event handlers and unsafe URLs are removed.
"""
import bleach
from bleach.css_sanitizer import CSSSanitizer

ALLOWED_TAGS = frozenset({
    "a", "b", "blockquote", "br", "code", "col", "colgroup", "div", "em",
    "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i",
    "img", "li", "mark", "ol", "p", "pre", "s", "span", "strike", "strong",
    "sub", "sup", "table", "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul",
})

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})

GLOBAL_ATTRIBUTES = frozenset({"class", "style", "title", "contenteditable"})

TAG_ATTRIBUTES = {
    "a": {"href", "target", "rel"},
    "img": {"src", "alt", "width", "height"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan"},
    "col": {"span", "style"},
}

CSS_SANITIZER = CSSSanitizer(
    allowed_css_properties=[
        "color",
        "background-color",
        "font-weight",
        "font-style",
        "font-size",
        "font-family",
        "text-align",
        "text-decoration",
        "width",
        "height",
        "min-width",
    ]
)


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if name in GLOBAL_ATTRIBUTES or name.startswith("data-"):
        return True
    return name in TAG_ATTRIBUTES.get(tag, ())


def sanitize_html(html: str) -> str:
    """
    Sanitize page HTML.

    Args:
        html: Raw HTML from the page editor

    Returns:
        HTML with disallowed tags stripped and attributes filtered
    """
    return bleach.clean(
        html or "",
        tags=ALLOWED_TAGS,
        attributes=_allow_attribute,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=CSS_SANITIZER,
        strip=True,
        strip_comments=True,
    )
