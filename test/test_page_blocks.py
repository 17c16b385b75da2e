"""Tests for page block parsing and HTML sanitizing."""
import pytest

from sitecms.domain.models.page_blocks import (
    ButtonLinkBlock,
    CalloutBlock,
    Card,
    CardGridBlock,
    ImageWithOverlayBlock,
    ProductListBlock,
    TableBlock,
    parse_blocks,
    render_blocks,
    safe_link,
)
from sitecms.domain.models.product import ProductListConfig
from sitecms.infrastructure.html.sanitizer import sanitize_html


class TestParseBlocks:
    def test_blocks_in_document_order(self):
        html = (
            "<h1>Welcome</h1>"
            '<div class="callout-block" data-variant="tip"><p>Free delivery</p></div>'
            "<p>Intro</p>"
            '<div class="button-link-wrapper"><a href="/shop">Visit the shop</a></div>'
        )

        blocks = parse_blocks(html)

        assert [block.type for block in blocks] == ["callout", "buttonLink"]
        assert blocks[0].variant == "tip"
        assert blocks[0].content_html == "<p>Free delivery</p>"
        assert blocks[1].text == "Visit the shop"
        assert blocks[1].url == "/shop"

    def test_product_list_attributes(self):
        html = (
            '<div class="product-list" data-layout="list" data-sort-by="price" '
            'data-category-ids="c1, c2" data-show-price="false" data-max-products="4"></div>'
        )

        (block,) = parse_blocks(html)

        assert block.config == ProductListConfig(
            category_ids=("c1", "c2"), layout="list", sort_by="price", show_price=False, max_products=4
        )

    def test_product_list_ignores_bad_values(self):
        html = '<div class="product-list" data-layout="carousel" data-max-products="-2"></div>'
        (block,) = parse_blocks(html)
        assert block.config == ProductListConfig.default()

    def test_table_header_and_border(self):
        html = (
            '<table data-border-thickness="9"><tbody>'
            "<tr><th>Size</th><th>Price</th></tr><tr><td>S</td><td>10</td></tr>"
            "</tbody></table>"
        )

        (block,) = parse_blocks(html)

        assert block.has_header
        assert block.rows == (("Size", "Price"), ("S", "10"))
        assert block.border_thickness == 5

    def test_card_grid(self):
        html = (
            '<div class="card-grid">'
            '<div class="card"><div class="card-title">One</div><div class="card-body"><p>First</p></div></div>'
            '<div class="card"><div class="card-title">Two</div><div class="card-body"></div></div>'
            "</div>"
        )
        (block,) = parse_blocks(html)
        assert block.cards == (Card("One", "<p>First</p>"), Card("Two", ""))

    def test_unreadable_blocks_are_skipped(self):
        html = '<div class="image-with-overlay"></div><div class="card-grid"></div>'
        assert parse_blocks(html) == []

    def test_empty_html(self):
        assert parse_blocks("") == []
        assert parse_blocks(None) == []

    @pytest.mark.parametrize("block", [
        CalloutBlock(variant="warning", content_html="<p>Closed on Sunday</p>"),
        CardGridBlock(cards=(Card("A", "<p>a</p>"),)),
        TableBlock(rows=(("a", "b"),), has_header=True, border_thickness=2),
        ProductListBlock(ProductListConfig(category_ids=("c1",), max_products=3)),
        ButtonLinkBlock(text="Book", url="https://example.com/book"),
        ImageWithOverlayBlock(src="/images/a.png", alt="A", overlay_text="Hello", full_width=True),
    ])
    def test_rendered_blocks_parse_back(self, block):
        assert parse_blocks(render_blocks([block])) == [block]


class TestBlockRules:
    def test_unsafe_links_become_anchors(self):
        assert safe_link("javascript:alert(1)") == "#"
        assert safe_link("tel:+33612345678") == "tel:+33612345678"
        assert ButtonLinkBlock(text="  ", url="javascript:x").to_dict() == {
            "type": "buttonLink", "text": "Click here", "url": "#",
        }

    def test_invalid_callout_variant(self):
        with pytest.raises(ValueError):
            CalloutBlock(variant="danger")

    def test_image_requires_source(self):
        with pytest.raises(ValueError):
            ImageWithOverlayBlock(src="")

    def test_product_list_placeholder_label(self):
        html = ProductListBlock(ProductListConfig(category_ids=("c1", "c2"))).to_html()
        assert "Products (Grid - filtered by 2 categories)" in html


class TestSanitizer:
    def test_scripts_and_handlers_removed(self):
        cleaned = sanitize_html('<p onclick="steal()">Hi<script>alert(1)</script></p>')
        assert "<script" not in cleaned
        assert "onclick" not in cleaned
        assert cleaned.startswith("<p>Hi")

    def test_javascript_urls_removed(self):
        cleaned = sanitize_html('<a href="javascript:alert(1)">x</a>')
        assert "javascript" not in cleaned

    def test_block_markup_is_kept(self):
        html = ButtonLinkBlock(text="Book", url="https://example.com").to_html()
        assert parse_blocks(sanitize_html(html)) == parse_blocks(html)

    def test_disallowed_css_dropped(self):
        cleaned = sanitize_html('<span style="color: red; position: fixed">x</span>')
        assert "color: red" in cleaned
        assert "position" not in cleaned
