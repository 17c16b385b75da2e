"""
Get Public Page Use Case
========================

Builds the public view of a page: its sanitized HTML, the custom blocks
found in it, and the products each product-list block displays.
"""
from typing import Any, Dict, List

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.page_blocks import ProductListBlock, parse_blocks
from sitecms.domain.models.product import Product, ProductListConfig
from sitecms.domain.repositories.catalog_repository import ProductRepository
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from sitecms.infrastructure.html.sanitizer import sanitize_html


def product_card(product: Product, config: ProductListConfig) -> Dict[str, Any]:
    """Product fields a product-list block shows, according to its flags."""
    card: Dict[str, Any] = {"id": product.id}
    if config.show_name:
        card["name"] = product.name
    if config.show_description:
        card["description"] = product.description
    if config.show_price:
        card["price"] = product.price
    if config.show_image:
        card["image_url"] = product.image_url
    return card


class GetPublicPageUseCase:
    def __init__(
        self,
        menu_item_repository: MenuItemRepository,
        page_content_repository: PageContentRepository,
        product_repository: ProductRepository,
    ):
        self._menu_items = menu_item_repository
        self._page_contents = page_content_repository
        self._products = product_repository

    def execute(self, menu_item_id: str) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: If the menu item does not exist
        """
        menu_item = self._menu_items.find_by_id(menu_item_id)
        if menu_item is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")

        page = self._page_contents.find_by_menu_item_id(menu_item_id)
        html = sanitize_html(page.content) if page else ""

        blocks: List[Dict[str, Any]] = []
        products = None
        for block in parse_blocks(html):
            entry = block.to_dict()
            if isinstance(block, ProductListBlock):
                if products is None:
                    products = self._products.find_all()
                entry["products"] = [product_card(p, block.config) for p in block.config.apply(products)]
            blocks.append(entry)

        return {
            "menu_item_id": menu_item.id,
            "title": menu_item.text,
            "url": menu_item.url,
            "html": html,
            "blocks": blocks,
            "updated_at": page.updated_at if page else None,
        }
