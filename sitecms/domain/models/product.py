"""
Catalog Models
==============

Domain models for the product catalog: categories, products and the
configuration of a product-list block embedded in page content.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from sitecms.utils.datetime_utils import now


CATEGORY_NAME_MAX_LENGTH = 100
CATEGORY_DESCRIPTION_MAX_LENGTH = 2000
PRODUCT_NAME_MAX_LENGTH = 200
PRODUCT_DESCRIPTION_MAX_LENGTH = 5000


def _new_id() -> str:
    return str(uuid.uuid4())


def _clean_name(value: Optional[str], label: str, max_length: int) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{label} name is required")
    value = str(value).strip()
    if len(value) > max_length:
        raise ValueError(f"{label} name must be at most {max_length} characters")
    return value


def _clean_description(value: Optional[str], label: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if len(value) > max_length:
        raise ValueError(f"{label} description must be at most {max_length} characters")
    return value


def _check_display_order(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("Display order must be a non-negative integer")
    return value


@dataclass
class Category:
    """
    Product category.

    Categories group products; a product can belong to several categories.
    """
    name: str
    description: Optional[str] = None
    display_order: int = 0
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.name = _clean_name(self.name, "Category", CATEGORY_NAME_MAX_LENGTH)
        self.description = _clean_description(
            self.description, "Category", CATEGORY_DESCRIPTION_MAX_LENGTH
        )
        self.display_order = _check_display_order(self.display_order)

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        display_order: Optional[int] = None,
        clear_description: bool = False,
    ) -> None:
        """Apply a partial update; unspecified fields are left unchanged."""
        if name is not None:
            self.name = _clean_name(name, "Category", CATEGORY_NAME_MAX_LENGTH)
        if clear_description:
            self.description = None
        elif description is not None:
            self.description = _clean_description(
                description, "Category", CATEGORY_DESCRIPTION_MAX_LENGTH
            )
        if display_order is not None:
            self.display_order = _check_display_order(display_order)
        self.updated_at = now()


@dataclass
class Product:
    """
    Product of the catalog.

    Price is in euros and must be strictly positive.
    """
    name: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0
    category_ids: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.name = _clean_name(self.name, "Product", PRODUCT_NAME_MAX_LENGTH)
        self.price = self._check_price(self.price)
        self.description = _clean_description(
            self.description, "Product", PRODUCT_DESCRIPTION_MAX_LENGTH
        )
        self.image_url = (self.image_url or "").strip() or None
        self.display_order = _check_display_order(self.display_order)
        # keep first occurrence order, drop duplicates
        self.category_ids = list(dict.fromkeys(self.category_ids or []))

    @staticmethod
    def _check_price(price: float) -> float:
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError("Product price must be a number")
        if price <= 0:
            raise ValueError("Product price must be greater than 0")
        return float(price)

    def add_category(self, category_id: str) -> None:
        """Attach a category; attaching twice is a no-op."""
        if category_id not in self.category_ids:
            self.category_ids.append(category_id)
            self.updated_at = now()

    def remove_category(self, category_id: str) -> None:
        if category_id in self.category_ids:
            self.category_ids.remove(category_id)
            self.updated_at = now()

    def belongs_to_any(self, category_ids: List[str]) -> bool:
        return any(category_id in self.category_ids for category_id in category_ids)

    def update(
        self,
        name: Optional[str] = None,
        price: Optional[float] = None,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        display_order: Optional[int] = None,
        category_ids: Optional[List[str]] = None,
    ) -> None:
        """Apply a partial update; unspecified fields are left unchanged."""
        if name is not None:
            self.name = _clean_name(name, "Product", PRODUCT_NAME_MAX_LENGTH)
        if price is not None:
            self.price = self._check_price(price)
        if description is not None:
            self.description = _clean_description(
                description, "Product", PRODUCT_DESCRIPTION_MAX_LENGTH
            )
        if image_url is not None:
            self.image_url = image_url.strip() or None
        if display_order is not None:
            self.display_order = _check_display_order(display_order)
        if category_ids is not None:
            self.category_ids = list(dict.fromkeys(category_ids))
        self.updated_at = now()


PRODUCT_LIST_LAYOUTS = ("grid", "list")
PRODUCT_LIST_SORTS = ("displayOrder", "name", "price", "createdAt")


@dataclass(frozen=True)
class ProductListConfig:
    """
    Display configuration of a product-list page block.

    ``category_ids`` of None shows every product; ``max_products`` of None
    shows them all.
    """
    category_ids: Optional[tuple] = None
    layout: str = "grid"
    sort_by: str = "displayOrder"
    show_name: bool = True
    show_description: bool = True
    show_price: bool = True
    show_image: bool = True
    max_products: Optional[int] = None

    def __post_init__(self) -> None:
        if self.layout not in PRODUCT_LIST_LAYOUTS:
            raise ValueError(f"Invalid product list layout '{self.layout}'")
        if self.sort_by not in PRODUCT_LIST_SORTS:
            raise ValueError(f"Invalid product list sort '{self.sort_by}'")
        if self.max_products is not None and (
            isinstance(self.max_products, bool)
            or not isinstance(self.max_products, int)
            or self.max_products < 1
        ):
            raise ValueError("max_products must be a positive integer")
        if self.category_ids is not None:
            ids = tuple(cid.strip() for cid in self.category_ids if cid and cid.strip())
            object.__setattr__(self, "category_ids", ids or None)

    @classmethod
    def default(cls) -> "ProductListConfig":
        return cls()

    def with_categories(self, category_ids: Optional[List[str]]) -> "ProductListConfig":
        return replace(self, category_ids=tuple(category_ids) if category_ids else None)

    def apply(self, products: List[Product]) -> List[Product]:
        """Filter, sort and truncate products according to this configuration."""
        selected = products
        if self.category_ids:
            selected = [p for p in selected if p.belongs_to_any(list(self.category_ids))]
        selected = sort_products(selected, self.sort_by)
        if self.max_products is not None:
            selected = selected[: self.max_products]
        return selected

    def to_dict(self) -> dict:
        return {
            "categoryIds": list(self.category_ids) if self.category_ids else None,
            "layout": self.layout,
            "sortBy": self.sort_by,
            "showName": self.show_name,
            "showDescription": self.show_description,
            "showPrice": self.show_price,
            "showImage": self.show_image,
            "maxProducts": self.max_products,
        }


def sort_products(products: List[Product], sort_by: str) -> List[Product]:
    """Sort products by one of PRODUCT_LIST_SORTS; unknown keys fall back to display order."""
    if sort_by == "name":
        key = lambda p: (p.name.lower(), p.display_order)
    elif sort_by == "price":
        key = lambda p: (p.price, p.display_order)
    elif sort_by == "createdAt":
        # newest first
        return sorted(products, key=lambda p: p.created_at, reverse=True)
    else:
        key = lambda p: (p.display_order, p.name.lower())
    return sorted(products, key=key)
