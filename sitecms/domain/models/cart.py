"""
Cart Item Model
===============

A line of the visitor's cart before checkout. The cart itself lives in the
browser; the API validates lines when they are submitted.
"""
from dataclasses import dataclass
from typing import Any, Optional

MIN_QUANTITY = 1
MAX_QUANTITY = 99


@dataclass(frozen=True)
class CartItem:
    """Product id and a quantity between MIN_QUANTITY and MAX_QUANTITY."""
    product_id: str
    quantity: int = MIN_QUANTITY

    def __post_init__(self) -> None:
        if not self.product_id or not str(self.product_id).strip():
            raise ValueError("Product ID is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("Quantity must be an integer")
        if not MIN_QUANTITY <= self.quantity <= MAX_QUANTITY:
            raise ValueError(f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}")

    def with_quantity(self, quantity: int) -> "CartItem":
        """Return a copy with ``quantity`` clamped into the allowed range."""
        clamped = max(MIN_QUANTITY, min(MAX_QUANTITY, int(quantity)))
        return CartItem(self.product_id, clamped)

    def increment(self) -> "CartItem":
        return self.with_quantity(self.quantity + 1)

    def decrement(self) -> Optional["CartItem"]:
        """Return a copy with one less unit, or None when already at the minimum."""
        if self.quantity <= MIN_QUANTITY:
            return None
        return CartItem(self.product_id, self.quantity - 1)

    def to_json(self) -> dict:
        return {"productId": self.product_id, "quantity": self.quantity}

    @classmethod
    def from_json(cls, data: Any) -> Optional["CartItem"]:
        """Build a cart item from stored JSON, or None when the payload is invalid."""
        if not isinstance(data, dict):
            return None
        try:
            return cls(data.get("productId"), data.get("quantity"))
        except ValueError:
            return None
