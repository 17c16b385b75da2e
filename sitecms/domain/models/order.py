"""
Order Model
===========

Domain model representing a customer order placed at checkout.
"""
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Set

from sitecms.utils.datetime_utils import now
from sitecms.utils.formatting import round_money

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
FRENCH_PHONE_PATTERNS = (
    re.compile(r"^0[1-9][0-9]{8}$"),
    re.compile(r"^\+33[1-9][0-9]{8}$"),
)


class OrderStatus(str, Enum):
    """Lifecycle of an order."""
    NEW = "NEW"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"

    @classmethod
    def from_string(cls, value: str) -> "OrderStatus":
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Invalid order status '{value}'") from None


ORDER_STATUS_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.NEW: {OrderStatus.CONFIRMED, OrderStatus.COMPLETED},
    OrderStatus.CONFIRMED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
}


def normalize_phone(phone: str) -> str:
    """Strip spaces, dashes and dots from a phone number."""
    return re.sub(r"[\s\-.]", "", phone or "")


def is_valid_french_phone(phone: str) -> bool:
    normalized = normalize_phone(phone)
    return any(pattern.match(normalized) for pattern in FRENCH_PHONE_PATTERNS)


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a product line at the time of the order."""
    product_id: str
    product_name: str
    quantity: int
    unit_price: float

    def __post_init__(self) -> None:
        if not self.product_id or not str(self.product_id).strip():
            raise ValueError("Order item product ID is required")
        if not self.product_name or not str(self.product_name).strip():
            raise ValueError("Order item product name is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("Order item quantity must be a positive integer")
        if isinstance(self.unit_price, bool) or not isinstance(self.unit_price, (int, float)):
            raise ValueError("Order item unit price must be a number")
        if self.unit_price < 0:
            raise ValueError("Order item unit price cannot be negative")

    @property
    def total(self) -> float:
        return round_money(self.quantity * self.unit_price)


@dataclass
class Order:
    """
    Customer order.

    The customer identity is validated on creation; the email is stored
    lowercased and the phone keeps the format the customer typed.
    """
    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.NEW
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        first = (self.customer_first_name or "").strip()
        last = (self.customer_last_name or "").strip()
        if not first or not last:
            raise ValueError("Customer first name and last name are required")
        self.customer_first_name = first
        self.customer_last_name = last

        email = (self.customer_email or "").strip().lower()
        if not email:
            raise ValueError("Customer email is required")
        if not EMAIL_PATTERN.match(email):
            raise ValueError("Customer email is invalid")
        self.customer_email = email

        phone = (self.customer_phone or "").strip()
        if not phone:
            raise ValueError("Customer phone is required")
        if not is_valid_french_phone(phone):
            raise ValueError("Customer phone must be a valid French phone number")
        self.customer_phone = phone

        if not self.items:
            raise ValueError("An order must contain at least one item")
        self.items = list(self.items)
        self.status = OrderStatus(self.status)

    @property
    def total_price(self) -> float:
        """Sum of quantity x unit price over all items, rounded to cents."""
        return round_money(sum(item.quantity * item.unit_price for item in self.items))

    @property
    def customer_full_name(self) -> str:
        return f"{self.customer_first_name} {self.customer_last_name}"

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ORDER_STATUS_TRANSITIONS[self.status]

    def change_status(self, new_status: OrderStatus) -> None:
        """Move to ``new_status``; raises ValueError for a forbidden transition."""
        if not self.can_transition_to(new_status):
            raise ValueError(
                f"Invalid status transition: {self.status.value} -> {new_status.value}"
            )
        self.status = new_status
        self.updated_at = now()
