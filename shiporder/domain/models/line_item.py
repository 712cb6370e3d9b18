"""
Line item domain model.

Represents one purchased product entry of a shipping order.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class LineItemDomain:
    """
    Immutable domain model representing an order line item.

    Attributes:
        title: Product title as written in the document
        quantity: Number of units ordered (non-negative)
        price: Unit price, kept as Decimal so "10.90" stays exact
    """

    title: str
    quantity: int
    price: Decimal

    def __post_init__(self) -> None:
        """Validate line item data after initialization."""
        if not isinstance(self.title, str):
            raise ValueError(f"Title must be text: {self.title!r}")

        # bool is an int subclass but never a valid quantity
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Quantity must be an integer: {self.quantity!r}")

        if self.quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {self.quantity}")

        if not isinstance(self.price, Decimal):
            raise ValueError(f"Price must be a Decimal: {self.price!r}")

        if not self.price.is_finite():
            raise ValueError(f"Price must be a finite number: {self.price}")

    @property
    def line_total(self) -> Decimal:
        """Calculate line total (price * quantity)."""
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        """Convert line item to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "quantity": self.quantity,
            "price": str(self.price),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItemDomain":
        """Create line item from dictionary."""
        return cls(
            title=data["title"],
            quantity=int(data["quantity"]),
            price=Decimal(str(data["price"])),
        )
