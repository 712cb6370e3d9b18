"""
Order domain model (Aggregate Root).

Represents a shipping order: one destination address and its line items.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .line_item import LineItemDomain
from .shipping_address import ShippingAddressDomain


@dataclass(frozen=True)
class OrderDomain:
    """
    Immutable domain model representing a shipping order (Aggregate Root).

    The order owns its address and its items; items keep document order.
    There are no update operations: a new document yields a new order.

    Attributes:
        ship_to: Shipping destination (required)
        items: Line items in document order (possibly empty)
    """

    ship_to: ShippingAddressDomain
    items: tuple[LineItemDomain, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate order data after initialization."""
        if not isinstance(self.ship_to, ShippingAddressDomain):
            raise ValueError("Shipping address is required")

        # Accept any iterable of items but store an immutable tuple
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, LineItemDomain):
                raise ValueError(f"Invalid line item: {item!r}")
        object.__setattr__(self, "items", items)

    @property
    def items_count(self) -> int:
        """Get total number of line items."""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Get total quantity of all items."""
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> Decimal:
        """Calculate order total (sum of line totals)."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        """Check if the order has no line items."""
        return not self.items

    def to_dict(self) -> dict[str, Any]:
        """Convert order to a JSON-friendly dictionary."""
        return {
            "ship_to": self.ship_to.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "items_count": self.items_count,
            "total_quantity": self.total_quantity,
            "total": str(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderDomain":
        """Create order from dictionary."""
        return cls(
            ship_to=ShippingAddressDomain.from_dict(data["ship_to"]),
            items=tuple(LineItemDomain.from_dict(item) for item in data.get("items", [])),
        )
