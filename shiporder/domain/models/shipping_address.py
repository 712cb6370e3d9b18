"""
Shipping address domain model.
"""

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class ShippingAddressDomain:
    """
    Immutable domain model representing the destination of an order.

    Every field is text; an empty element in the source document maps
    to an empty string, never to None.

    Attributes:
        name: Recipient name
        street: Street line
        address: Address line (postal code and city)
        country: Destination country
    """

    name: str
    street: str
    address: str
    country: str

    def __post_init__(self) -> None:
        """Validate that every field is populated with text."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise ValueError(f"Shipping address field '{f.name}' must be text: {value!r}")

    @property
    def display_lines(self) -> list[str]:
        """Get the address as printable lines, skipping empty ones."""
        return [line for line in (self.name, self.street, self.address, self.country) if line]

    def to_dict(self) -> dict[str, Any]:
        """Convert shipping address to dictionary."""
        return {
            "name": self.name,
            "street": self.street,
            "address": self.address,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShippingAddressDomain":
        """Create shipping address from dictionary."""
        return cls(
            name=data.get("name", ""),
            street=data.get("street", ""),
            address=data.get("address", ""),
            country=data.get("country", ""),
        )
