"""
OrderFactory - Factory pattern for creating domain objects (OCP).

This factory encapsulates object creation logic, making it easier
to modify without changing client code.
"""

from decimal import Decimal
from typing import Iterable

from shiporder.domain.models import LineItemDomain, OrderDomain, ShippingAddressDomain


class OrderFactory:
    """Factory for creating domain objects with proper defaults."""

    @staticmethod
    def create_shipping_address(
        name: str = "",
        street: str = "",
        address: str = "",
        country: str = "",
    ) -> ShippingAddressDomain:
        """Create a ShippingAddressDomain."""
        return ShippingAddressDomain(name=name, street=street, address=address, country=country)

    @staticmethod
    def create_line_item(title: str, quantity: int, price: Decimal | str) -> LineItemDomain:
        """
        Create a LineItemDomain.

        Args:
            title: Product title
            quantity: Units ordered
            price: Unit price; strings are read as Decimal, never as float

        Returns:
            LineItemDomain: Created line item
        """
        if not isinstance(price, Decimal):
            price = Decimal(price)
        return LineItemDomain(title=title, quantity=quantity, price=price)

    @staticmethod
    def create_order(ship_to: ShippingAddressDomain, items: Iterable[LineItemDomain] = ()) -> OrderDomain:
        """Create an OrderDomain keeping the given item order."""
        return OrderDomain(ship_to=ship_to, items=tuple(items))
