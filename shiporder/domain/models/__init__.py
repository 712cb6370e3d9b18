"""
Domain models for business entities.

These models represent core business concepts and contain
business invariants.
"""

from .line_item import LineItemDomain
from .order import OrderDomain
from .shipping_address import ShippingAddressDomain

__all__ = ["OrderDomain", "LineItemDomain", "ShippingAddressDomain"]
