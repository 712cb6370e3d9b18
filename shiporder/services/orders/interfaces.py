"""
Interfaces/Protocols for order services (Dependency Inversion Principle).

These protocols define contracts that services must implement,
allowing for loose coupling and easy testing.
"""

from typing import Protocol

from shiporder.domain.models import OrderDomain


class IOrderConverter(Protocol):
    """Protocol for order conversion services."""

    def convert(self, xml_text: str | bytes) -> OrderDomain:
        """Convert a shipOrder document to domain model."""
        ...


class IOrderRenderer(Protocol):
    """Protocol for order report renderers."""

    def render(self, order: OrderDomain, output_format: str) -> None:
        """Render an order in the requested format."""
        ...
