"""
Console report for converted orders.

Renders an OrderDomain with rich in one of three formats:
- detailed: shipping block followed by one line per item
- table: items as a table with line totals
- json: order.to_dict() as indented JSON
"""

import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shiporder.domain.models import OrderDomain

OUTPUT_FORMATS = ("detailed", "table", "json")


class OrderReportRenderer:
    """Prints converted orders to a rich Console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, order: OrderDomain, output_format: str = "detailed") -> None:
        """
        Render an order in the requested format.

        Args:
            order: Order to print
            output_format: One of OUTPUT_FORMATS

        Raises:
            ValueError: If the format is unknown
        """
        if output_format == "detailed":
            self.render_detailed(order)
        elif output_format == "table":
            self.render_table(order)
        elif output_format == "json":
            self.render_json(order)
        else:
            raise ValueError(f"Unknown output format: {output_format}. Valid options: {list(OUTPUT_FORMATS)}")

    def render_detailed(self, order: OrderDomain) -> None:
        """Print shipping information and items line by line."""
        ship_to = order.ship_to
        # Values come from the document: escape markup and never wrap them
        self.console.print("[bold]Shipping information:[/bold]")
        self.console.print(f"Name: {escape(ship_to.name)}", soft_wrap=True)
        self.console.print(f"Street: {escape(ship_to.street)}", soft_wrap=True)
        self.console.print(f"Address: {escape(ship_to.address)}", soft_wrap=True)
        self.console.print(f"Country: {escape(ship_to.country)}", soft_wrap=True)

        self.console.print()
        self.console.print("[bold]Items:[/bold]")
        if order.is_empty:
            self.console.print("[dim]No items[/dim]")
        for item in order.items:
            self.console.print(
                f"Title: {escape(item.title)}, Quantity: {item.quantity}, Price: {item.price}",
                soft_wrap=True,
            )

        self.console.print()
        self.console.print(f"Total: {order.total}", soft_wrap=True)

    def render_table(self, order: OrderDomain) -> None:
        """Print the items as a table with a totals footer."""
        ship_to = order.ship_to
        title = escape(", ".join(ship_to.display_lines)) or "Order"

        table = Table(title=title, show_footer=True)
        table.add_column("#", justify="right", footer="")
        table.add_column("Title", footer="Total")
        table.add_column("Quantity", justify="right", footer=str(order.total_quantity))
        table.add_column("Price", justify="right", footer="")
        table.add_column("Line total", justify="right", footer=str(order.total))

        for index, item in enumerate(order.items, start=1):
            table.add_row(
                str(index),
                escape(item.title),
                str(item.quantity),
                str(item.price),
                str(item.line_total),
            )

        self.console.print(table)

    def render_json(self, order: OrderDomain) -> None:
        """Print the order as indented JSON."""
        self.console.print_json(json.dumps(order.to_dict(), ensure_ascii=False))
