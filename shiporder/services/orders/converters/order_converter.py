"""XmlOrderConverter service - converts shipOrder XML documents to domain models (SRP)."""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from lxml import etree

from shiporder.core.config import Settings, get_settings
from shiporder.domain.models import LineItemDomain, OrderDomain, ShippingAddressDomain
from shiporder.services.orders.factories import OrderFactory
from shiporder.utils.error_handler import MappingError, ParseError

logger = logging.getLogger(__name__)

ROOT_TAG = "shipOrder"
SHIP_TO_TAG = "shipTo"
ITEMS_TAG = "items"
ITEM_TAG = "item"

SHIP_TO_FIELDS = ("name", "street", "address", "country")

# Plain notation only: optional sign, ASCII digits, surrounding whitespace allowed.
# Python's int()/Decimal() would also accept "1_000", "NaN" or exponents.
_INTEGER_PATTERN = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)\s*", re.ASCII)


def parse_quantity(text: str) -> int:
    """
    Parse the text of a <quantity> element.

    Args:
        text: Element text

    Returns:
        Non-negative integer quantity

    Raises:
        ValueError: If the text is not a non-negative integer

    Examples:
        >>> parse_quantity(" 3 ")
        3
        >>> parse_quantity("+1")
        1
    """
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"Not an integer: {text!r}")

    value = int(text)
    if value < 0:
        raise ValueError(f"Quantity cannot be negative: {value}")
    return value


def parse_price(text: str) -> Decimal:
    """
    Parse the text of a <price> element into an exact Decimal.

    The scale is kept as written, so "10.90" becomes Decimal("10.90")
    which compares equal to Decimal("10.9").

    Args:
        text: Element text

    Returns:
        Decimal unit price

    Raises:
        ValueError: If the text is not a plain decimal number

    Examples:
        >>> parse_price("10.90")
        Decimal('10.90')
    """
    if not _DECIMAL_PATTERN.fullmatch(text):
        raise ValueError(f"Not a decimal number: {text!r}")

    try:
        return Decimal(text.strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a decimal number: {text!r}") from e


def _find_child(parent: etree._Element, tag: str) -> Optional[etree._Element]:
    """Return the first direct child element named ``tag``, or None."""
    # Comments and processing instructions have a non-string tag
    for child in parent:
        if child.tag == tag:
            return child
    return None


def _find_children(parent: etree._Element, tag: str) -> list[etree._Element]:
    """Return every direct child element named ``tag`` in document order."""
    return [child for child in parent if child.tag == tag]


def _text_of(element: etree._Element) -> str:
    """
    Direct text of an element; an empty element yields ''.

    Joins every direct text node, so text around comments, processing
    instructions or child elements is kept while the children's own text is not.
    """
    return "".join(element.xpath("text()"))


class XmlOrderConverter:
    """Converts shipOrder XML documents to domain models (SRP: Conversion only)."""

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the converter.

        Args:
            settings: Parser limits and options (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.max_document_bytes = self.settings.XML_MAX_DOCUMENT_BYTES
        self._parser_options = self.settings.get_parser_options()

    def convert(self, xml_text: str | bytes) -> OrderDomain:
        """
        Convert a shipOrder document to an OrderDomain.

        Args:
            xml_text: The XML document as text or raw bytes

        Returns:
            OrderDomain: Fully populated order

        Raises:
            ParseError: If the document is not well-formed XML
            MappingError: If a required node is missing or a value cannot be converted
        """
        root = self._parse(xml_text)

        ship_to = self._convert_ship_to(root)
        items = self._convert_items(root)
        order = OrderFactory.create_order(ship_to, items)

        logger.debug(
            f"Converted shipOrder: recipient={ship_to.name!r}, "
            f"items={order.items_count}, total={order.total}"
        )
        return order

    def _parse(self, xml_text: str | bytes) -> etree._Element:
        """Parse the raw document into an lxml tree."""
        if isinstance(xml_text, str):
            # Text is already decoded; ignore any encoding declaration it carries
            try:
                data = xml_text.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ParseError(
                    f"document contains a character that is not valid XML at offset {e.start}",
                    details={"offset": e.start},
                ) from e
            encoding: Optional[str] = "utf-8"
        elif isinstance(xml_text, (bytes, bytearray)):
            data = bytes(xml_text)
            encoding = None
        else:
            raise TypeError(f"xml_text must be str or bytes, not {type(xml_text).__name__}")

        if len(data) > self.max_document_bytes:
            raise ParseError(
                f"document size {len(data)} bytes exceeds limit of {self.max_document_bytes} bytes",
                details={"size": len(data), "limit": self.max_document_bytes},
            )

        if not data.strip():
            raise ParseError("document is empty", line=1, column=1)

        # A parser per call: lxml parsers must not be shared between threads
        parser = etree.XMLParser(encoding=encoding, **self._parser_options)
        try:
            return etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            line, column = e.position if e.position else (e.lineno, None)
            logger.debug(f"XML syntax error at line {line}, column {column}: {e.msg}")
            raise ParseError(e.msg or str(e), line=line, column=column) from e

    def _convert_ship_to(self, root: etree._Element) -> ShippingAddressDomain:
        """Map shipOrder/shipTo to a ShippingAddressDomain."""
        ship_to_path = f"{ROOT_TAG}/{SHIP_TO_TAG}"

        ship_to_node = _find_child(root, SHIP_TO_TAG) if root.tag == ROOT_TAG else None
        if ship_to_node is None:
            if root.tag != ROOT_TAG:
                logger.debug(f"Unexpected root element <{root.tag}>, expected <{ROOT_TAG}>")
            raise MappingError.missing(SHIP_TO_TAG, path=ship_to_path)

        values = {}
        for field_name in SHIP_TO_FIELDS:
            node = _find_child(ship_to_node, field_name)
            if node is None:
                raise MappingError.missing(field_name, path=f"{ship_to_path}/{field_name}")
            values[field_name] = _text_of(node)

        return OrderFactory.create_shipping_address(**values)

    def _convert_items(self, root: etree._Element) -> list[LineItemDomain]:
        """Map every shipOrder/items/item to a LineItemDomain, in document order."""
        item_nodes = [
            item_node
            for items_node in _find_children(root, ITEMS_TAG)
            for item_node in _find_children(items_node, ITEM_TAG)
        ]

        return [
            self._convert_item(item_node, f"{ROOT_TAG}/{ITEMS_TAG}/{ITEM_TAG}[{index}]")
            for index, item_node in enumerate(item_nodes, start=1)
        ]

    def _convert_item(self, item_node: etree._Element, item_path: str) -> LineItemDomain:
        """Map one <item> element; unknown children are ignored."""
        title = _text_of(self._require(item_node, "title", item_path))

        quantity_text = _text_of(self._require(item_node, "quantity", item_path))
        try:
            quantity = parse_quantity(quantity_text)
        except ValueError as e:
            raise MappingError.invalid("quantity", quantity_text, path=f"{item_path}/quantity") from e

        price_text = _text_of(self._require(item_node, "price", item_path))
        try:
            price = parse_price(price_text)
        except ValueError as e:
            raise MappingError.invalid("price", price_text, path=f"{item_path}/price") from e

        return OrderFactory.create_line_item(title=title, quantity=quantity, price=price)

    @staticmethod
    def _require(parent: etree._Element, tag: str, parent_path: str) -> etree._Element:
        """Return the child ``tag`` or raise MappingError naming it."""
        node = _find_child(parent, tag)
        if node is None:
            raise MappingError.missing(tag, path=f"{parent_path}/{tag}")
        return node


def convert_xml_to_order(xml_text: str | bytes, settings: Settings | None = None) -> OrderDomain:
    """
    Convert a shipOrder document using a converter built from settings.

    Args:
        xml_text: The XML document as text or raw bytes
        settings: Optional settings (defaults to get_settings())

    Returns:
        OrderDomain: Fully populated order
    """
    return XmlOrderConverter(settings).convert(xml_text)
