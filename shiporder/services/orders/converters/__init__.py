"""
Converter services for transforming shipOrder XML into domain models.
"""

from .order_converter import XmlOrderConverter, convert_xml_to_order, parse_price, parse_quantity

__all__ = ["XmlOrderConverter", "convert_xml_to_order", "parse_price", "parse_quantity"]
