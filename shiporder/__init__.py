"""
ShipOrder XML converter.

Reads shipping order XML documents and maps them to immutable
domain records (order, shipping address, line items).
"""

from shiporder.version import VERSION

__version__ = VERSION
