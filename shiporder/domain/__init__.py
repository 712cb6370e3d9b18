"""
Domain layer for shipping orders.

This layer contains the immutable business records produced by
the XML converter. It is independent of parsing and I/O concerns.
"""
