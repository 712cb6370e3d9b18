"""
Order services package for shipOrder XML documents.

This package contains the XML-to-domain converter, the domain factory
and the console report renderer.
"""
