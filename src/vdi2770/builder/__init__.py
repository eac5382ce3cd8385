"""Fluent construction of VDI 2770 metadata trees."""

from .document_builder import DocumentBuilder

__all__ = ["DocumentBuilder"]
