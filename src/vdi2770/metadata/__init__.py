"""Reading and writing VDI 2770 metadata XML files."""

from .reader import XmlReader, document_from_element
from .writer import XmlWriter, document_to_element

__all__ = ["XmlReader", "XmlWriter", "document_from_element", "document_to_element"]
