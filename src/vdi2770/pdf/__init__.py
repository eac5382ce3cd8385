"""PDF/A inspection and content type detection."""

from .inspector import SUPPORTED_LEVELS, PdfInspection, PdfInspector
from .sniffer import ContentSniffer

__all__ = ["SUPPORTED_LEVELS", "PdfInspection", "PdfInspector", "ContentSniffer"]
