"""Exception hierarchy. Validation faults are values; these are processing failures."""

from __future__ import annotations


class Vdi2770Error(Exception):
    """Base class for vdi2770 processing errors."""


class ConfigurationError(Vdi2770Error):
    """Invalid settings or unreadable settings file."""


class ProcessorError(Vdi2770Error):
    """A container node can not be processed (I/O or structure)."""


class ArchiveError(ProcessorError):
    """An archive is not a ZIP file, is damaged, encrypted or exceeds limits."""


class UnknownContainerTypeError(ProcessorError):
    """Neither canonical metadata file name is present in a folder."""


class MetadataError(Vdi2770Error):
    """Metadata can not be read."""


class XmlProcessingError(MetadataError):
    """Malformed XML or XML that is not a VDI 2770 document."""


class PdfValidationError(Vdi2770Error):
    """The PDF/A conformance level of a file can not be determined."""
