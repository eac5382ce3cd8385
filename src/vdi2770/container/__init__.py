"""Container archives: extraction, classification, rendition checks and the report tree."""

from .archive import ArchiveFault, ZipExtractor, is_container, pack_container
from .classifier import classify, classify_folder
from .renditions import RenditionChecker, media_types_match
from .report import ContainerType, Report, ReportStatistics
from .walker import ContainerValidator

__all__ = [
    "ArchiveFault",
    "ZipExtractor",
    "is_container",
    "pack_container",
    "classify",
    "classify_folder",
    "RenditionChecker",
    "media_types_match",
    "ContainerType",
    "Report",
    "ReportStatistics",
    "ContainerValidator",
]
