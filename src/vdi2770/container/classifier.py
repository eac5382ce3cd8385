"""Container type from the canonical metadata file names of a folder."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..errors import UnknownContainerTypeError
from ..models.constants import MAIN_DOCUMENT_XML_FILE_NAME, METADATA_XML_FILE_NAME
from .report import ContainerType


def classify(names: Iterable[str | Path]) -> ContainerType:
    """
    ``VDI2770_Main.xml`` makes a documentation container,
    ``VDI2770_Metadata.xml`` a document container. The main file wins
    when both are present.
    """
    present = {Path(n).name for n in names}
    if MAIN_DOCUMENT_XML_FILE_NAME in present:
        return ContainerType.DOCUMENTATION_CONTAINER
    if METADATA_XML_FILE_NAME in present:
        return ContainerType.DOCUMENT_CONTAINER
    raise UnknownContainerTypeError(
        f"neither {MAIN_DOCUMENT_XML_FILE_NAME} nor {METADATA_XML_FILE_NAME} found"
    )


def classify_folder(folder: str | Path) -> ContainerType:
    return classify(p.name for p in Path(folder).iterdir() if p.is_file())


def metadata_file_name(container_type: ContainerType) -> str:
    if container_type == ContainerType.DOCUMENTATION_CONTAINER:
        return MAIN_DOCUMENT_XML_FILE_NAME
    return METADATA_XML_FILE_NAME


def fallback_metadata_files(folder: str | Path) -> list[Path]:
    """Candidate ``*.xml`` files of a folder that could not be classified."""
    return sorted(p for p in Path(folder).iterdir() if p.is_file() and p.suffix.lower() == ".xml")
