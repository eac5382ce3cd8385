"""
Shared fixtures for the vdi2770 test suite: valid documents built with the
fluent builder, PDF/A files generated with pikepdf and container folders
and archives on disk.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Callable

import pikepdf
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vdi2770 import Document, DocumentBuilder, MainDocument, XmlWriter
from vdi2770.container import pack_container
from vdi2770.models.constants import MAIN_DOCUMENT_XML_FILE_NAME, METADATA_XML_FILE_NAME


# ===========================================================================
# Documents
# ===========================================================================


@pytest.fixture
def valid_document() -> Document:
    """A complete, fault-free single document (operating manual)."""
    return (
        DocumentBuilder.document("DOC-1", "ACME")
        .with_classification("03-02")
        .with_iec_classification("AAA", "Allgemein")
        .with_object("SN-4711")
        .with_version("1.0", "de", "en")
        .with_description("de", "Betriebsanleitung", "Bedienung der Pumpe", "Pumpe")
        .with_description("en", "Operating manual", "Operating the pump", "pump")
        .with_file("manual.pdf")
        .released(date(2024, 5, 1))
        .build()
    )


@pytest.fixture
def main_document() -> MainDocument:
    """A fault-free main document referring to ``DOC-1@ACME``."""
    return (
        DocumentBuilder.document("MAIN-1", "ACME")
        .with_classification("01-01")
        .with_iec_classification("AAA", "Allgemein")
        .with_object("SN-4711")
        .with_version("1.0", "en")
        .with_description("en", "Documentation of pump P-100")
        .with_relationship("DOC-1", "ACME")
        .build_main()
    )


# ===========================================================================
# PDF files
# ===========================================================================


def write_pdf(
    path: Path,
    part: str | None = "2",
    conformance: str = "A",
    text: bool = True,
    password: str | None = None,
) -> Path:
    """One page PDF claiming PDF/A-<part><conformance> in its XMP metadata."""
    pdf = pikepdf.new()
    page = pdf.add_blank_page()
    if text:
        font = pdf.make_indirect(pikepdf.Dictionary(
            Type=pikepdf.Name.Font,
            Subtype=pikepdf.Name.Type1,
            BaseFont=pikepdf.Name.Helvetica,
        ))
        page.obj["/Resources"] = pikepdf.Dictionary(Font=pikepdf.Dictionary(F1=font))
        page.obj["/Contents"] = pdf.make_stream(b"BT /F1 12 Tf 72 720 Td (Operating manual) Tj ET")
    if part is not None:
        with pdf.open_metadata(set_pikepdf_as_editor=False) as meta:
            meta["pdfaid:part"] = part
            meta["pdfaid:conformance"] = conformance
    if password:
        pdf.save(path, encryption=pikepdf.Encryption(owner=password, user=password))
    else:
        pdf.save(path)
    return path


@pytest.fixture
def pdf_factory() -> Callable[..., Path]:
    return write_pdf


# ===========================================================================
# Containers
# ===========================================================================


def write_container_folder(
    folder: Path,
    document: Document | MainDocument,
    files: dict[str, bytes | None] | None = None,
) -> Path:
    """
    Write *document* as the metadata file of *folder*. Every declared file
    gets a PDF/A-2a rendition unless *files* provides content for it
    (``None`` leaves the file out).
    """
    folder.mkdir(parents=True, exist_ok=True)
    if isinstance(document, MainDocument):
        document = document.document
    name = MAIN_DOCUMENT_XML_FILE_NAME if document.is_main_document() else METADATA_XML_FILE_NAME
    XmlWriter().write(document, folder / name)

    files = dict(files or {})
    for digital_file in document.digital_files():
        if digital_file.file_name not in files:
            write_pdf(folder / digital_file.file_name)
    for file_name, content in files.items():
        if content is not None:
            (folder / file_name).write_bytes(content)
    return folder


@pytest.fixture
def container_folder() -> Callable[..., Path]:
    return write_container_folder


@pytest.fixture
def nested_container(tmp_path: Path, main_document: MainDocument, valid_document: Document) -> Path:
    """``delivery.zip``: a documentation container holding ``DOC-1.zip``."""
    work = tmp_path / "work"
    sub = write_container_folder(work / "sub", valid_document)
    main = write_container_folder(work / "main", main_document)
    pack_container(sub, main / "DOC-1.zip")
    return pack_container(main, tmp_path / "delivery.zip")
