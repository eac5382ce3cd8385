"""
Examples for vdi2770
====================
Three complete examples: validating a metadata tree, reading and writing
metadata files, and packing and validating a nested documentation
container.

Run:
    python examples/examples.py
"""

from __future__ import annotations

import sys
import tempfile
from datetime import date
from pathlib import Path

import pikepdf

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vdi2770 import (
    ContainerValidator,
    DocumentBuilder,
    MessageLevel,
    ObjectType,
    ReportStatistics,
    XmlReader,
    XmlWriter,
    load_settings,
    validate,
    validate_document,
)
from vdi2770.container import pack_container


def _operating_manual():
    return (
        DocumentBuilder.document("BA-P100-0815", "pumps.example.com", organization="Example Pumps GmbH")
        .with_classification("03-02")
        .with_iec_classification("AAB", "Allgemeine Bedienung")
        .with_object("SN-4711")
        .with_object("P-100", ObjectType.TYPE)
        .with_version("2.1", "de", "en")
        .with_description("de", "Betriebsanleitung P-100", "Bedienung der Kreiselpumpe P-100", "Pumpe", "Bedienung")
        .with_description("en", "Operating manual P-100", "Operating the centrifugal pump P-100", "pump")
        .with_file("BA-P100.pdf")
        .with_pages(48)
        .released(date(2024, 5, 1))
        .build()
    )


def _documentation(manual):
    return (
        DocumentBuilder.document("DOK-P100-4711", "pumps.example.com", organization="Example Pumps GmbH")
        .with_classification("01-01")
        .with_iec_classification("AAA", "Allgemein")
        .with_object("SN-4711")
        .with_version("1.0", "en")
        .with_description("en", "Documentation of pump SN-4711")
        .refers_to(manual)
        .build_main()
    )


def _write_pdfa(path: Path, title: str) -> None:
    """One page PDF/A-2a placeholder rendition."""
    pdf = pikepdf.new()
    page = pdf.add_blank_page()
    font = pdf.make_indirect(pikepdf.Dictionary(
        Type=pikepdf.Name.Font, Subtype=pikepdf.Name.Type1, BaseFont=pikepdf.Name.Helvetica,
    ))
    page.obj["/Resources"] = pikepdf.Dictionary(Font=pikepdf.Dictionary(F1=font))
    page.obj["/Contents"] = pdf.make_stream(f"BT /F1 14 Tf 72 720 Td ({title}) Tj ET".encode("latin-1"))
    with pdf.open_metadata(set_pikepdf_as_editor=False) as meta:
        meta["dc:title"] = title
        meta["pdfaid:part"] = "2"
        meta["pdfaid:conformance"] = "A"
    pdf.save(path)


# ---------------------------------------------------------------------------
# Example 1: Validating a metadata tree
# ---------------------------------------------------------------------------


def example_validate_metadata() -> None:
    """
    Example 1: Build an operating manual and validate its metadata.

    The first run is clean. The second run removes the English description
    although English is still a declared language of the version.
    """
    print("\n" + "="*60)
    print("EXAMPLE 1: Metadata validation")
    print("="*60)

    manual = _operating_manual()
    faults = validate(manual, locale="en")
    print(f"  Document ids:  {[i.as_text() for i in manual.ids()]}")
    print(f"  Faults:        {len(faults)}")

    version = manual.versions[0]
    broken = manual.model_copy(update={
        "versions": [version.model_copy(update={"descriptions": version.descriptions[:1]})],
    })
    for fault in validate(broken, locale="de"):
        print(f"  {fault.level.value:<12} {fault.message}")
    print("  ✓ Example 1 complete")


# ---------------------------------------------------------------------------
# Example 2: Metadata files
# ---------------------------------------------------------------------------


def example_metadata_files() -> None:
    """
    Example 2: Write a main document as VDI2770_Main.xml and read it back.

    Reading restores the same tree, and the main-document rules apply
    because the document declares VDI2770_Main.pdf.
    """
    print("\n" + "="*60)
    print("EXAMPLE 2: Metadata files")
    print("="*60)

    main = _documentation(_operating_manual())
    with tempfile.TemporaryDirectory(prefix="vdi2770_example_") as tmp:
        path = XmlWriter().write(main.document, Path(tmp) / "VDI2770_Main.xml")
        print(f"  Written to:     {path.name} ({path.stat().st_size} bytes)")
        document = XmlReader().read(path)

    print(f"  Round trip:     {'equal' if document == main.document else 'different'}")
    print(f"  Main document:  {document.is_main_document()}")
    print(f"  Faults:         {len(validate_document(document, locale='en'))}")
    print("  ✓ Example 2 complete")


# ---------------------------------------------------------------------------
# Example 3: Container validation
# ---------------------------------------------------------------------------


def example_container() -> None:
    """
    Example 3: Pack a documentation container holding one document
    container and validate the archive in lenient mode.
    """
    print("\n" + "="*60)
    print("EXAMPLE 3: Container validation")
    print("="*60)

    manual = _operating_manual()
    main = _documentation(manual)

    with tempfile.TemporaryDirectory(prefix="vdi2770_example_") as tmp:
        work = Path(tmp)
        sub = work / "manual"
        sub.mkdir()
        XmlWriter().write(manual, sub / "VDI2770_Metadata.xml")
        _write_pdfa(sub / "BA-P100.pdf", "Operating manual P-100")

        root = work / "delivery"
        root.mkdir()
        XmlWriter().write(main.document, root / "VDI2770_Main.xml")
        _write_pdfa(root / "VDI2770_Main.pdf", "Documentation of pump SN-4711")
        pack_container(sub, root / "BA-P100-0815.zip")
        archive = pack_container(root, work / "delivery.zip")

        report = ContainerValidator(load_settings(strict=False)).validate(archive)

    print(f"  Report:     {report}")
    print(f"  Containers: {[r.file_name for r in report.walk()]}")
    for message in report.filter(MessageLevel.WARN, deep=True):
        print(f"  {message}")
    print(f"  Statistics: {ReportStatistics.from_report(report)}")
    print("  ✓ Example 3 complete")


# ---------------------------------------------------------------------------
# Run all examples
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    example_validate_metadata()
    example_metadata_files()
    example_container()

    print("\n" + "="*60)
    print("All examples completed successfully.")
    print("="*60 + "\n")
