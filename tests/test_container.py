"""
Test Suite for container processing
===================================
Archive screening and extraction, container classification, rendition
checks, the report tree and the recursive container walker.
"""

from __future__ import annotations

import tempfile
import zipfile
from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from vdi2770 import (
    ArchiveError,
    ContainerType,
    ContainerValidator,
    Document,
    DocumentBuilder,
    MainDocument,
    Message,
    MessageLevel,
    ProcessorError,
    Report,
    ReportStatistics,
    ValidatorSettings,
    XmlWriter,
)
from vdi2770.container import (
    RenditionChecker,
    ZipExtractor,
    classify,
    classify_folder,
    is_container,
    media_types_match,
    pack_container,
)
from vdi2770.errors import UnknownContainerTypeError
from vdi2770.models.fault import FaultLevel
from vdi2770.pdf import ContentSniffer
from vdi2770.validator import render

from conftest import write_container_folder, write_pdf


def codes(messages: list[Message]) -> list[str | None]:
    return [m.code for m in messages]


def _document(*files: tuple[str, str], class_id: str = "03-02") -> Document:
    builder = (
        DocumentBuilder.document("DOC-1", "ACME")
        .with_classification(class_id)
        .with_iec_classification("AAA", "Allgemein")
        .with_object("SN-4711")
        .with_version("1.0", "en")
        .with_description("en", "Manual")
        .released(date(2024, 5, 1))
    )
    for name, media_type in files or (("manual.pdf", "application/pdf"),):
        builder.with_file(name, media_type)
    return builder.build()


def _mark_encrypted(path: Path) -> None:
    """Set the encryption flag of the first entry in both ZIP headers."""
    data = bytearray(path.read_bytes())
    for signature, offset in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
        start = data.find(signature)
        data[start + offset] |= 0x01
    path.write_bytes(bytes(data))


# ===========================================================================
# Archive screening and extraction
# ===========================================================================


class TestZipExtractor:

    def test_not_a_zip(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        path.write_text("no zip", encoding="utf-8")
        faults = ZipExtractor().inspect(path)
        assert [(f.level, f.code) for f in faults] == [(FaultLevel.ERROR, "ARCHIVE_NOT_ZIP")]

    def test_directory_entry_is_warning(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("docs/", "")
            zf.writestr("VDI2770_Metadata.xml", "<Document/>")
        faults = ZipExtractor().inspect(path)
        assert [(f.level, f.code) for f in faults] == [(FaultLevel.WARNING, "ARCHIVE_DIRECTORY_ENTRY")]
        assert faults[0].args == {"entry": "docs/"}

    def test_encrypted(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("VDI2770_Metadata.xml", "<Document/>")
        _mark_encrypted(path)
        assert [f.code for f in ZipExtractor().inspect(path)] == ["ARCHIVE_ENCRYPTED"]

    def test_compression_ratio_bomb(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("VDI2770_Metadata.xml", "0" * 1_000_000)
        assert ZipExtractor().inspect(path) == []
        strict = ZipExtractor(ValidatorSettings(max_compression_ratio=100))
        assert [f.code for f in strict.inspect(path)] == ["ARCHIVE_BOMB"]

    def test_entry_size_limit(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("VDI2770_Metadata.xml", "x" * 2048)
        assert ZipExtractor(ValidatorSettings(max_entry_size=1024)).is_bomb(path)
        assert not ZipExtractor(ValidatorSettings(max_entry_size=4096)).is_bomb(path)

    def test_extract_refuses_invalid_archive(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        path.write_text("no zip", encoding="utf-8")
        with pytest.raises(ArchiveError):
            ZipExtractor().extract(path, tmp_path / "out")

    def test_extract_refuses_unsafe_path(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("VDI2770_Metadata.xml", "<Document/>")
            zf.writestr("../escape.txt", "x")
        with pytest.raises(ArchiveError, match="unsafe"):
            ZipExtractor().extract(path, tmp_path / "out")
        assert not (tmp_path / "escape.txt").exists()

    def test_nested_containers_unpacked(self, tmp_path: Path, nested_container: Path) -> None:
        out = ZipExtractor().extract(nested_container, tmp_path / "out")
        assert (out / "VDI2770_Main.xml").is_file()
        assert (out / "DOC-1" / "VDI2770_Metadata.xml").is_file()
        assert not (out / "DOC-1.zip").exists()

    def test_nested_extraction_disabled(self, tmp_path: Path, nested_container: Path) -> None:
        out = ZipExtractor(ValidatorSettings(extract_nested=False)).extract(nested_container, tmp_path / "out")
        assert (out / "DOC-1.zip").is_file()
        assert is_container(out / "DOC-1.zip")

    def test_is_container(self, tmp_path: Path, nested_container: Path) -> None:
        plain = tmp_path / "plain.zip"
        with zipfile.ZipFile(plain, "w") as zf:
            zf.writestr("readme.txt", "x")
        assert is_container(nested_container)
        assert not is_container(plain)
        assert not is_container(tmp_path / "missing.zip")


class TestPackContainer:

    def test_pack(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        target = pack_container(folder, tmp_path / "DOC-1.zip")
        with zipfile.ZipFile(target) as zf:
            assert sorted(zf.namelist()) == ["VDI2770_Metadata.xml", "manual.pdf"]

    def test_folder_without_metadata(self, tmp_path: Path) -> None:
        folder = tmp_path / "empty"
        folder.mkdir()
        (folder / "manual.pdf").write_bytes(b"%PDF-1.7")
        with pytest.raises(ProcessorError):
            pack_container(folder, tmp_path / "out.zip")

    def test_not_a_folder(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessorError):
            pack_container(tmp_path / "missing", tmp_path / "out.zip")


# ===========================================================================
# Classification
# ===========================================================================


class TestClassifier:

    def test_documentation_container(self) -> None:
        assert classify(["VDI2770_Main.xml", "VDI2770_Main.pdf"]) == ContainerType.DOCUMENTATION_CONTAINER

    def test_document_container(self) -> None:
        assert classify(["VDI2770_Metadata.xml", "manual.pdf"]) == ContainerType.DOCUMENT_CONTAINER

    def test_main_wins(self) -> None:
        names = ["VDI2770_Metadata.xml", "VDI2770_Main.xml"]
        assert classify(names) == ContainerType.DOCUMENTATION_CONTAINER

    def test_names_are_case_sensitive(self) -> None:
        with pytest.raises(UnknownContainerTypeError):
            classify(["vdi2770_main.xml"])

    def test_classify_folder(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        assert classify_folder(folder) == ContainerType.DOCUMENT_CONTAINER


# ===========================================================================
# Media types
# ===========================================================================


class TestMediaTypesMatch:

    @pytest.mark.parametrize("declared,detected", [
        ("application/pdf", "application/pdf"),
        ("Application/PDF", "application/pdf"),
        ('image/vnd.dxf; format="ascii"', "image/vnd.dxf"),
        ("image/vnd.dxf", "image/vnd.dxf;format=ascii"),
        ("application/zip", "application/x-zip-compressed"),
    ])
    def test_match(self, declared: str, detected: str) -> None:
        assert media_types_match(declared, detected)

    @pytest.mark.parametrize("declared,detected", [
        ("application/pdf", "image/png"),
        ("text/plain; charset=utf-8", "text/plain; charset=latin1"),
        ("image/vnd.dxf", "image/vnd.dwg;format=binary"),
    ])
    def test_mismatch(self, declared: str, detected: str) -> None:
        assert not media_types_match(declared, detected)


# ===========================================================================
# Renditions
# ===========================================================================


class TestRenditionChecker:

    def test_valid_rendition(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        messages = RenditionChecker().check(folder, valid_document)
        assert all(m.level == MessageLevel.INFO for m in messages)
        assert codes(messages) == ["REPORT_FILE_PRESENT", "REPORT_PDFA_LEVEL"]

    def test_missing_file(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document, {"manual.pdf": None})
        messages = RenditionChecker().check(folder, valid_document)
        assert [(m.level, m.code) for m in messages] == [(MessageLevel.ERROR, "REPORT_MISSING_FILE")]

    def test_unexpected_file(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document, {"notes.txt": b"x"})
        messages = RenditionChecker().check(folder, valid_document)
        assert [m.code for m in messages if m.level == MessageLevel.WARN] == ["REPORT_UNEXPECTED_FILE"]
        assert "notes.txt" in messages[0].text

    def test_media_type_mismatch(self, tmp_path: Path) -> None:
        document = _document(("manual.pdf", "application/pdf"), ("photo.jpg", "image/jpeg"))
        png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
        folder = write_container_folder(tmp_path / "doc", document, {"photo.jpg": png})
        messages = RenditionChecker().check(folder, document)
        warnings = [m for m in messages if m.level == MessageLevel.WARN]
        assert codes(warnings) == ["REPORT_MIME_MISMATCH"]
        assert "image/png" in warnings[0].text
        assert not [m for m in messages if m.level == MessageLevel.ERROR]

    def test_level_b_not_accessible(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        write_pdf(folder / "manual.pdf", conformance="B")
        messages = RenditionChecker().check(folder, valid_document)
        errors = [m for m in messages if m.level == MessageLevel.ERROR]
        assert codes(errors) == ["REPORT_PDFA_NOT_ACCESSIBLE"]

    def test_certificate_allows_level_b(self, tmp_path: Path) -> None:
        document = _document(class_id="02-04")
        folder = write_container_folder(tmp_path / "doc", document)
        write_pdf(folder / "manual.pdf", conformance="B")
        messages = RenditionChecker().check(folder, document)
        assert "REPORT_PDFA_LEVEL" in codes(messages)
        assert not [m for m in messages if m.level == MessageLevel.ERROR]

    def test_pdfa_error_as_warning(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        write_pdf(folder / "manual.pdf", conformance="B")
        checker = RenditionChecker(ValidatorSettings(pdfa_error_as_warning=True))
        messages = checker.check(folder, valid_document)
        assert [(m.level, m.code) for m in messages if m.level != MessageLevel.INFO] == [
            (MessageLevel.WARN, "REPORT_PDFA_NOT_ACCESSIBLE"),
        ]

    def test_unreadable_pdf(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        write_pdf(folder / "manual.pdf", part=None)
        messages = RenditionChecker().check(folder, valid_document)
        assert "REPORT_PDF_UNREADABLE" in codes([m for m in messages if m.level == MessageLevel.ERROR])

    def test_damaged_pdf(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document, {"manual.pdf": b"not a pdf at all"})
        errors = [m for m in RenditionChecker().check(folder, valid_document) if m.level == MessageLevel.ERROR]
        assert codes(errors) == ["REPORT_PDF_UNREADABLE"]
        assert "manual.pdf" in errors[0].text

    def test_encrypted_pdf(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        write_pdf(folder / "manual.pdf", password="s3cret")
        errors = [m for m in RenditionChecker().check(folder, valid_document) if m.level == MessageLevel.ERROR]
        assert codes(errors) == ["REPORT_PDF_ENCRYPTED", "REPORT_PDF_UNREADABLE"]

    def test_pdf_without_text(self, tmp_path: Path, valid_document: Document) -> None:
        folder = write_container_folder(tmp_path / "doc", valid_document)
        write_pdf(folder / "manual.pdf", text=False)
        messages = RenditionChecker().check(folder, valid_document)
        assert [m.code for m in messages if m.level == MessageLevel.WARN] == ["REPORT_PDF_NO_TEXT"]

    def test_one_valid_candidate_is_enough(self, tmp_path: Path) -> None:
        document = _document(("manual.pdf", "application/pdf"), ("manual-print.pdf", "application/pdf"))
        folder = write_container_folder(tmp_path / "doc", document)
        write_pdf(folder / "manual-print.pdf", conformance="B")
        messages = RenditionChecker().check(folder, document)
        assert not [m for m in messages if m.level == MessageLevel.ERROR]
        assert "REPORT_PDFA_NOT_ACCESSIBLE" in codes(messages)
        assert codes(messages)[-1] == "REPORT_PDF_CANDIDATE_ACCEPTED"

    def test_all_candidates_failing(self, tmp_path: Path) -> None:
        document = _document(("manual.pdf", "application/pdf"), ("manual-print.pdf", "application/pdf"))
        folder = write_container_folder(tmp_path / "doc", document)
        write_pdf(folder / "manual.pdf", conformance="B")
        write_pdf(folder / "manual-print.pdf", conformance="B")
        messages = RenditionChecker().check(folder, document)
        errors = [m for m in messages if m.level == MessageLevel.ERROR]
        assert codes(errors) == ["REPORT_PDFA_NOT_ACCESSIBLE", "REPORT_PDFA_NOT_ACCESSIBLE"]
        assert "REPORT_PDF_CANDIDATE_ACCEPTED" not in codes(messages)

    def test_without_document_every_file_is_unexpected(self, tmp_path: Path) -> None:
        folder = tmp_path / "doc"
        folder.mkdir()
        (folder / "a.pdf").write_bytes(b"%PDF-1.7")
        messages = RenditionChecker().check(folder, None)
        assert codes(messages) == ["REPORT_UNEXPECTED_FILE"]


# ===========================================================================
# Report tree
# ===========================================================================


@pytest.fixture
def report(tmp_path: Path) -> Report:
    archive = tmp_path / "delivery.zip"
    archive.write_bytes(b"PK")
    root = Report.for_path(archive)
    root.add_message(Message.info("mode", code="REPORT_STRICT_MODE"))
    root.add_message(Message.warn("unexpected", code="REPORT_UNEXPECTED_FILE"))
    sub = root.sub_report(tmp_path / "DOC-1")
    sub.add_message(Message.error("missing", 1, "REPORT_MISSING_FILE"))
    return root


class TestReport:

    def test_file_names(self, report: Report) -> None:
        assert report.file_name == "delivery.zip"
        assert report.sub_reports[0].file_name == "DOC-1.zip"
        assert len(report.file_hash) == 64

    def test_sub_report_reused(self, report: Report, tmp_path: Path) -> None:
        assert report.sub_report(tmp_path / "DOC-1") is report.sub_reports[0]
        assert len(report.sub_reports) == 1

    def test_filter(self, report: Report) -> None:
        assert len(report.filter(MessageLevel.INFO)) == 2
        assert len(report.filter(MessageLevel.WARN)) == 1
        assert len(report.filter(MessageLevel.ERROR)) == 0
        assert len(report.filter(MessageLevel.ERROR, deep=True)) == 1
        assert len(report.filter(MessageLevel.INFO, exact=True, deep=True)) == 1

    def test_has_errors(self, report: Report) -> None:
        assert report.has_errors(deep=True)
        assert not report.has_errors(deep=False)
        assert report.has_warnings(deep=False)

    def test_freeze(self, report: Report) -> None:
        report.freeze()
        assert report.frozen
        assert report.sub_reports[0].frozen
        with pytest.raises(RuntimeError):
            report.add_message(Message.info("late"))
        with pytest.raises(RuntimeError):
            report.sub_reports[0].add_message(Message.info("late"))

    def test_log_threshold(self, tmp_path: Path) -> None:
        quiet = Report.for_path(tmp_path / "x.zip", log_threshold=MessageLevel.WARN)
        quiet.add_message(Message.info("hidden"))
        quiet.add_message(Message.error("shown"))
        assert [m.text for m in quiet.visible_messages()] == ["shown"]
        assert quiet.to_dict()["messages"] == [
            {"level": "ERROR", "text": "shown", "indent": 0, "code": None},
        ]

    def test_to_dict(self, report: Report) -> None:
        data = report.to_dict()
        assert data["file"] == "delivery.zip"
        assert data["passed"] is False
        assert data["sub_reports"][0]["passed"] is False
        assert data["sub_reports"][0]["messages"][0]["code"] == "REPORT_MISSING_FILE"

    def test_render_text(self, report: Report) -> None:
        text = report.render_text()
        assert text.splitlines()[0] == "delivery.zip (-)"
        assert "    DOC-1.zip (-)" in text
        assert "        [ERROR] missing" in text

    def test_walk(self, report: Report) -> None:
        assert [r.file_name for r in report.walk()] == ["delivery.zip", "DOC-1.zip"]

    def test_str(self, report: Report) -> None:
        assert str(report).startswith("[FAIL] delivery.zip")

    def test_statistics(self, report: Report) -> None:
        stats = ReportStatistics.from_report(report)
        assert stats.errors == ["REPORT_MISSING_FILE"]
        assert stats.warnings == ["REPORT_UNEXPECTED_FILE"]
        fields = stats.to_csv().split(";")
        assert fields[0] == report.file_hash
        assert fields[2:] == ["1", "1", "REPORT_MISSING_FILE", "REPORT_UNEXPECTED_FILE"]

    def test_message_validation(self) -> None:
        with pytest.raises(ValueError):
            Message.info("")
        with pytest.raises(ValueError):
            Message.info("x", -1)
        assert str(Message.warn("careful", 2)) == "        [WARN] careful"


# ===========================================================================
# Container walker
# ===========================================================================


def _errors(report: Report, deep: bool = True) -> list[Message]:
    return report.filter(MessageLevel.ERROR, deep=deep)


class TestContainerValidator:

    def test_valid_nested_container(self, nested_container: Path) -> None:
        report = ContainerValidator().validate(nested_container)
        assert _errors(report) == []
        assert report.frozen
        assert report.file_name == "delivery.zip"
        assert report.container_type == ContainerType.DOCUMENTATION_CONTAINER
        assert [s.file_name for s in report.sub_reports] == ["DOC-1.zip"]
        sub = report.sub_reports[0]
        assert sub.container_type == ContainerType.DOCUMENT_CONTAINER
        assert "REPORT_KNOWN_BY_PARENT" in codes(sub.messages)
        assert "REPORT_OBJECTS_OVERLAP" in codes(sub.messages)
        assert all(m.indent == 1 for m in sub.messages)
        assert "REPORT_RELATIONS_RESOLVED" in codes(report.messages)

    def test_validate_folder(self, tmp_path: Path, main_document: MainDocument,
                             valid_document: Document) -> None:
        root = write_container_folder(tmp_path / "delivery", main_document)
        write_container_folder(root / "DOC-1", valid_document)
        report = ContainerValidator().validate_folder(root)
        assert _errors(report) == []
        assert [s.file_name for s in report.sub_reports] == ["DOC-1.zip"]

    def test_strict_folder_without_metadata(self, tmp_path: Path, valid_document: Document) -> None:
        folder = tmp_path / "loose"
        folder.mkdir()
        write_pdf(folder / "manual.pdf")
        write_container_folder(folder / "DOC-1", valid_document)
        report = ContainerValidator().validate_folder(folder)
        errors = _errors(report)
        assert len(errors) == 1
        assert errors[0].code == "REPORT_NO_CANONICAL_XML"
        assert report.sub_reports == []

    def test_lenient_fallback_xml(self, tmp_path: Path, valid_document: Document) -> None:
        folder = tmp_path / "loose"
        folder.mkdir()
        XmlWriter().write(valid_document, folder / "metadata.xml")
        write_pdf(folder / "manual.pdf")
        report = ContainerValidator(ValidatorSettings(strict=False)).validate_folder(folder)
        message_codes = codes(report.messages)
        assert message_codes[:3] == ["REPORT_LENIENT_MODE", "REPORT_NO_CANONICAL_XML", "REPORT_UNKNOWN_CONTAINER_TYPE"]
        assert "REPORT_METADATA_FILE" in message_codes
        assert "REPORT_UNEXPECTED_FILE" not in message_codes
        assert codes(_errors(report)) == ["REPORT_NO_CANONICAL_XML"]
        assert report.container_type is None

    def test_lenient_ambiguous_xml(self, tmp_path: Path) -> None:
        folder = tmp_path / "loose"
        folder.mkdir()
        (folder / "a.xml").write_text("<Document/>", encoding="utf-8")
        (folder / "b.xml").write_text("<Document/>", encoding="utf-8")
        report = ContainerValidator(ValidatorSettings(strict=False)).validate_folder(folder)
        assert codes(report.messages)[-1] == "REPORT_AMBIGUOUS_XML"
        assert report.messages[-1].level == MessageLevel.WARN

    def test_orphan(self, tmp_path: Path, valid_document: Document) -> None:
        main = (
            DocumentBuilder.document("MAIN-1", "ACME")
            .with_classification("01-01")
            .with_iec_classification("AAA", "Allgemein")
            .with_object("SN-4711")
            .with_version("1.0", "en")
            .with_description("en", "Documentation")
            .with_relationship("DOC-2", "ACME")
            .build_main()
        )
        root = write_container_folder(tmp_path / "delivery", main)
        write_container_folder(root / "DOC-1", valid_document)
        report = ContainerValidator().validate_folder(root)
        orphans = [m for m in _errors(report) if m.code == "REPORT_ORPHAN"]
        assert len(orphans) == 1
        assert "DOC-1" in orphans[0].text
        assert "RELATION_UNRESOLVED" in codes(_errors(report, deep=False))

    def test_no_object_overlap(self, tmp_path: Path, main_document: MainDocument) -> None:
        child = (
            DocumentBuilder.document("DOC-1", "ACME")
            .with_classification("03-02")
            .with_iec_classification("AAA", "Allgemein")
            .with_object("SN-0001")
            .with_version("1.0", "en")
            .with_description("en", "Manual")
            .with_file("manual.pdf")
            .released()
            .build()
        )
        root = write_container_folder(tmp_path / "delivery", main_document)
        write_container_folder(root / "DOC-1", child)
        report = ContainerValidator().validate_folder(root)
        sub = report.sub_reports[0]
        assert "OBJECT_NO_OVERLAP" in codes(sub.warn_messages())
        assert _errors(report) == []

    def test_overlap_only_checked_below_main_document(self, tmp_path: Path,
                                                      main_document: MainDocument) -> None:
        root = write_container_folder(tmp_path / "delivery", main_document)
        write_container_folder(root / "PART", main_document)
        report = ContainerValidator().validate_folder(root)
        sub_codes = codes(report.sub_reports[0].messages)
        assert "REPORT_OBJECTS_OVERLAP" not in sub_codes
        assert "OBJECT_NO_OVERLAP" not in sub_codes

    def test_damaged_pdf_in_nested_container(self, tmp_path: Path, main_document: MainDocument,
                                             valid_document: Document) -> None:
        work = tmp_path / "work"
        sub = write_container_folder(work / "sub", valid_document, {"manual.pdf": b"not a pdf at all"})
        main = write_container_folder(work / "main", main_document)
        pack_container(sub, main / "DOC-1.zip")
        archive = pack_container(main, tmp_path / "delivery.zip")

        report = ContainerValidator().validate(archive)
        assert report.frozen
        assert _errors(report, deep=False) == []
        sub_report = report.sub_reports[0]
        assert codes(_errors(sub_report)) == ["REPORT_PDF_UNREADABLE"]
        assert "REPORT_KNOWN_BY_PARENT" in codes(sub_report.messages)

    def test_io_error_contained_per_node(self, tmp_path: Path, main_document: MainDocument,
                                         valid_document: Document,
                                         monkeypatch: pytest.MonkeyPatch) -> None:
        root = write_container_folder(tmp_path / "delivery", main_document)
        write_container_folder(root / "DOC-1", valid_document)
        write_container_folder(root / "DOC-2", valid_document)
        original = ContentSniffer.detect

        def failing_detect(self: ContentSniffer, path: str | Path) -> str:
            if Path(path).parent.name == "DOC-1":
                raise PermissionError(f"Permission denied: {path}")
            return original(self, path)

        monkeypatch.setattr(ContentSniffer, "detect", failing_detect)
        report = ContainerValidator().validate_folder(root)
        first, second = report.sub_reports
        assert first.file_name == "DOC-1.zip"
        assert codes(_errors(first)) == ["REPORT_PROCESSING_ERROR"]
        assert first.frozen
        assert second.file_name == "DOC-2.zip"
        assert _errors(second) == []
        assert "REPORT_KNOWN_BY_PARENT" in codes(second.messages)
        assert _errors(report, deep=False) == []

    def test_main_pdf_missing(self,tmp_path: Path, main_document: MainDocument,
                              valid_document: Document) -> None:
        root = write_container_folder(tmp_path / "delivery", main_document, {"VDI2770_Main.pdf": None})
        write_container_folder(root / "DOC-1", valid_document)
        report = ContainerValidator().validate_folder(root)
        assert codes(_errors(report)) == ["REPORT_MISSING_FILE", "REPORT_MAIN_PDF_MISSING"]

    def test_unreadable_metadata_is_contained(self, tmp_path: Path) -> None:
        folder = tmp_path / "doc"
        folder.mkdir()
        (folder / "VDI2770_Metadata.xml").write_text("<Document>", encoding="utf-8")
        report = ContainerValidator().validate_folder(folder)
        assert codes(_errors(report)) == ["REPORT_METADATA_UNREADABLE"]
        assert "REPORT_NO_DOCUMENT" in codes(report.messages)
        assert report.frozen

    def test_invalid_metadata_reported(self, tmp_path: Path, valid_document: Document) -> None:
        broken = valid_document.model_copy(update={"referenced_objects": []})
        folder = write_container_folder(tmp_path / "doc", broken)
        report = ContainerValidator().validate_folder(folder)
        errors = _errors(report)
        assert len(errors) == 1
        assert errors[0].code == "IS_EMPTY"
        assert "referencedObject" in errors[0].text

    def test_max_depth(self, nested_container: Path) -> None:
        report = ContainerValidator(ValidatorSettings(max_depth=0)).validate(nested_container)
        assert codes(_errors(report)) == ["REPORT_DEPTH_EXCEEDED"]
        assert report.sub_reports == []

    def test_not_a_zip(self, tmp_path: Path) -> None:
        path = tmp_path / "delivery.zip"
        path.write_text("no zip", encoding="utf-8")
        report = ContainerValidator().validate(path)
        assert codes(report.messages) == ["ARCHIVE_NOT_ZIP"]
        assert report.sub_reports == []
        assert report.frozen

    def test_broken_nested_archive(self, tmp_path: Path, main_document: MainDocument) -> None:
        root = write_container_folder(tmp_path / "main", main_document)
        with zipfile.ZipFile(root / "DOC-1.zip", "w") as zf:
            zf.writestr("VDI2770_Metadata.xml", "<Document/>")
            zf.writestr("../escape.txt", "x")
        archive = pack_container(root, tmp_path / "delivery.zip")
        report = ContainerValidator().validate(archive)
        assert [s.file_name for s in report.sub_reports] == ["DOC-1.zip"]
        sub = report.sub_reports[0]
        assert codes(sub.messages) == ["REPORT_PROCESSING_ERROR"]
        assert sub.messages[0].level == MessageLevel.ERROR
        assert codes(_errors(report, deep=False)) == ["RELATION_UNRESOLVED"]

    def test_temporary_directory_removed(self, tmp_path: Path, nested_container: Path,
                                         monkeypatch: pytest.MonkeyPatch) -> None:
        created: list[Path] = []
        original = tempfile.mkdtemp

        def recording_mkdtemp(*args: object, **kwargs: object) -> str:
            path = original(*args, **kwargs)
            created.append(Path(path))
            return path

        monkeypatch.setattr(tempfile, "mkdtemp", recording_mkdtemp)
        ContainerValidator().validate(nested_container)
        assert len(created) == 1
        assert not created[0].exists()

    def test_german_messages(self, nested_container: Path) -> None:
        report = ContainerValidator(ValidatorSettings(locale="de")).validate(nested_container)
        assert report.messages[0].text == render("REPORT_STRICT_MODE", "de")
        assert report.messages[0].text != render("REPORT_STRICT_MODE", "en")

    def test_read_documents(self, tmp_path: Path, main_document: MainDocument,
                            valid_document: Document) -> None:
        root = write_container_folder(tmp_path / "delivery", main_document)
        write_container_folder(root / "DOC-1", valid_document)
        (root / "other.xml").write_text("<Document/>", encoding="utf-8")
        documents = ContainerValidator().read_documents(root)
        assert sorted(p.relative_to(root).as_posix() for p in documents) == [
            "DOC-1/VDI2770_Metadata.xml",
            "VDI2770_Main.xml",
        ]
