"""
Rendition Checker
=================
Compares the digital files a document declares with the files stored
next to its metadata file:

- declared but missing files are errors, stored but undeclared files
  are warnings
- the detected media type of a stored file must match the declared one
- PDF renditions must conform to PDF/A, level ``a`` unless the document
  is classified as a certificate (``02-04``)

When a version declares several PDF renditions, the node is accepted if
one of them validates; the findings of the others are then reported as
information only.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import ValidatorSettings
from ..models.constants import (
    PDF_MEDIA_TYPE,
    VDI2770_CERTIFICATE_CATEGORY,
    VDI2770_CLASSIFICATION_SYSTEM_NAME,
    ZIP_MEDIA_TYPES,
    is_metadata_file,
)
from ..models.entities import DigitalFile, Document
from ..models.message import Message, MessageLevel
from ..pdf import ContentSniffer, PdfInspector
from ..validator.messages import render
from .archive import is_container

log = logging.getLogger(__name__)


def normalize_media_type(value: str) -> str:
    """Lower case, no quotes, no whitespace."""
    return "".join(value.replace('"', "").replace("'", "").split()).lower()


def media_types_match(declared: str, detected: str) -> bool:
    """
    Equal after normalization, or equal up to the parameters when exactly
    one side carries parameters (``image/x;format=ascii`` matches ``image/x``).
    """
    a, b = normalize_media_type(declared), normalize_media_type(detected)
    if a == b:
        return True
    if a in ZIP_MEDIA_TYPES and b in ZIP_MEDIA_TYPES:
        return True
    a_params, b_params = ";" in a, ";" in b
    if a_params == b_params:
        return False
    return a.split(";")[0] == b.split(";")[0]


def _is_pdf(digital_file: DigitalFile) -> bool:
    if digital_file.file_format and media_types_match(digital_file.file_format, PDF_MEDIA_TYPE):
        return True
    return bool(digital_file.file_name) and digital_file.file_name.lower().endswith(".pdf")


@dataclass
class _PdfResult:
    file_name: str
    messages: list[Message] = field(default_factory=list)
    passed: bool = True


class RenditionChecker:
    """Checks stored renditions of one container node."""

    def __init__(
        self,
        settings: ValidatorSettings | None = None,
        inspector: PdfInspector | None = None,
        sniffer: ContentSniffer | None = None,
    ) -> None:
        self._settings = settings or ValidatorSettings()
        self._locale = self._settings.locale
        self._inspector = inspector or PdfInspector(self._locale)
        self._sniffer = sniffer or ContentSniffer()

    def _text(self, code: str, **args: object) -> str:
        return render(code, self._locale, **args)

    @property
    def _failure_level(self) -> MessageLevel:
        return MessageLevel.WARN if self._settings.pdfa_error_as_warning else MessageLevel.ERROR

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(
        self,
        folder: str | Path,
        document: Document | None,
        metadata_file: str | Path | None = None,
        indent: int = 0,
    ) -> list[Message]:
        """All rendition messages of the node stored in *folder*."""
        root = Path(folder)
        declared = document.digital_files() if document else []
        messages = self.unexpected_files(root, declared, metadata_file, indent)

        pdf_results: list[_PdfResult] = []
        allow_a_only = True
        if document is not None:
            categories = document.classification_ids(VDI2770_CLASSIFICATION_SYSTEM_NAME)
            allow_a_only = VDI2770_CERTIFICATE_CATEGORY not in categories

        for digital_file in declared:
            if not digital_file.file_name:
                continue
            path = root / digital_file.file_name
            if not path.is_file():
                messages.append(Message.error(
                    self._text("REPORT_MISSING_FILE", file=digital_file.file_name),
                    indent, "REPORT_MISSING_FILE",
                ))
                continue
            messages.append(Message.info(
                self._text("REPORT_FILE_PRESENT", file=digital_file.file_name),
                indent, "REPORT_FILE_PRESENT",
            ))
            messages.extend(self.check_media_type(path, digital_file.file_format, indent))
            if _is_pdf(digital_file):
                pdf_results.append(self.check_pdf(path, allow_a_only, indent))

        messages.extend(self._apply_candidate_policy(pdf_results, indent))
        return messages

    def unexpected_files(
        self,
        folder: Path,
        declared: list[DigitalFile],
        metadata_file: str | Path | None = None,
        indent: int = 0,
    ) -> list[Message]:
        """WARN for every stored file that is neither declared, metadata nor a nested container."""
        names = {f.file_name for f in declared if f.file_name}
        skip = Path(metadata_file).name if metadata_file else None
        messages: list[Message] = []
        for path in sorted(folder.iterdir()):
            if not path.is_file() or path.name in names or path.name == skip:
                continue
            if is_metadata_file(path) or is_container(path):
                continue
            log.debug("Unexpected file %s", path)
            messages.append(Message.warn(
                self._text("REPORT_UNEXPECTED_FILE", file=path.name), indent, "REPORT_UNEXPECTED_FILE",
            ))
        return messages

    def check_media_type(self, path: Path, declared: str | None, indent: int = 0) -> list[Message]:
        if not declared:
            return [Message.info(
                self._text("REPORT_NO_FILE_FORMAT", file=path.name), indent, "REPORT_NO_FILE_FORMAT",
            )]
        detected = self._sniffer.detect(path)
        if media_types_match(declared, detected):
            return []
        log.debug("Media type of %s: declared %s, detected %s", path.name, declared, detected)
        return [Message.warn(
            self._text("REPORT_MIME_MISMATCH", file=path.name, declared=declared, detected=detected),
            indent, "REPORT_MIME_MISMATCH",
        )]

    def check_pdf(self, path: Path, allow_a_only: bool, indent: int = 0) -> _PdfResult:
        """PDF/A findings for one rendition; ``passed`` is False on any conformance failure."""
        result = _PdfResult(path.name)
        failure = self._failure_level

        def fail(code: str, **args: object) -> None:
            result.messages.append(Message(failure, self._text(code, file=path.name, **args), indent, code))
            result.passed = False

        inspection = self._inspector.inspect(path)
        if inspection.encrypted:
            fail("REPORT_PDF_ENCRYPTED")
        if inspection.level is None:
            fail("REPORT_PDF_UNREADABLE", error=inspection.error or "")
            return result

        if allow_a_only and not inspection.level.endswith("A"):
            fail("REPORT_PDFA_NOT_ACCESSIBLE", level=inspection.level)
        else:
            result.messages.append(Message.info(
                self._text("REPORT_PDFA_LEVEL", file=path.name, level=inspection.level),
                indent, "REPORT_PDFA_LEVEL",
            ))
        if not inspection.has_text:
            result.messages.append(Message.warn(
                self._text("REPORT_PDF_NO_TEXT", file=path.name), indent, "REPORT_PDF_NO_TEXT",
            ))
        for finding in inspection.preflight:
            result.messages.append(dataclasses.replace(finding, level=failure, indent=indent))
            result.passed = False
        return result

    def _apply_candidate_policy(self, results: list[_PdfResult], indent: int) -> list[Message]:
        accepted = next((r for r in results if r.passed), None)
        if len(results) < 2 or accepted is None:
            return [m for r in results for m in r.messages]

        log.info("PDF rendition %s accepted, %d other candidate(s)", accepted.file_name, len(results) - 1)
        messages: list[Message] = []
        for r in results:
            if r.passed:
                messages.extend(r.messages)
            else:
                messages.extend(m.demoted(MessageLevel.INFO) for m in r.messages)
        messages.append(Message.info(
            self._text("REPORT_PDF_CANDIDATE_ACCEPTED", file=accepted.file_name),
            indent, "REPORT_PDF_CANDIDATE_ACCEPTED",
        ))
        return messages
