"""
PDF/A Inspector
===============
Reads what the rendition checker needs to know about a PDF file:

- PDF/A part and conformance from the XMP ``pdfaid`` schema (e.g. ``2A``)
- whether the file is encrypted or password protected
- whether any page draws text
- structural preflight findings for PDF/A-1 files

Example::

    from vdi2770.pdf import PdfInspector

    inspection = PdfInspector(locale="de").inspect("VDI2770_Main.pdf")
    print(inspection.level, inspection.encrypted, inspection.has_text)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pikepdf

from ..errors import PdfValidationError
from ..models.message import Message
from ..validator.messages import render

log = logging.getLogger(__name__)

SUPPORTED_LEVELS: tuple[str, ...] = ("1A", "1B", "2A", "2B", "2U", "3A", "3B", "3U")

_TEXT_OPERATORS = "Tj TJ ' \""


@dataclass
class PdfInspection:
    """Result of inspecting one PDF file. ``level`` is None when unreadable."""
    file_name: str
    level: str | None = None
    encrypted: bool = False
    has_text: bool = False
    preflight: list[Message] = field(default_factory=list)
    error: str | None = None


class PdfInspector:
    """pikepdf based implementation of the PDF/A collaborator."""

    def __init__(self, locale: str = "en") -> None:
        self._locale = locale

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def pdfa_level(self, path: str | Path) -> str:
        """
        PDF/A part and conformance, e.g. ``"2B"``.

        Raises ``PdfValidationError`` if the file can not be opened, has no
        PDF/A identification, or declares an unsupported level.
        """
        p = Path(path)
        try:
            with pikepdf.open(p) as pdf:
                if "/Metadata" not in pdf.Root:
                    raise PdfValidationError(f"{p.name}: no XMP metadata")
                meta = pdf.open_metadata()
                level = meta.pdfa_status
        except pikepdf.PasswordError as e:
            raise PdfValidationError(f"{p.name}: password protected") from e
        except pikepdf.PdfError as e:
            raise PdfValidationError(f"{p.name}: {e}") from e

        if not level:
            raise PdfValidationError(f"{p.name}: no PDF/A identification")
        level = level.upper()
        if level not in SUPPORTED_LEVELS:
            raise PdfValidationError(f"{p.name}: unsupported PDF/A level {level}")
        log.info("PDF/A level of %s is %s", p.name, level)
        return level

    def is_encrypted(self, path: str | Path) -> bool:
        try:
            with pikepdf.open(path) as pdf:
                return pdf.is_encrypted
        except pikepdf.PasswordError:
            log.warning("PDF file %s is password protected", path)
            return True
        except pikepdf.PdfError as e:
            # unreadable files are reported through pdfa_level
            log.warning("Can not open PDF file %s: %s", path, e)
            return False

    def has_text(self, path: str | Path) -> bool:
        """True if a content stream of any page shows a non-empty string."""
        try:
            with pikepdf.open(path) as pdf:
                for page in pdf.pages:
                    if page.obj.get("/Contents") is None:
                        continue
                    for instruction in pikepdf.parse_content_stream(page, _TEXT_OPERATORS):
                        if any(_non_empty(op) for op in instruction.operands):
                            return True
        except pikepdf.PdfError as e:
            log.warning("Can not read content of %s: %s", path, e)
        return False

    def preflight(self, path: str | Path, level: str | None = None) -> list[Message]:
        """
        Structural checks for PDF/A-1; other parts return no findings.
        Raises ``PdfValidationError`` if the file can not be opened.
        """
        p = Path(path)
        if level is None:
            try:
                level = self.pdfa_level(p)
            except PdfValidationError as e:
                log.warning("Can not read PDF/A conformance level: %s", e)
                return []
        if not level.startswith("1"):
            return []

        messages: list[Message] = []

        def fail(code: str) -> None:
            messages.append(Message.error(render(code, self._locale, file=p.name), code=code))

        try:
            with pikepdf.open(p) as pdf:
                root = pdf.Root
                if pdf.is_encrypted:
                    fail("PREFLIGHT_ENCRYPTED")
                if "/Metadata" not in root:
                    fail("PREFLIGHT_NO_METADATA")
                if "/OutputIntents" not in root or len(root.OutputIntents) == 0:
                    fail("PREFLIGHT_NO_OUTPUT_INTENT")
                if level.endswith("A"):
                    mark_info = root.get("/MarkInfo")
                    if mark_info is None or not bool(mark_info.get("/Marked", False)):
                        fail("PREFLIGHT_NOT_MARKED")
                    if "/StructTreeRoot" not in root:
                        fail("PREFLIGHT_NO_STRUCTURE")
        except pikepdf.PasswordError as e:
            raise PdfValidationError(f"{p.name}: password protected") from e
        except pikepdf.PdfError as e:
            raise PdfValidationError(f"{p.name}: {e}") from e
        return messages

    def inspect(self, path: str | Path) -> PdfInspection:
        """Collect level, encryption, text and preflight in one pass."""
        p = Path(path)
        result = PdfInspection(file_name=p.name)
        result.encrypted = self.is_encrypted(p)
        try:
            result.level = self.pdfa_level(p)
        except PdfValidationError as e:
            result.error = str(e)
            return result
        result.has_text = self.has_text(p)
        try:
            result.preflight = self.preflight(p, result.level)
        except PdfValidationError as e:
            result.level, result.error = None, str(e)
        return result


def _non_empty(operand: object) -> bool:
    if isinstance(operand, pikepdf.String):
        return len(bytes(operand)) > 0
    if isinstance(operand, pikepdf.Array):
        return any(_non_empty(item) for item in operand)
    return False
