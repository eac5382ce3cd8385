"""
Container Walker
================
Validates a VDI 2770 container archive and all containers nested in it.

The archive is screened, extracted into one temporary directory and
walked depth first. Every folder is one node of the report tree:

1. classify the node by its canonical metadata file name
2. read and validate the metadata file
3. run the cross-document checks against the parent node and all other
   documents of the archive
4. check the stored renditions
5. descend into nested containers (documentation containers only)

Processing errors are contained per node: they become a single ERROR
message of that node's report and the siblings are processed normally.
The temporary directory is removed when the walk ends, whatever the
outcome.

Example::

    from vdi2770.config import load_settings
    from vdi2770.container import ContainerValidator

    report = ContainerValidator(load_settings(strict=False)).validate("delivery.zip")
    print(report.render_text())
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from ..config import ValidatorSettings
from ..errors import MetadataError, ProcessorError, UnknownContainerTypeError
from ..metadata import XmlReader
from ..models.constants import (
    MAIN_DOCUMENT_PDF_FILE_NAME,
    VDI2770_CLASSIFICATION_SYSTEM_NAME,
    VDI2770_GERMAN_CATEGORY_NAMES,
    is_metadata_file,
)
from ..models.entities import Document
from ..models.fault import FaultLevel
from ..models.message import Message, MessageLevel
from ..pdf import ContentSniffer, PdfInspector
from ..validator import (
    is_known_by_parent,
    render,
    validate_document,
    validate_object_overlap,
    validate_relations,
)
from .archive import ZipExtractor
from .classifier import classify, fallback_metadata_files, metadata_file_name
from .renditions import RenditionChecker
from .report import ContainerType, Report

log = logging.getLogger(__name__)


class ContainerValidator:
    """Walks an archive tree and builds its report tree."""

    def __init__(
        self,
        settings: ValidatorSettings | None = None,
        reader: XmlReader | None = None,
        inspector: PdfInspector | None = None,
        sniffer: ContentSniffer | None = None,
        extractor: ZipExtractor | None = None,
        log_threshold: MessageLevel = MessageLevel.INFO,
    ) -> None:
        self.settings = settings or ValidatorSettings()
        self._locale = self.settings.locale
        self._reader = reader or XmlReader()
        self._extractor = extractor or ZipExtractor(self.settings)
        self._renditions = RenditionChecker(
            self.settings,
            inspector or PdfInspector(self._locale),
            sniffer or ContentSniffer(),
        )
        self._log_threshold = log_threshold

    def _text(self, code: str, **args: object) -> str:
        return render(code, self._locale, **args)

    def _info(self, code: str, indent: int, **args: object) -> Message:
        return Message.info(self._text(code, **args), indent, code)

    def _warn(self, code: str, indent: int, **args: object) -> Message:
        return Message.warn(self._text(code, **args), indent, code)

    def _error(self, code: str, indent: int, **args: object) -> Message:
        return Message.error(self._text(code, **args), indent, code)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, path: str | Path) -> Report:
        """Validate the container archive at *path*."""
        archive = Path(path)
        report = Report.for_path(archive, self._locale, self._log_threshold)
        log.info("Validating container %s", archive)

        for fault in self._extractor.inspect(archive):
            report.add_message(Message(
                MessageLevel.from_fault_level(fault.level),
                self._text(fault.code, file=fault.file_name, **fault.args),
                0,
                fault.code,
            ))
        if report.has_errors(deep=False):
            report.freeze()
            return report

        self._extractor.failures.clear()
        work_dir = Path(tempfile.mkdtemp(prefix="vdi2770_"))
        log.debug("Created temporary directory %s", work_dir)
        try:
            self._extractor.extract(archive, work_dir)
            documents = self.read_documents(work_dir)
            self._process(work_dir, report, None, documents, 0)
        except (ProcessorError, OSError) as e:
            log.error("Processing of %s failed: %s", archive.name, e)
            if not report.frozen:
                report.add_message(self._error("REPORT_PROCESSING_ERROR", 0, error=e))
        finally:
            try:
                shutil.rmtree(work_dir)
                log.debug("Removed temporary directory %s", work_dir)
            except OSError as e:
                log.warning("Can not remove temporary directory %s: %s", work_dir, e)
        report.freeze()
        return report

    def validate_folder(self, folder: str | Path) -> Report:
        """Validate an already extracted container folder in place."""
        root = Path(folder)
        report = Report.for_path(root, self._locale, self._log_threshold)
        if not root.is_dir():
            report.add_message(self._error("REPORT_FOLDER_UNREADABLE", 0, folder=root))
            report.freeze()
            return report
        self._process(root, report, None, self.read_documents(root), 0)
        return report

    def read_documents(self, folder: Path) -> dict[Path, Document]:
        """All readable canonical metadata files below *folder*, keyed by path."""
        documents: dict[Path, Document] = {}
        for path in sorted(folder.rglob("*.xml")):
            if not is_metadata_file(path):
                continue
            document = self._reader.try_read(path)
            if document is not None:
                documents[path] = document
        log.debug("Found %d metadata file(s) below %s", len(documents), folder)
        return documents

    # ------------------------------------------------------------------
    # Node processing
    # ------------------------------------------------------------------

    def _process(
        self,
        folder: Path,
        report: Report,
        parent: Document | None,
        documents: dict[Path, Document],
        indent: int,
    ) -> None:
        try:
            self._process_node(folder, report, parent, documents, indent)
        except (ProcessorError, MetadataError, OSError) as e:
            log.error("Processing of %s failed: %s", folder, e)
            report.add_message(self._error("REPORT_PROCESSING_ERROR", indent, error=e))
        finally:
            report.freeze()

    def _process_node(
        self,
        folder: Path,
        report: Report,
        parent: Document | None,
        documents: dict[Path, Document],
        indent: int,
    ) -> None:
        strict = self.settings.strict
        report.add_message(self._info("REPORT_STRICT_MODE" if strict else "REPORT_LENIENT_MODE", indent))

        try:
            entries = sorted(folder.iterdir())
        except OSError as e:
            raise ProcessorError(self._text("REPORT_FOLDER_UNREADABLE", folder=folder.name)) from e
        names = [p.name for p in entries if p.is_file()]

        container_type: ContainerType | None = None
        try:
            container_type = classify(names)
        except UnknownContainerTypeError as e:
            log.info("Container %s: %s", folder.name, e)
            report.add_message(self._error("REPORT_NO_CANONICAL_XML", indent))

        if container_type is not None:
            report.container_type = container_type
            report.add_message(self._info("REPORT_CONTAINER_TYPE", indent, type=container_type.value))
            log.info("Container %s is a %s", folder.name, container_type.value)
            metadata_file = folder / metadata_file_name(container_type)
        elif strict:
            report.add_message(self._warn("REPORT_STRICT_UNTYPED", indent))
            return
        else:
            report.add_message(self._info("REPORT_UNKNOWN_CONTAINER_TYPE", indent))
            candidates = fallback_metadata_files(folder)
            if len(candidates) > 1:
                report.add_message(self._warn("REPORT_AMBIGUOUS_XML", indent))
                return
            if not candidates:
                report.add_message(self._info("REPORT_NO_METADATA_FILE", indent))
                return
            metadata_file = candidates[0]

        document = self._read_metadata(metadata_file, report, documents, indent)
        if document is not None:
            self._report_document(document, report, indent)
            self._report_relations(document, metadata_file, report, parent, documents, indent)
        else:
            report.add_message(self._info("REPORT_NO_DOCUMENT", indent))

        report.add_messages(self._renditions.check(folder, document, metadata_file, indent))

        if container_type == ContainerType.DOCUMENTATION_CONTAINER or (container_type is None and not strict):
            if container_type is not None and MAIN_DOCUMENT_PDF_FILE_NAME not in names:
                report.add_message(self._error("REPORT_MAIN_PDF_MISSING", indent))
            self._descend(folder, entries, report, document, documents, indent)

    def _read_metadata(
        self,
        metadata_file: Path,
        report: Report,
        documents: dict[Path, Document],
        indent: int,
    ) -> Document | None:
        if not metadata_file.is_file():
            report.add_message(self._error("REPORT_METADATA_FILE_MISSING", indent, file=metadata_file.name))
            return None
        report.add_message(self._info("REPORT_METADATA_FILE", indent, file=metadata_file.name))
        document = documents.get(metadata_file)
        if document is not None:
            return document
        try:
            document = self._reader.read(metadata_file)
        except MetadataError as e:
            report.add_message(self._error("REPORT_METADATA_UNREADABLE", indent, file=metadata_file.name, error=e))
            return None
        documents[metadata_file] = document
        return document

    def _report_document(self, document: Document, report: Report, indent: int) -> None:
        faults = validate_document(document, locale=self._locale, strict=self.settings.strict)
        report.add_messages([Message.from_fault(f, indent) for f in faults])

        for document_id in document.ids():
            report.add_message(self._info("REPORT_DOCUMENT_ID", indent, value=document_id.as_text()))
        for object_id in document.object_ids():
            object_type = object_id.object_type.value if object_id.object_type else "-"
            report.add_message(self._info("REPORT_OBJECT_ID", indent, type=object_type, value=object_id.as_text()))
        for class_id in document.classification_ids(VDI2770_CLASSIFICATION_SYSTEM_NAME):
            name = VDI2770_GERMAN_CATEGORY_NAMES.get(class_id)
            value = f"{class_id} ({name})" if name else class_id
            report.add_message(self._info("REPORT_CLASSIFICATION", indent, value=value))
        for relationship in document.relationships():
            target = relationship.document_id.as_text() if relationship.document_id else "-"
            kind = relationship.type.value if relationship.type else "-"
            report.add_message(self._info("REPORT_RELATIONSHIP", indent, value=f"{kind} {target}"))

    def _report_relations(
        self,
        document: Document,
        metadata_file: Path,
        report: Report,
        parent: Document | None,
        documents: dict[Path, Document],
        indent: int,
    ) -> None:
        if parent is None:
            report.add_message(self._info("REPORT_NO_PARENT", indent))
        else:
            if parent.is_main_document() and not document.is_main_document():
                overlap = validate_object_overlap(document, parent, locale=self._locale)
                if overlap is not None:
                    report.add_message(Message.from_fault(overlap, indent))
                else:
                    report.add_message(self._info("REPORT_OBJECTS_OVERLAP", indent))

            label = self._text("LABEL_MAIN_DOCUMENT" if document.is_main_document() else "LABEL_DOCUMENT")
            ids = document.ids()
            value = ids[0].as_text() if ids else metadata_file.parent.name
            if is_known_by_parent(document, parent):
                report.add_message(self._info("REPORT_KNOWN_BY_PARENT", indent, target=label, value=value))
            else:
                report.add_message(self._error("REPORT_ORPHAN", indent, target=label, value=value))

        if not document.relationships():
            return
        siblings = [d for p, d in documents.items() if p != metadata_file]
        faults = validate_relations(document, siblings, document.is_main_document(), locale=self._locale)
        if faults:
            report.add_messages([Message.from_fault(f, indent) for f in faults])
        else:
            report.add_message(self._info("REPORT_RELATIONS_RESOLVED", indent))
        if any(f.level == FaultLevel.ERROR for f in faults):
            log.warning("Unresolved relationships in %s", metadata_file)

    def _descend(
        self,
        folder: Path,
        entries: list[Path],
        report: Report,
        document: Document | None,
        documents: dict[Path, Document],
        indent: int,
    ) -> None:
        sub_folders = [p for p in entries if p.is_dir()]
        max_depth = self.settings.max_depth
        if max_depth is not None and indent >= max_depth:
            for sub in sub_folders:
                report.add_message(self._error("REPORT_DEPTH_EXCEEDED", indent, depth=indent + 1, folder=sub.name))
            return

        for sub in sub_folders:
            log.debug("Descending into %s", sub)
            self._process(sub, report.sub_report(sub), document, documents, indent + 1)

        for failed, reason in sorted(self._extractor.failures.items()):
            if failed.parent != folder:
                continue
            sub_report = report.sub_report(failed)
            if not sub_report.frozen:
                sub_report.add_message(self._error("REPORT_PROCESSING_ERROR", indent + 1, error=reason))
                sub_report.freeze()
