"""
vdi2770 – Validator for VDI 2770 Documentation Containers
==========================================================
Checks manufacturer documentation packages against VDI 2770 Blatt 1:
the metadata of every document, the relations between the documents of
a delivery, the nesting of document and documentation containers and
the PDF/A renditions they carry.

Quick Start::

    from vdi2770 import ContainerValidator, DocumentBuilder, load_settings, validate

    # Validate a single metadata tree
    document = (
        DocumentBuilder.document("DOC-0815", "ACME")
        .with_classification("03-02")
        .with_object("SN-4711")
        .with_version("1.0", "en")
        .with_description("en", "Operating manual")
        .with_file("manual.pdf")
        .released()
        .build()
    )
    for fault in validate(document, locale="en"):
        print(fault)

    # Validate a whole container archive
    report = ContainerValidator(load_settings(strict=False)).validate("delivery.zip")
    print(report.render_text())
"""

__version__ = "0.1.0"

# Models
from .models.entities import (
    DigitalFile,
    Document,
    DocumentClassification,
    DocumentDescription,
    DocumentId,
    DocumentIdDomain,
    DocumentRelationship,
    DocumentRelationshipType,
    DocumentVersion,
    LifeCycleStatus,
    LifeCycleStatusValue,
    MainDocument,
    ObjectId,
    ObjectType,
    Organization,
    Party,
    ReferencedObject,
    Role,
    TranslatableString,
)
from .models.fault import Entity, Fault, FaultLevel, FaultType, Prop
from .models.message import Message, MessageLevel

# Builder
from .builder.document_builder import DocumentBuilder

# Validation
from .validator.engine import validate, validate_document
from .validator.relations import is_known_by_parent, validate_object_overlap, validate_relations

# Metadata I/O
from .metadata.reader import XmlReader
from .metadata.writer import XmlWriter

# Containers
from .config import ValidatorSettings, load_settings
from .container.report import ContainerType, Report, ReportStatistics
from .container.walker import ContainerValidator
from .errors import (
    ArchiveError,
    ConfigurationError,
    MetadataError,
    PdfValidationError,
    ProcessorError,
    Vdi2770Error,
    XmlProcessingError,
)

__all__ = [
    # Models
    "DigitalFile",
    "Document",
    "DocumentClassification",
    "DocumentDescription",
    "DocumentId",
    "DocumentIdDomain",
    "DocumentRelationship",
    "DocumentRelationshipType",
    "DocumentVersion",
    "LifeCycleStatus",
    "LifeCycleStatusValue",
    "MainDocument",
    "ObjectId",
    "ObjectType",
    "Organization",
    "Party",
    "ReferencedObject",
    "Role",
    "TranslatableString",
    "Entity",
    "Fault",
    "FaultLevel",
    "FaultType",
    "Prop",
    "Message",
    "MessageLevel",
    # Builder
    "DocumentBuilder",
    # Validation
    "validate",
    "validate_document",
    "is_known_by_parent",
    "validate_object_overlap",
    "validate_relations",
    # Metadata I/O
    "XmlReader",
    "XmlWriter",
    # Containers
    "ValidatorSettings",
    "load_settings",
    "ContainerType",
    "Report",
    "ReportStatistics",
    "ContainerValidator",
    # Errors
    "ArchiveError",
    "ConfigurationError",
    "MetadataError",
    "PdfValidationError",
    "ProcessorError",
    "Vdi2770Error",
    "XmlProcessingError",
]
