"""
VDI 2770 Metadata – Model
=========================
Python representation of the VDI 2770 metadata tree: a ``Document`` with
its identifiers, classifications, referenced objects and versions.

The model is deliberately permissive. Every attribute may be missing or
empty and list members may be ``None``, because the tree comes from
untrusted XML and must be representable before it is validated. The
rules themselves live in :mod:`vdi2770.validator.rules`; the model only
carries data plus a few read-only convenience queries.

Entities are frozen; validation never mutates them.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .constants import MAIN_DOCUMENT_PDF_FILE_NAME


class Role(str, Enum):
    """Role of a party (VDI 2770 ``Party/@Role``)."""
    AUTHOR = "Author"
    MANUFACTURER = "Manufacturer"
    SUPPLIER = "Supplier"
    RESPONSIBLE = "Responsible"


class ObjectType(str, Enum):
    """Kind of a referenced object id."""
    TYPE = "Type"
    INDIVIDUAL = "Individual"


class LifeCycleStatusValue(str, Enum):
    IN_REVIEW = "InReview"
    RELEASED = "Released"


class DocumentRelationshipType(str, Enum):
    AFFECTING = "Affecting"
    REFERS_TO = "RefersTo"
    BASED_ON = "BasedOn"
    TRANSLATION_OF = "TranslationOf"


_FROZEN = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Leaf entities
# ---------------------------------------------------------------------------


class Organization(BaseModel):
    model_config = _FROZEN

    organization_id: str | None = None
    name: str | None = None
    official_name: str | None = None


class Party(BaseModel):
    """An organization acting in a given role."""
    model_config = _FROZEN

    role: Role | None = None
    organization: Organization | None = None


class TranslatableString(BaseModel):
    """Text in one language (ISO 639 code)."""
    model_config = _FROZEN

    text: str | None = None
    language: str | None = None


class DocumentId(BaseModel):
    """
    Identifier of a document within a domain.

    Two ids denote the same document when their ``id@domain`` keys match
    case-insensitively; see :meth:`key`.
    """
    model_config = _FROZEN

    id: str | None = None
    domain_id: str | None = None
    is_primary: bool | None = None

    def key(self) -> str:
        return f"{self.id or ''}@{self.domain_id or ''}".lower()

    def as_text(self) -> str:
        return f"{self.id};{self.domain_id};{self.is_primary}"


class DocumentIdDomain(BaseModel):
    model_config = _FROZEN

    document_domain_id: str | None = None
    party: Party | None = None


class DocumentClassification(BaseModel):
    model_config = _FROZEN

    class_id: str | None = None
    class_names: list[TranslatableString | None] = Field(default_factory=list)
    classification_system: str | None = None


class ObjectId(BaseModel):
    """
    Identifier of a referenced physical object or object type.

    ``ref_type`` is a free-form tag; the value ``"instance of object uri"``
    marks the id as a DIN SPEC 91406 URI and enables URI checks.
    """
    model_config = _FROZEN

    id: str | None = None
    object_type: ObjectType | None = None
    ref_type: str | None = None
    is_globally_biunique: bool | None = None

    def as_text(self) -> str:
        return f"{self.id};{self.ref_type};{self.is_globally_biunique}"


class ReferencedObject(BaseModel):
    model_config = _FROZEN

    object_ids: list[ObjectId | None] = Field(default_factory=list)
    parties: list[Party | None] = Field(default_factory=list)
    descriptions: list[TranslatableString | None] = Field(default_factory=list)
    project_ids: list[str | None] = Field(default_factory=list)
    reference_designations: list[str | None] = Field(default_factory=list)
    equipment_ids: list[str | None] = Field(default_factory=list)


class DocumentDescription(BaseModel):
    model_config = _FROZEN

    language: str | None = None
    title: str | None = None
    summary: str | None = None
    keywords: list[str | None] = Field(default_factory=list)


class LifeCycleStatus(BaseModel):
    model_config = _FROZEN

    status_value: LifeCycleStatusValue | None = None
    set_date: date | None = None
    comments: list[TranslatableString | None] = Field(default_factory=list)
    parties: list[Party | None] = Field(default_factory=list)


class DocumentRelationship(BaseModel):
    """Typed reference from a document version to another document."""
    model_config = _FROZEN

    document_id: DocumentId | None = None
    document_version_ids: list[str | None] = Field(default_factory=list)
    descriptions: list[TranslatableString | None] = Field(default_factory=list)
    type: DocumentRelationshipType | None = None


class DigitalFile(BaseModel):
    """A rendition of a document version, stored next to the metadata file."""
    model_config = _FROZEN

    file_name: str | None = None
    file_format: str | None = None


# ---------------------------------------------------------------------------
# Composite entities
# ---------------------------------------------------------------------------


class DocumentVersion(BaseModel):
    model_config = _FROZEN

    document_version_id: str | None = None
    languages: list[str | None] = Field(default_factory=list)
    parties: list[Party | None] = Field(default_factory=list)
    descriptions: list[DocumentDescription | None] = Field(default_factory=list)
    life_cycle_status: LifeCycleStatus | None = None
    relationships: list[DocumentRelationship | None] = Field(default_factory=list)
    digital_files: list[DigitalFile | None] = Field(default_factory=list)
    number_of_pages: int | None = None


class Document(BaseModel):
    """
    Root of the VDI 2770 metadata tree.

    Example::

        doc = DocumentBuilder.document("DOC-1", "ACME").with_version(...).build()
        if doc.is_main_document():
            ...
    """
    model_config = _FROZEN

    document_ids: list[DocumentId | None] = Field(default_factory=list)
    document_id_domains: list[DocumentIdDomain | None] = Field(default_factory=list)
    classifications: list[DocumentClassification | None] = Field(default_factory=list)
    referenced_objects: list[ReferencedObject | None] = Field(default_factory=list)
    versions: list[DocumentVersion | None] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_main_document(self) -> bool:
        """A document declaring a ``VDI2770_Main.pdf`` rendition is a main document."""
        target = MAIN_DOCUMENT_PDF_FILE_NAME.lower()
        return any(
            f.file_name.lower() == target
            for f in self.digital_files()
            if f.file_name
        )

    def digital_files(self) -> list[DigitalFile]:
        return [f for v in self.versions if v for f in v.digital_files if f]

    def relationships(self) -> list[DocumentRelationship]:
        return [r for v in self.versions if v for r in v.relationships if r]

    def object_ids(self) -> list[ObjectId]:
        return [o for r in self.referenced_objects if r for o in r.object_ids if o]

    def ids(self) -> list[DocumentId]:
        return [i for i in self.document_ids if i]

    def classification_ids(self, system: str) -> list[str]:
        return [
            c.class_id
            for c in self.classifications
            if c and c.class_id and c.classification_system == system
        ]


class MainDocument(BaseModel):
    """
    A ``Document`` in the role of a main document.

    Main documents obey every document rule plus the main-document rules
    in :func:`vdi2770.validator.rules.validate_main_document`. The wrapper
    only tags the role; it adds no data.
    """
    model_config = _FROZEN

    document: Document

    @classmethod
    def of(cls, document: Document) -> "MainDocument":
        return cls(document=document)
