"""
Document Builder
================
Fluent builder API for constructing VDI 2770 ``Document`` trees.

Example::

    from vdi2770.builder import DocumentBuilder

    document = (
        DocumentBuilder.document("DOC-0815", "ACME")
        .with_classification("03-02")
        .with_iec_classification("AAB", "Allgemeine Bedienung")
        .with_object("SN-4711", ObjectType.INDIVIDUAL)
        .with_version("1.0", "de", "en")
        .with_description("de", "Betriebsanleitung")
        .with_description("en", "Operating manual")
        .with_file("manual.pdf", "application/pdf")
        .released(date(2024, 5, 1))
        .build()
    )

Every party the builder creates belongs to one organization, named after
the id domain unless given explicitly.
"""

from __future__ import annotations

from datetime import date

from ..models.constants import (
    IEC61355_CLASSIFICATION_NAME,
    MAIN_DOCUMENT_PDF_FILE_NAME,
    PDF_MEDIA_TYPE,
    VDI2770_CLASSIFICATION_SYSTEM_NAME,
    VDI2770_ENGLISH_CATEGORY_NAMES,
    VDI2770_GERMAN_CATEGORY_NAMES,
)
from ..models.entities import (
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


class DocumentBuilder:
    """
    Fluent builder for a single-version ``Document``.

    The builder does not validate; ``build()`` returns whatever was
    configured, so it can produce invalid documents for tests as well.
    """

    def __init__(self, organization: str) -> None:
        self._organization = Organization(name=organization, official_name=organization)
        self._ids: list[DocumentId] = []
        self._domains: list[DocumentIdDomain] = []
        self._classifications: list[DocumentClassification] = []
        self._object_ids: list[ObjectId] = []
        self._object_roles: list[Role] = [Role.MANUFACTURER]
        self._version_id: str | None = None
        self._languages: list[str] = []
        self._version_roles: list[Role] = [Role.AUTHOR]
        self._descriptions: list[DocumentDescription] = []
        self._status: LifeCycleStatus | None = None
        self._relationships: list[DocumentRelationship] = []
        self._files: list[DigitalFile] = []
        self._pages: int | None = None

    @classmethod
    def document(cls, document_id: str, domain: str, organization: str | None = None) -> "DocumentBuilder":
        """Start a document with a primary id in *domain* and a matching id domain."""
        builder = cls(organization or domain)
        builder._ids.append(DocumentId(id=document_id, domain_id=domain, is_primary=True))
        builder._domains.append(DocumentIdDomain(
            document_domain_id=domain,
            party=builder._party(Role.RESPONSIBLE),
        ))
        return builder

    def _party(self, role: Role) -> Party:
        return Party(role=role, organization=self._organization)

    # --- Identification ---

    def with_id(self, document_id: str, domain: str, primary: bool = False) -> "DocumentBuilder":
        """Add a further document id."""
        self._ids.append(DocumentId(id=document_id, domain_id=domain, is_primary=primary))
        return self

    # --- Classification ---

    def with_classification(self, class_id: str) -> "DocumentBuilder":
        """VDI 2770 classification with the German and English category names."""
        names: list[TranslatableString | None] = []
        if class_id in VDI2770_GERMAN_CATEGORY_NAMES:
            names.append(TranslatableString(text=VDI2770_GERMAN_CATEGORY_NAMES[class_id], language="de"))
            names.append(TranslatableString(text=VDI2770_ENGLISH_CATEGORY_NAMES[class_id], language="en"))
        self._classifications.append(DocumentClassification(
            class_id=class_id,
            class_names=names,
            classification_system=VDI2770_CLASSIFICATION_SYSTEM_NAME,
        ))
        return self

    def with_iec_classification(self, class_id: str, name: str, language: str = "de") -> "DocumentBuilder":
        self._classifications.append(DocumentClassification(
            class_id=class_id,
            class_names=[TranslatableString(text=name, language=language)],
            classification_system=IEC61355_CLASSIFICATION_NAME,
        ))
        return self

    # --- Referenced object ---

    def with_object(
        self,
        object_id: str,
        object_type: ObjectType = ObjectType.INDIVIDUAL,
        ref_type: str | None = None,
        globally_biunique: bool | None = None,
    ) -> "DocumentBuilder":
        self._object_ids.append(ObjectId(
            id=object_id,
            object_type=object_type,
            ref_type=ref_type,
            is_globally_biunique=globally_biunique,
        ))
        return self

    # --- Version ---

    def with_version(self, version_id: str, *languages: str) -> "DocumentBuilder":
        self._version_id = version_id
        self._languages = list(languages)
        return self

    def with_description(
        self,
        language: str,
        title: str,
        summary: str | None = None,
        *keywords: str,
    ) -> "DocumentBuilder":
        """Summary and keywords default to the title."""
        self._descriptions.append(DocumentDescription(
            language=language,
            title=title,
            summary=summary if summary is not None else title,
            keywords=list(keywords) or [title],
        ))
        return self

    def with_file(self, file_name: str, file_format: str = PDF_MEDIA_TYPE) -> "DocumentBuilder":
        self._files.append(DigitalFile(file_name=file_name, file_format=file_format))
        return self

    def with_pages(self, pages: int) -> "DocumentBuilder":
        self._pages = pages
        return self

    def with_relationship(
        self,
        document_id: str,
        domain: str,
        type: DocumentRelationshipType = DocumentRelationshipType.REFERS_TO,
        *version_ids: str,
    ) -> "DocumentBuilder":
        """Reference another document by its id."""
        self._relationships.append(DocumentRelationship(
            document_id=DocumentId(id=document_id, domain_id=domain, is_primary=True),
            document_version_ids=list(version_ids),
            type=type,
        ))
        return self

    def refers_to(self, document: Document) -> "DocumentBuilder":
        """RefersTo relationship to the primary id of *document*."""
        target = next((i for i in document.ids() if i.is_primary), None)
        if target is None or target.id is None or target.domain_id is None:
            raise ValueError("document has no primary id")
        return self.with_relationship(target.id, target.domain_id)

    # --- Status ---

    def released(self, set_date: date | None = None) -> "DocumentBuilder":
        return self._with_status(LifeCycleStatusValue.RELEASED, set_date)

    def in_review(self, set_date: date | None = None) -> "DocumentBuilder":
        return self._with_status(LifeCycleStatusValue.IN_REVIEW, set_date)

    def _with_status(self, value: LifeCycleStatusValue, set_date: date | None) -> "DocumentBuilder":
        self._status = LifeCycleStatus(
            status_value=value,
            set_date=set_date or date.today(),
            parties=[self._party(Role.RESPONSIBLE)],
        )
        return self

    # --- Build ---

    def _version(self) -> DocumentVersion:
        return DocumentVersion(
            document_version_id=self._version_id,
            languages=list(self._languages),
            parties=[self._party(r) for r in self._version_roles],
            descriptions=list(self._descriptions),
            life_cycle_status=self._status,
            relationships=list(self._relationships),
            digital_files=list(self._files),
            number_of_pages=self._pages,
        )

    def build(self) -> Document:
        """Construct and return the Document."""
        referenced = []
        if self._object_ids:
            referenced.append(ReferencedObject(
                object_ids=list(self._object_ids),
                parties=[self._party(r) for r in self._object_roles],
            ))
        return Document(
            document_ids=list(self._ids),
            document_id_domains=list(self._domains),
            classifications=list(self._classifications),
            referenced_objects=referenced,
            versions=[self._version()] if self._version_id is not None else [],
        )

    def build_main(self) -> MainDocument:
        """
        Build a main document: adds ``VDI2770_Main.pdf`` unless present
        and marks the version as released unless a status was set.
        """
        if not any(f.file_name == MAIN_DOCUMENT_PDF_FILE_NAME for f in self._files):
            self._files.insert(0, DigitalFile(file_name=MAIN_DOCUMENT_PDF_FILE_NAME, file_format=PDF_MEDIA_TYPE))
        if self._status is None:
            self.released()
        return MainDocument.of(self.build())
