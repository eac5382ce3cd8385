"""Serialise a ``Document`` in the VDI 2770 element vocabulary read by :class:`XmlReader`."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from ..errors import XmlProcessingError
from ..models.constants import VDI2770_XML_NAMESPACE
from ..models.entities import (
    DigitalFile,
    Document,
    DocumentClassification,
    DocumentDescription,
    DocumentId,
    DocumentIdDomain,
    DocumentRelationship,
    DocumentVersion,
    LifeCycleStatus,
    ObjectId,
    Party,
    ReferencedObject,
    TranslatableString,
)

log = logging.getLogger(__name__)


def _tag(name: str) -> str:
    return f"{{{VDI2770_XML_NAMESPACE}}}{name}"


def _sub(parent: etree._Element, name: str, text: str | None = None, **attrs: str | None) -> etree._Element:
    element = etree.SubElement(parent, _tag(name))
    for key, value in attrs.items():
        if value is not None:
            element.set(key, value)
    if text is not None:
        element.text = text
    return element


def _bool(value: bool | None) -> str | None:
    return None if value is None else str(value).lower()


def _translatable(parent: etree._Element, name: str, value: TranslatableString) -> None:
    element = _sub(parent, name)
    _sub(element, "Language", value.language)
    _sub(element, "Text", value.text)


def _party(parent: etree._Element, party: Party) -> None:
    element = _sub(parent, "Party", Role=party.role.value if party.role else None)
    org = party.organization
    if org is not None:
        org_element = _sub(element, "Organization")
        if org.organization_id is not None:
            _sub(org_element, "OrganizationId", org.organization_id)
        _sub(org_element, "OrganizationName", org.name)
        _sub(org_element, "OrganizationOfficialName", org.official_name)


def _document_id(parent: etree._Element, value: DocumentId) -> None:
    _sub(parent, "DocumentId", value.id, DomainId=value.domain_id, IsPrimary=_bool(value.is_primary))


def _document_id_domain(parent: etree._Element, value: DocumentIdDomain) -> None:
    element = _sub(parent, "DocumentIdDomain")
    _sub(element, "DocumentDomainId", value.document_domain_id)
    if value.party is not None:
        _party(element, value.party)


def _classification(parent: etree._Element, value: DocumentClassification) -> None:
    element = _sub(parent, "DocumentClassification")
    _sub(element, "ClassId", value.class_id)
    for name in value.class_names:
        if name is not None:
            _translatable(element, "ClassName", name)
    _sub(element, "ClassificationSystem", value.classification_system)


def _object_id(parent: etree._Element, value: ObjectId) -> None:
    _sub(
        parent, "ObjectId", value.id,
        ObjectType=value.object_type.value if value.object_type else None,
        RefType=value.ref_type,
        IsGloballyBiunique=_bool(value.is_globally_biunique),
    )


def _referenced_object(parent: etree._Element, value: ReferencedObject) -> None:
    element = _sub(parent, "ReferencedObject")
    for object_id in value.object_ids:
        if object_id is not None:
            _object_id(element, object_id)
    for name, items in (
        ("ReferenceDesignation", value.reference_designations),
        ("EquipmentId", value.equipment_ids),
        ("ProjectId", value.project_ids),
    ):
        for item in items:
            if item is not None:
                _sub(element, name, item)
    for description in value.descriptions:
        if description is not None:
            _translatable(element, "Description", description)
    for party in value.parties:
        if party is not None:
            _party(element, party)


def _description(parent: etree._Element, value: DocumentDescription) -> None:
    element = _sub(parent, "DocumentDescription")
    _sub(element, "Language", value.language)
    _sub(element, "Title", value.title)
    if value.summary is not None:
        _sub(element, "Summary", value.summary)
    keywords = [k for k in value.keywords if k is not None]
    if keywords:
        container = _sub(element, "KeyWords")
        for keyword in keywords:
            _sub(container, "KeyWord", keyword)


def _life_cycle_status(parent: etree._Element, value: LifeCycleStatus) -> None:
    element = _sub(
        parent, "LifeCycleStatus",
        SetDate=value.set_date.isoformat() if value.set_date else None,
        StatusValue=value.status_value.value if value.status_value else None,
    )
    for party in value.parties:
        if party is not None:
            _party(element, party)
    for comment in value.comments:
        if comment is not None:
            _translatable(element, "Comments", comment)


def _relationship(parent: etree._Element, value: DocumentRelationship) -> None:
    element = _sub(parent, "DocumentRelationship", Type=value.type.value if value.type else None)
    if value.document_id is not None:
        _document_id(element, value.document_id)
    for version_id in value.document_version_ids:
        if version_id is not None:
            _sub(element, "DocumentVersionId", version_id)
    for description in value.descriptions:
        if description is not None:
            _translatable(element, "Description", description)


def _digital_file(parent: etree._Element, value: DigitalFile) -> None:
    _sub(parent, "DigitalFile", value.file_name, FileFormat=value.file_format)


def _version(parent: etree._Element, value: DocumentVersion) -> None:
    element = _sub(parent, "DocumentVersion")
    _sub(element, "DocumentVersionId", value.document_version_id)
    for language in value.languages:
        if language is not None:
            _sub(element, "Language", language)
    for party in value.parties:
        if party is not None:
            _party(element, party)
    for description in value.descriptions:
        if description is not None:
            _description(element, description)
    if value.life_cycle_status is not None:
        _life_cycle_status(element, value.life_cycle_status)
    for relationship in value.relationships:
        if relationship is not None:
            _relationship(element, relationship)
    for digital_file in value.digital_files:
        if digital_file is not None:
            _digital_file(element, digital_file)
    if value.number_of_pages is not None:
        _sub(element, "NumberOfPages", str(value.number_of_pages))


def document_to_element(document: Document) -> etree._Element:
    root = etree.Element(_tag("Document"), nsmap={None: VDI2770_XML_NAMESPACE})
    for document_id in document.ids():
        _document_id(root, document_id)
    for domain in document.document_id_domains:
        if domain is not None:
            _document_id_domain(root, domain)
    for classification in document.classifications:
        if classification is not None:
            _classification(root, classification)
    for referenced_object in document.referenced_objects:
        if referenced_object is not None:
            _referenced_object(root, referenced_object)
    for version in document.versions:
        if version is not None:
            _version(root, version)
    return root


class XmlWriter:
    """Writes ``Document`` trees as UTF-8 XML. ``None`` members are skipped."""

    def __init__(self, pretty_print: bool = True) -> None:
        self._pretty_print = pretty_print

    def to_bytes(self, document: Document) -> bytes:
        return etree.tostring(
            document_to_element(document),
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=self._pretty_print,
        )

    def write(self, document: Document, path: str | Path) -> Path:
        p = Path(path)
        try:
            p.write_bytes(self.to_bytes(document))
        except OSError as e:
            raise XmlProcessingError(f"Cannot write {p}: {e}") from e
        log.debug("Wrote metadata file %s", p)
        return p
