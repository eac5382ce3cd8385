"""
XML Reader
==========
Maps a VDI 2770 metadata file (``VDI2770_Main.xml`` /
``VDI2770_Metadata.xml``) onto the :mod:`vdi2770.models.entities` tree.

Elements are matched by local name, so files with or without the
``http://www.vdi.de/schemas/vdi2770`` namespace are read alike. The reader
does not validate: missing elements become ``None`` or empty lists and
unknown enumeration values are logged and dropped, leaving the verdict to
the validation engine.

Example::

    from vdi2770.metadata import XmlReader

    document = XmlReader().read("VDI2770_Main.xml")
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import TypeVar

from lxml import etree

from ..errors import XmlProcessingError
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
    ObjectId,
    ObjectType,
    Organization,
    Party,
    ReferencedObject,
    Role,
    TranslatableString,
)

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _local(element: etree._Element) -> str:
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [c for c in element if isinstance(c.tag, str) and _local(c) == name]


def _child(element: etree._Element, name: str) -> etree._Element | None:
    found = _children(element, name)
    return found[0] if found else None


def _text(element: etree._Element | None) -> str | None:
    if element is None:
        return None
    return (element.text or "").strip()


def _child_text(element: etree._Element, name: str) -> str | None:
    return _text(_child(element, name))


def _texts(element: etree._Element, name: str) -> list[str | None]:
    return [_text(c) for c in _children(element, name)]


def _bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    log.warning("Invalid boolean value %r", value)
    return None


def _enum(enum_cls: type[E], value: str | None) -> E | None:
    if value is None:
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        log.warning("Unknown %s value %r", enum_cls.__name__, value)
        return None


def _date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        # xs:date may carry a time zone suffix
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        log.warning("Invalid date %r", value)
        return None


def _int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        log.warning("Invalid integer %r", value)
        return None


# ---------------------------------------------------------------------------
# Entity mapping
# ---------------------------------------------------------------------------


def _translatable(element: etree._Element) -> TranslatableString:
    # <X><Language/><Text/></X> or <X Language="..">text</X>
    if _child(element, "Text") is not None or _child(element, "Language") is not None:
        return TranslatableString(text=_child_text(element, "Text"), language=_child_text(element, "Language"))
    return TranslatableString(text=_text(element), language=element.get("Language"))


def _organization(element: etree._Element) -> Organization:
    return Organization(
        organization_id=_child_text(element, "OrganizationId"),
        name=_child_text(element, "OrganizationName"),
        official_name=_child_text(element, "OrganizationOfficialName"),
    )


def _party(element: etree._Element) -> Party:
    organization = _child(element, "Organization")
    return Party(
        role=_enum(Role, element.get("Role")),
        organization=_organization(organization) if organization is not None else None,
    )


def _document_id(element: etree._Element) -> DocumentId:
    return DocumentId(
        id=_text(element),
        domain_id=element.get("DomainId"),
        is_primary=_bool(element.get("IsPrimary")),
    )


def _document_id_domain(element: etree._Element) -> DocumentIdDomain:
    party = _child(element, "Party")
    return DocumentIdDomain(
        document_domain_id=_child_text(element, "DocumentDomainId"),
        party=_party(party) if party is not None else None,
    )


def _classification(element: etree._Element) -> DocumentClassification:
    return DocumentClassification(
        class_id=_child_text(element, "ClassId"),
        class_names=[_translatable(c) for c in _children(element, "ClassName")],
        classification_system=_child_text(element, "ClassificationSystem"),
    )


def _object_id(element: etree._Element) -> ObjectId:
    return ObjectId(
        id=_text(element),
        object_type=_enum(ObjectType, element.get("ObjectType")),
        ref_type=element.get("RefType"),
        is_globally_biunique=_bool(element.get("IsGloballyBiunique")),
    )


def _referenced_object(element: etree._Element) -> ReferencedObject:
    return ReferencedObject(
        object_ids=[_object_id(c) for c in _children(element, "ObjectId")],
        parties=[_party(c) for c in _children(element, "Party")],
        descriptions=[_translatable(c) for c in _children(element, "Description")],
        project_ids=_texts(element, "ProjectId"),
        reference_designations=_texts(element, "ReferenceDesignation"),
        equipment_ids=_texts(element, "EquipmentId"),
    )


def _description(element: etree._Element) -> DocumentDescription:
    keywords: list[str | None] = []
    for container in _children(element, "KeyWords"):
        keywords.extend(_texts(container, "KeyWord"))
    return DocumentDescription(
        language=_child_text(element, "Language"),
        title=_child_text(element, "Title"),
        summary=_child_text(element, "Summary"),
        keywords=keywords,
    )


def _life_cycle_status(element: etree._Element) -> LifeCycleStatus:
    return LifeCycleStatus(
        status_value=_enum(LifeCycleStatusValue, element.get("StatusValue")),
        set_date=_date(element.get("SetDate")),
        comments=[_translatable(c) for c in _children(element, "Comments")],
        parties=[_party(c) for c in _children(element, "Party")],
    )


def _relationship(element: etree._Element) -> DocumentRelationship:
    target = _child(element, "DocumentId")
    return DocumentRelationship(
        document_id=_document_id(target) if target is not None else None,
        document_version_ids=_texts(element, "DocumentVersionId"),
        descriptions=[_translatable(c) for c in _children(element, "Description")],
        type=_enum(DocumentRelationshipType, element.get("Type")),
    )


def _digital_file(element: etree._Element) -> DigitalFile:
    return DigitalFile(file_name=_text(element), file_format=element.get("FileFormat"))


def _version(element: etree._Element) -> DocumentVersion:
    status = _child(element, "LifeCycleStatus")
    return DocumentVersion(
        document_version_id=_child_text(element, "DocumentVersionId"),
        languages=_texts(element, "Language"),
        parties=[_party(c) for c in _children(element, "Party")],
        descriptions=[_description(c) for c in _children(element, "DocumentDescription")],
        life_cycle_status=_life_cycle_status(status) if status is not None else None,
        relationships=[_relationship(c) for c in _children(element, "DocumentRelationship")],
        digital_files=[_digital_file(c) for c in _children(element, "DigitalFile")],
        number_of_pages=_int(_child_text(element, "NumberOfPages")),
    )


def document_from_element(root: etree._Element) -> Document:
    """Map a parsed ``Document`` element onto the model."""
    if _local(root) != "Document":
        raise XmlProcessingError(f"Root element is {_local(root)}, expected Document")
    return Document(
        document_ids=[_document_id(c) for c in _children(root, "DocumentId")],
        document_id_domains=[_document_id_domain(c) for c in _children(root, "DocumentIdDomain")],
        classifications=[_classification(c) for c in _children(root, "DocumentClassification")],
        referenced_objects=[_referenced_object(c) for c in _children(root, "ReferencedObject")],
        versions=[_version(c) for c in _children(root, "DocumentVersion")],
    )


class XmlReader:
    """Reads VDI 2770 metadata files with lxml."""

    def read(self, path: str | Path) -> Document:
        """Parse *path*. Raises ``XmlProcessingError`` for unreadable or foreign XML."""
        p = Path(path)
        try:
            tree = etree.parse(str(p), _parser())
        except OSError as e:
            raise XmlProcessingError(f"Cannot read {p}: {e}") from e
        except etree.XMLSyntaxError as e:
            raise XmlProcessingError(f"Malformed XML in {p.name}: {e}") from e
        document = document_from_element(tree.getroot())
        log.debug("Read metadata file %s", p)
        return document

    def read_bytes(self, data: bytes) -> Document:
        try:
            root = etree.fromstring(data, _parser())
        except etree.XMLSyntaxError as e:
            raise XmlProcessingError(f"Malformed XML: {e}") from e
        return document_from_element(root)

    def try_read(self, path: str | Path) -> Document | None:
        """Like :meth:`read`, but logs and returns None on failure."""
        try:
            return self.read(path)
        except XmlProcessingError as e:
            log.warning("Skipping metadata file %s: %s", path, e)
            return None

    def is_metadata_file(self, path: str | Path) -> bool:
        """True if *path* parses as a VDI 2770 ``Document``."""
        p = Path(path)
        if not p.is_file():
            return False
        try:
            tree = etree.parse(str(p), _parser())
        except (OSError, etree.XMLSyntaxError):
            return False
        return _local(tree.getroot()) == "Document"
