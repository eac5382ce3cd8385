"""
Entity Rules
============
Per-entity invariant checks over the VDI 2770 metadata tree.

Every rule function has the signature ``(entity, parent, strict) ->
list[Fault]`` and is registered in ``RULES`` keyed by the entity's model
type. ``validate_entity`` dispatches through that table, so nested
entities are validated by the same entry point as top-level ones.

Rule functions check fields in a fixed order and append faults in that
order; nested list faults follow in list-index order. ``strict`` only
switches vocabulary and URI host comparisons between case-sensitive and
case-insensitive matching.

Faults are produced with language-independent ``code`` values; message
text is attached later by :mod:`vdi2770.validator.messages`.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, Callable, Sequence

from ..models.constants import (
    IEC61355_CLASSIFICATION_NAME,
    MAIN_DOCUMENT_PDF_FILE_NAME,
    PDF_MEDIA_TYPE,
    REF_TYPE_DIN_SPEC_91406_ID,
    VDI2770_CATEGORIES,
    VDI2770_CLASSIFICATION_SYSTEM_NAME,
    VDI2770_ENGLISH_CATEGORY_NAMES,
    VDI2770_GERMAN_CATEGORY_NAMES,
    ZIP_MEDIA_TYPES,
    is_iso_language,
    matches_vocabulary,
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
from ..models.fault import Entity, Fault, FaultLevel, FaultType, Prop
from .uri import validate_object_uri

ERROR = FaultLevel.ERROR
WARNING = FaultLevel.WARNING
INFORMATION = FaultLevel.INFORMATION

Rule = Callable[[Any, "Entity | None", bool], list[Fault]]

# type/subtype with optional parameters, RFC 6838 restricted-name characters
_MEDIA_TYPE = re.compile(
    r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*"
    r"(\s*;\s*[A-Za-z0-9!#$&^_.+-]+=(\"[^\"]*\"|[^;\s]+))*\s*$"
)


class _Collector:
    """Accumulates faults for one entity; mirrors the ``add`` closure pattern."""

    def __init__(self, entity: Entity, parent: Entity | None) -> None:
        self.entity = entity
        self.parent = parent
        self.faults: list[Fault] = []

    def add(
        self,
        level: FaultLevel,
        ftype: FaultType,
        *props: Prop,
        code: str | None = None,
        value: Any = None,
        index: int | None = None,
        **args: Any,
    ) -> None:
        self.faults.append(Fault(
            level=level,
            type=ftype,
            entity=self.entity,
            properties=props,
            code=code or ftype.value,
            args=args,
            original_value=None if value is None else str(value),
            index=index,
            parent=self.parent,
        ))

    def extend(self, faults: list[Fault]) -> None:
        self.faults.extend(faults)


def _blank(value: str | None) -> bool:
    return value is None or value == ""


def _roles(parties: Sequence[Party | None]) -> list[Role]:
    return [p.role for p in parties if p is not None and p.role is not None]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def validate_entity(entity: Any, parent: Entity | None = None, strict: bool = True) -> list[Fault]:
    """Validate any model entity through the rule table."""
    rule = RULES.get(type(entity))
    if rule is None:
        raise TypeError(f"No validation rules for {type(entity).__name__}")
    return rule(entity, parent, strict)


# ---------------------------------------------------------------------------
# List helpers
# ---------------------------------------------------------------------------


def validate_entity_list(
    items: Sequence[Any],
    owner: Entity,
    prop: Prop,
    strict: bool,
) -> list[Fault]:
    """
    Validate every member of an entity list.

    ``None`` members yield an IS_NULL fault on ``owner.prop``. Every fault
    coming from member *i* is tagged with index *i*.
    """
    faults: list[Fault] = []
    for i, item in enumerate(items):
        if item is None:
            faults.append(Fault(
                level=ERROR,
                type=FaultType.IS_NULL,
                entity=owner,
                properties=(prop,),
                code="LIST_NULL_MEMBER",
                index=i,
            ))
            continue
        faults.extend(f.with_index(i) for f in validate_entity(item, owner, strict))
    return faults


def validate_strings(items: Sequence[str | None], owner: Entity, prop: Prop) -> list[Fault]:
    """Flag empty members (IS_EMPTY) and exact duplicates (HAS_DUPLICATE_VALUE)."""
    faults: list[Fault] = []
    seen: set[str | None] = set()
    for i, value in enumerate(items):
        if _blank(value):
            faults.append(Fault(
                level=ERROR,
                type=FaultType.IS_EMPTY,
                entity=owner,
                properties=(prop,),
                code="STRING_EMPTY",
                parent_index=i,
            ))
        if value in seen:
            faults.append(Fault(
                level=ERROR,
                type=FaultType.HAS_DUPLICATE_VALUE,
                entity=owner,
                properties=(prop,),
                code="STRING_DUPLICATE",
                original_value=value,
                parent_index=i,
            ))
        seen.add(value)
    return faults


# ---------------------------------------------------------------------------
# Leaf entities
# ---------------------------------------------------------------------------


def validate_organization(org: Organization, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.ORGANIZATION, parent)
    if _blank(org.name):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.NAME)
    if _blank(org.official_name):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.OFFICIAL_NAME)
    return c.faults


def validate_party(party: Party, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.PARTY, parent)
    if party.role is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.ROLE)
    if party.organization is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.ORGANIZATION)
    else:
        c.extend(validate_entity(party.organization, Entity.PARTY, strict))
    return c.faults


def validate_translatable_string(
    value: TranslatableString, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.TRANSLATABLE_STRING, parent)
    if _blank(value.text):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.TEXT)
    if _blank(value.language):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.LANGUAGE)
    elif not is_iso_language(value.language):
        c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.LANGUAGE,
              code="LANGUAGE_INVALID", value=value.language)
    return c.faults


def validate_document_id(doc_id: DocumentId, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_ID, parent)
    if _blank(doc_id.domain_id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOMAIN_ID)
    if _blank(doc_id.id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.ID)
    return c.faults


def validate_document_id_domain(
    domain: DocumentIdDomain, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_ID_DOMAIN, parent)
    if _blank(domain.document_domain_id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_DOMAIN_ID)
    if domain.party is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.PARTY)
    else:
        party_faults = validate_entity(domain.party, Entity.DOCUMENT_ID_DOMAIN, strict)
        c.extend(party_faults)
        # role only matters for an otherwise valid party
        if not party_faults and domain.party.role != Role.RESPONSIBLE:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.PARTY,
                  code="DOMAIN_NOT_RESPONSIBLE", value=domain.party.role.value)
    return c.faults


def validate_digital_file(file: DigitalFile, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.DIGITAL_FILE, parent)
    if _blank(file.file_name):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.FILE_NAME)
    if _blank(file.file_format):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.FILE_FORMAT)
    elif not _MEDIA_TYPE.match(file.file_format):
        c.add(WARNING, FaultType.HAS_INVALID_VALUE, Prop.FILE_FORMAT,
              code="FILE_MEDIA_TYPE_INVALID", value=file.file_format)
    if _blank(file.file_name) or _blank(file.file_format):
        return c.faults

    name = file.file_name.lower()
    media_type = file.file_format.split(";")[0].strip().lower()
    if media_type == PDF_MEDIA_TYPE and not name.endswith(".pdf"):
        c.add(ERROR, FaultType.IS_INCONSISTENT, Prop.FILE_NAME, Prop.FILE_FORMAT,
              code="FILE_PDF_EXTENSION", value=file.file_name)
    elif media_type in ZIP_MEDIA_TYPES and not name.endswith(".zip"):
        c.add(WARNING, FaultType.IS_INCONSISTENT, Prop.FILE_NAME, Prop.FILE_FORMAT,
              code="FILE_ZIP_EXTENSION", value=file.file_name)
    return c.faults


def validate_object_id(object_id: ObjectId, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.OBJECT_ID, parent)
    if object_id.object_type is None:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.OBJECT_TYPE)
    if _blank(object_id.id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.ID)
    elif object_id.ref_type == REF_TYPE_DIN_SPEC_91406_ID:
        for level, ftype, code, args in validate_object_uri(object_id.id, strict):
            c.add(level, ftype, Prop.ID, code=code, value=object_id.id, **args)
    return c.faults


# ---------------------------------------------------------------------------
# Nested entities
# ---------------------------------------------------------------------------


def validate_document_classification(
    classification: DocumentClassification, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_CLASSIFICATION, parent)
    if _blank(classification.class_id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.CLASS_ID)

    names = classification.class_names
    if names:
        c.extend(validate_entity_list(names, Entity.DOCUMENT_CLASSIFICATION, Prop.CLASS_NAME, strict))
        languages = [n.language if n else None for n in names]
        if len(set(languages)) != len(languages):
            c.add(ERROR, FaultType.HAS_DUPLICATE_VALUE, Prop.CLASS_NAME,
                  code="CLASS_NAME_DUPLICATE_LANGUAGE")

    if _blank(classification.classification_system):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.CLASSIFICATION_SYSTEM)

    if (
        _blank(classification.class_id)
        or classification.classification_system != VDI2770_CLASSIFICATION_SYSTEM_NAME
    ):
        return c.faults

    if classification.class_id not in VDI2770_CATEGORIES:
        c.add(ERROR, FaultType.IS_INCONSISTENT, Prop.CLASS_ID,
              code="CLASS_ID_UNKNOWN", value=classification.class_id)

    german = tuple(VDI2770_GERMAN_CATEGORY_NAMES.values())
    english = tuple(VDI2770_ENGLISH_CATEGORY_NAMES.values())
    for i, name in enumerate(names):
        if name is None or _blank(name.language):
            continue
        language = name.language.lower()
        if language in ("de", "de-de") and not matches_vocabulary(name.text or "", german, strict):
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.CLASS_NAME,
                  code="CLASS_NAME_UNKNOWN_DE", value=name.text, index=i)
        if language in ("en", "en-us") and not matches_vocabulary(name.text or "", english, strict):
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.CLASS_NAME,
                  code="CLASS_NAME_UNKNOWN_EN", value=name.text, index=i)
    return c.faults


def validate_document_description(
    description: DocumentDescription, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_DESCRIPTION, parent)
    if _blank(description.language):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.LANGUAGE)
    elif not is_iso_language(description.language):
        c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.LANGUAGE,
              code="LANGUAGE_INVALID", value=description.language)
    if _blank(description.title):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.TITLE)
    if _blank(description.summary):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.SUMMARY)
    if not description.keywords:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.KEY_WORDS)
    else:
        c.extend(validate_strings(description.keywords, Entity.DOCUMENT_DESCRIPTION, Prop.KEY_WORDS))
    return c.faults


def validate_life_cycle_status(
    status: LifeCycleStatus, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.LIFE_CYCLE_STATUS, parent)
    if status.status_value is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.STATUS_VALUE)
    if not status.parties:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.PARTY)
    else:
        c.extend(validate_entity_list(status.parties, Entity.LIFE_CYCLE_STATUS, Prop.PARTY, strict))
        roles = _roles(status.parties)
        if Role.RESPONSIBLE not in roles:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.PARTY,
                  code="STATUS_NO_RESPONSIBLE", value=",".join(r.value for r in roles))
    c.extend(validate_entity_list(status.comments, Entity.LIFE_CYCLE_STATUS, Prop.COMMENTS, strict))
    return c.faults


def validate_document_relationship(
    relationship: DocumentRelationship, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_RELATIONSHIP, parent)
    if relationship.document_id is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.DOCUMENT_ID)
    else:
        c.extend(validate_entity(relationship.document_id, Entity.DOCUMENT_RELATIONSHIP, strict))
    if relationship.type is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.TYPE)
    c.extend(validate_entity_list(
        relationship.descriptions, Entity.DOCUMENT_RELATIONSHIP, Prop.DESCRIPTION, strict))
    c.extend(validate_strings(
        relationship.document_version_ids, Entity.DOCUMENT_RELATIONSHIP, Prop.DOCUMENT_VERSION_ID))
    return c.faults


def validate_referenced_object(
    referenced: ReferencedObject, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.REFERENCED_OBJECT, parent)
    owner = Entity.REFERENCED_OBJECT

    if not referenced.object_ids:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.OBJECT_ID)
    else:
        c.extend(validate_entity_list(referenced.object_ids, owner, Prop.OBJECT_ID, strict))
        individuals = [
            o for o in referenced.object_ids
            if o is not None and o.object_type == ObjectType.INDIVIDUAL
        ]
        if len(individuals) > 1:
            c.add(INFORMATION, FaultType.HAS_INVALID_VALUE, Prop.OBJECT_ID,
                  code="OBJECT_MULTIPLE_INDIVIDUAL", count=len(individuals))

    if not referenced.parties:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.PARTY)
    else:
        c.extend(validate_entity_list(referenced.parties, owner, Prop.PARTY, strict))
        roles = _roles(referenced.parties)
        if Role.MANUFACTURER not in roles:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.PARTY,
                  code="OBJECT_NO_MANUFACTURER", value=",".join(r.value for r in roles))

    c.extend(validate_entity_list(referenced.descriptions, owner, Prop.DESCRIPTION, strict))
    c.extend(validate_strings(referenced.project_ids, owner, Prop.PROJECT_ID))
    c.extend(validate_strings(referenced.reference_designations, owner, Prop.REFERENCE_DESIGNATION))
    c.extend(validate_strings(referenced.equipment_ids, owner, Prop.EQUIPMENT_ID))
    return c.faults


def validate_document_version(
    version: DocumentVersion, parent: Entity | None, strict: bool
) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT_VERSION, parent)
    owner = Entity.DOCUMENT_VERSION

    # version id
    if _blank(version.document_version_id):
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_VERSION_ID)

    # languages
    if not version.languages:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.LANGUAGE)
    else:
        c.extend(validate_strings(version.languages, owner, Prop.LANGUAGE))
        for i, language in enumerate(version.languages):
            if not _blank(language) and not is_iso_language(language):
                c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.LANGUAGE,
                      code="LANGUAGE_INVALID", value=language, index=i)

    # parties
    if not version.parties:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.PARTY)
    else:
        c.extend(validate_entity_list(version.parties, owner, Prop.PARTY, strict))
        roles = _roles(version.parties)
        if Role.AUTHOR not in roles:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.PARTY,
                  code="VERSION_NO_AUTHOR", value=",".join(r.value for r in roles))

    # descriptions
    if not version.descriptions:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_DESCRIPTION)
    else:
        c.extend(validate_entity_list(version.descriptions, owner, Prop.DOCUMENT_DESCRIPTION, strict))
        languages = [d.language for d in version.descriptions if d is not None]
        if len(set(languages)) != len(languages):
            c.add(ERROR, FaultType.HAS_DUPLICATE_VALUE, Prop.DOCUMENT_DESCRIPTION,
                  code="VERSION_DESCRIPTION_DUPLICATE_LANGUAGE")

    # life cycle status
    if version.life_cycle_status is None:
        c.add(ERROR, FaultType.IS_NULL, Prop.LIFE_CYCLE_STATUS)
    else:
        c.extend(validate_entity(version.life_cycle_status, owner, strict))

    # relationships are optional
    c.extend(validate_entity_list(version.relationships, owner, Prop.DOCUMENT_RELATIONSHIP, strict))

    # digital files
    if not version.digital_files:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DIGITAL_FILE)
    else:
        files = version.digital_files
        c.extend(validate_entity_list(files, owner, Prop.DIGITAL_FILE, strict))
        names = [f.file_name for f in files if f is not None]
        duplicates = [n for n, count in Counter(names).items() if count > 1]
        if duplicates:
            c.add(ERROR, FaultType.HAS_DUPLICATE_VALUE, Prop.DIGITAL_FILE,
                  code="VERSION_FILE_DUPLICATE", value=",".join(str(d) for d in duplicates))
        formats = [f.file_format for f in files if f is not None and f.file_format]
        if not any(_base_media_type(fmt) == PDF_MEDIA_TYPE for fmt in formats):
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DIGITAL_FILE,
                  code="VERSION_NO_PDF", value=",".join(formats))

    # page count
    if version.number_of_pages is not None and version.number_of_pages < 0:
        c.add(ERROR, FaultType.EXCEEDS_LOWER_BOUND, Prop.NUMBER_OF_PAGES,
              code="VERSION_PAGES_NEGATIVE", value=version.number_of_pages)

    # exactly one description per declared language
    described = [d.language.lower() for d in version.descriptions if d is not None and d.language]
    for i, language in enumerate(version.languages):
        if _blank(language):
            continue
        if described.count(language.lower()) != 1:
            c.add(ERROR, FaultType.IS_INCONSISTENT, Prop.LANGUAGE, Prop.DOCUMENT_DESCRIPTION,
                  code="VERSION_DESCRIPTION_PER_LANGUAGE", value=language, index=i)
    return c.faults


def _base_media_type(media_type: str) -> str:
    return media_type.split(";")[0].strip().lower()


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


def validate_document(document: Document, parent: Entity | None, strict: bool) -> list[Fault]:
    c = _Collector(Entity.DOCUMENT, parent)
    owner = Entity.DOCUMENT

    # 1. document ids, exactly one primary when several
    ids = document.document_ids
    if not ids:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_ID)
    else:
        c.extend(validate_entity_list(ids, owner, Prop.DOCUMENT_ID, strict))
        primaries = sum(1 for i in ids if i is not None and i.is_primary)
        if len(ids) >= 2 and primaries != 1:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_ID,
                  code="DOC_PRIMARY_ID", count=primaries)

    # 2. versions
    if not document.versions:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_VERSION)
    else:
        c.extend(validate_entity_list(document.versions, owner, Prop.DOCUMENT_VERSION, strict))

    # 3. classifications, VDI 2770 required, IEC 61355 recommended
    classifications = document.classifications
    if not classifications:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_CLASSIFICATION)
    else:
        c.extend(validate_entity_list(
            classifications, owner, Prop.DOCUMENT_CLASSIFICATION, strict))
        systems = {x.classification_system for x in classifications if x is not None}
        if VDI2770_CLASSIFICATION_SYSTEM_NAME not in systems:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_CLASSIFICATION,
                  code="DOC_NO_VDI_CLASSIFICATION")
        if IEC61355_CLASSIFICATION_NAME not in systems:
            c.add(INFORMATION, FaultType.IS_INCONSISTENT, Prop.DOCUMENT_CLASSIFICATION,
                  code="DOC_NO_IEC_CLASSIFICATION")

    # 4. id domains
    if not document.document_id_domains:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.DOCUMENT_ID_DOMAIN)
    else:
        c.extend(validate_entity_list(
            document.document_id_domains, owner, Prop.DOCUMENT_ID_DOMAIN, strict))

    # 5. referenced objects
    if not document.referenced_objects:
        c.add(ERROR, FaultType.IS_EMPTY, Prop.REFERENCED_OBJECT)
    else:
        c.extend(validate_entity_list(
            document.referenced_objects, owner, Prop.REFERENCED_OBJECT, strict))
    return c.faults


def validate_main_document(main: MainDocument, parent: Entity | None, strict: bool) -> list[Fault]:
    """Document rules plus the main-document rules."""
    document = main.document
    faults = validate_document(document, parent, strict)
    c = _Collector(Entity.MAIN_DOCUMENT, parent)

    versions = [v for v in document.versions if v is not None]
    if len(document.versions) != 1:
        c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_VERSION,
              code="MAIN_VERSION_COUNT", count=len(document.versions))

    if versions:
        version = versions[0]
        status = version.life_cycle_status
        if status is not None and status.status_value != LifeCycleStatusValue.RELEASED:
            c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_VERSION,
                  code="MAIN_NOT_RELEASED",
                  value=status.status_value.value if status.status_value else None)

        main_pdfs = [
            f for f in version.digital_files
            if f is not None and f.file_name
            and f.file_name.lower() == MAIN_DOCUMENT_PDF_FILE_NAME.lower()
        ]
        if len(main_pdfs) != 1:
            faults_for_files = _Collector(Entity.DIGITAL_FILE, Entity.MAIN_DOCUMENT)
            faults_for_files.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.FILE_NAME,
                                 code="MAIN_PDF_COUNT", count=len(main_pdfs))
            c.extend(faults_for_files.faults)

        relationships = [r for r in version.relationships if r is not None]
        if not relationships:
            rel = _Collector(Entity.DOCUMENT_VERSION, Entity.MAIN_DOCUMENT)
            rel.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_RELATIONSHIP,
                    code="MAIN_NO_RELATIONSHIP")
            c.extend(rel.faults)
        else:
            types = {r.type for r in relationships}
            if types != {DocumentRelationshipType.REFERS_TO}:
                rel = _Collector(Entity.DOCUMENT_VERSION, Entity.MAIN_DOCUMENT)
                rel.add(WARNING, FaultType.HAS_INVALID_VALUE, Prop.DOCUMENT_RELATIONSHIP,
                        code="MAIN_RELATIONSHIP_TYPE",
                        value=",".join(sorted(t.value if t else "None" for t in types)))
                c.extend(rel.faults)

    referenced = document.referenced_objects
    if len(referenced) != 1:
        c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.REFERENCED_OBJECT,
              code="MAIN_OBJECT_COUNT", count=len(referenced))
    elif referenced[0] is not None and not any(
        o is not None and o.object_type == ObjectType.INDIVIDUAL for o in referenced[0].object_ids
    ):
        c.add(ERROR, FaultType.HAS_INVALID_VALUE, Prop.REFERENCED_OBJECT,
              code="MAIN_NO_INDIVIDUAL")
    return faults + c.faults


RULES: dict[type, Rule] = {
    Document: validate_document,
    MainDocument: validate_main_document,
    DocumentId: validate_document_id,
    DocumentIdDomain: validate_document_id_domain,
    DocumentClassification: validate_document_classification,
    DocumentVersion: validate_document_version,
    DocumentDescription: validate_document_description,
    DocumentRelationship: validate_document_relationship,
    DigitalFile: validate_digital_file,
    LifeCycleStatus: validate_life_cycle_status,
    ReferencedObject: validate_referenced_object,
    ObjectId: validate_object_id,
    Party: validate_party,
    Organization: validate_organization,
    TranslatableString: validate_translatable_string,
}
