"""
Fault Model
===========
A ``Fault`` is one structured finding produced by the entity validation
engine: which entity and property it concerns, how severe it is, which
category of violation it is, and where in a list it occurred.

Faults carry a language-independent ``code`` plus ``args``. The
human-readable ``message`` is filled in afterwards by
:func:`vdi2770.validator.messages.localize`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field


class FaultLevel(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFORMATION = "INFORMATION"

    @property
    def rank(self) -> int:
        return {"ERROR": 2, "WARNING": 1, "INFORMATION": 0}[self.value]


class FaultType(str, Enum):
    IS_EMPTY = "IS_EMPTY"
    IS_NULL = "IS_NULL"
    HAS_INVALID_VALUE = "HAS_INVALID_VALUE"
    HAS_DUPLICATE_VALUE = "HAS_DUPLICATE_VALUE"
    IS_INCONSISTENT = "IS_INCONSISTENT"
    EXCEEDS_LOWER_BOUND = "EXCEEDS_LOWER_BOUND"
    EXCEEDS_UPPER_BOUND = "EXCEEDS_UPPER_BOUND"
    UNKNOWN = "UNKNOWN"


class Entity(str, Enum):
    """Entity names a fault can refer to."""
    DOCUMENT = "Document"
    MAIN_DOCUMENT = "MainDocument"
    DOCUMENT_ID = "DocumentId"
    DOCUMENT_ID_DOMAIN = "DocumentIdDomain"
    DOCUMENT_CLASSIFICATION = "DocumentClassification"
    DOCUMENT_VERSION = "DocumentVersion"
    DOCUMENT_DESCRIPTION = "DocumentDescription"
    DOCUMENT_RELATIONSHIP = "DocumentRelationship"
    DIGITAL_FILE = "DigitalFile"
    LIFE_CYCLE_STATUS = "LifeCycleStatus"
    REFERENCED_OBJECT = "ReferencedObject"
    OBJECT_ID = "ObjectId"
    PARTY = "Party"
    ORGANIZATION = "Organization"
    TRANSLATABLE_STRING = "TranslatableString"


class Prop(str, Enum):
    """Property references, named as in the VDI 2770 XML vocabulary."""
    # Document
    DOCUMENT_ID = "documentId"
    DOCUMENT_VERSION = "documentVersion"
    DOCUMENT_CLASSIFICATION = "documentClassification"
    DOCUMENT_ID_DOMAIN = "documentIdDomain"
    REFERENCED_OBJECT = "referencedObject"
    # DocumentId / DocumentIdDomain
    ID = "id"
    DOMAIN_ID = "domainId"
    IS_PRIMARY = "isPrimary"
    DOCUMENT_DOMAIN_ID = "documentDomainId"
    PARTY = "party"
    # DocumentClassification
    CLASS_ID = "classId"
    CLASS_NAME = "className"
    CLASSIFICATION_SYSTEM = "classificationSystem"
    # DocumentVersion
    DOCUMENT_VERSION_ID = "documentVersionId"
    LANGUAGE = "language"
    DOCUMENT_DESCRIPTION = "documentDescription"
    LIFE_CYCLE_STATUS = "lifeCycleStatus"
    DOCUMENT_RELATIONSHIP = "documentRelationship"
    DIGITAL_FILE = "digitalFile"
    NUMBER_OF_PAGES = "numberOfPages"
    # DocumentDescription
    TITLE = "title"
    SUMMARY = "summary"
    KEY_WORDS = "keyWords"
    # DigitalFile
    FILE_NAME = "fileName"
    FILE_FORMAT = "fileFormat"
    # LifeCycleStatus
    STATUS_VALUE = "statusValue"
    SET_DATE = "setDate"
    COMMENTS = "comments"
    # DocumentRelationship
    TYPE = "type"
    DESCRIPTION = "description"
    # ReferencedObject / ObjectId
    OBJECT_ID = "objectId"
    OBJECT_TYPE = "objectType"
    REF_TYPE = "refType"
    PROJECT_ID = "projectId"
    REFERENCE_DESIGNATION = "referenceDesignation"
    EQUIPMENT_ID = "equipmentId"
    # Party / Organization
    ROLE = "role"
    ORGANIZATION = "organization"
    ORGANIZATION_ID = "organizationId"
    NAME = "name"
    OFFICIAL_NAME = "officialName"
    # TranslatableString
    TEXT = "text"


class Fault(BaseModel):
    """One validation finding. Immutable; list helpers return tagged copies."""
    model_config = ConfigDict(frozen=True)

    level: FaultLevel
    type: FaultType
    entity: Entity
    properties: tuple[Prop, ...] = ()
    code: str = Field("", description="Language independent message key")
    args: dict[str, Any] = Field(default_factory=dict)
    message: str | None = None
    original_value: str | None = None
    index: int | None = None
    parent: Entity | None = None
    parent_index: int | None = None

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def with_index(self, index: int) -> "Fault":
        return self.model_copy(update={"index": index})

    def with_parent(self, parent: Entity | None, parent_index: int | None = None) -> "Fault":
        update: dict[str, Any] = {"parent": parent}
        if parent_index is not None:
            update["parent_index"] = parent_index
        return self.model_copy(update=update)

    def with_message(self, message: str) -> "Fault":
        return self.model_copy(update={"message": message})

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def is_error(self) -> bool:
        return self.level == FaultLevel.ERROR

    def concerns(self, *props: Prop) -> bool:
        """True if the fault references exactly *props* (order ignored)."""
        return set(self.properties) == set(props)

    def __str__(self) -> str:
        parts = [f"{self.level.value} -- {self.entity.value}"]
        if self.properties:
            parts.append("[" + ",".join(p.value for p in self.properties) + "]")
        if self.index is not None:
            parts.append(f"@{self.index}")
        parts.append(f": {self.type.value}")
        if self.message:
            parts.append(f" '{self.message}'")
        if self.original_value is not None:
            parts.append(f" <{self.original_value}>")
        if self.parent is not None:
            parts.append(f" parent={self.parent.value}")
            if self.parent_index is not None:
                parts.append(f"@{self.parent_index}")
        return "".join(parts)


# ---------------------------------------------------------------------------
# List helpers
# ---------------------------------------------------------------------------


def filter_faults(faults: Iterable[Fault], level: FaultLevel) -> list[Fault]:
    """Faults at *level* or more severe (WARNING includes ERROR)."""
    return [f for f in faults if f.level.rank >= level.rank]


def has_errors(faults: Iterable[Fault]) -> bool:
    return any(f.level == FaultLevel.ERROR for f in faults)


def has_warnings(faults: Iterable[Fault]) -> bool:
    """True if any fault is a WARNING or an ERROR."""
    return bool(filter_faults(faults, FaultLevel.WARNING))
