"""VDI 2770 metadata model, fault model and constants."""

from .entities import (
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
from .fault import Entity, Fault, FaultLevel, FaultType, Prop, filter_faults, has_errors, has_warnings
from .message import Message, MessageLevel

__all__ = [
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
    "filter_faults",
    "has_errors",
    "has_warnings",
    "Message",
    "MessageLevel",
]
