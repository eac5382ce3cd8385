"""
Relationship Resolver
=====================
Cross-document checks run by the container walker:

- relationship targets must resolve against the documents of the container
- a sub document must share at least one referenced object id with its
  main document
- a sub document must be referenced by its parent (otherwise it is an orphan)

Document ids are compared by their case-insensitive ``id@domain`` key.
"""

from __future__ import annotations

from typing import Iterable

from ..models.entities import Document, ObjectId
from ..models.fault import Entity, Fault, FaultLevel, FaultType, Prop
from .messages import localize


def _object_key(object_id: ObjectId) -> tuple[str | None, str | None]:
    return object_id.id, object_id.object_type.value if object_id.object_type else None


def validate_relations(
    document: Document,
    siblings: Iterable[Document],
    is_main_document: bool,
    *,
    locale: str,
) -> list[Fault]:
    """
    Check that every relationship target of *document* is one of *siblings*.

    Unresolved targets are ERROR for a main document and INFORMATION otherwise.
    """
    known = {i.key() for sibling in siblings for i in sibling.ids()}
    level = FaultLevel.ERROR if is_main_document else FaultLevel.INFORMATION
    faults: list[Fault] = []
    for relationship in document.relationships():
        target = relationship.document_id
        if target is None or target.key() in known:
            continue
        faults.append(Fault(
            level=level,
            type=FaultType.IS_INCONSISTENT,
            entity=Entity.DOCUMENT,
            properties=(Prop.DOCUMENT_VERSION,),
            code="RELATION_UNRESOLVED",
            original_value=target.as_text(),
        ))
    return localize(faults, locale)


def validate_object_overlap(
    child: Document,
    parent: Document | None,
    *,
    locale: str,
) -> Fault | None:
    """WARNING when a sub document shares no object id with its main document."""
    if parent is None or not parent.is_main_document() or child.is_main_document():
        return None
    parent_keys = {_object_key(o) for o in parent.object_ids()}
    if any(_object_key(o) in parent_keys for o in child.object_ids()):
        return None
    fault = Fault(
        level=FaultLevel.WARNING,
        type=FaultType.IS_INCONSISTENT,
        entity=Entity.DOCUMENT,
        properties=(Prop.REFERENCED_OBJECT,),
        code="OBJECT_NO_OVERLAP",
    )
    return localize([fault], locale)[0]


def is_known_by_parent(child: Document, parent: Document) -> bool:
    """True if one of *parent*'s relationships targets one of *child*'s ids."""
    targets = {r.document_id.key() for r in parent.relationships() if r.document_id}
    return any(i.key() in targets for i in child.ids())
