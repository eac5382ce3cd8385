"""
Validation Engine
=================
Public entry point of the entity validation engine.

Example::

    from vdi2770.validator import validate

    faults = validate(document, locale="de")
    for fault in faults:
        print(fault)

``validate`` is a pure function of (entity, parent, locale, strict): it
never raises for malformed data and returns the same fault list for the
same input. Only malformed call arguments are rejected.
"""

from __future__ import annotations

from typing import Any

from ..models.entities import Document, MainDocument
from ..models.fault import Entity, Fault
from .messages import localize
from .rules import RULES, validate_entity


def validate(
    entity: Any,
    parent: Entity | None = None,
    *,
    locale: str,
    strict: bool = True,
) -> list[Fault]:
    """
    Validate *entity* and return its localized faults.

    Parameters
    ----------
    entity:
        Any model entity (``Document``, ``MainDocument``, ``DocumentVersion`` ...).
    parent:
        Entity name recorded as the parent of the top-level faults.
    locale:
        Message language, ``"en"`` or ``"de"``. Required.
    strict:
        Case-sensitive vocabulary and URI host comparison when True.
    """
    if not locale:
        raise ValueError("locale is required")
    if entity is None:
        raise ValueError("entity is None")
    if type(entity) not in RULES:
        raise TypeError(f"Cannot validate {type(entity).__name__}")
    return localize(validate_entity(entity, parent, strict), locale)


def validate_document(document: Document, *, locale: str, strict: bool = True) -> list[Fault]:
    """Validate a document, applying main-document rules when it declares itself one."""
    if document is None:
        raise ValueError("document is None")
    target: Document | MainDocument = document
    if document.is_main_document():
        target = MainDocument.of(document)
    return validate(target, locale=locale, strict=strict)
