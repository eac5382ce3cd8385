"""Entity validation engine and relationship resolver."""

from .engine import validate, validate_document
from .messages import localize, render
from .relations import is_known_by_parent, validate_object_overlap, validate_relations
from .rules import RULES, validate_entity, validate_entity_list, validate_strings

__all__ = [
    "validate",
    "validate_document",
    "localize",
    "render",
    "is_known_by_parent",
    "validate_object_overlap",
    "validate_relations",
    "RULES",
    "validate_entity",
    "validate_entity_list",
    "validate_strings",
]
