"""
Test Suite for the cross-document checks
========================================
Relationship resolution, object id overlap and orphan detection.
"""

from __future__ import annotations

import pytest

from vdi2770 import (
    Document,
    DocumentBuilder,
    DocumentId,
    FaultLevel,
    MainDocument,
    ObjectType,
    is_known_by_parent,
    validate_object_overlap,
    validate_relations,
)


# ===========================================================================
# Fixtures
# ===========================================================================


@pytest.fixture
def main(main_document: MainDocument) -> Document:
    return main_document.document


def _sub_document(document_id: str, *object_ids: str) -> Document:
    builder = (
        DocumentBuilder.document(document_id, "ACME")
        .with_classification("03-02")
        .with_version("1.0", "en")
        .with_description("en", "Manual")
        .with_file("manual.pdf")
        .released()
    )
    for object_id in object_ids:
        builder.with_object(object_id)
    return builder.build()


# ===========================================================================
# validate_relations
# ===========================================================================


class TestValidateRelations:

    def test_resolved_target(self, main: Document, valid_document: Document) -> None:
        assert validate_relations(main, [valid_document], True, locale="en") == []

    def test_unresolved_target_main_is_error(self, main: Document) -> None:
        faults = validate_relations(main, [], True, locale="en")
        assert len(faults) == 1
        assert faults[0].level == FaultLevel.ERROR
        assert faults[0].code == "RELATION_UNRESOLVED"
        assert faults[0].original_value == "DOC-1;ACME;True"
        assert "DOC-1;ACME;True" in faults[0].message

    def test_unresolved_target_sub_is_information(self, main: Document) -> None:
        faults = validate_relations(main, [], False, locale="de")
        assert [f.level for f in faults] == [FaultLevel.INFORMATION]

    def test_ids_compared_case_insensitively(self, main: Document) -> None:
        target = _sub_document("doc-1").model_copy(update={
            "document_ids": [DocumentId(id="doc-1", domain_id="acme", is_primary=True)],
        })
        assert validate_relations(main, [target], True, locale="en") == []

    def test_secondary_id_resolves(self, main: Document) -> None:
        target = (
            DocumentBuilder.document("OTHER", "ACME")
            .with_id("DOC-1", "ACME")
            .build()
        )
        assert validate_relations(main, [target], True, locale="en") == []

    def test_without_relationships(self, valid_document: Document) -> None:
        assert validate_relations(valid_document, [], False, locale="en") == []


# ===========================================================================
# validate_object_overlap
# ===========================================================================


class TestObjectOverlap:

    def test_shared_object_id(self, main: Document, valid_document: Document) -> None:
        assert validate_object_overlap(valid_document, main, locale="en") is None

    def test_no_shared_object_id(self, main: Document) -> None:
        fault = validate_object_overlap(_sub_document("DOC-1", "SN-0001"), main, locale="en")
        assert fault is not None
        assert fault.level == FaultLevel.WARNING
        assert fault.code == "OBJECT_NO_OVERLAP"
        assert fault.message

    def test_object_type_must_match(self, main: Document) -> None:
        child = (
            DocumentBuilder.document("DOC-1", "ACME")
            .with_object("SN-4711", ObjectType.TYPE)
            .build()
        )
        assert validate_object_overlap(child, main, locale="en") is not None

    def test_not_checked_without_main_parent(self, valid_document: Document) -> None:
        other = _sub_document("DOC-2", "SN-0001")
        assert validate_object_overlap(valid_document, other, locale="en") is None
        assert validate_object_overlap(valid_document, None, locale="en") is None

    def test_not_checked_for_main_child(self, main: Document) -> None:
        nested_main = (
            DocumentBuilder.document("MAIN-2", "ACME")
            .with_object("SN-0001")
            .build_main()
            .document
        )
        assert validate_object_overlap(nested_main, main, locale="en") is None


# ===========================================================================
# is_known_by_parent
# ===========================================================================


class TestKnownByParent:

    def test_known(self, main: Document, valid_document: Document) -> None:
        assert is_known_by_parent(valid_document, main)

    def test_orphan(self, main: Document) -> None:
        assert not is_known_by_parent(_sub_document("DOC-9", "SN-4711"), main)

    def test_case_insensitive(self, main: Document) -> None:
        child = _sub_document("Doc-1").model_copy(update={
            "document_ids": [DocumentId(id="Doc-1", domain_id="Acme")],
        })
        assert is_known_by_parent(child, main)
