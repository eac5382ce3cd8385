"""
Test Suite for the metadata model, faults and the document builder
==================================================================
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from vdi2770 import (
    Document,
    DocumentBuilder,
    DocumentId,
    Entity,
    Fault,
    FaultLevel,
    FaultType,
    LifeCycleStatusValue,
    MainDocument,
    Prop,
    Role,
)
from vdi2770.models.constants import (
    VDI2770_CATEGORIES,
    is_iso_language,
    is_metadata_file,
    matches_vocabulary,
)
from vdi2770.models.fault import filter_faults, has_errors, has_warnings


def _fault(level: FaultLevel, **kwargs: object) -> Fault:
    return Fault(level=level, type=FaultType.IS_EMPTY, entity=Entity.DOCUMENT, **kwargs)


# ===========================================================================
# Faults
# ===========================================================================


class TestFault:

    def test_str(self) -> None:
        fault = _fault(
            FaultLevel.ERROR,
            properties=(Prop.DOCUMENT_ID,),
            index=2,
            message="empty",
            original_value="x",
            parent=Entity.MAIN_DOCUMENT,
            parent_index=0,
        )
        assert str(fault) == "ERROR -- Document[documentId]@2: IS_EMPTY 'empty' <x> parent=MainDocument@0"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            _fault(FaultLevel.ERROR).level = FaultLevel.WARNING  # type: ignore[misc]

    def test_copies(self) -> None:
        fault = _fault(FaultLevel.ERROR)
        tagged = fault.with_index(3).with_parent(Entity.PARTY, 1)
        assert fault.index is None
        assert (tagged.index, tagged.parent, tagged.parent_index) == (3, Entity.PARTY, 1)

    def test_concerns_ignores_order(self) -> None:
        fault = _fault(FaultLevel.ERROR, properties=(Prop.FILE_NAME, Prop.FILE_FORMAT))
        assert fault.concerns(Prop.FILE_FORMAT, Prop.FILE_NAME)
        assert not fault.concerns(Prop.FILE_NAME)

    def test_level_helpers(self) -> None:
        faults = [_fault(FaultLevel.INFORMATION), _fault(FaultLevel.WARNING)]
        assert len(filter_faults(faults, FaultLevel.WARNING)) == 1
        assert len(filter_faults(faults, FaultLevel.INFORMATION)) == 2
        assert has_warnings(faults)
        assert not has_errors(faults)


# ===========================================================================
# Constants
# ===========================================================================


class TestConstants:

    @pytest.mark.parametrize("code,expected", [
        ("de", True),
        ("DE", True),
        ("deu", True),
        ("ger", True),
        ("de-DE", False),
        ("xx", False),
        ("", False),
        (None, False),
    ])
    def test_iso_language(self, code: str | None, expected: bool) -> None:
        assert is_iso_language(code) is expected

    def test_vocabulary_case(self) -> None:
        assert matches_vocabulary("Bedienung", ("Bedienung",), strict=True)
        assert not matches_vocabulary("BEDIENUNG", ("Bedienung",), strict=True)
        assert matches_vocabulary("BEDIENUNG", ("Bedienung",), strict=False)

    def test_categories(self) -> None:
        assert len(VDI2770_CATEGORIES) == 12
        assert VDI2770_CATEGORIES[0] == "01-01"

    def test_metadata_file_names(self) -> None:
        assert is_metadata_file("a/VDI2770_Main.xml")
        assert is_metadata_file("VDI2770_Metadata.xml")
        assert not is_metadata_file("vdi2770_metadata.xml")


# ===========================================================================
# Entities and builder
# ===========================================================================


class TestDocument:

    def test_queries_skip_null_members(self, valid_document: Document) -> None:
        doc = valid_document.model_copy(update={"document_ids": [None, *valid_document.document_ids]})
        assert [i.id for i in doc.ids()] == ["DOC-1"]
        assert doc.classification_ids("VDI2770:2018") == ["03-02"]
        assert doc.classification_ids("IEC61355") == ["AAA"]
        assert [o.id for o in doc.object_ids()] == ["SN-4711"]

    def test_document_id_key(self) -> None:
        assert DocumentId(id="Doc-1", domain_id="ACME").key() == DocumentId(id="doc-1", domain_id="acme").key()
        assert DocumentId(id="DOC-1", domain_id="ACME", is_primary=True).as_text() == "DOC-1;ACME;True"

    def test_entities_frozen(self, valid_document: Document) -> None:
        with pytest.raises(ValidationError):
            valid_document.versions = []  # type: ignore[misc]


class TestDocumentBuilder:

    def test_parties_share_organization(self, valid_document: Document) -> None:
        version = valid_document.versions[0]
        assert version.parties[0].role == Role.AUTHOR
        assert version.parties[0].organization.name == "ACME"
        assert valid_document.document_id_domains[0].party.role == Role.RESPONSIBLE
        assert valid_document.referenced_objects[0].parties[0].role == Role.MANUFACTURER

    def test_explicit_organization(self) -> None:
        doc = DocumentBuilder.document("DOC-1", "acme.com", organization="ACME GmbH").build()
        assert doc.document_id_domains[0].party.organization.official_name == "ACME GmbH"

    def test_description_defaults(self) -> None:
        doc = DocumentBuilder.document("DOC-1", "ACME").with_version("1").with_description("en", "Manual").build()
        description = doc.versions[0].descriptions[0]
        assert description.summary == "Manual"
        assert description.keywords == ["Manual"]

    def test_no_version_without_version_id(self) -> None:
        assert DocumentBuilder.document("DOC-1", "ACME").build().versions == []

    def test_refers_to(self, valid_document: Document) -> None:
        doc = DocumentBuilder.document("MAIN-1", "ACME").with_version("1").refers_to(valid_document).build()
        target = doc.relationships()[0].document_id
        assert (target.id, target.domain_id) == ("DOC-1", "ACME")

    def test_refers_to_needs_primary_id(self) -> None:
        with pytest.raises(ValueError):
            DocumentBuilder("ACME").refers_to(Document())

    def test_build_main(self) -> None:
        main = DocumentBuilder.document("MAIN-1", "ACME").with_version("1", "en").build_main()
        assert isinstance(main, MainDocument)
        assert main.document.is_main_document()
        status = main.document.versions[0].life_cycle_status
        assert status.status_value == LifeCycleStatusValue.RELEASED
        assert status.parties[0].role == Role.RESPONSIBLE

    def test_build_main_keeps_status(self) -> None:
        main = (
            DocumentBuilder.document("MAIN-1", "ACME")
            .with_version("1", "en")
            .in_review(date(2024, 1, 1))
            .build_main()
        )
        status = main.document.versions[0].life_cycle_status
        assert status.status_value == LifeCycleStatusValue.IN_REVIEW
        assert status.set_date == date(2024, 1, 1)
