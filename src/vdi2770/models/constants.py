"""
VDI 2770 Constants
==================
Controlled vocabularies and canonical names shared by the metadata model,
the XML reader and the container walker.

The canonical file names are a fixed contract with packagers: a
documentation container carries ``VDI2770_Main.xml`` and
``VDI2770_Main.pdf``, a document container carries
``VDI2770_Metadata.xml``.
"""

from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Canonical file names
# ---------------------------------------------------------------------------

MAIN_DOCUMENT_XML_FILE_NAME = "VDI2770_Main.xml"
METADATA_XML_FILE_NAME = "VDI2770_Metadata.xml"
MAIN_DOCUMENT_PDF_FILE_NAME = "VDI2770_Main.pdf"

VDI2770_XML_NAMESPACE = "http://www.vdi.de/schemas/vdi2770"


def is_metadata_file(path: str | Path) -> bool:
    """True if *path* carries one of the two canonical metadata file names."""
    name = Path(path).name
    return name in (MAIN_DOCUMENT_XML_FILE_NAME, METADATA_XML_FILE_NAME)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

IEC61355_CLASSIFICATION_NAME = "IEC61355"
VDI2770_CLASSIFICATION_SYSTEM_NAME = "VDI2770:2018"

VDI2770_IDENTIFICATION_CATEGORY = "01-01"
VDI2770_TECHNICAL_SPECIFICATION_CATEGORY = "02-01"
VDI2770_DRAWINGS_CATEGORY = "02-02"
VDI2770_ASSEMBLY_CATEGORY = "02-03"
VDI2770_CERTIFICATE_CATEGORY = "02-04"
VDI2770_MOUNT_CATEGORY = "03-01"
VDI2770_OPERATION_CATEGORY = "03-02"
VDI2770_SAFETY_CATEGORY = "03-03"
VDI2770_MAINTENANCE_CATEGORY = "03-04"
VDI2770_REPAIR_CATEGORY = "03-05"
VDI2770_SPARE_PARTS_CATEGORY = "03-06"
VDI2770_CONTRACT_CATEGORY = "04-01"

VDI2770_GERMAN_CATEGORY_NAMES: dict[str, str] = {
    VDI2770_IDENTIFICATION_CATEGORY: "Identifikation",
    VDI2770_TECHNICAL_SPECIFICATION_CATEGORY: "Technische Spezifikation",
    VDI2770_DRAWINGS_CATEGORY: "Zeichnungen, Pläne",
    VDI2770_ASSEMBLY_CATEGORY: "Bauteile",
    VDI2770_CERTIFICATE_CATEGORY: "Zeugnisse, Zertifikate, Bescheinigungen",
    VDI2770_MOUNT_CATEGORY: "Montage, Demontage",
    VDI2770_OPERATION_CATEGORY: "Bedienung",
    VDI2770_SAFETY_CATEGORY: "Allgemeine Sicherheit",
    VDI2770_MAINTENANCE_CATEGORY: "Inspektion, Wartung, Prüfung",
    VDI2770_REPAIR_CATEGORY: "Instandsetzung",
    VDI2770_SPARE_PARTS_CATEGORY: "Ersatzteile",
    VDI2770_CONTRACT_CATEGORY: "Vertragsunterlagen",
}

VDI2770_ENGLISH_CATEGORY_NAMES: dict[str, str] = {
    VDI2770_IDENTIFICATION_CATEGORY: "Identification",
    VDI2770_TECHNICAL_SPECIFICATION_CATEGORY: "Technical specification",
    VDI2770_DRAWINGS_CATEGORY: "Drawings, plans",
    VDI2770_ASSEMBLY_CATEGORY: "Components",
    VDI2770_CERTIFICATE_CATEGORY: "Certificates",
    VDI2770_MOUNT_CATEGORY: "Assembly, disassembly",
    VDI2770_OPERATION_CATEGORY: "Operation",
    VDI2770_SAFETY_CATEGORY: "General safety",
    VDI2770_MAINTENANCE_CATEGORY: "Inspection, maintenance",
    VDI2770_REPAIR_CATEGORY: "Repair",
    VDI2770_SPARE_PARTS_CATEGORY: "Spare parts",
    VDI2770_CONTRACT_CATEGORY: "contract documents",
}

VDI2770_CATEGORIES: tuple[str, ...] = tuple(VDI2770_GERMAN_CATEGORY_NAMES)


def matches_vocabulary(value: str, vocabulary: list[str] | tuple[str, ...], strict: bool) -> bool:
    """Vocabulary lookup, case-sensitive in strict mode and case-insensitive otherwise."""
    if strict:
        return value in vocabulary
    lowered = value.lower()
    return any(v.lower() == lowered for v in vocabulary)


# ---------------------------------------------------------------------------
# Object id reference types
# ---------------------------------------------------------------------------

REF_TYPE_ORDER_CODE = "order code"
REF_TYPE_ARTICLE_NUMBER = "article number"
REF_TYPE_PRODUCT_TYPE = "product type"
REF_TYPE_GTIN = "GTIN"
REF_TYPE_EAN = "EAN"
REF_TYPE_DIN_SPEC_91406_ID = "instance of object uri"
REF_TYPE_SERIAL_NUMBER = "serial number"

# ---------------------------------------------------------------------------
# Media types
# ---------------------------------------------------------------------------

PDF_MEDIA_TYPE = "application/pdf"
ZIP_MEDIA_TYPES: tuple[str, ...] = ("application/zip", "application/x-zip-compressed")

# ---------------------------------------------------------------------------
# ISO 639-1 / ISO 639-2 (T and B) language codes
# ---------------------------------------------------------------------------

ISO_LANGUAGE_CODES: frozenset[str] = frozenset("""
    ab aa af ak sq am ar an hy as av ae ay az bm ba eu be bn bh bi bs br bg
    my ca ch ce ny zh cv kw co cr hr cs da dv nl dz en eo et ee fo fj fi fr
    ff gl ka de el gn gu ht ha he hz hi ho hu ia id ie ga ig ik io is it iu
    ja jv kl kn kr ks kk km ki rw ky kv kg ko ku kj la lb lg li ln lo lt lu
    lv gv mk mg ms ml mt mi mr mh mn na nv nd ne ng nb nn no ii nr oc oj cu
    om or os pa pi fa pl ps pt qu rm rn ro ru sa sc sd se sm sg sr gd sn si
    sk sl so st es su sw ss sv ta te tg th ti bo tk tl tn to tr ts tt tw ty
    ug uk ur uz ve vi vo wa cy wo fy xh yi yo za zu abk aar afr aka sqi amh
    ara arg hye asm ava ave aym aze bam bak eus bel ben bih bis bos bre bul
    mya cat cha che nya zho chv cor cos cre hrv ces dan div nld dzo eng epo
    est ewe fao fij fin fra ful glg kat deu ell grn guj hat hau heb her hin
    hmo hun ina ind ile gle ibo ipk ido isl ita iku jpn jav kal kan kau kas
    kaz khm kik kin kir kom kon kor kur kua lat ltz lug lim lin lao lit lub
    lav glv mkd mlg msa mal mlt mri mar mah mon nau nav nde nep ndo nob nno
    nor iii nbl oci oji chu orm ori oss pan pli fas pol pus por que roh run
    ron rus san srd snd sme smo sag srp gla sna sin slk slv som sot spa sun
    swa ssw swe tam tel tgk tha tir bod tuk tgl tsn ton tur tso tat twi tah
    uig ukr urd uzb ven vie vol wln cym wol fry xho yid yor zha zul alb arm
    baq bur chi cze dut fre geo ger gre ice mac may mao per rum slo tib wel
""".split())


def is_iso_language(code: str | None) -> bool:
    if not code:
        return False
    return code.lower() in ISO_LANGUAGE_CODES
