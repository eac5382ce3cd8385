"""
Message Catalogue
=================
German and English message texts keyed by fault or report code.

Rendering is a pure lookup: ``render(code, locale, **args)``. Unknown
locales fall back to English, unknown codes render as the code itself,
and placeholders without a value are left in place.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..models.fault import Fault

DEFAULT_LOCALE = "en"

_EN: dict[str, str] = {
    # generic fault categories
    "IS_EMPTY": "{entity}: property '{property}' is empty.",
    "IS_NULL": "{entity}: property '{property}' is not set.",
    "HAS_INVALID_VALUE": "{entity}: property '{property}' has an invalid value.",
    "HAS_DUPLICATE_VALUE": "{entity}: property '{property}' contains duplicate values.",
    "IS_INCONSISTENT": "{entity}: property '{property}' is inconsistent.",
    "EXCEEDS_LOWER_BOUND": "{entity}: property '{property}' is below its lower bound.",
    "EXCEEDS_UPPER_BOUND": "{entity}: property '{property}' exceeds its upper bound.",
    "UNKNOWN": "{entity}: unknown problem with '{property}'.",
    # list helpers
    "LIST_NULL_MEMBER": "{entity}: entry {index} of '{property}' is not set.",
    "STRING_EMPTY": "{entity}: '{property}' contains an empty entry.",
    "STRING_DUPLICATE": "{entity}: '{property}' contains the value '{value}' more than once.",
    "LANGUAGE_INVALID": "{entity}: '{value}' is not an ISO 639 language code.",
    # entity rules
    "DOC_PRIMARY_ID": "Document: exactly one document id must be primary, found {count}.",
    "DOC_NO_VDI_CLASSIFICATION": "Document: a classification using VDI2770:2018 is required.",
    "DOC_NO_IEC_CLASSIFICATION": "Document: a classification using IEC61355 is recommended.",
    "DOMAIN_NOT_RESPONSIBLE": "DocumentIdDomain: the party must have the role Responsible, found {value}.",
    "CLASS_NAME_DUPLICATE_LANGUAGE": "DocumentClassification: more than one class name per language.",
    "CLASS_ID_UNKNOWN": "DocumentClassification: '{value}' is not a VDI 2770 category.",
    "CLASS_NAME_UNKNOWN_DE": "DocumentClassification: '{value}' is not a German VDI 2770 category name.",
    "CLASS_NAME_UNKNOWN_EN": "DocumentClassification: '{value}' is not an English VDI 2770 category name.",
    "VERSION_NO_AUTHOR": "DocumentVersion: a party with the role Author is required (roles: {value}).",
    "VERSION_DESCRIPTION_DUPLICATE_LANGUAGE": "DocumentVersion: more than one description per language.",
    "VERSION_FILE_DUPLICATE": "DocumentVersion: duplicate file names {value}.",
    "VERSION_NO_PDF": "DocumentVersion: no file of type application/pdf (formats: {value}).",
    "VERSION_PAGES_NEGATIVE": "DocumentVersion: number of pages must not be negative ({value}).",
    "VERSION_DESCRIPTION_PER_LANGUAGE": "DocumentVersion: language '{value}' needs exactly one description.",
    "FILE_MEDIA_TYPE_INVALID": "DigitalFile: '{value}' is not a valid media type.",
    "FILE_PDF_EXTENSION": "DigitalFile: PDF file '{value}' does not end with .pdf.",
    "FILE_ZIP_EXTENSION": "DigitalFile: ZIP file '{value}' does not end with .zip.",
    "STATUS_NO_RESPONSIBLE": "LifeCycleStatus: a party with the role Responsible is required (roles: {value}).",
    "OBJECT_MULTIPLE_INDIVIDUAL": "ReferencedObject: {count} object ids of type Individual, one is recommended.",
    "OBJECT_NO_MANUFACTURER": "ReferencedObject: a party with the role Manufacturer is required (roles: {value}).",
    "URI_INVALID": "ObjectId: '{value}' is not a valid URI.",
    "URI_HOST_MISSING": "ObjectId: URI '{value}' has no host.",
    "URI_HOST_CASE": "ObjectId: host '{host}' must be lower case.",
    "URI_LONG": "ObjectId: URI is longer than {limit} characters.",
    "URI_TOO_LONG": "ObjectId: URI is longer than {limit} characters.",
    "URI_PUNYCODE": "ObjectId: URI contains punycode (xn--).",
    "URI_CHARACTER": "ObjectId: invalid character '{char}' at {start}-{end}.",
    "MAIN_VERSION_COUNT": "MainDocument: exactly one document version is required, found {count}.",
    "MAIN_NOT_RELEASED": "MainDocument: the document version must be Released, found {value}.",
    "MAIN_PDF_COUNT": "MainDocument: exactly one file named VDI2770_Main.pdf is required, found {count}.",
    "MAIN_NO_RELATIONSHIP": "MainDocument: the document version has no relationships.",
    "MAIN_RELATIONSHIP_TYPE": "MainDocument: relationships should all be RefersTo, found {value}.",
    "MAIN_OBJECT_COUNT": "MainDocument: exactly one referenced object is required, found {count}.",
    "MAIN_NO_INDIVIDUAL": "MainDocument: the referenced object needs an object id of type Individual.",
    # cross document
    "RELATION_UNRESOLVED": "Document: relationship target '{value}' is not part of the container.",
    "OBJECT_NO_OVERLAP": "Document: no object id in common with the main document.",
    # report
    "LABEL_DOCUMENT": "document",
    "LABEL_MAIN_DOCUMENT": "main document",
    "REPORT_STRICT_MODE": "Validation runs in strict mode.",
    "REPORT_LENIENT_MODE": "Validation runs in lenient mode.",
    "REPORT_FOLDER_UNREADABLE": "Folder {folder} can not be read.",
    "REPORT_NO_CANONICAL_XML": "Neither VDI2770_Main.xml nor VDI2770_Metadata.xml exists.",
    "REPORT_CONTAINER_TYPE": "Container type is {type}.",
    "REPORT_UNKNOWN_CONTAINER_TYPE": "The container type can not be determined.",
    "REPORT_AMBIGUOUS_XML": "More than one XML file found, can not choose a metadata file.",
    "REPORT_METADATA_FILE_MISSING": "Metadata file {file} not found.",
    "REPORT_METADATA_FILE": "Validating metadata file {file}.",
    "REPORT_NO_METADATA_FILE": "No metadata file found.",
    "REPORT_METADATA_UNREADABLE": "Metadata file {file} can not be read: {error}",
    "REPORT_DOCUMENT_ID": "Document id: {value}",
    "REPORT_OBJECT_ID": "Object id ({type}): {value}",
    "REPORT_CLASSIFICATION": "Classification: {value}",
    "REPORT_RELATIONSHIP": "Relationship: {value}",
    "REPORT_UNEXPECTED_FILE": "Unexpected file {file}.",
    "REPORT_MISSING_FILE": "Declared file {file} is missing.",
    "REPORT_FILE_PRESENT": "Declared file {file} is present.",
    "REPORT_NO_FILE_FORMAT": "No media type declared for {file}.",
    "REPORT_MIME_MISMATCH": "File {file} is declared as {declared} but detected as {detected}.",
    "REPORT_PDFA_LEVEL": "File {file} conforms to PDF/A-{level}.",
    "REPORT_PDFA_NOT_ACCESSIBLE": "File {file} must conform to a PDF/A level 'a', found {level}.",
    "REPORT_PDF_UNREADABLE": "PDF/A level of {file} can not be read: {error}",
    "REPORT_PDF_ENCRYPTED": "File {file} is encrypted.",
    "REPORT_PDF_NO_TEXT": "File {file} contains no extractable text.",
    "REPORT_PDF_CANDIDATE_ACCEPTED": "PDF rendition {file} is valid, other renditions are informational.",
    "REPORT_NO_PARENT": "No parent document, object relations not checked.",
    "REPORT_NO_DOCUMENT": "No metadata available, relations not checked.",
    "REPORT_OBJECTS_OVERLAP": "Referenced objects match the main document.",
    "REPORT_ORPHAN": "The {target} {value} is not referenced by its parent.",
    "REPORT_KNOWN_BY_PARENT": "The {target} {value} is referenced by its parent.",
    "REPORT_RELATIONS_RESOLVED": "All relationship targets are part of the container.",
    "REPORT_MAIN_PDF_MISSING": "VDI2770_Main.pdf is missing.",
    "REPORT_STRICT_UNTYPED": "Container type unknown, nested containers not checked in strict mode.",
    "REPORT_DEPTH_EXCEEDED": "Nesting depth {depth} exceeds the limit, {folder} not checked.",
    "REPORT_PROCESSING_ERROR": "Processing failed: {error}",
    "ARCHIVE_NOT_ZIP": "File {file} is not a ZIP file.",
    "ARCHIVE_INVALID": "File {file} is not a valid ZIP file.",
    "ARCHIVE_ENCRYPTED": "File {file} is encrypted.",
    "ARCHIVE_DIRECTORY_ENTRY": "ZIP file {file} contains the directory {entry}.",
    "ARCHIVE_BOMB": "File {file} exceeds the compression or size limits.",
    "ARCHIVE_EXTRACTED": "Extracted {file} ({size} KB).",
    "PREFLIGHT_ENCRYPTED": "Preflight: {file} is encrypted, PDF/A-1 forbids encryption.",
    "PREFLIGHT_NO_METADATA": "Preflight: {file} has no XMP metadata stream.",
    "PREFLIGHT_NO_OUTPUT_INTENT": "Preflight: {file} has no output intent.",
    "PREFLIGHT_NOT_MARKED": "Preflight: {file} is not marked as tagged PDF.",
    "PREFLIGHT_NO_STRUCTURE": "Preflight: {file} has no structure tree.",
}

_DE: dict[str, str] = {
    "IS_EMPTY": "{entity}: Eigenschaft '{property}' ist leer.",
    "IS_NULL": "{entity}: Eigenschaft '{property}' ist nicht gesetzt.",
    "HAS_INVALID_VALUE": "{entity}: Eigenschaft '{property}' hat einen ungültigen Wert.",
    "HAS_DUPLICATE_VALUE": "{entity}: Eigenschaft '{property}' enthält doppelte Werte.",
    "IS_INCONSISTENT": "{entity}: Eigenschaft '{property}' ist inkonsistent.",
    "EXCEEDS_LOWER_BOUND": "{entity}: Eigenschaft '{property}' unterschreitet die Untergrenze.",
    "EXCEEDS_UPPER_BOUND": "{entity}: Eigenschaft '{property}' überschreitet die Obergrenze.",
    "UNKNOWN": "{entity}: unbekanntes Problem mit '{property}'.",
    "LIST_NULL_MEMBER": "{entity}: Eintrag {index} von '{property}' ist nicht gesetzt.",
    "STRING_EMPTY": "{entity}: '{property}' enthält einen leeren Eintrag.",
    "STRING_DUPLICATE": "{entity}: '{property}' enthält den Wert '{value}' mehrfach.",
    "LANGUAGE_INVALID": "{entity}: '{value}' ist kein Sprachcode nach ISO 639.",
    "DOC_PRIMARY_ID": "Document: genau eine Dokument-ID muss primär sein, gefunden {count}.",
    "DOC_NO_VDI_CLASSIFICATION": "Document: eine Klassifikation nach VDI2770:2018 ist erforderlich.",
    "DOC_NO_IEC_CLASSIFICATION": "Document: eine Klassifikation nach IEC61355 wird empfohlen.",
    "DOMAIN_NOT_RESPONSIBLE": "DocumentIdDomain: die Partei muss die Rolle Responsible haben, gefunden {value}.",
    "CLASS_NAME_DUPLICATE_LANGUAGE": "DocumentClassification: mehr als ein Klassenname je Sprache.",
    "CLASS_ID_UNKNOWN": "DocumentClassification: '{value}' ist keine VDI-2770-Kategorie.",
    "CLASS_NAME_UNKNOWN_DE": "DocumentClassification: '{value}' ist kein deutscher VDI-2770-Kategoriename.",
    "CLASS_NAME_UNKNOWN_EN": "DocumentClassification: '{value}' ist kein englischer VDI-2770-Kategoriename.",
    "VERSION_NO_AUTHOR": "DocumentVersion: eine Partei mit der Rolle Author fehlt (Rollen: {value}).",
    "VERSION_DESCRIPTION_DUPLICATE_LANGUAGE": "DocumentVersion: mehr als eine Beschreibung je Sprache.",
    "VERSION_FILE_DUPLICATE": "DocumentVersion: doppelte Dateinamen {value}.",
    "VERSION_NO_PDF": "DocumentVersion: keine Datei vom Typ application/pdf (Formate: {value}).",
    "VERSION_PAGES_NEGATIVE": "DocumentVersion: die Seitenzahl darf nicht negativ sein ({value}).",
    "VERSION_DESCRIPTION_PER_LANGUAGE": "DocumentVersion: Sprache '{value}' benötigt genau eine Beschreibung.",
    "FILE_MEDIA_TYPE_INVALID": "DigitalFile: '{value}' ist kein gültiger Medientyp.",
    "FILE_PDF_EXTENSION": "DigitalFile: PDF-Datei '{value}' endet nicht auf .pdf.",
    "FILE_ZIP_EXTENSION": "DigitalFile: ZIP-Datei '{value}' endet nicht auf .zip.",
    "STATUS_NO_RESPONSIBLE": "LifeCycleStatus: eine Partei mit der Rolle Responsible fehlt (Rollen: {value}).",
    "OBJECT_MULTIPLE_INDIVIDUAL": "ReferencedObject: {count} Objekt-IDs vom Typ Individual, empfohlen ist eine.",
    "OBJECT_NO_MANUFACTURER": "ReferencedObject: eine Partei mit der Rolle Manufacturer fehlt (Rollen: {value}).",
    "URI_INVALID": "ObjectId: '{value}' ist keine gültige URI.",
    "URI_HOST_MISSING": "ObjectId: die URI '{value}' hat keinen Host.",
    "URI_HOST_CASE": "ObjectId: der Host '{host}' muss klein geschrieben sein.",
    "URI_LONG": "ObjectId: die URI ist länger als {limit} Zeichen.",
    "URI_TOO_LONG": "ObjectId: die URI ist länger als {limit} Zeichen.",
    "URI_PUNYCODE": "ObjectId: die URI enthält Punycode (xn--).",
    "URI_CHARACTER": "ObjectId: ungültiges Zeichen '{char}' an Position {start}-{end}.",
    "MAIN_VERSION_COUNT": "MainDocument: genau eine Dokumentversion ist erforderlich, gefunden {count}.",
    "MAIN_NOT_RELEASED": "MainDocument: die Dokumentversion muss freigegeben sein, gefunden {value}.",
    "MAIN_PDF_COUNT": "MainDocument: genau eine Datei VDI2770_Main.pdf ist erforderlich, gefunden {count}.",
    "MAIN_NO_RELATIONSHIP": "MainDocument: die Dokumentversion hat keine Beziehungen.",
    "MAIN_RELATIONSHIP_TYPE": "MainDocument: Beziehungen sollten vom Typ RefersTo sein, gefunden {value}.",
    "MAIN_OBJECT_COUNT": "MainDocument: genau ein referenziertes Objekt ist erforderlich, gefunden {count}.",
    "MAIN_NO_INDIVIDUAL": "MainDocument: das referenzierte Objekt benötigt eine Objekt-ID vom Typ Individual.",
    "RELATION_UNRESOLVED": "Document: das Beziehungsziel '{value}' ist nicht Teil des Containers.",
    "OBJECT_NO_OVERLAP": "Document: keine gemeinsame Objekt-ID mit dem Hauptdokument.",
    "LABEL_DOCUMENT": "Dokument",
    "LABEL_MAIN_DOCUMENT": "Hauptdokument",
    "REPORT_STRICT_MODE": "Die Prüfung erfolgt im strengen Modus.",
    "REPORT_LENIENT_MODE": "Die Prüfung erfolgt im toleranten Modus.",
    "REPORT_FOLDER_UNREADABLE": "Das Verzeichnis {folder} kann nicht gelesen werden.",
    "REPORT_NO_CANONICAL_XML": "Weder VDI2770_Main.xml noch VDI2770_Metadata.xml ist vorhanden.",
    "REPORT_CONTAINER_TYPE": "Der Containertyp ist {type}.",
    "REPORT_UNKNOWN_CONTAINER_TYPE": "Der Containertyp kann nicht bestimmt werden.",
    "REPORT_AMBIGUOUS_XML": "Mehr als eine XML-Datei gefunden, keine Metadatendatei wählbar.",
    "REPORT_METADATA_FILE_MISSING": "Die Metadatendatei {file} fehlt.",
    "REPORT_METADATA_FILE": "Prüfe Metadatendatei {file}.",
    "REPORT_NO_METADATA_FILE": "Keine Metadatendatei gefunden.",
    "REPORT_METADATA_UNREADABLE": "Die Metadatendatei {file} kann nicht gelesen werden: {error}",
    "REPORT_DOCUMENT_ID": "Dokument-ID: {value}",
    "REPORT_OBJECT_ID": "Objekt-ID ({type}): {value}",
    "REPORT_CLASSIFICATION": "Klassifikation: {value}",
    "REPORT_RELATIONSHIP": "Beziehung: {value}",
    "REPORT_UNEXPECTED_FILE": "Unerwartete Datei {file}.",
    "REPORT_MISSING_FILE": "Die deklarierte Datei {file} fehlt.",
    "REPORT_FILE_PRESENT": "Die deklarierte Datei {file} ist vorhanden.",
    "REPORT_NO_FILE_FORMAT": "Für {file} ist kein Medientyp angegeben.",
    "REPORT_MIME_MISMATCH": "Die Datei {file} ist als {declared} deklariert, erkannt wurde {detected}.",
    "REPORT_PDFA_LEVEL": "Die Datei {file} entspricht PDF/A-{level}.",
    "REPORT_PDFA_NOT_ACCESSIBLE": "Die Datei {file} muss PDF/A Level 'a' entsprechen, gefunden {level}.",
    "REPORT_PDF_UNREADABLE": "Der PDF/A-Level von {file} kann nicht gelesen werden: {error}",
    "REPORT_PDF_ENCRYPTED": "Die Datei {file} ist verschlüsselt.",
    "REPORT_PDF_NO_TEXT": "Die Datei {file} enthält keinen extrahierbaren Text.",
    "REPORT_PDF_CANDIDATE_ACCEPTED": "Die PDF-Datei {file} ist gültig, weitere PDF-Dateien sind nur informativ.",
    "REPORT_NO_PARENT": "Kein übergeordnetes Dokument, Objektbeziehungen nicht geprüft.",
    "REPORT_NO_DOCUMENT": "Keine Metadaten vorhanden, Beziehungen nicht geprüft.",
    "REPORT_OBJECTS_OVERLAP": "Die referenzierten Objekte passen zum Hauptdokument.",
    "REPORT_ORPHAN": "Das {target} {value} wird vom übergeordneten Dokument nicht referenziert.",
    "REPORT_KNOWN_BY_PARENT": "Das {target} {value} wird vom übergeordneten Dokument referenziert.",
    "REPORT_RELATIONS_RESOLVED": "Alle Beziehungsziele sind Teil des Containers.",
    "REPORT_MAIN_PDF_MISSING": "VDI2770_Main.pdf fehlt.",
    "REPORT_STRICT_UNTYPED": "Containertyp unbekannt, eingebettete Container im strengen Modus nicht geprüft.",
    "REPORT_DEPTH_EXCEEDED": "Die Verschachtelungstiefe {depth} überschreitet das Limit, {folder} nicht geprüft.",
    "REPORT_PROCESSING_ERROR": "Verarbeitung fehlgeschlagen: {error}",
    "ARCHIVE_NOT_ZIP": "Die Datei {file} ist keine ZIP-Datei.",
    "ARCHIVE_INVALID": "Die Datei {file} ist keine gültige ZIP-Datei.",
    "ARCHIVE_ENCRYPTED": "Die Datei {file} ist verschlüsselt.",
    "ARCHIVE_DIRECTORY_ENTRY": "Die ZIP-Datei {file} enthält das Verzeichnis {entry}.",
    "ARCHIVE_BOMB": "Die Datei {file} überschreitet die Kompressions- oder Größengrenzen.",
    "ARCHIVE_EXTRACTED": "{file} entpackt ({size} KB).",
    "PREFLIGHT_ENCRYPTED": "Preflight: {file} ist verschlüsselt, PDF/A-1 verbietet Verschlüsselung.",
    "PREFLIGHT_NO_METADATA": "Preflight: {file} hat keinen XMP-Metadatenstrom.",
    "PREFLIGHT_NO_OUTPUT_INTENT": "Preflight: {file} hat keinen Output Intent.",
    "PREFLIGHT_NOT_MARKED": "Preflight: {file} ist nicht als getaggtes PDF markiert.",
    "PREFLIGHT_NO_STRUCTURE": "Preflight: {file} hat keinen Strukturbaum.",
}

CATALOGUES: dict[str, dict[str, str]] = {"en": _EN, "de": _DE}


class _Args(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def normalize_locale(locale: str) -> str:
    """``de_DE`` / ``de-DE`` / ``DE`` -> ``de``; unknown -> ``en``."""
    language = locale.replace("_", "-").split("-")[0].lower()
    return language if language in CATALOGUES else DEFAULT_LOCALE


def render(code: str, locale: str = DEFAULT_LOCALE, **args: Any) -> str:
    catalogue = CATALOGUES[normalize_locale(locale)]
    template = catalogue.get(code) or _EN.get(code)
    if template is None:
        return code
    return template.format_map(_Args(args))


def localize(faults: Iterable[Fault], locale: str) -> list[Fault]:
    """Attach rendered message text to each fault."""
    result: list[Fault] = []
    for fault in faults:
        args: dict[str, Any] = {
            "entity": fault.entity.value,
            "property": ",".join(p.value for p in fault.properties),
            "value": fault.original_value if fault.original_value is not None else "",
            "index": fault.index if fault.index is not None else "",
        }
        args.update(fault.args)
        result.append(fault.with_message(render(fault.code or fault.type.value, locale, **args)))
    return result
