"""Content type detection from leading bytes, falling back to the file extension."""

from __future__ import annotations

import mimetypes
from pathlib import Path

OCTET_STREAM = "application/octet-stream"

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"PK\x05\x06", "application/zip"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
)

# formats that are ZIP files on the byte level
_ZIP_BASED_PREFIXES = (
    "application/vnd.openxmlformats",
    "application/vnd.oasis.opendocument",
    "application/epub",
)


class ContentSniffer:
    """Detect the media type of a file."""

    def __init__(self, sample_size: int = 8192) -> None:
        self._sample_size = sample_size

    def detect(self, path: str | Path) -> str:
        p = Path(path)
        with open(p, "rb") as fh:
            head = fh.read(self._sample_size)
        guessed = mimetypes.guess_type(p.name)[0]

        for signature, media_type in _SIGNATURES:
            if head.startswith(signature):
                if media_type == "application/zip" and guessed and guessed.startswith(_ZIP_BASED_PREFIXES):
                    return guessed
                return media_type

        if _looks_like_xml(head):
            return "application/xml"
        return guessed or OCTET_STREAM


def _looks_like_xml(head: bytes) -> bool:
    text = head.lstrip(b"\xef\xbb\xbf").lstrip()
    return text.startswith(b"<?xml")
