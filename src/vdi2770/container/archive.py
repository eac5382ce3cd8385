"""
Archive Extraction
==================
ZIP handling for VDI 2770 containers: pre-extraction screening (not a
ZIP, damaged, encrypted, zip bomb), safe extraction with recursive
unpacking of nested containers, and packing of a prepared folder.

Example::

    extractor = ZipExtractor(settings)
    faults = extractor.inspect(path)
    if not any(f.level == FaultLevel.ERROR for f in faults):
        extractor.extract(path, target_dir)
"""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..config import ValidatorSettings
from ..errors import ArchiveError, ProcessorError
from ..models.constants import MAIN_DOCUMENT_XML_FILE_NAME, METADATA_XML_FILE_NAME, is_metadata_file
from ..models.fault import FaultLevel

log = logging.getLogger(__name__)

# general purpose flag bit 0
_ENCRYPTED_FLAG = 0x1


@dataclass(frozen=True)
class ArchiveFault:
    """A finding of the pre-extraction screening, rendered later via its code."""
    level: FaultLevel
    code: str
    file_name: str
    args: dict[str, Any] = field(default_factory=dict)


def is_zip_file(path: str | Path) -> bool:
    p = Path(path)
    return p.is_file() and zipfile.is_zipfile(p)


def is_encrypted_zip(path: str | Path) -> bool:
    with zipfile.ZipFile(path) as zf:
        return _has_encrypted(zf)


def is_valid_zip(path: str | Path) -> bool:
    try:
        with zipfile.ZipFile(path) as zf:
            if _has_encrypted(zf):
                # entries can not be tested without a password
                return True
            return zf.testzip() is None
    except (zipfile.BadZipFile, OSError, EOFError) as e:
        log.warning("Error reading ZIP file %s: %s", path, e)
        return False


def _has_encrypted(zf: zipfile.ZipFile) -> bool:
    return any(info.flag_bits & _ENCRYPTED_FLAG for info in zf.infolist())


def is_container(path: str | Path) -> bool:
    """A ZIP file with one of the canonical metadata files at its root."""
    if not is_zip_file(path):
        return False
    try:
        with zipfile.ZipFile(path) as zf:
            names = set(zf.namelist())
    except zipfile.BadZipFile:
        return False
    return MAIN_DOCUMENT_XML_FILE_NAME in names or METADATA_XML_FILE_NAME in names


class ZipExtractor:
    """Screens and extracts VDI 2770 containers according to *settings*."""

    def __init__(self, settings: ValidatorSettings | None = None) -> None:
        self._settings = settings or ValidatorSettings()
        # nested archives that could not be extracted, keyed by their would-be folder
        self.failures: dict[Path, str] = {}

    # ------------------------------------------------------------------
    # Screening
    # ------------------------------------------------------------------

    def inspect(self, path: str | Path) -> list[ArchiveFault]:
        """Findings that decide whether *path* may be extracted at all."""
        p = Path(path)
        if not is_zip_file(p):
            return [ArchiveFault(FaultLevel.ERROR, "ARCHIVE_NOT_ZIP", p.name)]
        if not is_valid_zip(p):
            return [ArchiveFault(FaultLevel.ERROR, "ARCHIVE_INVALID", p.name)]
        if is_encrypted_zip(p):
            return [ArchiveFault(FaultLevel.ERROR, "ARCHIVE_ENCRYPTED", p.name)]
        if self.is_bomb(p):
            return [ArchiveFault(FaultLevel.ERROR, "ARCHIVE_BOMB", p.name)]

        faults: list[ArchiveFault] = []
        with zipfile.ZipFile(p) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    faults.append(ArchiveFault(
                        FaultLevel.WARNING, "ARCHIVE_DIRECTORY_ENTRY", p.name,
                        {"entry": info.filename},
                    ))
        return faults

    def is_bomb(self, path: str | Path) -> bool:
        """
        True if any entry exceeds the compression ratio or entry size limit.
        A limit of -1 disables that check.
        """
        max_ratio = self._settings.max_compression_ratio
        max_size = self._settings.max_entry_size
        try:
            with zipfile.ZipFile(path) as zf:
                for info in zf.infolist():
                    if info.is_dir():
                        continue
                    compressed, uncompressed = info.compress_size, info.file_size
                    if compressed < 0 or uncompressed < 0:
                        log.error("Negative entry size in ZIP file %s", path)
                        return True
                    if compressed == 0:
                        log.warning("Entry %s in %s has compressed size zero", info.filename, path)
                    if max_ratio > 0 and compressed > 0 and uncompressed / compressed > max_ratio:
                        log.error("Maximum compression ratio exceeded in ZIP file %s", path)
                        return True
                    if max_size > 0 and uncompressed > max_size:
                        log.error("Maximum entry size exceeded in ZIP file %s", path)
                        return True
        except zipfile.BadZipFile as e:
            log.warning("Error reading ZIP file %s: %s", path, e)
        return False

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self, path: str | Path, target: str | Path) -> Path:
        """
        Extract *path* into *target* and unpack nested containers in place.

        A nested container ``sub.zip`` becomes the directory ``sub/`` next to
        it and the archive itself is removed. Raises ``ArchiveError`` when the
        archive fails screening or contains unsafe member paths.
        """
        p, target_dir = Path(path), Path(target)
        errors = [f for f in self.inspect(p) if f.level == FaultLevel.ERROR]
        if errors:
            raise ArchiveError(f"{p.name}: {errors[0].code}")

        root = target_dir.resolve()
        try:
            with zipfile.ZipFile(p) as zf:
                for info in zf.infolist():
                    destination = (target_dir / info.filename).resolve()
                    if root != destination and root not in destination.parents:
                        raise ArchiveError(f"{p.name}: unsafe member path {info.filename}")
                target_dir.mkdir(parents=True, exist_ok=True)
                if not target_dir.is_dir():
                    raise ArchiveError(f"{target_dir} is not a directory")
                zf.extractall(target_dir)
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"{p.name}: {e}") from e
        log.debug("Extracted %s to %s", p.name, target_dir)

        if self._settings.extract_nested:
            for nested in sorted(target_dir.iterdir()):
                if nested.suffix.lower() != ".zip" or not is_container(nested):
                    continue
                log.debug("Extracting nested container %s", nested.name)
                folder = nested.with_suffix("")
                existed = folder.exists()
                try:
                    self.extract(nested, folder)
                except ArchiveError as e:
                    # the archive stays in place and is reported by the walker
                    log.warning("Nested container %s not extracted: %s", nested.name, e)
                    self.failures[folder] = str(e)
                    if not existed:
                        self._remove_partial(folder)
                    continue
                try:
                    nested.unlink()
                except OSError:
                    log.warning("Can not delete nested archive %s", nested)
        return target_dir

    @staticmethod
    def _remove_partial(folder: Path) -> None:
        if not folder.is_dir():
            return
        try:
            shutil.rmtree(folder)
        except OSError as e:
            log.warning("Can not remove partially extracted %s: %s", folder, e)


def pack_container(folder: str | Path, target: str | Path) -> Path:
    """
    Zip the files of a prepared container folder.

    The folder must hold ``VDI2770_Main.xml`` or ``VDI2770_Metadata.xml``
    at its root. Sub folders are packed recursively.
    """
    src, dest = Path(folder), Path(target)
    if not src.is_dir():
        raise ProcessorError(f"{src} is not a directory")
    if not any(is_metadata_file(f) for f in src.iterdir() if f.is_file()):
        raise ProcessorError(f"{src} contains no VDI 2770 metadata file")

    with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for dirpath, dirnames, filenames in os.walk(src):
            dirnames.sort()
            for name in sorted(filenames):
                file_path = Path(dirpath) / name
                if file_path.resolve() == dest.resolve():
                    continue
                zf.write(file_path, file_path.relative_to(src).as_posix())
    log.info("Packed %s into %s", src, dest)
    return dest
