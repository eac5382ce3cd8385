"""
Report Tree
===========
One ``Report`` per archive node: the node's messages, its classified
container type, its content hash and the reports of nested containers.

Reports are appended to while the walker processes their node and are
frozen once the node and all of its descendants are done.

Example::

    report = ContainerValidator(settings).validate("delivery.zip")
    if report.has_errors(deep=True):
        for message in report.filter(MessageLevel.ERROR, deep=True):
            print(message)
"""

from __future__ import annotations

import hashlib
import secrets
import string
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from ..models.message import INDENT, Message, MessageLevel


class ContainerType(str, Enum):
    DOCUMENT_CONTAINER = "DOCUMENT_CONTAINER"
    DOCUMENTATION_CONTAINER = "DOCUMENTATION_CONTAINER"


def _report_id() -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(8))


def file_hash(path: str | Path) -> str:
    """SHA-256 of a file; a random uuid when the file can not be hashed."""
    p = Path(path)
    if not p.is_file():
        return uuid.uuid4().hex
    digest = hashlib.sha256()
    try:
        with open(p, "rb") as fh:
            for chunk in iter(lambda: fh.read(65536), b""):
                digest.update(chunk)
    except OSError:
        return uuid.uuid4().hex
    return digest.hexdigest()


def report_file_name(path: str | Path) -> str:
    """Extracted directories are reported under their archive name."""
    p = Path(path)
    if p.is_dir() or not p.suffix:
        return p.name + ".zip"
    return p.name


@dataclass
class Report:
    """Messages of one archive node plus the reports of its nested containers."""
    file_name: str
    file_hash: str
    locale: str = "en"
    log_threshold: MessageLevel = MessageLevel.INFO
    container_type: ContainerType | None = None
    id: str = field(default_factory=_report_id)
    messages: list[Message] = field(default_factory=list)
    sub_reports: list["Report"] = field(default_factory=list)
    _frozen: bool = field(default=False, init=False, repr=False)

    @classmethod
    def for_path(
        cls,
        path: str | Path,
        locale: str = "en",
        log_threshold: MessageLevel = MessageLevel.INFO,
    ) -> "Report":
        return cls(
            file_name=report_file_name(path),
            file_hash=file_hash(path),
            locale=locale,
            log_threshold=log_threshold,
        )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError(f"Report {self.file_name} is frozen")

    def add_message(self, message: Message) -> None:
        self._check_open()
        self.messages.append(message)

    def add_messages(self, messages: list[Message]) -> None:
        self._check_open()
        self.messages.extend(messages)

    def create_sub_report(self, path: str | Path) -> "Report":
        self._check_open()
        sub = Report.for_path(path, self.locale, self.log_threshold)
        self.sub_reports.append(sub)
        return sub

    def sub_report(self, path: str | Path) -> "Report":
        """Find the sub report for *path* or create it."""
        name = report_file_name(path)
        for sub in self.sub_reports:
            if sub.file_name == name:
                return sub
        return self.create_sub_report(path)

    def freeze(self) -> None:
        """Freeze this report and its whole subtree."""
        for sub in self.sub_reports:
            sub.freeze()
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter(self, level: MessageLevel, exact: bool = False, deep: bool = False) -> list[Message]:
        """
        Messages at *level* and above (only *level* when ``exact``),
        including all sub reports when ``deep``.
        """
        if exact:
            result = [m for m in self.messages if m.level == level]
        else:
            result = [m for m in self.messages if m.level.rank >= level.rank]
        if deep:
            for sub in self.sub_reports:
                result.extend(sub.filter(level, exact, deep))
        return result

    def visible_messages(self) -> list[Message]:
        return self.filter(self.log_threshold)

    def has_errors(self, deep: bool = True) -> bool:
        return bool(self.filter(MessageLevel.ERROR, deep=deep))

    def has_warnings(self, deep: bool = True) -> bool:
        """True for WARN or ERROR messages."""
        return bool(self.filter(MessageLevel.WARN, deep=deep))

    def error_messages(self, deep: bool = False) -> list[Message]:
        return self.filter(MessageLevel.ERROR, exact=True, deep=deep)

    def warn_messages(self, deep: bool = False) -> list[Message]:
        return self.filter(MessageLevel.WARN, exact=True, deep=deep)

    def info_messages(self, deep: bool = False) -> list[Message]:
        return self.filter(MessageLevel.INFO, exact=True, deep=deep)

    def walk(self) -> list["Report"]:
        """This report followed by all descendants, depth first."""
        result = [self]
        for sub in self.sub_reports:
            result.extend(sub.walk())
        return result

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file_name,
            "hash": self.file_hash,
            "container_type": self.container_type.value if self.container_type else None,
            "passed": not self.has_errors(deep=True),
            "messages": [
                {"level": m.level.value, "text": m.text, "indent": m.indent, "code": m.code}
                for m in self.visible_messages()
            ],
            "sub_reports": [s.to_dict() for s in self.sub_reports],
        }

    def render_text(self, level: int = 0) -> str:
        lines = [f"{INDENT * level}{self.file_name} ({self.container_type.value if self.container_type else '-'})"]
        lines.extend(f"{INDENT * level}{m}" for m in self.visible_messages())
        for sub in self.sub_reports:
            lines.append(sub.render_text(level + 1))
        return "\n".join(lines)

    def __str__(self) -> str:
        status = "FAIL" if self.has_errors(deep=True) else "PASS"
        return (
            f"[{status}] {self.file_name} "
            f"– {len(self.filter(MessageLevel.ERROR, deep=True))} error(s), "
            f"{len(self.filter(MessageLevel.WARN, exact=True, deep=True))} warning(s)"
        )


@dataclass
class ReportStatistics:
    """Compact summary of a report tree, one CSV line per validation run."""
    file_hash: str
    timestamp: datetime
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_report(cls, report: Report) -> "ReportStatistics":
        def first_token(m: Message) -> str:
            return m.code or m.text.split()[0]

        return cls(
            file_hash=report.file_hash,
            timestamp=datetime.now(timezone.utc),
            errors=[first_token(m) for m in report.filter(MessageLevel.ERROR, exact=True, deep=True)],
            warnings=[first_token(m) for m in report.filter(MessageLevel.WARN, exact=True, deep=True)],
        )

    def to_csv(self) -> str:
        return ";".join([
            self.file_hash,
            self.timestamp.isoformat(),
            str(len(self.errors)),
            str(len(self.warnings)),
            ",".join(self.errors),
            ",".join(self.warnings),
        ])

    def __str__(self) -> str:
        return self.to_csv()
