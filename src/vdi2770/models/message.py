"""Report messages: a severity, a rendered text and an indentation level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .fault import Fault, FaultLevel

INDENT = "    "


class MessageLevel(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return {"INFO": 0, "WARN": 1, "ERROR": 2}[self.value]

    @classmethod
    def from_fault_level(cls, level: FaultLevel) -> "MessageLevel":
        return {
            FaultLevel.ERROR: cls.ERROR,
            FaultLevel.WARNING: cls.WARN,
            FaultLevel.INFORMATION: cls.INFO,
        }[level]


@dataclass(frozen=True)
class Message:
    level: MessageLevel
    text: str
    indent: int = 0
    code: str | None = None

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("message text must not be empty")
        if self.indent < 0:
            raise ValueError("indent must be >= 0")

    @classmethod
    def info(cls, text: str, indent: int = 0, code: str | None = None) -> "Message":
        return cls(MessageLevel.INFO, text, indent, code)

    @classmethod
    def warn(cls, text: str, indent: int = 0, code: str | None = None) -> "Message":
        return cls(MessageLevel.WARN, text, indent, code)

    @classmethod
    def error(cls, text: str, indent: int = 0, code: str | None = None) -> "Message":
        return cls(MessageLevel.ERROR, text, indent, code)

    @classmethod
    def from_fault(cls, fault: Fault, indent: int = 0) -> "Message":
        return cls(
            MessageLevel.from_fault_level(fault.level),
            fault.message or str(fault),
            indent,
            fault.code,
        )

    def demoted(self, level: MessageLevel) -> "Message":
        return Message(level, self.text, self.indent, self.code)

    def __str__(self) -> str:
        return f"{INDENT * self.indent}[{self.level.value}] {self.text}"

