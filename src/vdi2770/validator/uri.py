"""
DIN SPEC 91406 object URIs.

``validate_object_uri`` returns ``(level, type, code, args)`` tuples that
the ObjectId rule turns into faults on the ``id`` property.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from ..models.fault import FaultLevel, FaultType

URI_WARN_LENGTH = 100
URI_MAX_LENGTH = 255

_FORBIDDEN = re.compile(r"[^A-Za-z0-9#,$&'()*+\-./~\[\]=?:;!_@]")

Finding = tuple[FaultLevel, FaultType, str, dict[str, Any]]


def _host(netloc: str) -> str:
    host = netloc.rsplit("@", 1)[-1]
    if host.startswith("["):
        return host[: host.find("]") + 1]
    return host.split(":", 1)[0]


def validate_object_uri(uri: str, strict: bool = True) -> list[Finding]:
    findings: list[Finding] = []
    candidate = uri if "://" in uri else f"http://{uri}"
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return [(FaultLevel.ERROR, FaultType.HAS_INVALID_VALUE, "URI_INVALID", {})]

    host = _host(parts.netloc)
    if not parts.scheme or not host:
        findings.append((FaultLevel.ERROR, FaultType.HAS_INVALID_VALUE, "URI_HOST_MISSING", {}))
    elif strict and host != host.lower():
        findings.append((FaultLevel.ERROR, FaultType.HAS_INVALID_VALUE, "URI_HOST_CASE",
                         {"host": host}))

    if len(uri) > URI_WARN_LENGTH:
        findings.append((FaultLevel.WARNING, FaultType.HAS_INVALID_VALUE, "URI_LONG",
                         {"length": len(uri), "limit": URI_WARN_LENGTH}))
    if len(uri) > URI_MAX_LENGTH:
        findings.append((FaultLevel.ERROR, FaultType.EXCEEDS_UPPER_BOUND, "URI_TOO_LONG",
                         {"length": len(uri), "limit": URI_MAX_LENGTH}))

    if "xn--" in uri.lower():
        findings.append((FaultLevel.WARNING, FaultType.HAS_INVALID_VALUE, "URI_PUNYCODE", {}))

    for match in _FORBIDDEN.finditer(uri):
        findings.append((FaultLevel.ERROR, FaultType.HAS_INVALID_VALUE, "URI_CHARACTER",
                         {"start": match.start(), "end": match.end(), "char": match.group()}))
    return findings
