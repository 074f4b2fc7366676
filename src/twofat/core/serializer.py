"""
Versioned JSON encoding of the record set

Current schema (version 1):
    {"version": 1, "entries": {name: {"secret": str, "digits": str, "algorithm": str}}}

Legacy schema (before 1.0.0, no version wrapper):
    {name: {"secret": str, "digits": int}}

Decoding is an explicit two-stage parse: the current schema is tried first,
then the legacy one. A legacy payload is reported, never converted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import InvalidEntriesError, LegacyFormatError
from .models import LegacyRecord, Record

SCHEMA_VERSION = 1


class DecodeKind(Enum):
    CURRENT = "current"
    LEGACY = "legacy"
    UNPARSEABLE = "unparseable"


@dataclass
class DecodeResult:
    """Tagged outcome of :func:`decode`."""

    kind: DecodeKind
    records: Dict[str, Any] = field(default_factory=dict)


def encode(records: Dict[str, Record]) -> bytes:
    """Serialize ``records``; raises ValueError for anything decode would reject."""
    for name, rec in records.items():
        if not isinstance(name, str) or not name:
            raise ValueError(f"record name must be a non-empty string, got {name!r}")
        if not isinstance(rec, Record):
            raise ValueError(f"record {name!r} is not a Record")
    payload = {
        "version": SCHEMA_VERSION,
        "entries": {name: rec.to_dict() for name, rec in records.items()},
    }
    return json.dumps(payload, ensure_ascii=False, sort_keys=True).encode("utf-8")


def _parse_current(doc: Any) -> Optional[Dict[str, Record]]:
    if not isinstance(doc, dict) or set(doc) != {"version", "entries"}:
        return None
    if doc["version"] != SCHEMA_VERSION or not isinstance(doc["entries"], dict):
        return None
    records = {}
    for name, raw in doc["entries"].items():
        if not name:
            return None
        try:
            records[name] = Record.from_dict(raw)
        except ValueError:
            return None
    return records


def _parse_legacy(doc: Any) -> Optional[Dict[str, LegacyRecord]]:
    if not isinstance(doc, dict):
        return None
    records = {}
    for name, raw in doc.items():
        if not name:
            return None
        try:
            records[name] = LegacyRecord.from_dict(raw)
        except ValueError:
            return None
    return records


def decode(data: bytes) -> DecodeResult:
    """Classify ``data`` as current, legacy or unparseable; never raises on bad input."""
    try:
        doc = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return DecodeResult(DecodeKind.UNPARSEABLE)

    current = _parse_current(doc)
    if current is not None:
        return DecodeResult(DecodeKind.CURRENT, current)

    legacy = _parse_legacy(doc)
    if legacy is not None:
        return DecodeResult(DecodeKind.LEGACY, legacy)

    return DecodeResult(DecodeKind.UNPARSEABLE)


def decode_records(data: bytes) -> Dict[str, Record]:
    """Return current-schema records or raise the matching TwofatError."""
    result = decode(data)
    if result.kind is DecodeKind.CURRENT:
        return result.records
    if result.kind is DecodeKind.LEGACY:
        raise LegacyFormatError(
            "datafile uses the pre-1.0.0 format; export it with a twofat version "
            "below 1.0.0 and import the exported data with twofat 1.0.0 or later"
        )
    raise InvalidEntriesError("invalid entries data")
