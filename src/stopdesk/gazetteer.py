"""Commune gazetteer (commune list) loader.

This module turns the raw `communes.json` payload into typed, immutable
records that the fuzzy matcher can index.

Source format
-------------
The dataset is a JSON object keyed by an opaque string id:

    {
      "16": {"nom": "Alger Centre", "wilaya_id": 16,
             "code_postal": "16000", "has_stop_desk": 1},
      ...
    }

Key design choice
-----------------
The JSON is duck-typed, so we validate and coerce at the boundary. Entries
that cannot be coerced (missing name, non-integer wilaya, unknown flag value)
are skipped with a warning instead of failing the whole load: one bad row
should not take down commune search for everyone else.

Only a payload that is not a JSON object at all is treated as an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import DatasetFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommuneRecord:
    """One commune and its stop desk availability."""

    name: str
    wilaya_id: int
    postal_code: str
    has_stop_desk: bool


class CommuneIndex(Mapping[str, CommuneRecord]):
    """Read-only mapping of commune key -> CommuneRecord.

    Iteration follows the order of the source payload; the matcher relies on
    it to break score ties.
    """

    def __init__(self, records: Mapping[str, CommuneRecord] | None = None):
        self._records: dict[str, CommuneRecord] = dict(records or {})

    @classmethod
    def from_payload(cls, payload: Any, *, source: str = "<payload>") -> "CommuneIndex":
        """Build an index from a decoded `communes.json` payload.

        Args:
            payload: Decoded JSON value.
            source: Label used in log messages and errors.

        Returns:
            CommuneIndex instance.
        """
        if not isinstance(payload, Mapping):
            raise DatasetFormatError(
                source, f"expected a JSON object, got {type(payload).__name__}"
            )

        records: dict[str, CommuneRecord] = {}
        skipped = 0
        for key, raw in payload.items():
            record = _coerce_commune(raw)
            if record is None:
                skipped += 1
                logger.warning("Skipping malformed commune %r in %s", key, source)
                continue
            records[str(key)] = record

        if skipped:
            logger.warning(
                "Loaded %d communes from %s (%d malformed entries skipped)",
                len(records),
                source,
                skipped,
            )
        else:
            logger.info("Loaded %d communes from %s", len(records), source)

        return cls(records)

    @classmethod
    def from_json_file(cls, json_path: str | Path) -> "CommuneIndex":
        """Load a `communes.json` file from disk into a CommuneIndex."""
        json_path = Path(json_path)
        with json_path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        return cls.from_payload(payload, source=str(json_path))

    def __getitem__(self, key: str) -> CommuneRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"CommuneIndex({len(self._records)} communes)"


def parse_communes(payload: Any, *, source: str = "<payload>") -> CommuneIndex:
    """Validate a decoded `communes.json` payload. See `CommuneIndex.from_payload`."""
    return CommuneIndex.from_payload(payload, source=source)


def _coerce_commune(raw: Any) -> CommuneRecord | None:
    """Coerce one raw JSON entry into a CommuneRecord, or None if malformed."""
    if not isinstance(raw, Mapping):
        return None

    name = raw.get("nom")
    if not isinstance(name, str) or not name.strip():
        return None

    wilaya_id = _as_int(raw.get("wilaya_id"))
    if wilaya_id is None:
        return None

    postal_code = raw.get("code_postal")
    if isinstance(postal_code, int) and not isinstance(postal_code, bool):
        postal_code = str(postal_code)
    if not isinstance(postal_code, str):
        return None

    has_stop_desk = _as_flag(raw.get("has_stop_desk"))
    if has_stop_desk is None:
        return None

    return CommuneRecord(
        name=name.strip(),
        wilaya_id=wilaya_id,
        postal_code=postal_code.strip(),
        has_stop_desk=has_stop_desk,
    )


def _as_int(value: Any) -> int | None:
    # bool is an int subclass; `true` is not a wilaya id.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _as_flag(value: Any) -> bool | None:
    """The source uses 0/1 integers; real booleans are accepted too."""
    if isinstance(value, bool):
        return value
    if value in (0, 1) and isinstance(value, int):
        return bool(value)
    return None
