"""Stop desks grouped by wilaya.

Source format (`desks.json`):

    {
      "16": [
        {"name": "Alger Centre", "postalCode": "16000",
         "mapsLink": "https://maps.app.goo.gl/..."},
        ...
      ],
      ...
    }

Lookups are plain dictionary reads. Desk order inside a wilaya is whatever
the source file says; nothing here ranks, sorts or deduplicates desks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import DatasetFormatError
from .wilayas import UNKNOWN_WILAYAS, WILAYA_NAMES, wilaya_sort_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeskRecord:
    """A single stop desk."""

    name: str
    postal_code: str
    maps_link: str | None = None


@dataclass(frozen=True)
class WilayaOption:
    """A selectable wilaya: one that has desk data *and* a display name."""

    key: str
    name: str

    @property
    def label(self) -> str:
        return f"{self.key}. {self.name}"


@dataclass(frozen=True)
class DirectorySummary:
    wilaya_count: int
    desk_count: int


class DeskDirectory(Mapping[str, tuple[DeskRecord, ...]]):
    """Read-only mapping of wilaya key -> desks (in source order)."""

    def __init__(self, desks: Mapping[str, tuple[DeskRecord, ...]] | None = None):
        self._desks: dict[str, tuple[DeskRecord, ...]] = {
            str(k): tuple(v) for k, v in (desks or {}).items()
        }

    @classmethod
    def from_payload(cls, payload: Any, *, source: str = "<payload>") -> "DeskDirectory":
        """Build a directory from a decoded `desks.json` payload.

        Malformed desks are skipped with a warning. A wilaya whose value is not
        a list is skipped entirely.
        """
        if not isinstance(payload, Mapping):
            raise DatasetFormatError(
                source, f"expected a JSON object, got {type(payload).__name__}"
            )

        desks: dict[str, tuple[DeskRecord, ...]] = {}
        for key, raw_list in payload.items():
            if not isinstance(raw_list, list):
                logger.warning("Skipping wilaya %r in %s: desks must be a list", key, source)
                continue

            records: list[DeskRecord] = []
            for i, raw in enumerate(raw_list):
                record = _coerce_desk(raw)
                if record is None:
                    logger.warning(
                        "Skipping malformed desk #%d of wilaya %r in %s", i, key, source
                    )
                    continue
                records.append(record)
            desks[str(key)] = tuple(records)

        directory = cls(desks)
        summary = directory.summary()
        logger.info(
            "Loaded %d desks across %d wilayas from %s",
            summary.desk_count,
            summary.wilaya_count,
            source,
        )
        return directory

    def __getitem__(self, key: str) -> tuple[DeskRecord, ...]:
        return self._desks[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._desks)

    def __len__(self) -> int:
        return len(self._desks)

    def __repr__(self) -> str:
        return f"DeskDirectory({len(self._desks)} wilayas)"

    def desks_for(self, key: str | int) -> tuple[DeskRecord, ...]:
        """Return the desks of a wilaya verbatim, or `()` for an unknown key."""
        return self._desks.get(str(key), ())

    def options(self) -> list[WilayaOption]:
        """List the selectable wilayas.

        Only keys that have desk data *and* a display name are selectable.
        Keys are ordered numerically ("2" before "16").
        """
        keys = sorted((k for k in self._desks if k in WILAYA_NAMES), key=wilaya_sort_key)
        return [WilayaOption(key=k, name=WILAYA_NAMES[k]) for k in keys]

    def summary(self) -> DirectorySummary:
        return DirectorySummary(
            wilaya_count=len(self._desks),
            desk_count=sum(len(v) for v in self._desks.values()),
        )


def parse_desks(payload: Any, *, source: str = "<payload>") -> DeskDirectory:
    """Validate a decoded `desks.json` payload. See `DeskDirectory.from_payload`."""
    return DeskDirectory.from_payload(payload, source=source)


def desks_for(directory: DeskDirectory, key: str | int) -> tuple[DeskRecord, ...]:
    return directory.desks_for(key)


def wilaya_options(directory: DeskDirectory) -> list[WilayaOption]:
    return directory.options()


def directory_summary(directory: DeskDirectory) -> DirectorySummary:
    return directory.summary()


def unknown_wilayas() -> list[WilayaOption]:
    """Wilayas whose stop desk locations are not known (footnote entries)."""
    return [
        WilayaOption(key=k, name=v)
        for k, v in sorted(UNKNOWN_WILAYAS.items(), key=lambda kv: wilaya_sort_key(kv[0]))
    ]


def _coerce_desk(raw: Any) -> DeskRecord | None:
    if not isinstance(raw, Mapping):
        return None

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    postal_code = raw.get("postalCode")
    if isinstance(postal_code, int) and not isinstance(postal_code, bool):
        postal_code = str(postal_code)
    if not isinstance(postal_code, str):
        return None

    maps_link = raw.get("mapsLink")
    if not isinstance(maps_link, str) or not maps_link.strip():
        maps_link = None

    return DeskRecord(
        name=name.strip(),
        postal_code=postal_code.strip(),
        maps_link=maps_link.strip() if maps_link else None,
    )
