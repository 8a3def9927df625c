"""Wilaya (region) display names.

The table is embedded and read-only; covering a new wilaya means shipping a
new release, not mutating it at runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

WILAYA_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "1": "Adrar",
        "2": "Chlef",
        "3": "Laghouat",
        "4": "Oum El Bouaghi",
        "5": "Batna",
        "6": "Bejaia",
        "7": "Biskra",
        "8": "Bechar",
        "9": "Blida",
        "10": "Bouira",
        "11": "Tamanrasset",
        "12": "Tebessa",
        "13": "Tlemcen",
        "14": "Tiaret",
        "15": "Tizi Ouzou",
        "16": "Alger",
        "17": "Djelfa",
        "18": "Jijel",
        "19": "Setif",
        "20": "Saida",
        "21": "Skikda",
        "22": "Sidi Bel Abbes",
        "23": "Annaba",
        "24": "Guelma",
        "25": "Constantine",
        "26": "Medea",
        "27": "Mostaganem",
        "28": "M'sila",
        "29": "Mascara",
        "30": "Ouargla",
        "31": "Oran",
        "32": "El Bayadh",
        "33": "Illizi",
        "34": "Bordj Bou Arreridj",
        "35": "Boumerdes",
        "36": "El Tarf",
        "38": "Tissemsilt",
        "39": "El Oued",
        "40": "Khenchela",
        "41": "Souk Ahras",
        "42": "Tipaza",
        "43": "Mila",
        "44": "Ain Defla",
        "45": "Naama",
        "46": "Ain Temouchent",
        "47": "Ghardaia",
        "48": "Relizane",
        "51": "Ouled Djellal",
        "53": "In Salah",
        "55": "Touggourt",
        "56": "Djanet",
    }
)

# Wilayas with no known stop desk locations. Shown as a footnote, never as
# selectable options.
UNKNOWN_WILAYAS: Mapping[str, str] = MappingProxyType(
    {
        "54": "In Guezzam",
        "58": "El Meniaa",
    }
)


def wilaya_name(key: str | int) -> str | None:
    """Return the display name for a wilaya key, or None if it has none."""
    return WILAYA_NAMES.get(str(key))


def wilaya_sort_key(key: str) -> tuple[int, int, str]:
    """Order numeric keys numerically ("2" before "16"), others after, by text."""
    if key.isdigit():
        return (0, int(key), key)
    return (1, 0, key)
