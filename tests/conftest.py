from __future__ import annotations

from pathlib import Path

import pytest

from stopdesk.desks import DeskDirectory
from stopdesk.gazetteer import CommuneIndex

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@pytest.fixture
def communes_payload() -> dict:
    return {
        "16": {"nom": "Alger Centre", "wilaya_id": 16, "code_postal": "16000", "has_stop_desk": 1},
        "901": {"nom": "Blida", "wilaya_id": 9, "code_postal": "09000", "has_stop_desk": 1},
        "2601": {"nom": "Médéa", "wilaya_id": 26, "code_postal": "26000", "has_stop_desk": 1},
        "2602": {"nom": "Berrouaghia", "wilaya_id": 26, "code_postal": "26100", "has_stop_desk": 0},
        "3101": {"nom": "Oran", "wilaya_id": 31, "code_postal": "31000", "has_stop_desk": 1},
        "4601": {"nom": "Aïn Témouchent", "wilaya_id": 46, "code_postal": "46000", "has_stop_desk": 1},
        "1501": {"nom": "Tizi Ouzou", "wilaya_id": 15, "code_postal": "15000", "has_stop_desk": 0},
    }


@pytest.fixture
def desks_payload() -> dict:
    return {
        "16": [
            {"name": "Alger Centre", "postalCode": "16000", "mapsLink": "https://maps.example/ac"},
            {"name": "Bab Ezzouar", "postalCode": "16111"},
            {"name": "Cheraga", "postalCode": "16002", "mapsLink": "https://maps.example/ch"},
        ],
        "9": [{"name": "Blida", "postalCode": "09000"}],
        "31": [
            {"name": "Oran", "postalCode": "31000"},
            {"name": "Bir El Djir", "postalCode": "31130"},
        ],
        "54": [{"name": "In Guezzam", "postalCode": "54000"}],
        "58": [{"name": "El Meniaa", "postalCode": "58000"}],
    }


@pytest.fixture
def communes(communes_payload) -> CommuneIndex:
    return CommuneIndex.from_payload(communes_payload)


@pytest.fixture
def desks(desks_payload) -> DeskDirectory:
    return DeskDirectory.from_payload(desks_payload)
