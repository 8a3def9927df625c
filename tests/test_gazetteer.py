import json
import logging

import pytest

from stopdesk.errors import DatasetFormatError
from stopdesk.gazetteer import CommuneIndex, CommuneRecord, parse_communes

from .conftest import DATA_DIR


def test_parses_records(communes):
    assert communes["16"] == CommuneRecord(
        name="Alger Centre", wilaya_id=16, postal_code="16000", has_stop_desk=True
    )
    assert communes["2602"].has_stop_desk is False


def test_preserves_source_order(communes, communes_payload):
    assert list(communes) == list(communes_payload)


def test_skips_malformed_entries(caplog):
    payload = {
        "ok": {"nom": "Oran", "wilaya_id": 31, "code_postal": "31000", "has_stop_desk": 1},
        "no_name": {"wilaya_id": 31, "code_postal": "31000", "has_stop_desk": 1},
        "blank_name": {"nom": "  ", "wilaya_id": 31, "code_postal": "31000", "has_stop_desk": 1},
        "bad_wilaya": {"nom": "X", "wilaya_id": "abc", "code_postal": "1", "has_stop_desk": 1},
        "bad_flag": {"nom": "Y", "wilaya_id": 1, "code_postal": "1", "has_stop_desk": 2},
        "not_an_object": ["Oran"],
    }
    with caplog.at_level(logging.WARNING, logger="stopdesk.gazetteer"):
        index = parse_communes(payload)

    assert list(index) == ["ok"]
    assert "Skipping malformed commune 'bad_flag'" in caplog.text


def test_coerces_loose_types():
    payload = {
        "a": {"nom": " Blida ", "wilaya_id": "9", "code_postal": 9000, "has_stop_desk": True},
    }
    record = parse_communes(payload)["a"]
    assert record == CommuneRecord(name="Blida", wilaya_id=9, postal_code="9000", has_stop_desk=True)


def test_rejects_non_object_payload():
    with pytest.raises(DatasetFormatError):
        parse_communes([{"nom": "Oran"}])


def test_records_are_immutable(communes):
    with pytest.raises(AttributeError):
        communes["16"].has_stop_desk = False  # type: ignore[misc]


def test_from_json_file(tmp_path, communes_payload):
    path = tmp_path / "communes.json"
    path.write_text(json.dumps(communes_payload, ensure_ascii=False), encoding="utf-8")

    index = CommuneIndex.from_json_file(path)
    assert len(index) == len(communes_payload)
    assert index["2601"].name == "Médéa"


def test_bundled_sample_dataset_loads():
    index = CommuneIndex.from_json_file(DATA_DIR / "communes.json")
    assert index["16"].name == "Alger Centre"
    assert index["16"].has_stop_desk is True
