import logging

import pytest

from stopdesk.desks import (
    DeskDirectory,
    DeskRecord,
    desks_for,
    directory_summary,
    parse_desks,
    unknown_wilayas,
    wilaya_options,
)
from stopdesk.errors import DatasetFormatError
from stopdesk.wilayas import WILAYA_NAMES, wilaya_name


def test_lookup_preserves_source_order(desks):
    assert [d.name for d in desks_for(desks, "16")] == ["Alger Centre", "Bab Ezzouar", "Cheraga"]


def test_lookup_accepts_int_keys(desks):
    assert desks_for(desks, 9) == (DeskRecord(name="Blida", postal_code="09000", maps_link=None),)


def test_unknown_wilaya_yields_no_desks(desks):
    assert desks_for(desks, "99") == ()


def test_duplicates_are_kept():
    directory = parse_desks({"31": [{"name": "Oran", "postalCode": "31000"}] * 2})
    assert len(directory.desks_for("31")) == 2


def test_maps_link_is_optional(desks):
    first, second, _ = desks.desks_for("16")
    assert first.maps_link == "https://maps.example/ac"
    assert second.maps_link is None


def test_options_skip_wilayas_without_a_name(desks):
    options = wilaya_options(desks)

    keys = [o.key for o in options]
    assert keys == ["9", "16", "31"]
    assert "54" not in keys and "58" not in keys
    assert options[1].label == "16. Alger"


def test_unknown_wilayas_footnote():
    assert [(w.key, w.name) for w in unknown_wilayas()] == [("54", "In Guezzam"), ("58", "El Meniaa")]
    assert all(w.key not in WILAYA_NAMES for w in unknown_wilayas())


def test_summary_counts_every_wilaya_and_desk(desks):
    summary = directory_summary(desks)
    assert summary.wilaya_count == 5
    assert summary.desk_count == 8


def test_skips_malformed_desks(caplog):
    payload = {
        "16": [
            {"name": "Alger Centre", "postalCode": "16000"},
            {"postalCode": "16001"},
            "Cheraga",
            {"name": "Kouba", "postalCode": None},
        ],
        "9": "Blida",
    }
    with caplog.at_level(logging.WARNING, logger="stopdesk.desks"):
        directory = parse_desks(payload)

    assert list(directory) == ["16"]
    assert [d.name for d in directory["16"]] == ["Alger Centre"]
    assert "Skipping wilaya '9'" in caplog.text


def test_rejects_non_object_payload():
    with pytest.raises(DatasetFormatError):
        parse_desks([])


def test_directory_is_read_only(desks):
    with pytest.raises(TypeError):
        desks["16"] = ()  # type: ignore[index]


def test_wilaya_name_table():
    assert wilaya_name(26) == "Medea"
    assert wilaya_name("54") is None
    assert len(WILAYA_NAMES) == 51
    with pytest.raises(TypeError):
        WILAYA_NAMES["54"] = "In Guezzam"  # type: ignore[index]


def test_empty_directory_has_no_options():
    assert wilaya_options(DeskDirectory()) == []
