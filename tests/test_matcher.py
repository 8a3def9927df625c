import pytest

from stopdesk.gazetteer import CommuneIndex, CommuneRecord
from stopdesk.matcher import CommuneMatcher, MatchResult


def _index(names: dict[str, str]) -> CommuneIndex:
    return CommuneIndex(
        {
            key: CommuneRecord(name=name, wilaya_id=1, postal_code="01000", has_stop_desk=True)
            for key, name in names.items()
        }
    )


def test_alger_centre_end_to_end():
    index = CommuneIndex.from_payload(
        {"16": {"nom": "Alger Centre", "wilaya_id": 16, "code_postal": "16000", "has_stop_desk": 1}}
    )
    results = CommuneMatcher(index).search("alger centre")

    assert len(results) == 1
    assert results[0].key == "16"
    assert results[0].record.has_stop_desk is True
    assert results[0].score == 0.0


def test_every_exact_name_ranks_first(communes):
    matcher = CommuneMatcher(communes)
    for key, record in communes.items():
        results = matcher.search(record.name)
        assert results[0] == MatchResult(record=record, key=key, score=0.0)


def test_accent_and_case_insensitive(communes):
    matcher = CommuneMatcher(communes)

    assert matcher.search("MEDEA")[0].key == "2601"
    assert matcher.search("ain temouchent")[0].key == "4601"


def test_tolerates_typos(communes):
    results = CommuneMatcher(communes).search("blda")
    assert results[0].key == "901"
    assert 0.0 < results[0].score <= 0.3


def test_prefix_of_long_name_matches(communes):
    results = CommuneMatcher(communes).search("tizi")
    assert results[0].key == "1501"


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_returns_nothing(communes, query):
    assert CommuneMatcher(communes).search(query) == []


def test_no_candidate_under_threshold(communes):
    assert CommuneMatcher(communes).search("Zzzzxyqv") == []


def test_results_are_sorted_by_score(communes):
    results = CommuneMatcher(communes, threshold=1.0).search("oran")
    scores = [r.score for r in results]
    assert scores == sorted(scores)


def test_caps_results_and_keeps_index_order_for_ties():
    index = _index({f"k{i:02d}": "Oran" for i in range(25)})
    results = CommuneMatcher(index).search("oran")

    assert len(results) == 10
    assert [r.key for r in results] == [f"k{i:02d}" for i in range(10)]


def test_custom_limit():
    index = _index({f"k{i}": "Oran" for i in range(5)})
    assert len(CommuneMatcher(index, limit=3).search("oran")) == 3


def test_zero_threshold_only_accepts_exact_matches(communes):
    matcher = CommuneMatcher(communes, threshold=0.0)
    assert matcher.search("blda") == []
    assert [r.key for r in matcher.search("blida")] == ["901"]


def test_names_that_normalize_to_nothing_are_not_indexed():
    index = _index({"a": "Oran", "b": "\u0301"})
    assert len(CommuneMatcher(index)) == 1


@pytest.mark.parametrize("kwargs", [{"threshold": -0.1}, {"threshold": 1.1}, {"limit": 0}])
def test_rejects_invalid_policy(communes, kwargs):
    with pytest.raises(ValueError):
        CommuneMatcher(communes, **kwargs)
