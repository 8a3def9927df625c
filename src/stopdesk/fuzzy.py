"""Fuzzy scoring utilities.

We use fuzzy matching to handle common user input issues:
- Typos ("Bilda" vs "Blida")
- Partial input while typing ("tizi" vs "tizi ouzou")
- Minor spacing/word-order differences

Scores are *dissimilarities* on a 0.0..1.0 scale: 0.0 is an exact match and
1.0 is completely dissimilar. They are derived from rapidfuzz's `WRatio`,
which blends a Levenshtein ratio with partial (substring) and token-based
alignment, so a prefix of a long name still scores well while an exact name
always scores best.

Implementation notes:
- This module depends on `rapidfuzz`, which is fast and lightweight.
- Inputs must already be normalized (see `normalization.normalize`).
"""

from __future__ import annotations

from typing import Iterable, Iterator

from rapidfuzz import fuzz, process


def _check_threshold(threshold: float) -> None:
    if threshold < 0.0 or threshold > 1.0:
        raise ValueError("threshold must be in range [0, 1]")


def to_dissimilarity(similarity: float) -> float:
    """Convert a rapidfuzz similarity (0..100) into a dissimilarity (0..1)."""
    return round(1.0 - float(similarity) / 100.0, 6)


def dissimilarity(query: str, candidate: str) -> float:
    """Return the dissimilarity (0..1) between two normalized strings."""
    return to_dissimilarity(fuzz.WRatio(query, candidate))


def score_candidates(
    query: str,
    keys: Iterable[str],
    *,
    threshold: float,
) -> Iterator[tuple[int, float]]:
    """Yield `(position, score)` for every key within the threshold.

    Keys are visited in input order, so the output is already sorted by
    position. Callers that rank by score should use a stable sort to keep that
    order among ties.

    Args:
        query: Normalized query string.
        keys: Iterable of normalized candidate keys.
        threshold: Maximum dissimilarity (0..1) to accept.
    """
    _check_threshold(threshold)

    # rapidfuzz works on a 0..100 similarity scale; translate the cutoff once
    # so candidates below it are rejected inside the C extension.
    cutoff = round((1.0 - threshold) * 100.0, 6)

    # `extract_iter` yields: (choice, score, index)
    for _choice, score, idx in process.extract_iter(
        query, keys, scorer=fuzz.WRatio, score_cutoff=cutoff
    ):
        yield idx, to_dissimilarity(score)
