"""Fuzzy commune matcher.

Given a CommuneIndex and a free-text query (typically re-run on every
keystroke), return the best matching communes.

High-level idea:
1) Normalize every commune name once, when the matcher is built
2) Normalize the query the same way (accents and case folded)
3) Score every indexed name with a bounded fuzzy dissimilarity
4) Keep candidates within the threshold, best first, capped at `limit`

The matcher is a pure function of (index, query): building is the only
expensive step, and it only needs repeating when the index itself changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .fuzzy import score_candidates
from .gazetteer import CommuneIndex, CommuneRecord
from .normalization import normalize

# Policy constants tuned for a dataset of a few thousand communes.
DEFAULT_THRESHOLD = 0.3
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class MatchResult:
    """One ranked match. Lower `score` is better (0.0 is exact)."""

    record: CommuneRecord
    key: str
    score: float


@dataclass(frozen=True)
class _IndexedName:
    key: str
    normalized_name: str
    record: CommuneRecord


class CommuneMatcher:
    """Fuzzy search over the normalized names of a CommuneIndex."""

    def __init__(
        self,
        index: CommuneIndex,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ):
        """Build the search index.

        Args:
            index: Loaded CommuneIndex.
            threshold: Maximum dissimilarity (0..1) for a candidate to match.
            limit: Maximum number of results returned per query.
        """
        if threshold < 0.0 or threshold > 1.0:
            raise ValueError("threshold must be in range [0, 1]")
        if limit < 1:
            raise ValueError("limit must be >= 1")

        self.index = index
        self.threshold = float(threshold)
        self.limit = int(limit)

        entries: list[_IndexedName] = []
        for key, record in index.items():
            normalized = normalize(record.name).strip()
            # Names that normalize to nothing can never be matched.
            if not normalized:
                continue
            entries.append(_IndexedName(key, normalized, record))

        self._entries = tuple(entries)
        self._names = [e.normalized_name for e in entries]

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, text: str) -> list[MatchResult]:
        """Return the best matches for `text`, best first.

        Returns an empty list for an empty/whitespace query or when nothing is
        within the threshold. At most `limit` results are returned, so callers
        must not assume every match is included.
        """
        query = normalize(text).strip()
        if not query:
            return []

        scored = list(score_candidates(query, self._names, threshold=self.threshold))

        # `sorted` is stable and candidates arrive in index order, so ties keep
        # the original dataset order.
        scored = sorted(scored, key=lambda item: item[1])[: self.limit]

        results: list[MatchResult] = []
        for pos, score in scored:
            entry = self._entries[pos]
            results.append(MatchResult(record=entry.record, key=entry.key, score=score))
        return results
