"""Text normalization utilities.

Commune names in the dataset are written in French with accents ("Médéa",
"Sétif", "Aïn Témouchent"), while people typing a query usually skip them.
Normalizing both sides the same way makes matching accent- and case-blind:
- Diacritic-insensitive ("Médéa" vs "Medea")
- Case-insensitive ("MEDEA" vs "medea")

The scorer never normalizes on its own. Callers apply `normalize` to the
indexed names and to the query before comparing them.
"""

from __future__ import annotations

import re
import unicodedata

# Unicode "Combining Diacritical Marks" block.
_COMBINING_MARKS_RE = re.compile(r"[\u0300-\u036f]+")


def strip_diacritics(text: str) -> str:
    """Decompose `text` (NFD) and drop combining marks in U+0300..U+036F.

    Examples:
        "Médéa"        -> "Medea"
        "Aïn Témouchent" -> "Ain Temouchent"
    """
    return _COMBINING_MARKS_RE.sub("", unicodedata.normalize("NFD", text))


def normalize(text: str) -> str:
    """Normalize a string for fuzzy comparison.

    Decomposes the text, strips combining diacritical marks and lowercases it.
    The result is a fixed point: `normalize(normalize(s)) == normalize(s)`.

    Examples:
        "Médéa" -> "medea"
        "MEDEA" -> "medea"

    Args:
        text: Raw input text.

    Returns:
        A normalized string.
    """
    lowered = strip_diacritics(text).lower()

    # Lowercasing can reintroduce a combining mark ("İ" -> "i" + U+0307),
    # so fold once more to keep the function idempotent.
    return strip_diacritics(lowered)
