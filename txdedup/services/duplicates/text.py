"""String normalization and similarity scoring."""

import re

from rapidfuzz.distance import Levenshtein

_NON_ALNUM = re.compile(r"[\W_]+")


def normalize_text(value: str) -> str:
    """Lower-case a string and reduce it to letters, digits and single spaces.

    Runs of any other characters collapse to one space, and the result is
    trimmed, so "PAYMENT TO  Starbucks #12" becomes "payment to starbucks 12".
    """
    return _NON_ALNUM.sub(" ", value.lower()).strip()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (unit cost) between the normalized strings."""
    return Levenshtein.distance(normalize_text(a), normalize_text(b))


def similarity(a: str, b: str) -> float:
    """Similarity between two strings in the range 0.0-1.0.

    Identical strings after normalization score 1.0. If only one side is empty
    after normalization the score is 0.0. Otherwise the score is
    ``1 - distance / max(len(a), len(b))`` over the normalized strings.
    """
    norm_a = normalize_text(a)
    norm_b = normalize_text(b)

    if norm_a == norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0

    distance = Levenshtein.distance(norm_a, norm_b)
    return 1.0 - distance / max(len(norm_a), len(norm_b))


def similarity_percent(a: str, b: str) -> float:
    """Similarity as a percentage (0-100) for threshold checks."""
    return similarity(a, b) * 100.0
