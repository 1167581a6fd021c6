# similarity.py

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance: minimum single-char inserts, deletes or substitutions."""
    return Levenshtein.distance(a, b)
