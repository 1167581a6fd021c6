# threshold_policy.py

# (minimum normalized query length, max edit distance), longest first
DISTANCE_STEPS = (
    (9, 3),
    (5, 2),
    (3, 1),
)


def max_distance(query_length: int) -> int:
    """
    Maximum edit distance tolerated for a normalized query of this length.

    0 means fuzzy matching is disabled (queries of 0-2 characters).
    """
    for min_length, distance in DISTANCE_STEPS:
        if query_length >= min_length:
            return distance
    return 0
