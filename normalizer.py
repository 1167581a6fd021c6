"""
QUERY NORMALIZER - Canonical form for plate searches
====================================================

Turns raw user input and raw record fields into the one form that every
comparison in the search engine works on:

1. trim leading/trailing whitespace
2. German umlauts and eszett -> ASCII digraphs (before case folding)
3. collapse whitespace runs to a single space
4. lowercase

Query and record fields MUST go through the same function.
"""

import re
from typing import Optional

# Uppercase forms keep a lowercase second letter; lowercasing fixes the rest
UMLAUT_TRANSLITERATION = str.maketrans({
    'ä': 'ae',
    'ö': 'oe',
    'ü': 'ue',
    'ß': 'ss',
    'Ä': 'Ae',
    'Ö': 'Oe',
    'Ü': 'Ue',
})

# Digraphs that transliteration can produce out of a single raw character
TRANSLITERATION_DIGRAPHS = ('ae', 'oe', 'ue', 'ss')

_WHITESPACE_RUN = re.compile(r'\s+')


def normalize(raw: Optional[str]) -> str:
    """
    Normalize raw text for comparison.

    Args:
        raw: Query or record field as typed/stored

    Returns:
        Normalized string, possibly empty
    """
    if not raw:
        return ""
    text = raw.strip()
    text = text.translate(UMLAUT_TRANSLITERATION)
    text = _WHITESPACE_RUN.sub(' ', text)
    return text.lower()
