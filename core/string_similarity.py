"""
String Similarity Module
Edit-distance and token-set similarity between two strings.
"""

import re
from typing import Optional, Set

_NON_TOKEN_CHARS = re.compile(r'[^a-zA-Z0-9_]')


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between a and b (insert, delete and substitute all cost 1)."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def normalized_similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Similarity between 0.0 and 1.0 derived from the Levenshtein distance.

    The exact-equality check is case-sensitive, the distance itself is
    computed on lower-cased text. A missing (None) value on one side
    only scores 0.0.
    """
    if a is None or b is None:
        return 1.0 if a is b else 0.0
    if a == b:
        return 1.0
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    distance = levenshtein(a.lower(), b.lower())
    return max(0.0, 1.0 - distance / max_length)


def tokenize(text: str) -> Set[str]:
    return set(_NON_TOKEN_CHARS.sub(' ', text).lower().split())


def jaccard_token_similarity(a: Optional[str], b: Optional[str]) -> float:
    """Jaccard coefficient over the distinct identifier-like tokens of a and b."""
    if a is None or b is None:
        return 1.0 if a is b else 0.0
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)
    if not tokens_a and not tokens_b:
        return 1.0
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)
