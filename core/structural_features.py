"""
Structural Feature Extractor
Turns a declaration body into a bag of keyword and punctuation counts.
"""

import re
from typing import List, Optional

KEYWORDS = (
    'public', 'private', 'protected', 'static', 'final', 'abstract',
    'class', 'interface', 'extends', 'implements', 'throws',
    'if', 'else', 'for', 'while', 'switch', 'case', 'try', 'catch',
    'return', 'new', 'this', 'super',
)

# Always reported, even with a zero count.
PUNCTUATION = (
    ('openBrace', '{'),
    ('closeBrace', '}'),
    ('openParen', '('),
    ('closeParen', ')'),
    ('semicolon', ';'),
)

_WHITESPACE = re.compile(r'\s+')


def normalize_code(code: str) -> str:
    return _WHITESPACE.sub(' ', code).lower()


def count_occurrences(text: str, pattern: str) -> int:
    """Count non-overlapping occurrences of pattern in text."""
    if not pattern:
        return 0
    count = 0
    index = text.find(pattern)
    while index != -1:
        count += 1
        index = text.find(pattern, index + len(pattern))
    return count


def extract_features(code: Optional[str]) -> List[str]:
    """Return ordered ``feature:count`` tokens for a piece of source code."""
    normalized = normalize_code(code or '')
    features = []
    for keyword in KEYWORDS:
        count = count_occurrences(normalized, keyword)
        if count > 0:
            features.append(f'{keyword}:{count}')
    for label, symbol in PUNCTUATION:
        features.append(f'{label}:{count_occurrences(normalized, symbol)}')
    return features


def feature_similarity(features1: List[str], features2: List[str]) -> float:
    """Share of tokens present in both lists, over the longer list.

    A feature counts as common only when its count matches too.
    """
    if not features1 and not features2:
        return 1.0
    if not features1 or not features2:
        return 0.0
    present = set(features2)
    common = sum(1 for feature in features1 if feature in present)
    return common / max(len(features1), len(features2))


def structural_similarity(code1: Optional[str], code2: Optional[str]) -> float:
    if code1 is None or code2 is None:
        return 1.0 if code1 is code2 else 0.0
    return feature_similarity(extract_features(code1), extract_features(code2))
