"""
Fuzzy text matching for tour search.

Scores a single query token against a text field using exact, substring
and prefix checks before falling back to Levenshtein edit distance.
All functions are pure and total.
"""

import re
from typing import Optional

_NON_WORD = re.compile(r"[^\w\s]")

SCORE_EXACT = 100
SCORE_CONTAINS = 60
SCORE_STARTS_WITH = 50
SCORE_WORD_PREFIX = 40
SCORE_ONE_EDIT = 30
SCORE_TWO_EDITS = 20


def normalize(value: Optional[str]) -> str:
    """Lowercase, drop punctuation/symbols, trim. None becomes ""."""
    if not value:
        return ""
    return _NON_WORD.sub("", value.lower()).strip()


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between a and b.

    Table rows follow b, columns follow a. Substitution costs 1.
    """
    a = a or ""
    b = b or ""
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            indicator = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,
                matrix[j - 1][i] + 1,
                matrix[j - 1][i - 1] + indicator,
            )

    return matrix[len(b)][len(a)]


def match_score(query: Optional[str], text: Optional[str]) -> int:
    """
    Score how well query matches text. First matching rule wins:

        equal                           100
        text contains query              60
        text starts with query           50
        a word of text starts with query 40
        closest word within 1 edit       30
        closest word within 2 edits      20

    The 50 and 40 rules can never fire since both imply containment.
    They are kept so the score table stays as published.
    """
    q = normalize(query)
    t = normalize(text)

    if not q or not t:
        return 0

    if t == q:
        return SCORE_EXACT
    if q in t:
        return SCORE_CONTAINS
    if t.startswith(q):
        return SCORE_STARTS_WITH

    words = t.split()
    if any(word.startswith(q) for word in words):
        return SCORE_WORD_PREFIX

    min_distance = min(edit_distance(q, word) for word in words)
    if min_distance <= 1:
        return SCORE_ONE_EDIT
    if min_distance == 2:
        return SCORE_TWO_EDITS

    return 0
