from __future__ import annotations

import re
from typing import FrozenSet

_NON_WORD = re.compile(r"\W+")


def token_set(text: str) -> FrozenSet[str]:
    """
    Lower-cased unique tokens, split on runs of non-word characters.
    """
    return frozenset(t for t in _NON_WORD.split(text.lower()) if t)


def jaccard_sets(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """
    Jaccard similarity of two token sets. Empty sets carry no signal.
    """
    if not a or not b:
        return 0.0
    shared = len(a & b)
    return shared / (len(a) + len(b) - shared)


def jaccard(text_a: str, text_b: str) -> float:
    return jaccard_sets(token_set(text_a), token_set(text_b))
