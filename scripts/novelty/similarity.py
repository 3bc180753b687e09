"""
Phrase Similarity

Word-overlap (Jaccard) similarity between short phrases. Words are split
on whitespace, lowercased, and only words longer than two characters
count, so filler like "a", "of", "my" does not create false overlap.
"""

from typing import FrozenSet, Iterable, Optional

MIN_WORD_LENGTH = 3


def tokenize(text: Optional[str]) -> FrozenSet[str]:
    """Lowercase word set of `text`, words of 3+ characters only."""
    if not text:
        return frozenset()
    return frozenset(w for w in text.lower().split() if len(w) >= MIN_WORD_LENGTH)


def jaccard_similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Jaccard similarity of the word sets of two phrases.

    Returns 0.0 when either side has no qualifying words. Symmetric,
    always within [0, 1].
    """
    words_a = tokenize(a)
    words_b = tokenize(b)
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def max_similarity(candidate: Optional[str], others: Iterable[Optional[str]]) -> float:
    """Highest similarity between `candidate` and any of `others` (0.0 if none)."""
    return max((jaccard_similarity(candidate, other) for other in others), default=0.0)
