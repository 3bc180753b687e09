"""
Validation module for merch listing text.

- ascii_cleaner: Unicode to printable ASCII
- banned_words: categorised banned vocabulary
- text_normalizer: combined, idempotent normalization
"""

from .ascii_cleaner import (
    UNICODE_REPLACEMENTS,
    clean_to_ascii,
    collapse_whitespace,
    has_emojis,
    has_non_ascii,
    find_non_ascii_chars,
    is_valid_ascii
)

from .banned_words import (
    MERCH_BANNED_WORDS,
    ALL_MERCH_BANNED_WORDS,
    find_banned_words,
    contains_banned_words,
    remove_banned_words
)

from .text_normalizer import normalize_text

__all__ = [
    # ASCII cleaner
    "UNICODE_REPLACEMENTS",
    "clean_to_ascii",
    "collapse_whitespace",
    "has_emojis",
    "has_non_ascii",
    "find_non_ascii_chars",
    "is_valid_ascii",
    # Banned words
    "MERCH_BANNED_WORDS",
    "ALL_MERCH_BANNED_WORDS",
    "find_banned_words",
    "contains_banned_words",
    "remove_banned_words",
    # Normalizer
    "normalize_text"
]
