"""
ASCII Cleaner for Merch Listing Text

Marketplace listing fields accept printable ASCII only. This module maps
Unicode punctuation, spaces, symbols and accented letters to ASCII
equivalents and drops emoji and anything else outside 0x20-0x7E.

Usage:
    from validation.ascii_cleaner import clean_to_ascii

    clean_to_ascii("Café “Vibes” — ☕")   # 'Cafe "Vibes" -'
"""

import re
import unicodedata
from types import MappingProxyType
from typing import List, Optional


UNICODE_REPLACEMENTS = MappingProxyType({
    # Smart quotes
    "“": '"', "”": '"', "„": '"',
    "‘": "'", "’": "'", "‚": "'",
    "‹": "'", "›": "'",
    "«": '"', "»": '"',
    # Dashes
    "—": "-", "–": "-", "−": "-", "‐": "-",
    "‑": "-", "‒": "-", "―": "-",
    "…": "...",
    # Space variants
    "\u00a0": " ", "\u2002": " ", "\u2003": " ", "\u2004": " ",
    "\u2005": " ", "\u2006": " ", "\u2007": " ", "\u2008": " ",
    "\u2009": " ", "\u200a": " ", "\u202f": " ", "\u205f": " ",
    "\u3000": " ", "\u200b": "",
    # Bullets
    "•": "-", "‣": "-", "⁃": "-", "◦": "-",
    "·": "-", "∙": "-",
    # Marks removed outright
    "™": "", "®": "", "©": "", "℠": "",
    # Fractions
    "¼": "1/4", "½": "1/2", "¾": "3/4",
    "⅓": "1/3", "⅔": "2/3",
    # Currency
    "€": "EUR", "£": "GBP", "¥": "JPY",
    # Math
    "×": "x", "÷": "/", "≠": "!=", "≤": "<=",
    "≥": ">=", "∞": "infinity",
    # Arrows
    "→": "->", "←": "<-", "↔": "<->", "⇒": "=>",
    # Letters NFKD does not decompose
    "ß": "ss", "Æ": "AE", "æ": "ae", "Œ": "OE",
    "œ": "oe", "Ø": "O", "ø": "o", "Ł": "L", "ł": "l",
})

# Emoji blocks, variation selectors, ZWJ and skin-tone modifiers
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F700-\U0001F77F"
    "\U0001F780-\U0001F7FF"
    "\U0001F800-\U0001F8FF"
    "\U0001F900-\U0001F9FF"
    "\U0001FA00-\U0001FA6F"
    "\U0001FA70-\U0001FAFF"
    "\U00002700-\U000027BF"
    "\U00002600-\U000026FF"
    "\U0001F100-\U0001F1FF"
    "\U0001F200-\U0001F2FF"
    "\U0000FE00-\U0000FE0F"
    "\u200d"
    "]"
)

NON_PRINTABLE_PATTERN = re.compile(r"[^\x20-\x7E]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _fold_accents(text: str) -> str:
    """Fold accented Latin letters to their base letter."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def clean_to_ascii(text: Optional[str]) -> str:
    """
    Convert text to printable ASCII.

    Steps: table replacements, accent folding, emoji removal, whitespace
    collapse, then anything left outside 0x20-0x7E is dropped.

    Args:
        text: Arbitrary text (None is treated as empty)

    Returns:
        Cleaned single-line ASCII string
    """
    if not text:
        return ""

    cleaned = str(text)
    for unicode_char, ascii_char in UNICODE_REPLACEMENTS.items():
        if unicode_char in cleaned:
            cleaned = cleaned.replace(unicode_char, ascii_char)

    cleaned = EMOJI_PATTERN.sub("", cleaned)
    cleaned = _fold_accents(cleaned)
    cleaned = WHITESPACE_PATTERN.sub(" ", cleaned)
    cleaned = NON_PRINTABLE_PATTERN.sub("", cleaned)

    return collapse_whitespace(cleaned)


def has_emojis(text: Optional[str]) -> bool:
    if not text:
        return False
    return bool(EMOJI_PATTERN.search(text))


def has_non_ascii(text: Optional[str]) -> bool:
    if not text:
        return False
    return bool(NON_PRINTABLE_PATTERN.search(text))


def find_non_ascii_chars(text: Optional[str]) -> List[str]:
    """Unique characters outside printable ASCII, in order of appearance."""
    if not text:
        return []
    found = []
    for char in NON_PRINTABLE_PATTERN.findall(text):
        if char not in found:
            found.append(char)
    return found


def is_valid_ascii(text: Optional[str]) -> bool:
    if not text:
        return True
    return NON_PRINTABLE_PATTERN.search(text) is None
