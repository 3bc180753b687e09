"""
Text Normalizer

Single entry point that turns arbitrary text into listing-safe text:
printable ASCII only, collapsed whitespace, banned vocabulary removed.
Pure and idempotent, never raises.
"""

import logging
from typing import Iterable, Optional

from .ascii_cleaner import clean_to_ascii
from .banned_words import remove_banned_words

logger = logging.getLogger(__name__)


def normalize_text(text: Optional[str], banned_words: Optional[Iterable[str]] = None) -> str:
    """
    Normalize free text for marketplace listings.

    Args:
        text: Arbitrary input; None or empty yields ""
        banned_words: Vocabulary to strip (default: full merch list)

    Returns:
        ASCII text (0x20-0x7E) with banned words removed
    """
    if text is None:
        return ""
    try:
        return remove_banned_words(clean_to_ascii(str(text)), banned_words)
    except Exception as e:
        logger.error("Text normalization failed: %s", e)
        return ""
