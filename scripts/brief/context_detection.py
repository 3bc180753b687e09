"""
Brief context detection: niche from topic, seasonal modifier, cross-niche blend.

All three are keyword scans over fixed tables (see brief.tables).
"""

import re
from functools import lru_cache
from typing import List, Optional

from .tables import BriefTables, DEFAULT_TABLES


@lru_cache(maxsize=512)
def _prefix_pattern(keyword: str) -> "re.Pattern":
    # Word start only, so "mom" still matches "moms" and "mommy"
    return re.compile(r"(?<![a-z0-9])" + re.escape(keyword))


@lru_cache(maxsize=512)
def _word_pattern(keyword: str) -> "re.Pattern":
    # Whole word with an optional plural
    return re.compile(r"(?<![a-z0-9])" + re.escape(keyword) + r"s?(?![a-z0-9])")


def extract_niche_from_topic(topic: Optional[str], tables: BriefTables = DEFAULT_TABLES) -> str:
    """
    Map a topic to a niche.

    Known keywords map through the topic table; otherwise the first word
    longer than three letters; otherwise 'general'.
    """
    topic = topic or ""
    topic_lower = topic.lower()

    for keyword, niche in tables.topic_niche_map:
        if keyword in topic_lower:
            return niche

    for word in topic.split():
        if len(word) > 3:
            return word.lower()
    return "general"


def detect_seasonal(text: str, topic: Optional[str] = None, tables: BriefTables = DEFAULT_TABLES) -> Optional[str]:
    """First season whose keywords appear in the text or topic."""
    combined = f"{text} {topic or ''}".lower()
    for season, keywords in tables.seasonal_keywords:
        if any(_prefix_pattern(k).search(combined) for k in keywords):
            return season
    return None


def detect_cross_niche(
    primary_niche: str,
    text: str,
    topic: Optional[str] = None,
    tables: BriefTables = DEFAULT_TABLES
) -> List[str]:
    """
    Other niches the text also speaks to.

    The primary niche never appears in its own blend: an indicator key is
    skipped when it equals the primary niche or is a word within it
    ("dog" for "dog lovers").
    """
    primary = (primary_niche or "").lower().strip()
    combined = f"{text} {topic or ''}".lower()
    detected = []

    for niche, indicators in tables.cross_niche_indicators.items():
        if niche == primary or _word_pattern(niche).search(primary):
            continue
        if any(_word_pattern(i).search(combined) for i in indicators):
            detected.append(niche)

    return detected
