"""
Niche Style Researcher

Live style research for a niche, enriched by what we already know:

1. Session cache (short TTL) avoids repeat calls within a session
2. Stored context from the niche style store is added to the prompt as
   background, not as a constraint
3. Live research through Perplexity is always the primary signal
4. Agreement with stored data sets confidence (agrees 0.9, mixed 0.75,
   disagrees 0.65, nothing stored 0.75)
5. Findings are written back best-effort; a failed write is only logged

Any failure returns the minimal fallback style, never an exception.

Usage:
    from style.niche_style_researcher import create_niche_style_researcher

    researcher = create_niche_style_researcher()
    style = researcher.research("fishing")
    print(style.typography, style.confidence)
"""

import logging
from dataclasses import replace
from typing import Optional

from llm.claude_client import extract_json_text
from search.perplexity_search import PerplexitySearch, create_perplexity_search
from storage.niche_style_store import NicheStyleStore, StoredStyleContext
from storage.session_cache import TTLCache

from .models import NicheStyleResult, StoredDataMeta, minimal_fallback

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 10 * 60
BASE_RESEARCH_CONFIDENCE = 0.75

AGREEMENT_CONFIDENCE = {
    "agrees": 0.9,
    "disagrees": 0.65,
    "novel": 0.75,
    "no-stored-data": BASE_RESEARCH_CONFIDENCE,
}


def build_context_section(context: Optional[StoredStyleContext]) -> str:
    """Background block for the research prompt ("" when nothing is stored)."""
    if context is None:
        return ""

    last = context.last_analyzed_at.strftime("%Y-%m-%d") if context.last_analyzed_at else "unknown"
    return f"""
BACKGROUND CONTEXT (from our historical data - use as reference, not constraint):
- Typography that has worked: {', '.join(context.typography[:3]) or 'unknown'}
- Colors that have worked: {', '.join(context.colors[:4]) or 'unknown'}
- Mood/aesthetic that resonated: {', '.join(context.moods[:2]) or 'unknown'}
- Data confidence: {round(context.confidence * 100)}%
- Last analyzed: {last}

NOTE: This is historical data. Current trends may differ. Prioritize what you find is selling NOW.
"""


def _overlaps(value: str, stored: list) -> bool:
    value = value.lower()
    return any(s.lower() in value or value in s.lower() for s in stored if s)


def score_agreement(result: NicheStyleResult, context: Optional[StoredStyleContext]) -> str:
    """Compare fresh research with stored typography and mood."""
    if context is None or not (context.typography or context.moods):
        return "no-stored-data"

    typography_match = _overlaps(result.typography, context.typography)
    mood_match = _overlaps(result.mood, context.moods)

    if typography_match and mood_match:
        return "agrees"
    if not typography_match and not mood_match:
        return "disagrees"
    return "novel"


class NicheStyleResearcher:
    """Research-backed style defaults for a niche."""

    def __init__(
        self,
        searcher: Optional[PerplexitySearch] = None,
        store: Optional[NicheStyleStore] = None,
        cache: Optional[TTLCache] = None
    ):
        """
        Args:
            searcher: Perplexity client (None = always minimal fallback)
            store: Stored context and write-back target (optional)
            cache: Session cache (default: 10-minute TTL)
        """
        self.searcher = searcher
        self.store = store
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=CACHE_TTL_SECONDS)

    def research(self, niche: str) -> NicheStyleResult:
        """
        Style defaults for a niche.

        Returns:
            Researched NicheStyleResult, or the minimal fallback
        """
        key = (niche or "").strip().lower()
        if not key:
            return minimal_fallback()

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Session cache hit for niche style '%s'", key)
            return cached

        if self.searcher is None or not self.searcher.available:
            logger.info("Style research unavailable for '%s', using minimal fallback", key)
            return minimal_fallback()

        context = self._fetch_context(key)
        response = self.searcher.search_niche_style(key, build_context_section(context))
        if not response.success:
            logger.warning("Style research failed for '%s': %s", key, response.error)
            return minimal_fallback()

        payload = extract_json_text(response.content, expect="object")
        if payload is None:
            logger.warning("Unparseable style research for '%s'", key)
            return minimal_fallback()

        result = NicheStyleResult.from_research_json(payload, key, BASE_RESEARCH_CONFIDENCE)
        agreement = score_agreement(result, context)
        result = replace(
            result,
            confidence=AGREEMENT_CONFIDENCE[agreement],
            meta=StoredDataMeta(
                stored_context_used=context is not None,
                stored_data_agreement=agreement
            )
        )
        logger.info(
            "Researched style for '%s': %s / %s (%s, %.2f)",
            key, result.typography, result.mood, agreement, result.confidence
        )

        result.meta.written_to_db = self._write_back(key, result, context)
        self.cache.set(key, result)
        return result

    def _fetch_context(self, niche: str) -> Optional[StoredStyleContext]:
        if self.store is None:
            return None
        try:
            return self.store.get_context(niche)
        except Exception as e:
            logger.warning("Failed to fetch stored style context for '%s': %s", niche, e)
            return None

    def _write_back(self, niche: str, result: NicheStyleResult, context: Optional[StoredStyleContext]) -> bool:
        if self.store is None:
            return False
        try:
            self.store.write_back(
                niche=niche,
                typography=result.typography,
                colors=result.color_palette,
                mood=result.mood,
                shirt_color=result.shirt_color,
                aesthetic=result.aesthetic,
                confidence=result.confidence,
                existing=context
            )
            return True
        except Exception as e:
            logger.warning("Style write-back failed for '%s': %s", niche, e)
            return False


def create_niche_style_researcher(
    api_key: Optional[str] = None,
    db_path: Optional[str] = None
) -> NicheStyleResearcher:
    """Researcher wired to Perplexity (if configured) and the SQLite store."""
    return NicheStyleResearcher(
        searcher=create_perplexity_search(api_key),
        store=NicheStyleStore(db_path=db_path)
    )
