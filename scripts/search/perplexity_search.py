"""
Perplexity Search Integration for Merch Style Research

Provides live web research for niche style patterns: what typography,
colors and moods are currently selling to a niche's audience on
print-on-demand marketplaces.

Usage:
    from search.perplexity_search import create_perplexity_search

    searcher = create_perplexity_search()
    if searcher:
        result = searcher.search_niche_style("fishing")
        print(result.content)
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from llm.claude_client import CallStatus

# Load environment variables
load_dotenv(Path.home() / ".env")

logger = logging.getLogger(__name__)


class SearchType(Enum):
    """Types of searches for merch research."""
    NICHE_STYLE = "niche_style"


SYSTEM_PROMPTS = {
    SearchType.NICHE_STYLE: """You are a merchandise design researcher. Your job is to discover CURRENT visual style patterns for specific niches by analyzing what's selling in that market.

You may receive context about what has historically worked. Use it as background, but prioritize discovering what's CURRENTLY trending - styles evolve.

RESPOND ONLY WITH VALID JSON - no markdown, no explanation, just the JSON object.""",
}


@dataclass
class SearchResult:
    """Result from Perplexity search."""
    query: str
    search_type: SearchType
    content: str
    status: CallStatus
    citations: List[str] = field(default_factory=list)
    raw_response: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == CallStatus.OK


class PerplexitySearch:
    """
    Perplexity API integration for real-time merch research.

    Used for niche style patterns: typography, palette, mood, shirt color.
    """

    API_URL = "https://api.perplexity.ai/chat/completions"
    DEFAULT_MODEL = "sonar"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30
    ):
        """
        Initialize Perplexity search client.

        Args:
            api_key: Perplexity API key (or set PERPLEXITY_API_KEY env var)
            model: Model to use (or MERCH_PERPLEXITY_MODEL, default: sonar)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("PERPLEXITY_API_KEY")
        self.model = model or os.environ.get("MERCH_PERPLEXITY_MODEL") or self.DEFAULT_MODEL
        self.timeout = timeout

        if not self.api_key:
            logger.warning("PERPLEXITY_API_KEY not set. Add it to ~/.env")

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _make_request(
        self,
        messages: List[Dict],
        temperature: float = 0.2,
        max_tokens: int = 1000
    ) -> Dict:
        """Make API request to Perplexity."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens
        }

        response = requests.post(
            self.API_URL,
            headers=headers,
            json=payload,
            timeout=self.timeout
        )

        response.raise_for_status()
        return response.json()

    def search(
        self,
        query: str,
        search_type: SearchType = SearchType.NICHE_STYLE,
        temperature: float = 0.2,
        max_tokens: int = 1000
    ) -> SearchResult:
        """
        Perform a search query.

        Args:
            query: The search query
            search_type: Selects the system prompt
            temperature: Sampling temperature
            max_tokens: Response budget

        Returns:
            SearchResult with content and citations
        """
        if not self.available:
            return SearchResult(
                query=query,
                search_type=search_type,
                content="",
                status=CallStatus.UNAVAILABLE,
                error="PERPLEXITY_API_KEY not configured"
            )

        messages = [
            {"role": "system", "content": SYSTEM_PROMPTS[search_type]},
            {"role": "user", "content": query}
        ]

        try:
            response = self._make_request(messages, temperature=temperature, max_tokens=max_tokens)
        except Exception as e:
            logger.warning("Perplexity %s search failed: %s", search_type.value, e)
            return SearchResult(
                query=query,
                search_type=search_type,
                content="",
                status=CallStatus.CALL_FAILURE,
                error=str(e)
            )

        try:
            content = response["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            return SearchResult(
                query=query,
                search_type=search_type,
                content="",
                status=CallStatus.PARSE_ERROR,
                raw_response=response if isinstance(response, dict) else {},
                error=f"Unexpected response shape: {e}"
            )

        if not content.strip():
            return SearchResult(
                query=query,
                search_type=search_type,
                content="",
                status=CallStatus.PARSE_ERROR,
                raw_response=response,
                error="Empty response from Perplexity"
            )

        return SearchResult(
            query=query,
            search_type=search_type,
            content=content,
            status=CallStatus.OK,
            citations=response.get("citations", []),
            raw_response=response
        )

    def search_niche_style(self, niche: str, context_section: str = "") -> SearchResult:
        """
        Research current style patterns for a niche.

        Args:
            niche: Audience niche to research
            context_section: Stored background context to include

        Returns:
            SearchResult whose content should be a JSON object
        """
        query = f"""Research CURRENT t-shirt design style patterns for the "{niche}" niche.

Look at what's ACTUALLY SELLING RIGHT NOW on Amazon Merch, Etsy, and POD marketplaces.
{context_section}
For the "{niche}" audience, discover:

1. TYPOGRAPHY: What font styles are currently popular? (bold sans-serif, vintage serif, script, etc.)
2. EFFECTS: What design effects are selling? (distressed, clean, gradient, halftone, etc.)
3. COLOR PALETTE: What colors work for this audience? (list 3-5 specific colors)
4. MOOD: What's the emotional tone? (rugged, playful, professional, rebellious, etc.)
5. SHIRT COLOR: What background color sells best? (black, white, navy, heather grey, etc.)
6. AESTHETIC: What's the overall vibe? (1-2 sentence description)

If you notice trends DIFFERENT from the historical context provided, include those - we want to catch emerging shifts.

Return JSON in this exact format:
{{
  "typography": "description of typography that works for {niche}",
  "effects": ["effect1", "effect2"],
  "colorPalette": ["color1", "color2", "color3"],
  "mood": "emotional tone description",
  "shirtColor": "recommended shirt color",
  "aesthetic": "overall visual aesthetic description"
}}"""

        return self.search(query, SearchType.NICHE_STYLE, temperature=0.4, max_tokens=1000)


def create_perplexity_search(api_key: Optional[str] = None) -> Optional[PerplexitySearch]:
    """
    Create Perplexity search client if API key is available.

    Args:
        api_key: Optional API key (falls back to env var)

    Returns:
        PerplexitySearch instance or None if not configured
    """
    key = api_key or os.environ.get("PERPLEXITY_API_KEY")
    if not key:
        return None
    return PerplexitySearch(api_key=key)
