"""
Cross-Pollination

Blends two niches into one concept for someone who identifies with both
communities ("sourdough baker" x "amateur astronomy").
"""

import logging
from dataclasses import dataclass
from typing import Optional

from llm.claude_client import ClaudeClient, extract_json_text

from .phrase_generator import MAX_PHRASE_WORDS, clean_phrase

logger = logging.getLogger(__name__)


@dataclass
class BlendedConcept:
    niche_a: str
    niche_b: str
    phrase: str
    concept: str


class CrossPollinator:
    """Claude-backed niche blending. Returns None whenever Claude can't help."""

    def __init__(self, llm: Optional[ClaudeClient] = None):
        self.llm = llm

    def blend(self, niche_a: str, niche_b: str) -> Optional[BlendedConcept]:
        if self.llm is None or not self.llm.available:
            return None

        prompt = f"""Create a t-shirt design concept that combines these two niches:
- Niche A: {niche_a}
- Niche B: {niche_b}

The design should appeal to someone who identifies with BOTH communities.

Return JSON:
{{
  "phrase": "2-5 word t-shirt text",
  "concept": "brief description of why this works"
}}

Only return the JSON, nothing else."""

        response = self.llm.complete(prompt, max_tokens=300)
        if not response.ok:
            logger.warning("Cross-pollination failed for %s x %s: %s", niche_a, niche_b, response.error)
            return None

        data = extract_json_text(response.text, expect="object")
        phrase = clean_phrase(data.get("phrase", "")) if data and isinstance(data.get("phrase"), str) else ""
        if not phrase or len(phrase.split()) > MAX_PHRASE_WORDS:
            logger.warning("Unparseable cross-pollination for %s x %s", niche_a, niche_b)
            return None

        concept = data.get("concept")
        return BlendedConcept(
            niche_a=niche_a,
            niche_b=niche_b,
            phrase=phrase,
            concept=concept.strip() if isinstance(concept, str) else ""
        )
