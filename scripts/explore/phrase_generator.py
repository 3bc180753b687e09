"""
Phrase Generator

Short shirt phrase for a niche: Claude first, fixed templates when Claude
is unavailable or its answer is unusable.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from llm.claude_client import CallStatus, ClaudeClient
from validation.ascii_cleaner import clean_to_ascii

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATES = (
    "{niche} Life",
    "Proud {niche}",
    "{niche} Mode",
    "Living That {niche} Life",
    "{niche} Vibes Only",
)

MAX_PHRASE_WORDS = 6


@dataclass
class PhraseResult:
    status: CallStatus
    phrase: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.OK


def risk_descriptor(risk_level: int) -> str:
    if risk_level > 70:
        return "Can be edgy/viral"
    if risk_level > 30:
        return "Clever but safe"
    return "Family-friendly and evergreen"


def title_case(text: str) -> str:
    """Capitalize the first letter of each word, leave the rest alone."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def clean_phrase(raw: str) -> str:
    """First line of a reply, cleaned to ASCII with quotes stripped. Wording is kept as is."""
    line = raw.strip().splitlines()[0] if raw.strip() else ""
    return clean_to_ascii(line).strip("\"'").strip()


class PhraseGenerator:
    """Generates a shirt phrase for a niche."""

    def __init__(self, llm: Optional[ClaudeClient] = None, rng: Optional[random.Random] = None):
        self.llm = llm
        self.rng = rng or random.Random()

    def generate(self, niche: str, risk_level: int = 50) -> str:
        result = self.generate_with_ai(niche, risk_level)
        if result.ok:
            return result.phrase
        if result.status != CallStatus.UNAVAILABLE:
            logger.warning("Phrase generation failed for '%s': %s", niche, result.error)
        return self.fallback_phrase(niche)

    def generate_with_ai(self, niche: str, risk_level: int) -> PhraseResult:
        if self.llm is None or not self.llm.available:
            return PhraseResult(status=CallStatus.UNAVAILABLE, error="Claude not configured")

        prompt = f"""Generate ONE short, punchy t-shirt phrase for the "{niche}" niche.

Requirements:
- 2-5 words
- Would look great on a t-shirt
- Resonates with the {niche} community
- {risk_descriptor(risk_level)}

Return ONLY the phrase, no quotes, no explanation."""

        response = self.llm.complete(prompt, max_tokens=200)
        if not response.ok:
            return PhraseResult(status=response.status, error=response.error)

        phrase = clean_phrase(response.text)
        if not phrase or len(phrase.split()) > MAX_PHRASE_WORDS:
            return PhraseResult(status=CallStatus.PARSE_ERROR, error=f"Unusable phrase: {response.text[:80]!r}")
        return PhraseResult(status=CallStatus.OK, phrase=phrase)

    def fallback_phrase(self, niche: str) -> str:
        template = self.rng.choice(FALLBACK_TEMPLATES)
        return title_case(template.format(niche=niche))
