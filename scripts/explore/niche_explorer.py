"""
Niche Explorer

Discovers candidate niches and picks one by weighted random selection.

Discovery asks Claude for fresh niches with a focus-area prompt and an
exclusion list. When Claude is unavailable, fails, or answers with
something unparseable, the static pool is used instead: excluded niches
removed, shuffled, truncated. Excluded niches are filtered out of AI
results too, so an excluded niche can never be selected.

Selection is a roulette wheel over multiplicative weights:
- competition: blue_ocean x3, low x2, saturated x0.3
- trend (risk > 50): exploding x2, growing x1.5
- trend (risk <= 50): stable x1.5

Usage:
    from explore.niche_explorer import NicheExplorer, FocusArea

    explorer = NicheExplorer()
    niches = explorer.discover(count=15, exclude_niches={"coffee addict"}, focus_area=FocusArea.EVERGREEN)
    chosen = explorer.select_weighted(niches, risk_level=40)
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from llm.claude_client import CallStatus, ClaudeClient, extract_json_text
from validation.ascii_cleaner import clean_to_ascii

from .niche_pool import ALL_STATIC_NICHES

logger = logging.getLogger(__name__)


class AudienceSize(Enum):
    MASSIVE = "massive"
    LARGE = "large"
    MEDIUM = "medium"
    NICHE = "niche"
    MICRO = "micro"


class TrendDirection(Enum):
    EXPLODING = "exploding"
    GROWING = "growing"
    STABLE = "stable"
    DECLINING = "declining"


class CompetitionLevel(Enum):
    BLUE_OCEAN = "blue_ocean"   # little to no competing product
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SATURATED = "saturated"


class FocusArea(Enum):
    """Which kind of niche discovery should look for."""
    EVERGREEN = "evergreen"
    TRENDING = "trending"
    EMERGING = "emerging"
    SEASONAL = "seasonal"
    RANDOM = "random"


STATIC_SOURCE = "expanded-static"


def _coerce_enum(enum_cls, value: Any, default):
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


@dataclass
class DiscoveredNiche:
    """A candidate niche from discovery or the static pool."""
    niche: str
    description: str
    audience_size: AudienceSize = AudienceSize.MEDIUM
    trend_direction: TrendDirection = TrendDirection.STABLE
    competition_level: CompetitionLevel = CompetitionLevel.MEDIUM
    suggested_phrases: List[str] = field(default_factory=list)
    related_niches: List[str] = field(default_factory=list)
    source: str = STATIC_SOURCE
    discovered_at: datetime = field(default_factory=datetime.now)

    @property
    def is_ai_discovered(self) -> bool:
        return self.source.startswith("ai")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str) -> Optional["DiscoveredNiche"]:
        """Validate one discovery item; None if it has no usable niche name."""
        if not isinstance(data, dict):
            return None
        name = data.get("niche")
        if not isinstance(name, str) or not name.strip():
            return None
        name = name.strip()
        description = data.get("description")
        return cls(
            niche=name,
            description=description.strip() if isinstance(description, str) and description.strip()
            else f"People who identify with {name}",
            audience_size=_coerce_enum(AudienceSize, data.get("audienceSize"), AudienceSize.MEDIUM),
            trend_direction=_coerce_enum(TrendDirection, data.get("trendDirection"), TrendDirection.STABLE),
            competition_level=_coerce_enum(CompetitionLevel, data.get("competitionLevel"), CompetitionLevel.MEDIUM),
            suggested_phrases=[p for p in map(clean_to_ascii, _string_list(data.get("suggestedPhrases"))) if p],
            related_niches=_string_list(data.get("relatedNiches")),
            source=source
        )

    @classmethod
    def from_static(cls, niche: str) -> "DiscoveredNiche":
        return cls(niche=niche, description=f"People who identify with {niche}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "niche": self.niche,
            "description": self.description,
            "audience_size": self.audience_size.value,
            "trend_direction": self.trend_direction.value,
            "competition_level": self.competition_level.value,
            "suggested_phrases": list(self.suggested_phrases),
            "related_niches": list(self.related_niches),
            "source": self.source,
            "discovered_at": self.discovered_at.isoformat()
        }


@dataclass
class DiscoveryResult:
    """Outcome of an AI discovery call."""
    status: CallStatus
    niches: List[DiscoveredNiche] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.OK


def get_current_season(month: Optional[int] = None) -> str:
    """Season name for a calendar month (1-12); current month by default."""
    month = month or datetime.now().month
    if 3 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    if 9 <= month <= 11:
        return "Fall/Autumn"
    return "Winter/Holiday Season"


def focus_prompt(focus_area: FocusArea, risk_level: int, now: Optional[datetime] = None) -> str:
    """Focus-specific instructions for niche discovery."""
    now = now or datetime.now()
    if focus_area == FocusArea.EVERGREEN:
        return """Focus on EVERGREEN niches - timeless interests that people will care about for years.
Think: hobbies, professions, family roles, lifestyle choices, personality types.
Risk level: LOW - these should be safe, proven markets."""
    if focus_area == FocusArea.TRENDING:
        return f"""Focus on TRENDING niches - what's hot RIGHT NOW in {now.year}.
Think: recent viral moments, new hobbies, emerging subcultures, zeitgeist topics.
Risk level: MEDIUM - ride the wave but don't chase fads."""
    if focus_area == FocusArea.EMERGING:
        return """Focus on EMERGING niches - things that are JUST starting to gain traction.
Think: new technologies, evolving identities, nascent communities, early adopter interests.
Risk level: HIGH - be ahead of the curve, accept some may not hit."""
    if focus_area == FocusArea.SEASONAL:
        return f"""Focus on SEASONAL opportunities for the current time of year ({get_current_season(now.month)}).
Think: upcoming holidays, seasonal activities, weather-related interests.
Include the specific season/holiday in the niche context."""

    risk = "LOW" if risk_level < 30 else "MEDIUM" if risk_level < 70 else "HIGH"
    return f"""Explore DIVERSE, UNEXPECTED niches across all categories.
Mix of: professions, hobbies, identities, humor styles, regional interests, age groups.
Risk level: {risk}"""


def determine_focus_area(risk_level: int, exploring: bool, rng: Optional[random.Random] = None) -> FocusArea:
    """
    Pick a focus area.

    Exploring: independent roll favouring emerging/trending/seasonal.
    Otherwise by risk: <30 evergreen, <50 random, <70 trending, else emerging.
    """
    if exploring:
        roll = (rng or random).random()
        if roll < 0.3:
            return FocusArea.EMERGING
        if roll < 0.5:
            return FocusArea.TRENDING
        if roll < 0.7:
            return FocusArea.SEASONAL
        return FocusArea.RANDOM

    if risk_level < 30:
        return FocusArea.EVERGREEN
    if risk_level < 50:
        return FocusArea.RANDOM
    if risk_level < 70:
        return FocusArea.TRENDING
    return FocusArea.EMERGING


class NicheExplorer:
    """Niche discovery with static fallback and weighted selection."""

    COMPETITION_WEIGHTS = {
        CompetitionLevel.BLUE_OCEAN: 3.0,
        CompetitionLevel.LOW: 2.0,
        CompetitionLevel.SATURATED: 0.3,
    }
    HIGH_RISK_TREND_WEIGHTS = {
        TrendDirection.EXPLODING: 2.0,
        TrendDirection.GROWING: 1.5,
    }
    LOW_RISK_TREND_WEIGHTS = {
        TrendDirection.STABLE: 1.5,
    }

    def __init__(
        self,
        llm: Optional[ClaudeClient] = None,
        niche_pool: Optional[Iterable[str]] = None,
        history_store=None,
        rng: Optional[random.Random] = None,
        max_excluded_in_prompt: int = 30,
        freshness_hours: float = 24
    ):
        """
        Initialize explorer.

        Args:
            llm: Claude client for discovery (None = static pool only)
            niche_pool: Static fallback niches (default: curated pool)
            history_store: Adds niches used globally in the freshness window
                to AI discovery exclusions
            rng: Random source (seed it for reproducible selection)
            max_excluded_in_prompt: Exclusions listed in the prompt
            freshness_hours: Global freshness window for AI discovery
        """
        self.llm = llm
        self.niche_pool = tuple(niche_pool) if niche_pool is not None else ALL_STATIC_NICHES
        self.history_store = history_store
        self.rng = rng or random.Random()
        self.max_excluded_in_prompt = max_excluded_in_prompt
        self.freshness_hours = freshness_hours

    def discover(
        self,
        count: int = 10,
        exclude_niches: Optional[Iterable[str]] = None,
        focus_area: FocusArea = FocusArea.RANDOM,
        risk_level: int = 50
    ) -> List[DiscoveredNiche]:
        """
        Discover candidate niches, never returning an excluded one.

        Args:
            count: Maximum niches to return
            exclude_niches: Niches to keep out (case-insensitive)
            focus_area: Discovery focus
            risk_level: 0-100

        Returns:
            Up to `count` niches (AI-discovered or static)
        """
        excluded = {n.strip().lower() for n in (exclude_niches or []) if n}
        excluded |= self._globally_recent_niches()

        result = self.discover_with_ai(count, excluded, focus_area, risk_level)
        if result.ok:
            niches = [n for n in result.niches if n.niche.lower() not in excluded]
            if niches:
                logger.info("Discovered %d niches (%s)", len(niches), focus_area.value)
                return niches[:count]
            logger.info("AI discovery returned only excluded niches, using static pool")
        elif result.status != CallStatus.UNAVAILABLE:
            logger.warning("Niche discovery failed (%s): %s", result.status.value, result.error)

        return self.static_niches(count, excluded)

    def discover_with_ai(
        self,
        count: int,
        excluded: Iterable[str],
        focus_area: FocusArea,
        risk_level: int
    ) -> DiscoveryResult:
        """Ask Claude for niches; never raises."""
        if self.llm is None or not self.llm.available:
            return DiscoveryResult(status=CallStatus.UNAVAILABLE, error="Claude not configured")

        excluded_list = sorted(excluded)[:self.max_excluded_in_prompt]
        prompt = f"""You are a t-shirt market research expert. Discover {count} NEW niche markets for print-on-demand t-shirts.

{focus_prompt(focus_area, risk_level)}

EXCLUDED NICHES (do NOT suggest these, they were used recently):
{', '.join(excluded_list) or 'None'}

Return ONLY valid JSON array with this structure:
[
  {{
    "niche": "specific niche name (2-4 words)",
    "description": "who buys this and why",
    "audienceSize": "massive|large|medium|niche|micro",
    "trendDirection": "exploding|growing|stable|declining",
    "competitionLevel": "blue_ocean|low|medium|high|saturated",
    "suggestedPhrases": ["3-5 specific t-shirt phrases that would sell"],
    "relatedNiches": ["2-3 related niches for cross-pollination"]
  }}
]

IMPORTANT RULES:
1. Be SPECIFIC - not "pets" but "reptile owners" or "hamster parents"
2. Think IDENTITY - who would PROUDLY wear this shirt?
3. Consider PASSION - what do people care deeply about?
4. Avoid generic niches - find the underserved micro-communities
5. Each niche must have real people who would buy"""

        response = self.llm.complete(prompt, max_tokens=2000)
        if not response.ok:
            return DiscoveryResult(status=response.status, error=response.error)

        items = extract_json_text(response.text, expect="array")
        if items is None:
            return DiscoveryResult(status=CallStatus.PARSE_ERROR, error="No JSON array in response")

        source = f"ai-discovery-{focus_area.value}"
        niches = [n for n in (DiscoveredNiche.from_dict(item, source) for item in items) if n]
        if not niches:
            return DiscoveryResult(status=CallStatus.PARSE_ERROR, error="No valid niches in response")

        return DiscoveryResult(status=CallStatus.OK, niches=niches)

    def static_niches(self, count: int, excluded: Iterable[str]) -> List[DiscoveredNiche]:
        """Static pool minus exclusions, shuffled and truncated."""
        excluded = {n.lower() for n in excluded}
        available = [n for n in self.niche_pool if n.lower() not in excluded]
        self.rng.shuffle(available)
        return [DiscoveredNiche.from_static(n) for n in available[:count]]

    def niche_weight(self, niche: DiscoveredNiche, risk_level: int) -> float:
        weight = 1.0
        weight *= self.COMPETITION_WEIGHTS.get(niche.competition_level, 1.0)
        if risk_level > 50:
            weight *= self.HIGH_RISK_TREND_WEIGHTS.get(niche.trend_direction, 1.0)
        else:
            weight *= self.LOW_RISK_TREND_WEIGHTS.get(niche.trend_direction, 1.0)
        return weight

    def select_weighted(self, niches: List[DiscoveredNiche], risk_level: int) -> DiscoveredNiche:
        """
        Roulette-wheel selection: cumulative weights, one draw in [0, total).

        Raises:
            ValueError: if `niches` is empty
        """
        if not niches:
            raise ValueError("select_weighted needs at least one niche")

        weights = np.array([self.niche_weight(n, risk_level) for n in niches], dtype=float)
        cumulative = np.cumsum(weights)
        draw = self.rng.random() * cumulative[-1]
        index = int(np.searchsorted(cumulative, draw, side="right"))
        return niches[min(index, len(niches) - 1)]

    def _globally_recent_niches(self) -> set:
        if self.history_store is None or self.llm is None or not self.llm.available:
            return set()
        try:
            return set(self.history_store.recent_niches(user_id=None, hours_back=self.freshness_hours))
        except Exception as e:
            logger.warning("Could not read recent niches for discovery: %s", e)
            return set()
