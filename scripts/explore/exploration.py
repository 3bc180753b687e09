"""
Exploration Orchestrator

Produces one high-novelty (niche, phrase) pair per call:

1. Explore or exploit: explore when forced or on a 30% roll
2. Exclude caller niches plus niches this user used in the cooldown window
3. Discover a batch of niches for the chosen focus area
4. Up to 5 attempts: weighted pick, phrase (suggested > generated >
   template), diversity score; accept at >= 0.4, otherwise drop the niche
5. Nothing accepted: return the best-scoring attempt with low confidence

Only an empty discovery returns None; the caller then uses its own
fixed-template fallback.

Usage:
    from explore import create_exploration_orchestrator

    orchestrator = create_exploration_orchestrator()
    result = orchestrator.explore(user_id="user-1", risk_level=60)
    if result:
        print(result.phrase, result.niche, result.diversity_score.overall)
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from llm.claude_client import ClaudeClient
from novelty.diversity_scorer import DiversityScore, DiversityScorer

from .cross_pollination import CrossPollinator
from .niche_explorer import DiscoveredNiche, FocusArea, NicheExplorer, determine_focus_area
from .phrase_generator import PhraseGenerator

logger = logging.getLogger(__name__)


class ExplorationSource(Enum):
    """Where an exploration result came from."""
    DISCOVERED = "discovered"
    TRENDING = "trending"
    CROSS_POLLINATED = "cross-pollinated"
    RANDOM_WALK = "random-walk"
    AI_GENERATED = "ai-generated"


@dataclass
class ExplorationConfig:
    """Configuration for exploration cycles."""
    exploration_rate: float = 0.3
    niche_cooldown_hours: float = 4.0
    discovery_batch_size: int = 15
    max_attempts: int = 5
    min_diversity_score: float = 0.4
    degraded_confidence: float = 0.3
    fallback_niche: str = "general humor"
    fallback_phrase: str = "Living My Best Life"

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")


@dataclass
class ExplorationResult:
    """The chosen outcome of one exploration cycle."""
    niche: str
    topic: str
    phrase: str
    diversity_score: DiversityScore
    source: ExplorationSource
    confidence: float
    attempts: int = 1
    degraded: bool = False
    concept: Optional[str] = None

    def to_dict(self):
        return {
            "niche": self.niche,
            "topic": self.topic,
            "phrase": self.phrase,
            "diversity_score": self.diversity_score.to_dict(),
            "source": self.source.value,
            "confidence": round(self.confidence, 4),
            "attempts": self.attempts,
            "degraded": self.degraded,
            "concept": self.concept
        }


def classify_source(niche: DiscoveredNiche, focus_area: FocusArea, exploring: bool) -> ExplorationSource:
    """Provenance tag for a selected niche."""
    if niche.is_ai_discovered:
        if focus_area == FocusArea.TRENDING:
            return ExplorationSource.TRENDING
        return ExplorationSource.AI_GENERATED
    if exploring:
        return ExplorationSource.RANDOM_WALK
    return ExplorationSource.DISCOVERED


class ExplorationOrchestrator:
    """Combines niche discovery and diversity scoring in a bounded retry loop."""

    def __init__(
        self,
        explorer: NicheExplorer,
        scorer: DiversityScorer,
        phrase_generator: Optional[PhraseGenerator] = None,
        history_store=None,
        cross_pollinator: Optional[CrossPollinator] = None,
        config: Optional[ExplorationConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize orchestrator.

        Args:
            explorer: Niche discovery and weighted selection
            scorer: Diversity scorer (reads history itself, fail-open)
            phrase_generator: Phrase source when a niche has no suggestions
            history_store: Source of the user's recently used niches
            cross_pollinator: Niche blending for explore_cross_pollinated
            config: Exploration tunables
            rng: Random source (seed it for reproducible runs)
        """
        self.explorer = explorer
        self.scorer = scorer
        self.rng = rng or random.Random()
        self.phrase_generator = phrase_generator or PhraseGenerator(rng=self.rng)
        self.history_store = history_store
        self.cross_pollinator = cross_pollinator
        self.config = config or ExplorationConfig()

    def explore(
        self,
        user_id: Optional[str] = None,
        risk_level: int = 50,
        force_exploration: bool = False,
        exclude_niches: Optional[Iterable[str]] = None
    ) -> Optional[ExplorationResult]:
        """
        Run one exploration cycle.

        Args:
            user_id: Scope for cooldowns and history (None = global)
            risk_level: 0-100, shifts focus area and niche weighting
            force_exploration: Always explore instead of rolling
            exclude_niches: Niches the caller wants kept out

        Returns:
            ExplorationResult, or None if discovery yielded no niches
        """
        exploring = force_exploration or self.rng.random() < self.config.exploration_rate
        logger.info("%s at risk level %d", "EXPLORING" if exploring else "EXPLOITING", risk_level)

        excluded = {n.strip().lower() for n in (exclude_niches or []) if n}
        excluded |= set(self._recent_user_niches(user_id))

        focus_area = determine_focus_area(risk_level, exploring, self.rng)
        candidates = self.explorer.discover(
            count=self.config.discovery_batch_size,
            exclude_niches=excluded,
            focus_area=focus_area,
            risk_level=risk_level
        )
        candidates = [n for n in candidates if n.niche.lower() not in excluded]

        if not candidates:
            logger.warning("No niches discovered")
            return None

        history = self.scorer.fetch_history(user_id)
        best: Optional[ExplorationResult] = None
        attempts = 0

        while candidates and attempts < self.config.max_attempts:
            attempts += 1
            niche = self.explorer.select_weighted(candidates, risk_level)
            phrase = self._phrase_for(niche, risk_level)
            score = self.scorer.score(phrase, niche.niche, niche.niche, user_id=user_id, history=history)

            result = ExplorationResult(
                niche=niche.niche,
                topic=niche.niche,
                phrase=phrase,
                diversity_score=score,
                source=classify_source(niche, focus_area, exploring),
                confidence=score.overall,
                attempts=attempts
            )

            if score.overall >= self.config.min_diversity_score:
                logger.info(
                    "Accepted '%s' in %s (score %.2f, attempt %d)",
                    phrase, niche.niche, score.overall, attempts
                )
                return result

            logger.info("Attempt %d: '%s' rejected (score %.2f)", attempts, phrase, score.overall)
            if best is None or score.overall > best.diversity_score.overall:
                best = result
            candidates = [c for c in candidates if c.niche != niche.niche]

        logger.warning("No candidate cleared %.2f, using best available", self.config.min_diversity_score)
        best.confidence = self.config.degraded_confidence
        best.degraded = True
        best.attempts = attempts
        return best

    def explore_cross_pollinated(
        self,
        niche_a: str,
        niche_b: str,
        user_id: Optional[str] = None
    ) -> Optional[ExplorationResult]:
        """
        Blend two niches into one scored result.

        Returns:
            ExplorationResult tagged cross-pollinated, or None when the
            blend could not be produced
        """
        if self.cross_pollinator is None:
            return None
        blend = self.cross_pollinator.blend(niche_a, niche_b)
        if blend is None:
            return None

        niche = f"{niche_a} x {niche_b}"
        score = self.scorer.score(blend.phrase, niche, f"{niche_a} {niche_b}", user_id=user_id)
        return ExplorationResult(
            niche=niche,
            topic=f"{niche_a} {niche_b}",
            phrase=blend.phrase,
            diversity_score=score,
            source=ExplorationSource.CROSS_POLLINATED,
            confidence=score.overall,
            concept=blend.concept
        )

    def _phrase_for(self, niche: DiscoveredNiche, risk_level: int) -> str:
        if niche.suggested_phrases:
            return self.rng.choice(niche.suggested_phrases)
        return self.phrase_generator.generate(niche.niche, risk_level)

    def _recent_user_niches(self, user_id: Optional[str]) -> List[str]:
        if self.history_store is None:
            return []
        try:
            return self.history_store.recent_niches(
                user_id=user_id,
                hours_back=self.config.niche_cooldown_hours
            )
        except Exception as e:
            logger.warning("Could not read recent niches: %s", e)
            return []


def create_exploration_orchestrator(
    history_store=None,
    llm: Optional[ClaudeClient] = None,
    config: Optional[ExplorationConfig] = None,
    rng: Optional[random.Random] = None
) -> ExplorationOrchestrator:
    """Wire explorer, scorer, phrase generator and cross-pollinator together."""
    rng = rng or random.Random()
    return ExplorationOrchestrator(
        explorer=NicheExplorer(llm=llm, history_store=history_store, rng=rng),
        scorer=DiversityScorer(history_store=history_store),
        phrase_generator=PhraseGenerator(llm=llm, rng=rng),
        history_store=history_store,
        cross_pollinator=CrossPollinator(llm=llm),
        config=config,
        rng=rng
    )
