"""
Diversity Scorer for Merch Generation

Scores a candidate (phrase, niche, topic) against a bounded window of
recent generation history:

- niche novelty: hours since the niche was last used / cooldown, capped at 1
- phrase novelty: 1 - max word-overlap with any recent phrase
- topic novelty: 1 - max word-overlap with any recent topic
- overall: 0.3 * niche + 0.4 * phrase + 0.3 * topic

History is advisory. A failed history read is logged and scored as empty
history (maximum novelty) rather than raised.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from .similarity import jaccard_similarity, max_similarity

logger = logging.getLogger(__name__)


class Recommendation(Enum):
    """Diversity recommendation tiers."""
    EXCELLENT = "excellent"     # overall >= 0.8
    GOOD = "good"               # overall >= 0.6
    ACCEPTABLE = "acceptable"   # overall >= 0.4
    AVOID = "avoid"             # below the acceptable floor


@dataclass
class DiversityConfig:
    """Windows, weights and thresholds for diversity scoring."""
    lookback_hours: float = 72.0
    niche_cooldown_hours: float = 4.0
    history_limit: int = 100
    similar_phrase_threshold: float = 0.5
    weights: Dict[str, float] = field(default_factory=lambda: {
        "niche": 0.3,
        "phrase": 0.4,
        "topic": 0.3,
    })
    thresholds: Dict[Recommendation, float] = field(default_factory=lambda: {
        Recommendation.EXCELLENT: 0.8,
        Recommendation.GOOD: 0.6,
        Recommendation.ACCEPTABLE: 0.4,
    })

    @property
    def min_acceptable(self) -> float:
        return self.thresholds[Recommendation.ACCEPTABLE]


@dataclass
class DiversityScore:
    """Novelty of one candidate against recent history."""
    overall: float
    niche_novelty: float
    phrase_novelty: float
    topic_novelty: float
    hours_since_last_similar: float  # math.inf when nothing similar
    recommendation: Recommendation

    @property
    def is_acceptable(self) -> bool:
        return self.recommendation != Recommendation.AVOID

    def to_dict(self) -> Dict:
        return {
            "overall": round(self.overall, 4),
            "niche_novelty": round(self.niche_novelty, 4),
            "phrase_novelty": round(self.phrase_novelty, 4),
            "topic_novelty": round(self.topic_novelty, 4),
            "hours_since_last_similar": (
                None if math.isinf(self.hours_since_last_similar)
                else round(self.hours_since_last_similar, 2)
            ),
            "recommendation": self.recommendation.value
        }


class DiversityScorer:
    """
    Multi-factor novelty scoring against generation history.

    The history store only needs query_recent(user_id, hours_back, limit)
    returning entries newest first.
    """

    def __init__(
        self,
        history_store=None,
        config: Optional[DiversityConfig] = None,
        now_fn: Callable[[], datetime] = datetime.now
    ):
        self.history_store = history_store
        self.config = config or DiversityConfig()
        self.now_fn = now_fn

    def fetch_history(self, user_id: Optional[str] = None) -> List:
        """Recent history for scoring. Any failure yields []."""
        if self.history_store is None:
            return []
        try:
            return list(self.history_store.query_recent(
                user_id=user_id,
                hours_back=self.config.lookback_hours,
                limit=self.config.history_limit
            ))
        except Exception as e:
            logger.warning("History fetch failed, scoring as empty history: %s", e)
            return []

    def score(
        self,
        phrase: str,
        niche: str,
        topic: str,
        user_id: Optional[str] = None,
        history: Optional[List] = None
    ) -> DiversityScore:
        """
        Score a candidate.

        Args:
            phrase: Candidate phrase
            niche: Candidate niche
            topic: Candidate topic
            user_id: Scope history to this user (None = global)
            history: Pre-fetched history; fetched from the store when None

        Returns:
            DiversityScore with components and recommendation
        """
        if history is None:
            history = self.fetch_history(user_id)

        if not history:
            return DiversityScore(
                overall=1.0,
                niche_novelty=1.0,
                phrase_novelty=1.0,
                topic_novelty=1.0,
                hours_since_last_similar=math.inf,
                recommendation=Recommendation.EXCELLENT
            )

        phrase_norm = (phrase or "").strip().lower()
        niche_norm = (niche or "").strip().lower()
        topic_norm = (topic or "").strip().lower()
        now = self.now_fn()

        niche_hours = [
            self._hours_since(entry.generated_at, now)
            for entry in history if entry.niche == niche_norm
        ]
        hours_since_niche = min(niche_hours) if niche_hours else math.inf
        niche_novelty = min(1.0, hours_since_niche / self.config.niche_cooldown_hours)

        phrase_novelty = 1.0 - max_similarity(phrase_norm, (e.phrase for e in history))
        topic_novelty = 1.0 - max_similarity(topic_norm, (e.topic for e in history))

        similar_hours = [
            self._hours_since(entry.generated_at, now)
            for entry in history
            if entry.niche == niche_norm
            or jaccard_similarity(phrase_norm, entry.phrase) > self.config.similar_phrase_threshold
        ]
        hours_since_last_similar = min(similar_hours) if similar_hours else math.inf

        overall = self.combine(niche_novelty, phrase_novelty, topic_novelty)

        result = DiversityScore(
            overall=overall,
            niche_novelty=niche_novelty,
            phrase_novelty=phrase_novelty,
            topic_novelty=topic_novelty,
            hours_since_last_similar=hours_since_last_similar,
            recommendation=self.recommend(overall)
        )
        logger.debug(
            "Diversity for '%s' in %s: %.2f (%s)",
            phrase, niche, overall, result.recommendation.value
        )
        return result

    def combine(self, niche_novelty: float, phrase_novelty: float, topic_novelty: float) -> float:
        """Weighted sum of the three components, clamped to [0, 1]."""
        weights = self.config.weights
        overall = (
            weights["niche"] * niche_novelty
            + weights["phrase"] * phrase_novelty
            + weights["topic"] * topic_novelty
        )
        return max(0.0, min(1.0, overall))

    def recommend(self, overall: float) -> Recommendation:
        thresholds = self.config.thresholds
        if overall >= thresholds[Recommendation.EXCELLENT]:
            return Recommendation.EXCELLENT
        elif overall >= thresholds[Recommendation.GOOD]:
            return Recommendation.GOOD
        elif overall >= thresholds[Recommendation.ACCEPTABLE]:
            return Recommendation.ACCEPTABLE
        return Recommendation.AVOID

    @staticmethod
    def _hours_since(generated_at: datetime, now: datetime) -> float:
        return max(0.0, (now - generated_at).total_seconds() / 3600.0)


def score_diversity(
    phrase: str,
    niche: str,
    topic: str,
    history_store=None,
    user_id: Optional[str] = None
) -> DiversityScore:
    """Convenience function to score a single candidate."""
    return DiversityScorer(history_store=history_store).score(phrase, niche, topic, user_id=user_id)
