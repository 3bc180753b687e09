"""
Unit Tests for Diversity Scoring
Tests phrase similarity, component scores, weighting and recommendations
"""

import math
import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from novelty.similarity import tokenize, jaccard_similarity, max_similarity
from novelty.diversity_scorer import (
    DiversityConfig,
    DiversityScorer,
    Recommendation,
    score_diversity
)
from storage.generation_history import GenerationHistoryEntry, InMemoryHistoryStore


NOW = datetime(2026, 1, 15, 12, 0, 0)


# ===================
# Fixtures
# ===================

@pytest.fixture
def store():
    """In-memory history with a fixed clock."""
    return InMemoryHistoryStore(now_fn=lambda: NOW)


@pytest.fixture
def scorer(store):
    """Scorer reading the in-memory store."""
    return DiversityScorer(history_store=store, now_fn=lambda: NOW)


def add(store, phrase, niche, topic=None, hours_ago=1.0, user_id=None):
    store.append(GenerationHistoryEntry(
        phrase=phrase,
        niche=niche,
        topic=topic or niche,
        user_id=user_id,
        generated_at=NOW - timedelta(hours=hours_ago)
    ))


class FailingStore:
    """History store whose reads always fail."""

    def query_recent(self, user_id=None, hours_back=72, limit=100):
        raise ConnectionError("database is locked")


# ===================
# Similarity Tests
# ===================

class TestSimilarity:
    """Test word-overlap similarity."""

    def test_short_words_ignored(self):
        """Test words under three characters are dropped."""
        assert tokenize("I am a Dog Mom") == frozenset({"dog", "mom"})

    def test_self_similarity(self):
        """Test a phrase is fully similar to itself."""
        assert jaccard_similarity("Coffee Then Adulting", "coffee then adulting") == 1.0

    def test_symmetric(self):
        """Test similarity does not depend on argument order."""
        a, b = "gone fishing again", "fishing is life"
        assert jaccard_similarity(a, b) == jaccard_similarity(b, a)

    def test_partial_overlap(self):
        """Test Jaccard ratio of shared words."""
        assert jaccard_similarity("gone fishing again", "gone fishing") == pytest.approx(2 / 3)

    def test_bounded(self):
        """Test similarity stays within [0, 1]."""
        pairs = [("", ""), ("a b", "a b"), ("cat mom", "dog dad"), ("same same", "same")]
        for a, b in pairs:
            assert 0.0 <= jaccard_similarity(a, b) <= 1.0

    def test_no_qualifying_words(self):
        """Test phrases without qualifying words are not similar."""
        assert jaccard_similarity("I am", "I am") == 0.0
        assert jaccard_similarity(None, "coffee") == 0.0

    def test_max_similarity(self):
        """Test max over several phrases, 0.0 for none."""
        assert max_similarity("coffee addict", ["tea time", "coffee addict"]) == 1.0
        assert max_similarity("coffee addict", []) == 0.0


# ===================
# Scorer Tests
# ===================

class TestDiversityScorer:
    """Test multi-factor diversity scoring."""

    def test_empty_history_is_excellent(self, scorer):
        """Test everything scores 1.0 without history."""
        score = scorer.score("Gone Fishing Again", "fishing", "fishing")
        assert score.overall == 1.0
        assert score.niche_novelty == 1.0
        assert score.phrase_novelty == 1.0
        assert score.topic_novelty == 1.0
        assert math.isinf(score.hours_since_last_similar)
        assert score.recommendation == Recommendation.EXCELLENT
        assert score.is_acceptable

    def test_repeat_within_the_hour_is_avoided(self, store, scorer):
        """Test an identical candidate one hour later."""
        add(store, "Coffee Addict Life", "coffee", hours_ago=1.0)

        score = scorer.score("Coffee Addict Life", "coffee", "coffee")

        assert score.niche_novelty == pytest.approx(0.25)
        assert score.phrase_novelty == 0.0
        assert score.topic_novelty == 0.0
        assert score.overall == pytest.approx(0.075)
        assert score.hours_since_last_similar == pytest.approx(1.0)
        assert score.recommendation == Recommendation.AVOID
        assert not score.is_acceptable

    def test_niche_cooldown_scales_linearly(self, store, scorer):
        """Test niche novelty is hours since last use over the cooldown."""
        add(store, "Bass Boss", "fishing", hours_ago=2.0)
        score = scorer.score("Reel Cool Grandpa", "fishing", "grandpa")
        assert score.niche_novelty == pytest.approx(0.5)

    def test_niche_cooldown_caps_at_one(self, store, scorer):
        """Test niche novelty after the cooldown window."""
        add(store, "Bass Boss", "fishing", hours_ago=5.0)
        score = scorer.score("Reel Cool Grandpa", "fishing", "grandpa")
        assert score.niche_novelty == 1.0

    def test_most_recent_niche_use_counts(self, store, scorer):
        """Test the closest use in time sets niche novelty."""
        add(store, "Bass Boss", "fishing", hours_ago=3.0)
        add(store, "Lake Life", "fishing", hours_ago=1.0)
        score = scorer.score("Reel Cool Grandpa", "fishing", "grandpa")
        assert score.niche_novelty == pytest.approx(0.25)

    def test_entries_outside_lookback_ignored(self, store, scorer):
        """Test history older than the lookback window does not count."""
        add(store, "Coffee Addict Life", "coffee", hours_ago=80.0)
        score = scorer.score("Coffee Addict Life", "coffee", "coffee")
        assert score.overall == 1.0

    def test_user_scoped_history(self, store, scorer):
        """Test another user's history does not lower the score."""
        add(store, "Coffee Addict Life", "coffee", hours_ago=1.0, user_id="bob")
        score = scorer.score("Coffee Addict Life", "coffee", "coffee", user_id="alice")
        assert score.overall == 1.0

    def test_similar_phrase_in_other_niche(self, store, scorer):
        """Test a similar phrase elsewhere sets hours since last similar."""
        add(store, "gone fishing again", "fishing", hours_ago=6.0)
        score = scorer.score("gone fishing again today", "grandpa life", "grandpa")
        assert score.niche_novelty == 1.0
        assert score.phrase_novelty == pytest.approx(0.25)
        assert score.hours_since_last_similar == pytest.approx(6.0)

    def test_prefetched_history_used(self, store):
        """Test supplied history bypasses the store."""
        scorer = DiversityScorer(history_store=FailingStore(), now_fn=lambda: NOW)
        add(store, "Coffee Addict Life", "coffee", hours_ago=1.0)
        score = scorer.score("Coffee Addict Life", "coffee", "coffee", history=store.query_recent())
        assert score.recommendation == Recommendation.AVOID

    def test_fails_open_when_store_raises(self):
        """Test a failing store scores as empty history."""
        scorer = DiversityScorer(history_store=FailingStore(), now_fn=lambda: NOW)
        assert scorer.fetch_history("alice") == []
        score = scorer.score("Coffee Addict Life", "coffee", "coffee", user_id="alice")
        assert score.overall == 1.0
        assert score.recommendation == Recommendation.EXCELLENT

    def test_no_store(self):
        """Test a scorer without a store."""
        assert score_diversity("Lake Life", "fishing", "fishing").overall == 1.0

    def test_weighted_combination(self, scorer):
        """Test overall is 0.3 niche + 0.4 phrase + 0.3 topic."""
        assert scorer.combine(1.0, 0.5, 0.0) == pytest.approx(0.5)
        assert scorer.combine(0.0, 1.0, 0.0) == pytest.approx(0.4)
        assert scorer.combine(1.0, 1.0, 1.0) == pytest.approx(1.0)

    @pytest.mark.parametrize("overall,expected", [
        (0.85, Recommendation.EXCELLENT),
        (0.8, Recommendation.EXCELLENT),
        (0.65, Recommendation.GOOD),
        (0.45, Recommendation.ACCEPTABLE),
        (0.4, Recommendation.ACCEPTABLE),
        (0.2, Recommendation.AVOID),
    ])
    def test_recommendation_thresholds(self, scorer, overall, expected):
        """Test recommendation tiers."""
        assert scorer.recommend(overall) == expected

    def test_custom_config(self, store):
        """Test a shorter cooldown raises niche novelty."""
        scorer = DiversityScorer(
            history_store=store,
            config=DiversityConfig(niche_cooldown_hours=2.0),
            now_fn=lambda: NOW
        )
        add(store, "Bass Boss", "fishing", hours_ago=1.0)
        assert scorer.score("Reel Cool", "fishing", "reels").niche_novelty == pytest.approx(0.5)

    def test_to_dict(self, scorer):
        """Test serialization of an infinite similarity gap."""
        data = scorer.score("Lake Life", "fishing", "fishing").to_dict()
        assert data["hours_since_last_similar"] is None
        assert data["recommendation"] == "excellent"
