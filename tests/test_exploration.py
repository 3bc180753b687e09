"""
Unit Tests for Exploration Orchestration
Tests the explore/exploit cycle, bounded retries, degraded results
and cross-pollinated exploration
"""

import json
import math
import random
import pytest
import sys
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from explore import (
    CrossPollinator,
    DiscoveredNiche,
    ExplorationConfig,
    ExplorationOrchestrator,
    ExplorationSource,
    FocusArea,
    NicheExplorer,
    PhraseGenerator,
    classify_source,
    create_exploration_orchestrator
)
from novelty.diversity_scorer import DiversityScore, DiversityScorer
from storage.generation_history import GenerationHistoryEntry, InMemoryHistoryStore


FISHING_REPLY = json.dumps([{
    "niche": "fishing",
    "description": "Weekend anglers",
    "competitionLevel": "low",
    "suggestedPhrases": ["gone fishing again"]
}])


class ScriptedScorer:
    """Scorer returning a fixed sequence of overall scores."""

    def __init__(self, overalls):
        self.overalls = list(overalls)
        self.scored = []
        self.history_fetches = 0

    def fetch_history(self, user_id=None):
        self.history_fetches += 1
        return []

    def score(self, phrase, niche, topic, user_id=None, history=None):
        self.scored.append(niche)
        overall = self.overalls.pop(0)
        return DiversityScore(
            overall=overall,
            niche_novelty=overall,
            phrase_novelty=overall,
            topic_novelty=overall,
            hours_since_last_similar=math.inf,
            recommendation=DiversityScorer().recommend(overall)
        )


class BrokenHistory:
    def recent_niches(self, user_id=None, hours_back=4):
        raise ConnectionError("database is locked")


def orchestrator_for(pool, scorer=None, history=None, rate=0.0, seed=0, llm=None):
    rng = random.Random(seed)
    return ExplorationOrchestrator(
        explorer=NicheExplorer(llm=llm, niche_pool=pool, rng=rng),
        scorer=scorer or DiversityScorer(history_store=history),
        phrase_generator=PhraseGenerator(rng=rng),
        history_store=history,
        config=ExplorationConfig(exploration_rate=rate),
        rng=rng
    )


# ===================
# Explore Tests
# ===================

class TestExplore:
    """Test one exploration cycle."""

    def test_first_candidate_accepted_on_empty_history(self, scripted_claude):
        """Test a fresh niche is accepted on the first attempt."""
        history = InMemoryHistoryStore()
        orchestrator = orchestrator_for(["golf"], history=history, llm=scripted_claude(FISHING_REPLY))

        result = orchestrator.explore(user_id="alice", risk_level=50, force_exploration=True)

        assert result.niche == "fishing"
        assert result.topic == "fishing"
        assert result.phrase == "gone fishing again"
        assert result.diversity_score.overall == 1.0
        assert result.confidence == 1.0
        assert result.attempts == 1
        assert not result.degraded
        assert result.source in (ExplorationSource.TRENDING, ExplorationSource.AI_GENERATED)

    def test_template_phrase_for_static_niche(self):
        """Test static niches get a generated phrase."""
        result = orchestrator_for(["dog mom"]).explore()
        assert "Dog Mom" in result.phrase
        assert result.source == ExplorationSource.DISCOVERED

    def test_forced_exploration_on_static_pool(self):
        """Test static niches picked while exploring are a random walk."""
        result = orchestrator_for(["dog mom"]).explore(force_exploration=True)
        assert result.source == ExplorationSource.RANDOM_WALK

    def test_empty_pool_returns_none(self):
        """Test no candidates means no result."""
        assert orchestrator_for([]).explore() is None

    def test_all_excluded_returns_none(self):
        """Test caller exclusions can empty the pool."""
        assert orchestrator_for(["fishing"]).explore(exclude_niches=["Fishing"]) is None

    def test_recent_user_niches_skipped(self):
        """Test niches the user used within the cooldown are skipped."""
        history = InMemoryHistoryStore()
        history.append(GenerationHistoryEntry(
            phrase="Lake Life", niche="fishing", topic="fishing", user_id="alice"
        ))
        result = orchestrator_for(["fishing", "golf"], history=history).explore(user_id="alice")
        assert result.niche == "golf"

    def test_other_users_niches_not_skipped(self):
        """Test cooldowns are per user."""
        history = InMemoryHistoryStore()
        history.append(GenerationHistoryEntry(
            phrase="Lake Life", niche="fishing", topic="fishing", user_id="bob"
        ))
        result = orchestrator_for(["fishing"], history=history).explore(user_id="alice")
        assert result.niche == "fishing"

    def test_recent_niche_failure_tolerated(self):
        """Test a failing cooldown lookup does not stop exploration."""
        orchestrator = orchestrator_for(["golf"], scorer=ScriptedScorer([0.9]), history=BrokenHistory())
        assert orchestrator.explore(user_id="alice").niche == "golf"

    def test_history_fetched_once(self):
        """Test history is read once per cycle, not per attempt."""
        scorer = ScriptedScorer([0.1, 0.1, 0.9])
        orchestrator_for(["a", "b", "c", "d"], scorer=scorer).explore()
        assert scorer.history_fetches == 1

    def test_retries_until_acceptable(self):
        """Test low scores trigger another candidate, never the same niche twice."""
        scorer = ScriptedScorer([0.1, 0.2, 0.5])
        result = orchestrator_for(["a", "b", "c", "d"], scorer=scorer).explore()

        assert result.attempts == 3
        assert result.confidence == 0.5
        assert not result.degraded
        assert len(set(scorer.scored)) == 3

    def test_bounded_attempts_degrade(self):
        """Test the loop stops after five attempts with the best candidate."""
        scorer = ScriptedScorer([0.1, 0.2, 0.35, 0.25, 0.15])
        pool = ["a", "b", "c", "d", "e", "f", "g"]
        result = orchestrator_for(pool, scorer=scorer).explore()

        assert len(scorer.scored) == 5
        assert result.attempts == 5
        assert result.degraded
        assert result.confidence == 0.3
        assert result.diversity_score.overall == 0.35
        assert result.niche == scorer.scored[2]

    def test_attempts_must_be_positive(self):
        """Test a config without attempts is rejected up front."""
        with pytest.raises(ValueError):
            ExplorationConfig(max_attempts=0)

    def test_single_attempt_degrades_to_that_attempt(self):
        """Test one low-scoring attempt is still returned as the best."""
        orchestrator = orchestrator_for(["a", "b"], scorer=ScriptedScorer([0.2]))
        orchestrator.config = ExplorationConfig(exploration_rate=0.0, max_attempts=1)
        result = orchestrator.explore()
        assert result.attempts == 1
        assert result.degraded
        assert result.diversity_score.overall == 0.2

    def test_exhausted_candidates_degrade(self):
        """Test fewer candidates than attempts ends early."""
        scorer = ScriptedScorer([0.1, 0.2])
        result = orchestrator_for(["a", "b"], scorer=scorer).explore()
        assert result.attempts == 2
        assert result.degraded

    def test_to_dict(self):
        """Test serialization."""
        data = orchestrator_for(["golf"]).explore().to_dict()
        assert data["niche"] == "golf"
        assert data["source"] == "discovered"
        assert data["diversity_score"]["recommendation"] == "excellent"


# ===================
# Source Classification Tests
# ===================

class TestClassifySource:
    """Test provenance tags."""

    def test_ai_trending(self):
        ai = DiscoveredNiche(niche="x", description="x", source="ai-discovery-trending")
        assert classify_source(ai, FocusArea.TRENDING, exploring=True) == ExplorationSource.TRENDING
        assert classify_source(ai, FocusArea.EMERGING, exploring=True) == ExplorationSource.AI_GENERATED

    def test_static(self):
        static = DiscoveredNiche.from_static("x")
        assert classify_source(static, FocusArea.RANDOM, exploring=True) == ExplorationSource.RANDOM_WALK
        assert classify_source(static, FocusArea.RANDOM, exploring=False) == ExplorationSource.DISCOVERED


# ===================
# Cross-Pollination Tests
# ===================

class TestCrossPollinatedExploration:
    """Test blended exploration."""

    def test_blend_scored(self, scripted_claude):
        """Test a blend becomes a scored cross-pollinated result."""
        llm = scripted_claude('{"phrase": "Knead The Stars", "concept": "Bakers who stargaze"}')
        orchestrator = ExplorationOrchestrator(
            explorer=NicheExplorer(niche_pool=[]),
            scorer=DiversityScorer(),
            cross_pollinator=CrossPollinator(llm)
        )

        result = orchestrator.explore_cross_pollinated("sourdough baker", "amateur astronomy")

        assert result.niche == "sourdough baker x amateur astronomy"
        assert result.topic == "sourdough baker amateur astronomy"
        assert result.phrase == "Knead The Stars"
        assert result.concept == "Bakers who stargaze"
        assert result.source == ExplorationSource.CROSS_POLLINATED

    def test_without_pollinator(self):
        """Test no result without a cross-pollinator."""
        orchestrator = ExplorationOrchestrator(explorer=NicheExplorer(), scorer=DiversityScorer())
        assert orchestrator.explore_cross_pollinated("a", "b") is None


class TestFactory:
    """Test orchestrator wiring."""

    def test_offline_factory(self, offline_claude):
        """Test the factory works without Claude."""
        orchestrator = create_exploration_orchestrator(
            history_store=InMemoryHistoryStore(),
            llm=offline_claude,
            rng=random.Random(5)
        )
        result = orchestrator.explore(user_id="alice")
        assert result is not None
        assert result.confidence == 1.0
