"""
Unit Tests for Niche Discovery
Tests the niche explorer, phrase generation and cross-pollination
"""

import json
import random
import pytest
import sys
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from explore import (
    ALL_STATIC_NICHES,
    CompetitionLevel,
    CrossPollinator,
    DiscoveredNiche,
    FALLBACK_TEMPLATES,
    FocusArea,
    NicheExplorer,
    PhraseGenerator,
    TrendDirection,
    determine_focus_area,
    get_current_season,
    risk_descriptor
)
from explore.phrase_generator import clean_phrase, title_case
from storage.generation_history import GenerationHistoryEntry, InMemoryHistoryStore


DISCOVERY_REPLY = """Here are some niches:
```json
[
  {
    "niche": "fly tying",
    "description": "Anglers who tie their own flies",
    "audienceSize": "niche",
    "trendDirection": "growing",
    "competitionLevel": "blue_ocean",
    "suggestedPhrases": ["Tie Flies Not Lies", "Perfect Gift Fly Guy"],
    "relatedNiches": ["fly fishing"]
  },
  {"niche": "coffee", "suggestedPhrases": ["Bean There"]},
  {"description": "missing a name"}
]
```"""


class FixedRoll:
    """Random source whose random() always returns one value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def niche(name, competition=CompetitionLevel.MEDIUM, trend=TrendDirection.STABLE):
    return DiscoveredNiche(
        niche=name,
        description=name,
        competition_level=competition,
        trend_direction=trend
    )


# ===================
# Focus Area Tests
# ===================

class TestFocusArea:
    """Test focus area selection."""

    @pytest.mark.parametrize("risk,expected", [
        (10, FocusArea.EVERGREEN),
        (29, FocusArea.EVERGREEN),
        (30, FocusArea.RANDOM),
        (60, FocusArea.TRENDING),
        (85, FocusArea.EMERGING),
    ])
    def test_by_risk_when_exploiting(self, risk, expected):
        """Test risk bands."""
        assert determine_focus_area(risk, exploring=False) == expected

    @pytest.mark.parametrize("roll,expected", [
        (0.1, FocusArea.EMERGING),
        (0.4, FocusArea.TRENDING),
        (0.6, FocusArea.SEASONAL),
        (0.9, FocusArea.RANDOM),
    ])
    def test_roll_when_exploring(self, roll, expected):
        """Test exploring ignores risk and rolls."""
        assert determine_focus_area(10, exploring=True, rng=FixedRoll(roll)) == expected

    def test_seasons(self):
        """Test month to season."""
        assert get_current_season(1) == "Winter/Holiday Season"
        assert get_current_season(4) == "Spring"
        assert get_current_season(7) == "Summer"
        assert get_current_season(10) == "Fall/Autumn"


# ===================
# Niche Explorer Tests
# ===================

class TestNicheExplorer:
    """Test discovery and weighted selection."""

    def test_static_pool_default(self):
        """Test the curated pool is used by default."""
        explorer = NicheExplorer(rng=random.Random(1))
        found = explorer.discover(count=15)
        assert len(found) == 15
        assert all(n.niche in ALL_STATIC_NICHES for n in found)
        assert not any(n.is_ai_discovered for n in found)

    def test_static_fallback_respects_exclusions(self):
        """Test excluded niches never come back, case-insensitively."""
        explorer = NicheExplorer(niche_pool=["fishing", "coffee", "golf"], rng=random.Random(1))
        found = explorer.discover(count=10, exclude_niches=["Coffee"])
        assert {n.niche for n in found} == {"fishing", "golf"}

    def test_everything_excluded(self):
        """Test an exhausted pool yields nothing."""
        explorer = NicheExplorer(niche_pool=["fishing"], rng=random.Random(1))
        assert explorer.discover(exclude_niches=["fishing"]) == []

    def test_ai_discovery(self, scripted_claude):
        """Test AI results are parsed, validated and filtered."""
        llm = scripted_claude(DISCOVERY_REPLY)
        explorer = NicheExplorer(llm=llm, niche_pool=["golf"], rng=random.Random(1))

        found = explorer.discover(count=5, exclude_niches=["coffee"], focus_area=FocusArea.EMERGING)

        assert [n.niche for n in found] == ["fly tying"]
        fly = found[0]
        assert fly.is_ai_discovered
        assert fly.source == "ai-discovery-emerging"
        assert fly.competition_level == CompetitionLevel.BLUE_OCEAN
        assert fly.trend_direction == TrendDirection.GROWING
        assert fly.suggested_phrases == ["Tie Flies Not Lies", "Perfect Gift Fly Guy"]

    def test_exclusions_listed_in_prompt(self, scripted_claude):
        """Test the prompt names excluded niches."""
        llm = scripted_claude(DISCOVERY_REPLY)
        NicheExplorer(llm=llm, rng=random.Random(1)).discover(exclude_niches=["coffee"])
        prompt = llm._client.messages.calls[0]["messages"][0]["content"]
        assert "coffee" in prompt

    def test_only_excluded_ai_results_fall_back(self, scripted_claude):
        """Test the static pool covers AI results that were all excluded."""
        llm = scripted_claude(json.dumps([{"niche": "coffee"}]))
        explorer = NicheExplorer(llm=llm, niche_pool=["golf"], rng=random.Random(1))
        found = explorer.discover(exclude_niches=["coffee"])
        assert [n.niche for n in found] == ["golf"]

    def test_unparseable_reply_falls_back(self, scripted_claude):
        """Test a reply without JSON falls back to the pool."""
        llm = scripted_claude("I could not think of any niches today.")
        explorer = NicheExplorer(llm=llm, niche_pool=["golf"], rng=random.Random(1))
        assert [n.niche for n in explorer.discover()] == ["golf"]

    def test_call_failure_falls_back(self, scripted_claude):
        """Test an API error falls back to the pool."""
        llm = scripted_claude(ConnectionError("network down"))
        explorer = NicheExplorer(llm=llm, niche_pool=["golf"], rng=random.Random(1))
        assert [n.niche for n in explorer.discover()] == ["golf"]

    def test_globally_recent_niches_excluded(self, scripted_claude):
        """Test niches anyone used in the freshness window are excluded."""
        history = InMemoryHistoryStore()
        history.append(GenerationHistoryEntry(phrase="Lake Life", niche="fly tying", topic="fly tying"))
        llm = scripted_claude(DISCOVERY_REPLY)
        explorer = NicheExplorer(llm=llm, niche_pool=["golf"], history_store=history, rng=random.Random(1))

        found = explorer.discover()
        assert "fly tying" not in [n.niche for n in found]

    def test_niche_weights(self):
        """Test competition and trend multipliers."""
        explorer = NicheExplorer()
        assert explorer.niche_weight(niche("a", CompetitionLevel.BLUE_OCEAN), 20) == pytest.approx(4.5)
        assert explorer.niche_weight(niche("b", CompetitionLevel.SATURATED, TrendDirection.EXPLODING), 80) \
            == pytest.approx(0.6)
        assert explorer.niche_weight(niche("c", trend=TrendDirection.GROWING), 20) == 1.0

    def test_select_weighted_stays_in_list(self):
        """Test selection only returns listed niches."""
        explorer = NicheExplorer(rng=random.Random(7))
        candidates = [niche("fishing"), niche("golf"), niche("knitting")]
        for _ in range(100):
            assert explorer.select_weighted(candidates, 50) in candidates

    def test_select_weighted_favours_heavy_niches(self):
        """Test blue ocean niches win far more often than saturated ones."""
        explorer = NicheExplorer(rng=random.Random(3))
        blue = niche("fly tying", CompetitionLevel.BLUE_OCEAN)
        crowded = niche("dog mom", CompetitionLevel.SATURATED)

        picks = [explorer.select_weighted([blue, crowded], 20).niche for _ in range(300)]
        assert picks.count("fly tying") > picks.count("dog mom") * 3

    def test_select_weighted_empty(self):
        """Test an empty candidate list raises."""
        with pytest.raises(ValueError):
            NicheExplorer().select_weighted([], 50)

    def test_from_dict_rejects_nameless(self):
        """Test items without a niche name are dropped."""
        assert DiscoveredNiche.from_dict({"description": "x"}, "ai-discovery-random") is None
        assert DiscoveredNiche.from_dict("fishing", "ai-discovery-random") is None

    def test_suggested_phrases_keep_wording(self):
        """Test suggested phrases are ASCII-cleaned but never reworded."""
        found = DiscoveredNiche.from_dict({
            "niche": "halloween moms",
            "suggestedPhrases": ["Trick or Treat Crew", "Wine Mom Life", "High on Life", "“Gift of Gab” ☕", " "]
        }, "ai-discovery-seasonal")
        assert found.suggested_phrases == [
            "Trick or Treat Crew",
            "Wine Mom Life",
            "High on Life",
            "\"Gift of Gab\""
        ]


# ===================
# Phrase Generator Tests
# ===================

class TestPhraseGenerator:
    """Test phrase generation and fallback."""

    def test_fallback_without_claude(self):
        """Test template phrases when Claude is not configured."""
        generator = PhraseGenerator(rng=random.Random(0))
        expected = {title_case(t.format(niche="dog mom")) for t in FALLBACK_TEMPLATES}
        assert generator.generate("dog mom") in expected

    def test_ai_phrase_first_line(self, scripted_claude):
        """Test only the first line is kept, quotes stripped."""
        generator = PhraseGenerator(llm=scripted_claude('"Reel Cool Grandpa"\nIt puns on reels.'))
        assert generator.generate("fishing grandpas") == "Reel Cool Grandpa"

    def test_ai_phrase_cleaned_to_ascii(self, scripted_claude):
        """Test smart quotes are stripped and the wording is kept."""
        generator = PhraseGenerator(llm=scripted_claude("“Trick or Treat Crew”"))
        assert generator.generate("halloween moms") == "Trick or Treat Crew"

    def test_clean_phrase_keeps_listing_words(self):
        """Test words that are only banned in listings survive on the shirt."""
        assert clean_phrase("High on Life ☕\nA stoner pun.") == "High on Life"
        assert clean_phrase("Perfect Gift Fly Guy") == "Perfect Gift Fly Guy"

    def test_long_phrase_rejected(self, scripted_claude):
        """Test phrases over six words fall back to a template."""
        generator = PhraseGenerator(
            llm=scripted_claude("This phrase is far too long for any chest print"),
            rng=random.Random(0)
        )
        expected = {title_case(t.format(niche="fishing")) for t in FALLBACK_TEMPLATES}
        assert generator.generate("fishing") in expected

    def test_clean_phrase_empty(self):
        """Test empty replies clean to empty."""
        assert clean_phrase("   ") == ""

    def test_risk_descriptor(self):
        """Test risk wording bands."""
        assert risk_descriptor(10) == "Family-friendly and evergreen"
        assert risk_descriptor(50) == "Clever but safe"
        assert risk_descriptor(90) == "Can be edgy/viral"

    def test_title_case_keeps_inner_capitals(self):
        """Test title case only touches first letters."""
        assert title_case("proud iPhone user") == "Proud IPhone User"


# ===================
# Cross-Pollination Tests
# ===================

class TestCrossPollinator:
    """Test two-niche blending."""

    def test_blend(self, scripted_claude):
        """Test a parsed blend."""
        llm = scripted_claude('{"phrase": "Knead The Stars", "concept": "Bakers who stargaze"}')
        blend = CrossPollinator(llm).blend("sourdough baker", "amateur astronomy")
        assert blend.phrase == "Knead The Stars"
        assert blend.concept == "Bakers who stargaze"
        assert blend.niche_a == "sourdough baker"

    def test_unavailable(self, offline_claude):
        """Test no blend without Claude."""
        assert CrossPollinator(offline_claude).blend("a", "b") is None
        assert CrossPollinator().blend("a", "b") is None

    def test_unparseable(self, scripted_claude):
        """Test no blend from a reply without JSON."""
        assert CrossPollinator(scripted_claude("no idea")).blend("a", "b") is None
