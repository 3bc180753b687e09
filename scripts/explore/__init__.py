"""
Explore module for merch generation.

- niche_pool: curated static niches
- niche_explorer: AI discovery with static fallback, weighted selection
- phrase_generator: phrase per niche with template fallback
- cross_pollination: two-niche blends
- exploration: orchestrated explore/exploit cycle
"""

from .niche_pool import STATIC_NICHE_POOL, ALL_STATIC_NICHES

from .niche_explorer import (
    NicheExplorer,
    DiscoveredNiche,
    DiscoveryResult,
    AudienceSize,
    TrendDirection,
    CompetitionLevel,
    FocusArea,
    determine_focus_area,
    focus_prompt,
    get_current_season
)

from .phrase_generator import (
    PhraseGenerator,
    PhraseResult,
    FALLBACK_TEMPLATES,
    risk_descriptor
)

from .cross_pollination import CrossPollinator, BlendedConcept

from .exploration import (
    ExplorationOrchestrator,
    ExplorationResult,
    ExplorationConfig,
    ExplorationSource,
    classify_source,
    create_exploration_orchestrator
)

__all__ = [
    # Pool
    "STATIC_NICHE_POOL",
    "ALL_STATIC_NICHES",
    # Explorer
    "NicheExplorer",
    "DiscoveredNiche",
    "DiscoveryResult",
    "AudienceSize",
    "TrendDirection",
    "CompetitionLevel",
    "FocusArea",
    "determine_focus_area",
    "focus_prompt",
    "get_current_season",
    # Phrases
    "PhraseGenerator",
    "PhraseResult",
    "FALLBACK_TEMPLATES",
    "risk_descriptor",
    # Cross-pollination
    "CrossPollinator",
    "BlendedConcept",
    # Orchestrator
    "ExplorationOrchestrator",
    "ExplorationResult",
    "ExplorationConfig",
    "ExplorationSource",
    "classify_source",
    "create_exploration_orchestrator"
]
