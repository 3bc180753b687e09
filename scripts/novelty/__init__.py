"""
Novelty module for merch generation.

Provides history-aware diversity scoring:
- similarity: word-overlap (Jaccard) similarity between phrases
- diversity_scorer: niche/phrase/topic novelty with recommendation tiers
"""

from .similarity import (
    tokenize,
    jaccard_similarity,
    max_similarity
)

from .diversity_scorer import (
    DiversityScorer,
    DiversityScore,
    DiversityConfig,
    Recommendation,
    score_diversity
)

__all__ = [
    # Similarity
    "tokenize",
    "jaccard_similarity",
    "max_similarity",
    # Diversity
    "DiversityScorer",
    "DiversityScore",
    "DiversityConfig",
    "Recommendation",
    "score_diversity"
]
