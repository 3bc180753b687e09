"""
Search module for merch generation.

Provides live web research for niche styles and trends.
"""

from .perplexity_search import (
    PerplexitySearch,
    SearchResult,
    SearchType,
    create_perplexity_search
)

__all__ = [
    "PerplexitySearch",
    "SearchResult",
    "SearchType",
    "create_perplexity_search"
]
