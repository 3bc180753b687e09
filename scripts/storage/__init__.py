"""
Storage module for merch generation.

- generation_history: append-only generation log + fire-and-forget recorder
- niche_style_store: researched niche style context and write-back
- session_cache: TTL cache for per-session reuse
"""

from .generation_history import (
    GenerationHistoryEntry,
    GenerationHistoryStore,
    InMemoryHistoryStore,
    HistoryRecorder
)

from .niche_style_store import (
    NicheStyleStore,
    StoredStyleContext,
    merge_unique
)

from .session_cache import TTLCache

__all__ = [
    # History
    "GenerationHistoryEntry",
    "GenerationHistoryStore",
    "InMemoryHistoryStore",
    "HistoryRecorder",
    # Niche style
    "NicheStyleStore",
    "StoredStyleContext",
    "merge_unique",
    # Cache
    "TTLCache"
]
