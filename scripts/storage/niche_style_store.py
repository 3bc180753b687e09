"""
Niche Style Store

SQLite persistence for researched niche style patterns. Stored rows are
background context for the next live research call and the target of
best-effort write-back after it:

- new niche: one-sample row, confidence discounted by half
- known niche: unique values merged (capped), confidence blended
  existing * 0.7 + new * 0.3, analysis count incremented
"""

import json
import logging
import os
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

MAX_STORED_VALUES = 10
NEW_NICHE_CONFIDENCE_FACTOR = 0.5
EXISTING_CONFIDENCE_WEIGHT = 0.7
NEW_CONFIDENCE_WEIGHT = 0.3


@dataclass
class StoredStyleContext:
    """What we already know about a niche's style."""
    niche: str
    typography: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    moods: List[str] = field(default_factory=list)
    shirt_colors: List[str] = field(default_factory=list)
    mood_reference: Optional[str] = None
    confidence: float = 0.0
    sample_size: int = 0
    analysis_count: int = 0
    last_analyzed_at: Optional[datetime] = None


def merge_unique(existing: List[str], new_items: List[str], limit: int = MAX_STORED_VALUES) -> List[str]:
    """Ordered de-duplicated union, truncated to `limit`."""
    return list(dict.fromkeys(list(existing) + list(new_items)))[:limit]


class NicheStyleStore:
    """SQLite-backed niche style context."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        now_fn: Callable[[], datetime] = datetime.now
    ):
        if db_path is None:
            project_root = Path(__file__).parent.parent.parent
            db_path = str(project_root / "data" / "merch.db")

        self.db_path = db_path
        self.now_fn = now_fn

        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_db()

    def _init_db(self):
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS niche_style_profiles (
                niche TEXT PRIMARY KEY,
                typography JSON,
                colors JSON,
                moods JSON,
                shirt_colors JSON,
                mood_reference TEXT,
                confidence REAL DEFAULT 0,
                sample_size INTEGER DEFAULT 0,
                analysis_count INTEGER DEFAULT 0,
                last_analyzed_at TEXT
            )
        ''')
        conn.commit()
        conn.close()

    def get_context(self, niche: str) -> Optional[StoredStyleContext]:
        """Stored context for a niche, or None if never researched."""
        key = niche.strip().lower()

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT * FROM niche_style_profiles WHERE niche = ?', (key,))
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            return None

        last = row["last_analyzed_at"]
        return StoredStyleContext(
            niche=row["niche"],
            typography=json.loads(row["typography"] or "[]"),
            colors=json.loads(row["colors"] or "[]"),
            moods=json.loads(row["moods"] or "[]"),
            shirt_colors=json.loads(row["shirt_colors"] or "[]"),
            mood_reference=row["mood_reference"],
            confidence=row["confidence"] or 0.0,
            sample_size=row["sample_size"] or 0,
            analysis_count=row["analysis_count"] or 0,
            last_analyzed_at=datetime.fromisoformat(last) if last else None
        )

    def write_back(
        self,
        niche: str,
        typography: str,
        colors: List[str],
        mood: str,
        shirt_color: str,
        aesthetic: str,
        confidence: float,
        existing: Optional[StoredStyleContext] = None
    ) -> StoredStyleContext:
        """
        Upsert research findings for a niche.

        Args:
            existing: Context read before the research call; re-read if None

        Returns:
            The context as written
        """
        key = niche.strip().lower()
        if existing is None:
            existing = self.get_context(key)
        now = self.now_fn()

        if existing is None:
            updated = StoredStyleContext(
                niche=key,
                typography=[typography],
                colors=merge_unique([], colors),
                moods=[mood],
                shirt_colors=[shirt_color],
                mood_reference=aesthetic,
                confidence=confidence * NEW_NICHE_CONFIDENCE_FACTOR,
                sample_size=1,
                analysis_count=1,
                last_analyzed_at=now
            )
        else:
            updated = StoredStyleContext(
                niche=key,
                typography=merge_unique(existing.typography, [typography]),
                colors=merge_unique(existing.colors, colors),
                moods=merge_unique(existing.moods, [mood]),
                shirt_colors=merge_unique(existing.shirt_colors, [shirt_color]),
                mood_reference=aesthetic,
                confidence=(existing.confidence * EXISTING_CONFIDENCE_WEIGHT
                            + confidence * NEW_CONFIDENCE_WEIGHT),
                sample_size=existing.sample_size,
                analysis_count=existing.analysis_count + 1,
                last_analyzed_at=now
            )

        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute('''
                INSERT OR REPLACE INTO niche_style_profiles
                (niche, typography, colors, moods, shirt_colors, mood_reference,
                 confidence, sample_size, analysis_count, last_analyzed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                updated.niche,
                json.dumps(updated.typography),
                json.dumps(updated.colors),
                json.dumps(updated.moods),
                json.dumps(updated.shirt_colors),
                updated.mood_reference,
                updated.confidence,
                updated.sample_size,
                updated.analysis_count,
                now.isoformat()
            ))
            conn.commit()
        finally:
            conn.close()

        logger.info("Stored style research for '%s' (confidence %.2f)", key, updated.confidence)
        return updated

    def list_niches(self) -> List[Dict]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            cursor = conn.cursor()
            cursor.execute('''
                SELECT niche, confidence, analysis_count FROM niche_style_profiles
                ORDER BY confidence DESC
            ''')
            return [dict(row) for row in cursor.fetchall()]
        finally:
            conn.close()
