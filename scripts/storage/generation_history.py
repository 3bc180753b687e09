"""
Generation History for Merch Diversity Tracking

Append-only log of past generations (phrase, niche, topic, risk level,
timestamp) per user. Read back by the diversity scorer over a recency
window; never updated or deleted here.

Two interchangeable stores share one interface:
- GenerationHistoryStore: SQLite, one connection per operation
- InMemoryHistoryStore: process-local list, for tests and dry runs

HistoryRecorder wraps either store with fire-and-forget writes: the caller
gets control back immediately and a failed insert is only logged.

Usage:
    from storage.generation_history import GenerationHistoryStore, HistoryRecorder

    store = GenerationHistoryStore()
    recorder = HistoryRecorder(store)
    recorder.record("user-1", "But First Coffee", "Coffee Addict", "coffee", risk_level=40)
    recent = store.query_recent(user_id="user-1", hours_back=72)
"""

import logging
import os
import sqlite3
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
DEFAULT_QUERY_LIMIT = 100


@dataclass(frozen=True)
class GenerationHistoryEntry:
    """One completed generation. Text fields are stored lowercased."""
    phrase: str
    niche: str
    topic: str
    risk_level: int = 50
    user_id: Optional[str] = None
    generated_at: datetime = field(default_factory=datetime.now)
    was_approved: Optional[bool] = None
    id: Optional[int] = None

    def normalized(self) -> "GenerationHistoryEntry":
        return replace(
            self,
            phrase=(self.phrase or "").strip().lower(),
            niche=(self.niche or "").strip().lower(),
            topic=(self.topic or "").strip().lower(),
            risk_level=max(0, min(100, int(self.risk_level))),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "phrase": self.phrase,
            "niche": self.niche,
            "topic": self.topic,
            "risk_level": self.risk_level,
            "generated_at": self.generated_at.isoformat(),
            "was_approved": self.was_approved,
        }


class GenerationHistoryStore:
    """SQLite-backed generation history."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        now_fn: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize history store.

        Args:
            db_path: Path to SQLite database (defaults to project data dir)
            now_fn: Clock used for recency windows
        """
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
            CREATE TABLE IF NOT EXISTS generation_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT,
                phrase TEXT NOT NULL,
                niche TEXT NOT NULL,
                topic TEXT NOT NULL,
                risk_level INTEGER DEFAULT 50,
                generated_at TEXT NOT NULL,
                was_approved INTEGER
            )
        ''')
        cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_history_user_time
            ON generation_history (user_id, generated_at)
        ''')

        conn.commit()
        conn.close()

    def append(self, entry: GenerationHistoryEntry) -> int:
        """Insert one entry and return its row id."""
        entry = entry.normalized()
        approved = None if entry.was_approved is None else int(entry.was_approved)

        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO generation_history
                (user_id, phrase, niche, topic, risk_level, generated_at, was_approved)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (
                entry.user_id,
                entry.phrase,
                entry.niche,
                entry.topic,
                entry.risk_level,
                entry.generated_at.strftime(TIMESTAMP_FORMAT),
                approved
            ))
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()

    def query_recent(
        self,
        user_id: Optional[str] = None,
        hours_back: float = 72,
        limit: int = DEFAULT_QUERY_LIMIT
    ) -> List[GenerationHistoryEntry]:
        """
        Entries within the last `hours_back` hours, newest first.

        Args:
            user_id: Restrict to one user (None = all users)
            hours_back: Recency window
            limit: Maximum rows returned
        """
        cutoff = (self.now_fn() - timedelta(hours=hours_back)).strftime(TIMESTAMP_FORMAT)

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            cursor = conn.cursor()
            if user_id is not None:
                cursor.execute('''
                    SELECT * FROM generation_history
                    WHERE user_id = ? AND generated_at >= ?
                    ORDER BY generated_at DESC, id DESC LIMIT ?
                ''', (user_id, cutoff, limit))
            else:
                cursor.execute('''
                    SELECT * FROM generation_history
                    WHERE generated_at >= ?
                    ORDER BY generated_at DESC, id DESC LIMIT ?
                ''', (cutoff, limit))
            rows = cursor.fetchall()
        finally:
            conn.close()

        return [self._row_to_entry(row) for row in rows]

    def recent_niches(self, user_id: Optional[str] = None, hours_back: float = 4) -> List[str]:
        """Distinct niches used within the window, newest first."""
        entries = self.query_recent(user_id=user_id, hours_back=hours_back)
        return list(dict.fromkeys(e.niche for e in entries))

    def recent_phrases(self, user_id: Optional[str] = None, hours_back: float = 72) -> List[str]:
        entries = self.query_recent(user_id=user_id, hours_back=hours_back)
        return list(dict.fromkeys(e.phrase for e in entries))

    def get_stats(self) -> Dict:
        """Get database statistics."""
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM generation_history")
            total = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(DISTINCT niche) FROM generation_history")
            unique_niches = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(DISTINCT user_id) FROM generation_history")
            users = cursor.fetchone()[0]

            cursor.execute('''
                SELECT niche, COUNT(*) AS uses FROM generation_history
                GROUP BY niche ORDER BY uses DESC LIMIT 5
            ''')
            top_niches = [{"niche": row[0], "uses": row[1]} for row in cursor.fetchall()]
        finally:
            conn.close()

        return {
            "total_generations": total,
            "unique_niches": unique_niches,
            "users": users,
            "top_niches": top_niches,
            "db_path": self.db_path
        }

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> GenerationHistoryEntry:
        approved = row["was_approved"]
        return GenerationHistoryEntry(
            id=row["id"],
            user_id=row["user_id"],
            phrase=row["phrase"],
            niche=row["niche"],
            topic=row["topic"],
            risk_level=row["risk_level"],
            generated_at=datetime.strptime(row["generated_at"], TIMESTAMP_FORMAT),
            was_approved=None if approved is None else bool(approved)
        )


class InMemoryHistoryStore:
    """Process-local history with the same interface as the SQLite store."""

    def __init__(self, now_fn: Callable[[], datetime] = datetime.now):
        self.now_fn = now_fn
        self._entries: List[GenerationHistoryEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: GenerationHistoryEntry) -> int:
        with self._lock:
            entry_id = len(self._entries) + 1
            self._entries.append(replace(entry.normalized(), id=entry_id))
            return entry_id

    def query_recent(
        self,
        user_id: Optional[str] = None,
        hours_back: float = 72,
        limit: int = DEFAULT_QUERY_LIMIT
    ) -> List[GenerationHistoryEntry]:
        cutoff = self.now_fn() - timedelta(hours=hours_back)
        with self._lock:
            matching = [
                e for e in self._entries
                if e.generated_at >= cutoff and (user_id is None or e.user_id == user_id)
            ]
        matching.sort(key=lambda e: (e.generated_at, e.id or 0), reverse=True)
        return matching[:limit]

    def recent_niches(self, user_id: Optional[str] = None, hours_back: float = 4) -> List[str]:
        entries = self.query_recent(user_id=user_id, hours_back=hours_back)
        return list(dict.fromkeys(e.niche for e in entries))

    def recent_phrases(self, user_id: Optional[str] = None, hours_back: float = 72) -> List[str]:
        entries = self.query_recent(user_id=user_id, hours_back=hours_back)
        return list(dict.fromkeys(e.phrase for e in entries))

    def get_stats(self) -> Dict:
        with self._lock:
            entries = list(self._entries)
        niche_counts: Dict[str, int] = {}
        for e in entries:
            niche_counts[e.niche] = niche_counts.get(e.niche, 0) + 1
        top = sorted(niche_counts.items(), key=lambda kv: kv[1], reverse=True)[:5]
        return {
            "total_generations": len(entries),
            "unique_niches": len(niche_counts),
            "users": len({e.user_id for e in entries}),
            "top_niches": [{"niche": n, "uses": c} for n, c in top],
            "db_path": None
        }


class HistoryRecorder:
    """
    Fire-and-forget history writer.

    `record` returns as soon as the write is queued on a single background
    worker. Failures are logged and never reach the caller.
    """

    def __init__(self, store, background: bool = True):
        """
        Args:
            store: Any object with append(GenerationHistoryEntry)
            background: False runs writes inline (still never raises)
        """
        self.store = store
        self.background = background
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="history") if background else None
        self._pending: List[Future] = []
        self._lock = threading.Lock()

    def record(
        self,
        user_id: Optional[str],
        phrase: str,
        niche: str,
        topic: str,
        risk_level: int = 50,
        was_approved: Optional[bool] = None
    ) -> None:
        entry = GenerationHistoryEntry(
            user_id=user_id,
            phrase=phrase,
            niche=niche,
            topic=topic,
            risk_level=risk_level,
            was_approved=was_approved
        )
        self.record_entry(entry)

    def record_entry(self, entry: GenerationHistoryEntry) -> None:
        if self._executor is None:
            self._write(entry)
            return

        try:
            future = self._executor.submit(self._write, entry)
        except RuntimeError as e:
            logger.warning("History recorder closed, dropping entry for %s: %s", entry.niche, e)
            return

        with self._lock:
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(future)

    def _write(self, entry: GenerationHistoryEntry) -> None:
        try:
            self.store.append(entry)
            logger.debug("Recorded generation: %s / %s", entry.niche, entry.phrase)
        except Exception as e:
            logger.warning("Failed to record generation history (%s): %s", entry.niche, e)

    def flush(self, timeout: Optional[float] = 10.0) -> None:
        """Block until queued writes finish (tests, shutdown)."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def close(self) -> None:
        if self._executor is not None:
            self.flush()
            self._executor.shutdown(wait=True)
            self._executor = None
