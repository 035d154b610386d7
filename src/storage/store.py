"""SQLite persistence for journal entries, analyses, mood logs and ERS scores."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

import structlog

from db import wal_connect
from ers.models import ERSScore
from errors import InvalidInputError, StorageUnavailableError
from journal.models import AnalysisResult, AnalyzedEntry, JournalEntry
from mood.calculator import get_mood_label, validate_mood_value
from mood.models import MoodEntry
from shared_types import ERSStage, InsightMarker, Readiness, SentimentLevel, Trend

logger = structlog.get_logger()

DEFAULT_MAX_HISTORY = 500


def _ts(value: datetime) -> str:
    """Fixed-width ISO string so lexical order matches time order."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


class WellnessStore:
    """Per-user journal, mood and ERS history in a single SQLite file."""

    def __init__(self, db_path: Path, max_history: int = DEFAULT_MAX_HISTORY):
        self.db_path = Path(db_path).expanduser()
        self.max_history = max_history
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_tables()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = None
        try:
            conn = wal_connect(self.db_path, row_factory=True)
            with conn:
                yield conn
        except sqlite3.Error as e:
            logger.error("store.error", db=str(self.db_path), error=str(e))
            raise StorageUnavailableError(f"Storage unavailable: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def _init_tables(self):
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS journal_entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT,
                    content TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    deleted_at TIMESTAMP
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS journal_analyses (
                    entry_id TEXT PRIMARY KEY REFERENCES journal_entries(id),
                    user_id TEXT NOT NULL,
                    entry_created_at TIMESTAMP NOT NULL,
                    analyzed_at TIMESTAMP NOT NULL,
                    sentiment_score REAL NOT NULL,
                    sentiment_level TEXT NOT NULL,
                    confidence REAL NOT NULL,
                    primary_emotion TEXT,
                    secondary_emotion TEXT,
                    word_count INTEGER NOT NULL DEFAULT 0,
                    insight_score REAL NOT NULL DEFAULT 0,
                    markers TEXT NOT NULL DEFAULT '[]',
                    lexicon_version TEXT,
                    analysis TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS mood_entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    mood_value INTEGER NOT NULL CHECK(mood_value BETWEEN 1 AND 10),
                    mood_label TEXT,
                    emotions TEXT NOT NULL DEFAULT '[]',
                    note TEXT,
                    logged_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS readiness_reports (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    readiness TEXT NOT NULL
                        CHECK(readiness IN ('not_at_all','a_little','mostly','completely')),
                    reported_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS ers_scores (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    computed_at TIMESTAMP NOT NULL,
                    score REAL NOT NULL CHECK(score BETWEEN 0 AND 100),
                    stage TEXT NOT NULL,
                    trend TEXT NOT NULL,
                    confidence REAL NOT NULL,
                    delta REAL,
                    components TEXT NOT NULL,
                    week_of TEXT NOT NULL,
                    data_points INTEGER NOT NULL DEFAULT 0,
                    mood_entries_count INTEGER NOT NULL DEFAULT 0,
                    is_baseline INTEGER NOT NULL DEFAULT 0,
                    calculation_method TEXT NOT NULL,
                    UNIQUE(user_id, computed_at)
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_user ON journal_entries(user_id, created_at)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_analysis_user "
                "ON journal_analyses(user_id, entry_created_at)"
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_mood_user ON mood_entries(user_id, logged_at)")
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_readiness_user ON readiness_reports(user_id, reported_at)"
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_ers_user ON ers_scores(user_id, computed_at)")

    def _window_query(
        self,
        table: str,
        ts_column: str,
        user_id: str,
        since: Optional[datetime],
        until: Optional[datetime],
        limit: Optional[int],
        extra: str = "",
    ) -> list[sqlite3.Row]:
        """Most recent `limit` rows in [since, until], returned oldest first."""
        query = f"SELECT * FROM {table} WHERE user_id = ?{extra}"
        params: list = [user_id]
        if since:
            query += f" AND {ts_column} >= ?"
            params.append(_ts(since))
        if until:
            query += f" AND {ts_column} <= ?"
            params.append(_ts(until))
        query += f" ORDER BY {ts_column} DESC, rowid DESC LIMIT ?"
        params.append(limit or self.max_history)
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return list(reversed(rows))

    # --- Journal ---

    def add_journal_entry(self, entry: JournalEntry) -> JournalEntry:
        with self._connect() as conn:
            self._insert_entry(conn, entry)
        logger.debug("store.journal_added", user_id=entry.user_id, entry_id=entry.id)
        return entry

    def add_analyzed_entry(self, entry: JournalEntry, analysis: AnalysisResult) -> AnalyzedEntry:
        """Insert an entry and its analysis in one transaction; neither lands alone."""
        analyzed_at = datetime.now()
        with self._connect() as conn:
            self._insert_entry(conn, entry)
            self._insert_analysis(conn, entry, analysis, analyzed_at)
        logger.debug("store.journal_added", user_id=entry.user_id, entry_id=entry.id)
        return self._analyzed_entry(entry, analysis, analyzed_at)

    @staticmethod
    def _insert_entry(conn: sqlite3.Connection, entry: JournalEntry) -> None:
        conn.execute(
            """INSERT INTO journal_entries (id, user_id, title, content, created_at)
            VALUES (?, ?, ?, ?, ?)""",
            (entry.id, entry.user_id, entry.title, entry.content, _ts(entry.created_at)),
        )

    def get_journal_entry(self, user_id: str, entry_id: str) -> Optional[JournalEntry]:
        with self._connect() as conn:
            row = conn.execute(
                """SELECT * FROM journal_entries
                WHERE id = ? AND user_id = ? AND deleted_at IS NULL""",
                (entry_id, user_id),
            ).fetchone()
        return self._row_to_journal(row) if row else None

    def list_journal_entries(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[JournalEntry]:
        rows = self._window_query(
            "journal_entries", "created_at", user_id, since, until, limit,
            extra=" AND deleted_at IS NULL",
        )
        return [self._row_to_journal(r) for r in rows]

    def delete_journal_entry(self, user_id: str, entry_id: str) -> bool:
        """Soft delete; the entry and its analysis drop out of every query."""
        with self._connect() as conn:
            cur = conn.execute(
                """UPDATE journal_entries SET deleted_at = ?
                WHERE id = ? AND user_id = ? AND deleted_at IS NULL""",
                (_ts(datetime.now()), entry_id, user_id),
            )
        return cur.rowcount > 0

    def save_analysis(self, entry: JournalEntry, analysis: AnalysisResult) -> AnalyzedEntry:
        """Store the analysis for an existing entry, replacing any earlier one."""
        analyzed_at = datetime.now()
        with self._connect() as conn:
            self._insert_analysis(conn, entry, analysis, analyzed_at)
        return self._analyzed_entry(entry, analysis, analyzed_at)

    @staticmethod
    def _insert_analysis(
        conn: sqlite3.Connection,
        entry: JournalEntry,
        analysis: AnalysisResult,
        analyzed_at: datetime,
    ) -> None:
        conn.execute(
            """INSERT OR REPLACE INTO journal_analyses
            (entry_id, user_id, entry_created_at, analyzed_at, sentiment_score,
             sentiment_level, confidence, primary_emotion, secondary_emotion,
             word_count, insight_score, markers, lexicon_version, analysis)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                entry.id,
                entry.user_id,
                _ts(entry.created_at),
                _ts(analyzed_at),
                analysis.sentiment.score,
                str(analysis.sentiment.level),
                analysis.sentiment.confidence,
                str(analysis.emotions.primary) if analysis.emotions.primary else None,
                str(analysis.emotions.secondary) if analysis.emotions.secondary else None,
                analysis.language.word_count,
                analysis.insights.insight_score,
                json.dumps([str(m) for m in analysis.markers]),
                analysis.lexicon_version,
                json.dumps(analysis.to_dict()),
            ),
        )

    @staticmethod
    def _analyzed_entry(
        entry: JournalEntry, analysis: AnalysisResult, analyzed_at: datetime
    ) -> AnalyzedEntry:
        return AnalyzedEntry(
            entry_id=entry.id,
            user_id=entry.user_id,
            entry_created_at=_parse_ts(_ts(entry.created_at)),
            analyzed_at=analyzed_at,
            sentiment_score=analysis.sentiment.score,
            sentiment_level=analysis.sentiment.level,
            word_count=analysis.language.word_count,
            insight_score=analysis.insights.insight_score,
            markers=list(analysis.markers),
            analysis=analysis,
        )

    def get_analysis(self, user_id: str, entry_id: str) -> Optional[AnalyzedEntry]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM journal_analyses WHERE entry_id = ? AND user_id = ?",
                (entry_id, user_id),
            ).fetchone()
        return self._row_to_analyzed(row) if row else None

    def list_analyses(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[AnalyzedEntry]:
        rows = self._window_query(
            "journal_analyses", "entry_created_at", user_id, since, until, limit,
            extra=(
                " AND entry_id IN (SELECT id FROM journal_entries WHERE deleted_at IS NULL)"
            ),
        )
        return [self._row_to_analyzed(r) for r in rows]

    # --- Mood ---

    def add_mood_entry(self, entry: MoodEntry) -> MoodEntry:
        value = validate_mood_value(entry.mood_value)
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO mood_entries
                (id, user_id, mood_value, mood_label, emotions, note, logged_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    entry.id,
                    entry.user_id,
                    value,
                    get_mood_label(value).lower(),
                    json.dumps(list(entry.emotions or [])),
                    entry.note,
                    _ts(entry.logged_at),
                ),
            )
        logger.debug("store.mood_added", user_id=entry.user_id, mood_value=value)
        return entry

    def list_mood_entries(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[MoodEntry]:
        rows = self._window_query("mood_entries", "logged_at", user_id, since, until, limit)
        return [self._row_to_mood(r) for r in rows]

    # --- Self-reported readiness ---

    def add_readiness(
        self, user_id: str, readiness: Readiness | str, reported_at: Optional[datetime] = None
    ) -> Readiness:
        try:
            value = Readiness(readiness)
        except ValueError:
            raise InvalidInputError(
                f"Invalid readiness: {readiness!r}. Must be one of {[r.value for r in Readiness]}"
            ) from None
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO readiness_reports (user_id, readiness, reported_at) VALUES (?, ?, ?)",
                (user_id, str(value), _ts(reported_at or datetime.now())),
            )
        return value

    def get_latest_readiness(
        self, user_id: str, before: Optional[datetime] = None
    ) -> Optional[Readiness]:
        query = "SELECT readiness FROM readiness_reports WHERE user_id = ?"
        params: list = [user_id]
        if before:
            query += " AND reported_at <= ?"
            params.append(_ts(before))
        query += " ORDER BY reported_at DESC, id DESC LIMIT 1"
        with self._connect() as conn:
            row = conn.execute(query, params).fetchone()
        return Readiness(row["readiness"]) if row else None

    # --- ERS ---

    def save_ers_score(self, score: ERSScore) -> ERSScore:
        """Append a score; a second write for the same instant replaces the first."""
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO ers_scores
                (id, user_id, computed_at, score, stage, trend, confidence, delta,
                 components, week_of, data_points, mood_entries_count, is_baseline,
                 calculation_method)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    score.id,
                    score.user_id,
                    _ts(score.computed_at),
                    score.score,
                    str(score.stage),
                    str(score.trend),
                    score.confidence,
                    score.delta,
                    json.dumps(score.components),
                    score.week_of,
                    score.data_points,
                    score.mood_entries_count,
                    int(score.is_baseline),
                    score.calculation_method,
                ),
            )
        return score

    def get_previous_ers_score(self, user_id: str, before: datetime) -> Optional[ERSScore]:
        """Latest score computed strictly before `before`."""
        with self._connect() as conn:
            row = conn.execute(
                """SELECT * FROM ers_scores WHERE user_id = ? AND computed_at < ?
                ORDER BY computed_at DESC LIMIT 1""",
                (user_id, _ts(before)),
            ).fetchone()
        return self._row_to_ers(row) if row else None

    def get_latest_ers_score(self, user_id: str) -> Optional[ERSScore]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM ers_scores WHERE user_id = ? ORDER BY computed_at DESC LIMIT 1",
                (user_id,),
            ).fetchone()
        return self._row_to_ers(row) if row else None

    def list_ers_scores(self, user_id: str, limit: Optional[int] = None) -> list[ERSScore]:
        rows = self._window_query("ers_scores", "computed_at", user_id, None, None, limit)
        return [self._row_to_ers(r) for r in rows]

    def list_user_ids(self) -> list[str]:
        """Every user with journal, mood or readiness data."""
        with self._connect() as conn:
            rows = conn.execute(
                """SELECT user_id FROM journal_entries
                UNION SELECT user_id FROM mood_entries
                UNION SELECT user_id FROM readiness_reports
                ORDER BY user_id"""
            ).fetchall()
        return [r["user_id"] for r in rows]

    # --- Row mapping ---

    @staticmethod
    def _row_to_journal(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            content=row["content"],
            created_at=_parse_ts(row["created_at"]),
        )

    @staticmethod
    def _row_to_analyzed(row: sqlite3.Row) -> AnalyzedEntry:
        return AnalyzedEntry(
            entry_id=row["entry_id"],
            user_id=row["user_id"],
            entry_created_at=_parse_ts(row["entry_created_at"]),
            analyzed_at=_parse_ts(row["analyzed_at"]),
            sentiment_score=row["sentiment_score"],
            sentiment_level=SentimentLevel(row["sentiment_level"]),
            word_count=row["word_count"],
            insight_score=row["insight_score"],
            markers=[InsightMarker(m) for m in json.loads(row["markers"])],
            analysis=AnalysisResult.from_dict(json.loads(row["analysis"])),
        )

    @staticmethod
    def _row_to_mood(row: sqlite3.Row) -> MoodEntry:
        return MoodEntry(
            id=row["id"],
            user_id=row["user_id"],
            mood_value=row["mood_value"],
            emotions=json.loads(row["emotions"] or "[]"),
            note=row["note"],
            logged_at=_parse_ts(row["logged_at"]),
        )

    @staticmethod
    def _row_to_ers(row: sqlite3.Row) -> ERSScore:
        return ERSScore(
            id=row["id"],
            user_id=row["user_id"],
            computed_at=_parse_ts(row["computed_at"]),
            score=row["score"],
            stage=ERSStage(row["stage"]),
            trend=Trend(row["trend"]),
            confidence=row["confidence"],
            delta=row["delta"],
            components=json.loads(row["components"]),
            week_of=row["week_of"],
            data_points=row["data_points"],
            mood_entries_count=row["mood_entries_count"],
            is_baseline=bool(row["is_baseline"]),
            calculation_method=row["calculation_method"],
        )
