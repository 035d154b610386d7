"""New-entry flow: store, analyze, persist the analysis, refresh the ERS."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from errors import InvalidInputError, PacefulError

from .models import AnalyzedEntry, JournalEntry
from .sentiment import TextAnalyzer, create_analyzer

logger = structlog.get_logger()

DEFAULT_MIN_WORDS = 5


@dataclass
class JournalRecord:
    entry: JournalEntry
    analysis: AnalyzedEntry
    ers: Optional[object] = None  # ERSScore, when recomputation succeeded

    def to_dict(self) -> dict:
        return {
            "entry": self.entry.to_dict(),
            "analysis": self.analysis.to_dict(),
            "ers": self.ers.to_dict() if self.ers else None,
        }


class JournalService:
    """Ties the analyzer, the store and the ERS calculator together."""

    def __init__(
        self,
        store,
        analyzer: Optional[TextAnalyzer] = None,
        ers_calculator=None,
        min_words: int = DEFAULT_MIN_WORDS,
    ):
        self.store = store
        self.analyzer = analyzer or create_analyzer()
        self.ers_calculator = ers_calculator
        self.min_words = min_words

    def record_entry(
        self,
        user_id: str,
        content: str,
        title: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> JournalRecord:
        """Save a new entry with its analysis and trigger an ERS refresh.

        Raises:
            InvalidInputError: Empty content or fewer than min_words words.
        """
        if not isinstance(content, str) or not content.strip():
            raise InvalidInputError("Entry content is required")
        content = content.strip()
        if len(content.split()) < self.min_words:
            raise InvalidInputError(f"Entry must contain at least {self.min_words} words")

        entry = JournalEntry(
            user_id=user_id,
            content=content,
            title=(title or "").strip() or None,
            created_at=created_at or datetime.now(),
        )
        analyzed = self.store.add_analyzed_entry(entry, self.analyzer.analyze(content))
        logger.info(
            "journal.entry_recorded",
            user_id=user_id,
            entry_id=entry.id,
            level=str(analyzed.sentiment_level),
            markers=len(analyzed.markers),
        )

        return JournalRecord(entry=entry, analysis=analyzed, ers=self._refresh_ers(user_id))

    def reanalyze(self, user_id: str, entry_id: str) -> Optional[AnalyzedEntry]:
        """Recompute and replace the stored analysis for one entry."""
        entry = self.store.get_journal_entry(user_id, entry_id)
        if entry is None:
            return None
        return self.store.save_analysis(entry, self.analyzer.analyze(entry.content))

    def delete_entry(self, user_id: str, entry_id: str) -> bool:
        deleted = self.store.delete_journal_entry(user_id, entry_id)
        if deleted:
            self._refresh_ers(user_id)
        return deleted

    def _refresh_ers(self, user_id: str):
        if self.ers_calculator is None:
            return None
        try:
            return self.ers_calculator.calculate_and_store(user_id)
        except PacefulError as e:
            # The entry is already saved; a failed refresh is retried on the next trigger
            logger.warning("journal.ers_refresh_failed", user_id=user_id, error=str(e))
            return None
