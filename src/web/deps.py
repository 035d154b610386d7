"""Dependency injection for FastAPI routes."""

from functools import lru_cache

import structlog
from fastapi import Depends

from cli.config import load_config_model
from cli.config_models import PacefulConfig
from ers import ERSCalculator
from journal.sentiment import TextAnalyzer, create_analyzer
from journal.service import JournalService
from mood.service import MoodService
from storage import WellnessStore

logger = structlog.get_logger()


@lru_cache
def get_config() -> PacefulConfig:
    """Load shared config (./config.yaml or ~/paceful/config.yaml)."""
    return load_config_model()


@lru_cache
def get_store() -> WellnessStore:
    """One store per process; each call opens its own short-lived connection."""
    db_path = get_config().paths.db_path
    logger.info("web.store_opened", db_path=str(db_path))
    return WellnessStore(db_path)


def get_analyzer(config: PacefulConfig = Depends(get_config)) -> TextAnalyzer:
    return create_analyzer(config.analysis.analyzer, notable_limit=config.analysis.notable_limit)


def get_ers_calculator(
    store: WellnessStore = Depends(get_store),
    config: PacefulConfig = Depends(get_config),
) -> ERSCalculator:
    cfg = config.ers
    return ERSCalculator(
        store,
        weights=cfg.weights,
        dead_band=cfg.dead_band,
        mood_window_days=cfg.mood_window_days,
        journal_window_days=cfg.journal_window_days,
        insight_window_days=cfg.insight_window_days,
    )


def get_journal_service(
    store: WellnessStore = Depends(get_store),
    analyzer: TextAnalyzer = Depends(get_analyzer),
    calculator: ERSCalculator = Depends(get_ers_calculator),
    config: PacefulConfig = Depends(get_config),
) -> JournalService:
    return JournalService(
        store,
        analyzer=analyzer,
        ers_calculator=calculator,
        min_words=config.analysis.min_words,
    )


def get_mood_service(
    store: WellnessStore = Depends(get_store),
    calculator: ERSCalculator = Depends(get_ers_calculator),
) -> MoodService:
    return MoodService(store, ers_calculator=calculator)
