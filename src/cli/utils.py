"""Shared CLI utilities."""

import sys
from typing import Optional

import structlog
from rich.console import Console

from errors import StorageUnavailableError

console = Console()
logger = structlog.get_logger()


def get_components(config_model=None):
    """Initialize store, analyzer, ERS calculator and services from config.

    Args:
        config_model: Pre-loaded PacefulConfig; loaded from disk when None.
    """
    from cli.config import load_config_model
    from ers import ERSCalculator
    from journal.sentiment import create_analyzer
    from journal.service import JournalService
    from mood.service import MoodService
    from storage import WellnessStore

    if config_model is None:
        try:
            config_model = load_config_model()
        except ValueError as e:
            console.print(f"[red]Config error:[/] {e}")
            sys.exit(1)

    try:
        store = WellnessStore(config_model.paths.db_path)
    except StorageUnavailableError as e:
        console.print(f"[red]Database unavailable:[/] {e}")
        sys.exit(1)

    ers_cfg = config_model.ers
    calculator = ERSCalculator(
        store,
        weights=ers_cfg.weights,
        dead_band=ers_cfg.dead_band,
        mood_window_days=ers_cfg.mood_window_days,
        journal_window_days=ers_cfg.journal_window_days,
        insight_window_days=ers_cfg.insight_window_days,
    )
    analyzer = create_analyzer(
        config_model.analysis.analyzer, notable_limit=config_model.analysis.notable_limit
    )

    return {
        "config_model": config_model,
        "store": store,
        "analyzer": analyzer,
        "ers": calculator,
        "journal": JournalService(
            store,
            analyzer=analyzer,
            ers_calculator=calculator,
            min_words=config_model.analysis.min_words,
        ),
        "mood": MoodService(store, ers_calculator=calculator),
    }


def resolve_user(c: dict, user_id: Optional[str]) -> str:
    """Explicit --user wins, else the configured default."""
    return (user_id or "").strip() or c["config_model"].user.default_id
