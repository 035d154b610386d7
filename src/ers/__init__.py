"""Emotional Regulation Score engine."""

from .calculator import (
    BASELINE_SCORE,
    DEFAULT_WEIGHTS,
    BatchResult,
    ERSCalculator,
    calculate_and_store_ers_score,
    combine_components,
    get_stage_info,
)
from .models import ERSScore

__all__ = [
    "ERSCalculator",
    "ERSScore",
    "BatchResult",
    "BASELINE_SCORE",
    "DEFAULT_WEIGHTS",
    "calculate_and_store_ers_score",
    "combine_components",
    "get_stage_info",
]
