"""ERS score record."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import ERSStage, Trend

CALCULATION_METHOD = "v3_six_components"


@dataclass
class ERSScore:
    user_id: str
    score: float
    components: dict[str, Optional[float]]
    stage: ERSStage
    trend: Trend = Trend.STABLE
    confidence: float = 0.0
    delta: Optional[float] = None
    computed_at: datetime = field(default_factory=datetime.now)
    week_of: str = ""
    data_points: int = 0
    mood_entries_count: int = 0
    is_baseline: bool = False
    calculation_method: str = CALCULATION_METHOD
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "score": self.score,
            "stage": str(self.stage),
            "trend": str(self.trend),
            "confidence": self.confidence,
            "delta": self.delta,
            "components": dict(self.components),
            "computed_at": self.computed_at.isoformat(),
            "week_of": self.week_of,
            "data_points": self.data_points,
            "mood_entries_count": self.mood_entries_count,
            "is_baseline": self.is_baseline,
            "calculation_method": self.calculation_method,
        }
