"""Emotional Regulation Score routes."""

from datetime import timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException

from ers import ERSCalculator, get_stage_info
from errors import InvalidInputError
from storage import WellnessStore
from web.auth import get_current_user
from web.deps import get_ers_calculator, get_store
from web.models import ERSCalculateRequest, ReadinessCreate

logger = structlog.get_logger()

router = APIRouter(prefix="/api/ers", tags=["ers"])


def _with_stage(score) -> dict:
    data = score.to_dict()
    data["stage_info"] = get_stage_info(score.stage)
    return data


@router.post("/calculate")
async def calculate(
    body: ERSCalculateRequest | None = None,
    user: dict = Depends(get_current_user),
    calculator: ERSCalculator = Depends(get_ers_calculator),
):
    """Score now, or at a later instant than anything already stored.

    Back-dated recomputation would replace a stored point, so it is CLI-only.
    """
    at = body.at if body else None
    if at is not None:
        if at.tzinfo is not None:
            at = at.astimezone(timezone.utc).replace(tzinfo=None)
        latest = calculator.store.get_latest_ers_score(user["id"])
        if latest is not None and at <= latest.computed_at:
            raise InvalidInputError(
                f"at must be later than the latest stored score ({latest.computed_at.isoformat()})"
            )
    return _with_stage(calculator.calculate_and_store(user["id"], now=at))


@router.get("")
async def history(
    limit: int = 12,
    user: dict = Depends(get_current_user),
    store: WellnessStore = Depends(get_store),
):
    """Stored scores, oldest first."""
    return [s.to_dict() for s in store.list_ers_scores(user["id"], limit=limit)]


@router.get("/latest")
async def latest(
    user: dict = Depends(get_current_user),
    store: WellnessStore = Depends(get_store),
):
    score = store.get_latest_ers_score(user["id"])
    if score is None:
        raise HTTPException(status_code=404, detail="No ERS score yet")
    return _with_stage(score)


@router.post("/readiness")
async def report_readiness(
    body: ReadinessCreate,
    user: dict = Depends(get_current_user),
    store: WellnessStore = Depends(get_store),
    calculator: ERSCalculator = Depends(get_ers_calculator),
):
    """Record self-reported readiness and refresh the score."""
    store.add_readiness(user["id"], body.readiness)
    logger.info("ers.readiness_reported", user_id=user["id"], readiness=str(body.readiness))
    return _with_stage(calculator.calculate_and_store(user["id"]))
