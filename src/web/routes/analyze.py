"""Stateless text analysis."""

from fastapi import APIRouter, Depends

from journal.sentiment import TextAnalyzer
from web.auth import get_current_user
from web.deps import get_analyzer
from web.models import AnalyzeRequest

router = APIRouter(prefix="/api/analyze", tags=["analyze"])


@router.post("")
async def analyze(
    body: AnalyzeRequest,
    user: dict = Depends(get_current_user),
    analyzer: TextAnalyzer = Depends(get_analyzer),
):
    """Analyze text without storing it."""
    return analyzer.analyze(body.text).to_dict()
