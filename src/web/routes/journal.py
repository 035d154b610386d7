"""Journal routes: create entries with analysis, list, fetch, delete."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from journal.service import JournalService
from storage import WellnessStore
from web.auth import get_current_user
from web.deps import get_journal_service, get_store
from web.models import JournalCreate, JournalCreated, JournalEntryOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api/journal", tags=["journal"])


@router.get("", response_model=list[JournalEntryOut])
async def list_entries(
    limit: int = 50,
    user: dict = Depends(get_current_user),
    store: WellnessStore = Depends(get_store),
):
    """Most recent entries first."""
    entries = {e.id: e for e in store.list_journal_entries(user["id"], limit=limit)}
    analyses = store.list_analyses(user["id"], limit=limit)
    out = []
    for a in reversed(analyses):
        entry = entries.get(a.entry_id)
        if entry is None:
            continue
        out.append(
            JournalEntryOut(
                id=a.entry_id,
                title=entry.title,
                created_at=a.entry_created_at.isoformat(),
                sentiment_score=a.sentiment_score,
                sentiment_level=str(a.sentiment_level),
                word_count=a.word_count,
                insight_score=a.insight_score,
                markers=[str(m) for m in a.markers],
            )
        )
    return out


@router.post("", response_model=JournalCreated, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: JournalCreate,
    user: dict = Depends(get_current_user),
    service: JournalService = Depends(get_journal_service),
):
    record = service.record_entry(
        user["id"], body.content, title=body.title, created_at=body.created_at
    )
    return record.to_dict()


@router.get("/{entry_id}")
async def get_entry(
    entry_id: str,
    user: dict = Depends(get_current_user),
    store: WellnessStore = Depends(get_store),
):
    entry = store.get_journal_entry(user["id"], entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    analysis = store.get_analysis(user["id"], entry_id)
    return {
        "entry": entry.to_dict(),
        "analysis": analysis.to_dict() if analysis else None,
    }


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user: dict = Depends(get_current_user),
    service: JournalService = Depends(get_journal_service),
):
    if not service.delete_entry(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
