"""Pydantic request/response schemas for the web API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt

from shared_types import Readiness

# --- Analysis ---


class AnalyzeRequest(BaseModel):
    text: str = Field(..., max_length=100_000)


# --- Journal ---


class JournalCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=100_000)
    title: Optional[str] = Field(None, max_length=200)
    created_at: Optional[datetime] = None


class JournalEntryOut(BaseModel):
    id: str
    title: Optional[str] = None
    created_at: str
    sentiment_score: float
    sentiment_level: str
    word_count: int
    insight_score: float
    markers: list[str] = []


class JournalCreated(BaseModel):
    entry: dict
    analysis: dict
    ers: Optional[dict] = None


# --- Mood ---


class MoodCreate(BaseModel):
    # Strict so "7", true and 7.0 are rejected; the range is checked by the mood calculator
    mood_value: StrictInt
    emotions: list[str] = []
    note: Optional[str] = Field(None, max_length=2000)
    logged_at: Optional[datetime] = None


class MoodEntryOut(BaseModel):
    id: str
    mood_value: int
    logged_at: str
    emotions: list[str] = []
    note: Optional[str] = None


# --- ERS ---


class ERSCalculateRequest(BaseModel):
    at: Optional[datetime] = None


class ReadinessCreate(BaseModel):
    readiness: Readiness
