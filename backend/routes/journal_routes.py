from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import Optional

from auth import get_current_user, get_optional_user
from config import APP_TIMEZONE
from database import get_db
from services.analysis_service import (
    FALLBACK_ANALYSIS, analyze_entry, analyze_transcript, daily_insight,
)
from services.calendar_service import CalendarService, InvalidRangeError, validate_month
from services.date_utils import month_bounds, resolve_timezone
from services.journal_service import JournalService
from services.llm_router import get_llm_router
from services.streak_service import StreakService

router = APIRouter(prefix="/api/v1", tags=["Journal"])
logger = logging.getLogger(__name__)

APP_TZ = resolve_timezone(APP_TIMEZONE)


class AnalyzeRequest(BaseModel):
    mood: Optional[str] = None
    scale: Optional[int] = None
    entry: Optional[str] = None


class VoiceAnalyzeRequest(BaseModel):
    transcript: Optional[str] = None


def _require_user(db: Session, user_id: int):
    user = JournalService.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid month or year")


# ── Analysis ──────────────────────────────────────────────────────
@router.post("/analyze")
async def analyze(
    body: AnalyzeRequest,
    user_id: Optional[int] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    llm_router=Depends(get_llm_router),
):
    """Analyze a written journal entry; saved to history for signed-in users."""
    if not body.entry or not body.entry.strip():
        raise HTTPException(status_code=400, detail="Journal entry is required")

    try:
        analysis = await analyze_entry(llm_router, body.mood, body.scale, body.entry)
    except Exception as e:
        logger.error(f"Analysis error: {e}")
        return JSONResponse(status_code=500, content=FALLBACK_ANALYSIS)

    if user_id is not None and JournalService.get_user(db, user_id):
        try:
            JournalService.create_entry(db, user_id, body.mood, body.scale, body.entry, analysis)
        except Exception:
            # The user still gets their insight; only history misses the entry.
            logger.exception("Failed to save journal entry")
    else:
        logger.warning("No valid session found for saving history")

    return analysis


@router.post("/analyze-voice")
async def analyze_voice(
    body: VoiceAnalyzeRequest,
    user_id: Optional[int] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    llm_router=Depends(get_llm_router),
):
    """Analyze a voice transcript; mood and scale are inferred by the model."""
    if not body.transcript:
        raise HTTPException(status_code=400, detail="No transcript provided")

    try:
        analysis = await analyze_transcript(llm_router, body.transcript)
        if user_id is not None and JournalService.get_user(db, user_id):
            # Voice entries reuse the inferred scale as their anxiety level
            JournalService.create_entry(
                db, user_id,
                analysis.get("inferredMood"),
                analysis.get("inferredScale"),
                body.transcript,
                {**analysis, "anxietyLevel": analysis.get("inferredScale")},
            )
        return analysis
    except Exception as e:
        logger.error(f"Voice analysis error: {e}")
        raise HTTPException(status_code=500, detail="Failed to analyze voice")


@router.get("/daily-insight")
async def get_daily_insight(llm_router=Depends(get_llm_router)):
    return {"insight": await daily_insight(llm_router)}


# ── Streak & calendar ─────────────────────────────────────────────
@router.get("/streak")
async def get_streak(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    _require_user(db, user_id)
    try:
        timestamps = JournalService.get_entry_timestamps(db, user_id)
        result = StreakService.calculate_streak(timestamps, tz=APP_TZ)
        return result.model_dump(by_alias=True, mode="json")
    except Exception:
        logger.exception("Streak calculation error")
        raise HTTPException(status_code=500, detail="Failed to calculate streak")


@router.get("/calendar-data")
async def get_calendar_data(
    month: Optional[str] = None,
    year: Optional[str] = None,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Entries of one month bucketed by day; defaults to the current month."""
    now = datetime.now(APP_TZ)
    m = _parse_int(month, now.month)
    y = _parse_int(year, now.year)
    try:
        validate_month(m, y)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _require_user(db, user_id)
    try:
        start, end = month_bounds(m, y, APP_TZ)
        entries = JournalService.get_entries_between(db, user_id, start, end)
        calendar_month = CalendarService.aggregate_month(entries, m, y, tz=APP_TZ)
        return calendar_month.model_dump(by_alias=True, mode="json")
    except Exception:
        logger.exception("Calendar data error")
        raise HTTPException(status_code=500, detail="Failed to fetch calendar data")


@router.get("/history")
async def get_history(limit: int = 50, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    _require_user(db, user_id)
    return {"entries": JournalService.get_history(db, user_id, limit)}
