"""Handicap lookups: Course Handicap, Playing Handicap and format allowances."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from api.dependencies import get_db
from api.schemas import AllowanceResponse, HandicapResponse, PlayerResponse, player_response
from database.db_manager import DatabaseManager
from teesheet.context import load_event_context
from teesheet.handicap import (
    course_handicap,
    format_handicap,
    playing_handicap,
    recommended_allowance,
)
from teesheet.roster import resolve_roster

router = APIRouter()


@router.get("/course", response_model=HandicapResponse)
async def get_course_handicap(
    handicap_index: float = Query(..., ge=-10, le=54),
    slope_rating: int = Query(..., ge=55, le=155),
    course_rating: float = Query(..., ge=25, le=85),
    par: int = Query(..., ge=27, le=80),
):
    ch = course_handicap(handicap_index, slope_rating, course_rating, par)
    return HandicapResponse(value=ch, display=format_handicap(ch))


@router.get("/playing", response_model=HandicapResponse)
async def get_playing_handicap(
    course_handicap: int = Query(...),
    allowance_percent: float = Query(..., ge=0, le=100),
):
    ph = playing_handicap(course_handicap, allowance_percent)
    return HandicapResponse(value=ph, display=format_handicap(ph))


@router.get("/allowance", response_model=AllowanceResponse)
async def get_recommended_allowance(format: Optional[str] = Query(None)):
    return AllowanceResponse(format=format, allowance_percent=recommended_allowance(format))


@router.get("/events/{event_id}", response_model=List[PlayerResponse])
async def get_event_handicaps(event_id: str, db: DatabaseManager = Depends(get_db)):
    """Handicaps for everyone attending an event, in roster order."""
    context = await load_event_context(db, event_id)
    if context is None:
        raise HTTPException(404, "Event not found")
    event = context.event
    roster = resolve_roster(
        event.attending_member_ids([m.id for m in context.members]),
        event.guests,
        context.members,
    )
    return [player_response(p, context.course_config) for p in roster]
