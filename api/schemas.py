"""API-specific request and response models."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from models import CourseConfig, PlayerRef, Sex, TeeGroup
from teesheet.editor import EditSession
from teesheet.handicap import format_handicap, format_handicap_index, handicaps_for_player
from teesheet.times import format_hhmm


# ================================================================
# Responses
# ================================================================

class PlayerResponse(BaseModel):
    """A player with handicaps ready for display."""
    id: str
    name: str
    is_guest: bool = False
    handicap_index: Optional[float] = None
    course_handicap: Optional[int] = None
    playing_handicap: Optional[int] = None
    handicap_index_display: str = "-"
    playing_handicap_display: str = "-"
    tee_color: Optional[str] = None


class GroupResponse(BaseModel):
    id: str
    time: datetime
    time_hhmm: str
    players: List[PlayerResponse]


class TeeSheetResponse(BaseModel):
    """Current state of an edit session."""
    event_id: Optional[str] = None
    start_time: datetime
    interval_minutes: int
    is_dirty: bool
    groups: List[GroupResponse]
    unassigned: List[PlayerResponse]
    assumptions: List[str] = []


class HandicapResponse(BaseModel):
    value: Optional[int] = None
    display: str = "-"


class AllowanceResponse(BaseModel):
    format: Optional[str] = None
    allowance_percent: float


def player_response(player: PlayerRef, course_config: CourseConfig) -> PlayerResponse:
    result = handicaps_for_player(player, course_config)
    return PlayerResponse(
        id=player.id,
        name=player.name,
        is_guest=player.is_guest,
        handicap_index=player.handicap_index,
        course_handicap=result.course_handicap,
        playing_handicap=result.playing_handicap,
        handicap_index_display=format_handicap_index(player.handicap_index),
        playing_handicap_display=format_handicap(result.playing_handicap),
        tee_color=result.tee_setting.tee_color if result.tee_setting else None,
    )


def group_response(group: TeeGroup, course_config: CourseConfig) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        time=group.time,
        time_hhmm=format_hhmm(group.time),
        players=[player_response(p, course_config) for p in group.players],
    )


def tee_sheet_response(
    session: EditSession, course_config: CourseConfig, assumptions: List[str]
) -> TeeSheetResponse:
    return TeeSheetResponse(
        event_id=session.event_id,
        start_time=session.tee_sheet.start_time,
        interval_minutes=session.tee_sheet.interval_minutes,
        is_dirty=session.is_dirty,
        groups=[group_response(g, course_config) for g in session.groups],
        unassigned=[player_response(p, course_config) for p in session.unassigned],
        assumptions=assumptions,
    )


# ================================================================
# Requests
# ================================================================

class GenerateRequest(BaseModel):
    start_time: Optional[str] = None  # HH:MM
    interval_minutes: Optional[int] = Field(None, ge=1, le=60)
    confirm: bool = False


class MoveRequest(BaseModel):
    player_id: str
    from_group_id: str
    to_group_id: str
    position: Optional[int] = Field(None, ge=0)


class SwapRequest(BaseModel):
    player_a_id: str
    group_a_id: str
    player_b_id: str
    group_b_id: str


class RemoveRequest(BaseModel):
    player_id: str
    group_id: str


class RetimeRequest(BaseModel):
    time: str  # HH:MM


class ReorderRequest(BaseModel):
    from_index: int
    to_index: int


class AddGuestRequest(BaseModel):
    name: str
    handicap_index: Optional[float] = None
    sex: Sex = Sex.MALE


class SaveRequest(BaseModel):
    notes: Optional[str] = None
    nearest_to_pin_holes: Optional[str] = None  # "3, 7, 14"
    longest_drive_holes: Optional[str] = None
