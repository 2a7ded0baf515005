"""Tee sheet API endpoints: open a session, generate, edit and save."""

from contextlib import contextmanager
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Literal, Optional

from api.dependencies import get_db, get_saver, get_sessions, require_manager
from api.schemas import (
    AddGuestRequest,
    GenerateRequest,
    GroupResponse,
    MoveRequest,
    RemoveRequest,
    ReorderRequest,
    RetimeRequest,
    SaveRequest,
    SwapRequest,
    TeeSheetResponse,
    group_response,
    tee_sheet_response,
)
from api.sessions import SessionEntry, SessionStore
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from teesheet import editor
from teesheet.competitions import parse_hole_numbers
from teesheet.context import load_event_context
from teesheet.exceptions import (
    ConfirmationRequiredError,
    GroupNotFoundError,
    PlayerNotFoundError,
    TeeSheetInputError,
)
from teesheet.logging_config import get_logger
from teesheet.roster import create_guest, resolve_roster
from teesheet.saver import TeeSheetSaver, TeeSheetSaveResult
from teesheet.times import require_hhmm, start_time_on

logger = get_logger(__name__)

router = APIRouter()


class OpenSessionRequest(BaseModel):
    selected_member_ids: Optional[List[str]] = None


class ShiftRequest(BaseModel):
    player_id: str
    direction: Literal[-1, 1]


@contextmanager
def _edit_errors():
    """Translate rejected edits into HTTP errors."""
    try:
        yield
    except ConfirmationRequiredError as e:
        raise HTTPException(409, str(e))
    except (GroupNotFoundError, PlayerNotFoundError) as e:
        raise HTTPException(404, str(e))
    except TeeSheetInputError as e:
        raise HTTPException(400, str(e))


def _entry(sessions: SessionStore, event_id: str) -> SessionEntry:
    entry = sessions.get(event_id)
    if entry is None:
        raise HTTPException(404, "No open tee sheet session for this event")
    return entry


def _respond(entry: SessionEntry) -> TeeSheetResponse:
    return tee_sheet_response(
        entry.session,
        entry.context.course_config,
        entry.context.assumptions + entry.session.assumptions,
    )


# ================================================================
# Sessions
# ================================================================

@router.post("/{event_id}/tee-sheet/session", response_model=TeeSheetResponse)
async def open_tee_sheet(
    event_id: str,
    body: Optional[OpenSessionRequest] = None,
    db: DatabaseManager = Depends(get_db),
    sessions: SessionStore = Depends(get_sessions),
):
    context = await load_event_context(db, event_id)
    if context is None:
        raise HTTPException(404, "Event not found")
    session = editor.open_event_session(
        context.event,
        context.members,
        selected_member_ids=body.selected_member_ids if body else None,
    )
    logger.info(
        "Opened tee sheet session event=%s roster=%d groups=%d",
        event_id, len(session.roster), len(session.groups),
    )
    return _respond(sessions.open(event_id, session, context))


@router.get("/{event_id}/tee-sheet", response_model=TeeSheetResponse)
async def get_tee_sheet(event_id: str, sessions: SessionStore = Depends(get_sessions)):
    return _respond(_entry(sessions, event_id))


@router.delete("/{event_id}/tee-sheet/session", status_code=204)
async def close_tee_sheet(event_id: str, sessions: SessionStore = Depends(get_sessions)):
    if not sessions.close(event_id):
        raise HTTPException(404, "No open tee sheet session for this event")


# ================================================================
# Edits
# ================================================================

@router.post(
    "/{event_id}/tee-sheet/generate",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def generate(
    event_id: str, body: GenerateRequest, sessions: SessionStore = Depends(get_sessions)
):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        start = None
        if body.start_time:
            require_hhmm(body.start_time)
            start = start_time_on(entry.session.tee_sheet.start_time.date(), body.start_time)
        editor.regenerate(
            entry.session,
            entry.context.course_config,
            start_time=start,
            interval_minutes=body.interval_minutes,
            confirmed=body.confirm,
        )
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/move",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def move(event_id: str, body: MoveRequest, sessions: SessionStore = Depends(get_sessions)):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.move_player(
            entry.session, body.player_id, body.from_group_id, body.to_group_id,
            position=body.position,
        )
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/swap",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def swap(event_id: str, body: SwapRequest, sessions: SessionStore = Depends(get_sessions)):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.swap_players(
            entry.session, body.player_a_id, body.group_a_id, body.player_b_id, body.group_b_id
        )
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/remove",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def remove(event_id: str, body: RemoveRequest, sessions: SessionStore = Depends(get_sessions)):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.remove_player(entry.session, body.player_id, body.group_id)
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/groups",
    response_model=GroupResponse,
    status_code=201,
    dependencies=[Depends(require_manager)],
)
async def add_group(event_id: str, sessions: SessionStore = Depends(get_sessions)):
    entry = _entry(sessions, event_id)
    group = editor.add_group(entry.session)
    return group_response(group, entry.context.course_config)


@router.delete(
    "/{event_id}/tee-sheet/groups/{group_id}",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def delete_group(
    event_id: str,
    group_id: str,
    confirm: bool = False,
    sessions: SessionStore = Depends(get_sessions),
):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.delete_group(entry.session, group_id, confirmed=confirm)
    return _respond(entry)


@router.put(
    "/{event_id}/tee-sheet/groups/{group_id}/time",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def retime_group(
    event_id: str,
    group_id: str,
    body: RetimeRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.retime_group(entry.session, group_id, body.time)
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/groups/{group_id}/reorder",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def reorder(
    event_id: str,
    group_id: str,
    body: ReorderRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.reorder_within_group(entry.session, group_id, body.from_index, body.to_index)
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/groups/{group_id}/shift",
    response_model=TeeSheetResponse,
    dependencies=[Depends(require_manager)],
)
async def shift(
    event_id: str,
    group_id: str,
    body: ShiftRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    entry = _entry(sessions, event_id)
    with _edit_errors():
        editor.move_player_up_down(entry.session, group_id, body.player_id, body.direction)
    return _respond(entry)


@router.post(
    "/{event_id}/tee-sheet/guests",
    response_model=TeeSheetResponse,
    status_code=201,
    dependencies=[Depends(require_manager)],
)
async def add_guest(
    event_id: str,
    body: AddGuestRequest,
    db: DatabaseManager = Depends(get_db),
    sessions: SessionStore = Depends(get_sessions),
):
    """Add a guest to the event. The guest joins the unassigned pool."""
    entry = _entry(sessions, event_id)
    with _edit_errors():
        guest = create_guest(body.name, body.handicap_index, body.sex)

    guests = list(entry.context.event.guests) + [guest]
    try:
        await db.events.save_guests(event_id, guests)
    except NotFoundError:
        raise HTTPException(404, "Event not found")
    entry.context.event = entry.context.event.model_copy(update={"guests": guests})

    selected = [p.id for p in entry.session.roster if not p.is_guest]
    editor.set_roster(entry.session, resolve_roster(selected, guests, entry.context.members))
    return _respond(entry)


# ================================================================
# Save
# ================================================================

@router.post(
    "/{event_id}/tee-sheet/save",
    response_model=TeeSheetSaveResult,
    dependencies=[Depends(require_manager)],
)
async def save(
    event_id: str,
    body: SaveRequest,
    sessions: SessionStore = Depends(get_sessions),
    saver: TeeSheetSaver = Depends(get_saver),
):
    entry = _entry(sessions, event_id)
    context = entry.context
    return await saver.save(
        entry.session,
        context.members,
        context.event.guests,
        context.course_config,
        notes=body.notes,
        nearest_to_pin_holes=parse_hole_numbers(body.nearest_to_pin_holes),
        longest_drive_holes=parse_hole_numbers(body.longest_drive_holes),
    )
