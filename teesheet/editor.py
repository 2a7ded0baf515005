"""Interactive edits to a generated tee sheet.

All state lives in an ``EditSession`` owned by the caller. Every operation
stages its change on copies of the groups and the unassigned pool, validates
the staged result, and only then writes it back to the session, so a rejected
operation leaves the session untouched.
"""

import json
from datetime import datetime, timedelta
from pydantic import Field
from typing import Iterable, List, Optional, Sequence, Tuple

from models import (
    MAX_GROUP_SIZE,
    CourseConfig,
    Event,
    GuestRecord,
    MemberRecord,
    PlayerRef,
    TeeGroup,
    TeeSheet,
)
from models.base import BaseGolfModel
from teesheet import config
from teesheet.exceptions import (
    ConfirmationRequiredError,
    DuplicatePlayerError,
    GroupFullError,
    GroupNotFoundError,
    PlayerNotFoundError,
)
from teesheet.generator import generate_groups, make_group_id
from teesheet.logging_config import get_logger
from teesheet.roster import resolve_player_ref, resolve_roster, unassigned_players
from teesheet.times import require_hhmm, start_time_on

logger = get_logger(__name__)

UNASSIGNED = "unassigned"


class EditSession(BaseGolfModel):
    """One caller's in-memory editing state for an event's tee sheet."""
    event_id: Optional[str] = None
    tee_sheet: TeeSheet
    roster: List[PlayerRef] = Field(default_factory=list)
    unassigned: List[PlayerRef] = Field(default_factory=list)
    saved_signature: Optional[str] = None  # None until the sheet has been saved or loaded
    is_dirty: bool = False
    assumptions: List[str] = Field(default_factory=list)

    @property
    def groups(self) -> List[TeeGroup]:
        return self.tee_sheet.groups


def compute_signature(groups: Iterable[TeeGroup]) -> str:
    """Canonical form of the groups used for dirty tracking: time and player ids, in order."""
    return json.dumps(
        [{"timeISO": g.time.isoformat(), "players": g.player_ids} for g in groups]
    )


def refresh_dirty(session: EditSession) -> None:
    session.is_dirty = compute_signature(session.groups) != session.saved_signature


def mark_saved(session: EditSession) -> None:
    session.saved_signature = compute_signature(session.groups)
    session.is_dirty = False


# ================================================================
# Opening sessions
# ================================================================

def open_session(
    tee_sheet: TeeSheet,
    roster: Sequence[PlayerRef],
    *,
    event_id: Optional[str] = None,
    saved: bool = False,
) -> EditSession:
    """Start editing a tee sheet. ``saved`` marks it as matching the stored copy."""
    session = EditSession(
        event_id=event_id,
        tee_sheet=tee_sheet,
        roster=list(roster),
        unassigned=unassigned_players(roster, tee_sheet.groups),
    )
    if saved:
        mark_saved(session)
    else:
        refresh_dirty(session)
    return session


def open_event_session(
    event: Event,
    members: Sequence[MemberRecord],
    *,
    selected_member_ids: Optional[Iterable[str]] = None,
    guests: Optional[Sequence[GuestRecord]] = None,
) -> EditSession:
    """Open a session for an event, loading its saved tee sheet if it has one.

    Members are selected unless they declined the event, unless an explicit
    selection is given. Stored player ids are resolved back to players; ids that
    no longer match anyone become "Unknown" placeholders.

    The stored sheet comes from outside the engine and is not trusted: repeated
    ids and players beyond a group's capacity are left out and reported in
    ``session.assumptions``. A sheet repaired this way opens unsaved.
    """
    guests = event.guests if guests is None else guests
    if selected_member_ids is None:
        selected_member_ids = event.attending_member_ids([m.id for m in members])
    roster = resolve_roster(selected_member_ids, guests, members)

    stored = event.tee_sheet
    if stored is None:
        start = start_time_on(
            event.date or datetime.now().date(), config.DEFAULT_START_TIME
        )
        sheet = TeeSheet(start_time=start, interval_minutes=config.DEFAULT_INTERVAL_MINUTES)
        return open_session(sheet, roster, event_id=event.id)

    assumptions: List[str] = []
    placed = set()
    groups = []
    for idx, stored_group in enumerate(stored.groups):
        players = []
        for pid in stored_group.player_ids:
            if pid in placed:
                assumptions.append(f"Player '{pid}' was saved in more than one group; kept the first")
                continue
            if len(players) >= MAX_GROUP_SIZE:
                assumptions.append(
                    f"Saved group {idx + 1} had more than {MAX_GROUP_SIZE} players; '{pid}' left unassigned"
                )
                continue
            players.append(resolve_player_ref(pid, members, guests))
            placed.add(pid)
        groups.append(TeeGroup(id=f"g-{event.id}-{idx}", time=stored_group.time_iso, players=players))

    interval = stored.interval_minutes
    if not 1 <= interval <= 60:
        assumptions.append(
            f"Saved interval {interval} min is out of range; using {config.DEFAULT_INTERVAL_MINUTES} min"
        )
        interval = config.DEFAULT_INTERVAL_MINUTES

    if assumptions:
        logger.warning("Repaired saved tee sheet event=%s: %s", event.id, assumptions)

    sheet = TeeSheet(start_time=stored.start_time, interval_minutes=interval, groups=groups)
    session = open_session(sheet, roster, event_id=event.id, saved=not assumptions)
    session.assumptions = assumptions
    return session


# ================================================================
# Staging helpers
# ================================================================

def _stage(session: EditSession) -> Tuple[List[TeeGroup], List[PlayerRef]]:
    return (
        [g.snapshot() for g in session.groups],
        [p.snapshot() for p in session.unassigned],
    )


def _find_group(groups: List[TeeGroup], group_id: str) -> TeeGroup:
    for group in groups:
        if group.id == group_id:
            return group
    raise GroupNotFoundError(f"Group '{group_id}' not found")


def _players_at(
    groups: List[TeeGroup], unassigned: List[PlayerRef], location: str
) -> List[PlayerRef]:
    """Player list for a group id, or the unassigned pool."""
    if location == UNASSIGNED:
        return unassigned
    return _find_group(groups, location).players


def _index_in(players: List[PlayerRef], player_id: str) -> int:
    for i, p in enumerate(players):
        if p.id == player_id:
            return i
    return -1


def _validate(groups: List[TeeGroup], unassigned: List[PlayerRef]) -> None:
    seen = set()
    for group in groups:
        if len(group.players) > MAX_GROUP_SIZE:
            raise GroupFullError(f"Group is full (max {MAX_GROUP_SIZE} players)")
        for player in group.players:
            if player.id in seen:
                raise DuplicatePlayerError(
                    f"Duplicate player detected ({player.name}). Change cancelled."
                )
            seen.add(player.id)
    for player in unassigned:
        if player.id in seen:
            raise DuplicatePlayerError(
                f"Player {player.name} is both assigned and unassigned. Change cancelled."
            )
        seen.add(player.id)


def _commit(
    session: EditSession, groups: List[TeeGroup], unassigned: List[PlayerRef]
) -> None:
    _validate(groups, unassigned)
    session.tee_sheet = session.tee_sheet.model_copy(update={"groups": groups})
    session.unassigned = unassigned
    refresh_dirty(session)


# ================================================================
# Operations
# ================================================================

def regenerate(
    session: EditSession,
    course_config: Optional[CourseConfig] = None,
    *,
    start_time: Optional[datetime] = None,
    interval_minutes: Optional[int] = None,
    confirmed: bool = False,
) -> EditSession:
    """Replace all groups with a freshly generated set from the session roster."""
    if session.groups and not confirmed:
        raise ConfirmationRequiredError("Regenerate will replace your current groups")

    start = start_time or session.tee_sheet.start_time
    interval = interval_minutes or session.tee_sheet.interval_minutes
    groups = generate_groups(session.roster, start, interval, course_config)

    session.tee_sheet = TeeSheet(start_time=start, interval_minutes=interval, groups=groups)
    session.unassigned = unassigned_players(session.roster, groups)
    session.saved_signature = None
    session.is_dirty = True
    return session


def move_player(
    session: EditSession,
    player_id: str,
    from_group_id: str,
    to_group_id: str,
    *,
    position: Optional[int] = None,
) -> None:
    """Move a player between groups or to/from the unassigned pool."""
    groups, unassigned = _stage(session)
    source = _players_at(groups, unassigned, from_group_id)
    target = _players_at(groups, unassigned, to_group_id)

    idx = _index_in(source, player_id)
    if idx == -1:
        raise PlayerNotFoundError(f"Player '{player_id}' is not in '{from_group_id}'")
    if from_group_id == to_group_id:
        return
    if to_group_id != UNASSIGNED and len(target) >= MAX_GROUP_SIZE:
        raise GroupFullError(f"Group is full (max {MAX_GROUP_SIZE} players)")
    if _index_in(target, player_id) != -1:
        raise DuplicatePlayerError("Duplicate player detected. Move cancelled.")

    player = source.pop(idx)
    if position is None:
        target.append(player)
    else:
        target.insert(position, player)
    _commit(session, groups, unassigned)


def swap_players(
    session: EditSession,
    player_a_id: str,
    group_a_id: str,
    player_b_id: str,
    group_b_id: str,
) -> None:
    """Exchange two players' places. Group sizes do not change."""
    if player_a_id == player_b_id:
        raise DuplicatePlayerError("Cannot swap a player with themselves")

    groups, unassigned = _stage(session)
    list_a = _players_at(groups, unassigned, group_a_id)
    list_b = _players_at(groups, unassigned, group_b_id)

    idx_a = _index_in(list_a, player_a_id)
    idx_b = _index_in(list_b, player_b_id)
    if idx_a == -1:
        raise PlayerNotFoundError(f"Player '{player_a_id}' is not in '{group_a_id}'")
    if idx_b == -1:
        raise PlayerNotFoundError(f"Player '{player_b_id}' is not in '{group_b_id}'")

    list_a[idx_a], list_b[idx_b] = list_b[idx_b], list_a[idx_a]
    _commit(session, groups, unassigned)


def remove_player(session: EditSession, player_id: str, group_id: str) -> None:
    move_player(session, player_id, group_id, UNASSIGNED)


def add_group(session: EditSession) -> TeeGroup:
    """Append an empty group one interval after the last one (or at the start time)."""
    groups, unassigned = _stage(session)
    if groups:
        time = groups[-1].time + timedelta(minutes=session.tee_sheet.interval_minutes)
    else:
        time = session.tee_sheet.start_time
    group = TeeGroup(id=make_group_id(), time=time)
    groups.append(group)
    _commit(session, groups, unassigned)
    return group


def delete_group(session: EditSession, group_id: str, *, confirmed: bool = False) -> None:
    """Remove a group; its players go to the unassigned pool."""
    groups, unassigned = _stage(session)
    group = _find_group(groups, group_id)
    if group.players and not confirmed:
        raise ConfirmationRequiredError(
            f"Group has {len(group.players)} player(s); confirm to move them to unassigned"
        )
    unassigned.extend(group.players)
    groups = [g for g in groups if g.id != group_id]
    _commit(session, groups, unassigned)


def retime_group(session: EditSession, group_id: str, time_hhmm: str) -> None:
    """Set a group's tee time from HH:MM, keeping its date."""
    hours, minutes = require_hhmm(time_hhmm)
    groups, unassigned = _stage(session)
    group = _find_group(groups, group_id)
    group.time = group.time.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    _commit(session, groups, unassigned)


def reorder_within_group(
    session: EditSession, group_id: str, from_index: int, to_index: int
) -> None:
    """Move a player to another position in the same group. Indices are clamped."""
    groups, unassigned = _stage(session)
    players = _find_group(groups, group_id).players
    if not players:
        return
    last = len(players) - 1
    from_index = min(max(from_index, 0), last)
    to_index = min(max(to_index, 0), last)
    if from_index == to_index:
        return
    players.insert(to_index, players.pop(from_index))
    _commit(session, groups, unassigned)


def move_player_up_down(
    session: EditSession, group_id: str, player_id: str, direction: int
) -> None:
    """Shift a player one place earlier (-1) or later (+1) in the tee-off order."""
    group = session.tee_sheet.get_group(group_id)
    if group is None:
        raise GroupNotFoundError(f"Group '{group_id}' not found")
    idx = group.index_of(player_id)
    if idx == -1:
        raise PlayerNotFoundError(f"Player '{player_id}' is not in '{group_id}'")
    target = idx + (1 if direction > 0 else -1)
    if 0 <= target < len(group.players):
        reorder_within_group(session, group_id, idx, target)


def set_roster(session: EditSession, roster: Sequence[PlayerRef]) -> None:
    """Replace the eligible roster and recompute who is unassigned."""
    session.roster = list(roster)
    session.unassigned = unassigned_players(roster, session.groups)
