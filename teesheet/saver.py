"""Persist a tee sheet and confirm the write by reading it back."""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Dict, Iterable, List, Optional, Sequence, Set

from models import (
    CourseConfig,
    GuestRecord,
    MemberRecord,
    StoredGroup,
    TeeSheetMetadata,
    TeeSheetPayload,
)
from models.base import BaseGolfModel
from teesheet.competitions import validate_hole_numbers
from teesheet.editor import EditSession, compute_signature, mark_saved, refresh_dirty
from teesheet.handicap import playing_handicap_for
from teesheet.logging_config import get_logger
from teesheet.roster import known_player_ids, resolve_player_ref, unassigned_players
from teesheet.store import TeeSheetStore

logger = get_logger(__name__)

NO_VALID_PLAYERS = "No valid players in tee sheet"


class TeeSheetSaveResult(BaseGolfModel):
    """Outcome of a save. ``success`` without ``verified`` means the caller should retry."""
    success: bool
    verified: bool = False
    saved_group_count: int = 0
    saved_player_count: int = 0
    error: Optional[str] = None


def build_payload(session: EditSession, valid_ids: Set[str]) -> TeeSheetPayload:
    """Storage form of the session's groups, keeping only ids in ``valid_ids``."""
    return TeeSheetPayload(
        start_time=session.tee_sheet.start_time,
        interval_minutes=session.tee_sheet.interval_minutes,
        groups=[
            StoredGroup(time_iso=g.time, player_ids=[pid for pid in g.player_ids if pid in valid_ids])
            for g in session.groups
        ],
    )


def payload_signature(payload: TeeSheetPayload) -> str:
    """Same canonical form as ``editor.compute_signature``, from stored groups."""
    return json.dumps(
        [{"timeISO": g.time_iso.isoformat(), "players": g.player_ids} for g in payload.groups]
    )


def playing_handicap_snapshot(
    payload: TeeSheetPayload,
    members: Sequence[MemberRecord],
    guests: Sequence[GuestRecord],
    course_config: CourseConfig,
) -> Dict[str, int]:
    """Playing Handicap per saved player id. Players without one are left out."""
    snapshot: Dict[str, int] = {}
    for group in payload.groups:
        for pid in group.player_ids:
            ph = playing_handicap_for(resolve_player_ref(pid, members, guests), course_config)
            if ph is not None:
                snapshot[pid] = ph
    return snapshot


def _log_detached_save(task: "asyncio.Future") -> None:
    """Report the outcome of a save whose caller was cancelled while it ran."""
    if task.cancelled():
        logger.warning("Detached tee sheet save was cancelled")
        return
    error = task.exception()
    if error is not None:
        logger.error("Detached tee sheet save failed: %s: %s", type(error).__name__, error)
        return
    result = task.result()
    logger.info(
        "Tee sheet save finished after the caller was cancelled: success=%s verified=%s error=%s",
        result.success, result.verified, result.error,
    )


class TeeSheetSaver:
    """Saves edit sessions through a ``TeeSheetStore``.

    Saves for the same event run one at a time. Once a save has started writing
    it runs through its verify read even if the caller is cancelled.
    """

    def __init__(self, store: TeeSheetStore):
        self._store = store
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @asynccontextmanager
    async def _event_lock(self, event_id: str):
        """Serialize saves for one event. The lock is dropped once nobody holds or waits on it."""
        lock = self._locks.setdefault(event_id, asyncio.Lock())
        self._lock_users[event_id] = self._lock_users.get(event_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[event_id] -= 1
            if not self._lock_users[event_id]:
                del self._lock_users[event_id]
                del self._locks[event_id]

    async def save(
        self,
        session: EditSession,
        members: Sequence[MemberRecord],
        guests: Sequence[GuestRecord],
        course_config: CourseConfig,
        *,
        notes: Optional[str] = None,
        nearest_to_pin_holes: Iterable[int] = (),
        longest_drive_holes: Iterable[int] = (),
    ) -> TeeSheetSaveResult:
        if not session.event_id:
            return TeeSheetSaveResult(success=False, error="No event selected")
        if not session.groups:
            return TeeSheetSaveResult(success=False, error="No tee groups to save")

        valid_ids = known_player_ids(members, guests)
        dropped = [pid for pid in session.tee_sheet.player_ids() if pid not in valid_ids]
        if dropped:
            logger.warning("Dropping %d unknown player id(s) from save: %s", len(dropped), dropped)

        payload = build_payload(session, valid_ids)
        if payload.player_count == 0:
            return TeeSheetSaveResult(success=False, error=NO_VALID_PLAYERS)

        ntp: List[int] = sorted(set(nearest_to_pin_holes))
        ld: List[int] = sorted(set(longest_drive_holes))
        if not validate_hole_numbers(ntp) or not validate_hole_numbers(ld):
            return TeeSheetSaveResult(success=False, error="Hole numbers must be 1-18")

        metadata = TeeSheetMetadata(
            tee_sheet_notes=(notes or "").strip() or None,
            nearest_to_pin_holes=ntp,
            longest_drive_holes=ld,
            playing_handicap_snapshot=playing_handicap_snapshot(payload, members, guests, course_config),
        )
        task = asyncio.ensure_future(
            self._write_and_verify(session, payload, metadata, valid_ids)
        )
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            task.add_done_callback(_log_detached_save)
            raise

    async def _write_and_verify(
        self,
        session: EditSession,
        payload: TeeSheetPayload,
        metadata: TeeSheetMetadata,
        valid_ids: Set[str],
    ) -> TeeSheetSaveResult:
        event_id = session.event_id
        async with self._event_lock(event_id):
            try:
                await self._store.save_tee_sheet(event_id, payload, metadata)
            except Exception as e:
                logger.exception("TEE_SHEET_SAVE_FAILED event=%s", event_id)
                return TeeSheetSaveResult(
                    success=False,
                    error=f"Save failed: {type(e).__name__}: {e}",
                )

            written_groups = len(payload.groups)
            written_players = payload.player_count
            try:
                reloaded = await self._store.load_event(event_id)
            except Exception as e:
                logger.exception("Tee sheet verify read failed event=%s", event_id)
                return TeeSheetSaveResult(
                    success=True,
                    saved_group_count=written_groups,
                    saved_player_count=written_players,
                    error=f"Verification read failed: {type(e).__name__}: {e}",
                )

        stored = reloaded.tee_sheet if reloaded else None
        if stored is None:
            logger.error("Tee sheet missing on reload event=%s", event_id)
            return TeeSheetSaveResult(
                success=True,
                saved_group_count=written_groups,
                saved_player_count=written_players,
                error="Tee sheet not found after save",
            )

        result = TeeSheetSaveResult(
            success=True,
            saved_group_count=len(stored.groups),
            saved_player_count=stored.player_count,
        )
        if result.saved_group_count != written_groups or result.saved_player_count != written_players:
            result.error = (
                f"Expected {written_groups} groups / {written_players} players, "
                f"found {result.saved_group_count} / {result.saved_player_count}"
            )
            logger.error("TEE_SHEET_VERIFY_MISMATCH event=%s %s", event_id, result.error)
            return result

        result.verified = True
        self._sync_session(session, stored, valid_ids)
        logger.info(
            "TEE_SHEET_SAVED event=%s groups=%d players=%d",
            event_id, result.saved_group_count, result.saved_player_count,
        )
        return result

    @staticmethod
    def _sync_session(session: EditSession, stored: TeeSheetPayload, valid_ids: Set[str]) -> None:
        """Drop ids the save filtered out of the groups, then clear dirty if the reload matches."""
        groups = [
            g.model_copy(update={"players": [p for p in g.players if p.id in valid_ids]})
            for g in session.groups
        ]
        session.tee_sheet = session.tee_sheet.model_copy(update={"groups": groups})
        # Players dropped from the groups rejoin the pool behind whoever is already there
        assigned = {p.id for g in groups for p in g.players}
        pool = [p for p in session.unassigned if p.id not in assigned]
        pooled = {p.id for p in pool}
        pool.extend(p for p in unassigned_players(session.roster, groups) if p.id not in pooled)
        session.unassigned = pool
        if payload_signature(stored) == compute_signature(session.groups):
            mark_saved(session)
        else:
            logger.warning("Reloaded tee sheet differs from the edited groups event=%s", session.event_id)
            refresh_dirty(session)
