"""Event reads and tee sheet writes for society.events."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Event, GuestRecord, TeeSheetMetadata, TeeSheetPayload
from database.converters import (
    event_from_row,
    guests_to_json,
    tee_sheet_metadata_to_row,
    tee_sheet_to_json,
)
from database.exceptions import DatabaseError, IntegrityError, NotFoundError


class EventRepositoryDB:
    """Async access to events. Satisfies the engine's TeeSheetStore protocol."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_event(self, event_id: str) -> Optional[Event]:
        """Get an event with its guests and saved tee sheet."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM society.events WHERE id = $1", UUID(event_id)
            )
            return event_from_row(row) if row else None

    async def load_event(self, event_id: str) -> Optional[Event]:
        return await self.get_event(event_id)

    async def get_society_id(self, event_id: str) -> Optional[str]:
        async with self._pool.acquire() as conn:
            value = await conn.fetchval(
                "SELECT society_id FROM society.events WHERE id = $1", UUID(event_id)
            )
            return str(value) if value else None

    # ================================================================
    # Update
    # ================================================================

    async def save_tee_sheet(
        self, event_id: str, tee_sheet: TeeSheetPayload, metadata: TeeSheetMetadata
    ) -> None:
        """Overwrite the event's tee sheet and the fields saved with it."""
        meta = tee_sheet_metadata_to_row(metadata)
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    """UPDATE society.events
                       SET tee_sheet = $2,
                           tee_sheet_notes = $3,
                           nearest_to_pin_holes = $4,
                           longest_drive_holes = $5,
                           playing_handicap_snapshot = $6,
                           updated_at = NOW()
                       WHERE id = $1""",
                    UUID(event_id),
                    tee_sheet_to_json(tee_sheet),
                    meta["tee_sheet_notes"],
                    meta["nearest_to_pin_holes"],
                    meta["longest_drive_holes"],
                    meta["playing_handicap_snapshot"],
                )
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(f"Tee sheet rejected by constraint: {e}") from e
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not save tee sheet: {e}") from e
        if result == "UPDATE 0":
            raise NotFoundError(f"Event {event_id} not found")

    async def save_guests(self, event_id: str, guests: List[GuestRecord]) -> None:
        """Replace the event's guest list."""
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "UPDATE society.events SET guests = $2, updated_at = NOW() WHERE id = $1",
                UUID(event_id), guests_to_json(guests),
            )
            if result == "UPDATE 0":
                raise NotFoundError(f"Event {event_id} not found")
