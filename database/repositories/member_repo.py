"""Read access to society members (the roster source)."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import MemberRecord
from database.converters import member_from_row


class MemberRepositoryDB:
    """Async reads for society.members."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_members(self, society_id: str) -> List[MemberRecord]:
        """All members of a society ordered by name."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM society.members WHERE society_id = $1 ORDER BY name",
                UUID(society_id),
            )
            return [member_from_row(r) for r in rows]

    async def get_member(self, member_id: str) -> Optional[MemberRecord]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM society.members WHERE id = $1", UUID(member_id)
            )
            return member_from_row(row) if row else None
