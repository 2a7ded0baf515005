from pathlib import Path
from typing import Optional

import asyncpg

from database.exceptions import DatabaseError
from database.repositories import CourseRepositoryDB, EventRepositoryDB, MemberRepositoryDB


class DatabaseManager:
    """
    Groups the async repositories behind one object.

    The API keeps one instance on ``app.state``; scripts build their own from a
    ``DatabasePool``.
    """

    def __init__(self, pool: asyncpg.Pool, schema_path: Optional[str] = None) -> None:
        self.pool = pool
        self.events = EventRepositoryDB(pool)
        self.members = MemberRepositoryDB(pool)
        self.courses = CourseRepositoryDB(pool)
        self.schema_path = Path(
            schema_path or Path(__file__).with_name("schema.sql")
        ).resolve()

    async def initialize_schema(self) -> None:
        """Create schemas/tables defined in `database/schema.sql`."""
        if not self.schema_path.exists():
            raise DatabaseError(f"Schema file not found: {self.schema_path}")

        sql_text = self.schema_path.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql_text)
