"""Read access to society courses and their tee sets."""

import asyncpg
from typing import Dict, List, Optional
from uuid import UUID

from models import Course
from database.converters import course_from_rows


class CourseRepositoryDB:
    """Async reads for society.courses and society.tee_sets."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_course(self, course_id: str) -> Optional[Course]:
        """Get a course with its tee sets."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM society.courses WHERE id = $1", UUID(course_id)
            )
            if not row:
                return None
            tee_rows = await conn.fetch(
                """SELECT * FROM society.tee_sets
                   WHERE course_id = $1 ORDER BY applies_to, tee_color""",
                row["id"],
            )
            return course_from_rows(row, tee_rows)

    async def list_courses(self, society_id: str) -> List[Course]:
        """All of a society's courses, tee sets included."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM society.courses WHERE society_id = $1 ORDER BY name",
                UUID(society_id),
            )
            course_ids = [r["id"] for r in rows]
            if course_ids:
                # One query for every course's tees (avoid N+1)
                tee_rows = await conn.fetch(
                    """SELECT * FROM society.tee_sets
                       WHERE course_id = ANY($1::uuid[])
                       ORDER BY applies_to, tee_color""",
                    course_ids,
                )
            else:
                tee_rows = []

        tees_by_course: Dict[UUID, list] = {}
        for tr in tee_rows:
            tees_by_course.setdefault(tr["course_id"], []).append(tr)
        return [course_from_rows(r, tees_by_course.get(r["id"], [])) for r in rows]
