from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CourseRepositoryDB, EventRepositoryDB, MemberRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "EventRepositoryDB",
    "MemberRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "IntegrityError",
]
