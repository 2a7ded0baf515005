from .course_repo import CourseRepositoryDB
from .event_repo import EventRepositoryDB
from .member_repo import MemberRepositoryDB

__all__ = ["CourseRepositoryDB", "EventRepositoryDB", "MemberRepositoryDB"]
