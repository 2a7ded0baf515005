"""Gather everything needed to work on one event's tee sheet."""

from pydantic import Field
from typing import List, Optional

from models import Course, CourseConfig, Event, MemberRecord
from models.base import BaseGolfModel
from teesheet.resolution import resolve_course, resolve_course_config


class EventContext(BaseGolfModel):
    """An event with its members, resolved course and handicap configuration."""
    event: Event
    members: List[MemberRecord] = Field(default_factory=list)
    course: Optional[Course] = None
    course_config: CourseConfig = Field(default_factory=CourseConfig)
    assumptions: List[str] = Field(default_factory=list)


async def load_event_context(db, event_id: str) -> Optional[EventContext]:
    """Load an event through a DatabaseManager. Returns None if the event does not exist."""
    event = await db.events.get_event(event_id)
    if event is None:
        return None

    society_id = await db.events.get_society_id(event_id)
    members = await db.members.get_members(society_id) if society_id else []
    courses = await db.courses.list_courses(society_id) if society_id else []

    course = resolve_course(event, courses)
    course_config = resolve_course_config(event, course.value)
    return EventContext(
        event=event,
        members=members,
        course=course.value,
        course_config=course_config.value,
        assumptions=course.assumptions + course_config.assumptions,
    )
