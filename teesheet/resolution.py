"""Best-effort lookups that report the assumptions they make.

Each resolver returns the value it settled on together with a list of
human-readable assumptions, so callers can surface them without this module
logging anything itself.
"""

from pydantic import Field
from typing import Generic, List, Optional, Sequence, TypeVar

from models import Course, CourseConfig, Event, Sex, TeeSetting
from models.base import BaseGolfModel
from teesheet import config

T = TypeVar("T")


class Resolution(BaseGolfModel, Generic[T]):
    """A resolved value plus the assumptions made to reach it."""
    value: Optional[T] = None
    assumptions: List[str] = Field(default_factory=list)


def select_tee_setting(
    sex: Optional[Sex], course_config: CourseConfig
) -> Resolution[TeeSetting]:
    """Pick the tee a player's handicap is computed from.

    Female players use the female tee when one is configured and otherwise fall
    back to the male tee. A player with no recorded sex gets no tee.
    """
    if sex is None:
        return Resolution[TeeSetting]()
    if sex == Sex.FEMALE:
        if course_config.female_tee_setting is not None:
            return Resolution[TeeSetting](value=course_config.female_tee_setting)
        if course_config.male_tee_setting is not None:
            return Resolution[TeeSetting](
                value=course_config.male_tee_setting,
                assumptions=["No female tee configured; using the male tee"],
            )
        return Resolution[TeeSetting]()
    return Resolution[TeeSetting](value=course_config.male_tee_setting)


def resolve_course(event: Event, courses: Sequence[Course]) -> Resolution[Course]:
    """Find the event's course by id, falling back to a case-insensitive name match."""
    if event.course_id:
        for course in courses:
            if course.id == event.course_id:
                return Resolution[Course](value=course)

    if event.course_name:
        wanted = event.course_name.strip().lower()
        for course in courses:
            if course.name and course.name.strip().lower() == wanted:
                reason = (
                    f"Course id '{event.course_id}' not found"
                    if event.course_id else "Event has no course id"
                )
                return Resolution[Course](
                    value=course,
                    assumptions=[f"{reason}; matched course by name '{course.name}'"],
                )
    return Resolution[Course]()


def resolve_allowance(event: Event) -> Resolution[float]:
    """Allowance percentage for the event.

    Prefers the percentage field, then the legacy fraction (1.0 means 100%, any
    other value means the reduced allowance), then the configured default.
    """
    if event.handicap_allowance_pct is not None:
        return Resolution[float](value=event.handicap_allowance_pct)
    if event.handicap_allowance is not None:
        pct = 100.0 if event.handicap_allowance == 1.0 else config.LEGACY_REDUCED_ALLOWANCE_PERCENT
        return Resolution[float](
            value=pct,
            assumptions=[f"Allowance taken from legacy fraction {event.handicap_allowance}: {pct:g}%"],
        )
    return Resolution[float](
        value=config.DEFAULT_ALLOWANCE_PERCENT,
        assumptions=[f"Event has no allowance; defaulting to {config.DEFAULT_ALLOWANCE_PERCENT:g}%"],
    )


def _tee_for_event(
    course: Course, tee_id: Optional[str], sex: Sex, assumptions: List[str]
) -> Optional[TeeSetting]:
    tee = course.get_tee_setting(tee_id)
    if tee is not None:
        return tee
    fallback = course.first_tee_for(sex)
    if fallback is not None:
        if tee_id:
            assumptions.append(
                f"{sex.value.capitalize()} tee set '{tee_id}' not found; using {fallback.describe()}"
            )
        else:
            assumptions.append(
                f"Event has no {sex.value} tee set; using {fallback.describe()}"
            )
    return fallback


def resolve_course_config(event: Event, course: Optional[Course]) -> Resolution[CourseConfig]:
    """Build the handicap configuration for an event from its course and settings."""
    assumptions: List[str] = []
    allowance = resolve_allowance(event)
    assumptions.extend(allowance.assumptions)

    male_tee = female_tee = None
    if course is None:
        assumptions.append("No course resolved; handicaps cannot be computed")
    else:
        male_tee = _tee_for_event(course, event.male_tee_set_id, Sex.MALE, assumptions)
        female_tee = _tee_for_event(course, event.female_tee_set_id, Sex.FEMALE, assumptions)

    return Resolution[CourseConfig](
        value=CourseConfig(
            male_tee_setting=male_tee,
            female_tee_setting=female_tee,
            allowance_percent=allowance.value,
        ),
        assumptions=assumptions,
    )
