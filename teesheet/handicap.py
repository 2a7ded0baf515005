"""
WHS handicap calculations.

- Course Handicap (CH) = HI x (Slope / 113) + (Course Rating - Par)
- Playing Handicap (PH) = CH x Allowance / 100

Every function returns None when an input is missing. None means "show a
placeholder", never zero.
"""

import math
from pydantic import Field
from typing import List, Optional

from models import CourseConfig, PlayerRef, TeeSetting
from models.base import BaseGolfModel
from teesheet.resolution import select_tee_setting

STANDARD_SLOPE = 113

DEFAULT_ALLOWANCE_PERCENT = 95.0


class HandicapResult(BaseGolfModel):
    """Handicap index together with the values derived from it."""
    handicap_index: Optional[float] = None
    course_handicap: Optional[int] = None
    playing_handicap: Optional[int] = None
    tee_setting: Optional[TeeSetting] = None
    assumptions: List[str] = Field(default_factory=list)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def course_handicap(
    handicap_index: Optional[float],
    slope_rating: Optional[float],
    course_rating: Optional[float],
    par: Optional[int],
) -> Optional[int]:
    """Course Handicap from a Handicap Index and tee ratings."""
    if handicap_index is None or slope_rating is None or course_rating is None or par is None:
        return None
    ch = handicap_index * (slope_rating / STANDARD_SLOPE) + (course_rating - par)
    return round_half_away_from_zero(ch)


def playing_handicap(
    course_handicap: Optional[int], allowance_percent: Optional[float]
) -> Optional[int]:
    """Playing Handicap from a Course Handicap and an allowance percentage (0-100)."""
    if course_handicap is None or not allowance_percent:
        return None
    return round_half_away_from_zero(course_handicap * allowance_percent / 100)


def has_tee_settings(tee: Optional[TeeSetting]) -> bool:
    """Check if a tee carries enough data for handicap calculations."""
    return tee is not None and tee.is_complete


def calculate_handicaps(
    handicap_index: Optional[float],
    tee: Optional[TeeSetting],
    allowance_percent: Optional[float],
) -> HandicapResult:
    """Compute both Course and Playing Handicap against one tee."""
    if tee is None:
        return HandicapResult(handicap_index=handicap_index)
    ch = course_handicap(handicap_index, tee.slope_rating, tee.course_rating, tee.par)
    return HandicapResult(
        handicap_index=handicap_index,
        course_handicap=ch,
        playing_handicap=playing_handicap(ch, allowance_percent),
        tee_setting=tee,
    )


def handicaps_for_player(player: PlayerRef, course_config: CourseConfig) -> HandicapResult:
    """Pick the player's tee by sex and compute their handicaps."""
    tee = select_tee_setting(player.sex, course_config)
    result = calculate_handicaps(
        player.handicap_index, tee.value, course_config.allowance_percent
    )
    result.assumptions = list(tee.assumptions)
    return result


def playing_handicap_for(player: PlayerRef, course_config: CourseConfig) -> Optional[int]:
    return handicaps_for_player(player, course_config).playing_handicap


def format_handicap(value: Optional[int]) -> str:
    """Signed integer for CH/PH display, e.g. "+12", "-2", or "-" when unknown."""
    if value is None:
        return "-"
    return f"+{value}" if value >= 0 else str(value)


def format_handicap_index(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}"


def recommended_allowance(event_format: Optional[str]) -> float:
    """Recommended allowance percentage for a competition format."""
    if not event_format:
        return DEFAULT_ALLOWANCE_PERCENT

    normalized = event_format.lower()
    if "fourball" in normalized or "better_ball" in normalized:
        return 85.0
    if "foursomes" in normalized:
        return 50.0
    if "scramble" in normalized:
        return 75.0
    return DEFAULT_ALLOWANCE_PERCENT
