"""Initial tee group generation.

Players are ordered by Playing Handicap (highest first), dealt into
ceil(n / 4) groups with a snake draft, then groups are ordered by size so that
short groups never tee off behind a full four-ball, and finally retimed from
the start time.
"""

import math
from datetime import datetime, timedelta
from typing import Iterator, List, Optional, Sequence
from uuid import uuid4

from models import MAX_GROUP_SIZE, CourseConfig, PlayerRef, TeeGroup, TeeSheet
from teesheet.exceptions import DuplicatePlayerError, EmptyRosterError, TeeSheetInvariantError
from teesheet.handicap import playing_handicap_for
from teesheet.logging_config import get_logger

logger = get_logger(__name__)


def make_group_id() -> str:
    return f"g-{uuid4().hex[:12]}"


def order_by_playing_handicap(
    roster: Sequence[PlayerRef], course_config: CourseConfig
) -> List[PlayerRef]:
    """Highest Playing Handicap first. Unknown handicaps count as 0; ties keep roster order."""
    return sorted(
        roster,
        key=lambda p: playing_handicap_for(p, course_config) or 0,
        reverse=True,
    )


def snake_order(group_count: int) -> Iterator[int]:
    """0, 1, ..., n-1, n-1, ..., 0, 0, 1, ... forever."""
    forward = list(range(group_count))
    backward = forward[::-1]
    while True:
        yield from forward
        yield from backward


def snake_draft(players: Sequence[PlayerRef], group_count: int) -> List[List[PlayerRef]]:
    buckets: List[List[PlayerRef]] = [[] for _ in range(group_count)]
    for player, index in zip(players, snake_order(group_count)):
        buckets[index].append(player)
    return buckets


def assign_times(
    groups: Sequence[TeeGroup], start_time: datetime, interval_minutes: int
) -> List[TeeGroup]:
    """Retime groups sequentially from start_time in their current order."""
    return [
        group.model_copy(update={"time": start_time + timedelta(minutes=i * interval_minutes)})
        for i, group in enumerate(groups)
    ]


def _check_coverage(roster: Sequence[PlayerRef], groups: Sequence[TeeGroup]) -> None:
    placed = [p.id for g in groups for p in g.players]
    expected = sorted(p.id for p in roster)
    if len(placed) != len(roster) or sorted(placed) != expected:
        logger.error(
            "Tee sheet generation lost or duplicated players: %d placed, %d expected",
            len(placed), len(roster),
        )
        raise TeeSheetInvariantError(
            f"Generated groups hold {len(placed)} players but the roster has {len(roster)}"
        )
    oversized = [len(g.players) for g in groups if len(g.players) > MAX_GROUP_SIZE]
    if oversized:
        raise TeeSheetInvariantError(f"Generated group sizes {oversized} exceed {MAX_GROUP_SIZE}")


def generate_groups(
    roster: Sequence[PlayerRef],
    start_time: datetime,
    interval_minutes: int,
    course_config: Optional[CourseConfig] = None,
) -> List[TeeGroup]:
    """Build the initial tee groups for a roster."""
    if not roster:
        raise EmptyRosterError("Please select at least one player")

    ids = [p.id for p in roster]
    if len(set(ids)) != len(ids):
        raise DuplicatePlayerError("Roster contains duplicate player ids")

    ordered = order_by_playing_handicap(roster, course_config or CourseConfig())
    group_count = math.ceil(len(ordered) / MAX_GROUP_SIZE)
    buckets = snake_draft(ordered, group_count)

    # Short groups go out first; sort is stable so equal sizes keep draft order.
    buckets.sort(key=len)

    groups = assign_times(
        [TeeGroup(id=make_group_id(), time=start_time, players=b) for b in buckets],
        start_time,
        interval_minutes,
    )
    _check_coverage(roster, groups)

    logger.info(
        "Generated %d groups for %d players (sizes %s)",
        len(groups), len(roster), [len(g.players) for g in groups],
    )
    return groups


def generate_tee_sheet(
    roster: Sequence[PlayerRef],
    start_time: datetime,
    interval_minutes: int,
    course_config: Optional[CourseConfig] = None,
) -> TeeSheet:
    return TeeSheet(
        start_time=start_time,
        interval_minutes=interval_minutes,
        groups=generate_groups(roster, start_time, interval_minutes, course_config),
    )
