"""Turn member/guest records into the PlayerRef list the engine works on."""

from typing import Iterable, List, Optional, Sequence, Set
from uuid import uuid4

from models import GuestRecord, MemberRecord, PlayerRef, Sex, TeeGroup
from teesheet.exceptions import InvalidGuestError

UNKNOWN_PLAYER_NAME = "Unknown"


def member_to_player_ref(member: MemberRecord) -> PlayerRef:
    return PlayerRef(
        id=member.id,
        name=member.name,
        is_guest=False,
        handicap_index=member.handicap_index,
        sex=member.sex,
    )


def guest_to_player_ref(guest: GuestRecord) -> PlayerRef:
    return PlayerRef(
        id=guest.id,
        name=guest.name,
        is_guest=True,
        handicap_index=guest.handicap_index,
        sex=guest.sex,
    )


def resolve_roster(
    selected_member_ids: Iterable[str],
    guests: Sequence[GuestRecord],
    members: Sequence[MemberRecord],
) -> List[PlayerRef]:
    """Build the event roster.

    Selected members come first in member-table order, then included guests in
    guest-table order. Unknown ids and excluded guests are dropped silently and
    each id appears at most once.
    """
    selected = set(selected_member_ids)
    roster: List[PlayerRef] = []
    seen: Set[str] = set()

    for member in members:
        if member.id in selected and member.id not in seen:
            roster.append(member_to_player_ref(member))
            seen.add(member.id)

    for guest in guests:
        if guest.included and guest.id not in seen:
            roster.append(guest_to_player_ref(guest))
            seen.add(guest.id)

    return roster


def resolve_player_ref(
    player_id: str,
    members: Sequence[MemberRecord],
    guests: Sequence[GuestRecord],
) -> PlayerRef:
    """Look a stored id up as a member, then a guest. Unknown ids get a placeholder ref."""
    for member in members:
        if member.id == player_id:
            return member_to_player_ref(member)
    for guest in guests:
        if guest.id == player_id:
            return guest_to_player_ref(guest)
    return PlayerRef(id=player_id, name=UNKNOWN_PLAYER_NAME)


def known_player_ids(
    members: Sequence[MemberRecord], guests: Sequence[GuestRecord]
) -> Set[str]:
    return {m.id for m in members} | {g.id for g in guests}


def unassigned_players(
    roster: Sequence[PlayerRef], groups: Sequence[TeeGroup]
) -> List[PlayerRef]:
    """Roster players not currently placed in any group, in roster order."""
    assigned = {p.id for g in groups for p in g.players}
    return [p for p in roster if p.id not in assigned]


def create_guest(
    name: str,
    handicap_index: Optional[float],
    sex: Sex = Sex.MALE,
    *,
    guest_id: Optional[str] = None,
) -> GuestRecord:
    """Validate and build a new included guest."""
    if not name or not name.strip():
        raise InvalidGuestError("Guest name is required")
    if handicap_index is None or not 0 <= handicap_index <= 54:
        raise InvalidGuestError("Valid handicap index (0-54) is required")
    return GuestRecord(
        id=guest_id or f"guest-{uuid4().hex[:12]}",
        name=name.strip(),
        handicap_index=handicap_index,
        sex=sex,
        included=True,
    )
