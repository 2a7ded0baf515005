from .editor import (
    UNASSIGNED,
    EditSession,
    add_group,
    compute_signature,
    delete_group,
    move_player,
    move_player_up_down,
    open_event_session,
    open_session,
    regenerate,
    remove_player,
    reorder_within_group,
    retime_group,
    set_roster,
    swap_players,
)
from .exceptions import (
    ConfirmationRequiredError,
    DuplicatePlayerError,
    EmptyRosterError,
    GroupFullError,
    GroupNotFoundError,
    InvalidGuestError,
    InvalidTimeError,
    PlayerNotFoundError,
    TeeSheetError,
    TeeSheetInputError,
    TeeSheetInvariantError,
)
from .generator import generate_groups, generate_tee_sheet
from .handicap import (
    HandicapResult,
    calculate_handicaps,
    course_handicap,
    handicaps_for_player,
    playing_handicap,
)
from .roster import create_guest, resolve_roster
from .saver import TeeSheetSaver, TeeSheetSaveResult
from .store import InMemoryTeeSheetStore, TeeSheetStore

__all__ = [
    "UNASSIGNED",
    "ConfirmationRequiredError",
    "DuplicatePlayerError",
    "EditSession",
    "EmptyRosterError",
    "GroupFullError",
    "GroupNotFoundError",
    "HandicapResult",
    "InMemoryTeeSheetStore",
    "InvalidGuestError",
    "InvalidTimeError",
    "PlayerNotFoundError",
    "TeeSheetError",
    "TeeSheetInputError",
    "TeeSheetInvariantError",
    "TeeSheetSaveResult",
    "TeeSheetSaver",
    "TeeSheetStore",
    "add_group",
    "calculate_handicaps",
    "compute_signature",
    "course_handicap",
    "create_guest",
    "delete_group",
    "generate_groups",
    "generate_tee_sheet",
    "handicaps_for_player",
    "move_player",
    "move_player_up_down",
    "open_event_session",
    "open_session",
    "playing_handicap",
    "regenerate",
    "remove_player",
    "reorder_within_group",
    "resolve_roster",
    "retime_group",
    "set_roster",
    "swap_players",
]
