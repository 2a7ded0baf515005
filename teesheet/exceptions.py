class TeeSheetError(Exception):
    """Base for all tee sheet engine errors."""


class TeeSheetInputError(TeeSheetError):
    """A request the caller can correct. Raised before any state changes."""


class EmptyRosterError(TeeSheetInputError):
    """No players to group."""


class GroupFullError(TeeSheetInputError):
    """Destination group already holds the maximum number of players."""


class DuplicatePlayerError(TeeSheetInputError):
    """The change would place a player in more than one group."""


class GroupNotFoundError(TeeSheetInputError):
    """No group with the given id."""


class PlayerNotFoundError(TeeSheetInputError):
    """Player is not where the caller said it was."""


class InvalidTimeError(TeeSheetInputError):
    """Time string is not a valid HH:MM."""


class ConfirmationRequiredError(TeeSheetInputError):
    """A destructive change was requested without confirmation."""


class TeeSheetInvariantError(TeeSheetError):
    """Internal invariant broken by the engine itself. Not user-recoverable."""


class InvalidGuestError(TeeSheetInputError):
    """Guest details are incomplete or out of range."""
