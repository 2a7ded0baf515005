from datetime import datetime
from pydantic import ConfigDict, Field, model_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .player import PlayerRef

MAX_GROUP_SIZE = 4


class TeeGroup(BaseGolfModel):
    """A timed cohort of up to four players. Player order is the tee-off order."""
    id: str
    time: datetime
    players: List[PlayerRef] = Field(default_factory=list, max_length=MAX_GROUP_SIZE)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_GROUP_SIZE

    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def index_of(self, player_id: str) -> int:
        """Position of a player in this group, or -1."""
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i
        return -1


class TeeSheet(BaseGolfModel):
    """The ordered schedule of tee groups for one event."""
    start_time: datetime
    interval_minutes: int = Field(..., ge=1, le=60)
    groups: List[TeeGroup] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_players(self):
        seen = set()
        for group in self.groups:
            for player in group.players:
                if player.id in seen:
                    raise ValueError(f"Player '{player.id}' appears in more than one group")
                seen.add(player.id)
        return self

    @property
    def player_count(self) -> int:
        return sum(len(g.players) for g in self.groups)

    def player_ids(self) -> List[str]:
        return [p.id for g in self.groups for p in g.players]

    def get_group(self, group_id: str) -> Optional[TeeGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def group_sizes(self) -> List[int]:
        return [len(g.players) for g in self.groups]


# ================================================================
# Storage shape
# ================================================================

class StoredGroup(BaseGolfModel):
    """A group as persisted: its time and the ordered player ids."""
    model_config = ConfigDict(populate_by_name=True)

    time_iso: datetime = Field(..., alias="timeISO")
    player_ids: List[str] = Field(default_factory=list, alias="playerIds")


class TeeSheetPayload(BaseGolfModel):
    """The plain object handed to the persistence collaborator."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: datetime = Field(..., alias="startTime")
    interval_minutes: int = Field(..., alias="intervalMinutes")
    groups: List[StoredGroup] = Field(default_factory=list)

    @property
    def player_count(self) -> int:
        return sum(len(g.player_ids) for g in self.groups)


class TeeSheetMetadata(BaseGolfModel):
    """Extra event fields written alongside the tee sheet."""
    tee_sheet_notes: Optional[str] = None
    nearest_to_pin_holes: List[int] = Field(default_factory=list)
    longest_drive_holes: List[int] = Field(default_factory=list)
    playing_handicap_snapshot: Dict[str, int] = Field(default_factory=dict)
