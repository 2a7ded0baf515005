from datetime import date as date_type
from pydantic import Field
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .player import GuestRecord
from .tee_sheet import TeeSheetPayload


class Event(BaseGolfModel):
    """A society event as loaded from storage, with its saved tee sheet if any."""
    id: str
    name: Optional[str] = None
    date: Optional[date_type] = None
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    male_tee_set_id: Optional[str] = None
    female_tee_set_id: Optional[str] = None
    handicap_allowance_pct: Optional[float] = Field(None, ge=0, le=100)
    handicap_allowance: Optional[float] = Field(None, ge=0, le=1)  # legacy fraction
    format: Optional[str] = None
    player_ids: List[str] = Field(default_factory=list)
    guests: List[GuestRecord] = Field(default_factory=list)
    rsvps: Dict[str, str] = Field(default_factory=dict)
    tee_sheet: Optional[TeeSheetPayload] = None
    tee_sheet_notes: Optional[str] = None
    nearest_to_pin_holes: List[int] = Field(default_factory=list)
    longest_drive_holes: List[int] = Field(default_factory=list)
    playing_handicap_snapshot: Dict[str, int] = Field(default_factory=dict)

    def attending_member_ids(self, member_ids: List[str]) -> List[str]:
        """Members who have not declined, in the order given."""
        return [mid for mid in member_ids if self.rsvps.get(mid) != "no"]
