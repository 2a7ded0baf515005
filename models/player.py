from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Sex(str, Enum):
    """Sex used to pick the tee a player's handicap is computed from."""
    MALE = "male"
    FEMALE = "female"


class MemberRecord(BaseGolfModel):
    """A registered society member as supplied by the roster source."""
    id: str
    name: str
    handicap_index: Optional[float] = Field(None, ge=-10, le=54)
    sex: Optional[Sex] = None


class GuestRecord(BaseGolfModel):
    """An ad-hoc guest added to a single event."""
    id: str
    name: str
    handicap_index: Optional[float] = Field(None, ge=-10, le=54)
    sex: Optional[Sex] = None
    included: bool = True


class PlayerRef(BaseGolfModel):
    """A normalized player. Two refs are the same player iff their ids match."""
    id: str
    name: str
    is_guest: bool = False
    handicap_index: Optional[float] = None
    sex: Optional[Sex] = None

    @property
    def has_handicap_inputs(self) -> bool:
        """True when the player carries everything needed to display a handicap."""
        return self.handicap_index is not None and self.sex is not None
