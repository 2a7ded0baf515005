from .base import BaseGolfModel
from .course import Course, CourseConfig
from .event import Event
from .player import GuestRecord, MemberRecord, PlayerRef, Sex
from .tee import TeeSetting
from .tee_sheet import (
    MAX_GROUP_SIZE,
    StoredGroup,
    TeeGroup,
    TeeSheet,
    TeeSheetMetadata,
    TeeSheetPayload,
)

__all__ = [
    "BaseGolfModel",
    "Course",
    "CourseConfig",
    "Event",
    "GuestRecord",
    "MAX_GROUP_SIZE",
    "MemberRecord",
    "PlayerRef",
    "Sex",
    "StoredGroup",
    "TeeGroup",
    "TeeSetting",
    "TeeSheet",
    "TeeSheetMetadata",
    "TeeSheetPayload",
]
