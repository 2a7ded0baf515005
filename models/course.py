from pydantic import Field, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .player import Sex
from .tee import TeeSetting


class Course(BaseGolfModel):
    """Golf course with the tee settings configured for it."""
    id: Optional[str] = None
    name: Optional[str] = None
    tee_settings: List[TeeSetting] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_tee_ids(self):
        seen = set()
        for tee in self.tee_settings:
            if tee.id is None:
                continue
            if tee.id in seen:
                raise ValueError(f"Duplicate tee setting id '{tee.id}'")
            seen.add(tee.id)
        return self

    def get_tee_setting(self, tee_id: Optional[str]) -> Optional[TeeSetting]:
        """Get a tee setting by its id."""
        if not tee_id:
            return None
        for tee in self.tee_settings:
            if tee.id == tee_id:
                return tee
        return None

    def first_tee_for(self, sex: Sex) -> Optional[TeeSetting]:
        """First tee setting that applies to the given sex."""
        for tee in self.tee_settings:
            if tee.applies_to == sex:
                return tee
        return None


class CourseConfig(BaseGolfModel):
    """Everything the handicap calculator needs from the event's course."""
    male_tee_setting: Optional[TeeSetting] = None
    female_tee_setting: Optional[TeeSetting] = None
    allowance_percent: Optional[float] = Field(None, ge=0, le=100)

    @property
    def is_ready(self) -> bool:
        """Both tees set and a non-zero allowance, i.e. generation can show handicaps."""
        return (
            self.male_tee_setting is not None
            and self.female_tee_setting is not None
            and bool(self.allowance_percent)
        )

    def missing_fields(self) -> List[str]:
        missing = []
        if self.male_tee_setting is None:
            missing.append("Male Tee Set")
        if self.female_tee_setting is None:
            missing.append("Female Tee Set")
        if not self.allowance_percent:
            missing.append("Handicap Allowance")
        return missing
