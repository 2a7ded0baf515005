from pydantic import Field
from typing import Optional

from .base import BaseGolfModel
from .player import Sex


class TeeSetting(BaseGolfModel):
    """Scoring configuration for one tee box, for one sex."""
    id: Optional[str] = None
    course_id: Optional[str] = None
    tee_color: Optional[str] = None  # "white", "yellow", "red", ...
    applies_to: Optional[Sex] = None
    par: Optional[int] = Field(None, ge=27, le=80)
    course_rating: Optional[float] = Field(None, ge=25.0, le=85.0)
    slope_rating: Optional[int] = Field(None, ge=55, le=155)

    @property
    def is_complete(self) -> bool:
        """Par, course rating and slope are all set."""
        return (
            self.par is not None
            and self.course_rating is not None
            and self.slope_rating is not None
        )

    def describe(self) -> str:
        return f"{self.tee_color or 'unnamed'} (SR: {self.slope_rating}, CR: {self.course_rating})"
