from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class TeeBox(BaseGolfModel):
    """The tee box a round was played from, with its course and slope ratings."""
    name: Optional[str] = None  # "Blue", "White", "Red"
    color: Optional[str] = None
    yardage: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, gt=0, le=85.0)
    slope: Optional[float] = Field(None, ge=55, le=155)
    par: Optional[int] = Field(None, ge=27, le=80)  # only when it differs from course par

    def is_ratable(self) -> bool:
        """True when both ratings are present, i.e. a differential can be computed."""
        return bool(self.rating and self.rating > 0 and self.slope and self.slope > 0)
