from pydantic import Field, model_validator
from typing import Optional

from .base import BaseGolfModel

SCORE_TYPE_ORDER = [
    "eagle",
    "birdie",
    "par",
    "bogey",
    "double_bogey",
    "triple_bogey",
]


def score_type_from_to_par(to_par: int) -> str:
    """Bucket a score relative to par. Eagle includes anything better, triple anything worse."""
    if to_par <= -2:
        return "eagle"
    if to_par == -1:
        return "birdie"
    if to_par == 0:
        return "par"
    if to_par == 1:
        return "bogey"
    if to_par == 2:
        return "double_bogey"
    return "triple_bogey"


class Hole(BaseGolfModel):
    """A player's result on a single hole, with the hole's par."""
    number: Optional[int] = Field(None, ge=1, le=18)
    par: int = Field(..., ge=3, le=6)
    score: int = Field(..., ge=1, le=15)
    fairway_hit: Optional[bool] = None  # None on par 3s
    green_in_regulation: bool = False
    putts: Optional[int] = Field(None, ge=0, le=10)
    handicap: Optional[int] = Field(None, ge=1, le=18)  # stroke index
    penalties: int = Field(0, ge=0, le=5)

    @model_validator(mode='after')
    def validate_score_consistency(self):
        # Putts cannot exceed strokes
        if self.putts is not None and self.putts > self.score:
            raise ValueError(f"Putts ({self.putts}) cannot exceed strokes ({self.score})")
        return self

    def to_par(self) -> int:
        """Score relative to par (+2, -1, etc.)."""
        return self.score - self.par

    def get_score_type(self) -> str:
        """Score bucket name: eagle, birdie, par, bogey, double_bogey or triple_bogey."""
        return score_type_from_to_par(self.to_par())
