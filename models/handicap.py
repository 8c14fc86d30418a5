from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

Trend = Literal["improving", "declining", "stable"]


class HandicapIndexSnapshot(BaseModel):
    """Handicap index as it stood right after a given round."""
    model_config = ConfigDict(frozen=True)

    date: date
    index: Optional[float] = None
    round_count_at_time: int = Field(..., ge=1)


class HandicapRecord(BaseModel):
    """A stored handicap calculation for a user."""
    id: Optional[str] = None
    user_id: str
    handicap_index: float
    date: date
    included_rounds: List[str] = Field(default_factory=list)
    differentials: List[float] = Field(default_factory=list)
    trend: Trend = "stable"
    low_index: float
    created_at: Optional[datetime] = None
