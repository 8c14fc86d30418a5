from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class RoundStats(BaseGolfModel):
    """Round-level statistics, either entered directly or derived from holes."""
    fairways_hit: Optional[int] = Field(None, ge=0, le=18)
    fairways_total: Optional[int] = Field(None, ge=0, le=18)
    greens_in_regulation: Optional[int] = Field(None, ge=0, le=18)
    total_putts: Optional[int] = Field(None, ge=0)
    penalties: Optional[int] = Field(None, ge=0)
    average_driving_distance: Optional[float] = Field(None, ge=0)
