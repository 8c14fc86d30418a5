from datetime import date
from pydantic import BaseModel, Field, model_validator
from typing import Optional


class RoundFilters(BaseModel):
    """Query options for fetching a user's rounds."""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    course_id: Optional[str] = None
    completed_only: bool = True
    limit: int = Field(500, ge=1, le=1000)
    offset: int = Field(0, ge=0)

    @model_validator(mode='after')
    def validate_date_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError(f"date_from ({self.date_from}) is after date_to ({self.date_to})")
        return self
