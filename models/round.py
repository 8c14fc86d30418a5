from datetime import date
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .hole import Hole
from .round_stats import RoundStats
from .tee_box import TeeBox


class Round(BaseGolfModel):
    """Represents a round of golf played by a user."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    date: date
    total_score: int = Field(..., gt=0)
    course_par: int = Field(..., ge=27, le=80)
    tee_box: Optional[TeeBox] = None
    holes: List[Hole] = Field(default_factory=list, max_length=18)
    stats: Optional[RoundStats] = None
    is_completed: bool = True
    notes: Optional[str] = None

    def score_to_par(self) -> int:
        """Total score relative to course par."""
        return self.total_score - self.course_par

    def get_rating(self) -> Optional[float]:
        return self.tee_box.rating if self.tee_box else None

    def get_slope(self) -> Optional[float]:
        return self.tee_box.slope if self.tee_box else None

    def is_ratable(self) -> bool:
        """Check if this round carries what a score differential needs."""
        return self.tee_box is not None and self.tee_box.is_ratable()

    def get_hole(self, hole_number: int) -> Optional[Hole]:
        """Get a hole by its number. Assumes holes are in order."""
        if 1 <= hole_number <= len(self.holes):
            return self.holes[hole_number - 1]
        return None

    def calculate_total_score(self) -> Optional[int]:
        """Sum of hole scores, or None when the round has no hole detail."""
        if not self.holes:
            return None
        return sum(h.score for h in self.holes)

    def calculate_front_nine(self) -> Optional[int]:
        """Calculate total strokes for holes 1-9. Assumes holes in order."""
        front = self.holes[:9]
        return sum(h.score for h in front) if front else None

    def calculate_back_nine(self) -> Optional[int]:
        """Calculate total strokes for holes 10-18. Assumes holes in order."""
        back = self.holes[9:18]
        return sum(h.score for h in back) if back else None

    def get_stats(self) -> Optional[RoundStats]:
        """Get round stats - uses provided stats or derives them from holes."""
        if self.stats is not None:
            return self.stats
        if not self.holes:
            return None

        driving_holes = [h for h in self.holes if h.par >= 4]
        putts = [h.putts for h in self.holes if h.putts is not None]
        return RoundStats(
            fairways_hit=sum(1 for h in driving_holes if h.fairway_hit),
            fairways_total=len(driving_holes),
            greens_in_regulation=sum(1 for h in self.holes if h.green_in_regulation),
            total_putts=sum(putts) if putts else None,
            penalties=sum(h.penalties for h in self.holes),
        )
