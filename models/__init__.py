from .base import BaseGolfModel
from .filters import RoundFilters
from .handicap import HandicapIndexSnapshot, HandicapRecord, Trend
from .hole import Hole
from .round import Round
from .round_stats import RoundStats
from .tee_box import TeeBox

__all__ = [
    "BaseGolfModel",
    "HandicapIndexSnapshot",
    "HandicapRecord",
    "Hole",
    "Round",
    "RoundFilters",
    "RoundStats",
    "TeeBox",
    "Trend",
]
