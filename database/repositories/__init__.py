from .handicap_repo import HandicapRecordRepositoryDB
from .round_repo import RoundRepositoryDB

__all__ = ["HandicapRecordRepositoryDB", "RoundRepositoryDB"]
