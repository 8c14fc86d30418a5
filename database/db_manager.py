import asyncpg

from database.repositories import HandicapRecordRepositoryDB, RoundRepositoryDB


class DatabaseManager:
    """Groups the repositories that share one connection pool."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.rounds = RoundRepositoryDB(pool)
        self.handicap_records = HandicapRecordRepositoryDB(pool)
