"""Storage for computed handicap records."""

import asyncpg
import logging
from typing import List, Optional
from uuid import UUID

from models import HandicapRecord
from database.converters import handicap_record_from_row, handicap_record_to_row
from database.exceptions import DatabaseError, DuplicateError, IntegrityError

logger = logging.getLogger(__name__)


class HandicapRecordRepositoryDB:
    """Async access to users.handicap_records and the per-user latest pointer."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_latest(self, user_id: str) -> Optional[HandicapRecord]:
        """The user's most recent record, or None if none was ever saved."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """SELECT r.* FROM users.handicap_latest l
                       JOIN users.handicap_records r ON r.id = l.record_id
                       WHERE l.user_id = $1""",
                    UUID(user_id),
                )
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not load handicap record for user {user_id}: {e}") from e
        return handicap_record_from_row(row) if row else None

    async def get_history(self, user_id: str, *, limit: int = 10) -> List[HandicapRecord]:
        """A user's records, newest first."""
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    """SELECT * FROM users.handicap_records
                       WHERE user_id = $1
                       ORDER BY created_at DESC
                       LIMIT $2""",
                    UUID(user_id), limit,
                )
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not load handicap history for user {user_id}: {e}") from e
        return [handicap_record_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def save_record(self, record: HandicapRecord) -> HandicapRecord:
        """Insert a record and make it the user's latest, in one transaction."""
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO users.handicap_records
                           (user_id, handicap_index, record_date, included_rounds,
                            differentials, trend, low_index)
                           VALUES ($1, $2, $3, $4, $5, $6, $7)
                           RETURNING *""",
                        *handicap_record_to_row(record),
                    )
                    await conn.execute(
                        """INSERT INTO users.handicap_latest (user_id, record_id)
                           VALUES ($1, $2)
                           ON CONFLICT (user_id)
                           DO UPDATE SET record_id = EXCLUDED.record_id""",
                        row["user_id"], row["id"],
                    )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(str(e)) from e
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(str(e)) from e
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not save handicap record: {e}") from e

        saved = handicap_record_from_row(row)
        logger.info(
            "saved handicap record user_id=%s index=%s trend=%s",
            saved.user_id, saved.handicap_index, saved.trend,
        )
        return saved
