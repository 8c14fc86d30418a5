"""Read access to a user's rounds and their hole scores."""

import asyncpg
import logging
from typing import List, Optional
from uuid import UUID

from models import Round, RoundFilters
from database.converters import round_from_rows, rounds_from_rows
from database.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class RoundRepositoryDB:
    """Async reads for rounds and their child tables."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    @staticmethod
    def _build_where(user_id: str, filters: RoundFilters) -> tuple:
        """WHERE clause and positional args for a filtered rounds query."""
        clauses = ["user_id = $1"]
        args: list = [UUID(user_id)]

        if filters.completed_only:
            clauses.append("is_complete")
        if filters.date_from is not None:
            args.append(filters.date_from)
            clauses.append(f"round_date >= ${len(args)}")
        if filters.date_to is not None:
            args.append(filters.date_to)
            clauses.append(f"round_date <= ${len(args)}")
        if filters.course_id is not None:
            args.append(UUID(filters.course_id))
            clauses.append(f"course_id = ${len(args)}")

        return " AND ".join(clauses), args

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str) -> Optional[Round]:
        """Get a round with its hole scores."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT * FROM users.rounds WHERE id = $1", UUID(round_id)
                )
                if not row:
                    return None
                hole_rows = await conn.fetch(
                    """SELECT * FROM users.hole_scores
                       WHERE round_id = $1 ORDER BY hole_number""",
                    row["id"],
                )
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not load round {round_id}: {e}") from e
        return round_from_rows(row, hole_rows)

    async def fetch_rounds(
        self, user_id: str, filters: Optional[RoundFilters] = None
    ) -> List[Round]:
        """Get a user's rounds, oldest first.

        Pagination counts from the most recent round: limit=20 returns the
        20 latest rounds matching the filters, in chronological order.
        """
        filters = filters or RoundFilters()
        where, args = self._build_where(user_id, filters)
        args.extend([filters.limit, filters.offset])

        try:
            async with self._pool.acquire() as conn:
                round_rows = await conn.fetch(
                    f"""SELECT * FROM users.rounds
                        WHERE {where}
                        ORDER BY round_date DESC, created_at DESC
                        LIMIT ${len(args) - 1} OFFSET ${len(args)}""",
                    *args,
                )
                if not round_rows:
                    return []
                hole_rows = await conn.fetch(
                    """SELECT * FROM users.hole_scores
                       WHERE round_id = ANY($1::uuid[])
                       ORDER BY round_id, hole_number""",
                    [r["id"] for r in round_rows],
                )
        except asyncpg.PostgresError as e:
            raise DatabaseError(f"Could not load rounds for user {user_id}: {e}") from e

        rounds = rounds_from_rows(list(reversed(round_rows)), hole_rows)
        logger.debug("fetched rounds user_id=%s count=%s", user_id, len(rounds))
        return rounds
