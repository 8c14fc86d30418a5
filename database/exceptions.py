"""Errors raised by the repositories. asyncpg errors never leak past them."""


class DatabaseError(Exception):
    """Base for all database errors; also wraps unexpected asyncpg failures."""


class NotFoundError(DatabaseError):
    """A round or handicap record the caller asked for does not exist."""


class DuplicateError(DatabaseError):
    """A write hit a unique constraint."""


class IntegrityError(DatabaseError):
    """A write referenced a missing row or broke a check constraint."""
