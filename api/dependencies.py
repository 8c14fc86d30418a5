from fastapi import Request

from analytics.config import HandicapSettings, get_settings
from database.db_manager import DatabaseManager


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_handicap_settings() -> HandicapSettings:
    """FastAPI dependency that provides the handicap settings."""
    return get_settings()
