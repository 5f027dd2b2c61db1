"""Database models package."""

from promptpilot.models.database.base import Base, get_db, init_db, async_session_maker
from promptpilot.models.database.saved_prompt import SavedPrompt

__all__ = [
    # Base
    "Base",
    "get_db",
    "init_db",
    "async_session_maker",
    # Models
    "SavedPrompt",
]
