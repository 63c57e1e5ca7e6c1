from .settings import settings
from .database import async_session_maker, async_session_manager, engine, get_async_session
from .table_names import TableNames

__all__ = [
    "settings",
    "engine",
    "async_session_maker",
    "async_session_manager",
    "get_async_session",
    "TableNames",
]
