from .settings import settings
from .database import TransientStoreError, async_session_manager, async_session_maker, engine
from .table_names import TableNames

__all__ = [
    "settings",
    "engine",
    "async_session_maker",
    "async_session_manager",
    "TransientStoreError",
    "TableNames",
]
