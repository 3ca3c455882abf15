from .connection import (
    async_session_maker,
    build_engine,
    build_session_maker,
    close_db,
    engine,
    init_db,
)
from .models import Base

__all__ = [
    "Base",
    "engine",
    "async_session_maker",
    "build_engine",
    "build_session_maker",
    "init_db",
    "close_db",
]
