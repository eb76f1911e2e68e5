"""Database layer."""

from vidhost.db.models import Base, VideoAnalyticsModel, VideoModel
from vidhost.db.session import get_session, get_session_context, init_db

__all__ = [
    "Base",
    "get_session",
    "get_session_context",
    "init_db",
    # Models
    "VideoAnalyticsModel",
    "VideoModel",
]
