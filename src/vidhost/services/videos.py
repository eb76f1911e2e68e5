"""Video repository.

Persists video metadata rows and their initial analytics counters. Each
write commits on its own; there is no transaction spanning the two inserts.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vidhost.db.models import VideoAnalyticsModel, VideoModel
from vidhost.domain.enums import VideoStatus
from vidhost.domain.errors import DatabaseError, VideoNotFoundError
from vidhost.logging import get_logger

logger = get_logger(__name__)


def create_video(
    session: Session,
    *,
    title: str,
    description: str | None,
    filename: str,
    bucket: str,
    s3_key: str,
) -> VideoModel:
    """Insert a PENDING video row.

    Raises:
        DatabaseError: If the insert fails.
    """
    video = VideoModel(
        title=title,
        description=description,
        filename=filename,
        s3_bucket_name=bucket,
        s3_key_original=s3_key,
        status=VideoStatus.PENDING.value,
    )
    try:
        session.add(video)
        session.commit()
        session.refresh(video)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("video_insert_failed", s3_key=s3_key, error=str(e))
        raise DatabaseError(f"Failed to insert video row for {s3_key}") from e

    logger.info("video_created", video_id=str(video.id), s3_key=s3_key)
    return video


def initialize_analytics(session: Session, video_id: UUID) -> VideoAnalyticsModel:
    """Insert zero-valued counters for a new video.

    Raises:
        DatabaseError: If the insert fails.
    """
    analytics = VideoAnalyticsModel(
        video_id=video_id,
        views_count=0,
        likes_count=0,
        watch_time_seconds=0,
    )
    try:
        session.add(analytics)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("analytics_insert_failed", video_id=str(video_id), error=str(e))
        raise DatabaseError(f"Failed to initialize analytics for video {video_id}") from e

    return analytics


def list_videos(session: Session) -> list[VideoModel]:
    """All videos, newest first."""
    return list(
        session.execute(
            select(VideoModel).order_by(VideoModel.created_at.desc())
        ).scalars()
    )


def get_video(session: Session, video_id: UUID) -> VideoModel:
    """Get a video by id.

    Raises:
        VideoNotFoundError: If no row exists.
    """
    video = session.get(VideoModel, video_id)
    if video is None:
        raise VideoNotFoundError(f"Video {video_id} not found")
    return video


def update_status(
    session: Session,
    video_id: UUID,
    status: VideoStatus,
    thumbnail_key: str | None = None,
) -> VideoModel:
    """Move a video to a new lifecycle status. Used by the processor only."""
    video = get_video(session, video_id)
    video.status = status.value
    if thumbnail_key is not None:
        video.s3_key_thumbnail = thumbnail_key
    session.commit()

    logger.info("video_status_updated", video_id=str(video_id), status=status.value)
    return video
