"""View and like counters backed by the video_analytics table."""

from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidhost.db.models import VideoAnalyticsModel, VideoModel
from vidhost.domain.errors import AnalyticsNotFoundError, VideoNotFoundError
from vidhost.logging import get_logger

logger = get_logger(__name__)


def get_analytics(session: Session, video_id: UUID) -> VideoAnalyticsModel:
    """Get the counters for a video.

    Raises:
        AnalyticsNotFoundError: If the video has no counters row.
    """
    analytics = session.get(VideoAnalyticsModel, video_id)
    if analytics is None:
        raise AnalyticsNotFoundError(f"No analytics for video {video_id}")
    return analytics


def _increment(
    session: Session,
    video_id: UUID,
    column: InstrumentedAttribute[int],
) -> VideoAnalyticsModel:
    """Add one to a counter in a single UPDATE.

    A video whose counters row never got written (crash between the two
    upload inserts) gets a fresh row here.
    """
    result = session.execute(
        update(VideoAnalyticsModel)
        .where(VideoAnalyticsModel.video_id == video_id)
        .values({column: column + 1})
        .execution_options(synchronize_session=False)
    )

    if result.rowcount == 0:
        if session.get(VideoModel, video_id) is None:
            session.rollback()
            raise VideoNotFoundError(f"Video {video_id} not found")
        logger.warning("analytics_row_missing", video_id=str(video_id))
        analytics = VideoAnalyticsModel(
            video_id=video_id,
            views_count=0,
            likes_count=0,
            watch_time_seconds=0,
        )
        setattr(analytics, column.key, 1)
        session.add(analytics)

    session.commit()

    analytics = session.get(VideoAnalyticsModel, video_id, populate_existing=True)
    if analytics is None:
        raise AnalyticsNotFoundError(f"No analytics for video {video_id}")
    return analytics


def increment_views(session: Session, video_id: UUID) -> int:
    """Record one view; returns the new view count."""
    analytics = _increment(session, video_id, VideoAnalyticsModel.views_count)
    logger.info("view_recorded", video_id=str(video_id), views=analytics.views_count)
    return analytics.views_count


def increment_likes(session: Session, video_id: UUID) -> int:
    """Record one like; returns the new like count."""
    analytics = _increment(session, video_id, VideoAnalyticsModel.likes_count)
    logger.info("like_recorded", video_id=str(video_id), likes=analytics.likes_count)
    return analytics.likes_count
