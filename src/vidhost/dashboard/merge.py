"""Joins video records with analytics counters for display.

Analytics are fetched per video and concurrently. A failed fetch only
zeroes that video's counters; it never drops the video or fails the batch.
"""

import asyncio
from collections.abc import Iterable, Sequence

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.adapters.storage.base import object_url
from vidhost.domain.enums import SortOption, VideoStatus
from vidhost.domain.models import MergedVideo, Video, VideoAnalytics
from vidhost.logging import get_logger

logger = get_logger(__name__)


def resolve_bucket(video: Video, bucket_override: str | None = None) -> str:
    """Bucket used for public URLs: the override if set, else the record's own."""
    bucket = bucket_override or video.s3_bucket_name
    stripped = bucket.strip()
    if stripped != bucket:
        logger.warning(
            "bucket_name_whitespace",
            video_id=video.id,
            original=repr(bucket),
            trimmed=stripped,
        )
    return stripped


def video_url(video: Video, bucket_override: str | None = None) -> str:
    return object_url(resolve_bucket(video, bucket_override), video.s3_key_original)


def thumbnail_url(video: Video, bucket_override: str | None = None) -> str | None:
    if not video.s3_key_thumbnail:
        return None
    return object_url(resolve_bucket(video, bucket_override), video.s3_key_thumbnail)


def combine(
    video: Video,
    analytics: VideoAnalytics | None,
    bucket_override: str | None = None,
) -> MergedVideo:
    """Build the view model for one video; missing analytics count as zero."""
    return MergedVideo(
        video=video,
        views=analytics.views if analytics else 0,
        likes=analytics.likes if analytics else 0,
        video_url=video_url(video, bucket_override),
        thumbnail_url=thumbnail_url(video, bucket_override),
    )


async def merge_videos(
    videos: Sequence[Video],
    accessor: AnalyticsAccessor,
    bucket_override: str | None = None,
) -> list[MergedVideo]:
    """Fetch analytics for every video and merge, keeping input order."""

    async def enrich(video: Video) -> MergedVideo:
        try:
            analytics = await accessor.get_analytics(video.id)
        except Exception as e:
            logger.warning("analytics_fetch_failed", video_id=video.id, error=str(e))
            analytics = None
        return combine(video, analytics, bucket_override)

    return list(await asyncio.gather(*(enrich(video) for video in videos)))


def filter_videos(videos: Iterable[MergedVideo], query: str) -> list[MergedVideo]:
    """Case-insensitive substring match on title and description.

    A blank query matches everything.
    """
    if not query.strip():
        return list(videos)

    needle = query.lower()
    return [
        video
        for video in videos
        if needle in video.title.lower()
        or (video.description is not None and needle in video.description.lower())
    ]


def sort_videos(
    videos: Iterable[MergedVideo],
    sort_by: SortOption = SortOption.NEWEST,
) -> list[MergedVideo]:
    """Stable sort; ties keep their input order."""
    if sort_by == SortOption.NEWEST:
        return sorted(videos, key=lambda v: v.created_at, reverse=True)
    if sort_by == SortOption.OLDEST:
        return sorted(videos, key=lambda v: v.created_at)
    if sort_by == SortOption.MOST_VIEWED:
        return sorted(videos, key=lambda v: v.views, reverse=True)
    if sort_by == SortOption.MOST_LIKED:
        return sorted(videos, key=lambda v: v.likes, reverse=True)
    return list(videos)


def has_pending(videos: Iterable[MergedVideo]) -> bool:
    """Whether any video is still PENDING or PROCESSING."""
    return any(not VideoStatus(video.status).is_terminal for video in videos)
