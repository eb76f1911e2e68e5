"""Headless dashboard state: merged list, search, sort, likes, playback."""

from collections.abc import Callable
from dataclasses import replace
from typing import BinaryIO

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.dashboard.client import UploaderClient, UploadReceipt
from vidhost.dashboard.merge import filter_videos, merge_videos, sort_videos
from vidhost.dashboard.poller import RefreshPoller
from vidhost.domain.enums import SortOption
from vidhost.domain.errors import ApiError
from vidhost.domain.models import MergedVideo
from vidhost.logging import get_logger

logger = get_logger(__name__)

ViewUpdateFn = Callable[[str, int], None]


class PlayerSession:
    """Playback of one video at a time.

    Opening a video records exactly one view. Rendering the same open video
    again does not; closing and reopening it does. If recording fails the
    marker is cleared so the next render tries again.
    """

    def __init__(
        self,
        analytics: AnalyticsAccessor,
        on_view_update: ViewUpdateFn | None = None,
    ) -> None:
        self.analytics = analytics
        self.on_view_update = on_view_update
        self.video: MergedVideo | None = None
        self.error: str | None = None
        self._counted_id: str | None = None

    async def open(self, video: MergedVideo) -> None:
        self.video = video
        await self.render()

    async def render(self) -> None:
        if self.video is None:
            return

        video_id = self.video.id
        if self._counted_id == video_id:
            return

        # Mark before the call so a re-render during the request is a no-op
        self._counted_id = video_id
        try:
            views = await self.analytics.increment_view(video_id)
        except ApiError as e:
            logger.error("view_increment_failed", video_id=video_id, error=str(e))
            self.error = str(e) or "Failed to record view"
            if self._counted_id == video_id:
                self._counted_id = None
            return

        self.error = None
        if self.on_view_update is not None:
            self.on_view_update(video_id, views)

    def close(self) -> None:
        self.video = None
        self.error = None
        self._counted_id = None


class Dashboard:
    """Video list joined with analytics, kept fresh while work is in flight."""

    def __init__(
        self,
        uploader: UploaderClient,
        analytics: AnalyticsAccessor,
        poll_interval_seconds: float = 5.0,
        bucket_override: str | None = None,
    ) -> None:
        self.uploader = uploader
        self.analytics = analytics
        self.bucket_override = bucket_override
        self.videos: list[MergedVideo] = []
        self.error: str | None = None
        self.loading = False
        self.search = ""
        self.sort_by = SortOption.NEWEST
        self.like_error: str | None = None
        self.poller = RefreshPoller(self._fetch, poll_interval_seconds)
        self._liking: set[str] = set()

    async def _fetch(self) -> list[MergedVideo]:
        """Re-fetch the list and analytics without touching the poller."""
        self.loading = True
        self.error = None
        try:
            videos = await self.uploader.list_videos()
            self.videos = await merge_videos(videos, self.analytics, self.bucket_override)
        except ApiError as e:
            self.error = str(e) or "Failed to load videos"
            logger.warning("video_list_failed", error=self.error)
        finally:
            self.loading = False
        return self.videos

    async def refresh(self) -> list[MergedVideo]:
        """Re-fetch the list and analytics, then start or stop polling to match.

        On failure the previous list is kept and `error` is set; calling
        `refresh()` again is the retry.
        """
        videos = await self._fetch()
        self.poller.sync(videos)
        return videos

    async def load(self) -> list[MergedVideo]:
        """Initial fetch; same as `refresh()`."""
        return await self.refresh()

    def visible(self) -> list[MergedVideo]:
        """The list as displayed: filtered by `search`, ordered by `sort_by`."""
        return sort_videos(filter_videos(self.videos, self.search), self.sort_by)

    def find(self, video_id: str) -> MergedVideo | None:
        return next((v for v in self.videos if v.id == video_id), None)

    def _update(self, video_id: str, **changes: int) -> None:
        self.videos = [replace(v, **changes) if v.id == video_id else v for v in self.videos]

    def apply_view_count(self, video_id: str, views: int) -> None:
        self._update(video_id, views=views)

    async def like(self, video_id: str) -> int | None:
        """Like a video optimistically.

        The count goes up by one at once, is then replaced by the server's
        count, and goes back to its prior value if the call fails, in which
        case `like_error` is set.

        Returns:
            The displayed like count, or None if the video is unknown or a
            like for it is already in flight.
        """
        self.like_error = None
        video = self.find(video_id)
        if video is None or video_id in self._liking:
            return None

        prior = video.likes
        self._liking.add(video_id)
        self._update(video_id, likes=prior + 1)
        try:
            likes = await self.analytics.like(video_id)
        except ApiError as e:
            logger.error("like_failed", video_id=video_id, error=str(e))
            self.like_error = str(e) or "Failed to like video"
            self._update(video_id, likes=prior)
            return prior
        finally:
            self._liking.discard(video_id)

        self._update(video_id, likes=likes)
        return likes

    def player(self) -> PlayerSession:
        """A playback session whose recorded views flow back into the list."""
        return PlayerSession(self.analytics, on_view_update=self.apply_view_count)

    async def upload(
        self,
        fileobj: BinaryIO,
        filename: str,
        title: str,
        description: str | None = None,
        content_type: str | None = None,
    ) -> UploadReceipt:
        """Upload a file and reload, which resumes polling for the new video."""
        receipt = await self.uploader.upload_video(
            fileobj,
            filename,
            title,
            description=description,
            content_type=content_type,
        )
        await self.load()
        return receipt

    async def close(self) -> None:
        """Stop polling."""
        await self.poller.aclose()
