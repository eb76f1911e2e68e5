"""Stub analytics accessor for testing."""

from datetime import UTC, datetime

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.domain.errors import ApiError
from vidhost.domain.models import VideoAnalytics


class StubAnalyticsAccessor(AnalyticsAccessor):
    """Keeps counters in memory.

    Video ids listed in `failing` raise ApiError on every call, which lets
    tests exercise partial failure.
    """

    def __init__(
        self,
        counters: dict[str, VideoAnalytics] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.counters = counters or {}
        self.failing = failing or set()
        self.view_calls: list[str] = []
        self.like_calls: list[str] = []

    def _check(self, video_id: str) -> VideoAnalytics:
        if video_id in self.failing:
            raise ApiError(f"Analytics unavailable for {video_id}", status_code=503)
        return self.counters.setdefault(video_id, VideoAnalytics(video_id=video_id))

    async def get_analytics(self, video_id: str) -> VideoAnalytics:
        return self._check(video_id)

    async def increment_view(self, video_id: str) -> int:
        self.view_calls.append(video_id)
        counters = self._check(video_id)
        counters.views += 1
        counters.last_updated = datetime.now(UTC)
        return counters.views

    async def like(self, video_id: str) -> int:
        self.like_calls.append(video_id)
        counters = self._check(video_id)
        counters.likes += 1
        counters.last_updated = datetime.now(UTC)
        return counters.likes
