"""Base interface for analytics accessors."""

from abc import ABC, abstractmethod

from vidhost.domain.models import VideoAnalytics


class AnalyticsAccessor(ABC):
    """Reads and increments view/like counters for a video.

    Implementations:
    - HttpAnalyticsAccessor: Talks to the analytics API
    - StubAnalyticsAccessor: Keeps counters in memory
    """

    @abstractmethod
    async def get_analytics(self, video_id: str) -> VideoAnalytics:
        """Fetch the current counters for a video.

        Raises:
            ApiError: If the counters could not be fetched
        """
        ...

    @abstractmethod
    async def increment_view(self, video_id: str) -> int:
        """Record one view and return the new view count."""
        ...

    @abstractmethod
    async def like(self, video_id: str) -> int:
        """Record one like and return the new like count."""
        ...

    async def aclose(self) -> None:
        """Release any held connections."""
        return None
