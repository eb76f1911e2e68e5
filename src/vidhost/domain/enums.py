"""Domain enumerations."""

from enum import StrEnum


class VideoStatus(StrEnum):
    """Lifecycle status of an uploaded video.

    Uploads always start as PENDING; every later transition belongs to the
    processor.
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """Whether the processor is done with the video."""
        return self in (VideoStatus.COMPLETED, VideoStatus.FAILED)


class SortOption(StrEnum):
    """Dashboard sort orders."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_VIEWED = "most-viewed"
    MOST_LIKED = "most-liked"

    @property
    def label(self) -> str:
        return {
            SortOption.NEWEST: "Newest First",
            SortOption.OLDEST: "Oldest First",
            SortOption.MOST_VIEWED: "Most Viewed",
            SortOption.MOST_LIKED: "Most Liked",
        }[self]
