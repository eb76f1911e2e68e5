"""Domain models - pure Python classes independent of database."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, BinaryIO
from uuid import UUID

from vidhost.domain.enums import VideoStatus


@dataclass
class UploadRequest:
    """A single multipart upload as received by the upload API."""

    file: BinaryIO | None
    filename: str | None
    title: str | None
    description: str | None = None
    content_type: str | None = None


@dataclass
class UploadResult:
    """Outcome of a successful upload."""

    video_id: UUID
    s3_key: str
    bucket: str
    filename: str
    status: VideoStatus = VideoStatus.PENDING


@dataclass
class Video:
    """A video record as exposed by GET /api/videos."""

    id: str
    title: str
    description: str | None
    filename: str
    s3_bucket_name: str
    s3_key_original: str
    s3_key_thumbnail: str | None
    status: VideoStatus
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Video":
        """Build a Video from its JSON representation."""
        updated_at = data.get("updated_at")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description"),
            filename=data.get("filename") or "",
            s3_bucket_name=data.get("s3_bucket_name") or "",
            s3_key_original=data["s3_key_original"],
            s3_key_thumbnail=data.get("s3_key_thumbnail"),
            status=VideoStatus(data["status"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )


@dataclass
class VideoAnalytics:
    """Analytics counters for one video."""

    video_id: str
    views: int = 0
    likes: int = 0
    watch_time_seconds: int = 0
    last_updated: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoAnalytics":
        last_updated = data.get("lastUpdated")
        return cls(
            video_id=str(data["videoId"]),
            views=int(data.get("views", 0)),
            likes=int(data.get("likes", 0)),
            watch_time_seconds=int(data.get("watchTimeSeconds", 0)),
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
        )


@dataclass
class MergedVideo:
    """A video joined with its analytics snapshot and public URLs.

    Rebuilt on every dashboard refresh, never persisted.
    """

    video: Video
    views: int
    likes: int
    video_url: str
    thumbnail_url: str | None

    @property
    def id(self) -> str:
        return self.video.id

    @property
    def title(self) -> str:
        return self.video.title

    @property
    def description(self) -> str | None:
        return self.video.description

    @property
    def status(self) -> VideoStatus:
        return self.video.status

    @property
    def created_at(self) -> datetime:
        return self.video.created_at
