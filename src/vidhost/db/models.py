"""SQLAlchemy ORM models."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from vidhost.domain.enums import VideoStatus


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class VideoModel(Base):
    """Uploaded video metadata ORM model."""

    __tablename__ = "videos"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    s3_bucket_name: Mapped[str] = mapped_column(String(255), nullable=False)
    s3_key_original: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True)
    s3_key_thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=VideoStatus.PENDING.value, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow
    )

    # Relationships
    analytics: Mapped["VideoAnalyticsModel | None"] = relationship(
        "VideoAnalyticsModel",
        back_populates="video",
        uselist=False,
        cascade="all, delete-orphan",
    )


class VideoAnalyticsModel(Base):
    """Per-video view/like counters ORM model."""

    __tablename__ = "video_analytics"

    video_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True
    )
    views_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    likes_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    watch_time_seconds: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow
    )

    # Relationships
    video: Mapped["VideoModel"] = relationship("VideoModel", back_populates="analytics")
