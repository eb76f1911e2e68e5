"""Analytics endpoints: read and increment view/like counters."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from vidhost.api.deps import SessionDep
from vidhost.domain.errors import AnalyticsNotFoundError, VideoNotFoundError
from vidhost.services import analytics as analytics_service

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


class AnalyticsResponse(BaseModel):
    """Current counters for a video."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: UUID = Field(alias="videoId")
    views: int
    likes: int
    watch_time_seconds: int = Field(alias="watchTimeSeconds")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")


class VideoRef(BaseModel):
    """Request body naming a video."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: UUID = Field(alias="videoId")


class ViewResponse(BaseModel):
    message: str
    views: int


class LikeResponse(BaseModel):
    message: str
    likes: int


@router.get(
    "/{video_id}",
    response_model=AnalyticsResponse,
    summary="Get video analytics",
)
def get_video_analytics(video_id: UUID, session: SessionDep) -> AnalyticsResponse:
    try:
        analytics = analytics_service.get_analytics(session, video_id)
    except AnalyticsNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return AnalyticsResponse(
        video_id=analytics.video_id,
        views=analytics.views_count,
        likes=analytics.likes_count,
        watch_time_seconds=analytics.watch_time_seconds,
        last_updated=analytics.last_updated,
    )


@router.post(
    "/view",
    response_model=ViewResponse,
    summary="Record a view",
)
def record_view(body: VideoRef, session: SessionDep) -> ViewResponse:
    try:
        views = analytics_service.increment_views(session, body.video_id)
    except VideoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return ViewResponse(message="View recorded", views=views)


@router.post(
    "/like",
    response_model=LikeResponse,
    summary="Record a like",
)
def record_like(body: VideoRef, session: SessionDep) -> LikeResponse:
    try:
        likes = analytics_service.increment_likes(session, body.video_id)
    except VideoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return LikeResponse(message="Video liked", likes=likes)
