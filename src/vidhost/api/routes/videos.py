"""Video listing endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError

from vidhost.api.deps import SessionDep
from vidhost.domain.enums import VideoStatus
from vidhost.logging import get_logger
from vidhost.services.videos import list_videos

router = APIRouter(prefix="/api", tags=["Videos"])
logger = get_logger(__name__)


class VideoResponse(BaseModel):
    """A stored video record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    filename: str
    s3_bucket_name: str
    s3_key_original: str
    s3_key_thumbnail: str | None
    status: VideoStatus
    created_at: datetime
    updated_at: datetime | None


@router.get(
    "/videos",
    response_model=list[VideoResponse],
    summary="List videos",
    description="All videos, newest first.",
)
def get_videos(session: SessionDep) -> list[VideoResponse]:
    try:
        videos = list_videos(session)
    except SQLAlchemyError as e:
        logger.error("video_list_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return [VideoResponse.model_validate(video) for video in videos]
