"""Video upload endpoint."""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field

from vidhost.api.deps import SessionDep, UploadPipelineDep
from vidhost.domain.enums import VideoStatus
from vidhost.domain.errors import DatabaseError, StorageError, ValidationError
from vidhost.domain.models import UploadRequest
from vidhost.logging import get_logger

router = APIRouter(prefix="/api", tags=["Upload"])
logger = get_logger(__name__)


class UploadResponse(BaseModel):
    """Response after a video was accepted."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    video_id: UUID = Field(alias="videoId")
    status: VideoStatus


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a video",
    description=(
        "Multipart upload with a `video` file field, a `title` and an optional "
        "`description`. The processor is notified after the response is sent."
    ),
)
def upload_video(
    session: SessionDep,
    pipeline: UploadPipelineDep,
    background_tasks: BackgroundTasks,
    video: UploadFile | None = File(None),
    title: str | None = Form(None),
    description: str | None = Form(None),
) -> UploadResponse:
    request = UploadRequest(
        file=video.file if video is not None else None,
        filename=video.filename if video is not None else None,
        title=title,
        description=description,
        content_type=video.content_type if video is not None else None,
    )

    try:
        result = pipeline.run(session, request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (StorageError, DatabaseError) as e:
        logger.error("upload_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    background_tasks.add_task(pipeline.notify, result)

    return UploadResponse(
        message="Video uploaded successfully",
        video_id=result.video_id,
        status=result.status,
    )
