"""Processor stub endpoint: receives upload notifications."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from vidhost.logging import get_logger

router = APIRouter(tags=["Processor"])
logger = get_logger(__name__)


class ProcessRequest(BaseModel):
    """Notification sent by the upload API."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: UUID = Field(alias="videoId")
    s3_key: str = Field(alias="s3Key", min_length=1)
    bucket: str = Field(min_length=1)


class ProcessResponse(BaseModel):
    """Response when processing is enqueued."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    status: str


@router.post(
    "/process",
    response_model=ProcessResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Enqueue processing for an uploaded video",
)
async def enqueue_processing(body: ProcessRequest) -> ProcessResponse:
    from vidhost.jobs.processing import process_video_task

    try:
        result = process_video_task.delay(
            video_id=str(body.video_id),
            s3_key=body.s3_key,
            bucket=body.bucket,
        )
    except Exception as e:
        logger.error("processing_enqueue_failed", video_id=str(body.video_id), error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Processing queue unavailable",
        ) from e

    logger.info("processing_enqueued", video_id=str(body.video_id), task_id=result.id)
    return ProcessResponse(task_id=result.id, status="queued")
