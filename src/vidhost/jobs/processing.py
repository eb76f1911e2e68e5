"""Celery task for the processor stub."""

from typing import Any
from uuid import UUID

from vidhost.db.session import get_session_context
from vidhost.domain.enums import VideoStatus
from vidhost.logging import get_logger
from vidhost.services.processing import process_video
from vidhost.services.upload import get_object_store
from vidhost.worker import celery_app

logger = get_logger(__name__)


@celery_app.task(bind=True, name="processor.process_video")
def process_video_task(self: Any, video_id: str, s3_key: str, bucket: str) -> dict[str, Any]:
    """Process one uploaded video.

    Args:
        video_id: UUID of the video row
        s3_key: Key of the original object
        bucket: Bucket holding the original object

    Returns:
        Dict with the final status
    """
    task_id = self.request.id
    logger.info(
        "processing_started",
        task_id=task_id,
        video_id=video_id,
        s3_key=s3_key,
        bucket=bucket,
    )

    try:
        with get_session_context() as session:
            status = process_video(session, UUID(video_id), get_object_store())
    except Exception as e:
        logger.error("processing_failed", task_id=task_id, video_id=video_id, error=str(e))
        return {
            "success": False,
            "video_id": video_id,
            "error": str(e),
        }

    logger.info("processing_finished", task_id=task_id, video_id=video_id, status=status.value)
    return {
        "success": status == VideoStatus.COMPLETED,
        "video_id": video_id,
        "status": status.value,
    }
