"""Processor stub.

Moves a video through PROCESSING to a terminal status. There is no
transcoding: a video completes when its original object is present in the
store and fails otherwise. The thumbnail key is left empty.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from vidhost.adapters.storage.base import ObjectStore
from vidhost.domain.enums import VideoStatus
from vidhost.domain.errors import StorageError
from vidhost.logging import get_logger
from vidhost.services.videos import get_video, update_status

logger = get_logger(__name__)


def process_video(session: Session, video_id: UUID, store: ObjectStore) -> VideoStatus:
    """Run the processing stub for one video and return its final status.

    Raises:
        VideoNotFoundError: If the video does not exist.
    """
    video = get_video(session, video_id)
    current = VideoStatus(video.status)
    if current.is_terminal:
        logger.info("processing_skipped", video_id=str(video_id), status=current.value)
        return current

    update_status(session, video_id, VideoStatus.PROCESSING)

    try:
        present = store.exists(video.s3_key_original)
    except StorageError as e:
        logger.error("processing_lookup_failed", video_id=str(video_id), error=str(e))
        present = False

    final = VideoStatus.COMPLETED if present else VideoStatus.FAILED
    update_status(session, video_id, final)
    return final
