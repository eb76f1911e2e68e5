"""Upload pipeline.

Order of operations for one upload:

1. validate the request (file present, non-blank title)
2. write the file to object storage under `videos/<uuid><ext>`
3. insert the PENDING video row
4. insert zero-valued analytics counters
5. notify the processor, as a separate background step

Steps 2-4 are sequential and not transactional across stores. A failure in
step 3 or 4 leaves the stored object in place; `vidhost reconcile` finds such
leftovers. Step 5 is best-effort: its failure is logged and never reaches the
uploader.
"""

from functools import lru_cache

from sqlalchemy.orm import Session

from vidhost.adapters.processor.base import ProcessorNotification, ProcessorTrigger
from vidhost.adapters.storage.base import ObjectStore
from vidhost.config import settings
from vidhost.domain.errors import NotificationError, ValidationError
from vidhost.domain.models import UploadRequest, UploadResult
from vidhost.logging import get_logger
from vidhost.services.videos import create_video, initialize_analytics

logger = get_logger(__name__)


class UploadPipeline:
    """Runs the upload-and-trigger sequence for a single file."""

    def __init__(self, store: ObjectStore, trigger: ProcessorTrigger) -> None:
        self.store = store
        self.trigger = trigger

    def validate(self, request: UploadRequest) -> tuple[str, str]:
        """Check the request before anything is written.

        Returns:
            The original filename and the stripped title.

        Raises:
            ValidationError: If no file is attached or the title is blank.
        """
        if request.file is None or not request.filename:
            raise ValidationError("No video file provided")

        title = (request.title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        return request.filename, title

    def run(self, session: Session, request: UploadRequest) -> UploadResult:
        """Store the file and persist its metadata.

        Raises:
            ValidationError: Invalid request, nothing was written.
            StorageError: The object store write failed, nothing was written.
            DatabaseError: A database insert failed after the object was stored.
        """
        filename, title = self.validate(request)

        stored = self.store.upload(request.file, filename, request.content_type)
        logger.info("upload_stored", key=stored.key, bucket=stored.bucket, filename=filename)

        description = (request.description or "").strip() or None
        video = create_video(
            session,
            title=title,
            description=description,
            filename=filename,
            bucket=stored.bucket,
            s3_key=stored.key,
        )
        initialize_analytics(session, video.id)

        logger.info("upload_completed", video_id=str(video.id), key=stored.key)
        return UploadResult(
            video_id=video.id,
            s3_key=stored.key,
            bucket=stored.bucket,
            filename=filename,
        )

    async def notify(self, result: UploadResult) -> bool:
        """Tell the processor about a finished upload.

        Never raises on processor failure; the upload has already succeeded.

        Returns:
            True if the processor accepted the notification.
        """
        notification = ProcessorNotification(
            video_id=result.video_id,
            s3_key=result.s3_key,
            bucket=result.bucket,
        )
        try:
            await self.trigger.trigger(notification)
        except NotificationError as e:
            logger.warning(
                "processor_trigger_failed",
                video_id=str(result.video_id),
                error=str(e),
            )
            return False
        return True


@lru_cache
def get_object_store() -> ObjectStore:
    """Get the configured object store."""
    if settings.storage_provider == "memory":
        from vidhost.adapters.storage.stub import InMemoryObjectStore

        return InMemoryObjectStore(bucket=settings.s3_bucket_name or "local-bucket")

    from vidhost.adapters.storage.s3 import S3ObjectStore

    return S3ObjectStore(
        bucket=settings.s3_bucket_name,
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
    )


def get_processor_trigger() -> ProcessorTrigger:
    """Get the configured processor trigger."""
    if settings.processor_trigger == "stub":
        from vidhost.adapters.processor.stub import StubProcessorTrigger

        return StubProcessorTrigger()

    from vidhost.adapters.processor.http import HttpProcessorTrigger

    return HttpProcessorTrigger(settings.processor_api_url)
