"""Base interface for processor notification adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass
class ProcessorNotification:
    """Payload telling the processor which object to work on."""

    video_id: UUID
    s3_key: str
    bucket: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "videoId": str(self.video_id),
            "s3Key": self.s3_key,
            "bucket": self.bucket,
        }


class ProcessorTrigger(ABC):
    """Abstract base class for processor triggers.

    Implementations:
    - HttpProcessorTrigger: POSTs the notification to the processor endpoint
    - StubProcessorTrigger: Records notifications in memory
    """

    @abstractmethod
    async def trigger(self, notification: ProcessorNotification) -> None:
        """Notify the processor about a new upload.

        Raises:
            NotificationError: If the processor could not be reached or refused
        """
        ...
