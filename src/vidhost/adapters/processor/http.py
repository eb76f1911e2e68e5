"""HTTP processor trigger."""

import httpx

from vidhost.adapters.processor.base import ProcessorNotification, ProcessorTrigger
from vidhost.domain.errors import NotificationError
from vidhost.logging import get_logger

logger = get_logger(__name__)


class HttpProcessorTrigger(ProcessorTrigger):
    """POSTs `{videoId, s3Key, bucket}` to the processor endpoint.

    The response body is ignored; only success or failure matters.
    """

    def __init__(self, url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.url = url
        self._transport = transport

    async def trigger(self, notification: ProcessorNotification) -> None:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.url, json=notification.to_payload())
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NotificationError(
                f"Processor at {self.url} rejected video {notification.video_id}: {e}"
            ) from e

        logger.info(
            "processor_triggered",
            video_id=str(notification.video_id),
            status_code=response.status_code,
        )
