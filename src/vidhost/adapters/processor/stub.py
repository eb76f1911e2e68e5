"""Stub processor trigger for testing."""

from vidhost.adapters.processor.base import ProcessorNotification, ProcessorTrigger
from vidhost.domain.errors import NotificationError
from vidhost.logging import get_logger

logger = get_logger(__name__)


class StubProcessorTrigger(ProcessorTrigger):
    """Records notifications instead of sending them."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.notifications: list[ProcessorNotification] = []

    async def trigger(self, notification: ProcessorNotification) -> None:
        if self.fail:
            raise NotificationError(f"Simulated processor failure for {notification.video_id}")

        self.notifications.append(notification)
        logger.info("stub_processor_triggered", video_id=str(notification.video_id))
