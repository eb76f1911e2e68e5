"""Refresh loop that runs only while videos are still being processed."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable, Sequence

from vidhost.dashboard.merge import has_pending
from vidhost.domain.models import MergedVideo
from vidhost.logging import get_logger

logger = get_logger(__name__)

RefreshFn = Callable[[], Awaitable[Sequence[MergedVideo]]]


class RefreshPoller:
    """Re-fetches on a fixed interval while any video is non-terminal.

    The loop ends by itself once a refresh comes back with every video
    COMPLETED or FAILED. `sync()` starts it again when a later fetch brings
    in a PENDING or PROCESSING video.
    """

    def __init__(self, refresh: RefreshFn, interval_seconds: float) -> None:
        self._refresh = refresh
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sync(self, videos: Sequence[MergedVideo]) -> bool:
        """Start or stop polling to match the given list.

        Returns:
            Whether a refresh is now scheduled.
        """
        if has_pending(videos):
            if not self.running:
                self._task = asyncio.create_task(self._run())
                logger.debug("poller_started", interval_seconds=self.interval_seconds)
            return True

        self.stop()
        return False

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            videos = await self._refresh()
            if not has_pending(videos):
                logger.debug("poller_settled")
                return

    def stop(self) -> None:
        """Cancel the pending refresh, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("poller_stopped")
        self._task = None

    async def aclose(self) -> None:
        """Cancel and wait for the loop to finish."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
