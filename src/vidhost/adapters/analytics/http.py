"""Analytics accessor backed by the analytics HTTP API."""

from typing import Any

import httpx

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.domain.errors import ApiError
from vidhost.domain.models import VideoAnalytics
from vidhost.logging import get_logger

logger = get_logger(__name__)


class HttpAnalyticsAccessor(AnalyticsAccessor):
    """Calls `/api/analytics/*` on the analytics service."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, transport=self._transport)
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and decode its JSON object body.

        Raises:
            ApiError: For transport errors, error statuses and bodies that
                are not a JSON object
        """
        try:
            response = await self._get_client().request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                f"{method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise ApiError(
                f"{method} {path} returned an unexpected body",
                status_code=response.status_code,
            )
        return data

    def _field(self, data: dict[str, Any], name: str, path: str) -> int:
        try:
            return int(data[name])
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"{path} response has no usable `{name}`") from e

    async def get_analytics(self, video_id: str) -> VideoAnalytics:
        path = f"/api/analytics/{video_id}"
        data = await self._request("GET", path)
        try:
            return VideoAnalytics.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"{path} response is not an analytics record") from e

    async def increment_view(self, video_id: str) -> int:
        data = await self._request("POST", "/api/analytics/view", json={"videoId": video_id})
        return self._field(data, "views", "/api/analytics/view")

    async def like(self, video_id: str) -> int:
        data = await self._request("POST", "/api/analytics/like", json={"videoId": video_id})
        return self._field(data, "likes", "/api/analytics/like")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
