"""HTTP client for the upload API."""

from dataclasses import dataclass
from typing import Any, BinaryIO

import httpx

from vidhost.domain.enums import VideoStatus
from vidhost.domain.errors import ApiError
from vidhost.domain.models import Video


@dataclass
class UploadReceipt:
    """What the upload API returned for an accepted upload."""

    video_id: str
    status: VideoStatus
    message: str


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("error") or fallback)
    return fallback


class UploaderClient:
    """Talks to `/api/videos` and `/api/upload`."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def list_videos(self) -> list[Video]:
        """Fetch all videos, newest first.

        Raises:
            ApiError: If the list could not be fetched
        """
        try:
            response = await self._client.get("/api/videos")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ApiError(f"Failed to fetch videos: {e}") from e
        if response.is_error:
            raise ApiError("Failed to fetch videos", status_code=response.status_code)
        try:
            return [Video.from_dict(item) for item in response.json()]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError("Video list response is malformed", status_code=response.status_code) from e

    async def upload_video(
        self,
        fileobj: BinaryIO,
        filename: str,
        title: str,
        description: str | None = None,
        content_type: str | None = None,
    ) -> UploadReceipt:
        """Upload one file.

        Raises:
            ApiError: With the server's message if the upload was rejected
        """
        data = {"title": title}
        if description and description.strip():
            data["description"] = description
        files = {"video": (filename, fileobj, content_type or "application/octet-stream")}

        try:
            response = await self._client.post("/api/upload", data=data, files=files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ApiError(f"Upload failed: {e}") from e
        if response.is_error:
            raise ApiError(
                _error_message(response, "Upload failed"),
                status_code=response.status_code,
            )

        try:
            body = response.json()
            return UploadReceipt(
                video_id=str(body["videoId"]),
                status=VideoStatus(body["status"]),
                message=body.get("message", ""),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ApiError("Upload response is malformed", status_code=response.status_code) from e

    async def aclose(self) -> None:
        await self._client.aclose()
