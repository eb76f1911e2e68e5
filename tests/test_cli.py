"""Tests for the CLI commands that talk to the upload and analytics APIs."""

from collections.abc import Generator
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from vidhost.adapters.analytics.http import HttpAnalyticsAccessor
from vidhost.cli import app
from vidhost.dashboard.client import UploaderClient

runner = CliRunner()


def video_json(video_id: str, status: str = "COMPLETED") -> dict[str, Any]:
    return {
        "id": video_id,
        "title": f"Video {video_id}",
        "description": None,
        "filename": f"{video_id}.mp4",
        "s3_bucket_name": "uploads",
        "s3_key_original": f"videos/{video_id}.mp4",
        "s3_key_thumbnail": None,
        "status": status,
        "created_at": "2024-05-01T12:00:00+00:00",
        "updated_at": None,
    }


class FakeApis:
    """Serves the upload and analytics endpoints the CLI calls."""

    def __init__(self) -> None:
        self.videos = [video_json("a")]
        self.statuses: dict[str, int] = {}
        self.views = 0
        self.likes = 0

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        status = self.statuses.get(path, 200)
        if status >= 400:
            return httpx.Response(status, json={"detail": f"{path} unavailable"})

        if path == "/api/videos":
            return httpx.Response(200, json=self.videos)
        if path == "/api/upload":
            return httpx.Response(
                201,
                json={"message": "Video uploaded successfully", "videoId": "new", "status": "PENDING"},
            )
        if path == "/api/analytics/view":
            self.views += 1
            return httpx.Response(200, json={"message": "View recorded", "views": self.views})
        if path == "/api/analytics/like":
            self.likes += 1
            return httpx.Response(200, json={"message": "Video liked", "likes": self.likes})
        video_id = path.rsplit("/", 1)[-1]
        return httpx.Response(
            200,
            json={"videoId": video_id, "views": self.views, "likes": self.likes, "watchTimeSeconds": 0},
        )


@pytest.fixture
def apis(monkeypatch: pytest.MonkeyPatch) -> Generator[FakeApis, None, None]:
    """Point the CLI's HTTP clients at in-process fake APIs."""
    fake = FakeApis()
    transport = httpx.MockTransport(fake.handle)

    monkeypatch.setattr(
        "vidhost.dashboard.UploaderClient",
        lambda base_url: UploaderClient(base_url, transport=transport),
    )
    monkeypatch.setattr(
        "vidhost.adapters.analytics.http.HttpAnalyticsAccessor",
        lambda base_url: HttpAnalyticsAccessor(base_url, transport=transport),
    )
    yield fake


class TestVideosCommand:
    def test_lists_records(self, apis: FakeApis) -> None:
        result = runner.invoke(app, ["videos"])

        assert result.exit_code == 0
        assert "videos/a.mp4" in result.stdout

    def test_empty(self, apis: FakeApis) -> None:
        apis.videos = []

        result = runner.invoke(app, ["videos"])

        assert result.exit_code == 0
        assert "No videos uploaded yet" in result.stdout

    def test_list_failure(self, apis: FakeApis) -> None:
        apis.statuses["/api/videos"] = 500

        result = runner.invoke(app, ["videos"])

        assert result.exit_code == 1


class TestLikeCommand:
    def test_like(self, apis: FakeApis) -> None:
        result = runner.invoke(app, ["like", "a"])

        assert result.exit_code == 0
        assert "1 likes" in result.stdout
        assert apis.likes == 1

    def test_like_failure_exits_nonzero(self, apis: FakeApis) -> None:
        apis.statuses["/api/analytics/like"] = 503

        result = runner.invoke(app, ["like", "a"])

        assert result.exit_code == 1
        assert "Like failed" in result.stdout

    def test_list_failure_is_reported(self, apis: FakeApis) -> None:
        apis.statuses["/api/videos"] = 500

        result = runner.invoke(app, ["like", "a"])

        assert result.exit_code == 1
        assert "Failed to fetch videos" in result.stdout
        assert "Video not found" not in result.stdout

    def test_unknown_video(self, apis: FakeApis) -> None:
        result = runner.invoke(app, ["like", "missing"])

        assert result.exit_code == 1
        assert "Video not found" in result.stdout


class TestPlayCommand:
    def test_play_records_view(self, apis: FakeApis) -> None:
        result = runner.invoke(app, ["play", "a"])

        assert result.exit_code == 0
        assert "1 views" in result.stdout
        assert "https://uploads.s3.amazonaws.com/videos/a.mp4" in result.stdout
        assert apis.views == 1

    def test_view_failure_exits_nonzero(self, apis: FakeApis) -> None:
        apis.statuses["/api/analytics/view"] = 503

        result = runner.invoke(app, ["play", "a"])

        assert result.exit_code == 1
        assert "View not recorded" in result.stdout

    def test_list_failure_is_reported(self, apis: FakeApis) -> None:
        apis.statuses["/api/videos"] = 500

        result = runner.invoke(app, ["play", "a"])

        assert result.exit_code == 1
        assert "Failed to fetch videos" in result.stdout


class TestUploadCommand:
    def test_upload(self, apis: FakeApis, tmp_path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"data")

        result = runner.invoke(app, ["upload", str(path), "--title", "Clip"])

        assert result.exit_code == 0
        assert "Video uploaded successfully" in result.stdout
        assert "new" in result.stdout

    def test_upload_rejected(self, apis: FakeApis, tmp_path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"data")
        apis.statuses["/api/upload"] = 400

        result = runner.invoke(app, ["upload", str(path), "--title", "Clip"])

        assert result.exit_code == 1
        assert "Upload failed" in result.stdout

    def test_blank_title(self, apis: FakeApis, tmp_path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"data")

        result = runner.invoke(app, ["upload", str(path), "--title", "  "])

        assert result.exit_code == 1
        assert "Title is required" in result.stdout
