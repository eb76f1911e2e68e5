"""Tests for joining videos with analytics, search and sort."""

from datetime import UTC, datetime, timedelta

import pytest

from vidhost.adapters.analytics.stub import StubAnalyticsAccessor
from vidhost.dashboard.merge import (
    combine,
    filter_videos,
    has_pending,
    merge_videos,
    sort_videos,
    thumbnail_url,
    video_url,
)
from vidhost.domain.enums import SortOption, VideoStatus
from vidhost.domain.models import MergedVideo, Video, VideoAnalytics

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_video(
    video_id: str,
    title: str = "Video",
    description: str | None = None,
    minutes: int = 0,
    status: VideoStatus = VideoStatus.COMPLETED,
    bucket: str = "uploads",
    thumbnail: str | None = None,
) -> Video:
    return Video(
        id=video_id,
        title=title,
        description=description,
        filename=f"{video_id}.mp4",
        s3_bucket_name=bucket,
        s3_key_original=f"videos/{video_id}.mp4",
        s3_key_thumbnail=thumbnail,
        status=status,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_merged(video_id: str, views: int = 0, likes: int = 0, **kwargs) -> MergedVideo:
    return combine(make_video(video_id, **kwargs), VideoAnalytics(video_id, views, likes))


class TestMergeVideos:
    """Test the concurrent analytics join."""

    @pytest.mark.asyncio
    async def test_merges_counters(self) -> None:
        accessor = StubAnalyticsAccessor(counters={"a": VideoAnalytics("a", views=7, likes=2)})

        merged = await merge_videos([make_video("a"), make_video("b")], accessor)

        assert [(m.id, m.views, m.likes) for m in merged] == [("a", 7, 2), ("b", 0, 0)]

    @pytest.mark.asyncio
    async def test_failed_fetch_zeroes_only_that_video(self) -> None:
        accessor = StubAnalyticsAccessor(
            counters={
                "a": VideoAnalytics("a", views=3, likes=1),
                "c": VideoAnalytics("c", views=9, likes=4),
            },
            failing={"b"},
        )
        videos = [make_video("a"), make_video("b"), make_video("c")]

        merged = await merge_videos(videos, accessor)

        assert [m.id for m in merged] == ["a", "b", "c"]
        assert (merged[0].views, merged[0].likes) == (3, 1)
        assert (merged[1].views, merged[1].likes) == (0, 0)
        assert (merged[2].views, merged[2].likes) == (9, 4)

    @pytest.mark.asyncio
    async def test_empty_list(self) -> None:
        assert await merge_videos([], StubAnalyticsAccessor()) == []


class TestUrls:
    """Test public URL construction."""

    def test_video_url_uses_record_bucket(self) -> None:
        video = make_video("a", bucket=" uploads \n")

        assert video_url(video) == "https://uploads.s3.amazonaws.com/videos/a.mp4"

    def test_bucket_override(self) -> None:
        video = make_video("a", bucket="private-bucket")

        merged = combine(video, None, bucket_override="public-bucket")

        assert merged.video_url == "https://public-bucket.s3.amazonaws.com/videos/a.mp4"

    def test_thumbnail_url(self) -> None:
        assert thumbnail_url(make_video("a")) is None
        assert (
            thumbnail_url(make_video("a", thumbnail="thumbs/a.jpg"))
            == "https://uploads.s3.amazonaws.com/thumbs/a.jpg"
        )


class TestFilterVideos:
    """Test search."""

    @pytest.fixture
    def videos(self) -> list[MergedVideo]:
        return [
            make_merged("a", title="Cat Compilation"),
            make_merged("b", title="Dog Park", description="Cats are not invited"),
            make_merged("c", title="Birds", description=None),
        ]

    def test_blank_query_matches_everything(self, videos: list[MergedVideo]) -> None:
        assert filter_videos(videos, "") == videos
        assert filter_videos(videos, "   ") == videos

    def test_matches_title_and_description(self, videos: list[MergedVideo]) -> None:
        assert [v.id for v in filter_videos(videos, "CAT")] == ["a", "b"]

    def test_no_match(self, videos: list[MergedVideo]) -> None:
        assert filter_videos(videos, "zebra") == []

    def test_query_is_not_trimmed(self, videos: list[MergedVideo]) -> None:
        assert filter_videos(videos, " park") == [videos[1]]
        assert filter_videos(videos, "park ") == []

    def test_filter_is_idempotent(self, videos: list[MergedVideo]) -> None:
        once = filter_videos(videos, "cat")

        assert filter_videos(once, "cat") == once


class TestSortVideos:
    """Test sort orders."""

    @pytest.fixture
    def videos(self) -> list[MergedVideo]:
        return [
            make_merged("a", views=5, likes=1, minutes=10),
            make_merged("b", views=9, likes=1, minutes=0),
            make_merged("c", views=5, likes=3, minutes=20),
        ]

    def test_newest(self, videos: list[MergedVideo]) -> None:
        assert [v.id for v in sort_videos(videos, SortOption.NEWEST)] == ["c", "a", "b"]

    def test_oldest(self, videos: list[MergedVideo]) -> None:
        assert [v.id for v in sort_videos(videos, SortOption.OLDEST)] == ["b", "a", "c"]

    def test_most_viewed_keeps_ties_in_order(self, videos: list[MergedVideo]) -> None:
        assert [v.id for v in sort_videos(videos, SortOption.MOST_VIEWED)] == ["b", "a", "c"]

    def test_most_liked_keeps_ties_in_order(self, videos: list[MergedVideo]) -> None:
        assert [v.id for v in sort_videos(videos, SortOption.MOST_LIKED)] == ["c", "a", "b"]

    def test_sort_does_not_mutate_input(self, videos: list[MergedVideo]) -> None:
        sort_videos(videos, SortOption.OLDEST)

        assert [v.id for v in videos] == ["a", "b", "c"]


def test_has_pending() -> None:
    assert has_pending([make_merged("a", status=VideoStatus.PENDING)])
    assert has_pending([make_merged("a", status=VideoStatus.PROCESSING)])
    assert not has_pending(
        [
            make_merged("a", status=VideoStatus.COMPLETED),
            make_merged("b", status=VideoStatus.FAILED),
        ]
    )
    assert not has_pending([])
