"""Dashboard client: merges videos with analytics and polls while processing."""

from vidhost.dashboard.client import UploaderClient, UploadReceipt
from vidhost.dashboard.merge import (
    combine,
    filter_videos,
    has_pending,
    merge_videos,
    sort_videos,
    thumbnail_url,
    video_url,
)
from vidhost.dashboard.poller import RefreshPoller
from vidhost.dashboard.state import Dashboard, PlayerSession

__all__ = [
    "Dashboard",
    "PlayerSession",
    "RefreshPoller",
    "UploadReceipt",
    "UploaderClient",
    "combine",
    "filter_videos",
    "has_pending",
    "merge_videos",
    "sort_videos",
    "thumbnail_url",
    "video_url",
]
