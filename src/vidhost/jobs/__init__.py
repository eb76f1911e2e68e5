"""Background jobs."""

from vidhost.jobs.processing import process_video_task

__all__ = ["process_video_task"]
