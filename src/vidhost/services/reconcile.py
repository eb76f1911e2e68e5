"""Cross-store consistency checks.

Uploads write to object storage and the database without a shared
transaction. This finds what a crash between those writes leaves behind.
"""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from vidhost.adapters.storage.base import VIDEO_KEY_PREFIX, ObjectStore
from vidhost.db.models import VideoAnalyticsModel, VideoModel
from vidhost.logging import get_logger
from vidhost.services.videos import initialize_analytics

logger = get_logger(__name__)


@dataclass
class ReconcileReport:
    """Findings of one reconciliation pass."""

    orphaned_keys: list[str] = field(default_factory=list)
    videos_missing_analytics: list[UUID] = field(default_factory=list)
    deleted_keys: list[str] = field(default_factory=list)
    created_analytics: list[UUID] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.orphaned_keys and not self.videos_missing_analytics


def find_orphaned_objects(session: Session, store: ObjectStore) -> list[str]:
    """Stored upload keys that have no video row."""
    known = set(session.execute(select(VideoModel.s3_key_original)).scalars())
    return [key for key in store.list_keys(VIDEO_KEY_PREFIX) if key not in known]


def find_videos_missing_analytics(session: Session) -> list[UUID]:
    """Ids of videos that have no analytics counters row."""
    return list(
        session.execute(
            select(VideoModel.id)
            .outerjoin(VideoAnalyticsModel, VideoAnalyticsModel.video_id == VideoModel.id)
            .where(VideoAnalyticsModel.video_id.is_(None))
        ).scalars()
    )


def reconcile(session: Session, store: ObjectStore, apply: bool = False) -> ReconcileReport:
    """Report, and with `apply` repair, cross-store leftovers.

    Repair deletes orphaned objects and creates zero counters for videos
    that lack them.
    """
    report = ReconcileReport(
        orphaned_keys=find_orphaned_objects(session, store),
        videos_missing_analytics=find_videos_missing_analytics(session),
    )
    logger.info(
        "reconcile_scanned",
        orphaned_keys=len(report.orphaned_keys),
        videos_missing_analytics=len(report.videos_missing_analytics),
    )

    if not apply:
        return report

    for key in report.orphaned_keys:
        store.delete(key)
        report.deleted_keys.append(key)

    for video_id in report.videos_missing_analytics:
        initialize_analytics(session, video_id)
        report.created_analytics.append(video_id)

    logger.info(
        "reconcile_applied",
        deleted_keys=len(report.deleted_keys),
        created_analytics=len(report.created_analytics),
    )
    return report
